"""Vote-related Pydantic schemas."""

from pydantic import Field

from .common import CamelModel, UtcDatetime


class VoteCreate(CamelModel):
    """Body of ``POST /features/{featureId}/vote``.

    ``user_uuid`` is validated by the vote engine so that malformed values
    map to ``VALIDATION_ERROR`` like every other bad input.
    """

    user_uuid: str = Field(..., description="Client-supplied anonymous UUID")


class VoteWithdraw(VoteCreate):
    """Body of ``DELETE /features/{featureId}/vote``."""


class VoteResponse(CamelModel):
    """Ledger entry created by a successful cast."""

    id: str
    user_uuid: str
    feature_id: str
    created_at: UtcDatetime


class VoteStatusResponse(CamelModel):
    has_voted: bool
    voted_at: UtcDatetime | None
