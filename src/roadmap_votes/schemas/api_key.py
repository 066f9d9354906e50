"""API key schemas."""

from pydantic import Field

from .common import CamelModel, UtcDatetime


class ApiKeyCreate(CamelModel):
    name: str = Field(..., min_length=1)
    expires_in_days: int | None = Field(None, ge=1)


class ApiKeyResponse(CamelModel):
    id: str
    name: str
    start: str
    enabled: bool
    expires_at: UtcDatetime | None
    last_used_at: UtcDatetime | None
    created_at: UtcDatetime


class ApiKeyCreated(ApiKeyResponse):
    """Returned once at creation; ``key`` is never retrievable again."""

    key: str
