# src/roadmap_votes/api/v1/endpoints/votes.py
"""Vote casting, withdrawal and status endpoints.

All three are gated by an API key. The handlers only translate between
HTTP and the vote engine; error mapping happens in ``api.errors``.
"""

from fastapi import APIRouter, Depends, status

from roadmap_votes.schemas.common import MessageResponse, SuccessEnvelope
from roadmap_votes.schemas.vote import (
    VoteCreate,
    VoteResponse,
    VoteStatusResponse,
    VoteWithdraw,
)

from ..dependencies import VoteEngineDep, require_api_key

router = APIRouter(
    prefix="/features",
    tags=["votes"],
    dependencies=[Depends(require_api_key)],
)


@router.post(
    "/{feature_id}/vote",
    status_code=status.HTTP_201_CREATED,
    response_model=SuccessEnvelope[VoteResponse],
)
def cast_vote(
    feature_id: str,
    vote_data: VoteCreate,
    engine: VoteEngineDep,
) -> SuccessEnvelope[VoteResponse]:
    """Vote for a feature."""
    entry = engine.cast(feature_id, vote_data.user_uuid)
    return SuccessEnvelope[VoteResponse](data=VoteResponse.model_validate(entry))


@router.delete("/{feature_id}/vote", response_model=SuccessEnvelope[MessageResponse])
def withdraw_vote(
    feature_id: str,
    vote_data: VoteWithdraw,
    engine: VoteEngineDep,
) -> SuccessEnvelope[MessageResponse]:
    """Withdraw a vote from a feature."""
    engine.withdraw(feature_id, vote_data.user_uuid)
    return SuccessEnvelope[MessageResponse](
        data=MessageResponse(message="Vote withdrawn successfully")
    )


@router.get("/{feature_id}/vote/{user_uuid}", response_model=SuccessEnvelope[VoteStatusResponse])
def get_vote_status(
    feature_id: str,
    user_uuid: str,
    engine: VoteEngineDep,
) -> SuccessEnvelope[VoteStatusResponse]:
    """Check whether a user has voted for a feature."""
    vote_status = engine.status(feature_id, user_uuid)
    return SuccessEnvelope[VoteStatusResponse](
        data=VoteStatusResponse(has_voted=vote_status.has_voted, voted_at=vote_status.voted_at)
    )
