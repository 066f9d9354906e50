# src/roadmap_votes/api/v1/endpoints/api_keys.py
"""API key management for dashboard users."""

from fastapi import APIRouter, status

from roadmap_votes.schemas.api_key import ApiKeyCreate, ApiKeyCreated, ApiKeyResponse
from roadmap_votes.schemas.common import MessageResponse, SuccessEnvelope
from roadmap_votes.services import api_key_service

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/dashboard/api-keys", tags=["dashboard"])


@router.get("", response_model=SuccessEnvelope[list[ApiKeyResponse]])
def list_api_keys(
    current_user: CurrentUserDep,
    db: SessionDep,
) -> SuccessEnvelope[list[ApiKeyResponse]]:
    """List the caller's API keys without their secret values."""
    keys = api_key_service.list_keys(db, current_user)
    return SuccessEnvelope[list[ApiKeyResponse]](
        data=[ApiKeyResponse.model_validate(key) for key in keys]
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SuccessEnvelope[ApiKeyCreated],
)
def create_api_key(
    key_data: ApiKeyCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> SuccessEnvelope[ApiKeyCreated]:
    """Issue a new key. The raw key is only ever returned here."""
    api_key, raw_key = api_key_service.issue_key(
        db,
        current_user,
        key_data.name,
        expires_in_days=key_data.expires_in_days,
    )
    created = ApiKeyCreated.model_validate(
        {**ApiKeyResponse.model_validate(api_key).model_dump(), "key": raw_key}
    )
    return SuccessEnvelope[ApiKeyCreated](data=created)


@router.delete("/{key_id}", response_model=SuccessEnvelope[MessageResponse])
def revoke_api_key(
    key_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> SuccessEnvelope[MessageResponse]:
    api_key_service.revoke_key(db, current_user, key_id)
    return SuccessEnvelope[MessageResponse](data=MessageResponse(message="API key revoked"))
