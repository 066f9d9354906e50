# src/roadmap_votes/api/v1/endpoints/users.py
"""User administration endpoints (admin only)."""

from fastapi import APIRouter

from roadmap_votes.schemas.common import SuccessEnvelope
from roadmap_votes.schemas.user import BanRequest, RoleUpdate, UserResponse
from roadmap_votes.services import user_service

from ..dependencies import AdminDep, SessionDep

router = APIRouter(prefix="/dashboard/users", tags=["dashboard"])


@router.get("", response_model=SuccessEnvelope[list[UserResponse]])
def list_users(_admin: AdminDep, db: SessionDep) -> SuccessEnvelope[list[UserResponse]]:
    """List all dashboard accounts, including those awaiting approval."""
    users = user_service.list_users(db)
    return SuccessEnvelope[list[UserResponse]](
        data=[UserResponse.model_validate(user) for user in users]
    )


@router.post("/{user_id}/approve", response_model=SuccessEnvelope[UserResponse])
def approve_user(user_id: str, _admin: AdminDep, db: SessionDep) -> SuccessEnvelope[UserResponse]:
    user = user_service.approve_user(db, user_id)
    return SuccessEnvelope[UserResponse](data=UserResponse.model_validate(user))


@router.post("/{user_id}/ban", response_model=SuccessEnvelope[UserResponse])
def ban_user(
    user_id: str,
    payload: BanRequest,
    _admin: AdminDep,
    db: SessionDep,
) -> SuccessEnvelope[UserResponse]:
    user = user_service.ban_user(db, user_id, payload.reason)
    return SuccessEnvelope[UserResponse](data=UserResponse.model_validate(user))


@router.put("/{user_id}/role", response_model=SuccessEnvelope[UserResponse])
def update_role(
    user_id: str,
    payload: RoleUpdate,
    _admin: AdminDep,
    db: SessionDep,
) -> SuccessEnvelope[UserResponse]:
    user = user_service.set_role(db, user_id, payload.role)
    return SuccessEnvelope[UserResponse](data=UserResponse.model_validate(user))
