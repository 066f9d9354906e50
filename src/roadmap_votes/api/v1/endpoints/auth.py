# src/roadmap_votes/api/v1/endpoints/auth.py
"""Dashboard authentication endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from roadmap_votes.core.security import create_access_token
from roadmap_votes.schemas.common import SuccessEnvelope
from roadmap_votes.schemas.user import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from roadmap_votes.services import user_service

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    summary="Register a dashboard account",
    status_code=status.HTTP_201_CREATED,
    response_model=SuccessEnvelope[UserResponse],
)
def register_user(payload: RegisterRequest, db: SessionDep) -> SuccessEnvelope[UserResponse]:
    """Create an account. Accounts after the first wait for admin approval."""
    user = user_service.create_user(
        db,
        email=payload.email,
        name=payload.name,
        password=payload.password,
    )
    return SuccessEnvelope[UserResponse](data=UserResponse.model_validate(user))


@router.post(
    "/login",
    summary="Exchange credentials for an access token",
    response_model=SuccessEnvelope[LoginResponse],
)
def login_user(payload: LoginRequest, db: SessionDep) -> SuccessEnvelope[LoginResponse]:
    user = user_service.authenticate(db, payload.email, payload.password)
    token = create_access_token(user.id, {"role": user.role})
    return SuccessEnvelope[LoginResponse](
        data=LoginResponse(access_token=token, token_type="bearer")
    )


@router.get("/me", response_model=SuccessEnvelope[UserResponse])
def read_current_user(current_user: CurrentUserDep) -> SuccessEnvelope[UserResponse]:
    """Return the signed-in account."""
    return SuccessEnvelope[UserResponse](data=UserResponse.model_validate(current_user))
