"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from roadmap_votes.core.errors import ForbiddenError, UnauthorizedError
from roadmap_votes.core.security import decode_access_token
from roadmap_votes.core.settings import settings
from roadmap_votes.db.session import get_db
from roadmap_votes.models import ApiKey, User
from roadmap_votes.services import api_key_service
from roadmap_votes.services.vote_engine import VoteEngine

# HTTP Bearer scheme for dashboard JWTs; missing credentials are reported by us.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def require_api_key(request: Request, db: SessionDep) -> ApiKey:
    """Authorize a public API request by its API key header.

    Raises:
        UnauthorizedError: If the key is missing or not valid.
    """
    return api_key_service.verify_key(db, request.headers.get(settings.api_key_header))


def get_vote_engine(db: SessionDep) -> VoteEngine:
    """Return a vote engine bound to the request's session."""
    return VoteEngine(db)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current dashboard user from the bearer token.

    Raises:
        UnauthorizedError: If the token is missing, invalid, or the user is gone.
        ForbiddenError: If the account is banned or pending approval.
    """
    if credentials is None:
        raise UnauthorizedError("Could not validate credentials")

    user_id = decode_access_token(credentials.credentials)
    user = db.get(User, user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    if user.banned:
        raise ForbiddenError("Account is not approved")
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def require_admin(current_user: CurrentUserDep) -> User:
    """Allow only admin users through."""
    if not current_user.is_admin:
        raise ForbiddenError("Forbidden: Admin access required")
    return current_user


AdminDep = Annotated[User, Depends(require_admin)]
ApiKeyDep = Annotated[ApiKey, Depends(require_api_key)]
VoteEngineDep = Annotated[VoteEngine, Depends(get_vote_engine)]
