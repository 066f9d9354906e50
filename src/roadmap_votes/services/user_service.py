"""CRUD-style helpers for managing dashboard accounts."""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from roadmap_votes.core import security
from roadmap_votes.core.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from roadmap_votes.models import User
from roadmap_votes.models.user import PENDING_APPROVAL

__all__ = [
    "get_user",
    "get_user_by_email",
    "list_users",
    "create_user",
    "authenticate",
    "approve_user",
    "ban_user",
    "set_role",
    "ensure_admin",
]

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: str) -> User:
    """Return a single user by primary key or raise ``NotFoundError``."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.execute(select(User).where(User.email == email.lower())).scalar_one_or_none()


def list_users(db: Session) -> Sequence[User]:
    """Return all users, newest first."""
    return db.execute(select(User).order_by(User.created_at.desc())).scalars().all()


def create_user(db: Session, *, email: str, name: str, password: str) -> User:
    """Register a dashboard account.

    The very first account becomes an approved admin. Every later account is
    created banned with reason ``pending_approval`` until an admin approves it.
    """
    is_first = db.execute(select(func.count(User.id))).scalar_one() == 0
    user = User(
        email=email.lower(),
        name=name,
        password_hash=security.hash_password(password),
        role="admin" if is_first else "user",
        banned=not is_first,
        ban_reason=None if is_first else PENDING_APPROVAL,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise ConflictError("Email is already registered") from err
    db.refresh(user)
    logger.info("Registered user %s (role=%s, pending=%s)", user.id, user.role, user.banned)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the user matching the credentials.

    Raises:
        UnauthorizedError: Unknown email or wrong password.
        ForbiddenError: The account is banned or awaiting approval.
    """
    user = get_user_by_email(db, email)
    if user is None or not security.verify_password(password, user.password_hash):
        raise UnauthorizedError("Invalid email or password")
    if user.banned:
        if user.is_pending:
            raise ForbiddenError("Account is pending admin approval")
        raise ForbiddenError("Account is banned")
    return user


def approve_user(db: Session, user_id: str) -> User:
    """Lift a ban, including the pending-approval ban of new accounts."""
    user = get_user(db, user_id)
    user.banned = False
    user.ban_reason = None
    db.commit()
    db.refresh(user)
    return user


def ban_user(db: Session, user_id: str, reason: str | None = None) -> User:
    user = get_user(db, user_id)
    user.banned = True
    user.ban_reason = reason
    db.commit()
    db.refresh(user)
    return user


def set_role(db: Session, user_id: str, role: str) -> User:
    user = get_user(db, user_id)
    user.role = role
    db.commit()
    db.refresh(user)
    return user


def ensure_admin(db: Session, *, email: str, name: str, password: str) -> tuple[User, bool]:
    """Create the admin account, or promote and unban an existing one.

    Returns:
        The admin user and whether it was newly created.
    """
    user = get_user_by_email(db, email)
    if user is not None:
        user.role = "admin"
        user.banned = False
        user.ban_reason = None
        db.commit()
        db.refresh(user)
        return user, False

    user = User(
        email=email.lower(),
        name=name,
        password_hash=security.hash_password(password),
        role="admin",
        banned=False,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user, True
