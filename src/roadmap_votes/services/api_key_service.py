"""Issuing and verifying API keys for the public API."""
from __future__ import annotations

import logging
from datetime import timedelta
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from roadmap_votes.core import security
from roadmap_votes.core.errors import NotFoundError, UnauthorizedError
from roadmap_votes.db.time import utcnow
from roadmap_votes.models import ApiKey, User

__all__ = ["issue_key", "list_keys", "revoke_key", "verify_key"]

logger = logging.getLogger(__name__)


def issue_key(
    db: Session,
    user: User,
    name: str,
    expires_in_days: int | None = None,
) -> tuple[ApiKey, str]:
    """Create an API key for ``user``.

    Returns:
        The stored key row and the raw key. The raw key is not recoverable
        afterwards.
    """
    raw_key = security.generate_api_key()
    api_key = ApiKey(
        name=name,
        start=raw_key[: security.API_KEY_START_LENGTH],
        key_hash=security.hash_key(raw_key),
        user_id=user.id,
        expires_at=utcnow() + timedelta(days=expires_in_days) if expires_in_days else None,
    )
    db.add(api_key)
    db.commit()
    db.refresh(api_key)
    logger.info("Issued API key %s for user %s", api_key.id, user.id)
    return api_key, raw_key


def list_keys(db: Session, user: User) -> Sequence[ApiKey]:
    query = select(ApiKey).where(ApiKey.user_id == user.id).order_by(ApiKey.created_at.desc())
    return db.execute(query).scalars().all()


def revoke_key(db: Session, user: User, key_id: str) -> None:
    """Delete a key owned by ``user``; admins may delete any key."""
    api_key = db.get(ApiKey, key_id)
    if api_key is None or (api_key.user_id != user.id and not user.is_admin):
        raise NotFoundError("API key not found")
    db.delete(api_key)
    db.commit()
    logger.info("Revoked API key %s", key_id)


def verify_key(db: Session, raw_key: str | None) -> ApiKey:
    """Resolve a raw key presented by a client.

    Raises:
        UnauthorizedError: Missing, unknown, disabled or expired key, or a key
            whose owner is banned.
    """
    if not raw_key:
        raise UnauthorizedError("API key is required")

    api_key = db.execute(
        select(ApiKey).where(ApiKey.key_hash == security.hash_key(raw_key))
    ).scalar_one_or_none()
    if api_key is None or not api_key.enabled:
        raise UnauthorizedError("Invalid API key")
    if api_key.is_expired():
        raise UnauthorizedError("API key has expired")
    if api_key.user.banned:
        raise UnauthorizedError("Invalid API key")

    api_key.last_used_at = utcnow()
    db.commit()
    return api_key
