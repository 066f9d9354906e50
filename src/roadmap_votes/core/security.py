"""Credential helpers: API key hashing, passwords and dashboard tokens."""
from __future__ import annotations

import hashlib
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from roadmap_votes.core.errors import UnauthorizedError
from roadmap_votes.core.settings import settings

# Number of leading characters of a raw API key kept for display.
API_KEY_START_LENGTH = 9


def hash_key(raw_key: str) -> str:
    """Return a SHA-256 hash of the provided API key."""
    return hashlib.sha256(raw_key.encode("utf-8")).hexdigest()


def generate_api_key(prefix: str | None = None, length: int | None = None) -> str:
    """Generate a new raw API key such as ``rmap_3fQ...``.

    The raw value is returned to the caller exactly once; only its hash is
    persisted.
    """
    prefix = settings.api_key_prefix if prefix is None else prefix
    length = settings.api_key_length if length is None else length
    body = secrets.token_urlsafe(length)[:length]
    return f"{prefix}{body}"


def hash_password(password: str) -> str:
    """Hash a dashboard password with bcrypt."""
    salt = bcrypt.gensalt(rounds=settings.password_hash_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(subject: str, extra_claims: dict[str, Any] | None = None) -> str:
    """Create a JWT access token for dashboard authentication."""
    to_encode: dict[str, object] = {"sub": subject}
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> str:
    """Validate a JWT and return its subject.

    Raises:
        UnauthorizedError: If the token is malformed, expired or has no subject.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise UnauthorizedError("Could not validate credentials") from err

    subject = payload.get("sub")
    if not subject:
        raise UnauthorizedError("Could not validate credentials")
    return str(subject)
