# tests/test_security.py
from datetime import timedelta

import pytest
from jose import jwt

from roadmap_votes.core import security
from roadmap_votes.core.errors import UnauthorizedError
from roadmap_votes.core.settings import settings
from roadmap_votes.db.time import utcnow


def test_generate_api_key_shape() -> None:
    key = security.generate_api_key()
    assert key.startswith(settings.api_key_prefix)
    assert len(key) == len(settings.api_key_prefix) + settings.api_key_length
    assert security.generate_api_key() != key


def test_generate_api_key_custom_prefix() -> None:
    assert security.generate_api_key(prefix="test_", length=8).startswith("test_")
    assert len(security.generate_api_key(prefix="", length=8)) == 8


def test_hash_key_is_stable_sha256() -> None:
    digest = security.hash_key("rmap_example")
    assert digest == security.hash_key("rmap_example")
    assert len(digest) == 64
    assert digest != security.hash_key("rmap_example2")


def test_password_round_trip() -> None:
    hashed = security.hash_password("s3cret-password")
    assert hashed != "s3cret-password"
    assert security.verify_password("s3cret-password", hashed)
    assert not security.verify_password("wrong", hashed)


def test_verify_password_with_corrupt_hash() -> None:
    assert security.verify_password("anything", "not-a-bcrypt-hash") is False


def test_access_token_round_trip() -> None:
    token = security.create_access_token("user-123", {"role": "admin"})
    assert security.decode_access_token(token) == "user-123"


def test_expired_token_is_rejected() -> None:
    token = jwt.encode(
        {"sub": "user-123", "exp": utcnow() - timedelta(minutes=1)},
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    with pytest.raises(UnauthorizedError):
        security.decode_access_token(token)


def test_token_signed_with_other_key_is_rejected() -> None:
    token = jwt.encode({"sub": "user-123"}, "another-key", algorithm=settings.jwt_algorithm)
    with pytest.raises(UnauthorizedError):
        security.decode_access_token(token)


def test_token_without_subject_is_rejected() -> None:
    token = jwt.encode({"role": "admin"}, settings.secret_key, algorithm=settings.jwt_algorithm)
    with pytest.raises(UnauthorizedError):
        security.decode_access_token(token)
