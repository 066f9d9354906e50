# tests/v1/test_api_keys_api.py
"""Tests for issuing, listing and revoking public API keys."""

from datetime import timedelta

from fastapi import status

from roadmap_votes.db.time import utcnow
from roadmap_votes.models import ApiKey


def _create_key(client, headers, name: str = "mobile app", **extra):
    return client.post("/api/dashboard/api-keys", json={"name": name, **extra}, headers=headers)


def test_create_api_key_returns_raw_key_once(client, member_headers) -> None:
    response = _create_key(client, member_headers)

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()["data"]
    assert data["key"].startswith("rmap_")
    assert data["start"] == data["key"][: len(data["start"])]
    assert data["enabled"] is True
    assert data["expiresAt"] is None

    listing = client.get("/api/dashboard/api-keys", headers=member_headers).json()["data"]
    assert [item["id"] for item in listing] == [data["id"]]
    assert "key" not in listing[0]


def test_issued_key_opens_public_api(client, member_headers, feature) -> None:
    raw_key = _create_key(client, member_headers).json()["data"]["key"]

    response = client.get("/api/features", headers={"x-api-key": raw_key})

    assert response.status_code == status.HTTP_200_OK
    assert [item["id"] for item in response.json()["data"]] == [feature.id]


def test_key_with_expiry(client, member_headers) -> None:
    response = _create_key(client, member_headers, expiresInDays=30)

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["data"]["expiresAt"] is not None


def test_expired_key_is_rejected(client, member_headers, db_session) -> None:
    data = _create_key(client, member_headers).json()["data"]
    api_key = db_session.get(ApiKey, data["id"])
    api_key.expires_at = utcnow() - timedelta(minutes=1)
    db_session.commit()

    response = client.get("/api/features", headers={"x-api-key": data["key"]})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["error"]["message"] == "API key has expired"


def test_key_of_banned_owner_is_rejected(client, member_headers, member_user, db_session) -> None:
    raw_key = _create_key(client, member_headers).json()["data"]["key"]
    member_user.banned = True
    db_session.commit()

    response = client.get("/api/features", headers={"x-api-key": raw_key})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_revoke_api_key(client, member_headers) -> None:
    data = _create_key(client, member_headers).json()["data"]

    response = client.delete(f"/api/dashboard/api-keys/{data['id']}", headers=member_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"] == {"message": "API key revoked"}

    response = client.get("/api/features", headers={"x-api-key": data["key"]})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["error"]["message"] == "Invalid API key"


def test_cannot_revoke_someone_elses_key(client, member_headers, admin_headers) -> None:
    data = _create_key(client, admin_headers).json()["data"]

    response = client.delete(f"/api/dashboard/api-keys/{data['id']}", headers=member_headers)

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_admin_can_revoke_any_key(client, member_headers, admin_headers) -> None:
    data = _create_key(client, member_headers).json()["data"]

    response = client.delete(f"/api/dashboard/api-keys/{data['id']}", headers=admin_headers)

    assert response.status_code == status.HTTP_200_OK


def test_create_api_key_requires_name(client, member_headers) -> None:
    response = _create_key(client, member_headers, name="")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
