# tests/v1/test_auth_api.py
"""Tests for dashboard registration, login and the current-user endpoint."""

from fastapi import status
from jose import jwt

from roadmap_votes.core.security import create_access_token
from roadmap_votes.core.settings import settings


def _register(client, email: str, password: str = "correct-horse", name: str = "Someone"):
    return client.post(
        "/api/auth/register",
        json={"email": email, "name": name, "password": password},
    )


def _login(client, email: str, password: str):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def test_first_registration_becomes_admin(client) -> None:
    response = _register(client, "Founder@Example.com")

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()["data"]
    assert data["email"] == "founder@example.com"
    assert data["role"] == "admin"
    assert data["banned"] is False
    assert "passwordHash" not in data


def test_later_registrations_await_approval(client, admin_user) -> None:
    response = _register(client, "newcomer@example.com")

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()["data"]
    assert data["role"] == "user"
    assert data["banned"] is True
    assert data["banReason"] == "pending_approval"

    response = _login(client, "newcomer@example.com", "correct-horse")
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["error"]["message"] == "Account is pending admin approval"


def test_register_duplicate_email(client, admin_user) -> None:
    response = _register(client, "admin@example.com")

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error"]["code"] == "CONFLICT"


def test_register_rejects_short_password(client) -> None:
    response = _register(client, "short@example.com", password="123")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_login_returns_token_with_role(client, admin_user) -> None:
    response = _login(client, "admin@example.com", "admin-password")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert data["tokenType"] == "bearer"
    claims = jwt.decode(
        data["accessToken"], settings.secret_key, algorithms=[settings.jwt_algorithm]
    )
    assert claims["sub"] == admin_user.id
    assert claims["role"] == "admin"


def test_login_wrong_password(client, admin_user) -> None:
    response = _login(client, "admin@example.com", "wrong-password")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["error"]["message"] == "Invalid email or password"


def test_login_unknown_email(client) -> None:
    response = _login(client, "ghost@example.com", "whatever-password")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_me_returns_current_user(client, member_headers, member_user) -> None:
    response = client.get("/api/auth/me", headers=member_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["id"] == member_user.id


def test_me_with_invalid_token(client) -> None:
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


def test_me_rejects_banned_account(client, pending_user) -> None:
    token = create_access_token(pending_user.id)
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["error"]["message"] == "Account is not approved"
