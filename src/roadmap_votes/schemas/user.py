"""Dashboard account schemas."""

from typing import Literal

from pydantic import Field

from .common import CamelModel, UtcDatetime

UserRole = Literal["admin", "user"]


class RegisterRequest(CamelModel):
    email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    name: str = Field(..., min_length=1)
    password: str = Field(..., min_length=8)


class LoginRequest(CamelModel):
    email: str
    password: str


class LoginResponse(CamelModel):
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type")


class RoleUpdate(CamelModel):
    role: UserRole


class BanRequest(CamelModel):
    reason: str | None = None


class UserResponse(CamelModel):
    id: str
    email: str
    name: str
    role: UserRole
    banned: bool
    ban_reason: str | None
    created_at: UtcDatetime
