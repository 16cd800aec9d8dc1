"""Request/response bodies for the auth endpoints."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import EmailStr, Field

from ..schemas import ApiModel
from .context import AuthUser

__all__ = [
    "MIN_PASSWORD_LENGTH",
    "RegisterRequest",
    "LoginRequest",
    "UserResponse",
    "SessionResponse",
    "AuthResult",
    "MeResponse",
    "LogoutResponse",
]

MIN_PASSWORD_LENGTH = 8


class RegisterRequest(ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    name: str = Field(..., min_length=1, max_length=100)


class LoginRequest(ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(ApiModel):
    id: str
    email: str
    name: str
    avatar_url: Optional[str] = None

    @classmethod
    def from_auth_user(cls, user: AuthUser) -> "UserResponse":
        return cls(id=user.id, email=user.email, name=user.name, avatar_url=user.avatar_url)


class SessionResponse(ApiModel):
    token: str
    expires_at: dt.datetime


class AuthResult(ApiModel):
    user: UserResponse
    session: SessionResponse


class MeResponse(ApiModel):
    user: UserResponse


class LogoutResponse(ApiModel):
    success: bool = True
