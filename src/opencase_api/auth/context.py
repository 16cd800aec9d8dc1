"""Per-request authentication state.

``resolve_auth`` produces one of three outcomes:

* :class:`Authenticated` - the bearer token maps to a live session.
* :class:`Anonymous` - no usable token, unknown token, or expired session.
* :class:`LookupFailed` - the session store could not be queried.

Handlers never see the raw outcome; they receive a :class:`RequestContext`
holding the resolved user and session (both ``None`` for anonymous calls).
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional, Union

from ..db import User

__all__ = [
    "AuthUser",
    "SessionInfo",
    "Authenticated",
    "Anonymous",
    "LookupFailed",
    "AuthResult",
    "RequestContext",
]


@dataclass(frozen=True, slots=True)
class AuthUser:
    id: str
    email: str
    name: str
    avatar_url: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "AuthUser":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            avatar_url=user.avatar_url,
        )


@dataclass(frozen=True, slots=True)
class SessionInfo:
    id: str
    token: str
    user_id: str
    expires_at: dt.datetime


@dataclass(frozen=True, slots=True)
class Authenticated:
    user: AuthUser
    session: SessionInfo


@dataclass(frozen=True, slots=True)
class Anonymous:
    pass


@dataclass(frozen=True, slots=True)
class LookupFailed:
    cause: BaseException


AuthResult = Union[Authenticated, Anonymous, LookupFailed]


@dataclass(frozen=True, slots=True)
class RequestContext:
    """What the current request knows about its caller."""

    user: Optional[AuthUser] = None
    session: Optional[SessionInfo] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @classmethod
    def anonymous(cls) -> "RequestContext":
        return cls()

    @classmethod
    def from_result(cls, result: AuthResult) -> "RequestContext":
        if isinstance(result, Authenticated):
            return cls(user=result.user, session=result.session)
        return cls.anonymous()
