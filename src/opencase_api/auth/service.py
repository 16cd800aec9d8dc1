"""Account registration, login, and session lifecycle."""

from __future__ import annotations

import datetime as dt
import re
import secrets
from dataclasses import dataclass
from typing import Optional

import structlog
from passlib.context import CryptContext
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ..db import Session as SessionRecord
from ..db import User, Workspace, WorkspaceMember, WorkspaceRole, new_id, utcnow
from ..errors import bad_request, unauthorized
from . import schemas
from .context import AuthUser

__all__ = [
    "SESSION_DURATION_HOURS",
    "AuthService",
    "hash_password",
    "verify_password",
    "generate_token",
    "workspace_slug_for",
]

logger = structlog.get_logger(__name__)

SESSION_DURATION_HOURS = 24 * 7
TOKEN_BYTES = 32

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

_SLUG_INVALID = re.compile(r"[^a-z0-9]+")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def generate_token() -> str:
    return secrets.token_hex(TOKEN_BYTES)


def workspace_slug_for(name: str, user_id: str) -> str:
    """Slug for a user's default workspace: name-derived, suffixed by user id."""

    base = _SLUG_INVALID.sub("-", name.lower()).strip("-")[:50] or "my-workspace"
    return f"{base}-{user_id[-6:]}"


@dataclass(slots=True)
class AuthService:
    """Creates users and issues or revokes their sessions."""

    session: Session
    session_duration: dt.timedelta = dt.timedelta(hours=SESSION_DURATION_HOURS)

    def register(self, request: schemas.RegisterRequest) -> schemas.AuthResult:
        email = request.email.lower()
        existing = self.session.execute(
            select(User).where(User.email == email)
        ).scalar_one_or_none()
        if existing is not None:
            raise bad_request("Email already registered", "EMAIL_EXISTS")

        user = User(
            id=new_id(),
            email=email,
            password_hash=hash_password(request.password),
            name=request.name,
        )
        self.session.add(user)
        self.session.flush()

        record = self._issue_session(user)

        workspace = Workspace(
            name=f"{request.name}'s Workspace",
            slug=workspace_slug_for(request.name, user.id),
        )
        workspace.members.append(
            WorkspaceMember(user_id=user.id, role=WorkspaceRole.OWNER.value)
        )
        self.session.add(workspace)
        self.session.commit()

        logger.info("user_registered", user_id=user.id, workspace_id=workspace.id)
        return self._result(user, record)

    def login(self, request: schemas.LoginRequest) -> schemas.AuthResult:
        user = self.session.execute(
            select(User).where(User.email == request.email.lower())
        ).scalar_one_or_none()
        if user is None or not verify_password(request.password, user.password_hash):
            raise unauthorized("Invalid email or password")

        record = self._issue_session(user)
        self.session.commit()

        logger.info("user_logged_in", user_id=user.id)
        return self._result(user, record)

    def logout(self, token: str) -> None:
        self.session.execute(
            delete(SessionRecord)
            .where(SessionRecord.token == token)
            .execution_options(synchronize_session=False)
        )
        self.session.commit()

    def clean_expired_sessions(self, now: Optional[dt.datetime] = None) -> int:
        """Delete sessions whose expiry has passed; returns how many went."""

        result = self.session.execute(
            delete(SessionRecord)
            .where(SessionRecord.expires_at < (now or utcnow()))
            .execution_options(synchronize_session=False)
        )
        self.session.commit()
        removed = result.rowcount or 0
        if removed:
            logger.info("expired_sessions_removed", count=removed)
        return removed

    def _issue_session(self, user: User) -> SessionRecord:
        record = SessionRecord(
            user_id=user.id,
            token=generate_token(),
            expires_at=utcnow() + self.session_duration,
        )
        self.session.add(record)
        return record

    @staticmethod
    def _result(user: User, record: SessionRecord) -> schemas.AuthResult:
        return schemas.AuthResult(
            user=schemas.UserResponse.from_auth_user(AuthUser.from_user(user)),
            session=schemas.SessionResponse(
                token=record.token, expires_at=record.expires_at
            ),
        )
