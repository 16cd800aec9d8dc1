"""Bearer token resolution and the authentication guard.

Resolution runs for every request through :func:`get_request_context`; it
never rejects a request. Routes that need a caller add :func:`require_user`
as a dependency explicitly.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

import structlog
from fastapi import Depends, Request
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..db import Session as SessionRecord
from ..db import as_utc, utcnow
from ..dependencies import get_db_session
from ..errors import unauthorized
from .context import (
    Anonymous,
    AuthResult,
    AuthUser,
    Authenticated,
    LookupFailed,
    RequestContext,
    SessionInfo,
)

__all__ = [
    "BEARER_PREFIX",
    "parse_bearer_token",
    "resolve_auth",
    "get_request_context",
    "require_user",
]

logger = structlog.get_logger(__name__)

BEARER_PREFIX = "Bearer "


def parse_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from ``Bearer <token>``, or ``None`` for anything else."""

    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX) :]
    return token or None


def resolve_auth(
    db: Session,
    authorization: Optional[str],
    now: Optional[dt.datetime] = None,
) -> AuthResult:
    token = parse_bearer_token(authorization)
    if token is None:
        return Anonymous()

    try:
        record = db.execute(
            select(SessionRecord)
            .options(joinedload(SessionRecord.user))
            .where(SessionRecord.token == token)
        ).scalar_one_or_none()
    except SQLAlchemyError as exc:
        return LookupFailed(cause=exc)

    if record is None:
        return Anonymous()

    expires_at = as_utc(record.expires_at)
    if expires_at <= (now or utcnow()):
        return Anonymous()

    return Authenticated(
        user=AuthUser.from_user(record.user),
        session=SessionInfo(
            id=record.id,
            token=record.token,
            user_id=record.user_id,
            expires_at=expires_at,
        ),
    )


def get_request_context(
    request: Request, db: Session = Depends(get_db_session)
) -> RequestContext:
    """Resolve the caller; store failures degrade to an anonymous context."""

    result = resolve_auth(db, request.headers.get("authorization"))
    if isinstance(result, LookupFailed):
        logger.warning(
            "session_lookup_failed",
            path=request.url.path,
            error=str(result.cause),
        )
    context = RequestContext.from_result(result)
    request.state.auth = context
    return context


def require_user(context: RequestContext = Depends(get_request_context)) -> AuthUser:
    if context.user is None:
        raise unauthorized()
    return context.user
