"""Session-token authentication."""

from .context import (
    Anonymous,
    AuthResult,
    AuthUser,
    Authenticated,
    LookupFailed,
    RequestContext,
    SessionInfo,
)
from .plugin import get_request_context, parse_bearer_token, require_user, resolve_auth
from .service import AuthService

__all__ = [
    "Anonymous",
    "AuthResult",
    "AuthService",
    "AuthUser",
    "Authenticated",
    "LookupFailed",
    "RequestContext",
    "SessionInfo",
    "get_request_context",
    "parse_bearer_token",
    "require_user",
    "resolve_auth",
]
