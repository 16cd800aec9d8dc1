"""API error taxonomy and the handlers that render it.

Every failure leaves the API as ``{"error": {"code", "message", "details"?}}``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

__all__ = [
    "ApiError",
    "bad_request",
    "unauthorized",
    "forbidden",
    "not_found",
    "conflict",
    "error_response",
    "register_error_handlers",
]

logger = structlog.get_logger(__name__)


@dataclass(eq=False)
class ApiError(Exception):
    status_code: int
    code: str
    message: str
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        return self.message


def bad_request(message: str, code: str = "BAD_REQUEST") -> ApiError:
    return ApiError(400, code, message)


def unauthorized(message: str = "Authentication required") -> ApiError:
    return ApiError(401, "UNAUTHORIZED", message)


def forbidden(message: str = "Access denied") -> ApiError:
    return ApiError(403, "FORBIDDEN", message)


def not_found(resource: str = "Resource") -> ApiError:
    return ApiError(404, "NOT_FOUND", f"{resource} not found")


def conflict(message: str) -> ApiError:
    return ApiError(409, "CONFLICT", message)


def error_response(
    *, status_code: int, code: str, message: str, details: dict[str, Any] | None = None
) -> JSONResponse:
    payload: dict[str, Any] = {"error": {"code": code, "message": message}}
    if details:
        payload["error"]["details"] = details
    return JSONResponse(status_code=int(status_code), content=payload)


_HTTP_STATUS_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
}


def register_error_handlers(app: FastAPI, *, expose_internal_errors: bool = False) -> None:
    """Attach the error envelope handlers to *app*."""

    async def api_error_handler(_req: Request, exc: ApiError) -> JSONResponse:
        return error_response(
            status_code=exc.status_code,
            code=exc.code,
            message=exc.message,
            details=exc.details,
        )

    async def validation_error_handler(_req: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(
            status_code=400,
            code="VALIDATION_ERROR",
            message="Invalid request data",
            details={"errors": [_plain_error(err) for err in exc.errors()]},
        )

    async def http_error_handler(_req: Request, exc: StarletteHTTPException) -> JSONResponse:
        return error_response(
            status_code=exc.status_code,
            code=_HTTP_STATUS_CODES.get(exc.status_code, "HTTP_ERROR"),
            message=str(exc.detail),
        )

    async def unhandled_error_handler(req: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "unhandled_exception",
            method=req.method,
            path=req.url.path,
            exc_info=exc,
        )
        message = str(exc) if expose_internal_errors else "An unexpected error occurred"
        return error_response(status_code=500, code="INTERNAL_ERROR", message=message)

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


def _plain_error(err: dict[str, Any]) -> dict[str, Any]:
    # ctx may hold exception instances that are not JSON serialisable
    return {
        "loc": [str(part) for part in err.get("loc", ())],
        "msg": err.get("msg", ""),
        "type": err.get("type", ""),
    }
