"""Health, readiness, and liveness probes."""

from __future__ import annotations

import datetime as dt
from typing import Any

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .db import Database
from .dependencies import get_database

__all__ = ["router", "API_VERSION"]

API_VERSION = "0.1.0"

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


def _database_ok(database: Database) -> bool:
    try:
        database.ping()
    except SQLAlchemyError as exc:
        logger.warning("database_ping_failed", error=str(exc))
        return False
    return True


@router.get("/health")
def health(database: Database = Depends(get_database)) -> JSONResponse:
    db_status = "ok" if _database_ok(database) else "error"
    healthy = db_status == "ok"
    payload: dict[str, Any] = {
        "status": "healthy" if healthy else "unhealthy",
        "timestamp": dt.datetime.now(dt.timezone.utc).isoformat(),
        "version": API_VERSION,
        "checks": {"database": db_status},
    }
    return JSONResponse(status_code=200 if healthy else 503, content=payload)


@router.get("/health/ready")
def ready(database: Database = Depends(get_database)) -> JSONResponse:
    if _database_ok(database):
        return JSONResponse(content={"ready": True})
    return JSONResponse(status_code=503, content={"ready": False})


@router.get("/health/live")
def live() -> dict[str, bool]:
    return {"alive": True}
