"""FastAPI dependencies reading the objects wired up by ``create_app``."""

from __future__ import annotations

from typing import Iterator

from fastapi import Request
from sqlalchemy.orm import Session

from .config import AppSettings
from .db import Database

__all__ = ["get_database", "get_settings", "get_db_session"]


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def get_db_session(request: Request) -> Iterator[Session]:
    yield from get_database(request).sessions()
