"""Engine construction and session management."""

from __future__ import annotations

import datetime as dt
from typing import Iterator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base

__all__ = ["Database", "init_engine", "normalize_database_url", "as_utc"]


def normalize_database_url(database_url: str) -> str:
    """Map ``postgres://`` style URLs onto the psycopg3 driver."""

    if database_url.startswith("postgres://"):
        return "postgresql+psycopg://" + database_url[len("postgres://") :]
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+psycopg://", 1)
    return database_url


def init_engine(database_url: str, *, echo: bool = False) -> Engine:
    """Create the shared engine; SQLite gets a single static connection."""

    database_url = normalize_database_url(database_url)
    engine_kwargs: dict = {"echo": echo, "pool_pre_ping": True}
    if database_url.startswith("sqlite"):
        from sqlalchemy.pool import StaticPool

        engine_kwargs["poolclass"] = StaticPool
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs["pool_size"] = 10
        engine_kwargs["max_overflow"] = 20
    return create_engine(database_url, **engine_kwargs)


def as_utc(value: dt.datetime) -> dt.datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value


class Database:
    """Session factory wrapper around the shared engine."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    def session(self) -> Session:
        return self._session_factory()

    def sessions(self) -> Iterator[Session]:
        """Yield one session per request and always close it."""
        session = self.session()
        try:
            yield session
        finally:
            session.close()

    def create_all(self) -> None:
        """Create all tables (development and tests)."""
        Base.metadata.create_all(self.engine)

    def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def dispose(self) -> None:
        self.engine.dispose()
