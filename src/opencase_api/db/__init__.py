"""Persistence layer: SQLAlchemy models and session management."""

from .database import Database, as_utc, init_engine, normalize_database_url
from .models import (
    Base,
    Project,
    Session,
    User,
    Workspace,
    WorkspaceMember,
    WorkspaceRole,
    new_id,
    utcnow,
)

__all__ = [
    "Base",
    "Database",
    "Project",
    "Session",
    "User",
    "Workspace",
    "WorkspaceMember",
    "WorkspaceRole",
    "as_utc",
    "init_engine",
    "new_id",
    "normalize_database_url",
    "utcnow",
]
