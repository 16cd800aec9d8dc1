"""Workspace membership queries and routes."""

from .service import WorkspaceService, find_membership

__all__ = ["WorkspaceService", "find_membership"]
