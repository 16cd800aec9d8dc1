"""Projects scoped to a workspace."""

from .service import ProjectService

__all__ = ["ProjectService"]
