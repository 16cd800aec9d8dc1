"""Read-side queries over workspaces and memberships.

All lookups are scoped to the calling user. A workspace the caller is not a
member of is reported exactly like one that does not exist: ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..db import Project, User, Workspace, WorkspaceMember
from . import schemas

__all__ = ["WorkspaceService", "find_membership"]


def find_membership(
    session: Session, workspace_id: str, user_id: str
) -> Optional[WorkspaceMember]:
    """Look up the (workspace_id, user_id) membership row, if any."""
    return session.execute(
        select(WorkspaceMember).where(
            WorkspaceMember.workspace_id == workspace_id,
            WorkspaceMember.user_id == user_id,
        )
    ).scalar_one_or_none()


@dataclass(slots=True)
class WorkspaceService:
    session: Session

    def get_user_workspaces(self, user_id: str) -> list[schemas.WorkspaceSummary]:
        """Workspaces the user belongs to, ordered by name."""

        project_counts = (
            select(
                Project.workspace_id.label("workspace_id"),
                func.count(Project.id).label("project_count"),
            )
            .group_by(Project.workspace_id)
            .subquery()
        )
        stmt = (
            select(
                Workspace,
                WorkspaceMember.role,
                func.coalesce(project_counts.c.project_count, 0),
            )
            .join(WorkspaceMember, WorkspaceMember.workspace_id == Workspace.id)
            .outerjoin(project_counts, project_counts.c.workspace_id == Workspace.id)
            .where(WorkspaceMember.user_id == user_id)
            .order_by(Workspace.name.asc())
        )
        return [
            schemas.WorkspaceSummary(
                id=workspace.id,
                name=workspace.name,
                slug=workspace.slug,
                role=role,
                project_count=int(project_count),
                created_at=workspace.created_at,
            )
            for workspace, role, project_count in self.session.execute(stmt)
        ]

    def get_workspace(
        self, workspace_id: str, user_id: str
    ) -> Optional[schemas.WorkspaceDetail]:
        membership = find_membership(self.session, workspace_id, user_id)
        if membership is None:
            return None
        workspace = membership.workspace
        return schemas.WorkspaceDetail(
            id=workspace.id,
            name=workspace.name,
            slug=workspace.slug,
            role=membership.role,
            created_at=workspace.created_at,
        )

    def list_members(
        self, workspace_id: str, user_id: str
    ) -> Optional[list[schemas.WorkspaceMemberResponse]]:
        """Members of a workspace, visible only to its own members."""

        if find_membership(self.session, workspace_id, user_id) is None:
            return None

        stmt = (
            select(WorkspaceMember, User)
            .join(User, User.id == WorkspaceMember.user_id)
            .where(WorkspaceMember.workspace_id == workspace_id)
            .order_by(User.name.asc())
        )
        return [
            schemas.WorkspaceMemberResponse(
                id=member.id,
                user_id=member.user_id,
                role=member.role,
                user=schemas.MemberUser(
                    id=user.id,
                    email=user.email,
                    name=user.name,
                    avatar_url=user.avatar_url,
                ),
            )
            for member, user in self.session.execute(stmt)
        ]
