"""Project queries and creation, gated on workspace membership."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import Project, WorkspaceMember
from ..errors import conflict, not_found
from ..workspaces import find_membership
from . import schemas

__all__ = ["ProjectService"]

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class ProjectService:
    session: Session

    def get_workspace_projects(
        self, workspace_id: str, user_id: str
    ) -> Optional[list[schemas.ProjectSummary]]:
        if find_membership(self.session, workspace_id, user_id) is None:
            return None

        projects = self.session.execute(
            select(Project)
            .where(Project.workspace_id == workspace_id)
            .order_by(Project.name.asc())
        ).scalars()
        return [schemas.project_summary(project) for project in projects]

    def get_project(
        self, workspace_id: str, project_id: str, user_id: str
    ) -> Optional[schemas.ProjectDetail]:
        project = self.session.execute(
            select(Project)
            .join(WorkspaceMember, WorkspaceMember.workspace_id == Project.workspace_id)
            .where(
                Project.id == project_id,
                Project.workspace_id == workspace_id,
                WorkspaceMember.user_id == user_id,
            )
        ).scalar_one_or_none()
        if project is None:
            return None
        return schemas.project_detail(project)

    def create_project(
        self,
        workspace_id: str,
        user_id: str,
        request: schemas.ProjectCreateRequest,
    ) -> schemas.ProjectCreated:
        if find_membership(self.session, workspace_id, user_id) is None:
            raise not_found("Workspace")

        existing = self.session.execute(
            select(Project.id).where(
                Project.workspace_id == workspace_id,
                Project.slug == request.slug,
            )
        ).first()
        if existing is not None:
            raise conflict("A project with this slug already exists")

        project = Project(
            workspace_id=workspace_id,
            name=request.name,
            slug=request.slug,
            description=request.description,
        )
        self.session.add(project)
        self.session.commit()

        logger.info(
            "project_created",
            project_id=project.id,
            workspace_id=workspace_id,
            user_id=user_id,
        )
        return schemas.project_created(project)
