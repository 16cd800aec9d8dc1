"""Request/response bodies for project endpoints."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import Field

from ..db import Project
from ..schemas import ApiModel

__all__ = [
    "ProjectCreateRequest",
    "ProjectSummary",
    "ProjectDetail",
    "ProjectCreated",
    "project_summary",
    "project_detail",
    "project_created",
]


class ProjectCreateRequest(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=50, pattern=r"^[a-z0-9-]+$")
    description: Optional[str] = Field(None, max_length=500)


class ProjectSummary(ApiModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime


class ProjectDetail(ProjectSummary):
    workspace_id: str


class ProjectCreated(ApiModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    created_at: dt.datetime


def project_summary(project: Project) -> ProjectSummary:
    return ProjectSummary(
        id=project.id,
        name=project.name,
        slug=project.slug,
        description=project.description,
        created_at=project.created_at,
        updated_at=project.updated_at,
    )


def project_detail(project: Project) -> ProjectDetail:
    return ProjectDetail(
        workspace_id=project.workspace_id,
        **project_summary(project).model_dump(),
    )


def project_created(project: Project) -> ProjectCreated:
    return ProjectCreated(
        id=project.id,
        name=project.name,
        slug=project.slug,
        description=project.description,
        created_at=project.created_at,
    )
