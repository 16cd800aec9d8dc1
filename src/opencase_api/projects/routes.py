"""Project endpoints nested under a workspace."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth import AuthUser, require_user
from ..dependencies import get_db_session
from ..errors import not_found
from ..schemas import DataResponse
from . import schemas
from .service import ProjectService

router = APIRouter(prefix="/api/workspaces/{workspace_id}/projects", tags=["projects"])


def get_project_service(session: Session = Depends(get_db_session)) -> ProjectService:
    return ProjectService(session=session)


@router.get("", response_model=DataResponse[list[schemas.ProjectSummary]])
def list_projects(
    workspace_id: str,
    user: AuthUser = Depends(require_user),
    service: ProjectService = Depends(get_project_service),
) -> DataResponse[list[schemas.ProjectSummary]]:
    projects = service.get_workspace_projects(workspace_id, user.id)
    if projects is None:
        raise not_found("Workspace")
    return DataResponse(data=projects)


@router.get("/{project_id}", response_model=DataResponse[schemas.ProjectDetail])
def get_project(
    workspace_id: str,
    project_id: str,
    user: AuthUser = Depends(require_user),
    service: ProjectService = Depends(get_project_service),
) -> DataResponse[schemas.ProjectDetail]:
    project = service.get_project(workspace_id, project_id, user.id)
    if project is None:
        raise not_found("Project")
    return DataResponse(data=project)


@router.post("", response_model=DataResponse[schemas.ProjectCreated], status_code=201)
def create_project(
    workspace_id: str,
    request: schemas.ProjectCreateRequest,
    user: AuthUser = Depends(require_user),
    service: ProjectService = Depends(get_project_service),
) -> DataResponse[schemas.ProjectCreated]:
    return DataResponse(data=service.create_project(workspace_id, user.id, request))
