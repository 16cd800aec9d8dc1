"""Workspace endpoints. Every route requires an authenticated caller."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth import AuthUser, require_user
from ..dependencies import get_db_session
from ..errors import not_found
from ..schemas import DataResponse
from . import schemas
from .service import WorkspaceService

router = APIRouter(prefix="/api/workspaces", tags=["workspaces"])


def get_workspace_service(session: Session = Depends(get_db_session)) -> WorkspaceService:
    return WorkspaceService(session=session)


@router.get("", response_model=DataResponse[list[schemas.WorkspaceSummary]])
def list_workspaces(
    user: AuthUser = Depends(require_user),
    service: WorkspaceService = Depends(get_workspace_service),
) -> DataResponse[list[schemas.WorkspaceSummary]]:
    return DataResponse(data=service.get_user_workspaces(user.id))


@router.get("/{workspace_id}", response_model=DataResponse[schemas.WorkspaceDetail])
def get_workspace(
    workspace_id: str,
    user: AuthUser = Depends(require_user),
    service: WorkspaceService = Depends(get_workspace_service),
) -> DataResponse[schemas.WorkspaceDetail]:
    workspace = service.get_workspace(workspace_id, user.id)
    if workspace is None:
        raise not_found("Workspace")
    return DataResponse(data=workspace)


@router.get(
    "/{workspace_id}/members",
    response_model=DataResponse[list[schemas.WorkspaceMemberResponse]],
)
def list_members(
    workspace_id: str,
    user: AuthUser = Depends(require_user),
    service: WorkspaceService = Depends(get_workspace_service),
) -> DataResponse[list[schemas.WorkspaceMemberResponse]]:
    members = service.list_members(workspace_id, user.id)
    if members is None:
        raise not_found("Workspace")
    return DataResponse(data=members)
