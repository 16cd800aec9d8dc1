"""Auth endpoints: register, login, logout, and the current user."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..dependencies import get_db_session
from ..errors import unauthorized
from ..schemas import DataResponse
from . import schemas
from .context import RequestContext
from .plugin import get_request_context
from .service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


def get_auth_service(session: Session = Depends(get_db_session)) -> AuthService:
    return AuthService(session=session)


@router.post(
    "/register",
    response_model=DataResponse[schemas.AuthResult],
    status_code=201,
)
def register(
    request: schemas.RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> DataResponse[schemas.AuthResult]:
    return DataResponse(data=service.register(request))


@router.post("/login", response_model=DataResponse[schemas.AuthResult])
def login(
    request: schemas.LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> DataResponse[schemas.AuthResult]:
    return DataResponse(data=service.login(request))


@router.post("/logout", response_model=DataResponse[schemas.LogoutResponse])
def logout(
    context: RequestContext = Depends(get_request_context),
    service: AuthService = Depends(get_auth_service),
) -> DataResponse[schemas.LogoutResponse]:
    if context.session is None:
        raise unauthorized("Not authenticated")
    service.logout(context.session.token)
    return DataResponse(data=schemas.LogoutResponse())


@router.get("/me", response_model=DataResponse[schemas.MeResponse])
def me(
    context: RequestContext = Depends(get_request_context),
) -> DataResponse[schemas.MeResponse]:
    if context.user is None:
        raise unauthorized("Not authenticated")
    return DataResponse(
        data=schemas.MeResponse(user=schemas.UserResponse.from_auth_user(context.user))
    )
