"""FastAPI application factory for the OpenCase API."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .auth.routes import router as auth_router
from .config import AppSettings, load_settings
from .db import Database, init_engine
from .errors import register_error_handlers
from .health import API_VERSION
from .health import router as health_router
from .projects.routes import router as project_router
from .workspaces.routes import router as workspace_router

__all__ = ["create_app"]

logger = structlog.get_logger(__name__)


def create_app(
    settings: Optional[AppSettings] = None,
    *,
    database: Optional[Database] = None,
) -> FastAPI:
    """Build the API around an explicit settings object and database."""

    settings = settings or load_settings()
    database = database or Database(init_engine(settings.DATABASE_URL, echo=settings.DB_ECHO))

    @asynccontextmanager
    async def lifespan(app: FastAPI):  # noqa: ANN202
        logger.info(
            "api_starting",
            environment=settings.NODE_ENV,
            port=settings.PORT,
            storage=settings.STORAGE_TYPE,
        )
        try:
            yield
        finally:
            database.dispose()

    app = FastAPI(
        title="OpenCase API",
        version=API_VERSION,
        description="Workspace and project management for test cases",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    register_error_handlers(app, expose_internal_errors=settings.is_development)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CORS_ORIGIN],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(workspace_router)
    app.include_router(project_router)
    return app
