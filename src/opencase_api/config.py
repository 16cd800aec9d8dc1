"""Environment configuration for the OpenCase API.

Settings are read once at process start and handed to :func:`create_app`
explicitly. An invalid environment is fatal: the validation errors are
logged and the process exits before any request is served.
"""

from __future__ import annotations

from typing import Literal, Optional

import structlog
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["AppSettings", "load_settings"]

logger = structlog.get_logger(__name__)


class AppSettings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    NODE_ENV: Literal["development", "production", "test"] = "development"
    PORT: int = 3001

    # Database settings
    DATABASE_URL: str
    DB_ECHO: bool = False

    # Auth settings
    JWT_SECRET: str = Field(..., min_length=32)
    CORS_ORIGIN: str = "http://localhost:5173"

    # Storage settings (s3 fields only matter when STORAGE_TYPE == "s3")
    STORAGE_TYPE: Literal["local", "s3"] = "local"
    UPLOAD_DIR: str = "./uploads"
    S3_BUCKET: Optional[str] = None
    S3_REGION: Optional[str] = None
    S3_ACCESS_KEY: Optional[str] = None
    S3_SECRET_KEY: Optional[str] = None

    @property
    def is_development(self) -> bool:
        return self.NODE_ENV == "development"

    @property
    def log_level(self) -> str:
        return "INFO" if self.is_development else "WARNING"

    @property
    def uses_s3(self) -> bool:
        return self.STORAGE_TYPE == "s3"


def load_settings(env_file: Optional[str] = ".env") -> AppSettings:
    """Validate the process environment, exiting with status 1 on failure."""

    try:
        return AppSettings(_env_file=env_file)
    except ValidationError as exc:
        logger.error(
            "invalid_environment_configuration",
            errors=[
                {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
                for err in exc.errors()
            ],
        )
        raise SystemExit(1) from exc
