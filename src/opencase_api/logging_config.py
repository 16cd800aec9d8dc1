"""structlog setup for the API server.

Development gets coloured console lines; every other environment emits one
JSON object per line so log shippers can parse it.
"""

from __future__ import annotations

import logging
import sys

import structlog

from .config import AppSettings

__all__ = ["configure_logging", "build_renderer"]

# uvicorn's own loggers are routed through the same formatter
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def build_renderer(settings: AppSettings):
    if settings.is_development:
        return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    return structlog.processors.JSONRenderer()


def configure_logging(settings: AppSettings) -> logging.Handler:
    """Install the handler on the root logger and return it."""

    level = logging.getLevelName(settings.log_level)
    # HH:MM:ss locally, full ISO timestamps in shipped logs
    timestamper = structlog.processors.TimeStamper(
        fmt="%H:%M:%S" if settings.is_development else "iso",
        utc=not settings.is_development,
    )
    shared = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        timestamper,
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    final = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if not settings.is_development:
        final.append(structlog.processors.format_exc_info)
    final.append(build_renderer(settings))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processors=final, foreign_pre_chain=shared)
    )
    logging.basicConfig(level=level, handlers=[handler], force=True)

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
    return handler
