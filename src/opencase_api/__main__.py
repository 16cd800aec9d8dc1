"""Server entry point: ``python -m opencase_api``."""

from __future__ import annotations

import argparse
from typing import List, Optional

import uvicorn

from .app import create_app
from .config import load_settings
from .logging_config import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="opencase-api",
        description="Run the OpenCase API server.",
    )
    parser.add_argument("--host", default="0.0.0.0", help="Bind address. Default: 0.0.0.0")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before serving (development only)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    settings = load_settings()
    configure_logging(settings)

    app = create_app(settings)
    if args.create_tables:
        app.state.database.create_all()

    uvicorn.run(app, host=args.host, port=settings.PORT, log_config=None)


if __name__ == "__main__":  # pragma: no cover
    main()
