"""OpenCase API: workspaces, projects, and session authentication."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "AppSettings",
    "load_settings",
    "create_app",
    "Database",
    "init_engine",
]

_EXPORTS = {
    "AppSettings": ".config",
    "load_settings": ".config",
    "create_app": ".app",
    "Database": ".db",
    "init_engine": ".db",
}


def __getattr__(name: str) -> Any:  # pragma: no cover - thin import shim
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    value = getattr(import_module(module_name, __name__), name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:  # pragma: no cover - introspection helper
    return sorted(__all__)
