"""Signalling power path calculator public interface with lazy imports."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - import-time helpers for type checkers
    from .calculator import DEFAULT_CONFIG, Calculator, calculate, load_config
    from .errors import SigpowerError
    from .export.paths import paths_frame, write_results
    from .paths.point import PathPoint
    from .schema.models import load_project, load_project_file
    from .schema.project import Project
    from .validate import Issue, validate_project

_EXPORTS = {
    "Calculator": ".calculator",
    "calculate": ".calculator",
    "DEFAULT_CONFIG": ".calculator",
    "load_config": ".calculator",
    "SigpowerError": ".errors",
    "paths_frame": ".export.paths",
    "write_results": ".export.paths",
    "PathPoint": ".paths.point",
    "Project": ".schema.project",
    "load_project": ".schema.models",
    "load_project_file": ".schema.models",
    "Issue": ".validate",
    "validate_project": ".validate",
}

__all__ = sorted(_EXPORTS)


def __getattr__(name: str) -> Any:  # pragma: no cover - thin compatibility shim
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(name)
    from importlib import import_module

    return getattr(import_module(module_name, __name__), name)


def __dir__() -> list[str]:  # pragma: no cover - interactive helper
    return sorted(__all__)
