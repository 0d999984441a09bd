"""Validation utilities for raw supply paths."""
from .core import (
    check_topology,
    validate_project,
    validate_topology,
)
from .issues import Issue

__all__ = [
    "Issue",
    "check_topology",
    "validate_project",
    "validate_topology",
]
