"""Exceptions raised while loading a project or calculating its paths."""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:  # pragma: no cover - import-time helpers for type checkers
    from sigpower.validate.issues import Issue


class SigpowerError(Exception):
    """Base class for every error reported by the calculation engine."""

    code = "ERROR"


class ProjectSchemaError(SigpowerError, ValueError):
    """Raised when a project document cannot be validated."""

    code = "SCHEMA"


class ConfigError(SigpowerError, ValueError):
    """Raised when calculation settings are unknown or out of range."""

    code = "CONFIG"


class GraphStructureError(SigpowerError):
    """Raised when the block graph cannot be traversed."""

    code = "GRAPH_STRUCTURE"


class MissingSupplyError(GraphStructureError):
    code = "MISSING_SUPPLY"


class BlockNotFoundError(GraphStructureError):
    code = "BLOCK_NOT_FOUND"

    def __init__(self, block_id: int) -> None:
        super().__init__(f"Block with the ID '{block_id}' not found.")
        self.block_id = block_id


class MissingEquipmentError(SigpowerError):
    """Raised when a block on a path lacks the equipment (or length) it needs."""

    code = "MISSING_EQUIPMENT"

    def __init__(self, message: str, block_id: int, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.block_id = block_id
        if code:
            self.code = code


class TopologyError(SigpowerError):
    """Raised when branches reconnect or supplies share blocks."""

    code = "TOPOLOGY"

    def __init__(self, issues: List["Issue"]) -> None:
        message = issues[0].message if issues else "Topology validation failed"
        if len(issues) > 1:
            message += f" ({len(issues) - 1} further topology issue(s))"
        super().__init__(message)
        self.issues = list(issues)


class VoltageMismatchError(SigpowerError):
    code = "VOLTAGE_MISMATCH"

    def __init__(self, message: str, block_id: int) -> None:
        super().__init__(message)
        self.block_id = block_id


class CatalogExhaustedError(SigpowerError):
    """Raised when no catalog conductor satisfies the theoretical drop rate."""

    code = "NO_SUITABLE_CONDUCTOR"

    def __init__(self, message: str, block_id: int, rate: float) -> None:
        super().__init__(message)
        self.block_id = block_id
        self.rate = rate


__all__ = [
    "SigpowerError",
    "ProjectSchemaError",
    "ConfigError",
    "GraphStructureError",
    "MissingSupplyError",
    "BlockNotFoundError",
    "MissingEquipmentError",
    "TopologyError",
    "VoltageMismatchError",
    "CatalogExhaustedError",
]
