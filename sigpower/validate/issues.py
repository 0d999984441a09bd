"""Definitions for validation issues returned by validators."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class Issue:
    """Structured validation issue."""

    severity: str
    code: str
    path: str
    message: str
    block_ids: List[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "severity": self.severity,
            "code": self.code,
            "path": self.path,
            "message": self.message,
            "block_ids": list(self.block_ids),
        }
