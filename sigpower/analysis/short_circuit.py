"""Forward pass accumulating source impedance, fault current and breaker sizing."""
from __future__ import annotations

import math
from typing import Sequence

from sigpower.paths.point import Path
from sigpower.schema.blocks import BlockType

BREAKER_IMPEDANCE_FACTOR = 9.5


def accumulate_path(path: Path, breaker_factor: float = BREAKER_IMPEDANCE_FACTOR) -> None:
    impedance = 0.0
    for index, point in enumerate(path):
        if point.added_impedance is not None:
            impedance += point.added_impedance

        if point.block_type is BlockType.TRANSFORMER and index > 0:
            ratio = point.equipment.turns_ratio
            upstream = path[index - 1].impedance_at_point or 0.0
            point.secondary_source_impedance = upstream / ratio ** 2
            impedance += point.secondary_source_impedance

        point.impedance_at_point = impedance
        point.fault_current = point.ideal_voltage_at_point / impedance if impedance > 0 else math.inf

        if point.block_type is BlockType.ROW and point.selected_circuit_breaker_rating is not None:
            point.minimum_circuit_breaker_rating = math.ceil(impedance / breaker_factor)
            if point.selected_circuit_breaker_rating > 0:
                point.in_multiple = point.fault_current / point.selected_circuit_breaker_rating


def run_fault_current(
    paths: Sequence[Path],
    breaker_factor: float = BREAKER_IMPEDANCE_FACTOR,
) -> None:
    """Fill impedance, fault current and breaker figures for every path."""

    for path in paths:
        accumulate_path(path, breaker_factor)


__all__ = ["BREAKER_IMPEDANCE_FACTOR", "accumulate_path", "run_fault_current"]
