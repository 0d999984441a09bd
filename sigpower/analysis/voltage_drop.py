"""Backward pass: voltage, current, drop and conductor sizing from load to source."""
from __future__ import annotations

import logging
import math
from typing import List, Sequence

from sigpower.errors import CatalogExhaustedError
from sigpower.paths.point import Path, PathPoint
from sigpower.schema.blocks import BlockType
from sigpower.schema.catalog import Catalog

logger = logging.getLogger(__name__)

MAX_VOLTAGE_DROP = 0.1


def _size_conductor(point: PathPoint, voltage: float, current: float, catalog: Catalog) -> float:
    """Suggest a conductor for ``point`` and return the drop across the assigned one."""

    denominator = current * point.distance_from_source
    if denominator > 0:
        rate = (point.ideal_voltage_at_point - voltage) / denominator
    else:
        rate = math.inf
    point.theoretical_voltage_drop_rate = rate

    suggested = catalog.find_conductor(rate)
    if suggested is None:
        raise CatalogExhaustedError(
            f"No suitable conductor found for ConductorBlock '{point.block_name}' (ID: {point.block_id}). "
            f"Theoretical voltage drop rate is {rate:.4g} V/A.km, but no conductors have a "
            "VoltageDrop90 rating less than or equal to this value. "
            "Please add a suitable conductor to the project.",
            block_id=point.block_id,
            rate=rate,
        )
    point.suggested_conductor_name = suggested.label
    point.suggested_conductor_voltage_drop_rate = suggested.voltage_drop_90

    assigned = point.equipment
    point.added_impedance = 2 * point.added_distance * math.hypot(assigned.resistance_90, assigned.reactance)
    return point.added_distance * current * point.selected_conductor_voltage_drop_rate


def _refer_to_primary(point: PathPoint, following: PathPoint, current: float) -> float:
    """Fill the transformer's primary-side values and return its drop."""

    transformer = point.equipment
    ratio = transformer.turns_ratio
    point.primary_current = following.current_at_point / ratio
    point.primary_transformer_impedance = transformer.primary_impedance
    drop = current * point.primary_transformer_impedance
    point.primary_voltage = math.hypot(ratio * following.voltage_at_point, drop)
    point.added_impedance = point.primary_transformer_impedance / ratio ** 2
    return drop


def solve_path(path: Path, catalog: Catalog, max_voltage_drop: float = MAX_VOLTAGE_DROP) -> bool:
    """Solve one path in place.

    Returns ``False`` when the pass stopped early because the voltage needed
    upstream exceeded the nominal voltage at that point.
    """

    end = path[-1]
    end.voltage_at_point = end.ideal_voltage_at_point * (1 - max_voltage_drop)
    end.current_at_point = end.added_load / end.voltage_at_point
    drop = 0.0
    end.voltage_drop_at_point = drop

    for index in range(len(path) - 2, -1, -1):
        point = path[index]
        following = path[index + 1]

        if following.block_type is BlockType.TRANSFORMER:
            voltage = following.primary_voltage
            current = following.primary_current + point.added_load / voltage
        else:
            voltage = following.voltage_at_point + following.voltage_drop_at_point
            current = following.current_at_point + point.added_load / voltage

        if voltage > point.ideal_voltage_at_point:
            point.voltage_at_point = voltage
            point.current_at_point = current
            logger.warning(
                "Required voltage %.2fV at %s (ID: %s) exceeds nominal %.2fV; "
                "stopping the voltage pass for this path",
                voltage,
                point.block_name,
                point.block_id,
                point.ideal_voltage_at_point,
            )
            return False

        # Points other than conductors and transformers carry the drop of the point below them.
        if point.block_type is BlockType.CONDUCTOR:
            drop = _size_conductor(point, voltage, current, catalog)
        elif point.block_type is BlockType.TRANSFORMER:
            drop = _refer_to_primary(point, following, current)

        point.voltage_at_point = voltage
        point.current_at_point = current
        point.voltage_drop_at_point = drop
    return True


def run_voltage_drop(
    paths: Sequence[Path],
    catalog: Catalog,
    max_voltage_drop: float = MAX_VOLTAGE_DROP,
) -> List[int]:
    """Solve every path; return the indices of paths that stopped early."""

    truncated: List[int] = []
    for index, path in enumerate(paths):
        if not solve_path(path, catalog, max_voltage_drop):
            truncated.append(index)
    return truncated


__all__ = ["MAX_VOLTAGE_DROP", "solve_path", "run_voltage_drop"]
