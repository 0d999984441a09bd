"""Forward pass: cumulative distance and nominal voltage along each path."""
from __future__ import annotations

from typing import Sequence

from sigpower.errors import VoltageMismatchError
from sigpower.paths.point import Path
from sigpower.schema.blocks import ConductorBlock, Supply, TransformerUPSBlock
from sigpower.schema.project import Project

VOLTAGE_TOLERANCE = 0.01


def _convert_at_transformer(block: TransformerUPSBlock, voltage: float, tolerance: float) -> float:
    transformer = block.equipment
    if abs(voltage - transformer.primary_voltage) < tolerance:
        return transformer.secondary_voltage
    if abs(voltage - transformer.secondary_voltage) < tolerance:
        return transformer.primary_voltage
    raise VoltageMismatchError(
        f"Voltage mismatch at transformer '{block.name.strip()}' (ID: {block.id}). "
        f"Incoming voltage is {voltage:g}V, but transformer has {transformer.primary_voltage:g}V primary "
        f"and {transformer.secondary_voltage:g}V secondary. The incoming voltage must match either "
        "the primary or secondary voltage of the transformer.",
        block_id=block.id,
    )


def propagate_path(project: Project, path: Path, tolerance: float = VOLTAGE_TOLERANCE) -> None:
    distance = 0.0
    voltage = 0.0
    for point in path:
        block = project.get_block(point.block_id)
        if isinstance(block, Supply):
            voltage = block.voltage
        elif isinstance(block, TransformerUPSBlock):
            voltage = _convert_at_transformer(block, voltage, tolerance)
        point.ideal_voltage_at_point = voltage

        if isinstance(block, ConductorBlock):
            point.added_distance = block.length / 1000.0
            distance += point.added_distance
        point.distance_from_source = distance


def run_forward_pass(
    project: Project,
    paths: Sequence[Path],
    tolerance: float = VOLTAGE_TOLERANCE,
) -> None:
    """Fill distance (km) and ideal voltage for every point of every path."""

    for path in paths:
        propagate_path(project, path, tolerance)


__all__ = ["VOLTAGE_TOLERANCE", "propagate_path", "run_forward_pass"]
