"""Downstream load aggregation shared across branches."""
from __future__ import annotations

from collections import defaultdict
from typing import Dict, Sequence

from sigpower.paths.point import Path
from sigpower.schema.blocks import BlockType


def aggregate_loads(paths: Sequence[Path]) -> Dict[int, float]:
    """Map each block ID to the total VA of every distinct load at or below it.

    A block shared by several branches carries the demand of all of them,
    even though each branch is reported as a separate path.
    """

    downstream: Dict[int, Dict[int, float]] = defaultdict(dict)
    for path in paths:
        for index, point in enumerate(path):
            if point.block_type is not BlockType.LOAD:
                continue
            demand = float(point.equipment.load)
            for upstream in path[: index + 1]:
                downstream[upstream.block_id][point.block_id] = demand
    return {block_id: sum(loads.values()) for block_id, loads in downstream.items()}


def apply_loads(paths: Sequence[Path], totals: Dict[int, float]) -> None:
    for path in paths:
        for point in path:
            point.load_at_point = totals.get(point.block_id, 0.0)


def calculate_added_loads(paths: Sequence[Path]) -> None:
    """Demand introduced at each point: its load less the next point's."""

    for path in paths:
        for index in range(len(path) - 1, -1, -1):
            point = path[index]
            load = point.load_at_point or 0.0
            if index == len(path) - 1:
                point.added_load = load
            else:
                point.added_load = load - (path[index + 1].load_at_point or 0.0)


def run_load_calc(paths: Sequence[Path]) -> Dict[int, float]:
    """Fill ``load_at_point`` and ``added_load``; return the per-block totals."""

    totals = aggregate_loads(paths)
    apply_loads(paths, totals)
    calculate_added_loads(paths)
    return totals


__all__ = ["aggregate_loads", "apply_loads", "calculate_added_loads", "run_load_calc"]
