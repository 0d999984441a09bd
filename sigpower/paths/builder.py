"""Enumerate every simple path leading away from each supply block."""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, FrozenSet, List

from sigpower.errors import GraphStructureError, MissingEquipmentError, MissingSupplyError
from sigpower.paths.point import Path, PathPoint
from sigpower.schema.blocks import Block, ConductorBlock, Supply
from sigpower.schema.project import Project

logger = logging.getLogger(__name__)


def check_equipment(project: Project, block: Block) -> None:
    """Raise :class:`MissingEquipmentError` if ``block`` cannot take part in a calculation."""

    if not block.requires_equipment:
        return
    name = project.display_name(block)
    if isinstance(block, ConductorBlock) and block.length <= 0:
        raise MissingEquipmentError(
            f"Length not set for {block.block_type.value} '{name}' (ID: {block.id}). "
            "Conductor length must be greater than 0 meters for calculations. "
            "Please set the length in the properties panel.",
            block_id=block.id,
            code="CONDUCTOR_LENGTH",
        )
    if not block.has_equipment:
        raise MissingEquipmentError(
            f"Equipment not assigned to {block.block_type.value} '{name}' (ID: {block.id}). "
            "All equipment blocks in the path must have equipment assigned before "
            "calculations can be performed.",
            block_id=block.id,
        )


def _visit(project: Project, block: Block) -> PathPoint:
    check_equipment(project, block)
    return PathPoint.from_block(project, block)


def _extend(project: Project, path: Path, visited: FrozenSet[int]) -> List[Path]:
    current = path[-1].block_id
    neighbours = [
        connection.other(current)
        for connection in project.get_connections(current)
        if connection.other(current) not in visited
    ]
    if not neighbours:
        return [path]

    completed: List[Path] = []
    for next_id in neighbours:
        point = _visit(project, project.get_block(next_id))
        branch = [replace(existing) for existing in path]
        branch.append(point)
        completed.extend(_extend(project, branch, visited | {next_id}))
    return completed


def paths_from_block(project: Project, block_id: int) -> List[Path]:
    """Every maximal simple path starting at ``block_id``."""

    start = _visit(project, project.get_block(block_id))
    return _extend(project, [start], frozenset({block_id}))


def build_paths(project: Project) -> Dict[int, List[Path]]:
    """Return the raw paths of every supply, keyed by supply ID."""

    sources = project.sources()
    if not sources:
        raise MissingSupplyError(
            "No supply blocks found in the project. At least one supply block is required."
        )

    paths_by_supply: Dict[int, List[Path]] = {}
    for source in sources:
        if not isinstance(source, Supply):
            raise GraphStructureError(f"Source block {source.id} is not a valid Supply block.")
        paths_by_supply[source.id] = paths_from_block(project, source.id)
        logger.debug("Supply %s yields %d raw path(s)", source.id, len(paths_by_supply[source.id]))
    return paths_by_supply


__all__ = ["build_paths", "paths_from_block", "check_equipment"]
