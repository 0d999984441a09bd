"""Collapse pass-through terminals and trim paths so they end at a load."""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Set, Tuple

from sigpower.paths.point import Path, block_ids
from sigpower.schema.blocks import BlockType

logger = logging.getLogger(__name__)


def branching_terminals(paths: Sequence[Path]) -> Set[int]:
    """Terminals where paths with an identical prefix continue to different blocks."""

    successors: Dict[Tuple[int, ...], Set[int]] = defaultdict(set)
    for path in paths:
        ids = block_ids(path)
        for index, point in enumerate(path[:-1]):
            if point.block_type is BlockType.TERMINAL:
                successors[tuple(ids[: index + 1])].add(ids[index + 1])
    return {prefix[-1] for prefix, following in successors.items() if len(following) > 1}


def filter_path(path: Path, branch_points: Set[int]) -> Optional[Path]:
    """Drop pass-through terminals and trim after the last load.

    Returns ``None`` when the path never reaches a load.
    """

    last = len(path) - 1
    kept: Path = [
        point
        for index, point in enumerate(path)
        if point.block_type is not BlockType.TERMINAL
        or index in (0, last)
        or point.block_id in branch_points
    ]

    for index in range(len(kept) - 1, -1, -1):
        if kept[index].block_type is BlockType.LOAD:
            return kept[: index + 1]
    return None


def filter_paths(paths: Sequence[Path]) -> List[Path]:
    """Filter every raw path, dropping load-less and duplicate results.

    Two raw paths can collapse to the same block sequence once pass-through
    terminals are removed; only the first of them is returned, so callers
    never see the same supply-to-load route twice.
    """

    branch_points = branching_terminals(paths)
    filtered: List[Path] = []
    seen: Set[Tuple[int, ...]] = set()
    for path in paths:
        trimmed = filter_path(path, branch_points)
        if trimmed is None:
            logger.debug("Dropping path %s: no load reached", block_ids(path))
            continue
        key = tuple(block_ids(trimmed))
        if key in seen:
            continue
        seen.add(key)
        filtered.append(trimmed)
    return filtered


__all__ = ["branching_terminals", "filter_path", "filter_paths"]
