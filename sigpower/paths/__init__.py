"""Path construction and filtering."""
from .builder import build_paths, check_equipment, paths_from_block
from .filter import branching_terminals, filter_path, filter_paths
from .point import Path, PathPoint, block_ids

__all__ = [
    "Path",
    "PathPoint",
    "block_ids",
    "build_paths",
    "check_equipment",
    "paths_from_block",
    "branching_terminals",
    "filter_path",
    "filter_paths",
]
