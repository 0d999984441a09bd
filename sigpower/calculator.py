"""Primary entry point for building and solving sequential supply paths."""
from __future__ import annotations

import json
import logging
from pathlib import Path as FilePath
from typing import Any, Dict, List, Optional, Union

from sigpower.analysis.distance import VOLTAGE_TOLERANCE, run_forward_pass
from sigpower.analysis.load_calc import run_load_calc
from sigpower.analysis.short_circuit import BREAKER_IMPEDANCE_FACTOR, run_fault_current
from sigpower.analysis.voltage_drop import MAX_VOLTAGE_DROP, run_voltage_drop
from sigpower.errors import ConfigError
from sigpower.paths.builder import build_paths
from sigpower.paths.filter import filter_paths
from sigpower.paths.point import Path
from sigpower.schema.models import ensure_project
from sigpower.schema.project import Project
from sigpower.validate.core import validate_topology

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, float] = {
    "max_voltage_drop": MAX_VOLTAGE_DROP,
    "voltage_tolerance": VOLTAGE_TOLERANCE,
    "breaker_impedance_factor": BREAKER_IMPEDANCE_FACTOR,
}


def load_config(config: Optional[Dict[str, float]] = None) -> Dict[str, float]:
    merged = dict(DEFAULT_CONFIG)
    if config:
        unknown = sorted(set(config) - set(DEFAULT_CONFIG))
        if unknown:
            raise ConfigError(f"Unknown calculation setting(s): {', '.join(unknown)}")
        merged.update({key: float(value) for key, value in config.items()})
    if not 0 < merged["max_voltage_drop"] < 1:
        raise ConfigError("max_voltage_drop must be between 0 and 1")
    if merged["voltage_tolerance"] <= 0:
        raise ConfigError("voltage_tolerance must be positive")
    if merged["breaker_impedance_factor"] <= 0:
        raise ConfigError("breaker_impedance_factor must be positive")
    return merged


def load_config_file(path: Union[str, FilePath]) -> Dict[str, float]:
    """Read calculation overrides from a JSON file and merge them with the defaults."""
    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ConfigError("Configuration file must contain a JSON object")
    return load_config(data)


class Calculator:
    """Builds every supply-to-load path of a project and solves it.

    The project is treated as a frozen snapshot; each call to
    :meth:`build_sequential_paths` starts from scratch.
    """

    def __init__(self, project: Project, config: Optional[Dict[str, float]] = None) -> None:
        self.project = project
        self.config = load_config(config)
        self.paths: List[Path] = []
        self.truncated_paths: List[int] = []

    def build_sequential_paths(self) -> List[Path]:
        paths_by_supply = build_paths(self.project)
        validate_topology(self.project, paths_by_supply)

        raw = [path for paths in paths_by_supply.values() for path in paths]
        paths = filter_paths(raw)
        logger.debug("Filtered %d raw path(s) down to %d", len(raw), len(paths))

        run_forward_pass(self.project, paths, self.config["voltage_tolerance"])
        run_load_calc(paths)
        truncated = run_voltage_drop(paths, self.project.catalog, self.config["max_voltage_drop"])
        run_fault_current(paths, self.config["breaker_impedance_factor"])

        self.paths = paths
        self.truncated_paths = truncated
        return paths


def calculate(
    project: Union[Project, Dict[str, Any], str, FilePath],
    config: Optional[Dict[str, float]] = None,
) -> List[Path]:
    """Load ``project`` if needed and return its solved paths."""
    return Calculator(ensure_project(project), config).build_sequential_paths()


__all__ = [
    "DEFAULT_CONFIG",
    "Calculator",
    "calculate",
    "load_config",
    "load_config_file",
]
