"""Tabular and JSON exports of solved paths."""
from __future__ import annotations

import json
import math
from dataclasses import fields
from datetime import datetime, timezone
from numbers import Real
from pathlib import Path as FilePath
from typing import Any, Dict, List, Optional, Sequence, Union

import pandas as pd
from pandas.api.types import is_bool_dtype, is_numeric_dtype, is_object_dtype

from sigpower.paths.point import Path, PathPoint
from sigpower.schema.project import Project
from sigpower.version import SIGPOWER_VERSION

POINT_COLUMNS = [f.name for f in fields(PathPoint) if f.name != "equipment"]


def _finite(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def paths_to_records(paths: Sequence[Path]) -> List[List[Dict[str, Any]]]:
    """JSON-ready nested lists; infinite values become ``None``."""
    return [
        [{key: _finite(value) for key, value in point.to_dict().items()} for point in path]
        for path in paths
    ]


def _is_roundable(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and not math.isnan(value)


def _rounded(df: pd.DataFrame, digits: int = 3) -> pd.DataFrame:
    if df.empty:
        return df.copy()
    rounded = df.copy()
    for column in rounded.columns:
        series = rounded[column]
        if is_bool_dtype(series):
            continue
        if is_numeric_dtype(series):
            rounded[column] = series.round(digits)
            continue
        if not is_object_dtype(series):
            continue
        mask = series.apply(_is_roundable)
        if mask.any():
            rounded.loc[mask, column] = series[mask].apply(lambda value: round(value, digits))
    return rounded


def paths_frame(paths: Sequence[Path], digits: int = 3) -> pd.DataFrame:
    """One row per path point, keyed by path and position."""
    rows: List[Dict[str, Any]] = []
    for path_index, path in enumerate(paths):
        for position, point in enumerate(path):
            rows.append({"path": path_index, "position": position, **point.to_dict()})
    frame = pd.DataFrame(rows, columns=["path", "position", *POINT_COLUMNS])
    return _rounded(frame, digits)


def export_paths_csv(paths: Sequence[Path], path: Union[str, FilePath]) -> None:
    """Write the path table to CSV."""
    output_path = FilePath(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    paths_frame(paths).to_csv(output_path, index=False)


def write_results(
    paths: Sequence[Path],
    out_dir: Union[str, FilePath],
    project: Project,
    config: Optional[Dict[str, float]] = None,
    truncated_paths: Sequence[int] = (),
) -> List[FilePath]:
    """Write ``paths.csv``, ``paths.json`` and ``run_meta.json`` into ``out_dir``."""
    directory = FilePath(out_dir)
    directory.mkdir(parents=True, exist_ok=True)

    csv_path = directory / "paths.csv"
    export_paths_csv(paths, csv_path)

    json_path = directory / "paths.json"
    json_path.write_text(json.dumps(paths_to_records(paths), indent=2), encoding="utf-8")

    meta_path = directory / "run_meta.json"
    meta = {
        "version": SIGPOWER_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "project": project.name,
        "config": dict(config or {}),
        "path_count": len(paths),
        "truncated_paths": list(truncated_paths),
    }
    meta_path.write_text(json.dumps(meta, indent=2), encoding="utf-8")
    return [csv_path, json_path, meta_path]


__all__ = ["POINT_COLUMNS", "paths_frame", "paths_to_records", "export_paths_csv", "write_results"]
