"""Typer-based CLI for sigpower operations."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from sigpower.calculator import Calculator, load_config_file
from sigpower.errors import SigpowerError
from sigpower.export.paths import write_results
from sigpower.logging_utils import setup_logging
from sigpower.paths.point import Path as PointPath
from sigpower.schema.models import load_project_file
from sigpower.schema.project import Project
from sigpower.validate import validate_project

app = typer.Typer(help="Signalling power distribution path calculator")
console = Console()


def _fmt(value: Optional[float], digits: int = 2) -> str:
    if value is None:
        return "-"
    return f"{value:.{digits}f}"


def _load(project: Path) -> Project:
    try:
        return load_project_file(project)
    except SigpowerError as exc:
        typer.echo(f"{exc.code}: {exc}", err=True)
        raise typer.Exit(code=1)


def _solve(project_graph: Project, config: Optional[Path]) -> Calculator:
    try:
        settings: Optional[Dict[str, float]] = load_config_file(config) if config else None
        calculator = Calculator(project_graph, settings)
        calculator.build_sequential_paths()
    except SigpowerError as exc:
        typer.echo(f"{exc.code}: {exc}", err=True)
        raise typer.Exit(code=1)
    return calculator


def _summary_table(paths: List[PointPath], truncated: List[int]) -> Table:
    table = Table(title="Supply paths", show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Route")
    table.add_column("Load (VA)", justify="right")
    table.add_column("Source V", justify="right")
    table.add_column("Min fault (A)", justify="right")
    for index, path in enumerate(paths):
        route = " > ".join(point.block_name or str(point.block_id) for point in path)
        faults = [point.fault_current for point in path if point.fault_current is not None]
        marker = " (stopped early)" if index in truncated else ""
        table.add_row(
            str(index),
            route + marker,
            _fmt(path[0].load_at_point, 0),
            _fmt(path[0].voltage_at_point),
            _fmt(min(faults) if faults else None),
        )
    return table


def _path_table(path: PointPath, index: int) -> Table:
    table = Table(title=f"Path {index}", show_header=True, header_style="bold")
    for column in ("Block", "Type", "Dist (km)", "Load (VA)", "V ideal", "V", "I (A)", "Drop (V)", "Suggested", "Z (ohm)", "Fault (A)"):
        table.add_column(column)
    for point in path:
        table.add_row(
            point.block_name or str(point.block_id),
            point.block_type.value,
            _fmt(point.distance_from_source, 3),
            _fmt(point.load_at_point, 0),
            _fmt(point.ideal_voltage_at_point),
            _fmt(point.voltage_at_point),
            _fmt(point.current_at_point, 3),
            _fmt(point.voltage_drop_at_point, 3),
            point.suggested_conductor_name or "-",
            _fmt(point.impedance_at_point, 4),
            _fmt(point.fault_current),
        )
    return table


@app.command()
def calculate(
    project: Path = typer.Option(..., exists=True, help="Project JSON"),
    config: Optional[Path] = typer.Option(None, exists=True, help="Calculation settings JSON"),
    out: Optional[Path] = typer.Option(None, help="Directory for paths.csv, paths.json and run_meta.json"),
    log_level: str = typer.Option("WARNING", help="Logging level"),
) -> None:
    """Build and solve every supply-to-load path of a project."""

    setup_logging(log_level)
    project_graph = _load(project)
    calculator = _solve(project_graph, config)

    console.print(_summary_table(calculator.paths, calculator.truncated_paths))
    if out:
        write_results(
            calculator.paths,
            out,
            project_graph,
            config=calculator.config,
            truncated_paths=calculator.truncated_paths,
        )
        typer.echo(f"Results written to {out}")


@app.command()
def validate(
    project: Path = typer.Option(..., exists=True, help="Project JSON"),
    report: Optional[Path] = typer.Option(None, help="Validation report output path"),
) -> None:
    """Check equipment and topology without solving."""

    project_graph = _load(project)
    issues = [issue.to_dict() for issue in validate_project(project_graph)]
    if report:
        report.parent.mkdir(parents=True, exist_ok=True)
        report.write_text(json.dumps(issues, indent=2), encoding="utf-8")
    else:
        typer.echo(json.dumps(issues, indent=2))

    exit_code = 1 if any(issue["severity"] == "ERROR" for issue in issues) else 0
    raise typer.Exit(code=exit_code)


@app.command()
def show(
    project: Path = typer.Option(..., exists=True, help="Project JSON"),
    path: int = typer.Option(0, "--path", help="Index of the path to display"),
    config: Optional[Path] = typer.Option(None, exists=True, help="Calculation settings JSON"),
) -> None:
    """Print every point of one solved path."""

    calculator = _solve(_load(project), config)
    if not 0 <= path < len(calculator.paths):
        typer.echo(f"Path {path} does not exist; {len(calculator.paths)} path(s) available", err=True)
        raise typer.Exit(code=1)
    console.print(_path_table(calculator.paths[path], path))


def main() -> None:  # pragma: no cover - entry point
    app()


if __name__ == "__main__":  # pragma: no cover - module execution
    main()
