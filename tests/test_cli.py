import json

import pytest
from typer.testing import CliRunner

from sigpower.cli import app

runner = CliRunner()


@pytest.fixture
def project_file(project_dict, tmp_path):
    path = tmp_path / "project.json"
    path.write_text(json.dumps(project_dict), encoding="utf-8")
    return path


def test_calculate_writes_results(project_file, tmp_path):
    out = tmp_path / "results"

    result = runner.invoke(app, ["calculate", "--project", str(project_file), "--out", str(out)])

    assert result.exit_code == 0, result.output
    assert (out / "paths.csv").exists()
    assert (out / "run_meta.json").exists()


def test_calculate_reports_engine_errors(project_dict, tmp_path):
    project_dict["blocks"][1]["length"] = 0
    path = tmp_path / "broken.json"
    path.write_text(json.dumps(project_dict), encoding="utf-8")

    result = runner.invoke(app, ["calculate", "--project", str(path)])

    assert result.exit_code == 1
    assert "CONDUCTOR_LENGTH" in result.output


def test_validate_clean_project(project_file, tmp_path):
    report = tmp_path / "issues.json"

    result = runner.invoke(app, ["validate", "--project", str(project_file), "--report", str(report)])

    assert result.exit_code == 0, result.output
    assert json.loads(report.read_text(encoding="utf-8")) == []


def test_validate_flags_crossing_supplies(project_dict, tmp_path):
    project_dict["blocks"].append({"id": 4, "type": "Supply", "name": "Backup"})
    project_dict["connections"].append([4, 3])
    path = tmp_path / "crossing.json"
    path.write_text(json.dumps(project_dict), encoding="utf-8")

    result = runner.invoke(app, ["validate", "--project", str(path)])

    assert result.exit_code == 1
    assert "SUPPLY_CROSSING" in result.output


def test_show_prints_path(project_file):
    result = runner.invoke(app, ["show", "--project", str(project_file), "--path", "0"])

    assert result.exit_code == 0, result.output
    assert "Path 0" in result.output


def test_show_rejects_unknown_path(project_file):
    result = runner.invoke(app, ["show", "--project", str(project_file), "--path", "5"])

    assert result.exit_code == 1
