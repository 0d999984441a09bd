import json
import math

import pytest

from sigpower import calculate
from sigpower.calculator import DEFAULT_CONFIG, Calculator, load_config, load_config_file
from sigpower.errors import ConfigError, TopologyError
from sigpower.paths import block_ids
from sigpower.schema.blocks import BlockType, ConductorBlock, Load, Supply, Terminal


@pytest.fixture
def radial(make_project, catalog):
    cable = catalog.lookup("conductor", "2C 16")
    return make_project(
        [
            Supply(1, "Mains", voltage=120, impedance=0.2),
            ConductorBlock(2, "Trunk", length=40, equipment=cable),
            Terminal(3),
            ConductorBlock(4, "Spur A", length=30, equipment=cable),
            Load(5, "Signal A", equipment=catalog.lookup("consumer", "Signal")),
            ConductorBlock(6, "Spur B", length=20, equipment=cable),
            Load(7, "Point B", equipment=catalog.lookup("consumer", "Point machine")),
        ],
        [(1, 2), (2, 3), (3, 4), (4, 5), (3, 6), (6, 7)],
    )


def test_round_trip_from_dict(project_dict):
    paths = calculate(project_dict)

    assert [block_ids(path) for path in paths] == [[1, 2, 3]]
    supply, cable, load = paths[0]
    assert supply.block_name == "Mains"
    assert load.load_at_point == pytest.approx(1000.0)
    assert supply.load_at_point == pytest.approx(1000.0)
    assert load.voltage_at_point == pytest.approx(108.0)
    assert cable.suggested_conductor_name == "2 Core 6mm"
    assert supply.fault_current == pytest.approx(240.0)


def test_every_path_runs_from_supply_to_load(radial):
    paths = Calculator(radial).build_sequential_paths()

    assert len(paths) == 2
    for path in paths:
        assert path[0].block_type is BlockType.SUPPLY
        assert path[-1].block_type is BlockType.LOAD
        assert sum(point.added_load for point in path) == pytest.approx(path[0].load_at_point)
        assert path[0].load_at_point == pytest.approx(1500.0)


def test_distance_and_impedance_never_decrease(radial):
    for path in Calculator(radial).build_sequential_paths():
        distances = [point.distance_from_source for point in path]
        impedances = [point.impedance_at_point for point in path]
        assert distances == sorted(distances)
        assert impedances == sorted(impedances)
        faults = [point.fault_current for point in path]
        assert all(later <= earlier for earlier, later in zip(faults, faults[1:]))


def test_voltage_falls_towards_the_load(radial):
    for path in Calculator(radial).build_sequential_paths():
        voltages = [point.voltage_at_point for point in path]
        assert all(later <= earlier for earlier, later in zip(voltages, voltages[1:]))
        assert voltages[0] <= path[0].ideal_voltage_at_point


def test_repeat_calls_start_fresh(radial):
    calculator = Calculator(radial)
    first = calculator.build_sequential_paths()
    second = calculator.build_sequential_paths()

    assert [block_ids(path) for path in first] == [block_ids(path) for path in second]
    assert first[0][0] is not second[0][0]
    assert first[0][0].load_at_point == second[0][0].load_at_point


def test_truncated_paths_are_reported(make_project, catalog):
    project = make_project(
        [
            Supply(1, voltage=120, impedance=0.0),
            ConductorBlock(2, length=100, equipment=catalog.lookup("conductor", "2C 2.5")),
            Load(3, equipment=catalog.lookup("consumer", "Signal")),
        ],
        [(1, 2), (2, 3)],
    )
    calculator = Calculator(project)
    calculator.build_sequential_paths()

    assert calculator.truncated_paths == [0]
    assert math.isinf(calculator.paths[0][0].fault_current)


def test_larger_allowance_suggests_smaller_cable(make_project, catalog):
    project = make_project(
        [
            Supply(1, voltage=120, impedance=0.0),
            ConductorBlock(2, length=100, equipment=catalog.lookup("conductor", "2C 6")),
            Load(3, equipment=catalog.lookup("consumer", "Signal")),
        ],
        [(1, 2), (2, 3)],
    )

    strict = Calculator(project).build_sequential_paths()[0][1]
    relaxed = Calculator(project, {"max_voltage_drop": 0.2}).build_sequential_paths()[0][1]

    assert relaxed.theoretical_voltage_drop_rate > strict.theoretical_voltage_drop_rate
    assert relaxed.suggested_conductor_name == "2 Core 2.5mm"


def test_topology_errors_abort_the_calculation(make_project, catalog):
    project = make_project(
        [Supply(1, "A"), Supply(2, "B"), Load(3, equipment=catalog.lookup("consumer", "Signal"))],
        [(1, 3), (2, 3)],
    )
    with pytest.raises(TopologyError):
        Calculator(project).build_sequential_paths()


def test_load_config_merges_defaults():
    merged = load_config({"max_voltage_drop": "0.05"})

    assert merged["max_voltage_drop"] == 0.05
    assert merged["breaker_impedance_factor"] == DEFAULT_CONFIG["breaker_impedance_factor"]


@pytest.mark.parametrize(
    "overrides",
    [{"max_drop": 0.1}, {"max_voltage_drop": 1.5}, {"voltage_tolerance": 0}, {"breaker_impedance_factor": -1}],
)
def test_load_config_rejects_bad_settings(overrides):
    with pytest.raises(ConfigError):
        load_config(overrides)


def test_load_config_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"breaker_impedance_factor": 10}), encoding="utf-8")

    assert load_config_file(path)["breaker_impedance_factor"] == 10.0
