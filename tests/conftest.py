from typing import Callable, Iterable, List, Tuple

import pytest

from sigpower.schema.blocks import Block, Conductor, Consumer, TransformerUPS
from sigpower.schema.catalog import Catalog
from sigpower.schema.project import Connection, Project


@pytest.fixture
def catalog() -> Catalog:
    return Catalog(
        conductors=[
            Conductor(name="2C 2.5", cores=2, cross_sectional_area=2.5, voltage_drop_90=18.0, resistance_90=9.45, reactance=0.102),
            Conductor(name="2C 6", cores=2, cross_sectional_area=6, voltage_drop_90=7.5, resistance_90=3.93, reactance=0.0967),
            Conductor(name="2C 16", cores=2, cross_sectional_area=16, voltage_drop_90=2.9, resistance_90=1.47, reactance=0.0906),
        ],
        transformers=[
            TransformerUPS(name="T415/120", rating=10000, percentage_z=4, primary_voltage=415, secondary_voltage=120),
        ],
        consumers=[
            Consumer(name="Signal", load=1000),
            Consumer(name="Point machine", load=500),
        ],
    )


@pytest.fixture
def make_project(catalog: Catalog) -> Callable[..., Project]:
    def _make(blocks: Iterable[Block], links: Iterable[Tuple[int, int]], name: str = "Test") -> Project:
        connections: List[Connection] = [Connection(left, right) for left, right in links]
        return Project(blocks, connections, catalog=catalog, name=name)

    return _make


@pytest.fixture
def project_dict() -> dict:
    return {
        "name": "Signal room feed",
        "catalog": {
            "conductors": [
                {"name": "2C 6", "cores": 2, "cross_sectional_area": 6, "voltage_drop_90": 7.5, "resistance_90": 3.93, "reactance": 0.0967},
                {"name": "2C 16", "cores": 2, "cross_sectional_area": 16, "voltage_drop_90": 2.9, "resistance_90": 1.47, "reactance": 0.0906},
            ],
            "consumers": [{"name": "Signal", "load": 1000}],
        },
        "blocks": [
            {"id": 1, "type": "Supply", "name": "Mains", "voltage": 120, "impedance": 0.5},
            {"id": 2, "type": "ConductorBlock", "name": "Feeder", "length": 100, "equipment": "2C 6"},
            {"id": 3, "type": "Load", "name": "Signal S1", "equipment": "Signal"},
        ],
        "connections": [[1, 2], {"left": 2, "right": 3}],
    }
