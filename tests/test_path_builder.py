import pytest

from sigpower.errors import GraphStructureError, MissingEquipmentError, MissingSupplyError
from sigpower.paths import block_ids, build_paths, paths_from_block
from sigpower.schema.blocks import BlockType, ConductorBlock, Load, Supply, Terminal


def test_single_chain_yields_one_path(make_project, catalog):
    project = make_project(
        [
            Supply(1, "Mains", voltage=120),
            ConductorBlock(2, "Feeder", length=100, equipment=catalog.lookup("conductor", "2C 6")),
            Load(3, "Signal", equipment=catalog.lookup("consumer", "Signal")),
        ],
        [(1, 2), (2, 3)],
    )

    paths = build_paths(project)

    assert list(paths) == [1]
    assert [block_ids(path) for path in paths[1]] == [[1, 2, 3]]
    first = paths[1][0]
    assert first[0].block_type is BlockType.SUPPLY
    assert first[1].equipment_name == "2 Core 6mm"
    assert first[1].selected_conductor_voltage_drop_rate == 7.5


def test_branch_points_are_independent_copies(make_project, catalog):
    signal = catalog.lookup("consumer", "Signal")
    project = make_project(
        [Supply(1), Terminal(2), Load(3, equipment=signal), Load(4, equipment=signal)],
        [(1, 2), (2, 3), (2, 4)],
    )

    paths = paths_from_block(project, 1)

    assert sorted(block_ids(path) for path in paths) == [[1, 2, 3], [1, 2, 4]]
    paths[0][0].load_at_point = 99.0
    assert paths[1][0].load_at_point is None
    assert paths[0][0] is not paths[1][0]


def test_no_supply_is_rejected(make_project, catalog):
    project = make_project([Load(3, equipment=catalog.lookup("consumer", "Signal"))], [])
    with pytest.raises(MissingSupplyError):
        build_paths(project)


def test_zero_length_conductor_is_rejected(make_project, catalog):
    project = make_project(
        [Supply(1), ConductorBlock(2, "Feeder", length=0, equipment=catalog.lookup("conductor", "2C 6"))],
        [(1, 2)],
    )
    with pytest.raises(MissingEquipmentError) as excinfo:
        build_paths(project)
    assert excinfo.value.code == "CONDUCTOR_LENGTH"
    assert excinfo.value.block_id == 2


def test_load_without_equipment_is_rejected(make_project):
    project = make_project([Supply(1), Load(3, "Signal")], [(1, 3)])
    with pytest.raises(MissingEquipmentError) as excinfo:
        build_paths(project)
    assert excinfo.value.code == "MISSING_EQUIPMENT"
    assert "Signal" in str(excinfo.value)


def test_duplicate_connection_is_rejected(make_project):
    with pytest.raises(GraphStructureError):
        make_project([Supply(1), Terminal(2)], [(1, 2), (2, 1)])
