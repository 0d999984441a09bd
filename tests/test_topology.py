import pytest

from sigpower.errors import TopologyError
from sigpower.paths import build_paths
from sigpower.schema.blocks import ConductorBlock, Load, Supply, Terminal
from sigpower.validate import check_topology, validate_project, validate_topology


def test_reconnecting_branches_are_rejected(make_project, catalog):
    cable = catalog.lookup("conductor", "2C 6")
    project = make_project(
        [
            Supply(1, "Mains"),
            Terminal(2),
            ConductorBlock(3, length=10, equipment=cable),
            ConductorBlock(4, length=10, equipment=cable),
            Load(5, equipment=catalog.lookup("consumer", "Signal")),
        ],
        [(1, 2), (2, 3), (2, 4), (3, 5), (4, 5)],
    )

    with pytest.raises(TopologyError) as excinfo:
        validate_topology(project, build_paths(project))

    codes = {issue.code for issue in excinfo.value.issues}
    assert codes == {"BRANCH_RECONNECTION"}
    assert "Mains" in str(excinfo.value)


def test_supplies_sharing_a_block_are_rejected(make_project, catalog):
    project = make_project(
        [Supply(1, "A"), Supply(2, "B"), Load(3, equipment=catalog.lookup("consumer", "Signal"))],
        [(1, 3), (2, 3)],
    )

    issues = check_topology(project, build_paths(project))

    crossing = [issue for issue in issues if issue.code == "SUPPLY_CROSSING"]
    assert len(crossing) == 1
    assert 3 in crossing[0].block_ids
    assert crossing[0].severity == "ERROR"


def test_clean_radial_network_has_no_issues(make_project, catalog):
    signal = catalog.lookup("consumer", "Signal")
    project = make_project(
        [Supply(1), Terminal(2), Load(3, equipment=signal), Load(4, equipment=signal)],
        [(1, 2), (2, 3), (2, 4)],
    )

    assert validate_project(project) == []


def test_validate_project_reports_equipment_errors(make_project):
    project = make_project([Supply(1), Load(3, "Signal")], [(1, 3)])

    issues = validate_project(project)

    assert [issue.code for issue in issues] == ["MISSING_EQUIPMENT"]
    assert issues[0].block_ids == [3]


def test_supply_without_load_is_a_warning(make_project):
    project = make_project([Supply(1), Terminal(2)], [(1, 2)])

    issues = validate_project(project)

    assert [(issue.severity, issue.code) for issue in issues] == [("WARNING", "SUPPLY_WITHOUT_LOAD")]


def test_reconnection_issue_names_both_paths(make_project, catalog):
    cable = catalog.lookup("conductor", "2C 6")
    project = make_project(
        [
            Supply(1, "Mains"),
            Terminal(2),
            ConductorBlock(3, length=10, equipment=cable),
            ConductorBlock(4, length=10, equipment=cable),
            Load(5, equipment=catalog.lookup("consumer", "Signal")),
        ],
        [(1, 2), (2, 3), (2, 4), (3, 5), (4, 5)],
    )

    issues = check_topology(project, build_paths(project))

    assert len(issues) == 1
    issue = issues[0]
    assert issue.path == "supplies[1].paths[0,1]"
    assert "[1,2,3,5,4]" in issue.message
    assert "[1,2,4,5,3]" in issue.message
    assert sorted(issue.block_ids) == [3, 4, 5]
