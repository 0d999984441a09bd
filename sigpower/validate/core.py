"""Topology validators run over the raw paths of every supply."""
from __future__ import annotations

from typing import Dict, List, Sequence

from sigpower.errors import SigpowerError, TopologyError
from sigpower.paths.builder import build_paths
from sigpower.paths.filter import filter_paths
from sigpower.paths.point import Path, block_ids
from sigpower.schema.project import Project
from sigpower.validate.issues import Issue

PathsBySupply = Dict[int, List[Path]]


def _format_ids(ids: Sequence[int]) -> str:
    return ",".join(str(block_id) for block_id in ids)


def _shared_prefix(first: Sequence[int], second: Sequence[int]) -> int:
    """Index of the last position where both sequences still agree, or -1."""

    divergence = -1
    for index, (left, right) in enumerate(zip(first, second)):
        if left != right:
            break
        divergence = index
    return divergence


class Validator:
    """Callable validator hook returning a list of issues."""

    def __call__(self, project: Project, paths_by_supply: PathsBySupply) -> List[Issue]:  # pragma: no cover - interface
        raise NotImplementedError


class ReconnectionValidator(Validator):
    """Branches leaving a supply must never meet again."""

    def __call__(self, project: Project, paths_by_supply: PathsBySupply) -> List[Issue]:
        issues: List[Issue] = []
        for supply_id, paths in paths_by_supply.items():
            supply = project.get_block(supply_id)
            sequences = [block_ids(path) for path in paths]
            for i in range(len(sequences)):
                for j in range(i + 1, len(sequences)):
                    first, second = sequences[i], sequences[j]
                    divergence = _shared_prefix(first, second)
                    if divergence < 0 or divergence >= min(len(first), len(second)) - 1:
                        continue
                    tail = set(second[divergence + 1 :])
                    common = [block_id for block_id in first[divergence + 1 :] if block_id in tail]
                    if not common:
                        continue
                    issues.append(
                        Issue(
                            severity="ERROR",
                            code="BRANCH_RECONNECTION",
                            path=f"supplies[{supply_id}].paths[{i},{j}]",
                            message=(
                                f"Path reconnection detected in supply '{project.display_name(supply)}' "
                                f"(ID: {supply_id}). Paths [{_format_ids(first)}] and "
                                f"[{_format_ids(second)}] reconnect at block(s): "
                                f"{', '.join(str(b) for b in common)}. "
                                "Branched paths cannot reconnect as this creates a loop."
                            ),
                            block_ids=common,
                        )
                    )
        return issues


class SourceIsolationValidator(Validator):
    """Blocks fed by one supply may not be reachable from another."""

    def __call__(self, project: Project, paths_by_supply: PathsBySupply) -> List[Issue]:
        issues: List[Issue] = []
        used = {
            supply_id: {point.block_id for path in paths for point in path[1:]}
            for supply_id, paths in paths_by_supply.items()
        }
        supply_ids = list(paths_by_supply)
        for i in range(len(supply_ids)):
            for j in range(i + 1, len(supply_ids)):
                first, second = supply_ids[i], supply_ids[j]
                common = sorted(used[first] & used[second])
                if not common:
                    continue
                issues.append(
                    Issue(
                        severity="ERROR",
                        code="SUPPLY_CROSSING",
                        path=f"supplies[{first},{second}]",
                        message=(
                            "Supply path crossing detected. Supplies must remain isolated from each other. "
                            f"Supply '{project.display_name(project.get_block(first))}' (ID: {first}) and "
                            f"Supply '{project.display_name(project.get_block(second))}' (ID: {second}) "
                            f"share common block(s): {', '.join(str(b) for b in common)}."
                        ),
                        block_ids=common,
                    )
                )
        return issues


VALIDATORS: List[Validator] = [
    ReconnectionValidator(),
    SourceIsolationValidator(),
]


def check_topology(project: Project, paths_by_supply: PathsBySupply) -> List[Issue]:
    """Run all topology validators and return a flat list of issues."""

    issues: List[Issue] = []
    for validator in VALIDATORS:
        issues.extend(validator(project, paths_by_supply))
    return issues


def validate_topology(project: Project, paths_by_supply: PathsBySupply) -> None:
    """Raise :class:`TopologyError` carrying every issue found."""

    issues = check_topology(project, paths_by_supply)
    if issues:
        raise TopologyError(issues)


def validate_project(project: Project) -> List[Issue]:
    """Report structural, equipment and topology problems without solving."""

    try:
        paths_by_supply = build_paths(project)
    except SigpowerError as exc:
        block_id = getattr(exc, "block_id", None)
        return [
            Issue(
                severity="ERROR",
                code=exc.code,
                path=f"blocks[{block_id}]" if block_id is not None else "blocks",
                message=str(exc),
                block_ids=[block_id] if block_id is not None else [],
            )
        ]

    issues = check_topology(project, paths_by_supply)
    if issues:
        return issues
    for supply_id, paths in paths_by_supply.items():
        if not filter_paths(paths):
            issues.append(
                Issue(
                    severity="WARNING",
                    code="SUPPLY_WITHOUT_LOAD",
                    path=f"supplies[{supply_id}]",
                    message=f"Supply {supply_id} does not feed any load",
                    block_ids=[supply_id],
                )
            )
    return issues


__all__ = [
    "Validator",
    "ReconnectionValidator",
    "SourceIsolationValidator",
    "VALIDATORS",
    "check_topology",
    "validate_topology",
    "validate_project",
]
