"""Per-path record of one block occurrence and its calculated values."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional

from sigpower.schema.blocks import (
    Block,
    BlockType,
    ConductorBlock,
    Equipment,
    Row,
    Supply,
)
from sigpower.schema.project import Project


@dataclass
class PathPoint:
    """One occurrence of a block within one path.

    Points are never shared between paths; each stage of the calculator
    fills in its own fields in place.
    """

    block_id: int
    block_type: BlockType
    block_name: Optional[str] = None
    equipment: Optional[Equipment] = None
    equipment_name: Optional[str] = None
    distance_from_source: Optional[float] = None
    added_distance: Optional[float] = None
    load_at_point: Optional[float] = None
    added_load: Optional[float] = None
    ideal_voltage_at_point: Optional[float] = None
    voltage_at_point: Optional[float] = None
    current_at_point: Optional[float] = None
    voltage_drop_at_point: Optional[float] = None
    theoretical_voltage_drop_rate: Optional[float] = None
    suggested_conductor_name: Optional[str] = None
    suggested_conductor_voltage_drop_rate: Optional[float] = None
    selected_conductor_voltage_drop_rate: Optional[float] = None
    added_impedance: Optional[float] = None
    impedance_at_point: Optional[float] = None
    primary_voltage: Optional[float] = None
    primary_current: Optional[float] = None
    primary_transformer_impedance: Optional[float] = None
    secondary_source_impedance: Optional[float] = None
    fault_current: Optional[float] = None
    minimum_circuit_breaker_rating: Optional[float] = None
    selected_circuit_breaker_rating: Optional[float] = None
    in_multiple: Optional[float] = None

    @classmethod
    def from_block(cls, project: Project, block: Block) -> "PathPoint":
        point = cls(
            block_id=block.id,
            block_type=block.block_type,
            block_name=project.display_name(block),
        )
        equipment = block.equipment_item
        if equipment is not None:
            point.equipment = equipment
            point.equipment_name = equipment.label
        if isinstance(block, ConductorBlock) and block.equipment is not None:
            point.selected_conductor_voltage_drop_rate = block.equipment.voltage_drop_90
        if isinstance(block, Row) and block.is_circuit_breaker:
            point.selected_circuit_breaker_rating = block.rating
        if isinstance(block, Supply):
            point.added_impedance = block.impedance
        return point

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "equipment"}
        data["block_type"] = self.block_type.value
        return data


Path = List[PathPoint]


def block_ids(path: Path) -> List[int]:
    return [point.block_id for point in path]


__all__ = ["PathPoint", "Path", "block_ids"]
