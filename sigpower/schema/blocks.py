"""Block and equipment types that make up a signalling power network."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Tuple, Union


class BlockType(str, Enum):
    SUPPLY = "Supply"
    CONDUCTOR = "ConductorBlock"
    TRANSFORMER = "TransformerUPSBlock"
    ALTERNATOR = "AlternatorBlock"
    LOAD = "Load"
    TERMINAL = "Terminal"
    ROW = "Row"
    BUSBAR = "Busbar"
    LOCATION = "Location"
    EXTERNAL_BUSBAR = "ExternalBusbar"


@dataclass(frozen=True)
class Conductor:
    """Cable type with AS/NZS 3008 style ratings.

    Voltage drops are in mV/A.m (equivalently V/A.km); resistance and
    reactance are in ohm/km.
    """

    name: str
    cores: int
    cross_sectional_area: float
    voltage_drop_90: float
    resistance_90: float
    reactance: float
    voltage_drop_60: float = 0.0
    resistance_60: float = 0.0
    description: str = ""

    @property
    def label(self) -> str:
        return f"{self.cores} Core {self.cross_sectional_area:g}mm"


@dataclass(frozen=True)
class TransformerUPS:
    name: str
    rating: float
    percentage_z: float
    primary_voltage: float
    secondary_voltage: float
    description: str = ""

    @property
    def label(self) -> str:
        return (
            f"{self.primary_voltage:g}/{self.secondary_voltage:g} "
            f"{self.rating:g}VA {self.percentage_z:g}%"
        )

    @property
    def turns_ratio(self) -> float:
        return self.primary_voltage / self.secondary_voltage

    @property
    def primary_impedance(self) -> float:
        """Winding impedance referred to the primary side, in ohms."""
        return self.percentage_z / 100 * self.primary_voltage ** 2 / self.rating


@dataclass(frozen=True)
class Alternator:
    name: str
    rating_va: float = 0.0
    rating_w: float = 0.0
    description: str = ""

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class Consumer:
    name: str
    load: float
    description: str = ""

    @property
    def label(self) -> str:
        return self.name


Equipment = Union[Conductor, TransformerUPS, Alternator, Consumer]


@dataclass
class Block:
    id: int
    name: str = ""
    parent_id: int = -1

    block_type: ClassVar[BlockType]
    requires_equipment: ClassVar[bool] = False
    # Allowed parent types; empty means any existing block may contain it.
    parent_types: ClassVar[Tuple[BlockType, ...]] = ()
    requires_parent: ClassVar[bool] = False

    @property
    def equipment_item(self) -> Optional[Equipment]:
        return getattr(self, "equipment", None)

    @property
    def has_equipment(self) -> bool:
        return self.equipment_item is not None


@dataclass
class Supply(Block):
    voltage: float = 230.0
    impedance: float = 1.6

    block_type: ClassVar[BlockType] = BlockType.SUPPLY


@dataclass
class ConductorBlock(Block):
    length: float = 0.0
    equipment: Optional[Conductor] = None

    block_type: ClassVar[BlockType] = BlockType.CONDUCTOR
    requires_equipment: ClassVar[bool] = True


@dataclass
class TransformerUPSBlock(Block):
    equipment: Optional[TransformerUPS] = None

    block_type: ClassVar[BlockType] = BlockType.TRANSFORMER
    requires_equipment: ClassVar[bool] = True
    parent_types: ClassVar[Tuple[BlockType, ...]] = (BlockType.LOCATION,)


@dataclass
class AlternatorBlock(Block):
    equipment: Optional[Alternator] = None

    block_type: ClassVar[BlockType] = BlockType.ALTERNATOR
    requires_equipment: ClassVar[bool] = True


@dataclass
class Load(Block):
    equipment: Optional[Consumer] = None

    block_type: ClassVar[BlockType] = BlockType.LOAD
    requires_equipment: ClassVar[bool] = True
    parent_types: ClassVar[Tuple[BlockType, ...]] = (BlockType.LOCATION,)


@dataclass
class Terminal(Block):
    side: int = 0

    block_type: ClassVar[BlockType] = BlockType.TERMINAL
    parent_types: ClassVar[Tuple[BlockType, ...]] = (
        BlockType.LOCATION,
        BlockType.TRANSFORMER,
        BlockType.CONDUCTOR,
        BlockType.ROW,
        BlockType.EXTERNAL_BUSBAR,
    )


@dataclass
class Row(Block):
    protection: str = "Pin"
    rating: Optional[int] = None

    block_type: ClassVar[BlockType] = BlockType.ROW
    parent_types: ClassVar[Tuple[BlockType, ...]] = (BlockType.BUSBAR,)
    requires_parent: ClassVar[bool] = True

    @property
    def is_circuit_breaker(self) -> bool:
        return self.protection == "CircuitBreaker"


@dataclass
class Busbar(Block):
    block_type: ClassVar[BlockType] = BlockType.BUSBAR
    parent_types: ClassVar[Tuple[BlockType, ...]] = (BlockType.LOCATION,)


@dataclass
class Location(Block):
    block_type: ClassVar[BlockType] = BlockType.LOCATION


@dataclass
class ExternalBusbar(Block):
    block_type: ClassVar[BlockType] = BlockType.EXTERNAL_BUSBAR


BLOCK_CLASSES = {
    cls.block_type: cls
    for cls in (
        Supply,
        ConductorBlock,
        TransformerUPSBlock,
        AlternatorBlock,
        Load,
        Terminal,
        Row,
        Busbar,
        Location,
        ExternalBusbar,
    )
}


__all__ = [
    "BlockType",
    "Conductor",
    "TransformerUPS",
    "Alternator",
    "Consumer",
    "Equipment",
    "Block",
    "Supply",
    "ConductorBlock",
    "TransformerUPSBlock",
    "AlternatorBlock",
    "Load",
    "Terminal",
    "Row",
    "Busbar",
    "Location",
    "ExternalBusbar",
    "BLOCK_CLASSES",
]
