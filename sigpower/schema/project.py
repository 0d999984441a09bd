"""Read-only block graph queried by the calculation engine."""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Tuple

from sigpower.errors import BlockNotFoundError, GraphStructureError
from sigpower.schema.blocks import (
    Block,
    BlockType,
    ExternalBusbar,
    Location,
    Row,
    Terminal,
    TransformerUPSBlock,
)
from sigpower.schema.catalog import Catalog


@dataclass(frozen=True)
class Connection:
    """Undirected link between two blocks."""

    left_id: int
    right_id: int

    def other(self, block_id: int) -> int:
        return self.right_id if self.left_id == block_id else self.left_id


class Project:
    """Blocks, connections and the equipment catalog of one design."""

    def __init__(
        self,
        blocks: Iterable[Block],
        connections: Iterable[Connection] = (),
        catalog: Optional[Catalog] = None,
        name: str = "Untitled",
    ) -> None:
        self.name = name
        self.catalog = catalog or Catalog()
        self._blocks: Dict[int, Block] = {}
        for block in blocks:
            if block.id in self._blocks:
                raise GraphStructureError(f"Block with ID '{block.id}' already exists in the project.")
            self._blocks[block.id] = block
        for block in self._blocks.values():
            self._check_parent(block)

        self._adjacency: Dict[int, List[Connection]] = defaultdict(list)
        seen: Set[Tuple[int, int]] = set()
        for connection in connections:
            left, right = connection.left_id, connection.right_id
            if left == right:
                raise GraphStructureError(f"Cannot connect block {left} to itself.")
            self.get_block(left)
            self.get_block(right)
            key = (min(left, right), max(left, right))
            if key in seen:
                raise GraphStructureError(f"Connection between {left} and {right} already exists.")
            seen.add(key)
            self._adjacency[left].append(connection)
            self._adjacency[right].append(connection)

    @property
    def blocks(self) -> List[Block]:
        return list(self._blocks.values())

    def _check_parent(self, block: Block) -> None:
        if block.parent_id < 0:
            if block.requires_parent:
                raise GraphStructureError(
                    f"{block.block_type.value} with ID '{block.id}' must belong to a parent block."
                )
            return
        parent = self._blocks.get(block.parent_id)
        if parent is None:
            raise GraphStructureError(f"Parent block with ID '{block.parent_id}' does not exist in the project.")
        if block.parent_types and parent.block_type not in block.parent_types:
            allowed = ", ".join(kind.value for kind in block.parent_types)
            raise GraphStructureError(
                f"Parent block with ID '{block.parent_id}' of {block.block_type.value} '{block.id}' "
                f"must be one of: {allowed}."
            )

    def get_block(self, block_id: int) -> Block:
        try:
            return self._blocks[block_id]
        except KeyError:
            raise BlockNotFoundError(block_id) from None

    def get_connections(self, block_id: int) -> List[Connection]:
        return list(self._adjacency.get(block_id, []))

    def sources(self) -> List[Block]:
        return [block for block in self.blocks if block.block_type is BlockType.SUPPLY]

    def rows_of(self, busbar_id: int) -> List[Row]:
        return [
            block
            for block in self._blocks.values()
            if isinstance(block, Row) and block.parent_id == busbar_id
        ]

    def row_index(self, row: Row) -> int:
        for index, candidate in enumerate(self.rows_of(row.parent_id)):
            if candidate.id == row.id:
                return index
        raise GraphStructureError(f"Row with ID '{row.id}' not found in busbar {row.parent_id}.")

    def _parent(self, block: Block) -> Optional[Block]:
        if block.parent_id < 0:
            return None
        return self._blocks.get(block.parent_id)

    def display_name(self, block: Block) -> str:
        """Human readable name used on reports."""
        if isinstance(block, Row):
            return self._parent(block).name.strip()
        if isinstance(block, Terminal):
            return self._terminal_name(block)
        name = block.name.strip()
        return name or f"Block {block.id}"

    def _terminal_name(self, terminal: Terminal) -> str:
        parent = self._parent(terminal)
        if isinstance(parent, (Location, TransformerUPSBlock, ExternalBusbar)):
            return f"{parent.name.strip()} T{terminal.side}"
        if isinstance(parent, Row):
            busbar = self._parent(parent)
            return f"{busbar.name.strip()} Row {self.row_index(parent)} T{terminal.side}"
        return "Position"


__all__ = ["Connection", "Project"]
