"""Equipment catalog lookups, including the bundled conductor stub table."""
from __future__ import annotations

import csv
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from sigpower.schema.blocks import Alternator, Conductor, Consumer, Equipment, TransformerUPS


class CatalogLookupError(KeyError):
    """Raised when an equipment name is not present in the catalog."""


_TABLE_DIR = Path(__file__).resolve().parent.parent / "tables"


def _load_table(filename: str) -> Iterable[Dict[str, str]]:
    path = _TABLE_DIR / filename
    with open(path, "r", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        for row in reader:
            yield row


@lru_cache(maxsize=1)
def standard_conductors() -> Tuple[Conductor, ...]:
    """Conductors from the bundled placeholder table, ordered by size."""
    conductors = []
    for row in _load_table("conductors_stub.csv"):
        conductors.append(
            Conductor(
                name=row["name"].strip(),
                cores=int(row["cores"]),
                cross_sectional_area=float(row["area_mm2"]),
                voltage_drop_60=float(row["vd60"]),
                voltage_drop_90=float(row["vd90"]),
                resistance_60=float(row["r60"]),
                resistance_90=float(row["r90"]),
                reactance=float(row["x"]),
            )
        )
    return tuple(conductors)


@dataclass
class Catalog:
    conductors: List[Conductor] = field(default_factory=list)
    transformers: List[TransformerUPS] = field(default_factory=list)
    alternators: List[Alternator] = field(default_factory=list)
    consumers: List[Consumer] = field(default_factory=list)

    def find_conductor(self, max_rate: float) -> Optional[Conductor]:
        """Return the conductor with the largest 90 degC drop not exceeding ``max_rate``."""
        suitable = [c for c in self.conductors if c.voltage_drop_90 <= max_rate]
        if not suitable:
            return None
        return max(suitable, key=lambda c: c.voltage_drop_90)

    def lookup(self, kind: str, name: str) -> Equipment:
        items: Dict[str, List] = {
            "conductor": self.conductors,
            "transformer": self.transformers,
            "alternator": self.alternators,
            "consumer": self.consumers,
        }
        for item in items[kind]:
            if item.name == name:
                return item
        raise CatalogLookupError(f"No {kind} named '{name}' in the equipment catalog")


__all__ = ["Catalog", "CatalogLookupError", "standard_conductors"]
