"""Pydantic models describing the project document."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError, model_validator

from sigpower.errors import ProjectSchemaError
from sigpower.schema.blocks import (
    Alternator,
    AlternatorBlock,
    Block,
    Busbar,
    Conductor,
    ConductorBlock,
    Consumer,
    ExternalBusbar,
    Load,
    Location,
    Row,
    Supply,
    Terminal,
    TransformerUPS,
    TransformerUPSBlock,
)
from sigpower.schema.catalog import Catalog, CatalogLookupError, standard_conductors
from sigpower.schema.project import Connection, Project


class _BaseModel(BaseModel):
    model_config = {
        "populate_by_name": True,
        "extra": "forbid",
    }


class ConductorModel(_BaseModel):
    name: str
    cores: int = Field(ge=0)
    cross_sectional_area: float = Field(ge=0)
    voltage_drop_60: float = Field(default=0.0, ge=0)
    voltage_drop_90: float = Field(ge=0)
    resistance_60: float = Field(default=0.0, ge=0)
    resistance_90: float = Field(ge=0)
    reactance: float = Field(ge=0)
    description: str = Field(default="", max_length=150)

    def to_dataclass(self) -> Conductor:
        return Conductor(**self.model_dump())


class TransformerModel(_BaseModel):
    name: str
    rating: float = Field(gt=0)
    percentage_z: float = Field(ge=0)
    primary_voltage: float = Field(gt=0)
    secondary_voltage: float = Field(gt=0)
    description: str = Field(default="", max_length=150)

    def to_dataclass(self) -> TransformerUPS:
        return TransformerUPS(**self.model_dump())


class AlternatorModel(_BaseModel):
    name: str
    rating_va: float = Field(default=0.0, ge=0)
    rating_w: float = Field(default=0.0, ge=0)
    description: str = Field(default="", max_length=150)

    def to_dataclass(self) -> Alternator:
        return Alternator(**self.model_dump())


class ConsumerModel(_BaseModel):
    name: str = Field(max_length=150)
    load: float = Field(ge=0)
    description: str = Field(default="", max_length=150)

    def to_dataclass(self) -> Consumer:
        return Consumer(**self.model_dump())


class CatalogModel(_BaseModel):
    conductors: List[ConductorModel] = Field(default_factory=list)
    transformers: List[TransformerModel] = Field(default_factory=list)
    alternators: List[AlternatorModel] = Field(default_factory=list)
    consumers: List[ConsumerModel] = Field(default_factory=list)
    include_standard_conductors: bool = False

    def to_dataclass(self) -> Catalog:
        conductors = [item.to_dataclass() for item in self.conductors]
        if self.include_standard_conductors:
            conductors.extend(standard_conductors())
        return Catalog(
            conductors=conductors,
            transformers=[item.to_dataclass() for item in self.transformers],
            alternators=[item.to_dataclass() for item in self.alternators],
            consumers=[item.to_dataclass() for item in self.consumers],
        )


class _BlockModel(_BaseModel):
    id: int
    name: str = ""
    parent_id: int = -1

    def _common(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "parent_id": self.parent_id}

    def to_dataclass(self, catalog: Catalog) -> Block:  # pragma: no cover - interface
        raise NotImplementedError


class SupplyModel(_BlockModel):
    type: Literal["Supply"]
    voltage: float = Field(default=230.0, gt=0)
    impedance: float = Field(default=1.6, ge=0)

    def to_dataclass(self, catalog: Catalog) -> Supply:
        return Supply(voltage=self.voltage, impedance=self.impedance, **self._common())


class ConductorBlockModel(_BlockModel):
    type: Literal["ConductorBlock"]
    length: float = Field(default=0.0, ge=0)
    equipment: Optional[str] = None

    def to_dataclass(self, catalog: Catalog) -> ConductorBlock:
        equipment = catalog.lookup("conductor", self.equipment) if self.equipment else None
        return ConductorBlock(length=self.length, equipment=equipment, **self._common())


class TransformerBlockModel(_BlockModel):
    type: Literal["TransformerUPSBlock"]
    equipment: Optional[str] = None

    def to_dataclass(self, catalog: Catalog) -> TransformerUPSBlock:
        equipment = catalog.lookup("transformer", self.equipment) if self.equipment else None
        return TransformerUPSBlock(equipment=equipment, **self._common())


class AlternatorBlockModel(_BlockModel):
    type: Literal["AlternatorBlock"]
    equipment: Optional[str] = None

    def to_dataclass(self, catalog: Catalog) -> AlternatorBlock:
        equipment = catalog.lookup("alternator", self.equipment) if self.equipment else None
        return AlternatorBlock(equipment=equipment, **self._common())


class LoadModel(_BlockModel):
    type: Literal["Load"]
    equipment: Optional[str] = None

    def to_dataclass(self, catalog: Catalog) -> Load:
        equipment = catalog.lookup("consumer", self.equipment) if self.equipment else None
        return Load(equipment=equipment, **self._common())


class TerminalModel(_BlockModel):
    type: Literal["Terminal"]
    side: int = Field(default=0, ge=0)

    def to_dataclass(self, catalog: Catalog) -> Terminal:
        return Terminal(side=self.side, **self._common())


class RowModel(_BlockModel):
    type: Literal["Row"]
    protection: Literal["Pin", "CircuitBreaker"] = "Pin"
    rating: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_rating_needs_breaker(self) -> "RowModel":
        if self.rating is not None and self.protection != "CircuitBreaker":
            raise ValueError("'Pin' type does not have a rating.")
        return self

    def to_dataclass(self, catalog: Catalog) -> Row:
        rating = self.rating
        if self.protection == "CircuitBreaker" and rating is None:
            rating = 0
        return Row(protection=self.protection, rating=rating, **self._common())


class BusbarModel(_BlockModel):
    type: Literal["Busbar"]

    def to_dataclass(self, catalog: Catalog) -> Busbar:
        return Busbar(**self._common())


class LocationModel(_BlockModel):
    type: Literal["Location"]

    def to_dataclass(self, catalog: Catalog) -> Location:
        return Location(**self._common())


class ExternalBusbarModel(_BlockModel):
    type: Literal["ExternalBusbar"]

    def to_dataclass(self, catalog: Catalog) -> ExternalBusbar:
        return ExternalBusbar(**self._common())


BlockModel = Annotated[
    Union[
        SupplyModel,
        ConductorBlockModel,
        TransformerBlockModel,
        AlternatorBlockModel,
        LoadModel,
        TerminalModel,
        RowModel,
        BusbarModel,
        LocationModel,
        ExternalBusbarModel,
    ],
    Field(discriminator="type"),
]


class ConnectionModel(_BaseModel):
    left: int
    right: int

    @model_validator(mode="before")
    @classmethod
    def coerce_pair(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                raise ValueError("Connection pairs must contain exactly two block IDs")
            return {"left": data[0], "right": data[1]}
        return data

    def to_dataclass(self) -> Connection:
        return Connection(left_id=self.left, right_id=self.right)


class ProjectModel(_BaseModel):
    name: str = Field(default="Untitled", max_length=100)
    schema_version: str = "0.1.0"
    catalog: CatalogModel = Field(default_factory=CatalogModel)
    blocks: List[BlockModel]
    connections: List[ConnectionModel] = Field(default_factory=list)

    def to_project(self) -> Project:
        catalog = self.catalog.to_dataclass()
        return Project(
            blocks=[block.to_dataclass(catalog) for block in self.blocks],
            connections=[connection.to_dataclass() for connection in self.connections],
            catalog=catalog,
            name=self.name,
        )


def load_project(data: Dict[str, Any]) -> Project:
    """Validate a project dictionary and return a :class:`Project` instance."""
    try:
        model = ProjectModel.model_validate(data)
    except ValidationError as exc:
        raise ProjectSchemaError(str(exc)) from exc
    try:
        return model.to_project()
    except CatalogLookupError as exc:
        raise ProjectSchemaError(exc.args[0]) from exc


def load_project_file(path: Union[str, Path]) -> Project:
    """Load and validate a project definition from a JSON file."""
    with open(path, "r", encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as exc:
            raise ProjectSchemaError(f"Invalid project JSON in {path}: {exc}") from exc
    return load_project(data)


def ensure_project(project: Union[Project, Dict[str, Any], str, Path]) -> Project:
    """Accept a Project, a dict, JSON text or a path to a JSON file."""
    if isinstance(project, Project):
        return project
    if isinstance(project, str):
        stripped = project.strip()
        if stripped.startswith("{"):
            try:
                data = json.loads(project)
            except json.JSONDecodeError as exc:
                raise ProjectSchemaError(f"Invalid project JSON: {exc}") from exc
            return load_project(data)
        return load_project_file(project)
    if isinstance(project, Path):
        return load_project_file(project)
    if isinstance(project, dict):
        return load_project(project)
    raise TypeError("Unsupported project payload")


__all__ = [
    "ProjectModel",
    "CatalogModel",
    "BlockModel",
    "ConnectionModel",
    "load_project",
    "load_project_file",
    "ensure_project",
]
