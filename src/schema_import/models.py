"""
Core data models for the schema_import package.

Defines the catalog snapshot produced by the catalog inspectors (tables,
columns, indexes, foreign keys), the derived entity graph produced by the
inference engine, and the configuration object threaded through a run.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml


@dataclass
class ColumnMetadata:
    """Metadata for a single column."""
    name: str
    data_type: str  # Native type as reported by the catalog
    nullable: bool = True
    comment: Optional[str] = None
    default_value: Optional[Any] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    max_length: Optional[int] = None
    enum_values: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "data_type": self.data_type,
            "nullable": self.nullable,
            "comment": self.comment,
            "default_value": self.default_value,
            "precision": self.precision,
            "scale": self.scale,
            "max_length": self.max_length,
            "enum_values": self.enum_values,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ColumnMetadata:
        """Create from dictionary."""
        return cls(
            name=data["name"],
            data_type=data["data_type"],
            nullable=data.get("nullable", True),
            comment=data.get("comment"),
            default_value=data.get("default_value"),
            precision=data.get("precision"),
            scale=data.get("scale"),
            max_length=data.get("max_length"),
            enum_values=data.get("enum_values"),
        )


@dataclass
class IndexMetadata:
    """Metadata for a table index."""
    name: str
    columns: List[str] = field(default_factory=list)
    unique: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "columns": self.columns, "unique": self.unique}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> IndexMetadata:
        return cls(
            name=data["name"],
            columns=list(data.get("columns", [])),
            unique=data.get("unique", False),
        )


@dataclass
class ForeignKeyMetadata:
    """A foreign key constraint declared on a table."""
    name: str
    columns: List[str]
    ref_table: str
    ref_columns: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "columns": self.columns,
            "ref_table": self.ref_table,
            "ref_columns": self.ref_columns,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ForeignKeyMetadata:
        return cls(
            name=data["name"],
            columns=list(data["columns"]),
            ref_table=data["ref_table"],
            ref_columns=list(data.get("ref_columns", [])),
        )


@dataclass
class TableMetadata:
    """Metadata for a database table."""
    name: str
    schema: Optional[str] = None
    columns: List[ColumnMetadata] = field(default_factory=list)
    primary_key: List[str] = field(default_factory=list)
    indexes: List[IndexMetadata] = field(default_factory=list)
    foreign_keys: List[ForeignKeyMetadata] = field(default_factory=list)
    comment: Optional[str] = None

    @property
    def full_name(self) -> str:
        """Return schema-qualified table name."""
        return f"{self.schema}.{self.name}" if self.schema else self.name

    @property
    def column_names(self) -> List[str]:
        """Return list of column names."""
        return [c.name for c in self.columns]

    def get_column(self, name: str) -> Optional[ColumnMetadata]:
        """Get column by name (case-insensitive)."""
        name_lower = name.lower()
        for col in self.columns:
            if col.name.lower() == name_lower:
                return col
        return None

    def is_primary_key_column(self, name: str) -> bool:
        return name.lower() in {c.lower() for c in self.primary_key}

    def fk_column_names(self) -> List[str]:
        """Return the union of all foreign key columns, in discovery order."""
        names: List[str] = []
        for fk in self.foreign_keys:
            for col in fk.columns:
                if col not in names:
                    names.append(col)
        return names

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "schema": self.schema,
            "columns": [c.to_dict() for c in self.columns],
            "primary_key": self.primary_key,
            "indexes": [i.to_dict() for i in self.indexes],
            "foreign_keys": [fk.to_dict() for fk in self.foreign_keys],
            "comment": self.comment,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TableMetadata:
        """Create from dictionary."""
        return cls(
            name=data["name"],
            schema=data.get("schema"),
            columns=[ColumnMetadata.from_dict(c) for c in data.get("columns", [])],
            primary_key=list(data.get("primary_key") or []),
            indexes=[IndexMetadata.from_dict(i) for i in data.get("indexes", [])],
            foreign_keys=[ForeignKeyMetadata.from_dict(fk) for fk in data.get("foreign_keys", [])],
            comment=data.get("comment"),
        )


@dataclass
class SchemaMetadata:
    """Snapshot of an inspected schema, as returned by a catalog inspector."""
    name: Optional[str] = None
    tables: List[TableMetadata] = field(default_factory=list)

    @property
    def table_names(self) -> List[str]:
        return [t.name for t in self.tables]

    def get_table(self, name: str) -> Optional[TableMetadata]:
        """Get table by name (case-insensitive)."""
        name_lower = name.lower()
        for table in self.tables:
            if table.name.lower() == name_lower:
                return table
        return None

    def restrict(self, names: List[str]) -> SchemaMetadata:
        """Return a snapshot limited to the given tables, keeping catalog order."""
        wanted = {n.lower() for n in names}
        return SchemaMetadata(
            name=self.name,
            tables=[t for t in self.tables if t.name.lower() in wanted],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "tables": [t.to_dict() for t in self.tables],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SchemaMetadata:
        return cls(
            name=data.get("name"),
            tables=[TableMetadata.from_dict(t) for t in data.get("tables", [])],
        )


class FieldType(str, Enum):
    """Semantic field types understood by schema serializers."""
    BOOL = "bool"
    BYTES = "bytes"
    ENUM = "enum"
    FLOAT = "float"
    FLOAT32 = "float32"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    JSON = "json"
    STRING = "string"
    TIME = "time"
    UUID = "uuid"


class EdgeDirection(str, Enum):
    """Edge ownership: TO points at the target, FROM is the inverse side."""
    TO = "to"
    FROM = "from"


class RelationType(str, Enum):
    O2O = "O2O"
    O2M = "O2M"
    M2M = "M2M"


@dataclass(frozen=True)
class FieldDescriptor:
    """A typed entity field derived from one column."""
    name: str
    type: FieldType
    optional: bool = False
    unique: bool = False
    comment: Optional[str] = None
    storage_key: Optional[str] = None
    enum_values: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "type": self.type.value}
        if self.optional:
            data["optional"] = True
        if self.unique:
            data["unique"] = True
        if self.comment:
            data["comment"] = self.comment
        if self.storage_key:
            data["storage_key"] = self.storage_key
        if self.enum_values:
            data["enum_values"] = list(self.enum_values)
        return data


@dataclass(frozen=True)
class EdgeDescriptor:
    """A directional relationship from one entity to another."""
    direction: EdgeDirection
    name: str
    target: str
    relation: RelationType
    unique: bool = False
    ref: Optional[str] = None
    field: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "direction": self.direction.value,
            "name": self.name,
            "target": self.target,
            "relation": self.relation.value,
        }
        if self.unique:
            data["unique"] = True
        if self.ref:
            data["ref"] = self.ref
        if self.field:
            data["field"] = self.field
        return data


@dataclass(frozen=True)
class Entity:
    """A derived entity: one non-join table with its fields and edges."""
    name: str
    table: str
    fields: Tuple[FieldDescriptor, ...] = ()
    edges: Tuple[EdgeDescriptor, ...] = ()

    def get_field(self, name: str) -> Optional[FieldDescriptor]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def get_edge(self, name: str) -> Optional[EdgeDescriptor]:
        for e in self.edges:
            if e.name == name:
                return e
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "table": self.table,
            "fields": [f.to_dict() for f in self.fields],
            "edges": [e.to_dict() for e in self.edges],
        }


class SchemaMutations(Mapping):
    """
    Ordered, read-only mapping of entity name to Entity.

    This is the sole output of an inference run and the input of the
    serialization step.
    """

    def __init__(self, entities: Optional[List[Entity]] = None):
        self._entities: Dict[str, Entity] = {e.name: e for e in entities or []}

    def __getitem__(self, name: str) -> Entity:
        return self._entities[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __repr__(self) -> str:
        return f"SchemaMutations({list(self._entities)})"

    @property
    def edge_count(self) -> int:
        return sum(len(e.edges) for e in self._entities.values())

    def to_dict(self) -> Dict[str, Any]:
        return {name: e.to_dict() for name, e in self._entities.items()}


@dataclass
class ImportConfig:
    """Configuration for an import run."""
    schema: Optional[str] = None  # Search path passed verbatim to the inspector
    tables: List[str] = field(default_factory=list)  # Allow-list, empty means all
    dsn: Optional[str] = None
    output_dir: Optional[Path] = None

    def __post_init__(self):
        if isinstance(self.tables, str):
            self.tables = [t.strip() for t in self.tables.split(",") if t.strip()]
        if isinstance(self.output_dir, str):
            self.output_dir = Path(self.output_dir)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ImportConfig:
        return cls(
            schema=data.get("schema"),
            tables=data.get("tables") or [],
            dsn=data.get("dsn"),
            output_dir=data.get("output_dir"),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> ImportConfig:
        """Load configuration from a YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)
