"""
Errors raised by the inference engine.

Catalog inspector failures (driver and connection errors) are not wrapped;
they propagate to the caller unchanged.
"""

from __future__ import annotations

from typing import List


class SchemaImportError(Exception):
    """Base class for fatal inference errors."""


class UnsupportedTypeError(SchemaImportError):
    """A column's native type has no semantic field mapping."""

    def __init__(self, table: str, column: str, data_type: str):
        self.table = table
        self.column = column
        self.data_type = data_type
        super().__init__(
            f"unsupported type {data_type!r} for column {table}.{column}"
        )


class MissingReferencedTableError(SchemaImportError):
    """A join table references tables outside the inspected set."""

    def __init__(self, join_table: str, missing: List[str]):
        self.join_table = join_table
        self.missing = list(missing)
        super().__init__(
            f"join table {join_table!r} references tables that were not inspected: "
            f"{', '.join(self.missing)}. Join tables must be inspected with their "
            f"referenced tables - add them to the `tables` selection"
        )


class DuplicateEntityError(SchemaImportError):
    """Two tables map to the same entity name."""

    def __init__(self, entity: str, tables: List[str]):
        self.entity = entity
        self.tables = list(tables)
        super().__init__(
            f"tables {', '.join(self.tables)} all map to entity {entity!r}"
        )


class JoinTableReferenceError(SchemaImportError):
    """A join table references another join table instead of an entity table."""

    def __init__(self, join_table: str, referenced: List[str]):
        self.join_table = join_table
        self.referenced = list(referenced)
        super().__init__(
            f"join table {join_table!r} references join tables "
            f"{', '.join(self.referenced)}, which do not become entities; "
            f"give the referenced tables their own primary key to keep them as entities"
        )
