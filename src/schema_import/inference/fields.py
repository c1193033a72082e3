"""
Field mapper: converts catalog columns into typed field descriptors.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional

from schema_import.errors import UnsupportedTypeError
from schema_import.models import (
    ColumnMetadata,
    FieldDescriptor,
    FieldType,
    IndexMetadata,
    TableMetadata,
)

logger = logging.getLogger(__name__)

# Canonical name of the identifier field
ID_FIELD = "id"


# Native type mapping (PostgreSQL, MySQL and Oracle spellings)
TYPE_MAP: Dict[str, FieldType] = {
    # Integers
    "smallint": FieldType.INT16,
    "int2": FieldType.INT16,
    "smallserial": FieldType.INT16,
    "serial2": FieldType.INT16,
    "integer": FieldType.INT,
    "int": FieldType.INT,
    "int4": FieldType.INT,
    "serial": FieldType.INT,
    "serial4": FieldType.INT,
    "mediumint": FieldType.INT32,
    "bigint": FieldType.INT64,
    "int8": FieldType.INT64,
    "bigserial": FieldType.INT64,
    "serial8": FieldType.INT64,
    "tinyint": FieldType.INT8,
    # Floating point and fixed precision
    "real": FieldType.FLOAT32,
    "float4": FieldType.FLOAT32,
    "binary_float": FieldType.FLOAT32,
    "float": FieldType.FLOAT,
    "float8": FieldType.FLOAT,
    "double": FieldType.FLOAT,
    "double precision": FieldType.FLOAT,
    "binary_double": FieldType.FLOAT,
    "numeric": FieldType.FLOAT,
    "decimal": FieldType.FLOAT,
    "number": FieldType.FLOAT,
    # Booleans
    "boolean": FieldType.BOOL,
    "bool": FieldType.BOOL,
    "bit": FieldType.BOOL,
    # Strings
    "character varying": FieldType.STRING,
    "varchar": FieldType.STRING,
    "varchar2": FieldType.STRING,
    "nvarchar2": FieldType.STRING,
    "character": FieldType.STRING,
    "char": FieldType.STRING,
    "nchar": FieldType.STRING,
    "bpchar": FieldType.STRING,
    "text": FieldType.STRING,
    "tinytext": FieldType.STRING,
    "mediumtext": FieldType.STRING,
    "longtext": FieldType.STRING,
    "citext": FieldType.STRING,
    "clob": FieldType.STRING,
    "nclob": FieldType.STRING,
    "long": FieldType.STRING,
    # Date and time
    "date": FieldType.TIME,
    "datetime": FieldType.TIME,
    "time": FieldType.TIME,
    "timetz": FieldType.TIME,
    "time with time zone": FieldType.TIME,
    "time without time zone": FieldType.TIME,
    "timestamp": FieldType.TIME,
    "timestamptz": FieldType.TIME,
    "timestamp with time zone": FieldType.TIME,
    "timestamp without time zone": FieldType.TIME,
    "timestamp with local time zone": FieldType.TIME,
    # Binary
    "bytea": FieldType.BYTES,
    "binary": FieldType.BYTES,
    "varbinary": FieldType.BYTES,
    "blob": FieldType.BYTES,
    "tinyblob": FieldType.BYTES,
    "mediumblob": FieldType.BYTES,
    "longblob": FieldType.BYTES,
    "raw": FieldType.BYTES,
    "long raw": FieldType.BYTES,
    # Other
    "json": FieldType.JSON,
    "jsonb": FieldType.JSON,
    "uuid": FieldType.UUID,
    "enum": FieldType.ENUM,
}

_TYPE_PARAMS = re.compile(r"\([^)]*\)")


def normalize_type(data_type: str) -> str:
    """Lower-case a native type and strip size/precision parameters."""
    name = _TYPE_PARAMS.sub("", data_type.lower())
    name = name.replace("unsigned", "").replace("zerofill", "")
    return " ".join(name.split())


def map_type(table: TableMetadata, column: ColumnMetadata) -> FieldType:
    """Map a column's native type to a semantic field type."""
    native = normalize_type(column.data_type)
    if native not in TYPE_MAP:
        raise UnsupportedTypeError(table.name, column.name, column.data_type)

    # Oracle NUMBER(p, 0) is an integer
    if native == "number" and column.scale == 0:
        if column.precision is not None and column.precision <= 9:
            return FieldType.INT
        return FieldType.INT64

    return TYPE_MAP[native]


def unique_index_for(table: TableMetadata, column: str) -> Optional[IndexMetadata]:
    """
    Return the single-column unique index covering a column, if any.

    Composite unique indexes and the index backing the primary key are
    ignored.
    """
    pk = [c.lower() for c in table.primary_key]
    for index in table.indexes:
        if not index.unique or len(index.columns) != 1:
            continue
        if [c.lower() for c in index.columns] == pk:
            continue
        if index.columns[0].lower() == column.lower():
            return index
    return None


def is_unique_column(table: TableMetadata, column: str) -> bool:
    return unique_index_for(table, column) is not None


def field_name(table: TableMetadata, column: str) -> str:
    """Logical field name of a column, accounting for a renamed primary key."""
    if len(table.primary_key) == 1 and table.primary_key[0].lower() == column.lower():
        return ID_FIELD
    return column


def map_column(table: TableMetadata, column: ColumnMetadata) -> FieldDescriptor:
    """Build the field descriptor for one column of a table."""
    field_type = map_type(table, column)
    in_pk = table.is_primary_key_column(column.name)

    name = column.name
    storage_key = None
    if len(table.primary_key) == 1 and in_pk and column.name != ID_FIELD:
        name = ID_FIELD
        storage_key = column.name

    comment = column.comment if column.comment and column.comment.strip() else None

    return FieldDescriptor(
        name=name,
        type=field_type,
        optional=column.nullable and not in_pk,
        unique=is_unique_column(table, column.name),
        comment=comment,
        storage_key=storage_key,
        enum_values=tuple(column.enum_values or ()),
    )


def map_columns(table: TableMetadata) -> List[FieldDescriptor]:
    """Map every column of a table, in column order."""
    fields = [map_column(table, column) for column in table.columns]
    logger.debug(f"Mapped {len(fields)} fields for table {table.name}")
    return fields
