"""
Schema Import - Entity schema inference from relational database catalogs

Inspects a database catalog (tables, columns, indexes, foreign keys) and
derives entities, typed fields and directional relationship edges, ready to
be rendered as object-relational schema definitions.

Features:
- Field typing with optional/unique/comment/storage-key modifiers
- O2O, O2M and M2M relationship inference from foreign keys and indexes
- Implicit join table detection
- Self-reference disambiguation with child_/parent_ edge names
- Oracle, PostgreSQL/MySQL (SQLAlchemy) and snapshot-file catalog sources
"""

__version__ = "0.1.0"

from schema_import.models import (
    ColumnMetadata,
    EdgeDescriptor,
    EdgeDirection,
    Entity,
    FieldDescriptor,
    FieldType,
    ForeignKeyMetadata,
    ImportConfig,
    IndexMetadata,
    RelationType,
    SchemaMetadata,
    SchemaMutations,
    TableMetadata,
)
from schema_import.errors import (
    DuplicateEntityError,
    JoinTableReferenceError,
    MissingReferencedTableError,
    SchemaImportError,
    UnsupportedTypeError,
)
from schema_import.inference import EntityGraphBuilder
from schema_import.importer import SchemaImporter, import_schema

__all__ = [
    # Catalog model
    "ColumnMetadata",
    "ForeignKeyMetadata",
    "IndexMetadata",
    "SchemaMetadata",
    "TableMetadata",
    # Derived model
    "EdgeDescriptor",
    "EdgeDirection",
    "Entity",
    "FieldDescriptor",
    "FieldType",
    "RelationType",
    "SchemaMutations",
    "ImportConfig",
    # Errors
    "SchemaImportError",
    "UnsupportedTypeError",
    "MissingReferencedTableError",
    "DuplicateEntityError",
    "JoinTableReferenceError",
    # Inference
    "EntityGraphBuilder",
    "SchemaImporter",
    "import_schema",
]
