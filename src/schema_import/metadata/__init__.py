"""
Catalog inspectors for Oracle, SQLAlchemy-supported databases and snapshot files.

Provides a single interface to read table metadata, column definitions,
indexes and foreign keys from database catalogs.
"""

from schema_import.metadata.base import CatalogInspector
from schema_import.metadata.file import FileCatalogInspector, load_snapshot, save_snapshot
from schema_import.metadata.oracle import OracleCatalogInspector

__all__ = [
    "CatalogInspector",
    "FileCatalogInspector",
    "OracleCatalogInspector",
    "get_sqlalchemy_inspector",
    "load_snapshot",
    "save_snapshot",
]


def get_sqlalchemy_inspector(dsn: str):
    """Create a SQLAlchemyCatalogInspector (imports SQLAlchemy lazily)."""
    from schema_import.metadata.reflection import SQLAlchemyCatalogInspector
    return SQLAlchemyCatalogInspector(dsn)
