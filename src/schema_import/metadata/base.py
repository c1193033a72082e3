"""
Catalog inspector interface.

One concrete inspector exists per supported database engine; the inference
engine only depends on ``inspect_schema``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from schema_import.models import SchemaMetadata


class CatalogInspector(ABC):
    """Reads table, column, index and foreign key metadata for a schema."""

    default_schema: Optional[str] = None

    def connect(self) -> None:
        """Open any connection the inspector needs."""

    def disconnect(self) -> None:
        """Release the connection opened by connect()."""

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()

    @abstractmethod
    def inspect_schema(
        self,
        schema: Optional[str] = None,
        tables: Optional[List[str]] = None,
    ) -> SchemaMetadata:
        """
        Inspect a schema.

        Args:
            schema: Schema/search path name, or None for the inspector's default
            tables: Optional allow-list of table names

        Returns:
            SchemaMetadata snapshot of the inspected tables
        """
