"""
Import pipeline - inspect a schema once and infer its schema mutations.

    from schema_import import ImportConfig, SchemaImporter
    from schema_import.metadata import get_sqlalchemy_inspector

    config = ImportConfig(schema="public", tables=["users", "pets"])
    with get_sqlalchemy_inspector("postgresql://localhost/app") as inspector:
        mutations = SchemaImporter(inspector, config).schema_mutations()
"""

from __future__ import annotations

import logging
from typing import Optional

from schema_import.errors import SchemaImportError
from schema_import.inference import EntityGraphBuilder
from schema_import.metadata.base import CatalogInspector
from schema_import.models import ImportConfig, SchemaMetadata, SchemaMutations

logger = logging.getLogger(__name__)


class SchemaImporter:
    """
    Runs one inference pass against a catalog inspector.

    The inspector is called exactly once per run with the configured schema
    name, passed through verbatim. Inference is all-or-nothing: on any error
    no mutations are returned.
    """

    def __init__(
        self,
        inspector: CatalogInspector,
        config: Optional[ImportConfig] = None,
    ):
        self.inspector = inspector
        self.config = config or ImportConfig()

    def inspect(self) -> SchemaMetadata:
        """Read the catalog snapshot, restricted to the configured tables."""
        tables = self.config.tables or None
        metadata = self.inspector.inspect_schema(self.config.schema, tables)
        if tables:
            metadata = metadata.restrict(tables)
        logger.info(
            f"Inspected schema {self.config.schema or metadata.name or '<default>'}: "
            f"{len(metadata.tables)} tables"
        )
        return metadata

    def schema_mutations(self) -> SchemaMutations:
        """
        Inspect the schema and infer its entities.

        Raises:
            SchemaImportError: inference failed (unsupported type, missing
                referenced table, duplicate entity)
            Exception: catalog inspector errors propagate unchanged
        """
        metadata = self.inspect()
        try:
            return EntityGraphBuilder(metadata).build()
        except SchemaImportError as e:
            logger.error(f"Schema import failed: {e}")
            raise


def import_schema(
    inspector: CatalogInspector,
    config: Optional[ImportConfig] = None,
) -> SchemaMutations:
    """
    Convenience function to inspect a schema and infer its mutations.

    Args:
        inspector: Catalog inspector for the target database
        config: Schema name and table allow-list

    Returns:
        SchemaMutations keyed by entity name
    """
    return SchemaImporter(inspector, config).schema_mutations()
