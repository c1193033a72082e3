"""
Catalog snapshot files (offline mode).

A snapshot is ``SchemaMetadata.to_dict()`` stored as YAML or JSON. It lets
inference run without database access and is how tests feed catalogs to the
CLI.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import yaml

from schema_import.metadata.base import CatalogInspector
from schema_import.models import SchemaMetadata

logger = logging.getLogger(__name__)


def load_snapshot(path: Path) -> SchemaMetadata:
    """Load a catalog snapshot from a YAML or JSON file."""
    path = Path(path)
    with open(path, "r") as f:
        if path.suffix == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f) or {}
    return SchemaMetadata.from_dict(data)


def save_snapshot(metadata: SchemaMetadata, path: Path) -> Path:
    """Write a catalog snapshot; the format follows the file suffix."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        if path.suffix == ".json":
            json.dump(metadata.to_dict(), f, indent=2, default=str)
        else:
            yaml.safe_dump(metadata.to_dict(), f, sort_keys=False)
    logger.info(f"Saved snapshot of {len(metadata.tables)} tables to {path}")
    return path


class FileCatalogInspector(CatalogInspector):
    """Serves a catalog snapshot file as if it were a live database."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def inspect_schema(
        self,
        schema: Optional[str] = None,
        tables: Optional[List[str]] = None,
    ) -> SchemaMetadata:
        metadata = load_snapshot(self.path)
        if schema and metadata.name and schema != metadata.name:
            logger.warning(
                f"Snapshot {self.path} was taken from schema {metadata.name}, not {schema}"
            )
        if tables:
            metadata = metadata.restrict(tables)
        logger.info(f"Loaded {len(metadata.tables)} tables from {self.path}")
        return metadata
