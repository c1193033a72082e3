"""
Mutation writer - persists inferred entities for the code serialization step.

Output Structure:
    <output_dir>/
    ├── user.json           # One document per entity
    ├── pet.json
    └── manifest.json       # Entities, counts and source schema
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from schema_import.inference.naming import snake_case
from schema_import.models import SchemaMutations

logger = logging.getLogger(__name__)


class MutationWriter:
    """Writes SchemaMutations as JSON, one file per entity."""

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)

    def write(
        self,
        mutations: SchemaMutations,
        schema_name: Optional[str] = None,
    ) -> Dict[str, Path]:
        """
        Write every entity and the manifest.

        Args:
            mutations: Inferred schema mutations
            schema_name: Source schema, recorded in the manifest

        Returns:
            Dict of entity name -> written file path
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        paths: Dict[str, Path] = {}
        for name, entity in mutations.items():
            path = self.output_dir / f"{snake_case(name)}.json"
            with open(path, "w") as f:
                json.dump(entity.to_dict(), f, indent=2)
            paths[name] = path
            logger.debug(f"Wrote {name} to {path}")

        self._write_manifest(mutations, paths, schema_name)
        logger.info(f"Wrote {len(paths)} entities to {self.output_dir}")
        return paths

    def _write_manifest(
        self,
        mutations: SchemaMutations,
        paths: Dict[str, Path],
        schema_name: Optional[str],
    ) -> None:
        manifest = {
            "created_at": datetime.now().isoformat(),
            "schema": schema_name,
            "entities": {
                name: {
                    "file": paths[name].name,
                    "table": entity.table,
                    "fields": len(entity.fields),
                    "edges": len(entity.edges),
                }
                for name, entity in mutations.items()
            },
            "total_entities": len(mutations),
            "total_edges": mutations.edge_count,
        }
        with open(self.output_dir / "manifest.json", "w") as f:
            json.dump(manifest, f, indent=2)
