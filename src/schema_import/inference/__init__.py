"""
Relation-inference engine.

Converts an inspected catalog snapshot into entities, typed fields and
directional edges:

    from schema_import.inference import EntityGraphBuilder

    mutations = EntityGraphBuilder(metadata).build()
"""

from schema_import.inference.builder import EntityGraphBuilder
from schema_import.inference.fields import map_column, map_columns, map_type
from schema_import.inference.relations import EdgePair, RelationClassifier, is_join_table
from schema_import.inference.naming import (
    camelize,
    entity_name,
    pluralize,
    self_reference_names,
    singularize,
)

__all__ = [
    "EntityGraphBuilder",
    "RelationClassifier",
    "EdgePair",
    "is_join_table",
    "map_column",
    "map_columns",
    "map_type",
    "camelize",
    "entity_name",
    "pluralize",
    "self_reference_names",
    "singularize",
]
