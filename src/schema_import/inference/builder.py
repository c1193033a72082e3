"""
Entity graph builder - turns an inspected schema into schema mutations.

Drives the field mapper over every column and the relation classifier over
every foreign key, then freezes the result into an ordered SchemaMutations
mapping.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Set

from schema_import.errors import DuplicateEntityError
from schema_import.inference.fields import map_columns
from schema_import.inference.naming import entity_name
from schema_import.inference.relations import EdgePair, RelationClassifier
from schema_import.models import (
    EdgeDescriptor,
    EdgeDirection,
    Entity,
    FieldDescriptor,
    SchemaMetadata,
    SchemaMutations,
)

logger = logging.getLogger(__name__)


@dataclass
class _EntityDraft:
    """Mutable entity under construction; frozen once the run completes."""
    name: str
    table: str
    fields: List[FieldDescriptor] = field(default_factory=list)
    to_edges: List[EdgeDescriptor] = field(default_factory=list)
    from_edges: List[EdgeDescriptor] = field(default_factory=list)
    edge_names: Set[str] = field(default_factory=set)

    def claim(self, name: str, suffix: str) -> str:
        """Reserve an edge name, suffixing it if the entity already uses it."""
        candidate = name
        if candidate in self.edge_names:
            candidate = f"{name}_{suffix}"
        n = 2
        while candidate in self.edge_names:
            candidate = f"{name}_{suffix}_{n}"
            n += 1
        self.edge_names.add(candidate)
        return candidate

    def freeze(self) -> Entity:
        # TO edges precede FROM edges, discovery order within each
        return Entity(
            name=self.name,
            table=self.table,
            fields=tuple(self.fields),
            edges=tuple(self.to_edges + self.from_edges),
        )


class EntityGraphBuilder:
    """
    Builds entities, fields and edges for one inference run.

    Usage:
        mutations = EntityGraphBuilder(metadata).build()
        user = mutations["User"]
    """

    def __init__(self, metadata: SchemaMetadata):
        self.metadata = metadata
        self.classifier = RelationClassifier(metadata)
        self._drafts: Dict[str, _EntityDraft] = {}

    def build(self) -> SchemaMutations:
        """
        Run inference over the whole snapshot.

        Raises:
            MissingReferencedTableError: a join table references tables that
                were not inspected
            JoinTableReferenceError: a join table references another join table
            UnsupportedTypeError: a column type has no field mapping
            DuplicateEntityError: two tables map to the same entity name
        """
        self._drafts = {}

        # Join tables are validated first; they never become entities
        for join_table in self.classifier.join_tables:
            self.classifier.check_join_table(join_table)

        self._build_entities()

        for table in self.metadata.tables:
            if self.classifier.is_join_table(table):
                self._attach(self.classifier.classify_join_table(table))
                continue
            for fk in table.foreign_keys:
                pair = self.classifier.classify_foreign_key(table, fk)
                if pair is not None:
                    self._attach(pair)

        mutations = SchemaMutations([d.freeze() for d in self._drafts.values()])
        logger.info(
            f"Inferred {len(mutations)} entities with {mutations.edge_count} edges "
            f"({len(self.classifier.join_tables)} join tables)"
        )
        return mutations

    def _build_entities(self) -> None:
        by_name: Dict[str, str] = {}
        for table in self.metadata.tables:
            if self.classifier.is_join_table(table):
                extra = [
                    c for c in table.column_names
                    if c.lower() not in {k.lower() for k in table.primary_key}
                ]
                if extra:
                    logger.warning(
                        f"Join table {table.full_name} has non-key columns that are "
                        f"dropped: {', '.join(extra)}"
                    )
                continue

            name = entity_name(table.name)
            if name in by_name:
                raise DuplicateEntityError(name, [by_name[name], table.name])
            by_name[name] = table.name

            self._drafts[table.name.lower()] = _EntityDraft(
                name=name,
                table=table.name,
                fields=map_columns(table),
            )

    def _attach(self, pair: EdgePair) -> None:
        """Add the TO/FROM edges of a pair to their entities."""
        owner = self._drafts[pair.owner_table.lower()]
        inverse = self._drafts[pair.inverse_table.lower()]

        to_name = owner.claim(pair.to_name, pair.suffix)
        from_name = inverse.claim(pair.from_name, pair.suffix)

        owner.to_edges.append(EdgeDescriptor(
            direction=EdgeDirection.TO,
            name=to_name,
            target=inverse.name,
            relation=pair.relation,
            unique=pair.to_unique,
        ))
        inverse.from_edges.append(EdgeDescriptor(
            direction=EdgeDirection.FROM,
            name=from_name,
            target=owner.name,
            relation=pair.relation,
            unique=pair.from_unique,
            ref=to_name,
            field=pair.field,
        ))
