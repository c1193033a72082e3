"""
Relation classifier - recovers relationship shapes from foreign keys.

Every foreign key of a regular table becomes one TO/FROM edge pair:
- the referenced table owns the TO edge (it points at the referencing rows)
- the referencing table gets the FROM edge, bound to its foreign key field

Cardinality is read from the indexes: a uniquely indexed foreign key column
is one-to-one, anything else is one-to-many. Tables whose composite primary
key is made of exactly two foreign keys are join tables; they disappear from
the entity set and become a many-to-many pair between the tables they
reference.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from schema_import.errors import JoinTableReferenceError, MissingReferencedTableError
from schema_import.inference.fields import field_name, is_unique_column
from schema_import.inference.naming import (
    pluralize,
    self_reference_names,
    table_singular,
)
from schema_import.models import (
    ForeignKeyMetadata,
    RelationType,
    SchemaMetadata,
    TableMetadata,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EdgePair:
    """
    The two edges produced by one relationship, before they are attached.

    ``owner_table`` receives the TO edge, ``inverse_table`` the FROM edge
    (the same table for self-references).
    """
    relation: RelationType
    owner_table: str
    inverse_table: str
    to_name: str
    from_name: str
    to_unique: bool
    from_unique: bool
    source: str  # Foreign key or join table the pair came from
    suffix: str  # Disambiguates names already taken on an entity
    field: Optional[str] = None

    @property
    def is_self_reference(self) -> bool:
        return self.owner_table.lower() == self.inverse_table.lower()


def is_join_table(table: TableMetadata) -> bool:
    """
    Check whether a table only encodes a many-to-many relationship.

    A join table has a composite primary key made exactly of its foreign
    key columns and carries exactly two foreign keys.
    """
    if len(table.foreign_keys) != 2 or len(table.primary_key) < 2:
        return False
    pk = {c.lower() for c in table.primary_key}
    fk_columns = {c.lower() for c in table.fk_column_names()}
    return pk == fk_columns


class RelationClassifier:
    """
    Classifies foreign keys of an inspected schema into edge pairs.

    The classifier only reads the snapshot; attaching edges to entities
    (and resolving name clashes) is left to the graph builder.
    """

    def __init__(self, metadata: SchemaMetadata):
        self.metadata = metadata
        self._tables: Dict[str, TableMetadata] = {
            t.name.lower(): t for t in metadata.tables
        }
        self.join_tables: List[TableMetadata] = [
            t for t in metadata.tables if is_join_table(t)
        ]
        self._join_names = {t.name.lower() for t in self.join_tables}

    def is_join_table(self, table: TableMetadata) -> bool:
        return table.name.lower() in self._join_names

    def _entity_table(self, name: str) -> Optional[TableMetadata]:
        """Look up a referenced table that becomes an entity."""
        if name.lower() in self._join_names:
            return None
        return self._tables.get(name.lower())

    def check_join_table(self, table: TableMetadata) -> None:
        """Raise if a join table references tables that will not be entities."""
        missing = []
        joins = []
        for fk in table.foreign_keys:
            if fk.ref_table.lower() in self._join_names:
                if fk.ref_table not in joins:
                    joins.append(fk.ref_table)
            elif self._entity_table(fk.ref_table) is None and fk.ref_table not in missing:
                missing.append(fk.ref_table)
        if joins:
            raise JoinTableReferenceError(table.name, joins)
        if missing:
            raise MissingReferencedTableError(table.name, missing)

    def classify_join_table(self, table: TableMetadata) -> EdgePair:
        """Build the M2M pair encoded by a join table."""
        self.check_join_table(table)
        first_fk, second_fk = table.foreign_keys
        first = self._entity_table(first_fk.ref_table)
        second = self._entity_table(second_fk.ref_table)

        if first.name.lower() == second.name.lower():
            child, parent = self_reference_names(
                table_singular(first.name), child_many=True, parent_many=True
            )
            to_name, from_name = child, parent
        else:
            to_name = pluralize(table_singular(second.name))
            from_name = pluralize(table_singular(first.name))

        logger.debug(
            f"Join table {table.name}: M2M {first.name}.{to_name} <- {second.name}.{from_name}"
        )
        return EdgePair(
            relation=RelationType.M2M,
            owner_table=first.name,
            inverse_table=second.name,
            to_name=to_name,
            from_name=from_name,
            to_unique=False,
            from_unique=False,
            source=table.name,
            suffix=table_singular(table.name),
        )

    def classify_foreign_key(
        self,
        table: TableMetadata,
        fk: ForeignKeyMetadata,
    ) -> Optional[EdgePair]:
        """
        Build the O2O/O2M pair for a foreign key of a regular table.

        Returns None when the relationship cannot be expressed as edges: the
        referenced table was not inspected (the other side is ignored) or
        the key spans several columns.
        """
        if len(fk.columns) != 1:
            logger.warning(
                f"Skipping composite foreign key {fk.name} on {table.full_name} "
                f"({', '.join(fk.columns)})"
            )
            return None

        referenced = self._entity_table(fk.ref_table)
        if referenced is None:
            logger.debug(
                f"Foreign key {table.name}.{fk.name} references {fk.ref_table}, "
                f"which was not inspected - other side ignored"
            )
            return None

        column = fk.columns[0]
        unique = (
            is_unique_column(table, column)
            or [c.lower() for c in fk.columns] == [c.lower() for c in table.primary_key]
        )
        relation = RelationType.O2O if unique else RelationType.O2M

        owner_singular = table_singular(table.name)
        if referenced.name.lower() == table.name.lower():
            to_name, from_name = self_reference_names(owner_singular, child_many=not unique)
        else:
            to_name = owner_singular if unique else pluralize(owner_singular)
            from_name = table_singular(referenced.name)

        logger.debug(
            f"Foreign key {table.name}.{column} -> {referenced.name}: {relation.value}"
        )
        return EdgePair(
            relation=relation,
            owner_table=referenced.name,
            inverse_table=table.name,
            to_name=to_name,
            from_name=from_name,
            to_unique=unique,
            from_unique=True,
            source=fk.name,
            suffix=column.lower(),
            field=field_name(table, column),
        )
