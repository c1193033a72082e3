"""Tests for join table detection and foreign key classification."""

import pytest

from schema_import.errors import MissingReferencedTableError
from schema_import.inference.relations import RelationClassifier, is_join_table
from schema_import.models import (
    ColumnMetadata,
    ForeignKeyMetadata,
    RelationType,
    SchemaMetadata,
    TableMetadata,
)


class TestJoinTableDetection:

    def test_two_foreign_key_composite_primary_key(self, m2m_two_types_schema):
        """Test detecting a join table."""
        assert is_join_table(m2m_two_types_schema.get_table("group_users")) is True
        assert is_join_table(m2m_two_types_schema.get_table("users")) is False

    def test_primary_key_must_match_foreign_keys(self, m2m_two_types_schema):
        """Test extra primary key columns rule out a join table."""
        join = m2m_two_types_schema.get_table("group_users")
        join.columns.append(ColumnMetadata(name="role", data_type="text", nullable=False))
        join.primary_key = ["group_id", "user_id", "role"]

        assert is_join_table(join) is False

    def test_exactly_two_foreign_keys(self, m2m_two_types_schema):
        """Test a join table needs two foreign keys."""
        join = m2m_two_types_schema.get_table("group_users")
        join.foreign_keys = join.foreign_keys[:1]

        assert is_join_table(join) is False

    def test_single_column_primary_key(self, o2m_two_types_schema):
        """Test a regular table is not a join table."""
        assert is_join_table(o2m_two_types_schema.get_table("pets")) is False


class TestRelationClassifier:

    def test_join_tables_listed(self, m2m_two_types_schema):
        """Test join tables are collected."""
        classifier = RelationClassifier(m2m_two_types_schema)

        assert [t.name for t in classifier.join_tables] == ["group_users"]

    def test_classify_two_type_join_table(self, m2m_two_types_schema):
        """Test classifying a two-type join table."""
        classifier = RelationClassifier(m2m_two_types_schema)
        pair = classifier.classify_join_table(m2m_two_types_schema.get_table("group_users"))

        assert pair.relation == RelationType.M2M
        assert (pair.owner_table, pair.to_name) == ("groups", "users")
        assert (pair.inverse_table, pair.from_name) == ("users", "groups")
        assert pair.to_unique is False and pair.from_unique is False
        assert pair.field is None

    def test_classify_same_type_join_table(self, m2m_same_type_schema):
        """Test classifying a same-type join table."""
        classifier = RelationClassifier(m2m_same_type_schema)
        pair = classifier.classify_join_table(m2m_same_type_schema.get_table("user_following"))

        assert pair.is_self_reference
        assert (pair.to_name, pair.from_name) == ("child_users", "parent_users")

    def test_missing_referenced_table(self, join_table_only_schema):
        """Test join table validation."""
        classifier = RelationClassifier(join_table_only_schema)

        with pytest.raises(MissingReferencedTableError):
            classifier.check_join_table(join_table_only_schema.get_table("group_users"))

    def test_one_to_many(self, o2m_two_types_schema):
        """Test classifying a one-to-many foreign key."""
        pets = o2m_two_types_schema.get_table("pets")
        pair = RelationClassifier(o2m_two_types_schema).classify_foreign_key(pets, pets.foreign_keys[0])

        assert pair.relation == RelationType.O2M
        assert (pair.owner_table, pair.to_name, pair.to_unique) == ("users", "pets", False)
        assert (pair.inverse_table, pair.from_name, pair.from_unique) == ("pets", "user", True)
        assert pair.field == "user_pets"

    def test_one_to_one(self, o2o_two_types_schema):
        """Test classifying a one-to-one foreign key."""
        cards = o2o_two_types_schema.get_table("cards")
        pair = RelationClassifier(o2o_two_types_schema).classify_foreign_key(cards, cards.foreign_keys[0])

        assert pair.relation == RelationType.O2O
        assert (pair.to_name, pair.to_unique) == ("card", True)
        assert (pair.from_name, pair.from_unique) == ("user", True)

    def test_self_reference(self, o2m_same_type_schema):
        """Test classifying a self reference."""
        nodes = o2m_same_type_schema.get_table("nodes")
        pair = RelationClassifier(o2m_same_type_schema).classify_foreign_key(nodes, nodes.foreign_keys[0])

        assert pair.is_self_reference
        assert (pair.to_name, pair.from_name) == ("child_nodes", "parent_node")

    def test_unresolved_reference_is_ignored(self, o2x_other_side_ignored_schema):
        """Test a foreign key to an uninspected table."""
        pets = o2x_other_side_ignored_schema.get_table("pets")
        classifier = RelationClassifier(o2x_other_side_ignored_schema)

        assert classifier.classify_foreign_key(pets, pets.foreign_keys[0]) is None

    def test_reference_to_join_table_is_ignored(self, m2m_two_types_schema):
        """Test a foreign key to a join table is ignored."""
        audits = TableMetadata(
            name="audits",
            columns=[
                ColumnMetadata(name="id", data_type="integer"),
                ColumnMetadata(name="group_id", data_type="integer"),
            ],
            primary_key=["id"],
            foreign_keys=[ForeignKeyMetadata(name="audits_fkey", columns=["group_id"],
                                             ref_table="group_users")],
        )
        m2m_two_types_schema.tables.append(audits)
        classifier = RelationClassifier(m2m_two_types_schema)

        assert classifier.classify_foreign_key(audits, audits.foreign_keys[0]) is None

    def test_case_insensitive_table_lookup(self):
        """Test referenced tables are matched case-insensitively."""
        schema = SchemaMetadata(tables=[
            TableMetadata(name="USERS", columns=[ColumnMetadata(name="ID", data_type="NUMBER")],
                          primary_key=["ID"]),
            TableMetadata(
                name="PETS",
                columns=[
                    ColumnMetadata(name="ID", data_type="NUMBER"),
                    ColumnMetadata(name="USER_ID", data_type="NUMBER"),
                ],
                primary_key=["ID"],
                foreign_keys=[ForeignKeyMetadata(name="PETS_FK", columns=["USER_ID"], ref_table="users")],
            ),
        ])
        pets = schema.get_table("PETS")
        pair = RelationClassifier(schema).classify_foreign_key(pets, pets.foreign_keys[0])

        assert (pair.owner_table, pair.to_name, pair.from_name) == ("USERS", "pets", "user")
