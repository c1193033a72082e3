"""Catalog fixtures shared by the inference tests."""

import pytest

from schema_import.models import (
    ColumnMetadata,
    ForeignKeyMetadata,
    IndexMetadata,
    SchemaMetadata,
    TableMetadata,
)


def id_column(name="id", comment=None):
    return ColumnMetadata(name=name, data_type="integer", nullable=False, comment=comment)


def users_table(*extra_columns, indexes=None, foreign_keys=None):
    return TableMetadata(
        name="users",
        schema="public",
        columns=[
            id_column(),
            ColumnMetadata(name="age", data_type="integer", nullable=False),
            ColumnMetadata(name="name", data_type="character varying(255)", nullable=False),
            *extra_columns,
        ],
        primary_key=["id"],
        indexes=indexes or [],
        foreign_keys=foreign_keys or [],
    )


def nodes_table(fk_column, unique):
    indexes = [IndexMetadata(name=f"{fk_column}_key", columns=[fk_column], unique=True)] if unique else []
    return TableMetadata(
        name="nodes",
        schema="public",
        columns=[
            id_column(),
            ColumnMetadata(name="value", data_type="integer", nullable=False),
            ColumnMetadata(name=fk_column, data_type="integer", nullable=True),
        ],
        primary_key=["id"],
        indexes=indexes,
        foreign_keys=[
            ForeignKeyMetadata(name=f"nodes_{fk_column}_fkey", columns=[fk_column],
                               ref_table="nodes", ref_columns=["id"]),
        ],
    )


def join_table(name, first, second, first_table="users", second_table="users"):
    return TableMetadata(
        name=name,
        schema="public",
        columns=[
            ColumnMetadata(name=first, data_type="integer", nullable=False),
            ColumnMetadata(name=second, data_type="integer", nullable=False),
        ],
        primary_key=[first, second],
        foreign_keys=[
            ForeignKeyMetadata(name=f"{name}_{first}_fkey", columns=[first],
                               ref_table=first_table, ref_columns=["id"]),
            ForeignKeyMetadata(name=f"{name}_{second}_fkey", columns=[second],
                               ref_table=second_table, ref_columns=["id"]),
        ],
    )


def pets_table():
    return TableMetadata(
        name="pets",
        schema="public",
        columns=[
            id_column(),
            ColumnMetadata(name="name", data_type="character varying", nullable=False),
            ColumnMetadata(name="user_pets", data_type="integer", nullable=True),
        ],
        primary_key=["id"],
        foreign_keys=[
            ForeignKeyMetadata(name="pets_user_pets_fkey", columns=["user_pets"],
                               ref_table="users", ref_columns=["id"]),
        ],
    )


def groups_table():
    return TableMetadata(
        name="groups",
        schema="public",
        columns=[
            id_column(),
            ColumnMetadata(name="name", data_type="character varying", nullable=False),
        ],
        primary_key=["id"],
    )


@pytest.fixture
def single_table_schema():
    """users(id, age smallint, name text) with nothing but a primary key."""
    return SchemaMetadata(name="public", tables=[
        TableMetadata(
            name="users",
            schema="public",
            columns=[
                id_column(),
                ColumnMetadata(name="age", data_type="smallint", nullable=False),
                ColumnMetadata(name="name", data_type="text", nullable=False),
            ],
            primary_key=["id"],
        ),
    ])


@pytest.fixture
def attributes_schema():
    """Nullable columns, comments and a single-column unique index."""
    return SchemaMetadata(name="public", tables=[
        TableMetadata(
            name="users",
            schema="public",
            columns=[
                id_column(comment="some id"),
                ColumnMetadata(name="age", data_type="smallint", nullable=False),
                ColumnMetadata(name="name", data_type="text", nullable=False, comment="first name"),
                ColumnMetadata(name="last_name", data_type="text", nullable=True, comment="family name"),
            ],
            primary_key=["id"],
            indexes=[
                IndexMetadata(name="users_pkey", columns=["id"], unique=True),
                IndexMetadata(name="users_age_key", columns=["age"], unique=True),
                IndexMetadata(name="users_name_last_name_key", columns=["name", "last_name"], unique=True),
            ],
        ),
    ])


@pytest.fixture
def non_default_pk_schema():
    """users keyed by a text column called name."""
    return SchemaMetadata(name="public", tables=[
        TableMetadata(
            name="users",
            schema="public",
            columns=[
                ColumnMetadata(name="name", data_type="character varying", nullable=False),
                ColumnMetadata(name="last_name", data_type="character varying", nullable=True,
                               comment="not so boring"),
            ],
            primary_key=["name"],
            indexes=[
                IndexMetadata(name="users_pkey", columns=["name"], unique=True),
                IndexMetadata(name="users_last_name_key", columns=["last_name"], unique=True),
            ],
        ),
    ])


@pytest.fixture
def o2m_two_types_schema():
    return SchemaMetadata(name="public", tables=[users_table(), pets_table()])


@pytest.fixture
def o2x_other_side_ignored_schema():
    return SchemaMetadata(name="public", tables=[pets_table()])


@pytest.fixture
def o2o_two_types_schema():
    cards = TableMetadata(
        name="cards",
        schema="public",
        columns=[
            id_column(),
            ColumnMetadata(name="expired", data_type="timestamp with time zone", nullable=False),
            ColumnMetadata(name="number", data_type="character varying", nullable=False),
            ColumnMetadata(name="user_card", data_type="integer", nullable=True),
        ],
        primary_key=["id"],
        indexes=[IndexMetadata(name="cards_user_card_key", columns=["user_card"], unique=True)],
        foreign_keys=[
            ForeignKeyMetadata(name="cards_user_card_fkey", columns=["user_card"],
                               ref_table="users", ref_columns=["id"]),
        ],
    )
    return SchemaMetadata(name="public", tables=[users_table(), cards])


@pytest.fixture
def o2o_same_type_schema():
    return SchemaMetadata(name="public", tables=[nodes_table("node_next", unique=True)])


@pytest.fixture
def o2m_same_type_schema():
    return SchemaMetadata(name="public", tables=[nodes_table("node_children", unique=False)])


@pytest.fixture
def o2o_bidirectional_schema():
    users = users_table(
        ColumnMetadata(name="user_spouse", data_type="integer", nullable=True),
        indexes=[IndexMetadata(name="users_user_spouse_key", columns=["user_spouse"], unique=True)],
        foreign_keys=[
            ForeignKeyMetadata(name="users_user_spouse_fkey", columns=["user_spouse"],
                               ref_table="users", ref_columns=["id"]),
        ],
    )
    return SchemaMetadata(name="public", tables=[users])


@pytest.fixture
def m2m_two_types_schema():
    return SchemaMetadata(name="public", tables=[
        users_table(),
        groups_table(),
        join_table("group_users", "group_id", "user_id", first_table="groups"),
    ])


@pytest.fixture
def m2m_same_type_schema():
    return SchemaMetadata(name="public", tables=[
        users_table(),
        join_table("user_following", "user_id", "follower_id"),
    ])


@pytest.fixture
def m2m_bidirectional_schema():
    return SchemaMetadata(name="public", tables=[
        users_table(),
        join_table("user_friends", "user_id", "friend_id"),
    ])


@pytest.fixture
def join_table_only_schema():
    return SchemaMetadata(name="public", tables=[
        join_table("group_users", "group_id", "user_id", first_table="groups"),
    ])
