"""
Oracle catalog inspector using oracledb.

Reads tables, columns, comments, primary keys, unique indexes and foreign
keys from the Oracle data dictionary views.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from schema_import.metadata.base import CatalogInspector
from schema_import.models import (
    ColumnMetadata,
    ForeignKeyMetadata,
    IndexMetadata,
    SchemaMetadata,
    TableMetadata,
)

logger = logging.getLogger(__name__)


class OracleCatalogInspector(CatalogInspector):
    """
    Inspects an Oracle schema (owner).

    Uses Oracle data dictionary views:
    - ALL_TABLES / ALL_TAB_COMMENTS
    - ALL_TAB_COLUMNS / ALL_COL_COMMENTS
    - ALL_CONSTRAINTS / ALL_CONS_COLUMNS
    - ALL_INDEXES / ALL_IND_COLUMNS
    """

    def __init__(self, connection_string: str):
        """
        Initialize inspector with Oracle connection.

        Args:
            connection_string: Oracle connection string (user/pwd@host:port/service)
        """
        self.connection_string = connection_string
        self._conn = None
        self._user: Optional[str] = None

    @property
    def default_schema(self) -> Optional[str]:
        return self._user.upper() if self._user else None

    def connect(self) -> None:
        """Establish database connection."""
        import oracledb

        # Parse connection string: user/pwd@host:port/service
        parts = self.connection_string.split("@")
        user_pwd = parts[0]
        host_service = parts[1] if len(parts) > 1 else ""

        user, password = user_pwd.split("/", 1) if "/" in user_pwd else (user_pwd, "")

        # Build DSN
        if ":" in host_service:
            host_port, service = host_service.rsplit("/", 1) if "/" in host_service else (host_service, "")
            host, port = host_port.split(":") if ":" in host_port else (host_port, "1521")
            dsn = oracledb.makedsn(host, int(port), service_name=service)
        else:
            dsn = host_service

        self._conn = oracledb.connect(user=user, password=password, dsn=dsn)
        self._user = user
        logger.info(f"Connected to Oracle database as {user}")

    def disconnect(self) -> None:
        """Close database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None

    def inspect_schema(
        self,
        schema: Optional[str] = None,
        tables: Optional[List[str]] = None,
    ) -> SchemaMetadata:
        if not self._conn:
            self.connect()

        owner = (schema or self.default_schema or "").upper()
        cursor = self._conn.cursor()
        try:
            names = self._get_table_names(cursor, owner)
            if tables:
                wanted = {t.upper() for t in tables}
                names = [n for n in names if n.upper() in wanted]

            result = SchemaMetadata(name=owner)
            for name in names:
                result.tables.append(self._get_table(cursor, owner, name))
        finally:
            cursor.close()

        logger.info(f"Inspected {len(result.tables)} tables in Oracle schema {owner}")
        return result

    def _get_table_names(self, cursor, owner: str) -> List[str]:
        cursor.execute("""
            SELECT table_name
            FROM all_tables
            WHERE owner = :owner
            ORDER BY table_name
        """, owner=owner)
        return [row[0] for row in cursor]

    def _get_table(self, cursor, owner: str, table_name: str) -> TableMetadata:
        cursor.execute("""
            SELECT comments
            FROM all_tab_comments
            WHERE owner = :owner AND table_name = :table_name
        """, owner=owner, table_name=table_name)
        row = cursor.fetchone()

        return TableMetadata(
            name=table_name,
            schema=owner,
            columns=self._get_columns(cursor, owner, table_name),
            primary_key=self._get_primary_key(cursor, owner, table_name),
            indexes=self._get_unique_indexes(cursor, owner, table_name),
            foreign_keys=self._get_foreign_keys(cursor, owner, table_name),
            comment=row[0] if row else None,
        )

    def _get_columns(self, cursor, owner: str, table_name: str) -> List[ColumnMetadata]:
        """Get column metadata for a table."""
        cursor.execute("""
            SELECT
                c.column_name,
                c.data_type,
                c.nullable,
                c.data_length,
                c.data_precision,
                c.data_scale,
                c.data_default,
                cc.comments
            FROM all_tab_columns c
            LEFT JOIN all_col_comments cc
                ON c.owner = cc.owner
                AND c.table_name = cc.table_name
                AND c.column_name = cc.column_name
            WHERE c.owner = :owner AND c.table_name = :table_name
            ORDER BY c.column_id
        """, owner=owner, table_name=table_name)

        columns = []
        for row in cursor:
            col_name, data_type, nullable, data_length, precision, scale, default, comment = row
            columns.append(ColumnMetadata(
                name=col_name,
                data_type=data_type,
                nullable=nullable == "Y",
                comment=comment,
                default_value=default.strip() if default else None,
                precision=precision,
                scale=scale,
                max_length=data_length,
            ))
        return columns

    def _get_primary_key(self, cursor, owner: str, table_name: str) -> List[str]:
        """Get primary key columns for a table."""
        cursor.execute("""
            SELECT cc.column_name
            FROM all_constraints c
            JOIN all_cons_columns cc
                ON c.owner = cc.owner
                AND c.constraint_name = cc.constraint_name
            WHERE c.owner = :owner
                AND c.table_name = :table_name
                AND c.constraint_type = 'P'
            ORDER BY cc.position
        """, owner=owner, table_name=table_name)

        return [row[0] for row in cursor]

    def _get_unique_indexes(self, cursor, owner: str, table_name: str) -> List[IndexMetadata]:
        """Get unique indexes (including those backing UNIQUE constraints)."""
        cursor.execute("""
            SELECT i.index_name, ic.column_name
            FROM all_indexes i
            JOIN all_ind_columns ic
                ON i.owner = ic.index_owner
                AND i.index_name = ic.index_name
            WHERE i.table_owner = :owner
                AND i.table_name = :table_name
                AND i.uniqueness = 'UNIQUE'
            ORDER BY i.index_name, ic.column_position
        """, owner=owner, table_name=table_name)

        indexes: Dict[str, IndexMetadata] = {}
        for index_name, column_name in cursor:
            index = indexes.setdefault(index_name, IndexMetadata(name=index_name, unique=True))
            index.columns.append(column_name)
        return list(indexes.values())

    def _get_foreign_keys(self, cursor, owner: str, table_name: str) -> List[ForeignKeyMetadata]:
        """Get foreign keys declared on a table, columns in key order."""
        cursor.execute("""
            SELECT
                c.constraint_name,
                cc.column_name,
                rc.table_name as ref_table,
                rcc.column_name as ref_column
            FROM all_constraints c
            JOIN all_cons_columns cc
                ON c.owner = cc.owner
                AND c.constraint_name = cc.constraint_name
            JOIN all_constraints rc
                ON c.r_owner = rc.owner
                AND c.r_constraint_name = rc.constraint_name
            JOIN all_cons_columns rcc
                ON rc.owner = rcc.owner
                AND rc.constraint_name = rcc.constraint_name
                AND cc.position = rcc.position
            WHERE c.owner = :owner
                AND c.table_name = :table_name
                AND c.constraint_type = 'R'
            ORDER BY c.constraint_name, cc.position
        """, owner=owner, table_name=table_name)

        foreign_keys: Dict[str, ForeignKeyMetadata] = {}
        for constraint_name, column, ref_table, ref_column in cursor:
            fk = foreign_keys.setdefault(
                constraint_name,
                ForeignKeyMetadata(name=constraint_name, columns=[], ref_table=ref_table),
            )
            fk.columns.append(column)
            fk.ref_columns.append(ref_column)
        return list(foreign_keys.values())
