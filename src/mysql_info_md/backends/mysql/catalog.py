"""MySQL catalog reader."""

import logging
from typing import Any, Optional

from ...base import BaseCatalogReader
from ...base.models import (
    ColumnInfo,
    EntityKind,
    ForeignKeyRef,
    RoutineStatus,
    TableStatus,
    TriggerInfo,
)
from .connection import MySQLConnection

logger = logging.getLogger(__name__)

FOREIGN_KEY_QUERY = """
    SELECT
        kcu.table_name,
        kcu.column_name,
        kcu.constraint_name,
        kcu.referenced_table_name,
        kcu.referenced_column_name,
        cref.update_rule,
        cref.delete_rule
    FROM information_schema.key_column_usage AS kcu
    LEFT JOIN information_schema.referential_constraints AS cref
        ON cref.constraint_schema = kcu.table_schema
        AND cref.constraint_name = kcu.constraint_name
    WHERE kcu.table_schema = %s
    AND {condition}
    ORDER BY kcu.table_name, kcu.constraint_name, kcu.ordinal_position
"""


def quote_identifier(name: str) -> str:
    """Backtick-quote an identifier for statements that take no parameters."""
    return "`" + name.replace("`", "``") + "`"


def _text(value: Any) -> Optional[str]:
    """Normalize driver values that may arrive as bytes."""
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8")
    return value


class MySQLCatalogReader(BaseCatalogReader):
    """Reads the catalog of the connected MySQL database."""

    connection: MySQLConnection

    def __init__(self, connection: MySQLConnection, config: Any = None):
        super().__init__(connection, config)
        self._database: Optional[str] = None

    def database_name(self) -> str:
        if self._database is None:
            self._database = _text(self.connection.execute_scalar("SELECT DATABASE()")) or ""
        return self._database

    def table_status(self) -> list[TableStatus]:
        """Get tables and views; SHOW TABLE STATUS returns both together."""
        rows = self.connection.execute_dict("SHOW TABLE STATUS")
        return [
            TableStatus(
                name=_text(row["name"]),
                engine=_text(row.get("engine")),
                rows=row.get("rows"),
                update_time=row.get("update_time"),
                comment=_text(row.get("comment")) or "",
            )
            for row in rows
        ]

    def columns(self, name: str) -> list[ColumnInfo]:
        rows = self.connection.execute_dict(f"SHOW FULL COLUMNS FROM {quote_identifier(name)}")
        return [
            ColumnInfo(
                field=_text(row["field"]),
                type=_text(row["type"]),
                null=_text(row["null"]),
                key=_text(row.get("key")) or "",
                default=_text(row.get("default")),
                comment=_text(row.get("comment")) or "",
            )
            for row in rows
        ]

    def _routine_status(self, kind: str) -> list[RoutineStatus]:
        rows = self.connection.execute_dict(
            f"SHOW {kind} STATUS WHERE db = %s", (self.database_name(),)
        )
        return [
            RoutineStatus(name=_text(row["name"]), comment=_text(row.get("comment")) or "")
            for row in rows
        ]

    def procedure_status(self) -> list[RoutineStatus]:
        return self._routine_status("PROCEDURE")

    def function_status(self) -> list[RoutineStatus]:
        return self._routine_status("FUNCTION")

    def show_create(self, kind: EntityKind, name: str) -> Optional[str]:
        """Get the create statement reported by the server."""
        rows = self.connection.execute_dict(
            f"SHOW CREATE {kind.value.upper()} {quote_identifier(name)}"
        )
        if not rows:
            return None
        return _text(rows[0].get(kind.create_key))

    def _foreign_keys(self, condition: str, table: str) -> list[ForeignKeyRef]:
        query = FOREIGN_KEY_QUERY.format(condition=condition)
        rows = self.connection.execute_dict(query, (self.database_name(), table))
        return [
            ForeignKeyRef(
                table_name=_text(row["table_name"]),
                column_name=_text(row["column_name"]),
                constraint_name=_text(row["constraint_name"]),
                referenced_table=_text(row["referenced_table_name"]),
                referenced_column=_text(row["referenced_column_name"]),
                update_rule=_text(row["update_rule"]) or "",
                delete_rule=_text(row["delete_rule"]) or "",
            )
            for row in rows
        ]

    def references_from(self, table: str) -> list[ForeignKeyRef]:
        return self._foreign_keys(
            "kcu.table_name = %s AND kcu.referenced_column_name IS NOT NULL", table
        )

    def references_to(self, table: str) -> list[ForeignKeyRef]:
        return self._foreign_keys("kcu.referenced_table_name = %s", table)

    def triggers(self, table: str) -> list[TriggerInfo]:
        rows = self.connection.execute_dict("SHOW TRIGGERS LIKE %s", (table,))
        return [
            TriggerInfo(
                name=_text(row["trigger"]),
                timing=_text(row["timing"]),
                event=_text(row["event"]),
                statement=_text(row["statement"]),
            )
            # LIKE treats '_' as a wildcard, so other tables can match too
            for row in rows
            if _text(row.get("table", table)) == table
        ]
