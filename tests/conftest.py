"""Shared fixtures for tests."""

from datetime import datetime
from typing import Optional

import pytest
from mysql_info_md.base import BaseCatalogReader
from mysql_info_md.base.models import (
    ColumnInfo,
    EntityKind,
    ForeignKeyRef,
    RoutineStatus,
    TableStatus,
    TriggerInfo,
)


class FakeCatalogReader(BaseCatalogReader):
    """Catalog reader serving fixed rows, recording every call."""

    def __init__(
        self,
        name: str = "demo",
        statuses: Optional[list[TableStatus]] = None,
        columns: Optional[dict[str, list[ColumnInfo]]] = None,
        procedures: Optional[list[RoutineStatus]] = None,
        functions: Optional[list[RoutineStatus]] = None,
        creates: Optional[dict[tuple[EntityKind, str], str]] = None,
        foreign_keys: Optional[list[ForeignKeyRef]] = None,
        triggers: Optional[dict[str, list[TriggerInfo]]] = None,
    ):
        super().__init__(None)
        self.name = name
        self.statuses = statuses or []
        self.column_rows = columns or {}
        self.procedures = procedures or []
        self.functions = functions or []
        self.creates = creates or {}
        self.foreign_keys = foreign_keys or []
        self.trigger_rows = triggers or {}
        self.calls: list[tuple] = []

    def database_name(self) -> str:
        return self.name

    def table_status(self) -> list[TableStatus]:
        self.calls.append(("table_status",))
        return list(self.statuses)

    def columns(self, name: str) -> list[ColumnInfo]:
        self.calls.append(("columns", name))
        return list(self.column_rows.get(name, []))

    def procedure_status(self) -> list[RoutineStatus]:
        self.calls.append(("procedure_status",))
        return list(self.procedures)

    def function_status(self) -> list[RoutineStatus]:
        self.calls.append(("function_status",))
        return list(self.functions)

    def show_create(self, kind: EntityKind, name: str) -> Optional[str]:
        self.calls.append(("show_create", kind, name))
        return self.creates.get((kind, name))

    def references_from(self, table: str) -> list[ForeignKeyRef]:
        return [fk for fk in self.foreign_keys if fk.table_name == table]

    def references_to(self, table: str) -> list[ForeignKeyRef]:
        return [fk for fk in self.foreign_keys if fk.referenced_table == table]

    def triggers(self, table: str) -> list[TriggerInfo]:
        return list(self.trigger_rows.get(table, []))


USERS_COLUMNS = [
    ColumnInfo(field="id", type="int(11)", null="NO", key="PRI", default=None, comment=""),
    ColumnInfo(field="name", type="varchar(50)", null="NO", key="UNI", default="", comment="login"),
    ColumnInfo(field="status", type="varchar(10)", null="NO", key="", default="active"),
    ColumnInfo(field="note", type="text", null="YES", key="", default=None),
]

ORDERS_COLUMNS = [
    ColumnInfo(field="id", type="int(11)", null="NO", key="PRI"),
    ColumnInfo(field="user_id", type="int(11)", null="NO", key="MUL"),
]


@pytest.fixture
def users_reader() -> FakeCatalogReader:
    """A database with the single table `users`."""
    return FakeCatalogReader(
        statuses=[
            TableStatus(
                name="users",
                engine="InnoDB",
                rows=3,
                update_time=datetime(2024, 1, 15, 10, 30, 0),
                comment="registered users",
            ),
        ],
        columns={"users": USERS_COLUMNS},
        creates={(EntityKind.TABLE, "users"): "CREATE TABLE `users` (\n  `id` int(11) NOT NULL\n)"},
    )


@pytest.fixture
def shop_reader() -> FakeCatalogReader:
    """Two related tables, a view, a procedure, a function and a trigger."""
    return FakeCatalogReader(
        name="shop",
        statuses=[
            TableStatus(name="orders", engine="InnoDB", rows=10, comment=""),
            TableStatus(name="order_totals", comment="VIEW"),
            TableStatus(name="users", engine="InnoDB", rows=3, comment="registered users"),
        ],
        columns={
            "orders": ORDERS_COLUMNS,
            "users": USERS_COLUMNS,
            "order_totals": [ColumnInfo(field="total", type="decimal(10,2)", null="YES")],
        },
        procedures=[RoutineStatus(name="purge_orders", comment="nightly cleanup")],
        functions=[RoutineStatus(name="order_count", comment="")],
        creates={
            (EntityKind.TABLE, "orders"): "CREATE TABLE `orders` (...)",
            (EntityKind.TABLE, "users"): "CREATE TABLE `users` (...)",
            (EntityKind.VIEW, "order_totals"): "CREATE VIEW `order_totals` AS SELECT 1",
            (EntityKind.PROCEDURE, "purge_orders"): "CREATE PROCEDURE `purge_orders`() BEGIN END",
            (EntityKind.FUNCTION, "order_count"): "CREATE FUNCTION `order_count`() RETURNS int RETURN 1",
        },
        foreign_keys=[
            ForeignKeyRef(
                table_name="orders",
                column_name="user_id",
                referenced_table="users",
                referenced_column="id",
                update_rule="NO ACTION",
                delete_rule="NO ACTION",
                constraint_name="fk_orders_users",
            ),
        ],
        triggers={
            "orders": [
                TriggerInfo(
                    name="orders_bi",
                    timing="BEFORE",
                    event="INSERT",
                    statement="SET NEW.id = NEW.id",
                ),
            ],
        },
    )
