"""Abstract base class for catalog readers."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from .connection import BaseConnection
from .models import (
    ColumnInfo,
    EntityKind,
    ForeignKeyRef,
    RoutineStatus,
    TableStatus,
    TriggerInfo,
)


class BaseCatalogReader(ABC):
    """Reads the catalog of one database.

    Every method issues its query and drains the result before returning,
    so callers never hold an open cursor between two calls.
    """

    def __init__(self, connection: Optional[BaseConnection], config: Any = None):
        self.connection = connection
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def database_name(self) -> str:
        """Name of the database being documented."""
        pass

    @abstractmethod
    def table_status(self) -> list[TableStatus]:
        """Tables and views in catalog order; views carry the comment 'VIEW'."""
        pass

    @abstractmethod
    def columns(self, name: str) -> list[ColumnInfo]:
        """Columns of a table or view."""
        pass

    @abstractmethod
    def procedure_status(self) -> list[RoutineStatus]:
        pass

    @abstractmethod
    def function_status(self) -> list[RoutineStatus]:
        pass

    @abstractmethod
    def show_create(self, kind: EntityKind, name: str) -> Optional[str]:
        """Create statement of a table, view, procedure or function."""
        pass

    @abstractmethod
    def references_from(self, table: str) -> list[ForeignKeyRef]:
        """Foreign key columns of `table` pointing at other tables."""
        pass

    @abstractmethod
    def references_to(self, table: str) -> list[ForeignKeyRef]:
        """Foreign key columns of other tables pointing at `table`."""
        pass

    @abstractmethod
    def triggers(self, table: str) -> list[TriggerInfo]:
        pass
