"""Dataclasses and enums for catalog rows and generated documents."""

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Union

from ..exceptions import ConfigurationError


class PublishingTarget(enum.Enum):
    """Output layout the documents are generated for."""

    STANDALONE = "standalone"
    PLATFORM_WIKI = "platform-wiki"
    EMBEDDED_WIKI = "embedded-wiki"

    @classmethod
    def parse(cls, value: Union["PublishingTarget", str, int]) -> "PublishingTarget":
        """Get a target from its name, CLI value or legacy integer code."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            members = list(cls)
            if 0 <= value < len(members):
                return members[value]
        elif isinstance(value, str):
            key = value.strip()
            for member in cls:
                if key.lower() == member.value or key.upper() == member.name:
                    return member
        raise ConfigurationError(
            f"Unknown publishing target: {value!r}. "
            f"Supported targets: {', '.join(m.value for m in cls)}"
        )


class RenderOptions(enum.Flag):
    """Independently toggleable rendering flags."""

    NONE = 0
    SUPPRESS_BACKLINK = 0x0001
    GROUP_BY_KIND = 0x0002
    INCLUDE_DDL = 0x0004
    EMIT_TOC = 0x0008


class EntityKind(enum.Enum):
    """Kind of a documented database object."""

    TABLE = "Table"
    VIEW = "View"
    PROCEDURE = "Procedure"
    FUNCTION = "Function"

    @property
    def prefix(self) -> str:
        """Filename prefix of the detail document."""
        return f"{self.value}_"

    @property
    def create_key(self) -> str:
        """Column holding the statement in the SHOW CREATE result."""
        return f"create {self.value.lower()}"


@dataclass(frozen=True)
class EntityRef:
    """Reference to one documented object."""

    kind: EntityKind
    name: str
    comment: Optional[str] = field(default=None, compare=False)


@dataclass
class TableStatus:
    """One row of SHOW TABLE STATUS (tables and views arrive together)."""

    name: str
    engine: Optional[str] = None
    rows: Optional[int] = None
    update_time: Optional[datetime] = None
    comment: str = ""

    @property
    def is_view(self) -> bool:
        return self.comment == "VIEW"


@dataclass
class ColumnInfo:
    """One row of SHOW FULL COLUMNS."""

    field: str
    type: str
    null: str = "YES"
    key: str = ""
    default: Optional[str] = None
    comment: str = ""

    @property
    def is_nullable(self) -> bool:
        return self.null == "YES"


@dataclass
class RoutineStatus:
    """One row of SHOW PROCEDURE STATUS / SHOW FUNCTION STATUS."""

    name: str
    comment: str = ""


@dataclass
class ForeignKeyRef:
    """A single column of a foreign key constraint."""

    table_name: str
    column_name: str
    referenced_table: str
    referenced_column: str
    update_rule: str = "NO ACTION"
    delete_rule: str = "NO ACTION"
    constraint_name: Optional[str] = None


@dataclass
class TriggerInfo:
    """One row of SHOW TRIGGERS."""

    name: str
    timing: str
    event: str
    statement: str


@dataclass(frozen=True)
class DatabaseCatalog:
    """Names collected by the overview pass, read-only afterwards."""

    name: str
    tables: tuple[EntityRef, ...] = ()
    views: tuple[EntityRef, ...] = ()
    procedures: tuple[EntityRef, ...] = ()
    functions: tuple[EntityRef, ...] = ()

    @property
    def routines(self) -> tuple[EntityRef, ...]:
        return self.procedures + self.functions

    def has_table(self, name: str) -> bool:
        return any(ref.name == name for ref in self.tables)


@dataclass(frozen=True)
class GeneratedDocument:
    """A rendered document and the path it is written to."""

    name: str
    kind: Optional[EntityKind]
    body: str
    path: str

    @property
    def content(self) -> bytes:
        return self.body.encode("utf-8")
