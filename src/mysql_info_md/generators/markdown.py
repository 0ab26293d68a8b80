"""Markdown rendering of overview, TOC and detail documents."""

import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from ..base.models import (
    ColumnInfo,
    DatabaseCatalog,
    EntityKind,
    EntityRef,
    ForeignKeyRef,
    RenderOptions,
    RoutineStatus,
    TableStatus,
    TriggerInfo,
)
from .paths import PathResolver

logger = logging.getLogger(__name__)

NULL_SYMBOLS = {
    "YES": ("Yes", "checked.png", "Allows NULL"),
    "NO": ("No", "unchecked.png", "Not NULL"),
}

KEY_SYMBOLS = {
    "PRI": ("PRI", "pri_key.png", "Primary Key"),
    "UNI": ("UNI", "uni_key.png", "Unique Key"),
    "MUL": ("MUL", "mul_key.png", "Index"),
}


def format_default(default: Optional[str], null: str) -> str:
    """Display value of a column default.

    Tells an SQL NULL default on a nullable column apart from a column
    without default, and an empty string default from both.
    """
    if default is None:
        return "*null*" if null == "YES" else "*not set*"
    if default == "":
        return "*empty*"
    return default


def format_rule(rule: Optional[str]) -> str:
    """Display value of a foreign key UPDATE/DELETE rule."""
    return (rule or "").replace("NO ACTION", "RESTRICT")


def table_row(cells: Sequence[Any]) -> str:
    """A Markdown table row; cell content cannot break the table."""
    return "|" + "|".join(_cell(c) for c in cells) + "|"


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        value = value.strftime("%Y-%m-%d %H:%M:%S")
    text = str(value)
    return text.replace("|", "\\|").replace("\r\n", "<br>").replace("\n", "<br>")


def code_block(statement: str) -> list[str]:
    return ["```SQL", statement.rstrip(), "```"]


class MarkdownRenderer:
    """Turns catalog rows into document bodies.

    Links are never built here; every one of them comes from the resolver.
    """

    def __init__(self, resolver: PathResolver, options: RenderOptions):
        self.resolver = resolver
        self.options = options

    def link(
        self, kind: Optional[EntityKind], name: str, source: Optional[EntityKind] = None
    ) -> str:
        return f"[{name}]({self.resolver.resolve_link(kind, name, source)})"

    def overview_link(self, source: Optional[EntityKind] = None) -> str:
        return f"[Overview]({self.resolver.overview_link(source)})"

    def null_symbol(self, null: str, source: EntityKind) -> str:
        alt, image, title = NULL_SYMBOLS[null]
        return f'![{alt}]({self.resolver.image_path(source)}/{image} "{title}")'

    def key_symbol(self, key: str, source: EntityKind) -> str:
        if not key:
            return ""
        alt, image, title = KEY_SYMBOLS[key]
        return f'![{alt}]({self.resolver.image_path(source)}/{image} "{title}")'

    def _header(self, title: str, ref: EntityRef) -> list[str]:
        lines = [f"# {title}: {ref.name}", ""]
        if not self.options & RenderOptions.SUPPRESS_BACKLINK:
            lines.extend([self.overview_link(ref.kind), ""])
        return lines

    def _columns(self, columns: list[ColumnInfo], source: EntityKind) -> list[str]:
        lines = [
            table_row(["Field", "Type", "Null", "Key", "Default", "Comment"]),
            table_row(["-----", "----", "-", ":-:", "-------", "-------"]),
        ]
        for col in columns:
            lines.append(table_row([
                f"`{col.field}`",
                col.type,
                self.null_symbol(col.null, source),
                self.key_symbol(col.key, source),
                format_default(col.default, col.null),
                col.comment,
            ]))
        lines.append("")
        return lines

    def _partner(self, table: str, column: str, catalog: DatabaseCatalog) -> str:
        if catalog.has_table(table):
            name = self.link(EntityKind.TABLE, table, EntityKind.TABLE)
        else:
            name = f"`{table}`"
        return f"{name} . `{column}`"

    def render_overview(
        self,
        database: str,
        tables: list[TableStatus],
        views: list[str],
        procedures: list[RoutineStatus],
        functions: list[RoutineStatus],
    ) -> str:
        """Overview with tables, views and the combined routines table."""
        lines = [
            f'# Database "{database}" Overview',
            "",
            "## Tables",
            "",
            table_row(["Name", "Engine", "Rows", "updated", "Comment"]),
            table_row(["----", "------", "----", "-------", "-------"]),
        ]
        for status in tables:
            lines.append(table_row([
                self.link(EntityKind.TABLE, status.name),
                status.engine,
                status.rows,
                status.update_time,
                status.comment,
            ]))
        lines.append("")

        if views:
            lines.extend(["## Views", ""])
            for name in views:
                lines.append("- " + self.link(EntityKind.VIEW, name))
            lines.append("")

        if procedures or functions:
            lines.extend([
                "## Routines",
                "",
                table_row(["Name", "Type", "Comment"]),
                table_row(["----", "----", "-------"]),
            ])
            for kind, routines in ((EntityKind.PROCEDURE, procedures), (EntityKind.FUNCTION, functions)):
                for routine in routines:
                    lines.append(table_row([
                        self.link(kind, routine.name),
                        kind.name,
                        routine.comment,
                    ]))
            lines.append("")

        return "\n".join(lines)

    def render_table(
        self,
        ref: EntityRef,
        columns: list[ColumnInfo],
        references: list[ForeignKeyRef],
        referenced_by: list[ForeignKeyRef],
        triggers: list[TriggerInfo],
        ddl: Optional[str],
        catalog: DatabaseCatalog,
    ) -> str:
        """Detail document of a base table."""
        lines = self._header("Table", ref)

        if ref.comment:
            lines.extend([f"**{ref.comment}**", ""])

        lines.extend(self._columns(columns, ref.kind))

        if references:
            lines.extend([
                "## References to other Tables",
                "",
                "|Column|Reference to|UPDATE|DELETE|",
                "|------|------------|------|------|",
            ])
            for fk in references:
                lines.append(table_row([
                    f"`{fk.column_name}`",
                    self._partner(fk.referenced_table, fk.referenced_column, catalog),
                    format_rule(fk.update_rule),
                    format_rule(fk.delete_rule),
                ]))
            lines.append("")

        if referenced_by:
            lines.extend([
                "## Tables referencing this Table",
                "",
                "|Column|Referenced by|UPDATE|DELETE|",
                "|------|-------------|------|------|",
            ])
            for fk in referenced_by:
                lines.append(table_row([
                    f"`{fk.referenced_column}`",
                    self._partner(fk.table_name, fk.column_name, catalog),
                    format_rule(fk.update_rule),
                    format_rule(fk.delete_rule),
                ]))
            lines.append("")

        if triggers:
            lines.extend(["## Trigger", ""])
            for trigger in triggers:
                lines.extend([f"### {trigger.name}: {trigger.timing} {trigger.event}", ""])
                lines.extend(code_block(trigger.statement))
                lines.append("")

        if self.options & RenderOptions.INCLUDE_DDL:
            lines.extend(["## Table Create Statement:", ""])
            if ddl:
                lines.extend(code_block(ddl))
                lines.append("")

        return "\n".join(lines)

    def render_view(self, ref: EntityRef, columns: list[ColumnInfo], ddl: Optional[str]) -> str:
        """Detail document of a view."""
        lines = self._header("View", ref)
        lines.extend(self._columns(columns, ref.kind))

        if self.options & RenderOptions.INCLUDE_DDL:
            lines.extend(["## View Create Statement:", ""])
            if ddl:
                lines.extend(code_block(ddl))
                lines.append("")

        return "\n".join(lines)

    def render_routine(self, ref: EntityRef, ddl: Optional[str]) -> str:
        # The create statement is all there is to a routine, so it is
        # rendered whether or not INCLUDE_DDL is set.
        lines = self._header(ref.kind.value, ref)
        if ref.comment:
            lines.extend([f"**{ref.comment}**", ""])
        if ddl:
            lines.extend(code_block(ddl))
            lines.append("")
        return "\n".join(lines)

    def render_toc(self, catalog: DatabaseCatalog) -> str:
        """Nested navigation list; the overview link is always present."""
        lines = [f'# Database "{catalog.name}"', "", "- " + self.overview_link()]
        groups = (
            (EntityKind.TABLE, catalog.tables),
            (EntityKind.VIEW, catalog.views),
            (EntityKind.PROCEDURE, catalog.routines),
        )
        for kind, refs in groups:
            if not refs:
                continue
            lines.append("  - " + self.resolver.group_label(kind))
            for ref in refs:
                lines.append("    - " + self.link(ref.kind, ref.name))
        lines.append("")
        return "\n".join(lines)
