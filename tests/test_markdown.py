"""Tests for markdown rendering."""

from datetime import datetime

import pytest
from mysql_info_md.base.models import (
    ColumnInfo,
    DatabaseCatalog,
    EntityKind,
    EntityRef,
    ForeignKeyRef,
    PublishingTarget,
    RenderOptions,
    RoutineStatus,
    TableStatus,
    TriggerInfo,
)
from mysql_info_md.generators.markdown import (
    MarkdownRenderer,
    format_default,
    format_rule,
    table_row,
)
from mysql_info_md.generators.paths import PathResolver


def make_renderer(target=PublishingTarget.STANDALONE, options=RenderOptions.NONE, **kwargs):
    return MarkdownRenderer(PathResolver(target, options, **kwargs), options)


USERS = EntityRef(EntityKind.TABLE, "users", "registered users")
CATALOG = DatabaseCatalog(
    name="shop",
    tables=(EntityRef(EntityKind.TABLE, "orders"), USERS),
    views=(EntityRef(EntityKind.VIEW, "order_totals"),),
    procedures=(EntityRef(EntityKind.PROCEDURE, "purge"),),
    functions=(EntityRef(EntityKind.FUNCTION, "total"),),
)


class TestFormatDefault:
    """Tests for default value display."""

    @pytest.mark.parametrize(
        "default,null,expected",
        [
            (None, "YES", "*null*"),
            (None, "NO", "*not set*"),
            ("", "NO", "*empty*"),
            ("", "YES", "*empty*"),
            ("active", "NO", "active"),
            ("0", "YES", "0"),
        ],
    )
    def test_states(self, default, null, expected):
        """Should tell null, unset, empty and explicit defaults apart."""
        assert format_default(default, null) == expected


class TestFormatRule:
    """Tests for foreign key rule display."""

    def test_no_action(self):
        """Should show NO ACTION as RESTRICT."""
        assert format_rule("NO ACTION") == "RESTRICT"

    def test_passthrough(self):
        """Should keep other rules unchanged."""
        assert format_rule("CASCADE") == "CASCADE"
        assert format_rule("SET NULL") == "SET NULL"
        assert format_rule("RESTRICT") == "RESTRICT"


class TestTableRow:
    """Tests for markdown table rows."""

    def test_cells(self):
        """Should join cells with pipes."""
        assert table_row(["a", 1, None]) == "|a|1||"

    def test_escapes_pipes_and_newlines(self):
        """Should keep cell content from breaking the table."""
        assert table_row(["a|b", "line1\nline2"]) == "|a\\|b|line1<br>line2|"

    def test_datetime(self):
        """Should format timestamps."""
        assert table_row([datetime(2024, 1, 15, 10, 30)]) == "|2024-01-15 10:30:00|"


class TestSymbols:
    """Tests for null and key icons."""

    def test_null_symbols(self):
        """Should render the two nullability icons."""
        renderer = make_renderer(options=RenderOptions.GROUP_BY_KIND)
        assert renderer.null_symbol("YES", EntityKind.TABLE) == '![Yes](../images/checked.png "Allows NULL")'
        assert renderer.null_symbol("NO", EntityKind.TABLE) == '![No](../images/unchecked.png "Not NULL")'

    def test_key_symbols(self):
        """Should render an empty cell or one of three key icons."""
        renderer = make_renderer()
        assert renderer.key_symbol("", EntityKind.TABLE) == ""
        assert renderer.key_symbol("PRI", EntityKind.TABLE) == '![PRI](./images/pri_key.png "Primary Key")'
        assert renderer.key_symbol("UNI", EntityKind.TABLE) == '![UNI](./images/uni_key.png "Unique Key")'
        assert renderer.key_symbol("MUL", EntityKind.TABLE) == '![MUL](./images/mul_key.png "Index")'

    def test_embedded_icons_are_root_absolute(self):
        """Should use the root-absolute image path for the embedded wiki."""
        renderer = make_renderer(PublishingTarget.EMBEDDED_WIKI)
        assert renderer.key_symbol("PRI", EntityKind.VIEW).startswith("![PRI](/wiki/images/pri_key.png")


class TestRenderTable:
    """Tests for table documents."""

    def render(self, options=RenderOptions.NONE, **kwargs):
        params = dict(
            columns=[ColumnInfo(field="id", type="int(11)", null="NO", key="PRI")],
            references=[],
            referenced_by=[],
            triggers=[],
            ddl="CREATE TABLE `users` (...)",
            catalog=CATALOG,
        )
        params.update(kwargs)
        return make_renderer(options=options).render_table(USERS, **params)

    def test_section_order(self):
        """Should render sections in their fixed order."""
        fk = ForeignKeyRef("users", "group_id", "groups", "id", "CASCADE", "NO ACTION")
        inbound = ForeignKeyRef("orders", "user_id", "users", "id", "NO ACTION", "CASCADE")
        trigger = TriggerInfo("users_bi", "BEFORE", "INSERT", "SET NEW.id = 1")
        body = self.render(
            RenderOptions.INCLUDE_DDL,
            references=[fk],
            referenced_by=[inbound],
            triggers=[trigger],
        )
        markers = [
            "# Table: users",
            "[Overview](./index.md)",
            "**registered users**",
            "|Field|Type|Null|Key|Default|Comment|",
            "## References to other Tables",
            "## Tables referencing this Table",
            "## Trigger",
            "### users_bi: BEFORE INSERT",
            "## Table Create Statement:",
            "CREATE TABLE `users` (...)",
        ]
        positions = [body.index(marker) for marker in markers]
        assert positions == sorted(positions)

    def test_column_row(self):
        """Should render field, type, icons and default."""
        body = self.render()
        assert (
            '|`id`|int(11)|![No](./images/unchecked.png "Not NULL")'
            '|![PRI](./images/pri_key.png "Primary Key")|*not set*||'
        ) in body

    def test_backlink_suppressed(self):
        """Should omit the overview link when suppressed."""
        body = self.render(RenderOptions.SUPPRESS_BACKLINK)
        assert "[Overview]" not in body

    def test_ddl_only_when_enabled(self):
        """Should render the create statement only with INCLUDE_DDL."""
        assert "## Table Create Statement:" not in self.render()
        assert "```SQL\nCREATE TABLE `users` (...)\n```" in self.render(RenderOptions.INCLUDE_DDL)

    def test_no_optional_sections(self):
        """Should skip empty foreign key and trigger sections."""
        body = self.render()
        assert "## References to other Tables" not in body
        assert "## Tables referencing this Table" not in body
        assert "## Trigger" not in body

    def test_rules_translated(self):
        """Should show NO ACTION rules as RESTRICT."""
        fk = ForeignKeyRef("users", "group_id", "groups", "id", "NO ACTION", "CASCADE")
        body = self.render(references=[fk])
        assert "|`group_id`|`groups` . `id`|RESTRICT|CASCADE|" in body

    def test_documented_partner_is_linked(self):
        """Should link foreign key partners documented in this run."""
        inbound = ForeignKeyRef("orders", "user_id", "users", "id", "NO ACTION", "NO ACTION")
        body = self.render(referenced_by=[inbound])
        assert "|`id`|[orders](./Table_orders.md) . `user_id`|RESTRICT|RESTRICT|" in body

    def test_no_comment(self):
        """Should skip the comment line for tables without comment."""
        body = make_renderer().render_table(
            EntityRef(EntityKind.TABLE, "orders", ""),
            columns=[], references=[], referenced_by=[], triggers=[], ddl=None, catalog=CATALOG,
        )
        assert "**" not in body


class TestRenderView:
    """Tests for view documents."""

    def test_view(self):
        """Should render title, backlink, columns and optional DDL."""
        ref = EntityRef(EntityKind.VIEW, "order_totals")
        columns = [ColumnInfo(field="total", type="decimal(10,2)", null="YES")]
        renderer = make_renderer(options=RenderOptions.GROUP_BY_KIND | RenderOptions.INCLUDE_DDL)
        body = renderer.render_view(ref, columns, "CREATE VIEW x")
        assert body.startswith("# View: order_totals\n\n[Overview](../index.md)\n")
        assert '|`total`|decimal(10,2)|![Yes](../images/checked.png "Allows NULL")||*null*||' in body
        assert "## View Create Statement:" in body

    def test_view_without_ddl(self):
        """Should skip the create statement without INCLUDE_DDL."""
        body = make_renderer().render_view(EntityRef(EntityKind.VIEW, "v"), [], "CREATE VIEW x")
        assert "CREATE VIEW" not in body


class TestRenderRoutine:
    """Tests for procedure and function documents."""

    def test_ddl_always_rendered(self):
        """Should render the create statement even without INCLUDE_DDL."""
        ref = EntityRef(EntityKind.PROCEDURE, "purge", "nightly cleanup")
        body = make_renderer().render_routine(ref, "CREATE PROCEDURE purge() BEGIN END")
        assert body.startswith("# Procedure: purge\n")
        assert "**nightly cleanup**" in body
        assert "```SQL\nCREATE PROCEDURE purge() BEGIN END\n```" in body

    def test_function_title(self):
        """Should title functions as functions."""
        body = make_renderer().render_routine(EntityRef(EntityKind.FUNCTION, "total"), None)
        assert body.startswith("# Function: total\n")
        assert "```" not in body


class TestRenderOverview:
    """Tests for the overview document."""

    def test_tables_views_routines(self):
        """Should list tables, views and one routines table."""
        body = make_renderer().render_overview(
            "shop",
            [TableStatus("users", "InnoDB", 3, datetime(2024, 1, 15, 10, 30), "registered users")],
            ["order_totals"],
            [RoutineStatus("purge", "nightly cleanup")],
            [RoutineStatus("total", "")],
        )
        assert body.startswith('# Database "shop" Overview\n')
        assert "|[users](./Table_users.md)|InnoDB|3|2024-01-15 10:30:00|registered users|" in body
        assert "- [order_totals](./View_order_totals.md)" in body
        assert "|[purge](./Procedure_purge.md)|PROCEDURE|nightly cleanup|" in body
        assert "|[total](./Function_total.md)|FUNCTION||" in body
        assert body.count("|Name|Type|Comment|") == 1

    def test_routines_header_once_with_functions_only(self):
        """Should emit the routines header for functions alone."""
        body = make_renderer().render_overview("shop", [], [], [], [RoutineStatus("total")])
        assert body.count("## Routines") == 1
        assert body.count("|Name|Type|Comment|") == 1

    def test_no_routines(self):
        """Should skip views and routines when there are none."""
        body = make_renderer().render_overview("shop", [], [], [], [])
        assert "## Views" not in body
        assert "## Routines" not in body


class TestRenderToc:
    """Tests for the table of contents."""

    def test_nested_groups(self):
        """Should list the overview, then one group per kind."""
        renderer = make_renderer(options=RenderOptions.GROUP_BY_KIND | RenderOptions.EMIT_TOC)
        body = renderer.render_toc(CATALOG)
        assert body.splitlines() == [
            '# Database "shop"',
            "",
            "- [Overview](./index.md)",
            "  - Tables",
            "    - [orders](./Tables/Table_orders.md)",
            "    - [users](./Tables/Table_users.md)",
            "  - Views",
            "    - [order_totals](./Views/View_order_totals.md)",
            "  - Procedures",
            "    - [purge](./Procedures/Procedure_purge.md)",
            "    - [total](./Functions/Function_total.md)",
        ]

    def test_overview_link_kept_when_suppressed(self):
        """Should keep the overview link even with SUPPRESS_BACKLINK."""
        renderer = make_renderer(
            PublishingTarget.PLATFORM_WIKI,
            RenderOptions.EMIT_TOC | RenderOptions.SUPPRESS_BACKLINK,
        )
        assert "- [Overview](./Home)" in renderer.render_toc(CATALOG)

    def test_empty_groups_skipped(self):
        """Should skip kinds without entries."""
        catalog = DatabaseCatalog(name="demo", tables=(EntityRef(EntityKind.TABLE, "users"),))
        body = make_renderer(PublishingTarget.PLATFORM_WIKI).render_toc(catalog)
        assert "  - Tables" in body
        assert "Views" not in body
        assert "Routines" not in body
