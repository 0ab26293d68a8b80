"""Assembly of the complete document set."""

import logging
from typing import Iterator, Optional

from ..base.models import (
    DatabaseCatalog,
    EntityKind,
    EntityRef,
    GeneratedDocument,
    RenderOptions,
)
from ..base.reader import BaseCatalogReader
from ..config import InfoConfig
from ..sinks import BaseSink
from .markdown import MarkdownRenderer
from .paths import PathResolver

logger = logging.getLogger(__name__)


class DocumentSetBuilder:
    """Builds the overview, every detail document and the TOC.

    The overview pass returns the catalog it collected; all later steps
    take that catalog as an argument, so no detail document can be built
    from a half-read catalog.
    """

    def __init__(self, reader: BaseCatalogReader, config: InfoConfig):
        self.reader = reader
        self.options = config.options
        self.resolver = PathResolver.from_config(config)
        self.renderer = MarkdownRenderer(self.resolver, self.options)

    def _document(self, name: str, kind: Optional[EntityKind], body: str) -> GeneratedDocument:
        return GeneratedDocument(
            name=name,
            kind=kind,
            body=body,
            path=self.resolver.resolve_write_path(kind, name),
        )

    def build_overview(self) -> tuple[GeneratedDocument, DatabaseCatalog]:
        """Build the overview and collect the names of all documented objects."""
        database = self.reader.database_name()

        tables = []
        views = []
        for status in self.reader.table_status():
            if status.is_view:
                views.append(status.name)
            else:
                tables.append(status)

        procedures = self.reader.procedure_status()
        functions = self.reader.function_status()
        logger.info(
            f"Found {len(tables)} tables, {len(views)} views, "
            f"{len(procedures)} procedures, {len(functions)} functions"
        )

        catalog = DatabaseCatalog(
            name=database,
            tables=tuple(EntityRef(EntityKind.TABLE, t.name, (t.comment or "").strip()) for t in tables),
            views=tuple(EntityRef(EntityKind.VIEW, name) for name in views),
            procedures=tuple(EntityRef(EntityKind.PROCEDURE, p.name, p.comment) for p in procedures),
            functions=tuple(EntityRef(EntityKind.FUNCTION, f.name, f.comment) for f in functions),
        )
        body = self.renderer.render_overview(database, tables, views, procedures, functions)
        return self._document(self.resolver.overview_name, None, body), catalog

    def build_table_details(self, catalog: DatabaseCatalog) -> Iterator[GeneratedDocument]:
        include_ddl = bool(self.options & RenderOptions.INCLUDE_DDL)
        for ref in catalog.tables:
            logger.debug(f"Rendering table {ref.name}")
            body = self.renderer.render_table(
                ref,
                columns=self.reader.columns(ref.name),
                references=self.reader.references_from(ref.name),
                referenced_by=self.reader.references_to(ref.name),
                triggers=self.reader.triggers(ref.name),
                ddl=self.reader.show_create(ref.kind, ref.name) if include_ddl else None,
                catalog=catalog,
            )
            yield self._document(ref.name, ref.kind, body)

    def build_view_details(self, catalog: DatabaseCatalog) -> Iterator[GeneratedDocument]:
        include_ddl = bool(self.options & RenderOptions.INCLUDE_DDL)
        for ref in catalog.views:
            logger.debug(f"Rendering view {ref.name}")
            body = self.renderer.render_view(
                ref,
                columns=self.reader.columns(ref.name),
                ddl=self.reader.show_create(ref.kind, ref.name) if include_ddl else None,
            )
            yield self._document(ref.name, ref.kind, body)

    def build_routine_details(self, catalog: DatabaseCatalog) -> Iterator[GeneratedDocument]:
        """Procedures first, then functions."""
        for ref in catalog.routines:
            logger.debug(f"Rendering {ref.kind.value.lower()} {ref.name}")
            body = self.renderer.render_routine(ref, self.reader.show_create(ref.kind, ref.name))
            yield self._document(ref.name, ref.kind, body)

    def build_toc(self, catalog: DatabaseCatalog) -> Optional[GeneratedDocument]:
        if not self.options & RenderOptions.EMIT_TOC:
            return None
        return self._document(self.resolver.toc_name, None, self.renderer.render_toc(catalog))

    def iter_documents(self) -> Iterator[GeneratedDocument]:
        """Yield the documents in their fixed build order."""
        overview, catalog = self.build_overview()
        yield overview
        yield from self.build_table_details(catalog)
        yield from self.build_view_details(catalog)
        yield from self.build_routine_details(catalog)
        toc = self.build_toc(catalog)
        if toc is not None:
            yield toc

    def build(self) -> list[GeneratedDocument]:
        """Build the complete document set in memory."""
        return list(self.iter_documents())

    def publish(self, sink: BaseSink) -> list[str]:
        """Build every document and hand it to the sink; returns the written paths."""
        written = []
        for document in self.iter_documents():
            sink.write(document.path, document.content)
            written.append(document.path)
        logger.info(f"Published {len(written)} documents")
        return written
