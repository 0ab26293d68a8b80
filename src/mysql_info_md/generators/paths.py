"""Document locations and cross-links for the publishing targets.

Every target is one ``TargetLayout`` subclass. A layout answers three
questions: which directory a kind of document lives in, how a link to a
document is spelled from a given source document, and where the column
icons are found. ``PathResolver`` wraps the layout chosen for a run and is
the only place the rest of the generator asks for paths.

A ``source`` argument names the kind of the document a link is written
into; ``None`` stands for the overview and the TOC, which always live in
the publish directory itself.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..base.models import EntityKind, PublishingTarget, RenderOptions
from ..config import InfoConfig
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

FILE_SUFFIX = ".md"

GROUP_LABELS = {
    EntityKind.TABLE: "Tables",
    EntityKind.VIEW: "Views",
    EntityKind.PROCEDURE: "Routines",
    EntityKind.FUNCTION: "Routines",
}


def document_stem(kind: Optional[EntityKind], name: str) -> str:
    """Filename of a document without extension."""
    if kind is None:
        return name
    return kind.prefix + name


class TargetLayout(ABC):
    """Layout rules of one publishing target."""

    target: PublishingTarget
    sub_dirs: dict[EntityKind, str] = {}
    default_overview_name = "index"
    default_toc_name = "TOC"
    default_path = ""
    default_image_path = "images"

    def __init__(self, options: RenderOptions, path: str, image_path: str):
        self.options = options
        self.path = path.strip("/")
        self.image_path = image_path.strip("/")

    @property
    @abstractmethod
    def grouped(self) -> bool:
        """Whether entity documents are placed in per-kind sub-directories."""
        pass

    def base_path_for(self, kind: Optional[EntityKind]) -> str:
        """Directory of a document relative to the publish directory."""
        if kind is None or not self.grouped:
            return ""
        return self.sub_dirs[kind]

    @abstractmethod
    def link_path_for(
        self, kind: Optional[EntityKind], name: str, source: Optional[EntityKind] = None
    ) -> str:
        pass

    @abstractmethod
    def image_path_for(self, source: Optional[EntityKind] = None) -> str:
        pass

    def write_path_for(self, kind: Optional[EntityKind], name: str) -> str:
        """Path handed to the sink: the link from the publish directory, as a file."""
        link = self.link_path_for(kind, name)
        if link.endswith(FILE_SUFFIX):
            return link
        return link + FILE_SUFFIX

    def group_label(self, kind: EntityKind) -> str:
        return self.sub_dirs.get(kind) or GROUP_LABELS[kind]


class StandaloneLayout(TargetLayout):
    """Plain file tree, links relative to the writing document."""

    target = PublishingTarget.STANDALONE
    sub_dirs = {
        EntityKind.TABLE: "Tables",
        EntityKind.VIEW: "Views",
        EntityKind.PROCEDURE: "Procedures",
        EntityKind.FUNCTION: "Functions",
    }

    @property
    def grouped(self) -> bool:
        return bool(self.options & RenderOptions.GROUP_BY_KIND)

    def _up(self, source: Optional[EntityKind]) -> str:
        if source is not None and self.grouped:
            return "../"
        return "./"

    def link_path_for(self, kind, name, source=None):
        directory = self.base_path_for(kind)
        prefix = self._up(source) + (directory + "/" if directory else "")
        return prefix + document_stem(kind, name) + FILE_SUFFIX

    def image_path_for(self, source=None):
        return self._up(source) + self.image_path


class PlatformWikiLayout(TargetLayout):
    """Flat wiki of a hosting platform which resolves bare page names."""

    target = PublishingTarget.PLATFORM_WIKI
    default_overview_name = "Home"
    default_toc_name = "_Sidebar"

    @property
    def grouped(self) -> bool:
        return False

    def link_path_for(self, kind, name, source=None):
        return "./" + document_stem(kind, name)

    def image_path_for(self, source=None):
        return "./" + self.image_path


class EmbeddedWikiLayout(TargetLayout):
    """Wiki mounted under a site; every path is absolute from the site root."""

    target = PublishingTarget.EMBEDDED_WIKI
    sub_dirs = {
        EntityKind.TABLE: "01_Tables",
        EntityKind.VIEW: "02_Views",
        EntityKind.PROCEDURE: "03_Routines",
        EntityKind.FUNCTION: "03_Routines",
    }
    default_path = "wiki"
    default_image_path = "wiki/images"

    @property
    def grouped(self) -> bool:
        return True

    def link_path_for(self, kind, name, source=None):
        parts = [self.path, self.base_path_for(kind), document_stem(kind, name) + FILE_SUFFIX]
        return "/" + "/".join(part for part in parts if part)

    def image_path_for(self, source=None):
        return "/" + self.image_path


LAYOUTS: dict[PublishingTarget, type[TargetLayout]] = {
    layout.target: layout
    for layout in (StandaloneLayout, PlatformWikiLayout, EmbeddedWikiLayout)
}


def get_layout(target: PublishingTarget) -> type[TargetLayout]:
    """Get the layout class for a publishing target."""
    try:
        return LAYOUTS[target]
    except KeyError:
        raise ConfigurationError(f"No layout for publishing target: {target!r}") from None


class PathResolver:
    """Resolves write paths and links for one run."""

    def __init__(
        self,
        target: PublishingTarget,
        options: RenderOptions = RenderOptions.NONE,
        path: Optional[str] = None,
        image_path: Optional[str] = None,
        overview_name: Optional[str] = None,
        toc_name: Optional[str] = None,
    ):
        layout_class = get_layout(PublishingTarget.parse(target))
        self.options = options
        self.layout = layout_class(
            options,
            layout_class.default_path if path is None else path,
            layout_class.default_image_path if image_path is None else image_path,
        )
        self.overview_name = overview_name or layout_class.default_overview_name
        self.toc_name = toc_name or layout_class.default_toc_name

        if options & RenderOptions.EMIT_TOC and self.overview_name == self.toc_name:
            raise ConfigurationError(
                f"Overview and table of contents would both be written to '{self.overview_name}'"
            )
        if (
            options & RenderOptions.GROUP_BY_KIND
            and self.layout.target is PublishingTarget.PLATFORM_WIKI
        ):
            logger.debug("Grouping by kind is ignored for the platform wiki")

    @classmethod
    def from_config(cls, config: InfoConfig) -> "PathResolver":
        return cls(
            config.target,
            config.options,
            path=config.path,
            image_path=config.image_path,
            overview_name=config.overview_name,
            toc_name=config.toc_name,
        )

    @property
    def target(self) -> PublishingTarget:
        return self.layout.target

    @property
    def publish_path(self) -> str:
        """Publish directory below the document root."""
        return self.layout.path

    def resolve_link(
        self, kind: Optional[EntityKind], name: str, source: Optional[EntityKind] = None
    ) -> str:
        return self.layout.link_path_for(kind, name, source)

    def resolve_write_path(self, kind: Optional[EntityKind], name: str) -> str:
        return self.layout.write_path_for(kind, name)

    def overview_link(self, source: Optional[EntityKind] = None) -> str:
        return self.resolve_link(None, self.overview_name, source)

    def overview_path(self) -> str:
        return self.resolve_write_path(None, self.overview_name)

    def toc_path(self) -> str:
        return self.resolve_write_path(None, self.toc_name)

    def image_path(self, source: Optional[EntityKind] = None) -> str:
        return self.layout.image_path_for(source)

    def group_label(self, kind: EntityKind) -> str:
        return self.layout.group_label(kind)
