"""Document generators."""

from .builder import DocumentSetBuilder
from .markdown import MarkdownRenderer, format_default, format_rule
from .paths import PathResolver

__all__ = [
    "DocumentSetBuilder",
    "MarkdownRenderer",
    "PathResolver",
    "format_default",
    "format_rule",
]
