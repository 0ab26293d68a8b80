"""Generate cross-linked Markdown documentation of a MySQL database."""

from .base.models import PublishingTarget, RenderOptions

__version__ = "1.0.0"

SUPPORTED_TARGETS = [target.value for target in PublishingTarget]

__all__ = [
    "PublishingTarget",
    "RenderOptions",
    "SUPPORTED_TARGETS",
    "__version__",
]
