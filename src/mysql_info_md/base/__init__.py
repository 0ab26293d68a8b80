"""Base classes and shared interfaces."""

from .connection import BaseConnection
from .models import (
    ColumnInfo,
    DatabaseCatalog,
    EntityKind,
    EntityRef,
    ForeignKeyRef,
    GeneratedDocument,
    PublishingTarget,
    RenderOptions,
    RoutineStatus,
    TableStatus,
    TriggerInfo,
)
from .reader import BaseCatalogReader

__all__ = [
    "BaseConnection",
    "BaseCatalogReader",
    "PublishingTarget",
    "RenderOptions",
    "EntityKind",
    "EntityRef",
    "TableStatus",
    "ColumnInfo",
    "RoutineStatus",
    "ForeignKeyRef",
    "TriggerInfo",
    "DatabaseCatalog",
    "GeneratedDocument",
]
