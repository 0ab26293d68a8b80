"""MySQL backend."""

from .catalog import MySQLCatalogReader
from .connection import MySQLConnection

__all__ = [
    "MySQLConnection",
    "MySQLCatalogReader",
]
