"""Destinations for generated documents."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from .exceptions import PathError, WriteError

logger = logging.getLogger(__name__)


class BaseSink(ABC):
    """Receives (path, bytes) pairs and stores them."""

    @abstractmethod
    def write(self, path: str, content: bytes) -> None:
        """Store a document, overwriting an existing one at the same path."""
        ...


class MemorySink(BaseSink):
    """Keeps documents in memory, in write order."""

    def __init__(self) -> None:
        self.documents: dict[str, bytes] = {}

    def write(self, path: str, content: bytes) -> None:
        self.documents[path] = content
        logger.debug(f"Stored in memory: {path}")

    def text(self, path: str) -> str:
        return self.documents[path].decode("utf-8")


def check_directory(path: Path, create: bool = False) -> None:
    """Make sure `path` is an existing directory.

    Raises:
        PathError: the path does not exist and may not be created, or it
            exists but is not a directory
        WriteError: creating the directory failed
    """
    if not path.exists():
        if not create:
            raise PathError(f"{path} does not exist!")
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WriteError(f"Failed to create directory {path}: {e}") from e
        logger.debug(f"Created directory: {path}")
    elif not path.is_dir():
        raise PathError(f"{path} is not a directory!")


class FileSystemSink(BaseSink):
    """Writes documents below a document root.

    Paths starting with '/' are taken relative to the document root, all
    others relative to the publish directory below it.
    """

    def __init__(
        self,
        root: Union[str, Path] = ".",
        publish_path: Optional[str] = None,
        create_root: bool = False,
        dry_run: bool = False,
    ):
        self.root = Path(root)
        self.dry_run = dry_run
        check_directory(self.root, create=create_root and not dry_run)

        self.publish_dir = self.root / (publish_path or "").strip("/")
        if not dry_run:
            check_directory(self.publish_dir, create=True)
        logger.info(f"Writing documents to {self.publish_dir}")

    def _resolve_path(self, path: str) -> Path:
        """Resolve a document path to a filesystem path below the root."""
        base = self.root if path.startswith("/") else self.publish_dir
        clean = path.lstrip("/")
        if clean.startswith("./"):
            clean = clean[2:]
        full_path = base / clean

        try:
            full_path.resolve().relative_to(self.root.resolve())
        except ValueError:
            raise PathError(f"Invalid path: {path} (outside document root)") from None
        return full_path

    def write(self, path: str, content: bytes) -> Path:
        full_path = self._resolve_path(path)
        if self.dry_run:
            logger.info(f"[DRY RUN] Would write: {full_path}")
            return full_path

        check_directory(full_path.parent, create=True)
        try:
            full_path.write_bytes(content)
        except OSError as e:
            raise WriteError(f"Failed to write {full_path}: {e}") from e
        logger.debug(f"Wrote: {full_path}")
        return full_path
