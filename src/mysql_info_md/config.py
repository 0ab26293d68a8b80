"""Configuration dataclasses for the MySQL info generator."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .base.models import PublishingTarget, RenderOptions
from .exceptions import ConfigurationError


@dataclass
class InfoConfig:
    """Run configuration, fixed for the duration of one run.

    Path settings left as ``None`` fall back to the defaults of the chosen
    publishing target.
    """

    # Publishing
    target: Union[PublishingTarget, str, int] = PublishingTarget.STANDALONE
    options: Union[RenderOptions, int] = RenderOptions.NONE

    # Connection parameters
    host: Optional[str] = None
    port: Optional[int] = None
    database: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    # Output settings
    root: Path = field(default_factory=lambda: Path("."))
    path: Optional[str] = None
    image_path: Optional[str] = None
    overview_name: Optional[str] = None
    toc_name: Optional[str] = None
    create_root: bool = False

    # Behavior
    dry_run: bool = False
    verbosity: int = 0

    def __post_init__(self) -> None:
        """Normalize values and reject unknown targets."""
        self.target = PublishingTarget.parse(self.target)
        if isinstance(self.options, int):
            try:
                self.options = RenderOptions(self.options)
            except ValueError as e:
                raise ConfigurationError(f"Invalid option bits: {self.options:#x}") from e

        if isinstance(self.root, str):
            self.root = Path(self.root)

        if self.path is not None:
            self.path = self.path.strip("/")
        if self.image_path is not None:
            self.image_path = self.image_path.strip("/")
        # Only the bare document name is kept, like 'index' for 'index.md'
        if self.overview_name is not None:
            self.overview_name = self._document_name(self.overview_name, "Overview")
        if self.toc_name is not None:
            self.toc_name = self._document_name(self.toc_name, "TOC")

        if self.port is None and self.host:
            self.port = 3306

    @staticmethod
    def _document_name(name: str, label: str) -> str:
        stem = Path(name).stem
        if not stem:
            raise ConfigurationError(f"{label} name must not be empty")
        return stem

    def has_option(self, option: RenderOptions) -> bool:
        return bool(self.options & option)

    def validate(self) -> None:
        """Validate the connection parameters are complete."""
        if not self.host:
            raise ConfigurationError("Host is required")
        if not self.database:
            raise ConfigurationError("Database is required")
        if not self.username:
            raise ConfigurationError("Username is required")
