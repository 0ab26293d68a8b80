"""Custom exceptions for the MySQL info generator."""


class MySqlInfoError(Exception):
    """Base exception for all generator errors."""

    pass


class ConnectionError(MySqlInfoError):
    """Error establishing database connection."""

    pass


class ConfigurationError(MySqlInfoError):
    """Error in configuration, publishing target or option combination."""

    pass


class ExtractionError(MySqlInfoError):
    """Error reading catalog metadata."""

    pass


class PathError(MySqlInfoError):
    """Output root is missing, is not a directory, or is escaped by a path."""

    pass


class WriteError(MySqlInfoError):
    """Error creating a directory or writing a document."""

    pass


class BackendNotAvailableError(MySqlInfoError):
    """Required database driver is not installed."""

    pass
