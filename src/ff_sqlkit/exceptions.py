"""
Custom exceptions for the ff-sqlkit package.

Every failure coming from a driver is wrapped in one of these and
re-raised with the original exception kept as ``cause``.
"""

from typing import Any, Optional


class FFSqlKitError(Exception):
    """Base exception for all ff-sqlkit errors."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class DriverLoadError(FFSqlKitError):
    """Raised when a driver identifier cannot be resolved to a DB-API module."""

    def __init__(self, identifier: Any, cause: Optional[BaseException] = None):
        self.identifier = identifier

        if identifier is None:
            message = "No database driver configured"
        else:
            message = f"Failed to load database driver {identifier!r}"

        super().__init__(message, cause)


class ConnectionError(FFSqlKitError):
    """Raised when a session cannot be opened (network, auth, malformed URL)."""

    def __init__(self, url: str, cause: Optional[BaseException] = None):
        self.url = url
        super().__init__(f"Failed to connect to {url}", cause)


class ExecutionError(FFSqlKitError):
    """Raised when a query or update fails on an open connection."""

    def __init__(self, sql: str, cause: Optional[BaseException] = None):
        self.sql = sql
        super().__init__(f"Execution failed for statement {sql!r}", cause)


class ConfigurationError(FFSqlKitError):
    """Raised for unknown vendors or unusable connection settings."""

    pass
