"""
ff-sqlkit: Vendor-neutral database connections and fluent SQL builders.

Features:
- Chained connection builders for Oracle, PostgreSQL, SQL Server and MySQL
- Thin Connection wrapper over any DB-API 2.0 driver
- SELECT / INSERT / UPDATE / DELETE string builders
- Environment based connection settings

Values given to the SQL builders are rendered verbatim. No quoting, escaping
or parameter binding is performed anywhere in this package.
"""

# Version is read from package metadata (pyproject.toml is the single source of truth)
try:
    from importlib.metadata import version

    __version__ = version("ff-sqlkit")
except Exception:
    __version__ = "0.1.0"

# Database exports
from .db import (
    Connection,
    ConnectionBuilder,
    DatabaseVendor,
    MySQLConnectionBuilder,
    OracleConnectionBuilder,
    PostgresConnectionBuilder,
    ResultSet,
    SQLServerConnectionBuilder,
    connection_builder,
    load_driver,
)

# SQL builders
from .sql import DeleteBuilder, InsertBuilder, QueryBuilder, SelectBuilder, UpdateBuilder

# Configuration
from .config import ConnectionSettings, get_settings

# Exceptions
from .exceptions import (
    FFSqlKitError,
    ConfigurationError,
    ConnectionError,
    DriverLoadError,
    ExecutionError,
)

__all__ = [
    # Version
    "__version__",
    # Connections
    "Connection",
    "ResultSet",
    "ConnectionBuilder",
    "DatabaseVendor",
    "connection_builder",
    "load_driver",
    "OracleConnectionBuilder",
    "PostgresConnectionBuilder",
    "SQLServerConnectionBuilder",
    "MySQLConnectionBuilder",
    # SQL builders
    "QueryBuilder",
    "SelectBuilder",
    "InsertBuilder",
    "UpdateBuilder",
    "DeleteBuilder",
    # Configuration
    "ConnectionSettings",
    "get_settings",
    # Exceptions
    "FFSqlKitError",
    "ConfigurationError",
    "ConnectionError",
    "DriverLoadError",
    "ExecutionError",
]
