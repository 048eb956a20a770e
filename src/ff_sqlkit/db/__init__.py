"""
Database connection modules.
"""

from .builders import (
    ConnectionBuilder,
    DatabaseVendor,
    MySQLConnectionBuilder,
    OracleConnectionBuilder,
    PostgresConnectionBuilder,
    SQLServerConnectionBuilder,
    connection_builder,
    get_builder_class,
)
from .connection import Connection, ResultSet
from .drivers import load_driver

__all__ = [
    "Connection",
    "ResultSet",
    "ConnectionBuilder",
    "DatabaseVendor",
    "connection_builder",
    "get_builder_class",
    "load_driver",
    # Vendors
    "OracleConnectionBuilder",
    "PostgresConnectionBuilder",
    "SQLServerConnectionBuilder",
    "MySQLConnectionBuilder",
]
