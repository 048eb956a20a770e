"""
Vendor connection builders.

Each builder accumulates connection parameters through chained setters and
opens a Connection on build(). Vendors differ only in the URL they render
and in how that URL is handed to their native DB-API driver:

    jdbc:oracle:thin:@//<address>/<database>
    jdbc:postgresql://<address>/<database>
    jdbc:sqlserver://<address>;databaseName=<database>
    jdbc:mysql://<address>/<database>
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type, Union

from ..exceptions import ConfigurationError, ConnectionError, DriverLoadError
from .connection import Connection
from .drivers import DriverIdentifier, driver_name, load_driver


class DatabaseVendor(str, Enum):
    """Supported database vendors."""

    ORACLE = "oracle"
    POSTGRESQL = "postgresql"
    SQLSERVER = "sqlserver"
    MYSQL = "mysql"


def split_address(address: Optional[str]) -> Tuple[Optional[str], Optional[int]]:
    """
    Split a ``host:port`` address.

    IPv6 hosts with a port must be bracketed (``[::1]:5432``); an
    unbracketed address with more than one colon is taken as a bare host.

    Args:
        address: Address string, port optional

    Returns:
        Tuple of (host, port); port is None when absent
    """
    if not address:
        return None, None

    if address.startswith("["):
        host, _, rest = address[1:].partition("]")
        return host, int(rest[1:]) if rest.startswith(":") else None

    if address.count(":") > 1:
        return address, None

    host, sep, port = address.rpartition(":")
    if not sep:
        return address, None
    return host, int(port)


class ConnectionBuilder(ABC):
    """
    Abstract base class for vendor connection builders.

    Setters can be called in any order and any number of times; the last
    write wins. Nothing is validated until build(), and absent fields show
    up as ``None`` segments in the rendered URL.

    Usage:
        conn = (
            PostgresConnectionBuilder()
            .set_driver_class("psycopg2")
            .set_address("localhost:5432")
            .set_database("app")
            .set_username("app")
            .set_password("secret")
            .build()
        )
    """

    vendor: DatabaseVendor
    default_driver: str
    default_address: str

    def __init__(self, logger=None):
        """
        Initialize an empty builder.

        Args:
            logger: Optional logger instance, also handed to built connections
        """
        self.username: Optional[str] = None
        self.password: Optional[str] = None
        self.database: Optional[str] = None
        self.address: Optional[str] = None
        self.driver: DriverIdentifier = None
        self.logger = logger or logging.getLogger(__name__)

    def set_username(self, username: str) -> "ConnectionBuilder":
        self.username = username
        return self

    def set_password(self, password: str) -> "ConnectionBuilder":
        self.password = password
        return self

    def set_database(self, database: str) -> "ConnectionBuilder":
        self.database = database
        return self

    def set_address(self, address: str) -> "ConnectionBuilder":
        """Set the ``host:port`` network address."""
        self.address = address
        return self

    def set_driver_class(self, driver: DriverIdentifier) -> "ConnectionBuilder":
        """Set the driver: a DB-API module or its import path."""
        self.driver = driver
        return self

    set_driver = set_driver_class

    @property
    def url(self) -> str:
        """Connection URL for the current settings."""
        return self.build_url()

    @abstractmethod
    def build_url(self) -> str:
        """Render the vendor connection URL."""
        pass

    @abstractmethod
    def open_session(self, driver: Any, url: str) -> Any:
        """
        Open a native session with the loaded driver.

        Args:
            driver: Loaded DB-API module
            url: URL rendered by build_url()

        Returns:
            Open DB-API connection
        """
        pass

    def build(self) -> Connection:
        """
        Load the driver, open a session and wrap it.

        :return: Connection owning the new session.
        :raises DriverLoadError: If the driver cannot be resolved. Raised
            before any network I/O.
        :raises ConnectionError: If the session cannot be opened.
        """
        try:
            driver = load_driver(self.driver)
        except DriverLoadError as e:
            self.logger.error(str(e))
            raise

        url = self.build_url()
        try:
            session = self.open_session(driver, url)
        except Exception as e:
            self.logger.error(f"Failed to connect to {url}: {e}", exc_info=True)
            raise ConnectionError(url, e) from e

        self.logger.info(f"Connected to {self.vendor.value} database: {url}")
        return Connection(session, logger=self.logger)

    def __repr__(self) -> str:
        password = "***" if self.password is not None else None
        return (
            f"{self.__class__.__name__}(username={self.username!r}, password={password!r}, "
            f"database={self.database!r}, address={self.address!r}, "
            f"driver={driver_name(self.driver)!r})"
        )


class OracleConnectionBuilder(ConnectionBuilder):
    """Oracle thin-client style builder, opened with python-oracledb."""

    vendor = DatabaseVendor.ORACLE
    default_driver = "oracledb"
    default_address = "localhost:1521"

    url_prefix = "jdbc:oracle:thin:@"

    def build_url(self) -> str:
        return f"{self.url_prefix}//{self.address}/{self.database}"

    def open_session(self, driver: Any, url: str) -> Any:
        # Easy Connect accepts the "//host:port/service" tail as-is.
        dsn = url[len(self.url_prefix) :]
        return driver.connect(user=self.username, password=self.password, dsn=dsn)


class PostgresConnectionBuilder(ConnectionBuilder):
    """PostgreSQL builder, opened with psycopg2 (or any libpq URI driver)."""

    vendor = DatabaseVendor.POSTGRESQL
    default_driver = "psycopg2"
    default_address = "localhost:5432"

    url_prefix = "jdbc:"

    def build_url(self) -> str:
        return f"{self.url_prefix}postgresql://{self.address}/{self.database}"

    def open_session(self, driver: Any, url: str) -> Any:
        dsn = url[len(self.url_prefix) :]
        return driver.connect(dsn=dsn, user=self.username, password=self.password)


class SQLServerConnectionBuilder(ConnectionBuilder):
    """
    SQL Server builder, opened with pyodbc.

    :param odbc_driver: ODBC driver name (default: ODBC Driver 18 for SQL Server).
    """

    vendor = DatabaseVendor.SQLSERVER
    default_driver = "pyodbc"
    default_address = "localhost:1433"

    def __init__(self, logger=None, odbc_driver: str = "ODBC Driver 18 for SQL Server"):
        super().__init__(logger=logger)
        self.odbc_driver = odbc_driver

    def set_odbc_driver(self, odbc_driver: str) -> "SQLServerConnectionBuilder":
        self.odbc_driver = odbc_driver
        return self

    def build_url(self) -> str:
        return f"jdbc:sqlserver://{self.address};databaseName={self.database}"

    def connection_string(self) -> str:
        """ODBC connection string equivalent to the URL."""
        host, port = split_address(self.address)
        server = f"tcp:{host},{port}" if port is not None else f"tcp:{host}"
        return (
            f"Driver={{{self.odbc_driver}}};"
            f"Server={server};"
            f"Database={self.database};"
            f"Uid={self.username};"
            f"Pwd={self.password};"
            f"Encrypt=yes;"
            f"TrustServerCertificate=no;"
        )

    def open_session(self, driver: Any, url: str) -> Any:
        return driver.connect(self.connection_string())


class MySQLConnectionBuilder(ConnectionBuilder):
    """MySQL builder, opened with PyMySQL."""

    vendor = DatabaseVendor.MYSQL
    default_driver = "pymysql"
    default_address = "localhost:3306"

    def build_url(self) -> str:
        return f"jdbc:mysql://{self.address}/{self.database}"

    def open_session(self, driver: Any, url: str) -> Any:
        host, port = split_address(self.address)
        return driver.connect(
            host=host,
            port=port if port is not None else split_address(self.default_address)[1],
            user=self.username,
            password=self.password,
            database=self.database,
        )


_BUILDERS: Dict[DatabaseVendor, Type[ConnectionBuilder]] = {
    DatabaseVendor.ORACLE: OracleConnectionBuilder,
    DatabaseVendor.POSTGRESQL: PostgresConnectionBuilder,
    DatabaseVendor.SQLSERVER: SQLServerConnectionBuilder,
    DatabaseVendor.MYSQL: MySQLConnectionBuilder,
}


def get_builder_class(vendor: Union[DatabaseVendor, str]) -> Type[ConnectionBuilder]:
    """
    Look up the builder class for a vendor.

    Raises:
        ConfigurationError: If the vendor is not supported
    """
    if isinstance(vendor, str):
        vendor = vendor.lower()

    try:
        return _BUILDERS[DatabaseVendor(vendor)]
    except ValueError as e:
        supported = ", ".join(v.value for v in DatabaseVendor)
        raise ConfigurationError(
            f"Unsupported database vendor: {vendor}. Supported: {supported}"
        ) from e


def connection_builder(vendor: Union[DatabaseVendor, str], logger=None) -> ConnectionBuilder:
    """
    Return a fresh builder for a vendor.

    Args:
        vendor: DatabaseVendor or its string value ("postgresql", "oracle", ...)
        logger: Optional logger instance

    Returns:
        New, empty ConnectionBuilder
    """
    return get_builder_class(vendor)(logger=logger)
