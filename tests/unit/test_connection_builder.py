"""
Unit tests for vendor connection builders and driver resolution.

Driver modules are replaced by mocks, so no database is needed.
"""

import types
from unittest.mock import MagicMock, patch

import pytest

from ff_sqlkit.db import (
    Connection,
    DatabaseVendor,
    MySQLConnectionBuilder,
    OracleConnectionBuilder,
    PostgresConnectionBuilder,
    SQLServerConnectionBuilder,
    connection_builder,
    load_driver,
)
from ff_sqlkit.db.builders import split_address
from ff_sqlkit.exceptions import ConfigurationError, ConnectionError, DriverLoadError


def configured(builder, driver):
    return (
        builder.set_username("app")
        .set_password("secret")
        .set_database("appdb")
        .set_address("db.internal:5000")
        .set_driver_class(driver)
    )


class TestLoadDriver:
    """Test driver identifier resolution."""

    def test_missing_identifier_raises(self):
        with pytest.raises(DriverLoadError, match="No database driver configured"):
            load_driver(None)

    def test_unknown_module_raises_with_cause(self):
        with pytest.raises(DriverLoadError) as exc_info:
            load_driver("ff_sqlkit_no_such_driver")

        assert exc_info.value.identifier == "ff_sqlkit_no_such_driver"
        assert isinstance(exc_info.value.cause, ImportError)
        assert exc_info.value.__cause__ is exc_info.value.cause

    def test_module_without_connect_raises(self):
        with pytest.raises(DriverLoadError):
            load_driver("json")

    def test_module_object_is_returned(self):
        driver = types.SimpleNamespace(connect=lambda *args, **kwargs: None)
        assert load_driver(driver) is driver

    def test_relative_identifier_raises(self):
        with pytest.raises(DriverLoadError) as exc_info:
            load_driver(".psycopg2")

        assert isinstance(exc_info.value.cause, TypeError)

    def test_driver_failing_on_import_raises(self, tmp_path, monkeypatch):
        """A native library error during import is still a driver load failure."""
        (tmp_path / "ff_sqlkit_broken_driver.py").write_text(
            'raise RuntimeError("libclntsh.so: cannot open shared object file")\n'
        )
        monkeypatch.syspath_prepend(str(tmp_path))

        builder = PostgresConnectionBuilder().set_driver_class("ff_sqlkit_broken_driver")
        with pytest.raises(DriverLoadError) as exc_info:
            builder.build()

        assert isinstance(exc_info.value.cause, RuntimeError)
        assert exc_info.value.__cause__ is exc_info.value.cause

    def test_object_without_connect_raises(self):
        with pytest.raises(DriverLoadError):
            load_driver(types.SimpleNamespace())


class TestSplitAddress:
    """Test host:port parsing used by SQL Server and MySQL."""

    def test_host_and_port(self):
        assert split_address("db.internal:5000") == ("db.internal", 5000)

    def test_host_only(self):
        assert split_address("db.internal") == ("db.internal", None)

    def test_bracketed_ipv6_with_port(self):
        assert split_address("[::1]:5432") == ("::1", 5432)

    def test_bracketed_ipv6_without_port(self):
        assert split_address("[fe80::1]") == ("fe80::1", None)

    def test_unbracketed_ipv6_is_a_bare_host(self):
        assert split_address("::1") == ("::1", None)

    def test_empty(self):
        assert split_address(None) == (None, None)


class TestConnectionBuilderContract:
    """Test behavior common to every vendor builder."""

    @pytest.mark.parametrize(
        "builder_class",
        [
            OracleConnectionBuilder,
            PostgresConnectionBuilder,
            SQLServerConnectionBuilder,
            MySQLConnectionBuilder,
        ],
    )
    def test_setters_chain_on_same_instance(self, builder_class):
        builder = builder_class()

        assert builder.set_username("u") is builder
        assert builder.set_password("p") is builder
        assert builder.set_database("d") is builder
        assert builder.set_address("h:1") is builder
        assert builder.set_driver_class("psycopg2") is builder
        assert builder.set_driver("psycopg2") is builder

    def test_last_write_wins(self):
        builder = PostgresConnectionBuilder().set_database("one").set_database("two")
        assert builder.url == "jdbc:postgresql://None/two"

    def test_missing_driver_fails_before_connecting(self):
        builder = PostgresConnectionBuilder().set_address("localhost:5432").set_database("app")

        with patch.object(PostgresConnectionBuilder, "open_session") as open_session:
            with pytest.raises(DriverLoadError):
                builder.build()

        open_session.assert_not_called()

    def test_unloadable_driver_fails_before_connecting(self):
        builder = configured(OracleConnectionBuilder(), "ff_sqlkit_no_such_driver")

        with patch.object(OracleConnectionBuilder, "open_session") as open_session:
            with pytest.raises(DriverLoadError):
                builder.build()

        open_session.assert_not_called()

    def test_connect_failure_is_wrapped(self):
        driver = MagicMock()
        cause = RuntimeError("password authentication failed")
        driver.connect.side_effect = cause

        with pytest.raises(ConnectionError) as exc_info:
            configured(PostgresConnectionBuilder(), driver).build()

        assert exc_info.value.cause is cause
        assert exc_info.value.__cause__ is cause
        assert exc_info.value.url == "jdbc:postgresql://db.internal:5000/appdb"
        assert "secret" not in str(exc_info.value)

    def test_build_returns_connection_owning_session(self):
        driver = MagicMock()
        conn = configured(PostgresConnectionBuilder(), driver).build()

        assert isinstance(conn, Connection)
        assert conn.get_handle() is driver.connect.return_value

    def test_repr_masks_password(self):
        builder = configured(PostgresConnectionBuilder(), "psycopg2")

        text = repr(builder)
        assert "secret" not in text
        assert "'***'" in text
        assert "psycopg2" in text


class TestOracleConnectionBuilder:
    """Test Oracle URL and session arguments."""

    def test_url(self):
        builder = OracleConnectionBuilder().set_address("localhost:1521").set_database("ORCL")
        assert builder.url == "jdbc:oracle:thin:@//localhost:1521/ORCL"

    def test_opens_with_easy_connect_dsn(self):
        driver = MagicMock()
        configured(OracleConnectionBuilder(), driver).build()

        driver.connect.assert_called_once_with(
            user="app", password="secret", dsn="//db.internal:5000/appdb"
        )


class TestPostgresConnectionBuilder:
    """Test PostgreSQL URL and session arguments."""

    def test_url(self):
        builder = PostgresConnectionBuilder().set_address("localhost:5432").set_database("app")
        assert builder.url == "jdbc:postgresql://localhost:5432/app"

    def test_unset_fields_render_as_none(self):
        assert PostgresConnectionBuilder().build_url() == "jdbc:postgresql://None/None"

    def test_opens_with_libpq_uri(self):
        driver = MagicMock()
        configured(PostgresConnectionBuilder(), driver).build()

        driver.connect.assert_called_once_with(
            dsn="postgresql://db.internal:5000/appdb", user="app", password="secret"
        )


class TestSQLServerConnectionBuilder:
    """Test SQL Server URL and ODBC connection string."""

    def test_url(self):
        builder = SQLServerConnectionBuilder().set_address("localhost:1433").set_database("app")
        assert builder.url == "jdbc:sqlserver://localhost:1433;databaseName=app"

    def test_opens_with_odbc_connection_string(self):
        driver = MagicMock()
        configured(SQLServerConnectionBuilder(), driver).build()

        driver.connect.assert_called_once_with(
            "Driver={ODBC Driver 18 for SQL Server};"
            "Server=tcp:db.internal,5000;"
            "Database=appdb;"
            "Uid=app;"
            "Pwd=secret;"
            "Encrypt=yes;"
            "TrustServerCertificate=no;"
        )

    def test_custom_odbc_driver(self):
        builder = SQLServerConnectionBuilder().set_odbc_driver("FreeTDS").set_address("db")
        assert builder.connection_string().startswith("Driver={FreeTDS};Server=tcp:db;")


class TestMySQLConnectionBuilder:
    """Test MySQL URL and session arguments."""

    def test_url(self):
        builder = MySQLConnectionBuilder().set_address("localhost:3306").set_database("app")
        assert builder.url == "jdbc:mysql://localhost:3306/app"

    def test_opens_with_keyword_arguments(self):
        driver = MagicMock()
        configured(MySQLConnectionBuilder(), driver).build()

        driver.connect.assert_called_once_with(
            host="db.internal", port=5000, user="app", password="secret", database="appdb"
        )

    def test_explicit_port_zero_is_kept(self):
        driver = MagicMock()
        configured(MySQLConnectionBuilder(), driver).set_address("db:0").build()

        assert driver.connect.call_args.kwargs["port"] == 0

    def test_missing_port_uses_default(self):
        driver = MagicMock()
        configured(MySQLConnectionBuilder(), driver).set_address("db").build()

        assert driver.connect.call_args.kwargs["port"] == 3306

    def test_malformed_port_is_a_connection_error(self):
        driver = MagicMock()
        builder = configured(MySQLConnectionBuilder(), driver).set_address("db:notaport")

        with pytest.raises(ConnectionError):
            builder.build()

        driver.connect.assert_not_called()


class TestConnectionBuilderRegistry:
    """Test vendor lookup."""

    @pytest.mark.parametrize(
        "vendor, builder_class",
        [
            (DatabaseVendor.ORACLE, OracleConnectionBuilder),
            ("postgresql", PostgresConnectionBuilder),
            ("SQLSERVER", SQLServerConnectionBuilder),
            ("mysql", MySQLConnectionBuilder),
        ],
    )
    def test_connection_builder(self, vendor, builder_class):
        builder = connection_builder(vendor)
        assert type(builder) is builder_class

    def test_fresh_instance_per_call(self):
        assert connection_builder("oracle") is not connection_builder("oracle")

    def test_unknown_vendor_raises(self):
        with pytest.raises(ConfigurationError, match="Unsupported database vendor"):
            connection_builder("db2")
