"""
Pytest configuration for integration tests.

Integration tests run against a live PostgreSQL server named by
FF_SQLKIT_TEST_POSTGRES_ADDRESS (``host:port``) and are skipped otherwise.
"""

import os

import pytest

from ff_sqlkit import PostgresConnectionBuilder


@pytest.fixture(scope="session")
def postgres_builder():
    """Builder for the test database, skipping when none is configured."""
    pytest.importorskip("psycopg2")

    address = os.environ.get("FF_SQLKIT_TEST_POSTGRES_ADDRESS")
    if not address:
        pytest.skip("FF_SQLKIT_TEST_POSTGRES_ADDRESS not set")

    return (
        PostgresConnectionBuilder()
        .set_driver_class("psycopg2")
        .set_address(address)
        .set_database(os.environ.get("FF_SQLKIT_TEST_POSTGRES_DATABASE", "postgres"))
        .set_username(os.environ.get("FF_SQLKIT_TEST_POSTGRES_USER", "postgres"))
        .set_password(os.environ.get("FF_SQLKIT_TEST_POSTGRES_PASSWORD", "postgres"))
    )


@pytest.fixture
def db_connection(postgres_builder):
    """Open connection with a scratch table, dropped afterwards."""
    conn = postgres_builder.build()
    conn.execute_update("DROP TABLE IF EXISTS ff_sqlkit_people")
    conn.execute_update("CREATE TABLE ff_sqlkit_people (id INTEGER PRIMARY KEY, name TEXT)")

    yield conn

    conn.execute_update("DROP TABLE IF EXISTS ff_sqlkit_people")
    conn.disconnect()
