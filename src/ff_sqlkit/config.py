"""
Connection configuration from environment variables and ``.env`` files.

Example ``.env``:

    FF_SQLKIT_VENDOR=postgresql
    FF_SQLKIT_ADDRESS=db.internal:5432
    FF_SQLKIT_DATABASE=app
    FF_SQLKIT_USERNAME=app
    FF_SQLKIT_PASSWORD=secret
"""

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .db.builders import (
    ConnectionBuilder,
    DatabaseVendor,
    SQLServerConnectionBuilder,
    get_builder_class,
)


class ConnectionSettings(BaseSettings):
    """Connection parameters using Pydantic Settings."""

    model_config = SettingsConfigDict(
        env_prefix="FF_SQLKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    vendor: DatabaseVendor = DatabaseVendor.POSTGRESQL
    username: str | None = None
    password: SecretStr | None = None
    database: str | None = None
    address: str | None = None  # Will be set from vendor
    driver: str | None = None  # Will be set from vendor

    # SQL Server only
    odbc_driver: str = "ODBC Driver 18 for SQL Server"

    def __init__(self, **data):
        """Initialize settings, filling address and driver from the vendor defaults."""
        super().__init__(**data)

        builder_class = get_builder_class(self.vendor)
        if self.address is None:
            self.address = builder_class.default_address
        if self.driver is None:
            self.driver = builder_class.default_driver

    def to_builder(self, logger=None) -> ConnectionBuilder:
        """
        Create a connection builder populated from these settings.

        Args:
            logger: Optional logger instance for the builder

        Returns:
            ConnectionBuilder ready for build()
        """
        builder = get_builder_class(self.vendor)(logger=logger)
        if isinstance(builder, SQLServerConnectionBuilder):
            builder.set_odbc_driver(self.odbc_driver)

        password = self.password.get_secret_value() if self.password is not None else None
        return (
            builder.set_username(self.username)
            .set_password(password)
            .set_database(self.database)
            .set_address(self.address)
            .set_driver_class(self.driver)
        )


@lru_cache
def get_settings() -> ConnectionSettings:
    """Get cached settings instance."""
    return ConnectionSettings()
