"""
Driver resolution.

A driver identifier is either the import path of a DB-API 2.0 module
(``"psycopg2"``, ``"oracledb"``, ``"pyodbc"``, ``"pymysql"``) or the module
object itself. Resolution only imports; it never touches the network.
"""

import importlib
from types import ModuleType
from typing import Any, Union

from ..exceptions import DriverLoadError

DriverIdentifier = Union[str, ModuleType, Any]


def load_driver(identifier: DriverIdentifier) -> Any:
    """
    Resolve a driver identifier to a module exposing ``connect``.

    Args:
        identifier: Module import path or an already imported driver module

    Returns:
        The driver module

    Raises:
        DriverLoadError: If no identifier is set, the module cannot be
            imported, or it has no callable ``connect``
    """
    if identifier is None or identifier == "":
        raise DriverLoadError(None)

    if isinstance(identifier, str):
        try:
            driver = importlib.import_module(identifier)
        except Exception as e:
            raise DriverLoadError(identifier, e) from e
    else:
        driver = identifier

    if not callable(getattr(driver, "connect", None)):
        raise DriverLoadError(identifier, TypeError("driver does not expose a connect() callable"))

    return driver


def driver_name(identifier: DriverIdentifier) -> str:
    """Human readable name of a driver identifier, for logs and reprs."""
    if identifier is None:
        return "None"
    if isinstance(identifier, str):
        return identifier
    return getattr(identifier, "__name__", type(identifier).__name__)
