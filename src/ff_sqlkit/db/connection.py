"""
Connection wrapper around a single DB-API session.

The wrapper owns exactly one session handle. Statements run on a cursor
scoped to the call: query results are fetched in full before the cursor
is closed, so a returned ResultSet stays valid after the statement scope
has ended.
"""

import logging
from contextlib import closing
from typing import Any, Dict, Iterator, List, Optional, Sequence

from ..exceptions import ExecutionError


class ResultSet:
    """
    Materialized rows of a single query.

    Iterates like a forward-only cursor but can be iterated more than once,
    since the rows were fetched before the statement was released.
    """

    def __init__(self, columns: Sequence[str], rows: Sequence[Sequence[Any]]):
        self.columns: List[str] = list(columns)
        self.rows: List[Sequence[Any]] = list(rows)

    def __iter__(self) -> Iterator[Sequence[Any]]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, index):
        return self.rows[index]

    def first(self) -> Optional[Sequence[Any]]:
        """Return the first row, or None for an empty result."""
        return self.rows[0] if self.rows else None

    def as_dicts(self) -> List[Dict[str, Any]]:
        """Return every row as a ``{column: value}`` dict."""
        return [dict(zip(self.columns, row)) for row in self.rows]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(columns={self.columns!r}, rows={len(self.rows)})"


class Connection:
    """
    Thin pass-through over one live database session.

    No parameter binding and no escaping happen here: SQL text is sent to
    the driver exactly as given. The object performs no locking, so
    overlapping use from several threads is the caller's responsibility.

    Usage:
        with PostgresConnectionBuilder().set_driver("psycopg2")...build() as conn:
            rows = conn.execute_query("SELECT id, name FROM users")
            conn.execute_update("DELETE FROM users WHERE id=5")
    """

    def __init__(self, session: Any, logger=None):
        """
        Initialize the wrapper.

        Args:
            session: Open DB-API connection; owned by this object from now on
            logger: Optional logger instance
        """
        self._session = session
        self.logger = logger or logging.getLogger(__name__)

    @property
    def handle(self) -> Any:
        """Raw underlying session."""
        return self._session

    def get_handle(self) -> Any:
        """
        Return the raw underlying session.

        This is an escape hatch for driver features the wrapper does not
        cover; anything done on the handle bypasses this class entirely.
        """
        return self._session

    def execute_query(self, sql: str) -> ResultSet:
        """
        Execute a query, commit, and return its rows.

        :param sql: SQL text, already containing any literal values.
        :return: ResultSet with every row of the query.
        :raises ExecutionError: If the driver fails to execute or fetch.
        """
        self.logger.debug(f"Executing query: {sql}")

        try:
            with closing(self._session.cursor()) as cursor:
                cursor.execute(sql)
                rows = cursor.fetchall()
                columns = [col[0] for col in cursor.description or ()]
            # Auto-commit semantics: no read transaction stays open.
            self._session.commit()
        except Exception as e:
            self.logger.error(f"Query failed: {e}", extra={"sql": sql}, exc_info=True)
            self._rollback()
            raise ExecutionError(sql, e) from e

        return ResultSet(columns, rows)

    def execute_update(self, sql: str) -> int:
        """
        Execute an INSERT, UPDATE, DELETE or DDL statement and commit.

        :param sql: SQL text, already containing any literal values.
        :return: Number of rows affected, as reported by the driver.
        :raises ExecutionError: If execution or commit fails.
        """
        self.logger.debug(f"Executing update: {sql}")

        try:
            with closing(self._session.cursor()) as cursor:
                cursor.execute(sql)
                affected = cursor.rowcount
            self._session.commit()
        except Exception as e:
            self.logger.error(f"Update failed: {e}", extra={"sql": sql}, exc_info=True)
            self._rollback()
            raise ExecutionError(sql, e) from e

        return affected

    def disconnect(self) -> None:
        """
        Close the owned session.

        Further use of this object after disconnecting is undefined.
        """
        self._session.close()
        self.logger.debug("Disconnected database session")

    def _rollback(self) -> None:
        try:
            self._session.rollback()
        except Exception as e:
            # The original failure is what gets raised to the caller.
            self.logger.warning(f"Rollback after failed statement also failed: {e}")

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()
