"""
Fluent SQL statement builders.

Builds SELECT, INSERT, UPDATE and DELETE statements as plain strings.

Values are rendered with ``str()`` and are never quoted or escaped: pass
string literals already in SQL form (``"'O''Reilly'"``). Output from these
builders must not contain untrusted input.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class QueryBuilder:
    """
    Stateless entry points for the statement builders.

    Usage:
        sql = QueryBuilder.select("id", "name").from_("users").where("id=5").build()
        sql = QueryBuilder.insert("users").columns("id", "name").values(5, "'Ann'").build()
    """

    @staticmethod
    def select(*columns: str) -> "SelectBuilder":
        """Return a new SelectBuilder for the given columns."""
        return SelectBuilder(*columns)

    @staticmethod
    def insert(table: str) -> "InsertBuilder":
        """Return a new InsertBuilder for the given table."""
        return InsertBuilder(table)

    @staticmethod
    def update(table: str) -> "UpdateBuilder":
        """Return a new UpdateBuilder for the given table."""
        return UpdateBuilder(table)

    @staticmethod
    def delete(table: str) -> "DeleteBuilder":
        """Return a new DeleteBuilder for the given table."""
        return DeleteBuilder(table)


class _StatementBuilder(ABC):
    @abstractmethod
    def build(self) -> str:
        """Render the statement."""
        pass

    def _where_clause(self, condition: Optional[str]) -> str:
        # Only None suppresses the clause; an empty condition still renders.
        return f" WHERE {condition}" if condition is not None else ""

    def __str__(self) -> str:
        return self.build()


class SelectBuilder(_StatementBuilder):
    """Builds ``SELECT <columns> FROM <table>[ WHERE <condition>]``."""

    def __init__(self, *columns: str):
        self._columns: List[str] = list(columns)
        self._table: Optional[str] = None
        self._condition: Optional[str] = None

    def from_(self, table: str) -> "SelectBuilder":
        """Set the table to select from."""
        self._table = table
        return self

    def where(self, condition: str) -> "SelectBuilder":
        """Set the WHERE condition."""
        self._condition = condition
        return self

    def build(self) -> str:
        query = f"SELECT {', '.join(self._columns)} FROM {self._table}"
        return query + self._where_clause(self._condition)


class InsertBuilder(_StatementBuilder):
    """
    Builds ``INSERT INTO <table> (<columns>) VALUES (<values>)``.

    Columns and values are two independent lists; nothing checks that their
    lengths match.
    """

    def __init__(self, table: str):
        self._table = table
        self._columns: List[str] = []
        self._values: List[Any] = []

    def columns(self, *columns: str) -> "InsertBuilder":
        """Append columns to insert into."""
        self._columns.extend(columns)
        return self

    def values(self, *values: Any) -> "InsertBuilder":
        """Append values, rendered verbatim with str()."""
        self._values.extend(values)
        return self

    def build(self) -> str:
        columns = ", ".join(self._columns)
        values = ", ".join(str(value) for value in self._values)
        return f"INSERT INTO {self._table} ({columns}) VALUES ({values})"


class UpdateBuilder(_StatementBuilder):
    """Builds ``UPDATE <table> SET <col> = <val>, ...[ WHERE <condition>]``."""

    def __init__(self, table: str):
        self._table = table
        self._assignments: Dict[str, Any] = {}
        self._condition: Optional[str] = None

    def set(self, column: str, value: Any) -> "UpdateBuilder":
        """
        Set the value for a column.

        Setting a column again replaces its value but keeps its position.
        """
        self._assignments[column] = value
        return self

    def where(self, condition: str) -> "UpdateBuilder":
        """Set the WHERE condition."""
        self._condition = condition
        return self

    def build(self) -> str:
        assignments = ", ".join(f"{column} = {value}" for column, value in self._assignments.items())
        return f"UPDATE {self._table} SET {assignments}" + self._where_clause(self._condition)


class DeleteBuilder(_StatementBuilder):
    """Builds ``DELETE FROM <table>[ WHERE <condition>]``."""

    def __init__(self, table: str):
        self._table = table
        self._condition: Optional[str] = None

    def where(self, condition: str) -> "DeleteBuilder":
        """Set the WHERE condition."""
        self._condition = condition
        return self

    def build(self) -> str:
        return f"DELETE FROM {self._table}" + self._where_clause(self._condition)
