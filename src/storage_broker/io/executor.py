"""
Execution capability backed by SQLAlchemy.

The statement builders produce plain text with ``:name`` placeholders, which
``sqlalchemy.text()`` understands directly.
"""

from typing import Any, Mapping, Protocol, runtime_checkable

import sqlalchemy as sa
from sqlalchemy.engine import Connection, CursorResult
from sqlalchemy.exc import SQLAlchemyError

from storage_broker.exceptions import ExecutionError
from storage_broker.infrastructure.sql.core.parameters import to_bind_params


@runtime_checkable
class Executor(Protocol):
    """Runs one statement against the backing store."""

    def execute(self, statement_text: str, bindings: Mapping[str, Any]) -> Any:
        """Execute and return the raw result; raise ExecutionError on failure."""
        ...

    def last_insert_id(self, raw_result: Any) -> Any:
        """Identity generated by the insert that produced ``raw_result``."""
        ...


class SqlAlchemyExecutor:
    """
    Executor running statements on a SQLAlchemy connection.

    Transaction handling stays with the owner of the connection.

    Usage:
        engine = sa.create_engine("sqlite:///storage_broker.db")
        with engine.begin() as conn:
            executor = SqlAlchemyExecutor(conn)
            result = executor.execute("SELECT * FROM authors WHERE 1=1;", {})
    """

    def __init__(self, conn: Connection):
        """
        Initialize the executor with a database connection.

        Args:
            conn: SQLAlchemy connection object
        """
        self.conn = conn

    def execute(self, statement_text: str, bindings: Mapping[str, Any]) -> CursorResult:
        try:
            return self.conn.execute(sa.text(statement_text), to_bind_params(bindings))
        except SQLAlchemyError as e:
            raise ExecutionError(str(e)) from e

    def last_insert_id(self, raw_result: CursorResult) -> Any:
        return raw_result.lastrowid
