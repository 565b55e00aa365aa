"""
Unit tests for SqlAlchemyExecutor against an in-memory SQLite connection.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from storage_broker.exceptions import ExecutionError
from storage_broker.io.executor import Executor, SqlAlchemyExecutor


class TestSqlAlchemyExecutor:
    def test_satisfies_protocol(self, sqlite_conn):
        assert isinstance(SqlAlchemyExecutor(sqlite_conn), Executor)

    def test_insert_and_last_insert_id(self, sqlite_conn):
        executor = SqlAlchemyExecutor(sqlite_conn)

        first = executor.execute(
            "INSERT INTO my_table (col_one) VALUES (:val1_col_one);",
            {":val1_col_one": "A"},
        )
        second = executor.execute(
            "INSERT INTO my_table (col_one) VALUES (:val2_col_one);",
            {":val2_col_one": "B"},
        )

        assert executor.last_insert_id(first) == 1
        assert executor.last_insert_id(second) == 2

    def test_select_binds_placeholders(self, sqlite_conn):
        executor = SqlAlchemyExecutor(sqlite_conn)
        executor.execute(
            "INSERT INTO my_table (col_one, col_two) VALUES (:val1_col_one, :val1_col_two);",
            {":val1_col_one": "A", ":val1_col_two": "B"},
        )

        result = executor.execute(
            "SELECT * FROM my_table WHERE col_one=:val2_col_one;",
            {":val2_col_one": "A"},
        )
        rows = result.mappings().all()

        assert len(rows) == 1
        assert rows[0]["col_two"] == "B"

    def test_rowcount_on_delete(self, sqlite_conn):
        executor = SqlAlchemyExecutor(sqlite_conn)
        result = executor.execute("DELETE FROM my_table WHERE 1=1;", {})
        assert result.rowcount == 0

    def test_backend_error_wrapped(self, sqlite_conn):
        executor = SqlAlchemyExecutor(sqlite_conn)
        with pytest.raises(ExecutionError, match="no such table") as exc_info:
            executor.execute("SELECT * FROM missing_table WHERE 1=1;", {})
        assert exc_info.value.__cause__ is not None

    def test_wraps_any_sqlalchemy_error(self):
        conn = MagicMock()
        conn.execute.side_effect = OperationalError("SELECT 1", {}, Exception("down"))

        with pytest.raises(ExecutionError):
            SqlAlchemyExecutor(conn).execute("SELECT 1;", {})

    def test_strips_placeholder_colon(self):
        conn = MagicMock()
        SqlAlchemyExecutor(conn).execute("SELECT 1;", {":val1_id": 5})

        (_, params), _ = conn.execute.call_args
        assert params == {"val1_id": 5}
