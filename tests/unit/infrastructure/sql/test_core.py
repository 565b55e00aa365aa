"""
Unit tests for SQL core utilities: identifier and parameters.
"""

import threading

import pytest

from storage_broker.exceptions import TableConfigurationError
from storage_broker.infrastructure.sql.core.identifier import (
    MAX_IDENTIFIER_LENGTH,
    is_valid_identifier,
    validate_identifier,
)
from storage_broker.infrastructure.sql.core.parameters import (
    TokenCounter,
    build_placeholder,
    to_bind_params,
)


class TestValidateIdentifier:
    """Tests for identifier validation."""

    @pytest.mark.parametrize("name", ["id", "col_one", "_hidden", "Col2", "a" * 63])
    def test_accepts_plain_identifiers(self, name):
        assert validate_identifier(name) == name

    @pytest.mark.parametrize(
        "name",
        ["", "first name", "1st", "col-one", 'col"one', "col;drop", "a" * 64],
    )
    def test_rejects_unsafe_identifiers(self, name):
        assert is_valid_identifier(name) is False
        with pytest.raises(TableConfigurationError):
            validate_identifier(name, kind="column")

    def test_error_names_the_kind(self):
        with pytest.raises(TableConfigurationError, match="Invalid table name"):
            validate_identifier("my table", kind="table")

    def test_non_string_is_invalid(self):
        assert is_valid_identifier(None) is False  # type: ignore[arg-type]
        assert MAX_IDENTIFIER_LENGTH == 63


class TestTokenCounter:
    """Tests for the shared token source."""

    def test_counts_up_from_start(self):
        counter = TokenCounter()
        assert [counter.next() for _ in range(3)] == [1, 2, 3]

    def test_custom_start(self):
        counter = TokenCounter(start=10)
        assert counter.next() == 10

    def test_tokens_unique_across_threads(self):
        counter = TokenCounter()
        tokens = []
        lock = threading.Lock()

        def worker():
            local = [counter.next() for _ in range(500)]
            with lock:
                tokens.extend(local)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(tokens) == 4000
        assert len(set(tokens)) == 4000


class TestBuildPlaceholder:
    def test_default_prefix(self):
        assert build_placeholder(3, "col_one") == ":val3_col_one"

    def test_custom_prefix(self):
        assert build_placeholder(12, "id", prefix="p") == ":p12_id"

    def test_different_tokens_never_collide(self):
        assert build_placeholder(1, "col") != build_placeholder(11, "col")
        assert build_placeholder(1, "a1_col") != build_placeholder(11, "col")


class TestToBindParams:
    def test_strips_leading_colon(self):
        result = to_bind_params({":val1_col_one": 1, ":val2_id": 7})
        assert result == {"val1_col_one": 1, "val2_id": 7}

    def test_bare_names_unchanged(self):
        assert to_bind_params({"val1_col_one": "x"}) == {"val1_col_one": "x"}

    def test_empty(self):
        assert to_bind_params({}) == {}
