"""Pytest configuration and shared fixtures for the storage broker suites.

Environment variables with the SB_ prefix are cleared before each test so a
developer's .env or shell cannot change statement rendering under test.
"""

from __future__ import annotations

import os
from typing import Any, Dict, Generator

import pytest
import sqlalchemy as sa
from sqlalchemy.engine import Connection

from storage_broker.config import get_settings
from storage_broker.infrastructure.sql.constraints import (
    BoundConstraintFactory,
    ConstraintFactoryBinder,
)
from storage_broker.infrastructure.sql.core.parameters import TokenCounter
from storage_broker.infrastructure.sql.profile import SchemaProfileFactory
from storage_broker.infrastructure.sql.value_map import BoundValueMapFactory

CLASS_NAME = "MyClass"
TABLE_NAME = "my_table"

PROPERTY_TO_COLUMN = {
    "id": "id",
    "propOne": "col_one",
    "propTwo": "col_two",
    "propThree": "col_three",
    "propFour": "col_four",
}


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop SB_* overrides and the cached Settings around every test."""
    for key in list(os.environ):
        if key.upper().startswith("SB_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def table_config() -> Dict[str, Dict[str, Any]]:
    """Two entity types in the camelCase configuration style."""
    return {
        CLASS_NAME: {
            "tableName": TABLE_NAME,
            "propertyToColumnMap": dict(PROPERTY_TO_COLUMN),
        },
        "OtherClass": {
            "tableName": "other_table",
            "propertyToColumnMap": {"id": "id", "propOne": "col_one"},
        },
    }


@pytest.fixture
def profile_factory(table_config) -> SchemaProfileFactory:
    return SchemaProfileFactory(table_config)


@pytest.fixture
def value_map_factory(profile_factory) -> BoundValueMapFactory:
    return BoundValueMapFactory(profile_factory, counter=TokenCounter())


@pytest.fixture
def constraints(value_map_factory) -> BoundConstraintFactory:
    return ConstraintFactoryBinder(value_map_factory).bind(CLASS_NAME)


@pytest.fixture
def sqlite_conn() -> Generator[Connection, None, None]:
    """In-memory SQLite connection with the my_table schema created."""
    engine = sa.create_engine("sqlite://")
    with engine.connect() as conn:
        conn.execute(
            sa.text(
                """
                CREATE TABLE my_table (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    col_one TEXT,
                    col_two TEXT,
                    col_three TEXT,
                    col_four TEXT
                )
                """
            )
        )
        yield conn
    engine.dispose()
