"""
Single-table persistence broker.

Converts schema-bound entity representations into parameterized SQL plus a
value binding, executes it, and converts results back.

Usage:
    >>> from storage_broker import create_database_broker
    >>> broker = create_database_broker(conn, table_config, models={"Author": Author})
    >>> broker.save(Author(first_name="Ada", last_name="Lovelace"))
"""

from storage_broker.broker import DatabaseBroker
from storage_broker.converters import PydanticTypeConverter, TypeConverter
from storage_broker.factory import (
    StatementComponents,
    build_statement_components,
    create_database_broker,
)

__version__ = "0.1.0"

__all__ = [
    "DatabaseBroker",
    "PydanticTypeConverter",
    "TypeConverter",
    "StatementComponents",
    "build_statement_components",
    "create_database_broker",
]
