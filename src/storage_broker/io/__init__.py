"""
I/O ring: statement execution and result processing.

All database connectivity lives here so the statement builders in
storage_broker.infrastructure.sql stay pure.
"""

from .executor import Executor, SqlAlchemyExecutor
from .query import Query, QueryFactory
from .result_processors import (
    DeleteResultProcessor,
    InsertResultProcessor,
    ResultProcessor,
    SelectResultProcessor,
    UpdateResultProcessor,
)

__all__ = [
    "Executor",
    "SqlAlchemyExecutor",
    "Query",
    "QueryFactory",
    "ResultProcessor",
    "SelectResultProcessor",
    "InsertResultProcessor",
    "UpdateResultProcessor",
    "DeleteResultProcessor",
]
