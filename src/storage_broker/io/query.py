"""
Query orchestration: bind a statement to an executor and a result processor.

Usage:
    >>> queries = QueryFactory(SqlAlchemyExecutor(conn), value_map_factory)
    >>> rows = queries.select().where(constraints.equals("lastName", "Lovelace")).run()
"""

from typing import Any

from storage_broker.exceptions import ExecutionError, QueryExecutionError
from storage_broker.infrastructure.sql.constraints import Constraint
from storage_broker.infrastructure.sql.statements import (
    DEFAULT_IDENTITY_PROPERTY,
    DeleteStatement,
    InsertStatement,
    SelectStatement,
    Statement,
    UpdateStatement,
)
from storage_broker.infrastructure.sql.value_map import (
    BoundValueMap,
    BoundValueMapFactory,
)
from storage_broker.utils.logging import get_logger

from .executor import Executor
from .result_processors import (
    DeleteResultProcessor,
    InsertResultProcessor,
    ResultProcessor,
    SelectResultProcessor,
    UpdateResultProcessor,
)

logger = get_logger(__name__)


class Query:
    """One statement, ready to run once its inputs are set."""

    def __init__(
        self,
        executor: Executor,
        statement: Statement,
        result_processor: ResultProcessor,
    ):
        self.executor = executor
        self.statement = statement
        self.result_processor = result_processor

    def set_values(self, values: BoundValueMap) -> "Query":
        self.statement.set_values(values)
        return self

    def set_constraints(self, constraints: Constraint) -> "Query":
        self.statement.set_constraints(constraints)
        return self

    # Fluent aliases: queries.update().values(v).where(c).run()
    values = set_values
    where = set_constraints

    def run(self) -> Any:
        """
        Execute the statement and return the processed result.

        Raises:
            NotReadyError: If the statement's required inputs are not set.
            QueryExecutionError: If the executor reports a backend failure.
        """
        statement_text = self.statement.statement_text()
        bindings = self.statement.placeholder_to_value_map()

        log = logger.bind(
            kind=self.statement.kind.value,
            table=self.statement.table_name(),
        )

        try:
            raw_result = self.executor.execute(statement_text, bindings)
        except ExecutionError as e:
            error = QueryExecutionError(statement_text, e)
            log.error("query.failed", **error.to_dict())
            raise error from e

        log.debug(
            "query.executed",
            statement=statement_text,
            bind_count=len(bindings),
        )

        return self.result_processor.process(self.executor, raw_result, self.statement)


class QueryFactory:
    """Builds a Query per statement kind, each with its matching processor."""

    def __init__(
        self,
        executor: Executor,
        value_map_factory: BoundValueMapFactory,
        identity_property: str = DEFAULT_IDENTITY_PROPERTY,
    ):
        self.executor = executor
        self.value_map_factory = value_map_factory
        self.identity_property = identity_property

    def select(self) -> Query:
        return Query(
            self.executor,
            SelectStatement(),
            SelectResultProcessor(self.value_map_factory),
        )

    def insert(self) -> Query:
        return Query(
            self.executor,
            InsertStatement(identity_property=self.identity_property),
            InsertResultProcessor(identity_property=self.identity_property),
        )

    def update(self) -> Query:
        return Query(self.executor, UpdateStatement(), UpdateResultProcessor())

    def delete(self) -> Query:
        return Query(self.executor, DeleteStatement(), DeleteResultProcessor())
