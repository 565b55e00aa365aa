"""
Result processors: translate raw execution results back into value maps.

Each statement kind has its own processor. Processors receive the executor
(for driver-level lookups such as the last generated identity), the raw
result returned by ``Executor.execute`` and the statement that was run.
"""

from typing import Any, List, Protocol

from storage_broker.infrastructure.sql.statements import (
    DEFAULT_IDENTITY_PROPERTY,
    Statement,
)
from storage_broker.infrastructure.sql.value_map import (
    BoundValueMap,
    BoundValueMapFactory,
)
from storage_broker.exceptions import StatementStateError

from .executor import Executor


class ResultProcessor(Protocol):
    def process(self, executor: Executor, raw_result: Any, statement: Statement) -> Any:
        ...


class SelectResultProcessor:
    """
    One fresh value map per fetched row, in fetch order.

    No matching rows yields an empty list.
    """

    def __init__(self, value_map_factory: BoundValueMapFactory):
        self.value_map_factory = value_map_factory

    def process(
        self, executor: Executor, raw_result: Any, statement: Statement
    ) -> List[BoundValueMap]:
        if statement.constraints is None:
            raise StatementStateError("Select statement was run without constraints")
        entity_type = statement.constraints.entity_type

        rows = raw_result.mappings()
        value_maps: List[BoundValueMap] = []
        while True:
            row = rows.fetchone()
            if row is None:
                break
            row_map = self.value_map_factory.build(entity_type)
            row_map.add_columns(dict(row))
            value_maps.append(row_map)
        return value_maps


class InsertResultProcessor:
    """Inserted values plus the identity generated by the database."""

    def __init__(self, identity_property: str = DEFAULT_IDENTITY_PROPERTY):
        self.identity_property = identity_property

    def process(
        self, executor: Executor, raw_result: Any, statement: Statement
    ) -> BoundValueMap:
        if statement.values is None:
            raise StatementStateError("Insert statement was run without values")
        inserted = statement.values.duplicate()
        inserted.add_property(self.identity_property, executor.last_insert_id(raw_result))
        return inserted


class UpdateResultProcessor:
    def process(
        self, executor: Executor, raw_result: Any, statement: Statement
    ) -> BoundValueMap:
        if statement.values is None:
            raise StatementStateError("Update statement was run without values")
        return statement.values.duplicate()


class DeleteResultProcessor:
    """
    True when at least one row was deleted.

    Zero affected rows is reported as False, not raised; the caller decides
    whether that is an error.
    """

    def process(self, executor: Executor, raw_result: Any, statement: Statement) -> bool:
        return raw_result.rowcount > 0
