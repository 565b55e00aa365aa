"""
Unit tests for the per-kind result processors.
"""

from unittest.mock import MagicMock

import pytest

from storage_broker.exceptions import SchemaBindingError, StatementStateError
from storage_broker.infrastructure.sql.statements import (
    DeleteStatement,
    InsertStatement,
    SelectStatement,
    UpdateStatement,
)
from storage_broker.io.result_processors import (
    DeleteResultProcessor,
    InsertResultProcessor,
    SelectResultProcessor,
    UpdateResultProcessor,
)


def _raw_select_result(rows):
    """Mimic CursorResult.mappings().fetchone() returning rows then None."""
    raw_result = MagicMock(name="raw_result")
    raw_result.mappings.return_value.fetchone.side_effect = list(rows) + [None]
    return raw_result


class TestSelectResultProcessor:
    @pytest.fixture
    def statement(self, constraints):
        return SelectStatement().set_constraints(constraints.match_all())

    def test_one_value_map_per_row(self, value_map_factory, statement):
        rows = [
            {"id": 1, "col_one": "A", "col_two": "B"},
            {"id": 2, "col_one": "C", "col_two": "D"},
        ]
        processor = SelectResultProcessor(value_map_factory)

        result = processor.process(MagicMock(), _raw_select_result(rows), statement)

        assert len(result) == 2
        assert result[0].column_to_value() == rows[0]
        assert result[1].property_to_value() == {"id": 2, "propOne": "C", "propTwo": "D"}
        assert result[0].token != result[1].token
        assert all(value_map.entity_type == "MyClass" for value_map in result)

    def test_no_rows_is_empty_list(self, value_map_factory, statement):
        processor = SelectResultProcessor(value_map_factory)
        assert processor.process(MagicMock(), _raw_select_result([]), statement) == []

    def test_unknown_column_in_row(self, value_map_factory, statement):
        processor = SelectResultProcessor(value_map_factory)
        raw_result = _raw_select_result([{"id": 1, "col_nine": "?"}])
        with pytest.raises(SchemaBindingError):
            processor.process(MagicMock(), raw_result, statement)

    def test_requires_constraints(self, value_map_factory):
        processor = SelectResultProcessor(value_map_factory)
        with pytest.raises(StatementStateError):
            processor.process(MagicMock(), _raw_select_result([]), SelectStatement())


class TestInsertResultProcessor:
    def test_adds_generated_identity(self, value_map_factory):
        values = value_map_factory.build("MyClass")
        values.add_properties({"propOne": "A"})
        statement = InsertStatement().set_values(values)
        executor = MagicMock()
        executor.last_insert_id.return_value = 42
        raw_result = MagicMock()

        result = InsertResultProcessor().process(executor, raw_result, statement)

        executor.last_insert_id.assert_called_once_with(raw_result)
        assert result.property_to_value() == {"propOne": "A", "id": 42}
        assert not values.has_property("id")

    def test_custom_identity_property(self, table_config):
        from storage_broker.infrastructure.sql.profile import SchemaProfileFactory
        from storage_broker.infrastructure.sql.value_map import BoundValueMapFactory

        table_config["MyClass"]["propertyToColumnMap"]["uuid"] = "uuid"
        factory = BoundValueMapFactory(SchemaProfileFactory(table_config))
        values = factory.build("MyClass")
        values.add_property("propOne", "A")
        executor = MagicMock()
        executor.last_insert_id.return_value = "abc"

        result = InsertResultProcessor(identity_property="uuid").process(
            executor, MagicMock(), InsertStatement(identity_property="uuid").set_values(values)
        )

        assert result.property_to_value()["uuid"] == "abc"

    def test_requires_values(self):
        with pytest.raises(StatementStateError):
            InsertResultProcessor().process(MagicMock(), MagicMock(), InsertStatement())


class TestUpdateResultProcessor:
    def test_returns_copy_of_values(self, value_map_factory, constraints):
        values = value_map_factory.build("MyClass")
        values.add_properties({"id": 3, "propOne": "A"})
        statement = UpdateStatement().set_values(values).set_constraints(
            constraints.equals("id", 3)
        )

        result = UpdateResultProcessor().process(MagicMock(), MagicMock(), statement)

        assert result is not values
        assert result.property_to_value() == {"id": 3, "propOne": "A"}

    def test_requires_values(self):
        with pytest.raises(StatementStateError):
            UpdateResultProcessor().process(MagicMock(), MagicMock(), UpdateStatement())


class TestDeleteResultProcessor:
    @pytest.mark.parametrize("rowcount, expected", [(0, False), (1, True), (5, True)])
    def test_affected_rows(self, constraints, rowcount, expected):
        statement = DeleteStatement().set_constraints(constraints.equals("id", 1))
        raw_result = MagicMock()
        raw_result.rowcount = rowcount

        assert DeleteResultProcessor().process(MagicMock(), raw_result, statement) is expected
