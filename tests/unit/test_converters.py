"""
Unit tests for PydanticTypeConverter.
"""

from typing import Optional

import pytest
from pydantic import BaseModel

from storage_broker.converters import PydanticTypeConverter, TypeConverter
from storage_broker.exceptions import SchemaBindingError


class MyClass(BaseModel):
    id: Optional[int] = None
    propOne: Optional[str] = None
    propTwo: Optional[str] = None


class Unregistered(BaseModel):
    id: Optional[int] = None


@pytest.fixture
def converter(value_map_factory):
    return PydanticTypeConverter(value_map_factory, {"MyClass": MyClass})


class TestPydanticTypeConverter:
    def test_satisfies_protocol(self, converter):
        assert isinstance(converter, TypeConverter)

    def test_to_value_map_drops_unset_identity(self, converter):
        value_map = converter.to_value_map(MyClass(propOne="A", propTwo="B"))

        assert value_map.entity_type == "MyClass"
        assert not value_map.has_property("id")
        assert value_map.property_to_value() == {"propOne": "A", "propTwo": "B"}

    def test_to_value_map_keeps_identity(self, converter):
        value_map = converter.to_value_map(MyClass(id=4, propOne="A"))
        assert value_map.property_to_value()["id"] == 4

    def test_none_fields_other_than_identity_are_kept(self, converter):
        value_map = converter.to_value_map(MyClass(id=4))
        assert value_map.property_to_value() == {"id": 4, "propOne": None, "propTwo": None}

    def test_from_value_map(self, converter, value_map_factory):
        value_map = value_map_factory.build("MyClass")
        value_map.add_columns({"id": 9, "col_one": "A"})

        assert converter.from_value_map(value_map) == MyClass(id=9, propOne="A")

    def test_unregistered_model(self, converter):
        with pytest.raises(SchemaBindingError, match="Unregistered"):
            converter.to_value_map(Unregistered())

    def test_unregistered_entity_type(self, converter, value_map_factory):
        with pytest.raises(SchemaBindingError, match="OtherClass"):
            converter.from_value_map(value_map_factory.build("OtherClass"))

    def test_field_without_column(self, value_map_factory):
        class Wide(BaseModel):
            propOne: str
            propNine: str

        converter = PydanticTypeConverter(value_map_factory, {"MyClass": Wide})
        with pytest.raises(SchemaBindingError):
            converter.to_value_map(Wide(propOne="A", propNine="Z"))
