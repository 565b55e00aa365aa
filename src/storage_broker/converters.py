"""
Type conversion between caller entities and bound value maps.

The broker only needs something satisfying the TypeConverter protocol.
PydanticTypeConverter covers the common case where entities are pydantic
models whose field names match the configured property names.
"""

from typing import Any, Dict, Mapping, Protocol, Type, runtime_checkable

from pydantic import BaseModel

from storage_broker.exceptions import SchemaBindingError
from storage_broker.infrastructure.sql.statements import DEFAULT_IDENTITY_PROPERTY
from storage_broker.infrastructure.sql.value_map import (
    BoundValueMap,
    BoundValueMapFactory,
)


@runtime_checkable
class TypeConverter(Protocol):
    def to_value_map(self, entity: Any) -> BoundValueMap:
        ...

    def from_value_map(self, value_map: BoundValueMap) -> Any:
        ...


class PydanticTypeConverter:
    """
    Converts pydantic models registered per entity type.

    An identity property holding None is left out of the value map so that
    unsaved models are inserted rather than updated.

    Usage:
        >>> converter = PydanticTypeConverter(value_map_factory, {"Author": Author})
        >>> value_map = converter.to_value_map(Author(first_name="Ada"))
        >>> converter.from_value_map(value_map)
        Author(id=None, first_name='Ada')
    """

    def __init__(
        self,
        value_map_factory: BoundValueMapFactory,
        models: Mapping[str, Type[BaseModel]],
        identity_property: str = DEFAULT_IDENTITY_PROPERTY,
    ):
        self.value_map_factory = value_map_factory
        self.models: Dict[str, Type[BaseModel]] = dict(models)
        self.identity_property = identity_property
        self._entity_types: Dict[Type[BaseModel], str] = {
            model: entity_type for entity_type, model in self.models.items()
        }

    def entity_type_of(self, entity: BaseModel) -> str:
        try:
            return self._entity_types[type(entity)]
        except KeyError:
            raise SchemaBindingError(
                f"No entity type registered for model {type(entity).__name__}"
            ) from None

    def to_value_map(self, entity: BaseModel) -> BoundValueMap:
        data = entity.model_dump()
        if data.get(self.identity_property) is None:
            data.pop(self.identity_property, None)

        value_map = self.value_map_factory.build(self.entity_type_of(entity))
        value_map.add_properties(data)
        return value_map

    def from_value_map(self, value_map: BoundValueMap) -> BaseModel:
        try:
            model = self.models[value_map.entity_type]
        except KeyError:
            raise SchemaBindingError(
                f"No model registered for entity type {value_map.entity_type}"
            ) from None
        return model.model_validate(value_map.property_to_value())
