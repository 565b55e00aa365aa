"""
Database broker: get, save and delete entities through the statement engine.

Usage:
    >>> broker = create_database_broker(conn, models={"Author": Author})
    >>> saved = broker.save(Author(first_name="Ada", last_name="Lovelace"))
    >>> broker.get(broker.constraints("Author").equals("id", saved.id))
    [Author(id=1, first_name='Ada', last_name='Lovelace')]
"""

from typing import Any, List

from storage_broker.converters import TypeConverter
from storage_broker.exceptions import NoRowsAffectedError
from storage_broker.infrastructure.sql.constraints import (
    BoundConstraintFactory,
    Constraint,
    ConstraintFactoryBinder,
)
from storage_broker.infrastructure.sql.statements import DEFAULT_IDENTITY_PROPERTY
from storage_broker.infrastructure.sql.value_map import BoundValueMap
from storage_broker.io.query import QueryFactory
from storage_broker.utils.logging import get_logger

logger = get_logger(__name__)


class DatabaseBroker:
    """Storage broker persisting one entity per table row."""

    def __init__(
        self,
        query_factory: QueryFactory,
        constraint_factory_binder: ConstraintFactoryBinder,
        type_converter: TypeConverter,
        identity_property: str = DEFAULT_IDENTITY_PROPERTY,
    ):
        self.query_factory = query_factory
        self.constraint_factory_binder = constraint_factory_binder
        self.type_converter = type_converter
        self.identity_property = identity_property

    def constraints(self, entity_type: str) -> BoundConstraintFactory:
        """Constraint factory for building ``get``/``delete`` arguments."""
        return self.constraint_factory_binder.bind(entity_type)

    def get(self, constraints: Constraint) -> List[Any]:
        """All entities matching ``constraints``; empty list when none match."""
        value_maps = self.query_factory.select().where(constraints).run()

        logger.debug(
            "broker.fetched",
            entity_type=constraints.entity_type,
            count=len(value_maps),
        )
        return [self.type_converter.from_value_map(value_map) for value_map in value_maps]

    def save(self, entity: Any) -> Any:
        """
        Insert or update ``entity`` depending on whether it carries an identity.

        Returns:
            The stored entity, including its generated identity after an insert.
        """
        value_map = self.type_converter.to_value_map(entity)

        if value_map.has_property(self.identity_property):
            saved = self._update(value_map)
            action = "updated"
        else:
            saved = self._insert(value_map)
            action = "inserted"

        logger.info(
            "broker.saved",
            entity_type=value_map.entity_type,
            action=action,
        )
        return self.type_converter.from_value_map(saved)

    def delete(self, constraints: Constraint) -> None:
        """
        Delete every row matching ``constraints``.

        Raises:
            NoRowsAffectedError: If no row matched.
        """
        deleted = self.query_factory.delete().where(constraints).run()
        if not deleted:
            raise NoRowsAffectedError(
                "Item(s) could not be deleted. No matching elements found."
            )
        logger.info("broker.deleted", entity_type=constraints.entity_type)

    def _insert(self, value_map: BoundValueMap) -> BoundValueMap:
        return self.query_factory.insert().values(value_map).run()

    def _update(self, value_map: BoundValueMap) -> BoundValueMap:
        identity = value_map.property_to_value()[self.identity_property]
        by_identity = self.constraints(value_map.entity_type).equals(
            self.identity_property, identity
        )
        return self.query_factory.update().values(value_map).where(by_identity).run()
