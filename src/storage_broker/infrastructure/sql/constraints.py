"""
Constraint tree: predicates that render SQL with placeholders.

Each constraint owns a BoundValueMap holding the values it binds. Constraints
are built through a BoundConstraintFactory so every constraint gets its own
freshly tokened map for the factory's entity type.

Usage:
    >>> constraints = ConstraintFactoryBinder(value_map_factory).bind("Author")
    >>> where = constraints.equals("lastName", "Lovelace")
    >>> where.render_sql()
    'last_name=:val7_last_name'
"""

from abc import ABC, abstractmethod
from typing import Any, Union

from .value_map import BoundValueMap, BoundValueMapFactory

MATCH_ALL_SQL = "1=1"


class ConstraintNode(ABC):
    """Common render contract for constraint nodes."""

    def __init__(self, value_map: BoundValueMap):
        self.value_map = value_map

    @abstractmethod
    def render_sql(self) -> str:
        """Render the predicate with placeholders for every bound value."""

    @property
    def entity_type(self) -> str:
        return self.value_map.entity_type


class MatchAll(ConstraintNode):
    """
    Tautology matching every row.

    Its value map stays empty. Combining it with a narrowing predicate in the
    same position silently widens that predicate to all rows.
    """

    def render_sql(self) -> str:
        return MATCH_ALL_SQL


class Equals(ConstraintNode):
    """
    ``column = value`` for one property.

    The row is added to ``value_map`` on construction, so the map passed in
    must be dedicated to this constraint.
    """

    def __init__(self, value_map: BoundValueMap, property_name: str, value: Any):
        super().__init__(value_map)
        self.property_name = property_name
        self.value = value
        self.value_map.add_property(property_name, value)

    def render_sql(self) -> str:
        row = self.value_map.rows[0]
        return f"{row.column}={row.placeholder}"


Constraint = Union[MatchAll, Equals]


class BoundConstraintFactory:
    """Builds constraints for one entity type so they share a schema profile."""

    def __init__(self, value_map_factory: BoundValueMapFactory, entity_type: str):
        self._value_map_factory = value_map_factory
        self.entity_type = entity_type

    def match_all(self) -> MatchAll:
        return MatchAll(self._new_value_map())

    def equals(self, property_name: str, value: Any) -> Equals:
        return Equals(self._new_value_map(), property_name, value)

    def _new_value_map(self) -> BoundValueMap:
        return self._value_map_factory.build(self.entity_type)


class ConstraintFactoryBinder:
    """Hands out BoundConstraintFactory instances bound to an entity type."""

    def __init__(self, value_map_factory: BoundValueMapFactory):
        self._value_map_factory = value_map_factory

    def bind(self, entity_type: str) -> BoundConstraintFactory:
        return BoundConstraintFactory(self._value_map_factory, entity_type)
