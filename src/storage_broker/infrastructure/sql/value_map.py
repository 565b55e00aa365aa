"""
Bound value maps.

A BoundValueMap is an ordered list of (property, column, placeholder, value)
rows bound to one SchemaProfile. It keeps the four coordinate systems used
when building a statement consistent:

    property name  -> the caller's attribute name
    column name    -> the physical column in the table
    placeholder    -> the bind-parameter token in the statement text
    value          -> the runtime value bound to the placeholder

Placeholders are ``:<prefix><token>_<column>`` where ``token`` is unique per
map instance, so maps built independently (for example the SET values and the
WHERE constraint of an UPDATE) can be merged without collisions.

Usage:
    >>> value_map = value_map_factory.build("Author")
    >>> value_map.add_properties({"firstName": "Ada", "lastName": "Lovelace"})
    >>> value_map.column_to_value()
    {'first_name': 'Ada', 'last_name': 'Lovelace'}
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from storage_broker.exceptions import (
    IncompatibleMappingError,
    MergedMappingError,
    NotFoundError,
)

from .core.parameters import DEFAULT_BIND_PREFIX, TokenCounter, build_placeholder
from .profile import SchemaProfile, SchemaProfileFactory


@dataclass(frozen=True)
class BoundValue:
    """One row of a BoundValueMap."""

    property_name: str
    column: str
    placeholder: str
    value: Any


class BoundValueMap:
    """Schema-bound, ordered collection of bound values."""

    def __init__(
        self,
        factory: "BoundValueMapFactory",
        profile: SchemaProfile,
        token: int,
        bind_prefix: str = DEFAULT_BIND_PREFIX,
    ):
        self._factory = factory
        self._profile = profile
        self._token = token
        self._bind_prefix = bind_prefix
        self._rows: List[BoundValue] = []
        self._merged = False

    def __repr__(self) -> str:
        return (
            f"BoundValueMap(entity_type={self.entity_type!r}, token={self._token}, "
            f"rows={len(self._rows)}, merged={self._merged})"
        )

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[BoundValue]:
        return iter(tuple(self._rows))

    @property
    def profile(self) -> SchemaProfile:
        return self._profile

    @property
    def token(self) -> int:
        return self._token

    @property
    def merged(self) -> bool:
        return self._merged

    @property
    def table_name(self) -> str:
        return self._profile.table_name

    @property
    def entity_type(self) -> str:
        return self._profile.entity_type

    @property
    def rows(self) -> Tuple[BoundValue, ...]:
        return tuple(self._rows)

    def add_property(self, property_name: str, value: Any) -> None:
        """Bind ``value`` to ``property_name``; raises SchemaBindingError if unknown."""
        column = self._profile.resolve_column(property_name)
        self._append(property_name, column, value)

    def add_properties(self, property_to_value: Mapping[str, Any]) -> None:
        for property_name, value in property_to_value.items():
            self.add_property(property_name, value)

    def add_column(self, column: str, value: Any) -> None:
        """Bind ``value`` to ``column``; raises SchemaBindingError if unknown."""
        property_name = self._profile.resolve_property(column)
        self._append(property_name, column, value)

    def add_columns(self, column_to_value: Mapping[str, Any]) -> None:
        for column, value in column_to_value.items():
            self.add_column(column, value)

    def has_property(self, property_name: str) -> bool:
        return self._index_of_property(property_name) is not None

    def remove_property(self, property_name: str) -> None:
        """
        Remove the first row bound to ``property_name``.

        Raises:
            NotFoundError: If the property has not been set.
        """
        index = self._index_of_property(property_name)
        if index is None:
            raise NotFoundError(
                f"Cannot remove property {property_name}. Property not set."
            )
        del self._rows[index]

    def is_compatible(self, other: "BoundValueMap") -> bool:
        return self._profile is other._profile

    def merge(self, other: "BoundValueMap") -> "BoundValueMap":
        """
        Combine this map with ``other`` into a new, freshly tokened map.

        The result holds this map's rows followed by ``other``'s rows and is
        flagged merged. Neither input is modified.

        Raises:
            IncompatibleMappingError: If the maps are bound to different
                schema profiles.
        """
        if not self.is_compatible(other):
            raise IncompatibleMappingError(
                "Value maps must be bound to the same schema profile to be "
                f"merged ({self.entity_type} vs {other.entity_type})"
            )

        merged = self._factory.build_for_profile(self._profile)
        merged._rows = list(self._rows) + list(other._rows)
        merged._merged = True
        return merged

    def duplicate(self) -> "BoundValueMap":
        """
        Copy of this map under a fresh token.

        Rows, their order and the merged flag are kept. Placeholders are
        re-minted with the new token so the copy never collides with the
        original. A merged map may hold one column under several tokens, so
        its placeholders are copied unchanged.
        """
        copy = BoundValueMap(
            self._factory,
            self._profile,
            self._factory.counter.next(),
            bind_prefix=self._bind_prefix,
        )
        if self._merged:
            copy._rows = list(self._rows)
            copy._merged = True
            return copy

        copy._rows = [
            replace(
                row,
                placeholder=build_placeholder(
                    copy._token, row.column, prefix=copy._bind_prefix
                ),
            )
            for row in self._rows
        ]
        return copy

    def property_to_column(self) -> Dict[str, str]:
        return self._build_view("property_name", "column")

    def property_to_value(self) -> Dict[str, Any]:
        self._require_unmerged("property_to_value")
        return self._build_view("property_name", "value")

    def column_to_value(self) -> Dict[str, Any]:
        self._require_unmerged("column_to_value")
        return self._build_view("column", "value")

    def column_to_placeholder(self) -> Dict[str, str]:
        self._require_unmerged("column_to_placeholder")
        return self._build_view("column", "placeholder")

    def placeholder_to_column(self) -> Dict[str, str]:
        return self._build_view("placeholder", "column")

    def placeholder_to_value(self) -> Dict[str, Any]:
        return self._build_view("placeholder", "value")

    def _append(self, property_name: str, column: str, value: Any) -> None:
        placeholder = build_placeholder(self._token, column, prefix=self._bind_prefix)
        self._rows.append(BoundValue(property_name, column, placeholder, value))

    def _index_of_property(self, property_name: str) -> Optional[int]:
        for index, row in enumerate(self._rows):
            if row.property_name == property_name:
                return index
        return None

    def _build_view(self, key_field: str, value_field: str) -> Dict[Any, Any]:
        # Later rows overwrite earlier ones on duplicate keys
        return {getattr(row, key_field): getattr(row, value_field) for row in self._rows}

    def _require_unmerged(self, view_name: str) -> None:
        if self._merged:
            raise MergedMappingError(
                f"Cannot call {view_name}() on a merged value map"
            )


class BoundValueMapFactory:
    """
    Builds empty BoundValueMaps, each with the next token from ``counter``.

    Factories that may contribute maps to the same statement must share one
    TokenCounter.
    """

    def __init__(
        self,
        profile_factory: SchemaProfileFactory,
        counter: Optional[TokenCounter] = None,
        bind_prefix: str = DEFAULT_BIND_PREFIX,
    ):
        self.profile_factory = profile_factory
        self.counter = counter if counter is not None else TokenCounter()
        self.bind_prefix = bind_prefix

    def build(self, entity_type: str) -> BoundValueMap:
        return self.build_for_profile(self.profile_factory.build(entity_type))

    def build_for_profile(self, profile: SchemaProfile) -> BoundValueMap:
        return BoundValueMap(
            self, profile, self.counter.next(), bind_prefix=self.bind_prefix
        )
