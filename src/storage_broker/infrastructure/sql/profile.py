"""
Schema profiles: the static table and property <-> column binding of one
entity type.
"""

import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping

import structlog

from storage_broker.config.table_config import TableConfigEntry, parse_table_entry
from storage_broker.exceptions import SchemaBindingError, TableConfigurationError

from .core.identifier import validate_identifier

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, eq=False)
class SchemaProfile:
    """
    Immutable description of where an entity type is stored.

    ``property_to_column`` must be a bijection: no two properties may share a
    column. Profiles compare by identity; value maps are only compatible when
    they hold the very same profile instance.
    """

    entity_type: str
    table_name: str
    property_to_column: Mapping[str, str]
    column_to_property: Mapping[str, str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        validate_identifier(self.table_name, kind="table")

        forward: Dict[str, str] = {}
        inverse: Dict[str, str] = {}
        for prop, column in self.property_to_column.items():
            if not isinstance(prop, str) or not prop:
                raise TableConfigurationError(
                    f"Invalid property name {prop!r} for entity type {self.entity_type}"
                )
            validate_identifier(column, kind="column")
            if column in inverse:
                raise TableConfigurationError(
                    f"Column {column} is mapped by both {inverse[column]} and "
                    f"{prop} for entity type {self.entity_type}"
                )
            forward[prop] = column
            inverse[column] = prop

        object.__setattr__(self, "property_to_column", MappingProxyType(forward))
        object.__setattr__(self, "column_to_property", MappingProxyType(inverse))

    def resolve_column(self, property_name: str) -> str:
        try:
            return self.property_to_column[property_name]
        except KeyError:
            raise SchemaBindingError(
                f"Property {property_name} not found for entity type {self.entity_type}"
            ) from None

    def resolve_property(self, column_name: str) -> str:
        try:
            return self.column_to_property[column_name]
        except KeyError:
            raise SchemaBindingError(
                f"Column {column_name} not found for entity type {self.entity_type}"
            ) from None


class SchemaProfileFactory:
    """
    Builds one SchemaProfile per entity type from table configuration.

    Profiles are cached so every caller asking for the same entity type gets
    the same instance, including callers on different threads.
    """

    def __init__(self, table_config: Mapping[str, TableConfigEntry]):
        self._table_config = dict(table_config)
        self._profiles: Dict[str, SchemaProfile] = {}
        self._lock = threading.Lock()

    def entity_types(self) -> List[str]:
        return list(self._table_config)

    def build(self, entity_type: str) -> SchemaProfile:
        """
        Get the profile for ``entity_type``.

        Raises:
            TableConfigurationError: If the entity type is not configured or
                its configuration is malformed.
        """
        with self._lock:
            profile = self._profiles.get(entity_type)
            if profile is None:
                profile = self._build_profile(entity_type)
                self._profiles[entity_type] = profile
        return profile

    def _build_profile(self, entity_type: str) -> SchemaProfile:
        if entity_type not in self._table_config:
            raise TableConfigurationError(
                f"Database table configuration not found for entity type {entity_type}"
            )

        config = parse_table_entry(entity_type, self._table_config[entity_type])
        profile = SchemaProfile(
            entity_type=entity_type,
            table_name=config.table_name,
            property_to_column=config.property_to_column,
        )
        logger.debug(
            "schema_profile.built",
            entity_type=entity_type,
            table=profile.table_name,
            property_count=len(profile.property_to_column),
        )
        return profile
