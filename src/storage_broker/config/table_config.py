"""
YAML loader and schema for entity table configuration.

The table configuration maps each entity-type identifier to the table that
stores it and to the property -> column binding used when building SQL:

    Author:
      tableName: authors
      propertyToColumnMap:
        id: id
        firstName: first_name
        lastName: last_name

Both camelCase keys (``tableName``, ``propertyToColumnMap``) and snake_case
keys (``table_name``, ``property_to_column``) are accepted.
"""

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import structlog
import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from storage_broker.exceptions import TableConfigurationError

logger = structlog.get_logger(__name__)


class TableConfig(BaseModel):
    """Schema for a single entity type's table binding."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    table_name: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("table_name", "tableName"),
        description="Physical table name",
    )
    property_to_column: Dict[str, str] = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("property_to_column", "propertyToColumnMap"),
        description="Property name -> column name",
    )


TableConfigEntry = Union[TableConfig, Mapping[str, Any]]


def parse_table_entry(entity_type: str, entry: TableConfigEntry) -> TableConfig:
    """
    Validate one configuration entry.

    Raises:
        TableConfigurationError: If the entry is missing required fields or
            has the wrong shape.
    """
    if isinstance(entry, TableConfig):
        return entry
    if not isinstance(entry, Mapping):
        raise TableConfigurationError(
            f"Table configuration for entity type {entity_type} must be a "
            f"mapping, got {type(entry).__name__}"
        )
    try:
        return TableConfig.model_validate(dict(entry))
    except ValidationError as e:
        raise TableConfigurationError(
            f"Invalid table configuration for entity type {entity_type}: {e}"
        ) from e


def parse_table_config(data: Mapping[str, Any]) -> Dict[str, TableConfig]:
    """Validate every entry of an already-loaded configuration mapping."""
    if not isinstance(data, Mapping):
        raise TableConfigurationError(
            f"Table configuration must be a mapping, got {type(data).__name__}"
        )
    return {
        str(entity_type): parse_table_entry(str(entity_type), entry)
        for entity_type, entry in data.items()
    }


def load_table_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, TableConfig]:
    """
    Load and validate the table configuration file.

    Args:
        config_path: Path to the YAML file. Defaults to the configured
            TABLE_CONFIG_PATH setting.

    Returns:
        Dict mapping entity-type identifiers to validated TableConfig entries.

    Raises:
        TableConfigurationError: If the file is missing, is not valid YAML,
            or does not match the schema.
    """
    if config_path is None:
        from storage_broker.config.settings import get_settings

        file_path = get_settings().get_table_config_path()
    else:
        file_path = Path(config_path)

    if not file_path.exists():
        logger.error("table_config.file_not_found", file_path=str(file_path))
        raise TableConfigurationError(f"Table configuration not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(
            "table_config.yaml_parse_error", file_path=str(file_path), error=str(e)
        )
        raise TableConfigurationError(f"Invalid YAML in {file_path}: {e}") from e

    # yaml.safe_load returns None for an empty file
    if content is None:
        logger.warning("table_config.empty_file", file_path=str(file_path))
        return {}

    config = parse_table_config(content)

    logger.info(
        "table_config.loaded",
        file_path=str(file_path),
        entity_count=len(config),
    )
    return config
