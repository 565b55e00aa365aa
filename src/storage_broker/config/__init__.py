"""Configuration management for the storage broker.

Usage:
    >>> from storage_broker.config import get_settings, load_table_config
    >>> settings = get_settings()
    >>> tables = load_table_config(settings.get_table_config_path())
"""

from storage_broker.config.settings import Settings, get_settings
from storage_broker.config.table_config import (
    TableConfig,
    load_table_config,
    parse_table_config,
    parse_table_entry,
)

__all__ = [
    "Settings",
    "get_settings",
    "TableConfig",
    "load_table_config",
    "parse_table_config",
    "parse_table_entry",
]
