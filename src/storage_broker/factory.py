"""
Wiring for the storage broker.

All value map factories created here share one TokenCounter, so every
placeholder minted for statements built from these components is unique.
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Type

from pydantic import BaseModel
from sqlalchemy.engine import Connection

from storage_broker.broker import DatabaseBroker
from storage_broker.config import Settings, get_settings, load_table_config
from storage_broker.config.table_config import TableConfigEntry
from storage_broker.converters import PydanticTypeConverter, TypeConverter
from storage_broker.infrastructure.sql.constraints import ConstraintFactoryBinder
from storage_broker.infrastructure.sql.core.parameters import TokenCounter
from storage_broker.infrastructure.sql.profile import SchemaProfileFactory
from storage_broker.infrastructure.sql.value_map import BoundValueMapFactory
from storage_broker.io.executor import Executor, SqlAlchemyExecutor
from storage_broker.io.query import QueryFactory
from storage_broker.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class StatementComponents:
    """Factories needed to build statements without an executor."""

    profile_factory: SchemaProfileFactory
    value_map_factory: BoundValueMapFactory
    constraint_binder: ConstraintFactoryBinder


def build_statement_components(
    table_config: Mapping[str, TableConfigEntry],
    settings: Optional[Settings] = None,
    counter: Optional[TokenCounter] = None,
) -> StatementComponents:
    settings = settings or get_settings()
    profile_factory = SchemaProfileFactory(table_config)
    value_map_factory = BoundValueMapFactory(
        profile_factory,
        counter=counter or TokenCounter(),
        bind_prefix=settings.BIND_PREFIX,
    )
    return StatementComponents(
        profile_factory=profile_factory,
        value_map_factory=value_map_factory,
        constraint_binder=ConstraintFactoryBinder(value_map_factory),
    )


def create_database_broker(
    conn: Optional[Connection] = None,
    table_config: Optional[Mapping[str, TableConfigEntry]] = None,
    models: Optional[Mapping[str, Type[BaseModel]]] = None,
    type_converter: Optional[TypeConverter] = None,
    executor: Optional[Executor] = None,
    settings: Optional[Settings] = None,
    components: Optional[StatementComponents] = None,
) -> DatabaseBroker:
    """
    Build a DatabaseBroker.

    Args:
        conn: SQLAlchemy connection; wrapped in a SqlAlchemyExecutor unless
            ``executor`` is given
        table_config: Entity table configuration; loaded from
            TABLE_CONFIG_PATH when omitted
        models: Pydantic models per entity type, used to build a
            PydanticTypeConverter when ``type_converter`` is omitted
        type_converter: Custom entity <-> value map converter
        executor: Custom execution capability
        settings: Settings instance; defaults to get_settings()
        components: Prebuilt statement components. A custom type_converter
            must build its value maps from components.value_map_factory so
            its placeholders cannot collide with constraint placeholders.

    Raises:
        ValueError: If neither ``conn`` nor ``executor``, or neither
            ``models`` nor ``type_converter`` is given.
    """
    settings = settings or get_settings()

    if executor is None:
        if conn is None:
            raise ValueError("Either conn or executor must be provided")
        executor = SqlAlchemyExecutor(conn)

    if components is None:
        if table_config is None:
            table_config = load_table_config(settings.get_table_config_path())
        components = build_statement_components(table_config, settings=settings)

    if type_converter is None:
        if models is None:
            raise ValueError("Either models or type_converter must be provided")
        type_converter = PydanticTypeConverter(
            components.value_map_factory,
            models,
            identity_property=settings.IDENTITY_PROPERTY,
        )

    query_factory = QueryFactory(
        executor,
        components.value_map_factory,
        identity_property=settings.IDENTITY_PROPERTY,
    )

    logger.info(
        "broker.initialized",
        entity_types=components.profile_factory.entity_types(),
        identity_property=settings.IDENTITY_PROPERTY,
    )

    return DatabaseBroker(
        query_factory,
        components.constraint_binder,
        type_converter,
        identity_property=settings.IDENTITY_PROPERTY,
    )
