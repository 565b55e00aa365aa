"""
CLI entry point for the storage broker.

Usage:
    python -m storage_broker.cli <command> [options]

Available commands:
    validate-config  - Load and validate the entity table configuration
    render           - Print the SQL and bindings for a select or delete

Examples:
    # Validate the configured table file
    python -m storage_broker.cli validate-config --config config/tables.yml

    # Render a select by equality
    python -m storage_broker.cli render --config config/tables.yml --entity Author --where lastName=Lovelace

    # Render a delete of every row
    python -m storage_broker.cli render --config config/tables.yml --entity Author --kind delete
"""

import argparse
import json
import sys
from typing import List, Optional, Tuple

from pydantic import ValidationError

from storage_broker.config import get_settings, load_table_config
from storage_broker.exceptions import StorageBrokerError
from storage_broker.factory import build_statement_components
from storage_broker.infrastructure.sql.statements import DeleteStatement, SelectStatement


def _parse_where(expression: str) -> Tuple[str, str]:
    if "=" not in expression:
        raise argparse.ArgumentTypeError(
            f"Invalid --where {expression!r}: expected PROPERTY=VALUE"
        )
    property_name, value = expression.split("=", 1)
    return property_name.strip(), value


def _cmd_validate_config(args: argparse.Namespace) -> int:
    try:
        config = load_table_config(args.config)
    except StorageBrokerError as e:
        print(f"Invalid table configuration: {e}", file=sys.stderr)
        return 1

    components = build_statement_components(config)
    try:
        for entity_type in config:
            profile = components.profile_factory.build(entity_type)
            print(
                f"{entity_type}: table={profile.table_name} "
                f"properties={len(profile.property_to_column)}"
            )
    except StorageBrokerError as e:
        print(f"Invalid table configuration: {e}", file=sys.stderr)
        return 1

    print(f"OK: {len(config)} entity type(s)")
    return 0


def _cmd_render(args: argparse.Namespace) -> int:
    try:
        config = load_table_config(args.config)
        components = build_statement_components(config)
        constraints = components.constraint_binder.bind(args.entity)

        if args.where is None:
            where = constraints.match_all()
        else:
            property_name, value = args.where
            where = constraints.equals(property_name, value)

        statement = SelectStatement() if args.kind == "select" else DeleteStatement()
        statement.set_constraints(where)

        print(statement.statement_text())
        print(json.dumps(statement.placeholder_to_value_map(), ensure_ascii=False))
    except StorageBrokerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point with subcommand routing.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = argparse.ArgumentParser(
        prog="storage_broker.cli",
        description="Storage broker CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    try:
        default_config = str(get_settings().get_table_config_path())
    except ValidationError as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        return 1

    validate_parser = subparsers.add_parser(
        "validate-config", help="Validate the entity table configuration"
    )
    validate_parser.add_argument(
        "--config", default=default_config, help="Path to tables.yml"
    )
    validate_parser.set_defaults(handler=_cmd_validate_config)

    render_parser = subparsers.add_parser(
        "render", help="Render a select or delete statement"
    )
    render_parser.add_argument(
        "--config", default=default_config, help="Path to tables.yml"
    )
    render_parser.add_argument("--entity", required=True, help="Entity type")
    render_parser.add_argument(
        "--kind", choices=["select", "delete"], default="select"
    )
    render_parser.add_argument(
        "--where",
        type=_parse_where,
        default=None,
        help="Equality constraint PROPERTY=VALUE (default: match all rows)",
    )
    render_parser.set_defaults(handler=_cmd_render)

    args = parser.parse_args(argv)

    if not getattr(args, "handler", None):
        parser.print_help()
        return 1

    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
