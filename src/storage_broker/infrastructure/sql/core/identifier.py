"""
SQL identifier validation.

Table and column names from the table configuration are rendered verbatim into
statement text and embedded in bind-parameter names, so they are restricted to
plain identifiers.
"""

import re

from storage_broker.exceptions import TableConfigurationError

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# PostgreSQL limit; also safe for MySQL and SQLite
MAX_IDENTIFIER_LENGTH = 63


def is_valid_identifier(name: str) -> bool:
    """
    Check whether ``name`` can be used as a table or column name.

    Examples:
        >>> is_valid_identifier("first_name")
        True
        >>> is_valid_identifier("first name")
        False
        >>> is_valid_identifier("1st")
        False
    """
    return (
        isinstance(name, str)
        and len(name) <= MAX_IDENTIFIER_LENGTH
        and IDENTIFIER_PATTERN.match(name) is not None
    )


def validate_identifier(name: str, kind: str = "identifier") -> str:
    """
    Validate a SQL identifier and return it unchanged.

    Args:
        name: The identifier to validate
        kind: What the identifier names ("table", "column"), for the message

    Raises:
        TableConfigurationError: If the identifier is empty, too long or
            contains characters other than letters, digits and underscores
    """
    if not is_valid_identifier(name):
        raise TableConfigurationError(
            f"Invalid {kind} name {name!r}: expected letters, digits and "
            f"underscores (max {MAX_IDENTIFIER_LENGTH} characters)"
        )
    return name
