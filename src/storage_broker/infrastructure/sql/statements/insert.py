"""INSERT statement builder."""

from typing import Optional

from storage_broker.exceptions import IdentityConflictError

from .base import Statement, StatementKind

DEFAULT_IDENTITY_PROPERTY = "id"


class InsertStatement(Statement):
    """
    ``INSERT INTO <table> (c1, c2) VALUES (:p1, :p2);``

    The identity column is generated by the database, so values that already
    carry the identity property are rejected when rendering.

    Example:
        >>> InsertStatement().set_values(values).statement_text()
        'INSERT INTO authors (first_name, last_name) VALUES (:val1_first_name, :val1_last_name);'
    """

    kind = StatementKind.INSERT
    action_clause = "INSERT INTO"

    def __init__(self, identity_property: str = DEFAULT_IDENTITY_PROPERTY):
        super().__init__()
        self.identity_property = identity_property

    def body_clause(self) -> Optional[str]:
        if self.values is None:
            return None

        if self.values.has_property(self.identity_property):
            raise IdentityConflictError(
                f"Insert values include '{self.identity_property}'. "
                f"'{self.identity_property}' is generated and not allowed for inserts."
            )

        placeholder_to_column = self.values.placeholder_to_column()
        column_list = ", ".join(placeholder_to_column.values())
        placeholder_list = ", ".join(placeholder_to_column.keys())
        return f"({column_list}) VALUES ({placeholder_list})"
