"""UPDATE statement builder."""

from typing import Optional

from .base import Statement, StatementKind


class UpdateStatement(Statement):
    """
    ``UPDATE <table> SET c1=:p1, c2=:p2 WHERE <constraint>;``

    Example:
        >>> statement = UpdateStatement().set_values(values).set_constraints(by_id)
        >>> statement.statement_text()
        'UPDATE authors SET first_name=:val1_first_name WHERE id=:val2_id;'
    """

    kind = StatementKind.UPDATE
    action_clause = "UPDATE"

    def body_clause(self) -> Optional[str]:
        if self.values is None:
            return None
        pairs = [
            f"{column}={placeholder}"
            for placeholder, column in self.values.placeholder_to_column().items()
        ]
        return "SET " + ", ".join(pairs)
