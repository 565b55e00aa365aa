"""SELECT statement builder."""

from .base import Statement, StatementKind


class SelectStatement(Statement):
    """``SELECT * FROM <table> WHERE <constraint>;``"""

    kind = StatementKind.SELECT
    action_clause = "SELECT * FROM"
