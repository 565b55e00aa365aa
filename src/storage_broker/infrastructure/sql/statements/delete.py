"""DELETE statement builder."""

from .base import Statement, StatementKind


class DeleteStatement(Statement):
    """``DELETE FROM <table> WHERE <constraint>;``"""

    kind = StatementKind.DELETE
    action_clause = "DELETE FROM"
