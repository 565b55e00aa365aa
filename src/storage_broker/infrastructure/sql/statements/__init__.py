"""Statement builders for the four CRUD operations."""

from .base import STATEMENT_RULES, Statement, StatementKind, StatementRules, StatementState
from .delete import DeleteStatement
from .insert import DEFAULT_IDENTITY_PROPERTY, InsertStatement
from .select import SelectStatement
from .update import UpdateStatement

__all__ = [
    "STATEMENT_RULES",
    "Statement",
    "StatementKind",
    "StatementRules",
    "StatementState",
    "SelectStatement",
    "InsertStatement",
    "UpdateStatement",
    "DeleteStatement",
    "DEFAULT_IDENTITY_PROPERTY",
]
