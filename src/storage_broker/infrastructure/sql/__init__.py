"""
SQL statement assembly.

This package turns schema-bound value maps and constraints into parameterized
SQL text plus a placeholder -> value binding.
"""

from .constraints import (
    BoundConstraintFactory,
    Constraint,
    ConstraintFactoryBinder,
    ConstraintNode,
    Equals,
    MatchAll,
)
from .core.parameters import TokenCounter, to_bind_params
from .profile import SchemaProfile, SchemaProfileFactory
from .statements import (
    DeleteStatement,
    InsertStatement,
    SelectStatement,
    Statement,
    StatementKind,
    StatementState,
    UpdateStatement,
)
from .value_map import BoundValue, BoundValueMap, BoundValueMapFactory

__all__ = [
    "BoundConstraintFactory",
    "Constraint",
    "ConstraintFactoryBinder",
    "ConstraintNode",
    "Equals",
    "MatchAll",
    "TokenCounter",
    "to_bind_params",
    "SchemaProfile",
    "SchemaProfileFactory",
    "DeleteStatement",
    "InsertStatement",
    "SelectStatement",
    "Statement",
    "StatementKind",
    "StatementState",
    "UpdateStatement",
    "BoundValue",
    "BoundValueMap",
    "BoundValueMapFactory",
]
