"""
Shared statement builder.

A statement collects an optional values map and an optional constraint, then
renders SQL text and the placeholder -> value binding for one CRUD operation.
Which inputs a statement kind accepts, and when it is ready to render, is
driven by STATEMENT_RULES rather than per-class checks.
"""

from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, FrozenSet, List, Optional

from storage_broker.exceptions import (
    IncompatibleMappingError,
    NotReadyError,
    StatementStateError,
    UnsupportedOperationError,
)

from ..constraints import Constraint
from ..value_map import BoundValueMap


class StatementKind(str, Enum):
    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


class StatementState(str, Enum):
    EMPTY = "empty"
    VALUES_SET = "values_set"
    CONSTRAINTS_SET = "constraints_set"
    COMPLETE = "complete"


@dataclass(frozen=True)
class StatementRules:
    accepts_values: bool
    accepts_constraints: bool
    ready_states: FrozenSet[StatementState]


STATEMENT_RULES: Dict[StatementKind, StatementRules] = {
    StatementKind.SELECT: StatementRules(
        accepts_values=False,
        accepts_constraints=True,
        ready_states=frozenset({StatementState.CONSTRAINTS_SET}),
    ),
    StatementKind.INSERT: StatementRules(
        accepts_values=True,
        accepts_constraints=False,
        ready_states=frozenset({StatementState.VALUES_SET}),
    ),
    StatementKind.UPDATE: StatementRules(
        accepts_values=True,
        accepts_constraints=True,
        ready_states=frozenset({StatementState.COMPLETE}),
    ),
    StatementKind.DELETE: StatementRules(
        accepts_values=False,
        accepts_constraints=True,
        ready_states=frozenset({StatementState.CONSTRAINTS_SET}),
    ),
}


class Statement(ABC):
    """Base class for the four statement kinds."""

    kind: ClassVar[StatementKind]
    action_clause: ClassVar[str]

    def __init__(self) -> None:
        self.values: Optional[BoundValueMap] = None
        self.constraints: Optional[Constraint] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(state={self.state.value})"

    @property
    def rules(self) -> StatementRules:
        return STATEMENT_RULES[self.kind]

    @property
    def state(self) -> StatementState:
        if self.values is not None and self.constraints is not None:
            return StatementState.COMPLETE
        if self.values is not None:
            return StatementState.VALUES_SET
        if self.constraints is not None:
            return StatementState.CONSTRAINTS_SET
        return StatementState.EMPTY

    def is_ready(self) -> bool:
        return self.state in self.rules.ready_states

    def set_values(self, value_map: BoundValueMap) -> "Statement":
        """
        Set the values this statement writes.

        Raises:
            UnsupportedOperationError: If this kind does not take values.
            IncompatibleMappingError: If constraints are already set for a
                different entity type. The values stay set; discard the
                statement.
        """
        if not self.rules.accepts_values:
            raise UnsupportedOperationError(
                f"{type(self).__name__} does not accept values"
            )
        self.values = value_map
        self._check_compatibility()
        return self

    def set_constraints(self, constraints: Constraint) -> "Statement":
        """
        Set the constraint selecting the rows this statement applies to.

        Raises:
            UnsupportedOperationError: If this kind does not take constraints.
            IncompatibleMappingError: If values are already set for a
                different entity type. The constraint stays set; discard the
                statement.
        """
        if not self.rules.accepts_constraints:
            raise UnsupportedOperationError(
                f"{type(self).__name__} does not accept constraints"
            )
        self.constraints = constraints
        self._check_compatibility()
        return self

    def statement_text(self) -> str:
        """
        Render the statement.

        Clauses are joined by single spaces, empty clauses are dropped and the
        text ends with a semicolon.

        Raises:
            NotReadyError: If the inputs this kind requires are not set.
        """
        if not self.is_ready():
            raise NotReadyError(
                f"Cannot create {self.kind.value} statement text. "
                f"Required values are not set (state: {self.state.value})."
            )

        clauses: List[Optional[str]] = [
            self.action_clause,
            self.table_name(),
            self.body_clause(),
            self.where_clause(),
        ]
        return " ".join(clause for clause in clauses if clause) + ";"

    def placeholder_to_value_map(self) -> Dict[str, Any]:
        """
        Binding for the rendered text.

        Values and constraints are merged (values first) when both are set.

        Raises:
            NotReadyError: If the inputs this kind requires are not set.
        """
        if not self.is_ready():
            raise NotReadyError(
                f"Cannot create {self.kind.value} placeholder to value map. "
                f"Required values are not set (state: {self.state.value})."
            )

        if self.values is not None and self.constraints is not None:
            value_map = self.values.merge(self.constraints.value_map)
        elif self.values is not None:
            value_map = self.values
        elif self.constraints is not None:
            value_map = self.constraints.value_map
        else:
            raise StatementStateError(
                f"Values and constraints are both unset but {type(self).__name__} "
                "reported ready. Check STATEMENT_RULES."
            )

        return value_map.placeholder_to_value()

    def table_name(self) -> str:
        if self.values is not None:
            return self.values.table_name
        if self.constraints is not None:
            return self.constraints.value_map.table_name
        raise NotReadyError(
            "set_values() or set_constraints() must be called before table_name()"
        )

    def body_clause(self) -> Optional[str]:
        return None

    def where_clause(self) -> Optional[str]:
        if self.constraints is None:
            return None
        return f"WHERE {self.constraints.render_sql()}"

    def _check_compatibility(self) -> None:
        if self.values is None or self.constraints is None:
            return
        if not self.values.is_compatible(self.constraints.value_map):
            raise IncompatibleMappingError(
                "Provided values and constraints are not compatible "
                f"({self.values.entity_type} vs {self.constraints.entity_type})"
            )
