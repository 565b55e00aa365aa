"""
SQL parameter binding utilities.

Every value map owns a unique token handed out by a shared ``TokenCounter``.
Placeholders are built from that token plus the column name, so two maps never
emit the same placeholder even when they bind the same column.
"""

import threading
from typing import Any, Dict, Mapping

DEFAULT_BIND_PREFIX = "val"


class TokenCounter:
    """
    Monotonically increasing token source, safe to share between threads.

    Example:
        >>> counter = TokenCounter()
        >>> counter.next(), counter.next()
        (1, 2)
    """

    def __init__(self, start: int = 1):
        self._next = start
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            token = self._next
            self._next += 1
        return token


def build_placeholder(token: int, column: str, prefix: str = DEFAULT_BIND_PREFIX) -> str:
    """
    Build the placeholder for ``column`` in the value map owning ``token``.

    Examples:
        >>> build_placeholder(3, "col_one")
        ':val3_col_one'
        >>> build_placeholder(12, "id", prefix="p")
        ':p12_id'
    """
    return f":{prefix}{token}_{column}"


def to_bind_params(placeholder_to_value: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Remap placeholder keys to driver bind-parameter names.

    Statement text carries ``:name`` placeholders while drivers expect the
    parameter dictionary keyed by the bare name.

    Examples:
        >>> to_bind_params({":val1_col_one": 1, ":val2_id": 7})
        {'val1_col_one': 1, 'val2_id': 7}
    """
    return {
        (key[1:] if key.startswith(":") else key): value
        for key, value in placeholder_to_value.items()
    }
