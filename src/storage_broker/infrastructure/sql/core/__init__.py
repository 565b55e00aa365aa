"""Core SQL utilities package."""

from .identifier import is_valid_identifier, validate_identifier
from .parameters import DEFAULT_BIND_PREFIX, TokenCounter, build_placeholder, to_bind_params

__all__ = [
    "is_valid_identifier",
    "validate_identifier",
    "DEFAULT_BIND_PREFIX",
    "TokenCounter",
    "build_placeholder",
    "to_bind_params",
]
