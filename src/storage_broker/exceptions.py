"""Error taxonomy for the storage broker.

Every error raised by this package derives from ``StorageBrokerError``. Errors
are raised synchronously at the point of violation and are never retried
internally; the immediate caller decides whether they are fatal.
"""

from typing import Any, Dict, Optional


class StorageBrokerError(RuntimeError):
    """Base class for all storage broker failures."""


class DatabaseBrokerError(StorageBrokerError):
    """Raised when the database-backed broker encounters an error."""


class TableConfigurationError(DatabaseBrokerError):
    """Raised when table configuration is missing or malformed."""


class SchemaBindingError(DatabaseBrokerError):
    """Raised when a property or column is not configured for an entity type."""


class IncompatibleMappingError(DatabaseBrokerError):
    """Raised when value maps bound to different schema profiles are mixed."""


class MergedMappingError(DatabaseBrokerError):
    """Raised when a property- or column-keyed view is requested on a merged map."""


class NotReadyError(DatabaseBrokerError):
    """Raised when a statement is rendered before its required inputs are set."""


class UnsupportedOperationError(DatabaseBrokerError):
    """Raised when a statement kind does not accept the given input."""


class IdentityConflictError(DatabaseBrokerError):
    """Raised when insert values already carry the generated identity property."""


class NotFoundError(DatabaseBrokerError):
    """Raised when removing a property that has not been set."""


class StatementStateError(DatabaseBrokerError):
    """Raised when a statement passed its readiness check without any inputs."""


class NoRowsAffectedError(DatabaseBrokerError):
    """Raised by the broker when a delete matched no rows."""


class ExecutionError(DatabaseBrokerError):
    """Raised by an executor when the backend rejects a statement."""


class QueryExecutionError(DatabaseBrokerError):
    """Structured error for a statement that failed during execution."""

    def __init__(
        self,
        statement_text: str,
        original_error: Exception,
        message: Optional[str] = None,
    ):
        self.statement_text = statement_text
        self.original_error = original_error
        super().__init__(message or f"Error executing query: {original_error}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to structured dict for logging."""
        return {
            "error_type": "QueryExecutionError",
            "statement": self.statement_text,
            "message": str(self),
            "original_error_type": type(self.original_error).__name__,
            "original_error_message": str(self.original_error),
        }
