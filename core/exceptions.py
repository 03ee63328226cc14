"""
Custom exceptions for the symbiosis registry with structured error context.

Each exception carries context information for logging and is mapped to
an HTTP response by the handlers registered in ``api.main``.

Exception Hierarchy:
    RegistryException (base)
    ├── ValidationError              -> 400
    └── StorageError                 -> 500
        ├── ConstraintViolationError -> 409
        └── SchemaInitializationError (fatal at startup)
"""

from typing import Optional, Dict, Any
from datetime import datetime


class RegistryException(Exception):
    """
    Base exception for all registry errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (table, operation, etc.)
        original_exception: The original exception that was caught (if any)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.utcnow()

        self.context["error_timestamp"] = self.timestamp.isoformat()

        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = f"{self.__class__.__name__}: {self.message}"

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    @property
    def detail(self) -> str:
        """Underlying cause message, or the message itself."""
        if self.original_exception:
            return str(getattr(self.original_exception, "orig", None) or self.original_exception)
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Request Errors
# ============================================================================

class ValidationError(RegistryException):
    """
    Raised when a create request is missing a required field.

    Context should include:
        - missing_fields: Names of the fields that were absent or empty
    """
    pass


# ============================================================================
# Storage Errors
# ============================================================================

class StorageError(RegistryException):
    """
    Raised when a database operation fails.

    Context should include:
        - operation: Type of database operation (INSERT, SELECT, DELETE)
        - table_name: Name of the table
    """
    pass


class ConstraintViolationError(StorageError):
    """Unique or foreign key constraint rejected by the database."""
    pass


class SchemaInitializationError(StorageError):
    """Tables could not be created; the service cannot run."""
    pass
