"""Error types and error-handling helpers for the correction engine.

Nothing in the engine is fatal to its host. Errors fall into three groups:
- Validation: bad correction pairs or unknown words; reported as booleans
  by the store, raised only at the CLI/API boundary
- Persistence: read/write failures; logged, state falls back to defaults
- Malformed import: raised to the caller, existing state is left untouched
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from correction_engine.logging import get_logger

logger = get_logger(__name__)


class ErrorCategory(str, Enum):
    """Categories of errors for handling decisions."""

    VALIDATION = "validation"  # Bad input - reject locally
    PERSISTENCE = "persistence"  # Storage read/write - degrade to defaults
    IMPORT = "import"  # Malformed import document - surface to caller
    CONFIGURATION = "configuration"  # Bad settings file
    INTERNAL = "internal"  # Bug in code


class CorrectionEngineError(Exception):
    """Base exception for correction engine errors.

    Attributes:
        message: Human-readable error message
        category: Error category for handling
        context: Additional context information
        recoverable: Whether the caller can carry on with defaults
    """

    category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        context: dict | None = None,
        recoverable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} (context: {self.context})"
        return self.message


class ValidationError(CorrectionEngineError):
    """Rejected input, e.g. an empty or self-referencing correction pair."""

    category = ErrorCategory.VALIDATION

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message, context, recoverable=True)


class PersistenceError(CorrectionEngineError):
    """A snapshot could not be read or written."""

    category = ErrorCategory.PERSISTENCE

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message, context, recoverable=True)


class ImportFormatError(CorrectionEngineError):
    """An imported corrections document could not be parsed."""

    category = ErrorCategory.IMPORT

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message, context, recoverable=False)


class ConfigurationError(CorrectionEngineError):
    """Settings file is missing required values or cannot be parsed."""

    category = ErrorCategory.CONFIGURATION

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message, context, recoverable=False)


class ErrorContext:
    """Context manager that logs failures of a named operation.

    Runs an optional rollback on error and never suppresses the exception.
    """

    def __init__(
        self,
        operation: str,
        rollback: Callable[[], None] | None = None,
        context: dict | None = None,
    ):
        """Initialize error context.

        Args:
            operation: Name of the operation being performed
            rollback: Optional rollback function to call on error
            context: Additional context to include in log records
        """
        self.operation = operation
        self.rollback = rollback
        self.context = context or {}
        self.error: Exception | None = None

    def __enter__(self) -> "ErrorContext":
        logger.debug(f"Starting operation: {self.operation}")
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: Any) -> bool:
        if exc_val is None:
            logger.debug(f"Completed operation: {self.operation}")
            return False

        self.error = exc_val
        logger.error(
            f"Error in {self.operation}: {exc_val}",
            extra={
                "operation": self.operation,
                "error_type": type(exc_val).__name__,
                **self.context,
            },
        )

        if self.rollback:
            try:
                logger.info(f"Rolling back {self.operation}")
                self.rollback()
            except Exception as rollback_error:
                logger.error(f"Rollback failed for {self.operation}: {rollback_error}")

        return False


def format_error_for_display(error: Exception) -> str:
    """Format an error message for user display.

    Args:
        error: Error to format

    Returns:
        Human-readable error message
    """
    if isinstance(error, CorrectionEngineError):
        category = error.category.value
        if error.context:
            context_str = ", ".join(f"{k}={v}" for k, v in error.context.items())
            return f"[{category}] {error.message} ({context_str})"
        return f"[{category}] {error.message}"

    return f"[error] {type(error).__name__}: {error}"
