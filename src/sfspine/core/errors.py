"""
Structured error types for sforce-spine.

Provides a small hierarchy of typed errors with metadata for error
categorization, reporting, and root cause analysis through chaining.

Every failure the normalization core raises happens *before* a request
leaves the process, so none of these errors are retryable: the caller's
input or configuration must change.

Manifesto:
    - **Typed Error Hierarchy:** One error type per failure the core can hit
    - **Fail Fast:** Input problems surface before any network activity
    - **Rich Context:** Errors carry operation, dialect and column names
    - **Error Chaining:** Preserve original exceptions while adding context

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                       SfSpineError                            │
        │  (category, retryable, context, cause)                       │
        ├──────────────────────────────────────────────────────────────┤
        │                                                               │
        │  ValidationError                 ConfigError                 │
        │  (VALIDATION)                    (CONFIG)                    │
        │       │                               │                      │
        │  CoercionError                   UnsupportedDialectError     │
        │  MissingIdentifierError                                      │
        │  TableShapeError                                             │
        └──────────────────────────────────────────────────────────────┘

Examples:
    >>> err = MissingIdentifierError("delete", ["Name", "Email"])
    >>> err.retryable
    False
    >>> err.to_dict()["context"]["operation"]
    'delete'

Guardrails:
    ❌ DON'T: Raise for a missing-but-expected artifact (marker column,
       inapplicable header). Those are silent no-ops.
    ✅ DO: Raise for input that cannot be enumerated or lacks an Id

Tags:
    error-handling, exception-hierarchy, error-context, sforce-spine

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and routing.

    Attributes:
        VALIDATION: Caller input could not be normalized
        CONFIG: Caller asked for a dialect or setting the core does not know
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    VALIDATION = "VALIDATION"     # Input shape, missing identifier
    CONFIG = "CONFIG"             # Unknown dialect, bad settings
    INTERNAL = "INTERNAL"         # Bugs, unexpected state
    UNKNOWN = "UNKNOWN"           # Uncategorized errors


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Typed fields cover the values callers need to fix their input: the
    operation being prepared, the dialect targeted, and the column set
    that was inspected. Anything else goes in ``metadata``.

    Examples:
        >>> ctx = ErrorContext(operation="update", columns=["Name"])
        >>> ctx.to_dict()
        {'operation': 'update', 'columns': ['Name']}
    """

    operation: str | None = None
    dialect: str | None = None
    columns: list[str] | None = None

    # Additional metadata
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        for key in ["operation", "dialect", "columns"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class SfSpineError(Exception):
    """
    Base exception for all sforce-spine errors.

    All SfSpineError instances carry:
    - **category:** ErrorCategory enum for classification
    - **retryable:** Boolean indicating if the operation can be retried
    - **context:** ErrorContext with structured metadata
    - **cause:** Optional underlying exception for chaining

    Subclasses set ``default_category`` and ``default_retryable`` class
    attributes to provide defaults for their domain.

    Examples:
        >>> error = SfSpineError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(operation="upsert").context.operation
        'upsert'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> SfSpineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise CoercionError("Cannot enumerate").with_context(
                operation="create",
                input_type="Widget",
            )
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(SfSpineError):
    """
    Input validation error.

    Never retryable - the input must be fixed.
    """

    default_category = ErrorCategory.VALIDATION
    default_retryable = False


class CoercionError(ValidationError):
    """Input cannot be enumerated into rows and columns."""

    def __init__(self, message: str, *, input_type: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.input_type = input_type
        if input_type is not None:
            self.context.metadata.setdefault("input_type", input_type)


class MissingIdentifierError(ValidationError):
    """Operation requires an ``Id`` column and none could be resolved."""

    def __init__(self, operation: str, columns: list[str], message: str | None = None):
        self.operation = operation
        self.columns = list(columns)
        listed = ", ".join(self.columns) if self.columns else "<none>"
        super().__init__(
            message or f"Operation '{operation}' requires an 'Id' column; got columns: {listed}",
            context=ErrorContext(operation=operation, columns=self.columns),
        )


class TableShapeError(ValidationError):
    """A record table invariant (equal lengths, unique names) is violated."""

    pass


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(SfSpineError):
    """
    Configuration error.

    Never retryable - configuration must be fixed.
    """

    default_category = ErrorCategory.CONFIG
    default_retryable = False


class UnsupportedDialectError(ConfigError):
    """A component was asked to act for a dialect it does not handle."""

    def __init__(self, dialect: Any, message: str | None = None):
        self.dialect = dialect
        name = getattr(dialect, "value", dialect)
        super().__init__(
            message or f"Unsupported API dialect: {name!r}",
            context=ErrorContext(dialect=str(name)),
        )


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def is_retryable(error: Exception) -> bool:
    """Check if an error is retryable."""
    if isinstance(error, SfSpineError):
        return error.retryable
    return False


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, SfSpineError):
        return error.category
    if isinstance(error, (TypeError, ValueError)):
        return ErrorCategory.VALIDATION
    if isinstance(error, (KeyError, AttributeError)):
        return ErrorCategory.CONFIG
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "SfSpineError",
    "ValidationError",
    "CoercionError",
    "MissingIdentifierError",
    "TableShapeError",
    "ConfigError",
    "UnsupportedDialectError",
    "is_retryable",
    "categorize_error",
]
