"""
Exception hierarchy for the messaging client.

Provides typed exceptions with retry classification so callers can tell
a misconfiguration apart from a condition worth retrying.
"""

from client_core.types import ErrorCategory


class ClientError(Exception):
    """
    Base exception for all client errors.

    Attributes:
        message: Human-readable error description
        category: Error classification for retry decisions
        cause: Original exception if wrapping
        context: Additional context dict for debugging
    """

    category: ErrorCategory = ErrorCategory.UNKNOWN

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        context: dict | None = None,
    ):
        self.message = message
        self.cause = cause
        self.context = context or {}
        super().__init__(message)

    @property
    def is_retryable(self) -> bool:
        return self.category in (ErrorCategory.TRANSIENT, ErrorCategory.UNKNOWN)

    def __str__(self) -> str:
        parts = [self.message]
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClientError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.message == other.message
            and self.context == other.context
        )

    def __hash__(self) -> int:
        # context is a dict, so only the hashable parts of equality are used
        return hash((type(self), self.message))


# =============================================================================
# Permanent Errors (Don't Retry)
# =============================================================================


class PermanentError(ClientError):
    """Base class for permanent/non-retriable errors."""

    category = ErrorCategory.PERMANENT


class ConfigurationError(PermanentError):
    """
    The supplied settings are self-inconsistent or out of the accepted range.

    Raised before any network resource is acquired. Misconfiguration does not
    self-correct, so this is never retryable.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message, cause, {"field": field} if field else None)
        self.field = field

