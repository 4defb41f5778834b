"""
Error hierarchy for the messaging client.

Provides:
- ErrorCategory enum for classifying errors
- ClientError hierarchy for typed exceptions
- ConfigurationError raised by configuration validation
"""

from client_core.errors.exceptions import (
    ClientError,
    ConfigurationError,
    ErrorCategory,
    PermanentError,
)

__all__ = [
    # Enums
    "ErrorCategory",
    # Base classes
    "ClientError",
    "PermanentError",
    # Configuration
    "ConfigurationError",
]
