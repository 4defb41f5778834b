"""
Structured logging module.

Provides JSON and console logging with client context propagation.
"""

from client_core.logging.context import (
    clear_log_context,
    get_log_context,
    set_log_context,
)
from client_core.logging.formatters import ConsoleFormatter, JSONFormatter
from client_core.logging.setup import get_logger, setup_logging
from client_core.logging.utilities import log_with_context

__all__ = [
    # Setup
    "setup_logging",
    "get_logger",
    # Formatters
    "JSONFormatter",
    "ConsoleFormatter",
    # Context
    "set_log_context",
    "get_log_context",
    "clear_log_context",
    # Utilities
    "log_with_context",
]
