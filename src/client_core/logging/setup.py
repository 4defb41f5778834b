"""Logging setup and configuration."""

import io
import logging
import sys

from client_core.logging.context import set_log_context
from client_core.logging.formatters import ConsoleFormatter, JSONFormatter

DEFAULT_CONSOLE_LEVEL = logging.INFO


def setup_logging(
    name: str = "msgclient",
    client_id: str | None = None,
    component: str | None = None,
    json_format: bool = False,
    level: int = DEFAULT_CONSOLE_LEVEL,
    stream=None,
) -> logging.Logger:
    """
    Configure root logging with a single console handler.

    Args:
        name: Name of the logger returned
        client_id: Client identifier recorded in the log context
        component: Component name recorded in the log context (e.g. "cli")
        json_format: Emit one JSON object per line instead of console text
        level: Handler level (default: INFO)
        stream: Output stream (default: stdout)

    Returns:
        Configured logger instance
    """
    if client_id:
        set_log_context(client_id=client_id)
    if component:
        set_log_context(component=component)

    if stream is None:
        if sys.platform == "win32":
            stream = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", errors="replace")
        else:
            stream = sys.stdout

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if json_format else ConsoleFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    logger = logging.getLogger(name)
    logger.debug(
        "Logging initialized",
        extra={"config_value": "json" if json_format else "console"},
    )
    return logger

def get_logger(name: str) -> logging.Logger:
    """Get a named logger; configuration comes from setup_logging()."""
    return logging.getLogger(name)
