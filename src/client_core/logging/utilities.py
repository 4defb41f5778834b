"""Structured logging helpers."""

import logging
from typing import Any

# Attributes every LogRecord already has; extra keys may not reuse them
_RESERVED_LOG_KEYS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def log_with_context(
    logger: logging.Logger,
    level: int,
    msg: str,
    *,
    exc_info: Any = None,
    **fields: Any,
) -> None:
    """
    Log msg with structured fields attached to the record.

    Fields show up as record attributes, which JSONFormatter and
    ConsoleFormatter pick up (config_field, config_value, topic, ...).
    Fields named like a built-in LogRecord attribute are dropped, and so
    are fields whose value is None. The record's source location is the
    caller of this function.

    Example:
        log_with_context(
            logger, logging.WARNING, "consumer.max_wait_time is very low",
            config_field="consumer.max_wait_time",
            config_value="50ms",
        )
    """
    if not logger.isEnabledFor(level):
        return

    extra = {
        key: value
        for key, value in fields.items()
        if key not in _RESERVED_LOG_KEYS and value is not None
    }
    logger.log(level, msg, exc_info=exc_info, extra=extra, stacklevel=2)
