"""Duration parsing and formatting for configuration values.

Durations in config files may be written as:
- integers or floats, interpreted as milliseconds (``250``)
- unit strings, optionally chained (``"250ms"``, ``"10s"``, ``"1m30s"``)

Supported units: ``h``, ``m``, ``s``, ``ms``, ``us``/``µs``, ``ns``.
Resolution is one microsecond; anything finer is rounded.
"""

import re
from datetime import timedelta
from typing import Any, List

# Microseconds per unit
_UNIT_MICROSECONDS = {
    "h": 3_600_000_000,
    "m": 60_000_000,
    "s": 1_000_000,
    "ms": 1_000,
    "us": 1,
    "µs": 1,
    "μs": 1,
    "ns": 0.001,
}

_COMPONENT_PATTERN = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_DURATION_PATTERN = re.compile(r"[+-]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:ns|us|µs|μs|ms|s|m|h))+")
_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def parse_duration(value: Any) -> timedelta:
    """Convert a config value to a timedelta.

    Raises:
        ValueError: If the value is not a recognizable duration
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool) or value is None:
        raise ValueError(f"invalid duration {value!r}")
    try:
        return _to_timedelta(value)
    except OverflowError:
        raise ValueError(f"duration out of range {value!r}") from None


def _to_timedelta(value: Any) -> timedelta:
    if isinstance(value, (int, float)):
        return timedelta(milliseconds=value)
    if not isinstance(value, str):
        raise ValueError(f"invalid duration {value!r}")

    text = value.strip()
    if _NUMBER_PATTERN.fullmatch(text):
        return timedelta(milliseconds=float(text))
    if not _DURATION_PATTERN.fullmatch(text):
        raise ValueError(f"invalid duration {value!r}")

    sign = -1 if text.startswith("-") else 1
    micros = 0.0
    for number, unit in _COMPONENT_PATTERN.findall(text):
        micros += float(number) * _UNIT_MICROSECONDS[unit]
    return timedelta(microseconds=sign * round(micros))


def format_duration(value: timedelta) -> str:
    """Render a timedelta in the compact unit form accepted by parse_duration."""
    micros = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
    if micros == 0:
        return "0s"

    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    parts: List[str] = []
    for unit in ("h", "m", "s", "ms", "us"):
        size = _UNIT_MICROSECONDS[unit]
        count, micros = divmod(micros, size)
        if count:
            parts.append(f"{count}{unit}")
    return sign + "".join(parts)
