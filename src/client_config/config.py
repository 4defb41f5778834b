"""Messaging client configuration model.

One aggregate, ClientConfig, groups the settings every client component
reads:
- net: connection-level timeouts and request pipelining
- metadata: cluster metadata retries and background refresh
- producer: delivery guarantees, batching, and retries
- consumer: fetch sizing, broker wait time, and retries
- client_id / channel_buffer_size: settings shared by all components

All records are frozen. Start from new_config(), derive a modified copy with
dataclasses.replace() or ClientConfig.with_overrides(), then call validate()
once before handing the config to a producer or consumer.

All durations are timedelta values; the brokers only honour millisecond
precision, so any sub-millisecond remainder of producer.timeout and
consumer.max_wait_time is truncated when the request is built.
"""

import keyword
import logging
from dataclasses import dataclass, field, fields, is_dataclass, replace
from datetime import timedelta
from typing import Any, Dict, List, Mapping, Optional, Tuple

from client_config.durations import format_duration, parse_duration
from client_core.errors import ConfigurationError
from client_core.logging import log_with_context
from client_core.partitioner import (
    PartitionerConstructor,
    get_partitioner,
    new_hash_partitioner,
    partitioner_name,
)
from client_core.protocol import force_flush_threshold
from client_core.types import CompressionCodec, RequiredAcks

# Sent with every request unless the application sets its own identifier
DEFAULT_CLIENT_ID = "msgclient"

_ONE_MILLISECOND = timedelta(milliseconds=1)
_LOW_MAX_WAIT_TIME = timedelta(milliseconds=100)
_ZERO = timedelta(0)

# Alternate spellings accepted for producer.required_acks in config files
_ACKS_ALIASES = {
    "all": RequiredAcks.WAIT_FOR_ALL,
    "local": RequiredAcks.WAIT_FOR_LOCAL,
    "none": RequiredAcks.NO_RESPONSE,
}


# =========================================================================
# NETWORK
# =========================================================================


@dataclass(frozen=True)
class NetConfig:
    """Network-level settings used by every broker connection."""

    # Outstanding requests per connection before sending blocks
    max_open_requests: int = 5
    dial_timeout: timedelta = timedelta(seconds=30)
    read_timeout: timedelta = timedelta(seconds=30)
    write_timeout: timedelta = timedelta(seconds=30)
    # Zero disables TCP keep-alives
    keep_alive: timedelta = _ZERO


# =========================================================================
# METADATA
# =========================================================================


@dataclass(frozen=True)
class MetadataRetryConfig:
    # Retries while the cluster is in the middle of a leader election
    max: int = 3
    backoff: timedelta = timedelta(milliseconds=250)


@dataclass(frozen=True)
class MetadataConfig:
    """Cluster metadata management, shared by producer and consumer."""

    retry: MetadataRetryConfig = field(default_factory=MetadataRetryConfig)
    # Zero disables background refresh
    refresh_frequency: timedelta = timedelta(minutes=10)


# =========================================================================
# PRODUCER
# =========================================================================


@dataclass(frozen=True)
class ProducerReturnConfig:
    """Which result channels the producer populates.

    Enabled channels must be drained by the application or the producer
    will eventually block.
    """

    successes: bool = False
    errors: bool = True


@dataclass(frozen=True)
class FlushConfig:
    """Best-effort batching triggers; all zero means send as fast as possible."""

    bytes: int = 0
    messages: int = 0
    frequency: timedelta = _ZERO
    # Hard cap on messages per request; zero means unlimited
    max_messages: int = 0


@dataclass(frozen=True)
class ProducerRetryConfig:
    max: int = 3
    backoff: timedelta = timedelta(milliseconds=100)


@dataclass(frozen=True)
class ProducerConfig:
    """Settings for producing messages."""

    # Should not exceed the broker's message.max.bytes
    max_message_bytes: int = 1000000
    # Plain int so deprecated counts above 1 stay representable
    required_acks: int = RequiredAcks.WAIT_FOR_LOCAL
    # How long the broker waits for required_acks; millisecond precision
    timeout: timedelta = timedelta(seconds=10)
    compression: CompressionCodec = CompressionCodec.NONE
    partitioner: Optional[PartitionerConstructor] = new_hash_partitioner
    return_: ProducerReturnConfig = field(default_factory=ProducerReturnConfig)
    flush: FlushConfig = field(default_factory=FlushConfig)
    retry: ProducerRetryConfig = field(default_factory=ProducerRetryConfig)


# =========================================================================
# CONSUMER
# =========================================================================


@dataclass(frozen=True)
class ConsumerRetryConfig:
    # Wait after a failed partition read before trying again
    backoff: timedelta = timedelta(seconds=2)


@dataclass(frozen=True)
class FetchConfig:
    """Bytes requested per fetch. Values travel as signed 32-bit integers."""

    # Zero makes the consumer spin when no messages are available
    min: int = 1
    default: int = 32768
    # Zero means no limit beyond the protocol's response ceiling
    max: int = 0


@dataclass(frozen=True)
class ConsumerReturnConfig:
    errors: bool = False


@dataclass(frozen=True)
class ConsumerConfig:
    """Settings for consuming messages."""

    retry: ConsumerRetryConfig = field(default_factory=ConsumerRetryConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    # How long the broker may hold a fetch waiting for fetch.min bytes
    max_wait_time: timedelta = timedelta(milliseconds=250)
    return_: ConsumerReturnConfig = field(default_factory=ConsumerReturnConfig)


# =========================================================================
# AGGREGATE
# =========================================================================


@dataclass(frozen=True)
class ClientConfig:
    """Complete messaging client configuration.

    Configuration structure:
        net:       {max_open_requests, dial_timeout, read_timeout, write_timeout, keep_alive}
        metadata:  {retry: {max, backoff}, refresh_frequency}
        producer:  {max_message_bytes, required_acks, timeout, compression, partitioner,
                    return: {successes, errors},
                    flush: {bytes, messages, frequency, max_messages},
                    retry: {max, backoff}}
        consumer:  {retry: {backoff}, fetch: {min, default, max}, max_wait_time,
                    return: {errors}}
        client_id: str
        channel_buffer_size: int
    """

    net: NetConfig = field(default_factory=NetConfig)
    metadata: MetadataConfig = field(default_factory=MetadataConfig)
    producer: ProducerConfig = field(default_factory=ProducerConfig)
    consumer: ConsumerConfig = field(default_factory=ConsumerConfig)
    # Sent with every request for broker-side logging and auditing
    client_id: str = DEFAULT_CLIENT_ID
    # Events buffered in internal and external queues
    channel_buffer_size: int = 256

    def with_overrides(self, overrides: Mapping[str, Any]) -> "ClientConfig":
        """Return a copy with nested overrides applied.

        Keys follow the configuration structure (``{"producer": {"flush":
        {"messages": 10}}}``). Values are coerced to each field's type:
        durations from ``"250ms"``-style strings or millisecond numbers,
        compression and partitioner from their names. The result is not
        validated.

        Raises:
            ConfigurationError: On unknown keys or values that can't be coerced
        """
        return _apply_overrides(self, overrides, "")

    def to_dict(self) -> Dict[str, Any]:
        """Plain nested dict suitable for YAML/JSON output."""
        return _record_to_dict(self)

    def validate(self, logger: Optional[logging.Logger] = None) -> List[str]:
        """Validate configuration for correctness and constraints.

        Advisory conditions are logged at WARNING first and never stop
        validation. Then net, metadata, producer, consumer and shared
        settings are checked in that order; the first violation raises.

        Args:
            logger: Receives advisory messages (default: this module's logger)

        Returns:
            Advisory messages in the order they were emitted

        Raises:
            ConfigurationError: Naming the first setting that is out of range
        """
        advisories = self._log_advisories(logger if logger is not None else logging.getLogger(__name__))

        self._validate_net()
        self._validate_metadata()
        self._validate_producer()
        self._validate_consumer()
        self._validate_shared()

        return advisories

    def _collect_advisories(self) -> List[Tuple[str, Any, str]]:
        producer = self.producer
        consumer = self.consumer
        threshold = force_flush_threshold()
        found: List[Tuple[str, Any, str]] = []

        if _is_count(producer.required_acks) and producer.required_acks > 1:
            found.append((
                "producer.required_acks",
                producer.required_acks,
                "producer.required_acks > 1 is deprecated and is rejected by brokers >= 0.8.2.0.",
            ))
        if _is_count(producer.max_message_bytes) and producer.max_message_bytes >= threshold:
            found.append((
                "producer.max_message_bytes",
                producer.max_message_bytes,
                "producer.max_message_bytes is too close to MAX_REQUEST_SIZE; it will be ignored.",
            ))
        if _is_count(producer.flush.bytes) and producer.flush.bytes >= threshold:
            found.append((
                "producer.flush.bytes",
                producer.flush.bytes,
                "producer.flush.bytes is too close to MAX_REQUEST_SIZE; it will be ignored.",
            ))
        if _is_duration(producer.timeout) and producer.timeout % _ONE_MILLISECOND:
            found.append((
                "producer.timeout",
                format_duration(producer.timeout),
                "producer.timeout only supports millisecond resolution; the remainder will be truncated.",
            ))
        if _is_duration(consumer.max_wait_time) and consumer.max_wait_time < _LOW_MAX_WAIT_TIME:
            found.append((
                "consumer.max_wait_time",
                format_duration(consumer.max_wait_time),
                "consumer.max_wait_time is very low, which can cause high CPU and network usage.",
            ))
        if _is_duration(consumer.max_wait_time) and consumer.max_wait_time % _ONE_MILLISECOND:
            found.append((
                "consumer.max_wait_time",
                format_duration(consumer.max_wait_time),
                "consumer.max_wait_time only supports millisecond precision; the remainder will be truncated.",
            ))
        if self.client_id == DEFAULT_CLIENT_ID:
            found.append((
                "client_id",
                self.client_id,
                f"client_id is the default of '{DEFAULT_CLIENT_ID}', "
                "you should consider setting it to something application-specific.",
            ))
        return found

    def _log_advisories(self, log: logging.Logger) -> List[str]:
        messages = []
        for config_field, value, message in self._collect_advisories():
            log_with_context(
                log,
                logging.WARNING,
                message,
                config_field=config_field,
                config_value=value,
            )
            messages.append(message)
        return messages

    def _validate_net(self) -> None:
        net = self.net
        _validate_min("net.max_open_requests", net.max_open_requests, 0, inclusive=False)
        _validate_min("net.dial_timeout", net.dial_timeout, _ZERO, inclusive=False)
        _validate_min("net.read_timeout", net.read_timeout, _ZERO, inclusive=False)
        _validate_min("net.write_timeout", net.write_timeout, _ZERO, inclusive=False)
        _validate_min("net.keep_alive", net.keep_alive, _ZERO, inclusive=True)

    def _validate_metadata(self) -> None:
        metadata = self.metadata
        _validate_min("metadata.retry.max", metadata.retry.max, 0, inclusive=True)
        _validate_min("metadata.retry.backoff", metadata.retry.backoff, _ZERO, inclusive=True)
        _validate_min("metadata.refresh_frequency", metadata.refresh_frequency, _ZERO, inclusive=True)

    def _validate_producer(self) -> None:
        producer = self.producer
        flush = producer.flush

        _validate_min("producer.max_message_bytes", producer.max_message_bytes, 0, inclusive=False)
        _validate_min("producer.required_acks", producer.required_acks, RequiredAcks.WAIT_FOR_ALL, inclusive=True)
        _validate_min("producer.timeout", producer.timeout, _ZERO, inclusive=False)
        if producer.partitioner is None:
            raise ConfigurationError("producer.partitioner must not be None", field="producer.partitioner")

        _validate_min("producer.flush.bytes", flush.bytes, 0, inclusive=True)
        _validate_min("producer.flush.messages", flush.messages, 0, inclusive=True)
        _validate_min("producer.flush.frequency", flush.frequency, _ZERO, inclusive=True)
        _validate_min("producer.flush.max_messages", flush.max_messages, 0, inclusive=True)
        if 0 < flush.max_messages < flush.messages:
            raise ConfigurationError(
                "producer.flush.max_messages must be >= producer.flush.messages when set, "
                f"got {flush.max_messages} < {flush.messages}",
                field="producer.flush.max_messages",
            )

        _validate_min("producer.retry.max", producer.retry.max, 0, inclusive=True)
        _validate_min("producer.retry.backoff", producer.retry.backoff, _ZERO, inclusive=True)

    def _validate_consumer(self) -> None:
        consumer = self.consumer
        _validate_min("consumer.retry.backoff", consumer.retry.backoff, _ZERO, inclusive=True)
        _validate_min("consumer.fetch.min", consumer.fetch.min, 0, inclusive=False)
        _validate_min("consumer.fetch.default", consumer.fetch.default, 0, inclusive=False)
        _validate_min("consumer.fetch.max", consumer.fetch.max, 0, inclusive=True)
        _validate_min("consumer.max_wait_time", consumer.max_wait_time, _ONE_MILLISECOND, inclusive=True)

    def _validate_shared(self) -> None:
        _validate_min("channel_buffer_size", self.channel_buffer_size, 0, inclusive=True)


def new_config() -> ClientConfig:
    """Return a configuration populated with defaults that pass validation."""
    return ClientConfig()


def validate_config(config: ClientConfig, logger: Optional[logging.Logger] = None) -> List[str]:
    """Validate config; see ClientConfig.validate()."""
    return config.validate(logger=logger)


# =========================================================================
# HELPERS
# =========================================================================


def _describe(value: Any) -> str:
    if isinstance(value, timedelta):
        return format_duration(value)
    return str(int(value)) if isinstance(value, int) else str(value)


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_duration(value: Any) -> bool:
    return isinstance(value, timedelta)


def _validate_min(name: str, value: Any, min_value: Any, inclusive: bool) -> None:
    """Validate that a setting's value meets a minimum threshold."""
    if _is_duration(min_value):
        expected, well_typed = "a timedelta", _is_duration(value)
    else:
        expected, well_typed = "an int", _is_count(value)
    if not well_typed:
        raise ConfigurationError(
            f"{name} must be {expected}, got {type(value).__name__}",
            field=name,
        )

    below = value < min_value if inclusive else value <= min_value
    if not below:
        return
    if inclusive:
        raise ConfigurationError(
            f"{name} must be >= {_describe(min_value)}, got {_describe(value)}",
            field=name,
        )
    else:
        raise ConfigurationError(
            f"{name} must be > {_describe(min_value)}, got {_describe(value)}",
            field=name,
        )


def _attr_name(key: str) -> str:
    # "return" is stored as return_
    return f"{key}_" if keyword.iskeyword(key) else key


def _key_name(attr: str) -> str:
    return attr[:-1] if attr.endswith("_") else attr


def _apply_overrides(record: Any, overrides: Mapping[str, Any], path: str) -> Any:
    if not isinstance(overrides, Mapping):
        raise ConfigurationError(
            f"{path or 'config'} must be a mapping, got {type(overrides).__name__}",
            field=path or None,
        )

    known = {f.name for f in fields(record)}
    changes: Dict[str, Any] = {}
    for key, value in overrides.items():
        attr = _attr_name(str(key))
        setting = f"{path}.{key}" if path else str(key)
        if attr not in known:
            raise ConfigurationError(f"Unknown setting: {setting}", field=setting)

        current = getattr(record, attr)
        if is_dataclass(current):
            changes[attr] = _apply_overrides(current, value, setting)
        else:
            changes[attr] = _coerce(setting, attr, current, value)

    return replace(record, **changes)


def _coerce(setting: str, attr: str, current: Any, value: Any) -> Any:
    """Convert an override value to the type of the field it replaces."""
    try:
        if attr == "partitioner":
            if value is None or callable(value):
                return value
            return get_partitioner(str(value))
        if attr == "required_acks":
            return _coerce_acks(value)
        if isinstance(current, timedelta):
            return parse_duration(value)
        if isinstance(current, CompressionCodec):
            if isinstance(value, CompressionCodec):
                return value
            if isinstance(value, str):
                return CompressionCodec.from_name(value)
            return CompressionCodec(value)
        if isinstance(current, bool):
            if isinstance(value, bool):
                return value
            if isinstance(value, str) and value.strip().lower() in ("true", "false"):
                return value.strip().lower() == "true"
            raise ValueError(f"expected a boolean, got {value!r}")
        if isinstance(current, int):
            if isinstance(value, bool) or isinstance(value, float):
                raise ValueError(f"expected an integer, got {value!r}")
            return int(value)
        if isinstance(current, str):
            return str(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid value for {setting}: {e}", field=setting, cause=e) from e
    return value


def _coerce_acks(value: Any) -> int:
    if isinstance(value, (bool, float)):
        raise ValueError(f"expected an acknowledgement level, got {value!r}")
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _ACKS_ALIASES:
            return _ACKS_ALIASES[text]
        if text.upper() in RequiredAcks.__members__:
            return RequiredAcks[text.upper()]
        value = int(text)
    acks = int(value)
    try:
        return RequiredAcks(acks)
    except ValueError:
        return acks


def _value_to_plain(value: Any) -> Any:
    if isinstance(value, timedelta):
        return format_duration(value)
    if isinstance(value, CompressionCodec):
        return value.name.lower()
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return int(value)
    return value


def _record_to_dict(record: Any) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for f in fields(record):
        value = getattr(record, f.name)
        key = _key_name(f.name)
        if is_dataclass(value):
            result[key] = _record_to_dict(value)
        elif f.name == "partitioner":
            result[key] = partitioner_name(value) or getattr(value, "__qualname__", repr(value))
        else:
            result[key] = _value_to_plain(value)
    return result
