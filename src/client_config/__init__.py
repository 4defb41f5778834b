"""Configuration model for the messaging client.

This package defines every setting the transport, producer and consumer
read, their defaults, and the validation gate that runs before any
connection is opened.

Main Functions
--------------

Core configuration:
    - new_config(): Default-populated ClientConfig
    - validate_config(): Check a config, returning advisories or raising
      ConfigurationError

Loading from files:
    - load_config(): Load client configuration from YAML
    - get_config(): Get or load singleton config instance
    - set_config() / reset_config(): Replace or clear the singleton

Usage Examples
--------------

Build and validate in code:
    >>> from client_config import new_config
    >>> from client_core.types import RequiredAcks
    >>>
    >>> config = new_config().with_overrides({
    ...     "client_id": "orders-service",
    ...     "producer": {"required_acks": RequiredAcks.WAIT_FOR_ALL},
    ... })
    >>> config.validate()
    []

Load from a file:
    >>> from pathlib import Path
    >>> from client_config import load_config
    >>> config = load_config(config_path=Path("/custom/path/client.yaml"))

Configuration Priority
---------------------

Settings are merged in the following priority (highest to lowest):

1. Explicit overrides passed to load_config()
2. Environment variables (MSGCLIENT_CLIENT_ID, ${VAR} references in YAML)
3. YAML configuration file
4. Dataclass defaults

See Also
--------

- client_config.config: Configuration records and validation
- client_config.loader: YAML loading and singleton access
- client_config.cli: Command-line validation tool
"""

from client_config.config import (
    DEFAULT_CLIENT_ID,
    ClientConfig,
    ConsumerConfig,
    ConsumerRetryConfig,
    ConsumerReturnConfig,
    FetchConfig,
    FlushConfig,
    MetadataConfig,
    MetadataRetryConfig,
    NetConfig,
    ProducerConfig,
    ProducerRetryConfig,
    ProducerReturnConfig,
    new_config,
    validate_config,
)
from client_config.durations import format_duration, parse_duration
from client_config.loader import (
    get_config,
    load_config,
    reset_config,
    set_config,
)

__all__ = [
    # Core config functions
    "new_config",
    "validate_config",
    # Loading functions
    "load_config",
    "get_config",
    "set_config",
    "reset_config",
    # Durations
    "parse_duration",
    "format_duration",
    # Config classes
    "DEFAULT_CLIENT_ID",
    "ClientConfig",
    "NetConfig",
    "MetadataConfig",
    "MetadataRetryConfig",
    "ProducerConfig",
    "ProducerReturnConfig",
    "FlushConfig",
    "ProducerRetryConfig",
    "ConsumerConfig",
    "ConsumerRetryConfig",
    "FetchConfig",
    "ConsumerReturnConfig",
]
