"""Client configuration from YAML file.

Loads from client_config/client.yaml by default. Everything lives under a
top-level ``client:`` section that mirrors ClientConfig:

    client:
      client_id: orders-service
      net: {...}
      metadata: {...}
      producer: {...}
      consumer: {...}

Environment variables ARE supported using ${VAR_NAME} syntax in YAML files.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from client_config.config import ClientConfig, new_config
from client_core.errors import ConfigurationError

# Configure module logger
logger = logging.getLogger(__name__)

# Default config file: client.yaml next to this module
DEFAULT_CONFIG_FILE = Path(__file__).parent / "client.yaml"

# Environment variable that takes precedence over client.client_id in the file
CLIENT_ID_ENV_VAR = "MSGCLIENT_CLIENT_ID"


def load_yaml(path: Path) -> Dict[str, Any]:
    """Load YAML file and return dict."""
    if not path.exists():
        return {}
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def _expand_env_vars(data: Any) -> Any:
    """Recursively expand ${VAR_NAME} and ${VAR_NAME:-default} environment variables in config data."""
    if isinstance(data, dict):
        return {key: _expand_env_vars(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        # Support both ${VAR} and ${VAR:-default} syntax
        pattern = r"\$\{([^}:]+)(?::-(([^}]*))?)?\}"

        def replacer(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else match.group(0)
            return os.getenv(var_name, default_value)

        return re.sub(pattern, replacer, data)
    else:
        return data


def _deep_merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge overlay into base dict."""
    result = base.copy()
    for key, value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
    validate: bool = True,
) -> ClientConfig:
    """Load and validate client configuration from a YAML file.

    Priority (highest to lowest): ``overrides``, the MSGCLIENT_CLIENT_ID
    environment variable, the YAML file, ClientConfig defaults.

    Pass validate=False to get the unvalidated config, e.g. to call
    ClientConfig.validate() yourself and collect the advisories.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ConfigurationError: If the file is malformed or a setting is invalid
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_FILE

    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n" f"Expected file: client.yaml"
        )

    logger.info(f"Loading configuration from file: {config_path}")
    yaml_data = load_yaml(config_path)
    yaml_data = _expand_env_vars(yaml_data)

    if not isinstance(yaml_data, dict) or "client" not in yaml_data:
        raise ConfigurationError(
            "Invalid config file: missing 'client:' section\n"
            "See client.yaml for correct structure"
        )

    client_config = yaml_data["client"] or {}

    env_client_id = os.getenv(CLIENT_ID_ENV_VAR)
    if env_client_id:
        client_config = _deep_merge(client_config, {"client_id": env_client_id})

    if overrides:
        logger.debug(f"Applying overrides: {list(overrides.keys())}")
        client_config = _deep_merge(client_config, overrides)

    config = new_config().with_overrides(client_config)

    logger.debug("Configuration loaded successfully:")
    logger.debug(f"  - Client ID: {config.client_id}")
    logger.debug(f"  - Required acks: {int(config.producer.required_acks)}")

    if validate:
        logger.debug("Validating configuration...")
        config.validate()
        logger.debug("Configuration validation passed")

    return config


_client_config: Optional[ClientConfig] = None


def get_config() -> ClientConfig:
    """Get or load the singleton client config instance."""
    global _client_config
    if _client_config is None:
        _client_config = load_config()
    return _client_config


def set_config(config: ClientConfig) -> None:
    """Set the singleton client config instance (useful for testing)."""
    global _client_config
    _client_config = config


def reset_config() -> None:
    """Reset the singleton config instance (forces reload on next get_config() call)."""
    global _client_config
    _client_config = None
