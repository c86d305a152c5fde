"""Configuration loading with fail-fast behavior.

A config file is optional. When no explicit path is given, the file named by
the RPCWIRE_CONFIG environment variable is used; with neither, defaults apply.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from rpcwire.config.schema import ClientConfig
from rpcwire.core.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "RPCWIRE_CONFIG"


def load_json_file(path: Path) -> dict[str, Any]:
    """Load and parse a JSON object from a file.

    Args:
        path: Path to the JSON file to load.

    Returns:
        Parsed JSON as a dict. Returns empty dict if file is empty.

    Raises:
        ConfigError: If the file doesn't exist, can't be read, contains invalid
            JSON, or contains non-object JSON.
    """
    resolved = path.resolve()

    if not resolved.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        content = resolved.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e

    content = content.strip()
    if not content:
        return {}

    try:
        result = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(result, dict):
        raise ConfigError(f"Expected object in {path}, got {type(result).__name__}")

    return result


def load_config(path: Path | str | None = None) -> ClientConfig:
    """Load a ClientConfig from a JSON file.

    Args:
        path: Explicit config file path. If None, RPCWIRE_CONFIG is consulted.

    Returns:
        Validated ClientConfig object.

    Raises:
        ConfigError: If the file is missing, invalid JSON, or fails validation.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            logger.debug("No config path given and %s unset, using defaults", CONFIG_ENV_VAR)
            return ClientConfig()
        path = env_path

    config_path = Path(path)
    data = load_json_file(config_path)
    logger.debug("Loading client config from %s", config_path)

    try:
        return ClientConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Config validation failed for {config_path}: {e}") from e
