"""
Configuration loader for gitcm.

Settings for the chat-completion service are read from an optional JSON
file named ``config.json`` in the ``~/.gitcm/`` directory. The
``GITCM_CONFIG`` environment variable points to a different file. A
missing file means the built-in defaults are used; a file that cannot
be parsed or that holds values of the wrong type raises
:class:`ConfigError`.

The API credential itself is never stored in the file. The file only
names the environment variable that carries it (``api_key_env``).
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional


logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "GITCM_CONFIG"
CONFIG_FILE_NAME = "config.json"

DEFAULT_CONFIG: Dict[str, Any] = {
    "base_url": "https://api.deepseek.com",
    "model": "deepseek-coder",
    # Token limit for the generated reply
    "max_tokens": 1000,
    "temperature": 0.5,
    # Longest diff (in characters) sent to the service
    "max_diff_length": 10000,
    "request_timeout": 60,
    "api_key_env": "DEEPSEEK_API_KEY",
}

_EXPECTED_TYPES = {
    "base_url": (str,),
    "model": (str,),
    "max_tokens": (int,),
    "temperature": (int, float),
    "max_diff_length": (int,),
    "request_timeout": (int, float),
    "api_key_env": (str,),
}


class ConfigError(Exception):
    """Raised when the gitcm configuration is missing or invalid."""

    pass


class MissingCredentialError(ConfigError):
    """Raised when the environment variable holding the API key is unset."""

    def __init__(self, variable: str) -> None:
        super().__init__(f"{variable} environment variable is not set")
        self.variable = variable


def _get_config_directory() -> Path:
    """Return the per-user configuration directory (``~/.gitcm``)."""
    return Path.home() / ".gitcm"


def get_config_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return the settings file location, honouring ``GITCM_CONFIG``."""
    env = os.environ if environ is None else environ
    override = env.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return _get_config_directory() / CONFIG_FILE_NAME


def _validate(data: Dict[str, Any]) -> None:
    for key, types in _EXPECTED_TYPES.items():
        if key not in data:
            continue
        value = data[key]
        # bool is an int subclass but never a sensible setting here
        if isinstance(value, bool) or not isinstance(value, types):
            kind = "a string" if types == (str,) else "an integer" if types == (int,) else "a number"
            raise ConfigError(f"'{key}' must be {kind}")
    for key in ("max_tokens", "max_diff_length", "request_timeout"):
        if key in data and data[key] <= 0:
            raise ConfigError(f"'{key}' must be positive")
    if "api_key_env" in data and not data["api_key_env"].strip():
        raise ConfigError("'api_key_env' must not be empty")


def load_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Load the gitcm settings merged over :data:`DEFAULT_CONFIG`.

    Args:
        environ: Environment mapping used to locate the settings file.
                 Defaults to ``os.environ``.

    Returns:
        A dictionary with the keys of :data:`DEFAULT_CONFIG`. Unknown keys
        found in the file are kept as-is.

    Raises:
        ConfigError: If the file exists but is unreadable, is not a JSON
                     object, or holds values of the wrong type.
    """
    config_path = get_config_path(environ)
    config = dict(DEFAULT_CONFIG)

    if not config_path.exists():
        logger.debug("No configuration file at %s; using defaults", config_path)
        return config

    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path.name} must contain a JSON object")

    _validate(data)
    config.update(data)

    logger.debug("Loaded configuration from: %s", config_path)
    return config
