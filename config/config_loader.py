"""
Loading of watson-speech configuration.

Settings come from two places:

* ``config/watson.yaml`` (or a file given by the caller), whose string
  values may reference the environment as ``${VAR}``, ``${VAR:-default}``
  or ``${VAR:+value}``;
* the process environment / ``.env`` file, read by ``EnvironmentSettings``.

``config_manager`` caches both for the example scripts.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from config.config import ENV_FILE, WatsonConfig, EnvironmentSettings
from watson_speech.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "watson.yaml"

_ENV_REFERENCE = re.compile(r"\$\{([^}]+)\}")


def _resolve_reference(expression: str) -> str:
    """Value of one ``${...}`` expression."""
    if ":+" in expression:
        name, when_set = expression.split(":+", 1)
        return when_set if os.getenv(name) else ""
    if ":-" in expression:
        name, default = expression.split(":-", 1)
        return os.getenv(name, default)
    return os.getenv(expression, "")


def _substitute_env_vars(value: Any) -> Any:
    """Replace environment references in every string of a YAML tree."""
    if isinstance(value, str):
        return _ENV_REFERENCE.sub(lambda m: _resolve_reference(m.group(1)), value)
    if isinstance(value, dict):
        return {key: _substitute_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_substitute_env_vars(item) for item in value]
    return value


def _load_env_file(env_file: Optional[Path]) -> Path:
    path = env_file or ENV_FILE
    if load_dotenv(path):
        logger.debug(f"Loaded environment from {path}")
    return path


def load_yaml_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Read a YAML config file and expand its environment references.

    Args:
        config_path: File to read, ``config/watson.yaml`` when omitted

    Returns:
        The parsed mapping; an empty file gives ``{}``

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the file is not valid YAML or not a mapping
    """
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    try:
        with open(path, "r") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Cannot parse {path}: {e}", cause=e) from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"{path} must contain a mapping at the top level")
    return _substitute_env_vars(raw)


def load_watson_config(
    config_path: Optional[Path] = None,
    env_file: Optional[Path] = None
) -> WatsonConfig:
    """
    Build a validated WatsonConfig.

    The ``.env`` file is loaded first so YAML references can see it.

    Raises:
        ConfigurationError: If the YAML does not match the config schema
    """
    _load_env_file(env_file)
    values = load_yaml_config(config_path)

    try:
        return WatsonConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}", cause=e) from e


def load_environment_settings(env_file: Optional[Path] = None) -> EnvironmentSettings:
    """Credentials and logging options from ``.env`` and the environment."""
    path = _load_env_file(env_file)
    return EnvironmentSettings(_env_file=path)


class ConfigurationManager:
    """
    Process-wide cache of WatsonConfig and EnvironmentSettings.

    Both are loaded on first access; ``reload()`` reads them again,
    optionally from other files.
    """

    _instance: Optional['ConfigurationManager'] = None
    _watson_config: Optional[WatsonConfig] = None
    _env_settings: Optional[EnvironmentSettings] = None

    def __new__(cls) -> 'ConfigurationManager':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def reload(
        self,
        config_path: Optional[Path] = None,
        env_file: Optional[Path] = None
    ) -> None:
        self._env_settings = load_environment_settings(env_file)
        self._watson_config = load_watson_config(config_path, env_file)
        logger.debug(f"Configuration loaded from {config_path or DEFAULT_CONFIG_PATH}")

    @property
    def watson_config(self) -> WatsonConfig:
        if self._watson_config is None:
            self.reload()
        return self._watson_config

    @property
    def env_settings(self) -> EnvironmentSettings:
        if self._env_settings is None:
            self.reload()
        return self._env_settings


config_manager = ConfigurationManager()
