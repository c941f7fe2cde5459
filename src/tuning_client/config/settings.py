"""
Client configuration.

Settings are merged from three sources in priority order: built-in defaults,
an optional YAML or JSON file, and ``TUNING_CLIENT_*`` environment variables.
"""

import os
import json
from dataclasses import dataclass, fields, asdict
from pathlib import Path
from typing import Dict, Any, Optional, Mapping, Union
import logging

import yaml

from ..core.exceptions import ConfigurationError, wrap_exception

logger = logging.getLogger(__name__)

ENV_PREFIX = "TUNING_CLIENT_"
CONFIG_PATH_ENV = "TUNING_CLIENT_CONFIG"


@dataclass
class ClientConfig:
    """Settings for the REST transport and the services built on it."""
    base_url: str = "https://generativelanguage.googleapis.com"
    api_key: Optional[str] = None
    api_version: str = "v1beta"
    timeout: int = 30
    project: Optional[str] = None
    page_size: int = 50
    poll_interval: float = 0.0
    log_level: str = "INFO"

    def __post_init__(self):
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        if self.page_size <= 0:
            raise ConfigurationError(f"page_size must be positive, got {self.page_size}")
        if self.poll_interval < 0:
            raise ConfigurationError(f"poll_interval must not be negative, got {self.poll_interval}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ClientConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self, redact: bool = True) -> Dict[str, Any]:
        data = asdict(self)
        if redact and data.get("api_key"):
            data["api_key"] = "***"
        return data


def _load_config_file(config_path: Path) -> Dict[str, Any]:
    """Load configuration from a single file."""
    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        if config_path.suffix.lower() in ['.yaml', '.yml']:
            data = yaml.safe_load(f) or {}
        elif config_path.suffix.lower() == '.json':
            data = json.load(f) or {}
        else:
            raise ConfigurationError(f"Unsupported config file format: {config_path.suffix}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")
    return data


def _string_fields() -> set:
    return {f.name for f in fields(ClientConfig) if f.type in (str, Optional[str])}


def _load_environment_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    """Load configuration overrides from environment variables."""
    string_fields = _string_fields()
    overrides = {}
    for key, value in environ.items():
        if not key.startswith(ENV_PREFIX) or key == CONFIG_PATH_ENV:
            continue
        config_key = key[len(ENV_PREFIX):].lower()

        # JSON for numbers and booleans; string fields keep the raw value
        parsed_value = value
        if config_key not in string_fields:
            try:
                parsed_value = json.loads(value)
            except (json.JSONDecodeError, ValueError):
                pass

        overrides[config_key] = parsed_value
        logger.debug(f"Environment override: {config_key}")
    return overrides


def load_config(path: Optional[Union[str, Path]] = None,
                environ: Optional[Mapping[str, str]] = None,
                **overrides: Any) -> ClientConfig:
    """
    Build a ``ClientConfig``.

    Args:
        path: YAML/JSON config file; defaults to ``$TUNING_CLIENT_CONFIG``
        environ: Environment mapping, ``os.environ`` by default
        **overrides: Explicit values, applied last

    Returns:
        Merged configuration

    Raises:
        ConfigurationError: On unreadable files, unknown keys or bad values
    """
    environ = os.environ if environ is None else environ
    merged: Dict[str, Any] = {}

    path = path or environ.get(CONFIG_PATH_ENV)
    if path:
        merged.update(_load_config_file(Path(path)))
        logger.info(f"Loaded config file: {path}")

    merged.update(_load_environment_overrides(environ))
    merged.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return ClientConfig.from_dict(merged)
    except TypeError as e:
        raise wrap_exception(e, ConfigurationError, f"Invalid configuration: {e}")
