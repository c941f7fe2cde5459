"""
Configuration for the tuning client.
"""

from .settings import ClientConfig, load_config, ENV_PREFIX, CONFIG_PATH_ENV

__all__ = [
    "ClientConfig",
    "load_config",
    "ENV_PREFIX",
    "CONFIG_PATH_ENV",
]
