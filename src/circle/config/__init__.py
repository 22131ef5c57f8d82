"""Configuration module."""

from circle.config.loader import get_default_config, load_config
from circle.config.models import (
    CircleConfig,
    ConfigError,
    LoggingConfig,
    ServerConfig,
    StoreConfig,
)
from circle.config.paths import (
    get_circle_home,
    get_config_path,
    get_logs_path,
    get_store_path,
)

__all__ = [
    "CircleConfig",
    "ConfigError",
    "LoggingConfig",
    "ServerConfig",
    "StoreConfig",
    "get_circle_home",
    "get_config_path",
    "get_default_config",
    "get_logs_path",
    "get_store_path",
    "load_config",
]
