"""Centralized path management for Circle.

All state (config, store document, logs) lives under a single base directory.
The base directory can be overridden with the CIRCLE_HOME environment variable.

Default locations:
- Linux/macOS: ~/.circle
- Windows: %USERPROFILE%\\.circle
"""

import os
from functools import lru_cache
from pathlib import Path

ENV_VAR = "CIRCLE_HOME"
STORE_ENV_VAR = "CIRCLE_STORE_PATH"

STORE_FILENAME = "db.json"


@lru_cache(maxsize=1)
def get_circle_home() -> Path:
    """Get the base directory for all Circle data.

    Resolution order:
    1. CIRCLE_HOME environment variable (if set)
    2. Platform default (~/.circle)
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser().resolve()

    return Path.home() / ".circle"


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_circle_home() / "config.toml"


def get_store_path() -> Path:
    """Get the store document path.

    CIRCLE_STORE_PATH wins over the home directory default.
    """
    if env_path := os.environ.get(STORE_ENV_VAR):
        return Path(env_path).expanduser()
    return get_circle_home() / STORE_FILENAME


def get_logs_path() -> Path:
    """Get the default logs directory path."""
    return get_circle_home() / "logs"


def ensure_circle_home() -> Path:
    """Ensure the Circle home directory exists."""
    home = get_circle_home()
    home.mkdir(parents=True, exist_ok=True)
    return home

