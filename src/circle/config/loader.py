"""Configuration loading from TOML files and environment variables."""

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from circle.config.models import CircleConfig, ConfigError
from circle.config.paths import STORE_ENV_VAR, get_config_path

LOG_LEVEL_ENV_VAR = "CIRCLE_LOG_LEVEL"


def _get_default_config_paths() -> list[Path]:
    """Get ordered list of default config file locations."""
    return [
        Path("config.toml"),  # Current directory
        get_config_path(),  # ~/.circle/config.toml (or CIRCLE_HOME)
        Path("/etc/circle/config.toml"),  # System-wide
    ]


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply environment overrides on top of file values."""
    if store_path := os.environ.get(STORE_ENV_VAR):
        config.setdefault("store", {})["path"] = store_path

    if level := os.environ.get(LOG_LEVEL_ENV_VAR):
        config.setdefault("logging", {})["level"] = level.upper()

    return config


def _validate(raw_config: dict[str, Any]) -> CircleConfig:
    try:
        return CircleConfig.model_validate(_apply_env_overrides(raw_config))
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def load_config(path: Path | None = None) -> CircleConfig:
    """Load configuration from TOML file.

    Args:
        path: Explicit path to config file. If None, searches default locations
            and falls back to defaults when none exists.

    Returns:
        Validated CircleConfig instance.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        ConfigError: If the config file is invalid.
    """
    config_path: Path | None = None

    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        for default_path in _get_default_config_paths():
            expanded = default_path.expanduser()
            if expanded.exists():
                config_path = expanded
                break

    if config_path is None:
        return get_default_config()

    try:
        with config_path.open("rb") as f:
            raw_config = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    return _validate(raw_config)


def get_default_config() -> CircleConfig:
    """Get a default configuration, honoring environment overrides."""
    return _validate({})
