"""
Configuration settings for execx.

This module contains the constants used throughout execx and the loader
for the optional user settings file.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..exceptions import ConfigError

# Version information
VERSION = "0.3.0"
AUTHOR = "execx Contributors"

# Format protocol: format(err, "v") is the basic rendering, "+v" the extended one
DISPLAY_SPEC = "v"
EXTENDED_FLAG = "+"

# Settings file location
CONFIG_ENV_VAR = "EXECX_CONFIG"
VERBOSE_ENV_VAR = "EXECX_VERBOSE"
CONFIG_DIR = ".execx"
CONFIG_FILE = "config.yml"

TRUTHY_VALUES = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """User settings for diagnostics output."""

    verbose: bool = False
    extended: bool = False


def get_config_path() -> Path:
    """Return the settings file path, honoring EXECX_CONFIG."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / CONFIG_DIR / CONFIG_FILE


def _read_config(config_path: Path) -> Dict[str, Any]:
    """Read the YAML settings file, or return {} if it doesn't exist."""
    if not config_path.exists():
        return {}
    try:
        with open(config_path, encoding="utf-8") as f:
            cfg = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML in {config_path}: {e}",
            error_code="invalid_yaml",
            details={"path": str(config_path)},
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Failed to read {config_path}: {e}",
            error_code="unreadable",
            details={"path": str(config_path)},
        ) from e
    if cfg is None:
        return {}
    if not isinstance(cfg, dict):
        raise ConfigError(
            f"Settings file {config_path} must contain a mapping",
            error_code="not_a_mapping",
            details={"path": str(config_path)},
        )
    return cfg


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Load settings from the YAML file and environment.

    Args:
        config_path: Settings file. If None, uses get_config_path().

    Returns:
        Settings with file values applied, then EXECX_VERBOSE on top.

    Raises:
        ConfigError: If the file exists but is not a YAML mapping.
    """
    cfg = _read_config(config_path or get_config_path())
    settings = Settings(
        verbose=bool(cfg.get("verbose", False)),
        extended=bool(cfg.get("extended", False)),
    )
    env_verbose = os.environ.get(VERBOSE_ENV_VAR)
    if env_verbose is not None:
        settings.verbose = env_verbose.strip().lower() in TRUTHY_VALUES
    return settings
