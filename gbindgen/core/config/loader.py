"""
Configuration loader — reads gbindgen.toml into a BindingConfig.

The file lives directly inside the binding crate root. It is optional:
a missing file yields the default configuration. A present file must be
readable, valid TOML and match the schema exactly.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

from pydantic import ValidationError

from gbindgen.core.errors import ConfigError
from gbindgen.core.models.config import BindingConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "gbindgen.toml"


def config_path(root: Path) -> Path:
    """Where the config file for a crate root would live."""
    return root / CONFIG_FILE


def load_config(path: Path) -> BindingConfig:
    """Load and validate a configuration file.

    Args:
        path: Explicit path to gbindgen.toml.

    Returns:
        Validated BindingConfig.

    Raises:
        ConfigError: If the file cannot be read or is invalid.
    """
    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Couldn't open config file: {path}. ({e})") from e

    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Couldn't parse config file {path}: {e}.") from e

    try:
        config = BindingConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Couldn't parse config file {path}: {e}") from e

    logger.info(
        "Loaded config from %s (namespace=%s, %d sys includes)",
        path,
        config.namespace,
        len(config.sys_includes),
    )
    return config


def load_config_from_root(root: Path) -> BindingConfig:
    """Load gbindgen.toml from *root*, or return defaults when absent."""
    path = config_path(root)
    if path.exists():
        return load_config(path)

    logger.debug("No %s in %s, using defaults", CONFIG_FILE, root)
    return BindingConfig()
