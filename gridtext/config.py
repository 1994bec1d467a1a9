"""Server configuration.

Settings come from a JSON file in the user's config directory (or a path
given on the command line), and command line flags override them.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import platformdirs

from .constants import EngineConstants

logger = logging.getLogger(__name__)

LOG_LEVELS = ("debug", "info", "warning", "error")


@dataclass
class Config:
    """Server configuration."""

    host: str = EngineConstants.DEFAULT_HOST
    port: int = EngineConstants.DEFAULT_PORT
    log_level: str = EngineConstants.DEFAULT_LOG_LEVEL
    seed: list[str] = field(default_factory=lambda: list(EngineConstants.SEED_LINES))


def default_config_path() -> Path:
    """Location of config.json in the platform's config directory."""
    return Path(platformdirs.user_config_dir("gridtext")) / "config.json"


def _valid_setting(key: str, value: Any) -> bool:
    if key == "host":
        return isinstance(value, str) and bool(value)
    if key == "port":
        return isinstance(value, int) and not isinstance(value, bool) and 0 < value < 65536
    if key == "log_level":
        return value in LOG_LEVELS
    if key == "seed":
        return isinstance(value, list) and all(isinstance(s, str) for s in value)
    return False


def load_config(path: Optional[Path] = None) -> Config:
    """Load configuration, falling back to defaults on any problem.

    Args:
        path: Config file to read. Defaults to ``default_config_path()``.

    Returns:
        Config with every valid setting from the file applied.
    """
    config = Config()
    config_path = Path(path) if path is not None else default_config_path()

    if not config_path.exists():
        if path is not None:
            logger.warning(f"Config file {config_path} does not exist, using defaults")
        return config

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load config from {config_path}: {e}")
        return config

    if not isinstance(data, dict):
        logger.warning("Config file has invalid format (not a dict), ignoring")
        return config

    for key, value in data.items():
        if _valid_setting(key, value):
            setattr(config, key, value)
        else:
            logger.warning(f"Ignoring invalid config setting {key}={value!r}")
    return config
