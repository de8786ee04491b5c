"""Configuration for nmclean.

Settings come from an optional JSON file. Lookup order: an explicit
path, then $NMCLEAN_CONFIG, then ~/.nmclean/config.json.
"""

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from nmclean.exclusions import TARGET_NAME, ExcludedPaths, default_excluded_paths

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "NMCLEAN_CONFIG"
DEFAULT_CONFIG_FILE = Path("~/.nmclean/config.json")


class ConfigError(Exception):
    """Raised when an explicitly requested config file is unusable."""


class Settings(BaseModel):
    """User-tunable settings."""

    max_depth: int = Field(3, ge=0, description="Maximum scan depth below the root")
    target_name: str = Field(TARGET_NAME, min_length=1, description="Directory name to find")
    extra_excluded_paths: list[str] = Field(
        default_factory=list,
        description="Additional protected paths (supports ~ expansion)",
    )
    workers: int = Field(4, ge=1, le=32, description="Threads used to size findings")

    def excluded_paths(self) -> ExcludedPaths:
        """Build the exclusion set: defaults first, then configured extras."""
        return default_excluded_paths().with_extra(self.extra_excluded_paths)


def _read_settings(path: Path) -> Settings:
    with open(path) as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("top-level value must be an object")
    return Settings.model_validate(data)


def load_settings(path: str | os.PathLike | None = None) -> Settings:
    """
    Load settings from disk.

    An explicit path (argument or environment variable) must exist and be
    valid. The default location is optional, and a broken default file
    is ignored with a warning.

    Args:
        path: Explicit config file path

    Returns:
        Settings instance

    Raises:
        ConfigError: If an explicit config file is missing or invalid
    """
    explicit = path if path is not None else os.environ.get(CONFIG_ENV_VAR) or None

    if explicit is not None:
        config_path = Path(os.path.expanduser(os.fspath(explicit)))
        try:
            return _read_settings(config_path)
        except (OSError, ValueError, ValidationError) as e:
            raise ConfigError(f"Invalid config file {config_path}: {e}") from e

    config_path = Path(os.path.expanduser(DEFAULT_CONFIG_FILE))
    if not config_path.exists():
        return Settings()

    try:
        return _read_settings(config_path)
    except (OSError, ValueError, ValidationError) as e:
        logger.warning("Ignoring config file %s: %s", config_path, e)
        return Settings()
