"""
Configuration loader — reads globalsdk.yml into InstallerSettings.

The config file is optional: without one the installer runs on
defaults.  A file that exists but does not parse or validate is an
error, never silently ignored.

Accepted layouts::

    # flat
    install_timeout: 900

    # or wrapped
    installer:
      install_timeout: 900
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from globalsdk.core.models.settings import InstallerSettings

logger = logging.getLogger(__name__)

CONFIG_FILE = "globalsdk.yml"
_SECTION = "installer"


class ConfigError(Exception):
    """globalsdk.yml is missing (when named explicitly), unreadable or invalid."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Nearest globalsdk.yml in ``start_dir`` (default: cwd) or any parent."""
    here = (start_dir or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILE
        if candidate.is_file():
            return candidate
    return None


def _read_mapping(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")
    section = data.get(_SECTION, data)
    if not isinstance(section, dict):
        raise ConfigError(f"'{_SECTION}' in {path} must be a mapping")
    return section


def load_settings(path: Path | None = None) -> InstallerSettings:
    """Load and validate installer settings.

    Args:
        path: Explicit globalsdk.yml.  When omitted the file is searched
            for upward from the cwd, and defaults apply if none exists.

    Raises:
        ConfigError: An explicit path does not exist, or the file found
            is unreadable, malformed or fails validation.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return InstallerSettings()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading installer config from %s", path)
    try:
        settings = InstallerSettings.model_validate(_read_mapping(path))
    except ValidationError as e:
        raise ConfigError(f"Invalid installer configuration in {path}: {e}") from e

    logger.info("Loaded installer settings from %s", path)
    return settings
