"""Configuration loading.

Settings are resolved with this precedence, highest first:

1. command line flags
2. ``SEMTAG_*`` environment variables
3. the configuration file
4. built-in defaults

Flags and environment variables are merged by the CLI through
:func:`apply_overrides`; this module handles the file and the defaults.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from semtag.config.models import SemtagConfig
from semtag.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".semtag.toml"


def find_config_file(start: Path | None = None) -> Path | None:
    """Find the configuration file.

    Searches ``start`` (the current directory by default) and its parents,
    then the home directory.

    Returns:
        Path to the configuration file, or ``None`` if there is none
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate

    home = Path.home() / CONFIG_FILENAME
    if home.is_file():
        return home
    return None


def load_config_file(path: Path) -> dict[str, Any]:
    """Load and parse a TOML configuration file.

    Raises:
        ConfigNotFoundError: If the file doesn't exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Configuration file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def _validate(data: dict[str, Any], source: str) -> SemtagConfig:
    try:
        return SemtagConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration in {source}:\n{e}") from e


def load_config(path: Path | None = None, search_from: Path | None = None) -> SemtagConfig:
    """Load the configuration.

    Args:
        path: Explicit configuration file; must exist
        search_from: Directory to start searching from when ``path`` is not given

    Returns:
        Validated configuration; defaults when no file is found

    Raises:
        ConfigNotFoundError: If ``path`` doesn't exist
        ConfigValidationError: If the configuration is invalid
    """
    config_path = path or find_config_file(search_from)
    if config_path is None:
        logger.debug("No configuration file found, using defaults")
        return SemtagConfig()

    logger.debug("Loading configuration from %s", config_path)
    return _validate(load_config_file(config_path), str(config_path))


def apply_overrides(config: SemtagConfig, overrides: dict[str, Any]) -> SemtagConfig:
    """Merge dotted-key overrides into a configuration.

    ``None`` values are ignored so unset flags keep the file's value.

    Example:
        >>> apply_overrides(config, {"push.strategy": "ssh-agent", "log_level": None})

    Raises:
        ConfigValidationError: If an override holds an invalid value
    """
    data = config.model_dump(exclude_unset=True)

    for key, value in overrides.items():
        if value is None:
            continue
        *sections, name = key.split(".")
        target = data
        for section in sections:
            target = target.setdefault(section, {})
        target[name] = value

    return _validate(data, "command line options")
