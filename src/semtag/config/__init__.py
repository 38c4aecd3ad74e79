"""Configuration management for semtag."""

from __future__ import annotations

from semtag.config.loader import apply_overrides, load_config
from semtag.config.models import (
    ChangelogConfig,
    PushConfig,
    SemtagConfig,
    UserConfig,
)

__all__ = [
    "ChangelogConfig",
    "PushConfig",
    "SemtagConfig",
    "UserConfig",
    "apply_overrides",
    "load_config",
]
