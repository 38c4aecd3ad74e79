"""semtag - semantic version tags and conventional-commit changelogs for git."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
