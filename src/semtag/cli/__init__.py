"""Command line interface for semtag."""

from __future__ import annotations

from semtag.cli.app import app, main

__all__ = ["app", "main"]
