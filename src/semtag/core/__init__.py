"""Core business logic for semtag.

This module contains the fundamental building blocks:
- Semantic version validation and bumping
- Conventional commit classification
- Release tag history and commit ranges
- Changelog assembly via Mako templates
- Version bump orchestration
"""

from __future__ import annotations

from semtag.core.bump import BumpResult, bump
from semtag.core.changelog import (
    MessageGroup,
    generate_changelog,
    group_messages,
    render_changelog,
    resolve_output_path,
    write_changelog,
)
from semtag.core.commits import CommitType, ConventionalMessage, classify, format_message
from semtag.core.history import (
    commits_between,
    find_tag,
    latest_tag,
    list_valid_tags,
    previous_tag,
)
from semtag.core.version import (
    BumpType,
    Version,
    is_valid,
    next_major,
    next_minor,
    next_patch,
    next_version,
)

__all__ = [
    # Bump
    "BumpResult",
    # Version
    "BumpType",
    # Commits
    "CommitType",
    "ConventionalMessage",
    # Changelog
    "MessageGroup",
    "Version",
    "bump",
    "classify",
    # History
    "commits_between",
    "find_tag",
    "format_message",
    "generate_changelog",
    "group_messages",
    "is_valid",
    "latest_tag",
    "list_valid_tags",
    "next_major",
    "next_minor",
    "next_patch",
    "next_version",
    "previous_tag",
    "render_changelog",
    "resolve_output_path",
    "write_changelog",
]
