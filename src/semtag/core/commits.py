"""Conventional commit parsing.

Commit messages are expected to look like::

    type(scope): subject

    optional body spanning
    several lines

    BREAKING CHANGE: optional footer

The type must be one of :class:`CommitType`; the scope is optional.
See https://www.conventionalcommits.org/ for the convention.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from semtag.exceptions import NoMatchError, UnrecognizedTypeError

# Subject stops at the first character outside this class (a newline
# included); everything after it is the body.
COMMIT_PATTERN = re.compile(
    r"^(?P<type>[a-z]{3,})"
    r"(?:\((?P<scope>[\w\-$]+)\))?"
    r":(?P<subject>[\w$@:()\-.,'\"=&/\\ ]+)"
    r"(?P<body>.+)?",
    re.IGNORECASE | re.DOTALL,
)

BREAKING_PATTERN = re.compile(r"BREAKING[ -]CHANGE:")


class CommitType(StrEnum):
    """Commit types recognised in changelogs."""

    CHORE = "chore"
    TEST = "test"
    DOCS = "docs"
    FEAT = "feat"
    FIX = "fix"
    REFACTOR = "refactor"
    STYLE = "style"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def from_string(cls, value: str) -> CommitType:
        """Look up a type by its exact name, ``UNRECOGNIZED`` if unknown."""
        try:
            commit_type = cls(value)
        except ValueError:
            return cls.UNRECOGNIZED
        return commit_type


KNOWN_TYPES = frozenset(t for t in CommitType if t is not CommitType.UNRECOGNIZED)


@dataclass(frozen=True, slots=True)
class ConventionalMessage:
    """A commit message split into its conventional parts."""

    type: CommitType
    scope: str
    subject: str
    body: str = ""
    sha: str = ""
    date: datetime | None = None

    @property
    def short_sha(self) -> str:
        return self.sha[:7]

    @property
    def is_breaking(self) -> bool:
        return bool(BREAKING_PATTERN.search(self.body))

    def __str__(self) -> str:
        return format_message(self.type, self.scope, self.subject)


def classify(description: str) -> ConventionalMessage:
    """Parse a raw commit description.

    Args:
        description: Full commit message

    Returns:
        The parsed message; ``scope`` is empty when the message has none

    Raises:
        NoMatchError: If the message does not follow the convention
        UnrecognizedTypeError: If the type is not a known commit type
    """
    match = COMMIT_PATTERN.match(description)
    if match is None:
        raise NoMatchError(f"Not a conventional commit message: {description[:72]!r}")

    commit_type = CommitType.from_string(match["type"])
    if commit_type is CommitType.UNRECOGNIZED:
        raise UnrecognizedTypeError(match["type"])

    return ConventionalMessage(
        type=commit_type,
        scope=match["scope"] or "",
        subject=match["subject"].strip(),
        body=(match["body"] or "").strip(),
    )


def format_message(commit_type: CommitType | str, scope: str, subject: str) -> str:
    """Render a conventional commit header.

    Returns ``type: subject`` without a scope, ``type(scope): subject``
    otherwise.

    Raises:
        UnrecognizedTypeError: If ``commit_type`` is not a known type
    """
    resolved = CommitType.from_string(str(commit_type))
    if resolved is CommitType.UNRECOGNIZED:
        raise UnrecognizedTypeError(str(commit_type))

    if not scope:
        return f"{resolved}: {subject}"
    return f"{resolved}({scope}): {subject}"
