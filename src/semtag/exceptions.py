"""Exception hierarchy for semtag.

Every error raised on purpose by semtag derives from :class:`SemtagError`,
so the CLI can report it with a single handler. Failures reported by git or
by the template engine are wrapped and chained, never reinterpreted.
"""

from __future__ import annotations


class SemtagError(Exception):
    """Base class for all semtag errors."""


# -----------------------------------------------------------------------------
# Versions
# -----------------------------------------------------------------------------


class InvalidVersionError(SemtagError):
    """A string does not follow the semantic version grammar."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"Invalid semantic version: {version!r}")


# -----------------------------------------------------------------------------
# Commit classification
# -----------------------------------------------------------------------------


class ClassificationError(SemtagError):
    """A commit message could not be classified as a conventional commit."""


class NoMatchError(ClassificationError):
    """The message does not follow the ``type(scope): subject`` grammar."""


class UnrecognizedTypeError(ClassificationError):
    """The message type is not one of the known commit types."""

    def __init__(self, commit_type: str) -> None:
        self.commit_type = commit_type
        super().__init__(f"Unrecognized commit type: {commit_type!r}")


# -----------------------------------------------------------------------------
# Tags & repository
# -----------------------------------------------------------------------------


class NoTagFoundError(SemtagError):
    """No (matching) semantic version tag exists."""


class GitError(SemtagError):
    """A git command failed."""

    def __init__(
        self,
        message: str,
        *,
        command: list[str] | None = None,
        stderr: str | None = None,
    ) -> None:
        self.command = command or []
        self.stderr = (stderr or "").strip()
        if self.stderr:
            message = f"{message}: {self.stderr}"
        super().__init__(message)


class CredentialsError(SemtagError):
    """Signature or push credentials are missing or unusable."""


# -----------------------------------------------------------------------------
# Changelog & release
# -----------------------------------------------------------------------------


class TemplateError(SemtagError):
    """The changelog template could not be loaded or rendered."""


class CodenameError(SemtagError):
    """The release codename could not be generated."""


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------


class ConfigError(SemtagError):
    """Base class for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """The configuration file does not exist."""


class ConfigValidationError(ConfigError):
    """The configuration file is malformed or holds invalid values."""
