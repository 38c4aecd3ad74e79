"""Semantic version validation and bumping.

Versions follow https://semver.org with an optional, case-insensitive
leading ``v``. Bumping increments exactly one numeric component and leaves
the others untouched: ``1.2.3`` bumped to the next major gives ``2.2.3``.
Pre-release and build suffixes are kept on parsed versions but dropped from
bumped ones.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import StrEnum

from semtag.exceptions import InvalidVersionError

SEMVER_PATTERN = re.compile(
    r"^v?"
    r"(?P<major>0|[1-9][0-9]*)\."
    r"(?P<minor>0|[1-9][0-9]*)\."
    r"(?P<patch>0|[1-9][0-9]*)"
    r"(?:-(?P<prerelease>[0-9a-z-]+(?:\.[0-9a-z-]+)*))?"
    r"(?:\+(?P<build>[0-9a-z-]+(?:\.[0-9a-z-]+)*))?\Z",
    re.IGNORECASE,
)


class BumpType(StrEnum):
    """Version component to increment."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


@dataclass(frozen=True, slots=True)
class Version:
    """An immutable semantic version."""

    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = None

    @classmethod
    def parse(cls, version: str) -> Version:
        """Parse a version string such as ``v1.2.3-rc.1+build.5``.

        Raises:
            InvalidVersionError: If the string is not a semantic version
        """
        match = SEMVER_PATTERN.match(version)
        if match is None:
            raise InvalidVersionError(version)

        return cls(
            major=int(match["major"]),
            minor=int(match["minor"]),
            patch=int(match["patch"]),
            prerelease=match["prerelease"],
            build=match["build"],
        )

    def bump(self, bump_type: BumpType) -> Version:
        """Return a new version with the selected component incremented.

        Only the selected component changes; suffixes are dropped.
        """
        bare = replace(self, prerelease=None, build=None)
        match bump_type:
            case BumpType.MAJOR:
                return replace(bare, major=self.major + 1)
            case BumpType.MINOR:
                return replace(bare, minor=self.minor + 1)
            case BumpType.PATCH:
                return replace(bare, patch=self.patch + 1)
            case _:
                raise ValueError(f"Unknown bump type: {bump_type}")

    @property
    def core(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def __str__(self) -> str:
        rendered = self.core
        if self.prerelease:
            rendered += f"-{self.prerelease}"
        if self.build:
            rendered += f"+{self.build}"
        return rendered


def is_valid(version: str) -> bool:
    """Check whether a string is a valid semantic version."""
    return SEMVER_PATTERN.match(version) is not None


def next_version(version: str, bump_type: BumpType) -> Version:
    """Parse ``version`` and bump it.

    Raises:
        InvalidVersionError: If ``version`` is not a semantic version
    """
    return Version.parse(version).bump(BumpType(bump_type))


def next_major(version: str) -> Version:
    return next_version(version, BumpType.MAJOR)


def next_minor(version: str) -> Version:
    return next_version(version, BumpType.MINOR)


def next_patch(version: str) -> Version:
    return next_version(version, BumpType.PATCH)
