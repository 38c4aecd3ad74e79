"""Tests for semantic version validation and bumping."""

from __future__ import annotations

import pytest

from semtag.core.version import (
    BumpType,
    Version,
    is_valid,
    next_major,
    next_minor,
    next_patch,
    next_version,
)
from semtag.exceptions import InvalidVersionError


class TestIsValid:
    """Tests for is_valid()."""

    @pytest.mark.parametrize(
        "version",
        [
            "1.0.0",
            "0.0.0",
            "v1.2.3",
            "V1.2.3",
            "1.0.0-foo",
            "11.12.0-rc.1",
            "1.0.0-alpha-1.x",
            "1.0.0+build.5",
            "1.0.0-beta.2+exp.sha.5114f85",
        ],
    )
    def test_valid_versions(self, version: str):
        """Valid semantic versions are accepted."""
        assert is_valid(version)

    @pytest.mark.parametrize(
        "version",
        [
            "1.0",
            "1",
            "foo",
            "",
            "01.0.0",
            "1.02.0",
            "1.0.00",
            "1.a.0",
            "1.0.0-",
            "1.0.0-rc..1",
            "1.0.0+",
            "release-1.0.0",
            "1.0.0\n",
        ],
    )
    def test_invalid_versions(self, version: str):
        """Strings violating the grammar are refused."""
        assert not is_valid(version)


class TestVersionParse:
    """Tests for Version.parse()."""

    def test_parse_simple(self):
        """Parse a bare version."""
        assert Version.parse("1.2.3") == Version(1, 2, 3)

    def test_parse_strips_v_prefix(self):
        """The leading v is not part of the version."""
        version = Version.parse("v4.5.6")

        assert version == Version(4, 5, 6)
        assert str(version) == "4.5.6"

    def test_parse_keeps_suffixes(self):
        """Pre-release and build suffixes are preserved verbatim."""
        version = Version.parse("1.0.0-RC.1+build.7")

        assert version.prerelease == "RC.1"
        assert version.build == "build.7"
        assert str(version) == "1.0.0-RC.1+build.7"

    def test_parse_invalid_raises(self):
        """Invalid versions raise InvalidVersionError."""
        with pytest.raises(InvalidVersionError, match="nope"):
            Version.parse("nope")


class TestBump:
    """Tests for version bumping."""

    def test_next_major(self):
        """The major digit is bumped, the others are untouched."""
        assert str(next_major("9.9.9")) == "10.9.9"

    def test_next_minor(self):
        """The minor digit is bumped, the others are untouched."""
        assert str(next_minor("9.9.9")) == "9.10.9"

    def test_next_patch(self):
        """The patch digit is bumped."""
        assert str(next_patch("9.9.9")) == "9.9.10"

    def test_lower_components_are_not_reset(self):
        """A major bump keeps minor and patch as they are."""
        assert next_major("1.2.3") == Version(2, 2, 3)

    def test_bump_drops_suffixes(self):
        """Bumped versions are rendered as MAJOR.MINOR.PATCH."""
        assert str(next_patch("v1.2.3-rc.1+build.5")) == "1.2.4"

    def test_next_version_accepts_string_kind(self):
        """The bump kind may be given by name."""
        assert str(next_version("0.1.0", "minor")) == "0.2.0"

    def test_bump_invalid_raises(self):
        """Bumping an invalid version raises InvalidVersionError."""
        with pytest.raises(InvalidVersionError):
            next_version("1.0", BumpType.PATCH)

    def test_version_is_immutable(self):
        """Bumping returns a new Version."""
        version = Version(1, 0, 0)
        bumped = version.bump(BumpType.MAJOR)

        assert version == Version(1, 0, 0)
        assert bumped == Version(2, 0, 0)
        with pytest.raises(AttributeError):
            version.major = 3  # type: ignore[misc]
