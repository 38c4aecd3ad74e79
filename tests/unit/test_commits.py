"""Tests for conventional commit parsing."""

from __future__ import annotations

import pytest

from semtag.core.commits import (
    KNOWN_TYPES,
    CommitType,
    ConventionalMessage,
    classify,
    format_message,
)
from semtag.exceptions import ClassificationError, NoMatchError, UnrecognizedTypeError

FULL_DESCRIPTION = """\
feat($compile): simplify isolate scope bindings

Changed the isolate scope binding options to:
  - @attr - attribute binding (including interpolation)
  - =model - by-directional model binding
  - &expr - expression execution binding

This change simplifies the terminology as well as
number of choices available to the developer. It
also supports local name aliasing from the parent.

BREAKING CHANGE: isolate scope bindings definition has changed and
the inject option for the directive controller injection was removed."""


class TestClassify:
    """Tests for classify()."""

    def test_classify_with_scope(self):
        """Parse a commit with a scope."""
        message = classify("feat(main): simplify isolate scope bindings")

        assert message.type is CommitType.FEAT
        assert message.scope == "main"
        assert message.subject == "simplify isolate scope bindings"
        assert message.body == ""

    def test_classify_without_scope(self):
        """A missing scope is an empty string."""
        message = classify("chore: update the readme...")

        assert message.type is CommitType.CHORE
        assert message.scope == ""
        assert message.subject == "update the readme..."
        assert message.body == ""

    def test_classify_full_message(self):
        """The body holds everything after the subject line."""
        message = classify(FULL_DESCRIPTION)

        assert message.type is CommitType.FEAT
        assert message.scope == "$compile"
        assert message.subject == "simplify isolate scope bindings"
        assert message.body.startswith("Changed the isolate scope binding options to:")
        assert "BREAKING CHANGE: isolate scope bindings definition has changed" in message.body
        assert message.is_breaking

    def test_subject_and_body_are_trimmed(self):
        """Surrounding whitespace is removed."""
        message = classify("fix(api):   handle null response   \n\n  details here  \n")

        assert message.subject == "handle null response"
        assert message.body == "details here"

    def test_scope_with_hyphen_and_underscore(self):
        """Scopes may contain hyphens and underscores."""
        assert classify("refactor(http-client_v2): split module").scope == "http-client_v2"

    def test_not_breaking_without_footer(self):
        """Messages without the footer are not breaking."""
        assert not classify("fix: typo").is_breaking

    @pytest.mark.parametrize(
        "description",
        [
            "Updated the readme file",
            "Merge branch 'main' into feature",
            "fix typo",
            "ci: run tests",
            "feat(): empty scope",
            "feat(bad scope): spaces in scope",
            "",
        ],
    )
    def test_no_match(self, description: str):
        """Non-conventional messages raise NoMatchError."""
        with pytest.raises(NoMatchError):
            classify(description)

    @pytest.mark.parametrize("description", ["perf: faster startup", "build(deps): bump mako"])
    def test_unrecognized_type(self, description: str):
        """Types outside the fixed set raise UnrecognizedTypeError."""
        with pytest.raises(UnrecognizedTypeError) as exc_info:
            classify(description)

        assert exc_info.value.commit_type in {"perf", "build"}

    def test_type_lookup_is_exact(self):
        """Upper-case types match the grammar but are not recognised."""
        with pytest.raises(UnrecognizedTypeError):
            classify("FEAT: shout")

    def test_errors_share_a_base_class(self):
        """Both failures can be handled as ClassificationError."""
        for description in ("nothing to see", "wip: later"):
            with pytest.raises(ClassificationError):
                classify(description)


class TestFormatMessage:
    """Tests for format_message()."""

    @pytest.mark.parametrize(
        ("commit_type", "scope", "subject", "expected"),
        [
            (CommitType.FEAT, "main", "simplify isolate scope bindings",
             "feat(main): simplify isolate scope bindings"),
            (CommitType.FIX, "semver", "fix the alpha/beta/... matching",
             "fix(semver): fix the alpha/beta/... matching"),
            (CommitType.TEST, "foo", "add mock for the HTTP library",
             "test(foo): add mock for the HTTP library"),
            (CommitType.REFACTOR, "main", "export the business logic from the main package",
             "refactor(main): export the business logic from the main package"),
            (CommitType.DOCS, "foo", "add readme for documenting the use cases",
             "docs(foo): add readme for documenting the use cases"),
            (CommitType.STYLE, "main", "format the code",
             "style(main): format the code"),
            (CommitType.CHORE, "", "simplify isolate scope bindings",
             "chore: simplify isolate scope bindings"),
        ],
    )  # fmt: skip
    def test_format(self, commit_type: CommitType, scope: str, subject: str, expected: str):
        """Render type, scope and subject."""
        assert format_message(commit_type, scope, subject) == expected

    def test_format_accepts_type_name(self):
        """The type may be given as a string."""
        assert format_message("chore", "release", "v1.2.3") == "chore(release): v1.2.3"

    def test_format_rejects_unknown_type(self):
        """Unknown type names raise UnrecognizedTypeError."""
        with pytest.raises(UnrecognizedTypeError):
            format_message("perf", "", "faster")

    def test_format_rejects_unrecognized_variant(self):
        """The fallthrough variant cannot be rendered."""
        with pytest.raises(UnrecognizedTypeError):
            format_message(CommitType.UNRECOGNIZED, "", "nothing")

    @pytest.mark.parametrize("commit_type", sorted(KNOWN_TYPES))
    @pytest.mark.parametrize("scope", ["", "core"])
    def test_classify_reverses_format(self, commit_type: CommitType, scope: str):
        """Classifying a formatted header gives back its parts."""
        header = format_message(commit_type, scope, "release notes for v1.2.3")
        message = classify(header)

        assert format_message(message.type, message.scope, message.subject) == header


class TestCommitType:
    """Tests for CommitType."""

    def test_from_string_known(self):
        """Known names resolve to their member."""
        assert CommitType.from_string("docs") is CommitType.DOCS

    def test_from_string_unknown(self):
        """Unknown names resolve to UNRECOGNIZED."""
        assert CommitType.from_string("deps") is CommitType.UNRECOGNIZED

    def test_known_types(self):
        """The fixed set has seven types."""
        assert {str(t) for t in KNOWN_TYPES} == {
            "chore", "test", "docs", "feat", "fix", "refactor", "style",
        }  # fmt: skip


class TestConventionalMessage:
    """Tests for ConventionalMessage."""

    def test_str_renders_header(self):
        """str() gives the conventional header."""
        message = ConventionalMessage(type=CommitType.FIX, scope="api", subject="handle 404")
        assert str(message) == "fix(api): handle 404"

    def test_short_sha(self):
        """short_sha keeps the first seven characters."""
        message = ConventionalMessage(
            type=CommitType.FIX, scope="", subject="x", sha="0123456789abcdef"
        )
        assert message.short_sha == "0123456"
