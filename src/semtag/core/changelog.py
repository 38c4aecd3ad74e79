"""Changelog generation from conventional commits.

Commits released by a tag are classified, grouped by type then scope, and
rendered through a Mako template. The default template ships with the
package; any template receiving the same four values can replace it:

- ``app_name``: application name
- ``version``: name of the released tag
- ``message_group``: ``{type: {scope: [ConventionalMessage, ...]}}``
- ``url``: browsable URL of the origin repository
"""

from __future__ import annotations

import logging
from dataclasses import replace
from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING

from mako.template import Template

from semtag.core.commits import ConventionalMessage, classify
from semtag.core.history import commits_between, find_tag, latest_tag
from semtag.exceptions import ClassificationError, TemplateError
from semtag.vcs.credentials import web_url

if TYPE_CHECKING:
    from collections.abc import Iterable

    from semtag.vcs.git import Commit, GitRepository

logger = logging.getLogger(__name__)

CHANGELOG_FILENAME = "CHANGELOG.md"
DEFAULT_TEMPLATE = "changelog.md.mako"
NO_SCOPE = "none"

MessageGroup = dict[str, dict[str, list[ConventionalMessage]]]


def group_messages(commits: Iterable[Commit]) -> MessageGroup:
    """Classify commits and group them by type, then scope.

    Commits that do not follow the convention are skipped. Messages without
    a scope are filed under ``"none"``. Commit order is preserved.
    """
    group: MessageGroup = {}

    for commit in commits:
        try:
            message = classify(commit.message)
        except ClassificationError as e:
            logger.debug("Skipping commit %s: %s", commit.short_sha, e)
            continue

        message = replace(
            message, scope=message.scope or NO_SCOPE, sha=commit.sha, date=commit.date
        )
        group.setdefault(str(message.type), {}).setdefault(message.scope, []).append(message)

    return group


def load_template(template: Path | None = None) -> Template:
    """Load a changelog template, the bundled one by default.

    Raises:
        TemplateError: If the template is missing or does not compile
    """
    try:
        if template is None:
            source = resources.files("semtag") / "templates" / DEFAULT_TEMPLATE
            return Template(
                text=source.read_text(encoding="utf-8"),
                output_encoding="utf-8",
                strict_undefined=True,
            )

        if not template.is_file():
            raise TemplateError(f"Changelog template not found: {template}")
        return Template(
            filename=str(template),
            output_encoding="utf-8",
            strict_undefined=True,
        )
    except TemplateError:
        raise
    except Exception as e:
        raise TemplateError(f"Cannot load changelog template: {e}") from e


def render_changelog(
    group: MessageGroup,
    app_name: str,
    version: str,
    url: str,
    template: Path | None = None,
) -> bytes:
    """Render a message group into changelog bytes.

    Raises:
        TemplateError: If the template cannot be loaded or rendered
    """
    compiled = load_template(template)
    try:
        output = compiled.render(
            app_name=app_name,
            version=version,
            message_group=group,
            url=url,
        )
    except Exception as e:
        raise TemplateError(f"Cannot render changelog template: {e}") from e
    return output


def generate_changelog(
    repo: GitRepository,
    app_name: str,
    tag_name: str | None = None,
    template: Path | None = None,
) -> bytes:
    """Generate the changelog of a release.

    Args:
        repo: Git repository
        app_name: Application name shown in the changelog
        tag_name: Release tag to describe; the latest release tag by default
        template: Custom Mako template

    Returns:
        Rendered changelog

    Raises:
        NoTagFoundError: If the tag, or the release before it, does not exist
        GitError: If git fails
        TemplateError: If rendering fails
    """
    tag = find_tag(repo, tag_name) if tag_name else latest_tag(repo)
    logger.debug("Generating changelog for %s", tag.name)

    commits = commits_between(repo, tag)
    group = group_messages(commits)

    url = web_url(repo.origin_url())

    return render_changelog(group, app_name=app_name, version=tag.name, url=url, template=template)


def resolve_output_path(path: Path) -> Path:
    """Append ``CHANGELOG.md`` when ``path`` is an existing directory."""
    if path.is_dir():
        return path / CHANGELOG_FILENAME
    return path


def write_changelog(content: bytes, path: Path) -> Path:
    """Write a rendered changelog as-is and return the file written."""
    output = resolve_output_path(path)
    output.write_bytes(content)
    logger.info("%s has been successfully created", output)
    return output
