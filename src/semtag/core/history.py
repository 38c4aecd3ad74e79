"""Tag history: release tags in chronological order and the commits between them.

Only tags whose names are semantic versions count as releases. They are
ordered by date (tagger date for annotated tags, commit date for lightweight
ones); tags sharing a date keep git's enumeration order.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from semtag.core.version import is_valid
from semtag.exceptions import NoTagFoundError

if TYPE_CHECKING:
    from semtag.vcs.git import Commit, GitRepository, Tag

logger = logging.getLogger(__name__)


def list_valid_tags(repo: GitRepository) -> list[Tag]:
    """List release tags, oldest first.

    Raises:
        NoTagFoundError: If the repository has no semantic version tag
    """
    tags = sorted(
        (tag for tag in repo.list_tags() if is_valid(tag.name)),
        key=lambda tag: tag.date,
    )
    if not tags:
        raise NoTagFoundError("No semver tag has been found")
    return tags


def latest_tag(repo: GitRepository) -> Tag:
    """Return the most recent release tag.

    Raises:
        NoTagFoundError: If the repository has no semantic version tag
    """
    return list_valid_tags(repo)[-1]


def find_tag(repo: GitRepository, name: str) -> Tag:
    """Look up any tag by its exact name, semantic version or not.

    Raises:
        NoTagFoundError: If no tag has this name
    """
    for tag in repo.list_tags():
        if tag.name == name:
            return tag
    raise NoTagFoundError(f"Tag {name!r} not found")


def previous_tag(repo: GitRepository, tag: Tag) -> Tag:
    """Return the release tag preceding ``tag``.

    Raises:
        NoTagFoundError: If ``tag`` is the first release tag or not a
            release tag at all
    """
    tags = list_valid_tags(repo)
    for index, candidate in enumerate(tags):
        if candidate.name == tag.name:
            if index == 0:
                raise NoTagFoundError(
                    f"Tag {tag.name!r} is the first release, it has no predecessor"
                )
            return tags[index - 1]
    raise NoTagFoundError(f"Tag {tag.name!r} is not a release tag")


def commits_between(repo: GitRepository, tag: Tag) -> list[Commit]:
    """Return the commits released by ``tag``, most recent first.

    These are the commits reachable from ``tag`` but not from the previous
    release tag: the previous tag's commit is excluded, the tag's own commit
    is included.

    Raises:
        NoTagFoundError: If ``tag`` has no previous release tag
    """
    previous = previous_tag(repo, tag)
    logger.debug("Collecting commits from %s (excluded) to %s", previous.name, tag.name)

    commits = repo.walk_commits(tag.target, exclude=previous.target)
    logger.debug("Found %d commit(s) for %s", len(commits), tag.name)
    return commits
