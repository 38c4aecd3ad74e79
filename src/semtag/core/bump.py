"""Version bumping: tag the next release and push it.

The latest release tag is bumped by one major, minor or patch step. The new
annotated tag is created on HEAD with a ``chore(release)`` message carrying
the version and a generated codename, then pushed to the remote.

Two bumps running at the same time on one repository are not coordinated;
serialising them is up to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from semtag.core.codename import generate_codename
from semtag.core.commits import CommitType, format_message
from semtag.core.history import latest_tag
from semtag.core.version import BumpType, Version, is_valid, next_version
from semtag.exceptions import CodenameError, InvalidVersionError

if TYPE_CHECKING:
    from semtag.vcs.credentials import PushCredentials, Signature
    from semtag.vcs.git import GitRepository, Tag

logger = logging.getLogger(__name__)

RELEASE_SCOPE = "release"


@dataclass(frozen=True, slots=True)
class BumpResult:
    """Outcome of a version bump."""

    previous_tag: Tag
    version: Version
    tag_name: str
    codename: str
    message: str
    pushed: bool


def release_message(version: Version, codename: str) -> str:
    """Build the annotation message of a release tag."""
    return format_message(CommitType.CHORE, RELEASE_SCOPE, f"v{version} codename({codename})")


def bump(
    repo: GitRepository,
    bump_type: BumpType,
    *,
    signature: Signature,
    push_credentials: PushCredentials | None = None,
    remote: str = "origin",
    tag_prefix: str = "",
    codename_generator: Callable[[], str] = generate_codename,
    dry_run: bool = False,
) -> BumpResult:
    """Tag HEAD with the next version and push the tag.

    Args:
        repo: Git repository
        bump_type: Component to increment
        signature: Tagger identity
        push_credentials: How to authenticate the push
        remote: Remote receiving the tag
        tag_prefix: Prepended to the version to form the tag name, "" or "v"
        codename_generator: Returns the release codename
        dry_run: Compute the release without creating or pushing the tag

    Raises:
        NoTagFoundError: If there is no release tag to bump
        InvalidVersionError: If the latest tag cannot be bumped, or the prefixed
            tag name is not a valid version
        CodenameError: If no codename could be generated
        GitError: If creating or pushing the tag fails
    """
    current = latest_tag(repo)
    logger.debug("Current tag is: %s", current.name)

    version = next_version(current.name, bump_type)
    tag_name = f"{tag_prefix}{version}"
    if not is_valid(tag_name):
        # release tags must be readable as versions
        raise InvalidVersionError(tag_name)
    logger.debug("Next tag is: %s", tag_name)

    try:
        codename = codename_generator()
    except Exception as e:
        raise CodenameError(f"Cannot generate a release codename: {e}") from e
    if not codename:
        raise CodenameError("The codename generator returned an empty codename")
    logger.debug("The generated codename is: %s", codename)

    message = release_message(version, codename)

    if not dry_run:
        repo.create_annotated_tag(tag_name, repo.head_commit(), signature, message)
        repo.push_ref(remote, f"refs/tags/{tag_name}", push_credentials)
        logger.info("The tag %s has been successfully pushed", tag_name)

    return BumpResult(
        previous_tag=current,
        version=version,
        tag_name=tag_name,
        codename=codename,
        message=message,
        pushed=not dry_run,
    )
