"""Git repository access.

:class:`GitRepository` wraps a GitPython :class:`git.Repo` and exposes
exactly what the release engine needs: tags with their dates and targets,
history walks between two commits, annotated tag creation and pushing.

Object ids are handed out as opaque :data:`ObjectId` strings; callers only
compare them and pass them back.
"""

from __future__ import annotations

import logging
import secrets
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import NewType

import git
import git.objects.util
import git.remote

from semtag.exceptions import CredentialsError, GitError
from semtag.vcs.credentials import (
    PushCredentials,
    Signature,
    ssh_command,
    ssh_push_url,
)

logger = logging.getLogger(__name__)

ObjectId = NewType("ObjectId", str)

_PUSH_FAILED = (
    git.remote.PushInfo.ERROR
    | git.remote.PushInfo.REJECTED
    | git.remote.PushInfo.REMOTE_REJECTED
    | git.remote.PushInfo.REMOTE_FAILURE
)

_ASKPASS_SCRIPT = '#!/bin/sh\nprintf "%s\\n" "$SEMTAG_SSH_PASSPHRASE"\n'


@dataclass(frozen=True, slots=True)
class Tag:
    """A tag and the commit it points to."""

    name: str
    date: datetime
    target: ObjectId


@dataclass(frozen=True, slots=True)
class Commit:
    """A commit as read from the history."""

    sha: ObjectId
    message: str
    date: datetime

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


@contextmanager
def _git_errors(action: str) -> Iterator[None]:
    """Turn GitPython failures into :class:`GitError`."""
    try:
        yield
    except git.GitCommandNotFound as e:
        raise GitError("git executable not found", command=_command(e)) from e
    except git.GitCommandError as e:
        raise GitError(
            f"git {action} failed with exit code {e.status}",
            command=_command(e),
            stderr=_stderr(e),
        ) from e


def _command(error: git.CommandError) -> list[str]:
    return [str(part) for part in error.command] if isinstance(error.command, list) else []


def _stderr(error: git.CommandError) -> str:
    # GitPython renders stderr as "\n  stderr: '<text>'"
    return str(error.stderr).strip().removeprefix("stderr:").strip().strip("'")


class GitRepository:
    """A git working copy."""

    def __init__(self, path: Path | str | None = None) -> None:
        start = Path(path) if path else Path.cwd()
        try:
            self.repo = git.Repo(start, search_parent_directories=True)
        except (git.InvalidGitRepositoryError, git.NoSuchPathError) as e:
            raise GitError(f"Not a git repository: {start}") from e

        if self.repo.working_tree_dir is None:
            raise GitError(f"Bare repositories are not supported: {start}")
        self.path = Path(self.repo.working_tree_dir).resolve()

    def __repr__(self) -> str:
        return f"GitRepository({str(self.path)!r})"

    # -------------------------------------------------------------------------
    # Tags
    # -------------------------------------------------------------------------

    def list_tags(self) -> list[Tag]:
        """List every tag, in git's enumeration order (by ref name).

        Annotated tags carry their tagger date, lightweight tags the date of
        the commit they point to. Tags on non-commit objects are ignored.
        """
        tags = []
        with _git_errors("tag"):
            for ref in self.repo.tags:
                obj = ref.object
                if obj.type == "tag":
                    date = git.objects.util.from_timestamp(obj.tagged_date, obj.tagger_tz_offset)
                elif obj.type == "commit":
                    date = obj.committed_datetime
                else:
                    logger.debug("Ignoring tag %s pointing to a %s", ref.name, obj.type)
                    continue

                try:
                    target = ref.commit
                except ValueError:
                    logger.debug("Ignoring tag %s, it does not point to a commit", ref.name)
                    continue

                tags.append(Tag(name=ref.name, date=date, target=ObjectId(target.hexsha)))

        return tags

    def resolve_tag(self, name: str) -> ObjectId:
        """Return the id of the commit a tag points to."""
        with _git_errors("rev-parse"):
            try:
                return ObjectId(self.repo.tags[name].commit.hexsha)
            except (IndexError, ValueError) as e:
                raise GitError(f"Tag {name!r} does not point to a commit") from e

    def create_annotated_tag(
        self,
        name: str,
        target: ObjectId,
        signature: Signature,
        message: str,
    ) -> None:
        """Create an annotated tag signed off by ``signature``."""
        tagger = {"GIT_COMMITTER_NAME": signature.name, "GIT_COMMITTER_EMAIL": signature.email}
        with _git_errors("tag"), self.repo.git.custom_environment(**tagger):
            self.repo.create_tag(name, ref=target, message=message)

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    def head_commit(self) -> ObjectId:
        with _git_errors("rev-parse"):
            try:
                return ObjectId(self.repo.head.commit.hexsha)
            except ValueError as e:
                raise GitError("HEAD does not point to a commit") from e

    def walk_commits(self, start: ObjectId, exclude: ObjectId | None = None) -> list[Commit]:
        """Walk the history from ``start``, most recent first.

        Commits reachable from ``exclude`` (including ``exclude`` itself) are
        left out; ``start`` is included unless it is reachable from it.
        """
        rev = f"{exclude}..{start}" if exclude else start
        with _git_errors("rev-list"):
            return [
                Commit(
                    sha=ObjectId(commit.hexsha),
                    message=str(commit.message).strip(),
                    date=commit.committed_datetime,
                )
                for commit in self.repo.iter_commits(rev, date_order=True)
            ]

    # -------------------------------------------------------------------------
    # Remotes
    # -------------------------------------------------------------------------

    def _remote(self, name: str) -> git.Remote:
        try:
            return self.repo.remote(name)
        except ValueError as e:
            raise GitError(f"Remote {name!r} does not exist") from e

    def remote_url(self, remote: str = "origin") -> str:
        with _git_errors("remote"):
            return self._remote(remote).url

    def origin_url(self) -> str:
        return self.remote_url("origin")

    def push_ref(
        self,
        remote: str,
        refspec: str,
        credentials: PushCredentials | None = None,
    ) -> None:
        """Push ``refspec`` to ``remote``.

        With a push strategy, the push goes through a temporary remote holding
        the SSH form of the remote URL, and ssh is set up for the strategy.

        Raises:
            CredentialsError: If the credentials cannot be applied
            GitError: If the push fails
        """
        env: dict[str, str] = {}
        if credentials is not None and credentials.strategy is not None:
            command = ssh_command(credentials)
            if command:
                env["GIT_SSH_COMMAND"] = command

        with (
            _git_errors("push"),
            self._push_remote(remote, credentials) as target,
            _askpass(credentials, env),
            self.repo.git.custom_environment(**env),
        ):
            results = target.push(refspec)

        failed = [info for info in results if info.flags & _PUSH_FAILED]
        if not results or failed:
            summary = "; ".join(info.summary.strip() for info in failed)
            raise GitError(f"git push to {remote} failed", stderr=summary)

    @contextmanager
    def _push_remote(
        self, remote: str, credentials: PushCredentials | None
    ) -> Iterator[git.Remote]:
        """Yield the remote to push to.

        With a push strategy, a temporary remote carrying the SSH URL is added
        and removed again once the push is done.
        """
        origin = self._remote(remote)
        if credentials is None or credentials.strategy is None:
            yield origin
            return

        url = ssh_push_url(origin.url, credentials.username)
        temporary = git.Remote.add(self.repo, name=f"semtag-{secrets.token_hex(4)}", url=url)
        logger.debug("Pushing through %s using %s", url, credentials.strategy)
        try:
            yield temporary
        finally:
            self.repo.delete_remote(temporary)

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    def config_value(self, key: str) -> str | None:
        """Read a git configuration value, ``None`` if it is unset.

        Raises:
            GitError: If git fails for any other reason
        """
        try:
            value = self.repo.git.config("--get", key)
        except git.GitCommandError as e:
            # git config exits with 1 when the key is not set
            if e.status == 1:
                return None
            raise GitError(
                f"git config failed with exit code {e.status}",
                command=_command(e),
                stderr=_stderr(e),
            ) from e
        except git.GitCommandNotFound as e:
            raise GitError("git executable not found", command=_command(e)) from e
        return value.strip() or None

    def user_signature(self) -> Signature:
        """Build a signature from ``user.name`` and ``user.email``.

        Raises:
            CredentialsError: If either value is not configured
            GitError: If git cannot be run
        """
        name = self.config_value("user.name")
        email = self.config_value("user.email")
        if not name or not email:
            raise CredentialsError(
                "The user name and email are not defined. "
                "Pass --username/--email or set user.name/user.email in git config."
            )
        return Signature(name=name, email=email)


@contextmanager
def _askpass(credentials: PushCredentials | None, env: dict[str, str]) -> Iterator[None]:
    """Feed the private key passphrase to ssh through a throwaway askpass helper."""
    if credentials is None or not credentials.passphrase:
        yield
        return

    if credentials.strategy is None:
        raise CredentialsError("A passphrase was given without a push strategy")

    with tempfile.TemporaryDirectory(prefix="semtag-") as tmp:
        script = Path(tmp) / "askpass.sh"
        script.write_text(_ASKPASS_SCRIPT)
        script.chmod(0o700)
        env.update(
            {
                "SSH_ASKPASS": str(script),
                "SSH_ASKPASS_REQUIRE": "force",
                "SEMTAG_SSH_PASSPHRASE": credentials.passphrase,
            }
        )
        yield
