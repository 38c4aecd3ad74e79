"""Shared fixtures for semtag tests."""

from __future__ import annotations

import os
import shutil
import subprocess
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

import pytest

from semtag.vcs.git import Commit, ObjectId, Tag


def run_git(path: Path, *args: str, date: str | None = None) -> str:
    """Run git in ``path`` with a fixed author/committer date."""
    env = dict(os.environ)
    if date:
        env["GIT_AUTHOR_DATE"] = date
        env["GIT_COMMITTER_DATE"] = date
    result = subprocess.run(
        ["git", *args],
        cwd=path,
        env=env,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@dataclass
class SampleRepo:
    """A git repository with a known history.

    History, oldest first::

        initial   chore: initial commit          <- 1.0.0 (annotated)
        feature   feat(api): add user endpoint
        readme    Update readme
        fix       fix: handle empty payload      <- v1.1.0 (lightweight)
        docs      docs(readme): document install <- nightly (lightweight)
    """

    path: Path
    remote: Path
    commits: dict[str, str] = field(default_factory=dict)

    def git(self, *args: str, date: str | None = None) -> str:
        return run_git(self.path, *args, date=date)


@pytest.fixture
def isolated_git(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's git configuration out of the tests."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", os.devnull)
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")


@pytest.fixture
def sample_repo(tmp_path: Path, isolated_git: None) -> SampleRepo:
    """Create a git repository with release tags and an origin remote."""
    remote = tmp_path / "remote.git"
    run_git(tmp_path, "init", "--quiet", "--bare", str(remote))

    path = tmp_path / "demo-app"
    path.mkdir()
    repo = SampleRepo(path=path, remote=remote)

    repo.git("init", "--quiet")
    repo.git("config", "user.name", "Test User")
    repo.git("config", "user.email", "test@example.com")
    repo.git("config", "commit.gpgsign", "false")
    repo.git("config", "tag.gpgsign", "false")
    repo.git("remote", "add", "origin", str(remote))

    history = [
        ("initial", "chore: initial commit", "2024-01-01T10:00:00+00:00"),
        ("feature", "feat(api): add user endpoint", "2024-01-02T10:00:00+00:00"),
        ("readme", "Update readme", "2024-01-03T10:00:00+00:00"),
        (
            "fix",
            "fix: handle empty payload\n\nBREAKING CHANGE: payload must not be null",
            "2024-01-04T10:00:00+00:00",
        ),
        ("docs", "docs(readme): document install", "2024-01-05T10:00:00+00:00"),
    ]
    for key, message, date in history:
        repo.git("commit", "--quiet", "--allow-empty", "-m", message, date=date)
        repo.commits[key] = repo.git("rev-parse", "HEAD")

        if key == "initial":
            repo.git(
                "tag", "-a", "1.0.0", "-m", "first release", date="2024-01-01T12:00:00+00:00"
            )
        elif key == "fix":
            repo.git("tag", "v1.1.0")
        elif key == "docs":
            repo.git("tag", "nightly")

    return repo


# =============================================================================
# In-memory objects
# =============================================================================


def make_tag(name: str, day: int, target: str | None = None) -> Tag:
    return Tag(
        name=name,
        date=datetime(2024, 1, day, tzinfo=UTC),
        target=ObjectId(target or f"{name}-sha"),
    )


def make_commit(sha: str, message: str, day: int = 1) -> Commit:
    return Commit(sha=ObjectId(sha), message=message, date=datetime(2024, 1, day, tzinfo=UTC))


@pytest.fixture
def release_tags() -> list[Tag]:
    """Tags as git lists them: by name, not by date."""
    return [
        make_tag("1.0.0", 1),
        make_tag("1.2.0", 20),
        make_tag("latest", 25),
        make_tag("v1.1.0", 10),
    ]


@pytest.fixture
def sample_commits() -> list[Commit]:
    """Commits released by a tag, most recent first."""
    return [
        make_commit("fix0001", "fix(core): handle null response", 5),
        make_commit("wip0001", "WIP on something", 4),
        make_commit("feat001", "feat(api): add user authentication", 3),
        make_commit("docs001", "docs: update installation guide", 2),
        make_commit("feat002", "feat(api): add token refresh", 1),
    ]
