"""Configuration models.

Configuration lives in a ``.semtag.toml`` file::

    log_level = "debug"
    tag_prefix = "v"

    [user]
    name = "Release Bot"
    email = "release@example.com"

    [push]
    strategy = "ssh-key"
    private_key = "~/.ssh/id_ed25519"

    [changelog]
    app_name = "my-app"
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from semtag.vcs.credentials import PushCredentials, PushStrategy, Signature


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid")


class UserConfig(_Section):
    """Identity used to sign release tags."""

    name: str | None = None
    email: str | None = None

    @property
    def signature(self) -> Signature | None:
        """The configured signature, if both name and email are set."""
        if self.name and self.email:
            return Signature(name=self.name, email=self.email)
        return None


class PushConfig(_Section):
    """How release tags are pushed."""

    strategy: PushStrategy | None = None
    username: str = "git"
    public_key: Path | None = None
    private_key: Path | None = None
    passphrase: str | None = Field(default=None, repr=False)

    def credentials(self) -> PushCredentials:
        return PushCredentials(
            strategy=self.strategy,
            username=self.username,
            public_key=self.public_key.expanduser() if self.public_key else None,
            private_key=self.private_key.expanduser() if self.private_key else None,
            passphrase=self.passphrase,
        )


class ChangelogConfig(_Section):
    """Changelog generation settings."""

    app_name: str | None = None
    output: Path | None = None
    template: Path | None = None


class SemtagConfig(_Section):
    """Root configuration."""

    log_level: str = "info"
    repo_path: Path = Path(".")
    remote: str = "origin"
    tag_prefix: Literal["", "v"] = ""
    user: UserConfig = Field(default_factory=UserConfig)
    push: PushConfig = Field(default_factory=PushConfig)
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)

    @property
    def effective_changelog_output(self) -> Path:
        """Changelog destination, the repository directory by default."""
        return self.changelog.output or self.repo_path
