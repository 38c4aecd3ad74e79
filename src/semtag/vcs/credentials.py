"""Signature identity and push credentials.

The core never looks inside these values; they are handed to
:class:`~semtag.vcs.git.GitRepository` when a tag is created and pushed.
"""

from __future__ import annotations

import re
import shlex
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from semtag.exceptions import CredentialsError

_HTTP_URL_PATTERN = re.compile(r"^https?://([\w\-.]+)/(.+)$")
_SCP_URL_PATTERN = re.compile(r"^(?:[\w\-.]+@)?([\w\-.]+):(?!//)(.+)$")
_SSH_URL_PATTERN = re.compile(r"^ssh://(?:[\w\-.]+@)?([\w\-.]+)(?::\d+)?/(.+)$")


class PushStrategy(StrEnum):
    """How git authenticates when pushing over SSH."""

    SSH_AGENT = "ssh-agent"
    SSH_KEY = "ssh-key"


@dataclass(frozen=True, slots=True)
class Signature:
    """Identity recorded as the tagger of release tags."""

    name: str
    email: str


@dataclass(frozen=True, slots=True)
class PushCredentials:
    """Settings used to authenticate a push."""

    strategy: PushStrategy | None = None
    username: str = "git"
    public_key: Path | None = None
    private_key: Path | None = None
    passphrase: str | None = None


def ssh_push_url(url: str, username: str) -> str:
    """Turn an HTTP(S) remote URL into its SSH equivalent.

    ``https://github.com/owner/repo.git`` becomes
    ``git@github.com:owner/repo.git``. Non-HTTP URLs are returned unchanged.

    Raises:
        CredentialsError: If an HTTP URL cannot be parsed
    """
    if not url.startswith("http"):
        return url

    match = _HTTP_URL_PATTERN.match(url)
    if match is None:
        raise CredentialsError(f"Cannot derive an SSH push URL from {url!r}")

    return f"{username}@{match[1]}:{match[2]}"


def ssh_command(push: PushCredentials) -> str | None:
    """Return the ``GIT_SSH_COMMAND`` for the push strategy, if any.

    The ``ssh-agent`` strategy relies on the inherited ``SSH_AUTH_SOCK``; a
    public key, when given, selects which of the agent's identities is used.
    The ``ssh-key`` strategy points ssh at the private key.

    Raises:
        CredentialsError: If a configured key file is missing
    """
    match push.strategy:
        case PushStrategy.SSH_AGENT:
            if push.public_key is None:
                return None
            return _identity_command(push.public_key, "Public key")
        case PushStrategy.SSH_KEY:
            if push.private_key is None:
                raise CredentialsError("The ssh-key push strategy requires a private key")
            return _identity_command(push.private_key, "Private key")
        case _:
            return None


def _identity_command(path: Path, label: str) -> str:
    key = Path(path).expanduser()
    if not key.is_file():
        raise CredentialsError(f"{label} not found: {key}")
    return f"ssh -i {shlex.quote(str(key))} -o IdentitiesOnly=yes"


def web_url(url: str) -> str:
    """Convert a remote URL into a browsable ``https://`` URL.

    Handles HTTP(S), ``ssh://`` and scp-like (``git@host:path``) remotes.
    Anything else (e.g. a local path) is returned unchanged.
    """
    for pattern in (_HTTP_URL_PATTERN, _SSH_URL_PATTERN, _SCP_URL_PATTERN):
        match = pattern.match(url)
        if match is not None:
            path = match[2].rstrip("/").removesuffix(".git")
            return f"https://{match[1]}/{path}"
    return url
