"""Version control access for semtag."""

from __future__ import annotations

from semtag.vcs.credentials import PushCredentials, PushStrategy, Signature
from semtag.vcs.git import Commit, GitRepository, ObjectId, Tag

__all__ = [
    "Commit",
    "GitRepository",
    "ObjectId",
    "PushCredentials",
    "PushStrategy",
    "Signature",
    "Tag",
]
