"""Resolve GitHub URLs and owner/repo shorthand to a repository identity."""

from __future__ import annotations

import re
from typing import Optional

from repolens.crawlers.github.errors import InvalidRepositoryReference
from repolens.models.repository import RepositoryIdentity
from repolens.utils.helpers import sanitize_url


# Owner and name are limited to the characters GitHub allows in them.
_OWNER = r"[A-Za-z0-9_.-]+"
_NAME = r"[A-Za-z0-9_.-]+"

# Tried in order; each one captures owner and name together.
_IDENTITY_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"^(?:https?://)?(?:www\.)?github\.com/({_OWNER})/({_NAME})(?:[/?#].*)?$", re.IGNORECASE),
    re.compile(rf"^(?:ssh://)?git@github\.com[:/]({_OWNER})/({_NAME})$", re.IGNORECASE),
    re.compile(rf"^([A-Za-z0-9_-]+)/({_NAME})$"),
)

_GIT_SUFFIX = ".git"


def resolve_identity(raw: str) -> Optional[RepositoryIdentity]:
    """Return the owner/name pair for ``raw``, or None if it is not a repository reference."""
    if not isinstance(raw, str):
        return None

    candidate = sanitize_url(raw)
    if not candidate:
        return None

    for pattern in _IDENTITY_PATTERNS:
        match = pattern.match(candidate)
        if match is None:
            continue
        owner, name = match.group(1), match.group(2)
        if name.lower().endswith(_GIT_SUFFIX):
            name = name[: -len(_GIT_SUFFIX)]
        if not owner or not name:
            return None
        return RepositoryIdentity(owner=owner, name=name)

    return None


def parse_identity(raw: str) -> RepositoryIdentity:
    """Like :func:`resolve_identity` but raises :class:`InvalidRepositoryReference`."""
    identity = resolve_identity(raw)
    if identity is None:
        raise InvalidRepositoryReference(raw)
    return identity
