"""Typed contracts for GitHub client responses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from repolens.crawlers.github.errors import (
    RateLimited,
    RepositoryAnalysisError,
    RepositoryNotFound,
    UpstreamError,
)


T = TypeVar("T")


class FetchState(str, Enum):
    """Normalized response state for downstream aggregation."""

    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"


class FailureKind(str, Enum):
    """Why a fetch failed, independent of how the caller reacts to it."""

    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    UPSTREAM = "upstream"


_ERROR_TYPES: dict[FailureKind, type[RepositoryAnalysisError]] = {
    FailureKind.NOT_FOUND: RepositoryNotFound,
    FailureKind.RATE_LIMITED: RateLimited,
    FailureKind.UPSTREAM: UpstreamError,
}

_ERROR_MESSAGES: dict[FailureKind, str] = {
    FailureKind.NOT_FOUND: "Repository not found",
    FailureKind.RATE_LIMITED: "Rate limit exceeded. Please try again later.",
    FailureKind.UPSTREAM: "GitHub API error",
}


@dataclass(slots=True)
class FetchResult(Generic[T]):
    """Container that separates payload from fetch semantics."""

    state: FetchState
    data: Optional[T] = None
    status_code: Optional[int] = None
    error: Optional[str] = None
    failure_kind: Optional[FailureKind] = None

    @property
    def is_ok(self) -> bool:
        return self.state == FetchState.OK

    @property
    def is_empty(self) -> bool:
        return self.state == FetchState.EMPTY

    @property
    def is_failed(self) -> bool:
        return self.state == FetchState.FAILED

    def to_error(self, owner: Optional[str] = None, repo: Optional[str] = None) -> RepositoryAnalysisError:
        """Build the typed failure for a failed contract."""
        kind = self.failure_kind or FailureKind.UPSTREAM
        message = _ERROR_MESSAGES[kind]
        if kind == FailureKind.UPSTREAM:
            if self.status_code is not None:
                message = f"{message}: {self.status_code}"
            elif self.error:
                message = f"{message}: {self.error}"
        return _ERROR_TYPES[kind](message, owner=owner, repo=repo, status_code=self.status_code)

    def raise_for_failure(self, owner: Optional[str] = None, repo: Optional[str] = None) -> T:
        """Return the payload, or raise the typed failure carrying repository context."""
        if self.is_failed:
            raise self.to_error(owner, repo)
        return self.data  # type: ignore[return-value]


RepoPayload = dict[str, Any]
LanguagePayload = dict[str, int]
ReadmePayload = dict[str, Any]
ContributorStatsPayload = list[dict[str, Any]]

RepoContract = FetchResult[RepoPayload]
LanguageContract = FetchResult[LanguagePayload]
ReadmeContract = FetchResult[ReadmePayload]
ContributorStatsContract = FetchResult[ContributorStatsPayload]
