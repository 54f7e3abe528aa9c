"""Typed failures surfaced by repository analysis."""

from __future__ import annotations

from typing import Optional


class RepositoryAnalysisError(Exception):
    """Base class for failures that reach analysis callers."""

    retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        owner: Optional[str] = None,
        repo: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.owner = owner
        self.repo = repo
        self.status_code = status_code

    @property
    def full_name(self) -> Optional[str]:
        if self.owner is None or self.repo is None:
            return None
        return f"{self.owner}/{self.repo}"

    def __str__(self) -> str:
        if self.full_name is None:
            return self.message
        return f"{self.message} ({self.full_name})"


class InvalidRepositoryReference(RepositoryAnalysisError):
    """Input could not be resolved to an owner/repository pair."""

    def __init__(self, reference: str) -> None:
        super().__init__(f"Invalid GitHub repository URL: {reference!r}")
        self.reference = reference


class RepositoryNotFound(RepositoryAnalysisError):
    """Upstream answered 404."""


class RateLimited(RepositoryAnalysisError):
    """Upstream answered 403. Callers may retry after backoff."""

    retryable = True


class UpstreamError(RepositoryAnalysisError):
    """Any other non-2xx answer or a transport failure."""
