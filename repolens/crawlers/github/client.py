"""Authenticated GitHub REST client returning typed fetch contracts."""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional

import httpx

from repolens.config.settings import settings
from repolens.crawlers.github.contracts import (
    ContributorStatsContract,
    FailureKind,
    FetchResult,
    FetchState,
    LanguageContract,
    ReadmeContract,
    RepoContract,
)
from repolens.utils.helpers import truncate_string

logger = logging.getLogger(__name__)

REDACTED = "***REDACTED***"

_SENSITIVE_KEYS = frozenset(
    {
        "authorization",
        "token",
        "access_token",
        "api_key",
        "apikey",
        "secret",
        "password",
        "session",
        "cookie",
    }
)
_PAYLOAD_KEYS = frozenset({"body", "content", "readme", "payload"})
_PAYLOAD_PREVIEW_LIMIT = 64

_SECRET_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"(authorization\s*[:=]\s*)(?:bearer|token)?\s*\S+", re.IGNORECASE), r"\1" + REDACTED),
    (re.compile(r"\b(bearer|token)\s+[A-Za-z0-9_\-\.]{8,}", re.IGNORECASE), r"\1 " + REDACTED),
    (re.compile(r"((?:access_token|token|api_key|apikey|client_secret)=)[^&\s]+", re.IGNORECASE), r"\1" + REDACTED),
    (re.compile(r"\bgh[pousr]_[A-Za-z0-9]{8,}\b"), REDACTED),
)


def _is_sensitive_key(key: Optional[str]) -> bool:
    if not key:
        return False
    normalized = key.lower().replace("-", "_")
    return normalized in _SENSITIVE_KEYS or normalized.endswith(("_token", "_secret"))


def sanitize_for_log(value: Any, key: Optional[str] = None) -> Any:
    """Mask credentials and bulky payloads before they reach a log record."""
    if isinstance(value, Mapping):
        return {item_key: sanitize_for_log(item, key=str(item_key)) for item_key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return type(value)(sanitize_for_log(item, key=key) for item in value)
    if _is_sensitive_key(key) and value is not None:
        return REDACTED
    if isinstance(value, str):
        if key and key.lower() in _PAYLOAD_KEYS and len(value) > _PAYLOAD_PREVIEW_LIMIT:
            return f"<redacted payload len={len(value)}>"
        masked = value
        for pattern, replacement in _SECRET_PATTERNS:
            masked = pattern.sub(replacement, masked)
        return masked
    return value


def sanitize_log_extra(**fields: Any) -> dict[str, Any]:
    """Sanitize structured ``extra`` fields for ``logger`` calls."""
    return {key: sanitize_for_log(value, key=key) for key, value in fields.items()}


def _failure_kind_for(status_code: int) -> FailureKind:
    if status_code == 404:
        return FailureKind.NOT_FOUND
    if status_code == 403:
        return FailureKind.RATE_LIMITED
    return FailureKind.UPSTREAM


class GitHubClient:
    """Thin async GitHub client. No retries, no caching."""

    def __init__(
        self,
        token: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        accept: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._token = token or None
        self._base_url = (base_url or settings.GITHUB_API_BASE_URL).rstrip("/")
        self._user_agent = user_agent or settings.USER_AGENT
        self._accept = accept or settings.GITHUB_ACCEPT_HEADER
        timeout = settings.REQUEST_TIMEOUT_SECONDS if timeout_seconds is None else timeout_seconds
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=self.build_headers(),
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def has_token(self) -> bool:
        return self._token is not None

    def build_headers(self) -> dict[str, str]:
        headers = {
            "Accept": self._accept,
            "User-Agent": self._user_agent,
        }
        if self._token:
            headers["Authorization"] = f"token {self._token}"
        return headers

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.aclose()

    async def get_repo(self, owner: str, repo: str) -> RepoContract:
        return await self._request(f"/repos/{owner}/{repo}")

    async def get_languages(self, languages_url: str) -> LanguageContract:
        return await self._request(languages_url)

    async def get_readme(self, owner: str, repo: str) -> ReadmeContract:
        return await self._request(f"/repos/{owner}/{repo}/readme")

    async def get_contributor_stats(self, owner: str, repo: str) -> ContributorStatsContract:
        return await self._request(f"/repos/{owner}/{repo}/stats/contributors")

    async def fetch(self, url: str, params: Optional[dict[str, Any]] = None) -> FetchResult[Any]:
        """GET an absolute URL or an API path and classify the outcome."""
        return await self._request(url, params=params)

    async def _request(self, url: str, params: Optional[dict[str, Any]] = None) -> FetchResult[Any]:
        try:
            response = await self._client.get(url, params=params)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            return self._failed(
                url=url,
                kind=FailureKind.UPSTREAM,
                error=f"{exc.__class__.__name__}: {exc}",
            )

        status = response.status_code
        if not response.is_success:
            return self._failed(
                url=str(response.request.url),
                kind=_failure_kind_for(status),
                status_code=status,
                error=self._error_message(response),
            )

        if not response.content:
            return FetchResult(state=FetchState.EMPTY, status_code=status)

        try:
            data = response.json()
        except ValueError as exc:
            return self._failed(
                url=str(response.request.url),
                kind=FailureKind.UPSTREAM,
                status_code=status,
                error=f"Invalid JSON body: {exc}",
            )

        state = FetchState.EMPTY if data in ({}, []) else FetchState.OK
        return FetchResult(state=state, data=data, status_code=status)

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return f"HTTP {response.status_code}"
        if isinstance(payload, dict) and payload.get("message"):
            return f"HTTP {response.status_code}: {truncate_string(str(payload['message']), 200)}"
        return f"HTTP {response.status_code}"

    def _failed(
        self,
        *,
        url: str,
        kind: FailureKind,
        error: str,
        status_code: Optional[int] = None,
    ) -> FetchResult[Any]:
        sanitized_error = sanitize_for_log(error, key="error")
        logger.warning(
            "GitHub request failed",
            extra=sanitize_log_extra(
                request_url=url,
                status_code=status_code,
                failure_kind=kind.value,
                error=sanitized_error,
            ),
        )
        return FetchResult(
            state=FetchState.FAILED,
            status_code=status_code,
            error=sanitized_error,
            failure_kind=kind,
        )
