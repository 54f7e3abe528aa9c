"""Concurrent retrieval of metadata, languages and README for one repository."""

from __future__ import annotations

import asyncio
import base64
import binascii
from dataclasses import dataclass
import logging
from typing import Any, Optional

from repolens.crawlers.github.client import GitHubClient, sanitize_log_extra
from repolens.crawlers.github.contracts import FetchResult, FetchState
from repolens.crawlers.github.errors import UpstreamError
from repolens.models.repository import LanguageBreakdown, RepositoryIdentity, RepositoryMetadata

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AggregatedSources:
    """Raw inputs for classification, owned by the caller."""

    identity: RepositoryIdentity
    metadata: RepositoryMetadata
    languages: LanguageBreakdown
    readme: str


def decode_readme(payload: Optional[dict[str, Any]]) -> str:
    """Decode the base64 ``content`` of a README payload. Raises ValueError on bad input."""
    if not isinstance(payload, dict):
        raise ValueError("README payload is not an object")
    content = payload.get("content")
    if not isinstance(content, str):
        raise ValueError("README payload has no content")
    encoding = payload.get("encoding", "base64")
    if encoding != "base64":
        raise ValueError(f"Unsupported README encoding: {encoding}")
    try:
        raw = base64.b64decode("".join(content.split()), validate=True)
    except binascii.Error as exc:
        raise ValueError(f"README content is not valid base64: {exc}") from exc
    return raw.decode("utf-8")


def _normalize_languages(payload: Any) -> LanguageBreakdown:
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValueError("Language payload is not an object")
    return {str(name): int(count) for name, count in payload.items()}


class SourceAggregator:
    """Collects the three analysis sources.

    Metadata and languages are fatal: a failed contract raises the typed error.
    The README branch is tolerant and always settles to text, possibly empty.
    """

    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    async def collect(self, identity: RepositoryIdentity) -> AggregatedSources:
        repo_task = asyncio.ensure_future(self._fetch_metadata_and_languages(identity))
        readme_task = asyncio.ensure_future(self._fetch_readme(identity))
        try:
            (metadata, languages), readme_result = await asyncio.gather(repo_task, readme_task)
        except BaseException:
            for task in (repo_task, readme_task):
                if not task.done():
                    task.cancel()
            raise

        return AggregatedSources(
            identity=identity,
            metadata=metadata,
            languages=languages,
            readme=readme_result.data if readme_result.is_ok and readme_result.data else "",
        )

    async def fetch_metadata(self, identity: RepositoryIdentity) -> RepositoryMetadata:
        result = await self._client.get_repo(identity.owner, identity.name)
        payload = result.raise_for_failure(identity.owner, identity.name)
        if not isinstance(payload, dict) or not payload:
            raise UpstreamError(
                "GitHub API error: empty repository payload",
                owner=identity.owner,
                repo=identity.name,
                status_code=result.status_code,
            )
        try:
            return RepositoryMetadata.from_payload(payload)
        except (AttributeError, TypeError, ValueError) as exc:
            raise UpstreamError(
                f"GitHub API error: malformed repository payload ({exc})",
                owner=identity.owner,
                repo=identity.name,
                status_code=result.status_code,
            ) from exc

    async def _fetch_metadata_and_languages(
        self, identity: RepositoryIdentity
    ) -> tuple[RepositoryMetadata, LanguageBreakdown]:
        metadata = await self.fetch_metadata(identity)
        if not metadata.languages_url:
            raise UpstreamError(
                "GitHub API error: repository payload has no languages_url",
                owner=identity.owner,
                repo=identity.name,
            )

        result = await self._client.get_languages(metadata.languages_url)
        payload = result.raise_for_failure(identity.owner, identity.name)
        try:
            languages = _normalize_languages(payload)
        except (TypeError, ValueError) as exc:
            raise UpstreamError(
                f"GitHub API error: {exc}",
                owner=identity.owner,
                repo=identity.name,
                status_code=result.status_code,
            ) from exc
        return metadata, languages

    async def _fetch_readme(self, identity: RepositoryIdentity) -> FetchResult[str]:
        result = await self._client.get_readme(identity.owner, identity.name)
        if not result.is_ok:
            logger.debug(
                "No README found for repository",
                extra=sanitize_log_extra(repository=identity.full_name, status_code=result.status_code),
            )
            return FetchResult(state=FetchState.EMPTY, status_code=result.status_code, error=result.error)

        try:
            text = decode_readme(result.data)
        except ValueError as exc:
            # UnicodeDecodeError is a ValueError too.
            logger.debug(
                "README could not be decoded",
                extra=sanitize_log_extra(repository=identity.full_name, error=str(exc)),
            )
            return FetchResult(state=FetchState.FAILED, status_code=result.status_code, error=str(exc))

        return FetchResult(state=FetchState.OK, data=text, status_code=result.status_code)
