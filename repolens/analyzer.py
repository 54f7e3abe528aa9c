"""Repository analysis facade: the entry point callers use."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from repolens.config.settings import Settings, settings as default_settings
from repolens.crawlers.github.client import GitHubClient, sanitize_log_extra
from repolens.crawlers.github.errors import RepositoryAnalysisError
from repolens.crawlers.github.identity import parse_identity, resolve_identity
from repolens.crawlers.github.source_aggregator import SourceAggregator
from repolens.models.repository import RepositoryAnalysis, RepositoryStats
from repolens.services.description_resolver import resolve_description
from repolens.services.tech_classifier import DEFAULT_TABLES, ClassifierTables, classify_technology

logger = logging.getLogger(__name__)


class RepositoryAnalyzer:
    """Resolves a repository reference, gathers its sources and classifies them.

    Each instance carries its own credential; analyzers with different tokens
    can be used side by side. Calls share nothing but the HTTP connection pool.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        *,
        settings: Optional[Settings] = None,
        client: Optional[GitHubClient] = None,
        tables: ClassifierTables = DEFAULT_TABLES,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        config = settings or default_settings
        self._owns_client = client is None
        self._client = client or GitHubClient(
            token,
            base_url=config.GITHUB_API_BASE_URL,
            user_agent=config.USER_AGENT,
            accept=config.GITHUB_ACCEPT_HEADER,
            timeout_seconds=config.REQUEST_TIMEOUT_SECONDS,
            transport=transport,
        )
        self._aggregator = SourceAggregator(self._client)
        self._tables = tables

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs: Any) -> "RepositoryAnalyzer":
        """Build an analyzer using the configured ``GITHUB_TOKEN``."""
        config = settings or default_settings
        return cls(config.GITHUB_TOKEN, settings=config, **kwargs)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "RepositoryAnalyzer":
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.aclose()

    async def analyze(self, url: str) -> RepositoryAnalysis:
        """Analyze the repository behind ``url``.

        Raises:
            InvalidRepositoryReference: ``url`` is not a repository reference.
            RepositoryNotFound: metadata or languages answered 404.
            RateLimited: metadata or languages answered 403.
            UpstreamError: any other upstream failure on those two fetches.
        """
        identity = parse_identity(url)
        sources = await self._aggregator.collect(identity)

        profile = classify_technology(sources.metadata, sources.languages, sources.readme, self._tables)
        description = resolve_description(sources.metadata.description, sources.readme)

        return RepositoryAnalysis(
            repo=sources.metadata,
            languages=sources.languages,
            readme=sources.readme,
            description=description,
            profile=profile,
            stats=RepositoryStats.from_metadata(sources.metadata),
        )

    async def check_accessible(self, url: str) -> bool:
        """Cheap pre-flight: True when the metadata fetch succeeds, False on any failure."""
        identity = resolve_identity(url)
        if identity is None:
            return False
        try:
            await self._aggregator.fetch_metadata(identity)
        except RepositoryAnalysisError as exc:
            logger.debug(
                "Repository not accessible",
                extra=sanitize_log_extra(repository=identity.full_name, error=str(exc)),
            )
            return False
        return True

    async def get_contributor_stats(self, url: str) -> Optional[list[dict[str, Any]]]:
        """Per-contributor commit stats, or None when unavailable."""
        identity = resolve_identity(url)
        if identity is None:
            return None
        result = await self._client.get_contributor_stats(identity.owner, identity.name)
        if not result.is_ok or not isinstance(result.data, list):
            logger.debug(
                "Could not fetch contributor stats",
                extra=sanitize_log_extra(repository=identity.full_name, status_code=result.status_code),
            )
            return None
        return result.data
