"""GitHub crawler primitives."""

from repolens.crawlers.github.client import GitHubClient
from repolens.crawlers.github.contracts import (
    ContributorStatsContract,
    FailureKind,
    FetchResult,
    FetchState,
    LanguageContract,
    ReadmeContract,
    RepoContract,
)
from repolens.crawlers.github.identity import parse_identity, resolve_identity
from repolens.crawlers.github.source_aggregator import AggregatedSources, SourceAggregator

__all__ = [
    "GitHubClient",
    "FailureKind",
    "FetchState",
    "FetchResult",
    "RepoContract",
    "LanguageContract",
    "ReadmeContract",
    "ContributorStatsContract",
    "resolve_identity",
    "parse_identity",
    "SourceAggregator",
    "AggregatedSources",
]
