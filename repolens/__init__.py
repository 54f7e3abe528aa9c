"""Repository analysis engine: GitHub sources in, technology profile out."""

from repolens.analyzer import RepositoryAnalyzer
from repolens.crawlers.github.errors import (
    InvalidRepositoryReference,
    RateLimited,
    RepositoryAnalysisError,
    RepositoryNotFound,
    UpstreamError,
)
from repolens.models.repository import RepositoryAnalysis, TechnologyProfile

__all__ = [
    "RepositoryAnalyzer",
    "RepositoryAnalysis",
    "TechnologyProfile",
    "RepositoryAnalysisError",
    "InvalidRepositoryReference",
    "RepositoryNotFound",
    "RateLimited",
    "UpstreamError",
]
