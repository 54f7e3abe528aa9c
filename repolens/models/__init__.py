"""Analysis models"""

from repolens.models.repository import (
    LanguageBreakdown,
    RepositoryAnalysis,
    RepositoryIdentity,
    RepositoryMetadata,
    RepositoryOwner,
    RepositoryStats,
    TechnologyProfile,
)

__all__ = [
    "LanguageBreakdown",
    "RepositoryAnalysis",
    "RepositoryIdentity",
    "RepositoryMetadata",
    "RepositoryOwner",
    "RepositoryStats",
    "TechnologyProfile",
]
