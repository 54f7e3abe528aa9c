"""Repository analysis data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


LanguageBreakdown = dict[str, int]


@dataclass(frozen=True, slots=True)
class RepositoryIdentity:
    """Owner/name pair addressing one hosted repository."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True, slots=True)
class RepositoryOwner:
    """Owning-account summary embedded in repository metadata."""

    login: str = ""
    avatar_url: str = ""
    html_url: str = ""

    @classmethod
    def from_payload(cls, payload: Optional[dict[str, Any]]) -> "RepositoryOwner":
        if not isinstance(payload, dict):
            payload = {}
        return cls(
            login=payload.get("login") or "",
            avatar_url=payload.get("avatar_url") or "",
            html_url=payload.get("html_url") or "",
        )


@dataclass(frozen=True)
class RepositoryMetadata:
    """Read-only view of the ``GET /repos/{owner}/{repo}`` payload."""

    name: str
    full_name: str
    description: str
    html_url: str
    clone_url: str
    language: str
    languages_url: str
    stargazers_count: int
    forks_count: int
    open_issues_count: int
    created_at: str
    updated_at: str
    default_branch: str
    topics: tuple[str, ...]
    owner: RepositoryOwner
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "RepositoryMetadata":
        return cls(
            name=payload.get("name") or "",
            full_name=payload.get("full_name") or "",
            description=payload.get("description") or "",
            html_url=payload.get("html_url") or "",
            clone_url=payload.get("clone_url") or "",
            language=payload.get("language") or "",
            languages_url=payload.get("languages_url") or "",
            stargazers_count=int(payload.get("stargazers_count") or 0),
            forks_count=int(payload.get("forks_count") or 0),
            open_issues_count=int(payload.get("open_issues_count") or 0),
            created_at=payload.get("created_at") or "",
            updated_at=payload.get("updated_at") or "",
            default_branch=payload.get("default_branch") or "",
            topics=tuple(payload.get("topics") or ()),
            owner=RepositoryOwner.from_payload(payload.get("owner")),
            raw=dict(payload),
        )


@dataclass(frozen=True, slots=True)
class TechnologyProfile:
    """Technologies inferred for one repository."""

    tech_stack: tuple[str, ...]
    primary_language: str
    framework: Optional[str] = None
    database: Optional[str] = None
    build_tool: Optional[str] = None
    testing_framework: Optional[str] = None


@dataclass(frozen=True, slots=True)
class RepositoryStats:
    """Normalized stats subview."""

    stars: int
    forks: int
    issues: int
    last_updated: str

    @classmethod
    def from_metadata(cls, metadata: RepositoryMetadata) -> "RepositoryStats":
        return cls(
            stars=metadata.stargazers_count,
            forks=metadata.forks_count,
            issues=metadata.open_issues_count,
            last_updated=metadata.updated_at,
        )


@dataclass(slots=True)
class RepositoryAnalysis:
    """Complete analysis handed back to the caller."""

    repo: RepositoryMetadata
    languages: LanguageBreakdown
    readme: str
    description: str
    profile: TechnologyProfile
    stats: RepositoryStats

    @property
    def tech_stack(self) -> tuple[str, ...]:
        return self.profile.tech_stack

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation."""
        return {
            "repo": dict(self.repo.raw) if self.repo.raw else {
                "name": self.repo.name,
                "full_name": self.repo.full_name,
                "description": self.repo.description,
                "html_url": self.repo.html_url,
            },
            "languages": dict(self.languages),
            "readme": self.readme,
            "tech_stack": list(self.profile.tech_stack),
            "description": self.description,
            "stats": {
                "stars": self.stats.stars,
                "forks": self.stats.forks,
                "issues": self.stats.issues,
                "last_updated": self.stats.last_updated,
            },
            "analysis": {
                "primary_language": self.profile.primary_language,
                "framework": self.profile.framework,
                "database": self.profile.database,
                "build_tool": self.profile.build_tool,
                "testing_framework": self.profile.testing_framework,
            },
        }
