"""Keyword-based technology detection for repository analysis."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from repolens.models.repository import LanguageBreakdown, RepositoryMetadata, TechnologyProfile

# Label GitHub uses for unclassified source files.
OTHER_LANGUAGE = "Other"

KeywordTable = Mapping[str, tuple[str, ...]]

FRAMEWORKS: dict[str, tuple[str, ...]] = {
    "React": ("react", "jsx", "tsx"),
    "Vue.js": ("vue", "nuxt"),
    "Angular": ("angular", "ng-"),
    "Next.js": ("next.js", "nextjs"),
    "Svelte": ("svelte",),
    "Express": ("express",),
    "FastAPI": ("fastapi",),
    "Django": ("django",),
    "Flask": ("flask",),
    "Spring": ("spring boot", "springboot"),
    "Laravel": ("laravel",),
    "Rails": ("rails", "ruby on rails"),
}

DATABASES: dict[str, tuple[str, ...]] = {
    "PostgreSQL": ("postgresql", "postgres", "pg"),
    "MySQL": ("mysql",),
    "MongoDB": ("mongodb", "mongo"),
    "Redis": ("redis",),
    "SQLite": ("sqlite",),
    "Firebase": ("firebase",),
    "Supabase": ("supabase",),
}

BUILD_TOOLS: dict[str, tuple[str, ...]] = {
    "Webpack": ("webpack",),
    "Vite": ("vite",),
    "Parcel": ("parcel",),
    "Rollup": ("rollup",),
    "ESBuild": ("esbuild",),
    "Turbo": ("turbo",),
}

TESTING_FRAMEWORKS: dict[str, tuple[str, ...]] = {
    "Jest": ("jest",),
    "Vitest": ("vitest",),
    "Cypress": ("cypress",),
    "Playwright": ("playwright",),
    "Testing Library": ("@testing-library",),
    "Mocha": ("mocha",),
    "Chai": ("chai",),
}


@dataclass(frozen=True, slots=True)
class ClassifierTables:
    """The four ordered category tables. Order decides the detected value."""

    frameworks: KeywordTable
    databases: KeywordTable
    build_tools: KeywordTable
    testing_frameworks: KeywordTable


DEFAULT_TABLES = ClassifierTables(
    frameworks=FRAMEWORKS,
    databases=DATABASES,
    build_tools=BUILD_TOOLS,
    testing_frameworks=TESTING_FRAMEWORKS,
)


def primary_language(languages: LanguageBreakdown) -> str:
    """Language with the most bytes; the earliest key wins a tie."""
    best_name = ""
    best_count: Optional[int] = None
    for name, count in languages.items():
        if best_count is None or count > best_count:
            best_name, best_count = name, count
    return best_name


def build_haystack(description: str, readme: str) -> str:
    return f"{description or ''} {readme or ''}".lower()


def match_table(haystack: str, table: KeywordTable) -> list[str]:
    """Canonical names with at least one keyword occurring in ``haystack``, in table order."""
    return [name for name, keywords in table.items() if any(keyword in haystack for keyword in keywords)]


def _dedupe(items: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(items))


def classify_technology(
    metadata: RepositoryMetadata,
    languages: LanguageBreakdown,
    readme: str,
    tables: ClassifierTables = DEFAULT_TABLES,
) -> TechnologyProfile:
    """Infer the technology profile from language stats plus description and README text.

    Matching is plain substring search, so incidental mentions count. Within a
    category the first canonical name in table order is the detected value.
    """
    stack: list[str] = [name for name in languages if name != OTHER_LANGUAGE]
    haystack = build_haystack(metadata.description, readme)

    detected: list[Optional[str]] = []
    for table in (tables.frameworks, tables.databases, tables.build_tools, tables.testing_frameworks):
        matches = match_table(haystack, table)
        stack.extend(matches)
        detected.append(matches[0] if matches else None)

    framework, database, build_tool, testing_framework = detected
    return TechnologyProfile(
        tech_stack=_dedupe(stack),
        primary_language=primary_language(languages),
        framework=framework,
        database=database,
        build_tool=build_tool,
        testing_framework=testing_framework,
    )
