"""Pick a human-readable description for a repository."""

from __future__ import annotations

MIN_LINE_LENGTH = 10

_SKIPPED_PREFIXES = ("#", "!")


def first_summary_line(readme: str) -> str:
    """First README line that reads like prose rather than a heading or badge.

    Heading and image markers only count at the very start of the raw line.
    """
    for line in (readme or "").splitlines():
        if line.startswith(_SKIPPED_PREFIXES):
            continue
        candidate = line.strip()
        if len(candidate) > MIN_LINE_LENGTH:
            return candidate
    return ""


def resolve_description(description: str, readme: str) -> str:
    """Stated description if present, else the first summary line of the README."""
    if description:
        return description
    return first_summary_line(readme)
