"""
Debug script to analyze GitHub repositories and save raw results to local files.

No database, no UI. Just fetch, classify and dump.
Results are saved as JSON files in the debug_output/ directory.

Usage:
    python debug_analyze.py owner/repo
    python debug_analyze.py https://github.com/owner/repo other/repo
    python debug_analyze.py --check owner/repo    # Pre-flight access check only

Set GITHUB_TOKEN in the environment or .env to raise the rate limit.
"""

import asyncio
import json
import os
import re
import sys
from datetime import datetime
from typing import Any, Dict

from repolens.analyzer import RepositoryAnalyzer
from repolens.config.settings import settings
from repolens.crawlers.github.errors import RepositoryAnalysisError
from repolens.models.repository import RepositoryAnalysis
from repolens.utils.logger import setup_logger

logger = setup_logger("debug_analyze", level=settings.LOG_LEVEL)

OUTPUT_DIR = os.path.join(os.path.dirname(__file__), "debug_output")


def output_filename(reference: str) -> str:
    """Filesystem-safe JSON file name for a repository reference."""
    slug = re.sub(r"[^A-Za-z0-9._-]+", "_", reference.strip()).strip("_")
    return f"{slug or 'repository'}.json"


def analysis_to_dict(reference: str, analysis: RepositoryAnalysis, elapsed: float) -> Dict[str, Any]:
    """Wrap an analysis with run metadata for the JSON dump."""
    data = analysis.to_dict()
    return {
        "reference": reference,
        "fetched_at": datetime.utcnow().isoformat(),
        "elapsed_seconds": round(elapsed, 2),
        "readme_length": len(analysis.readme),
        **data,
    }


def save_results(reference: str, data: Dict[str, Any]) -> str:
    """Save one analysis to a JSON file."""
    os.makedirs(OUTPUT_DIR, exist_ok=True)

    filepath = os.path.join(OUTPUT_DIR, output_filename(reference))
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    logger.info(f"Saved analysis to {filepath}")
    return filepath


def print_summary(reference: str, analysis: RepositoryAnalysis, elapsed: float):
    """Print a short summary for one analysis."""
    profile = analysis.profile

    print(f"\n{'='*60}")
    print(f"  {analysis.repo.full_name or reference} — {elapsed:.1f}s")
    print(f"{'='*60}")
    print(f"  Description:       {analysis.description[:70]}")
    print(f"  Primary language:  {profile.primary_language or '-'}")
    print(f"  Framework:         {profile.framework or '-'}")
    print(f"  Database:          {profile.database or '-'}")
    print(f"  Build tool:        {profile.build_tool or '-'}")
    print(f"  Testing:           {profile.testing_framework or '-'}")
    print(f"  Tech stack:        {', '.join(profile.tech_stack)}")
    print(f"  Stars/Forks/Issues: {analysis.stats.stars}/{analysis.stats.forks}/{analysis.stats.issues}")
    print()


async def run_analysis(analyzer: RepositoryAnalyzer, reference: str):
    """Analyze a single repository, time it, save results."""
    logger.info(f"Analyzing {reference}...")
    start = asyncio.get_running_loop().time()
    try:
        analysis = await analyzer.analyze(reference)
    except RepositoryAnalysisError as e:
        logger.error(f"{reference} FAILED: {e} (retryable={e.retryable})")
        return
    elapsed = asyncio.get_running_loop().time() - start

    save_results(reference, analysis_to_dict(reference, analysis, elapsed))
    print_summary(reference, analysis, elapsed)


async def main():
    args = sys.argv[1:]
    check_only = "--check" in args
    references = [a for a in args if not a.startswith("--")]

    if not references:
        print(__doc__)
        return

    async with RepositoryAnalyzer.from_settings(settings) as analyzer:
        for reference in references:
            if check_only:
                accessible = await analyzer.check_accessible(reference)
                print(f"  {reference}: {'accessible' if accessible else 'NOT accessible'}")
                continue
            await run_analysis(analyzer, reference)

    if not check_only:
        print(f"\n{'='*60}")
        print(f"  ALL DONE — results saved to {OUTPUT_DIR}/")
        print(f"{'='*60}\n")


if __name__ == "__main__":
    asyncio.run(main())
