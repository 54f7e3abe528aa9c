import json

import debug_analyze
from repolens.models.repository import RepositoryAnalysis, RepositoryMetadata, RepositoryStats, TechnologyProfile


def _analysis() -> RepositoryAnalysis:
    metadata = RepositoryMetadata.from_payload(
        {"full_name": "acme/demo", "description": "Demo", "stargazers_count": 5, "updated_at": "2026-01-01T00:00:00Z"}
    )
    return RepositoryAnalysis(
        repo=metadata,
        languages={"Python": 10},
        readme="readme text",
        description="Demo",
        profile=TechnologyProfile(tech_stack=("Python",), primary_language="Python"),
        stats=RepositoryStats.from_metadata(metadata),
    )


def test_output_filename_is_filesystem_safe() -> None:
    assert debug_analyze.output_filename("https://github.com/acme/demo") == "https_github.com_acme_demo.json"
    assert debug_analyze.output_filename("///") == "repository.json"


def test_save_results_writes_json_snapshot(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(debug_analyze, "OUTPUT_DIR", str(tmp_path))

    data = debug_analyze.analysis_to_dict("acme/demo", _analysis(), 1.234)
    path = debug_analyze.save_results("acme/demo", data)

    with open(path, encoding="utf-8") as f:
        saved = json.load(f)
    assert saved["reference"] == "acme/demo"
    assert saved["elapsed_seconds"] == 1.23
    assert saved["readme_length"] == len("readme text")
    assert saved["stats"]["stars"] == 5
    assert saved["tech_stack"] == ["Python"]
