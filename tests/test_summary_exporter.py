"""Tests for the JSON summary export."""

import json
from dataclasses import replace

import pytest

from cpubench.models.benchmark_result import BenchmarkResult, ScoreSummary
from cpubench.service.export.summary_exporter import (
    export_summary,
    save_summary,
    summary_from_json,
    summary_to_dict,
)


def sample_summary(name: str = "Single-Core Prime Generation") -> ScoreSummary:
    result = BenchmarkResult(
        name=name,
        execution_time_ms=12.5,
        ops_per_second=8000.0,
        is_valid=True,
        metrics={"prime_count": 1229, "range": 10000},
    )
    return ScoreSummary(
        single_core_score=10.0,
        multi_core_score=30.0,
        final_weighted_score=23.0,
        normalized_score=23.0,
        rating="☆☆☆☆☆",
        per_test_results=(result,),
        core_ratio=3.0,
    )


class TestSummaryToDict:

    def test_field_names(self) -> None:
        data = summary_to_dict(sample_summary())

        assert set(data) == {
            "singleCoreScore", "multiCoreScore", "finalWeightedScore",
            "normalizedScore", "rating", "coreRatio", "perTestResults",
        }
        assert set(data["perTestResults"][0]) == {
            "name", "executionTimeMs", "opsPerSecond", "isValid", "metrics",
        }

    def test_values(self) -> None:
        data = summary_to_dict(sample_summary())

        assert data["singleCoreScore"] == 10.0
        assert data["rating"] == "☆☆☆☆☆"
        entry = data["perTestResults"][0]
        assert entry["executionTimeMs"] == 12.5
        assert entry["isValid"] is True
        assert entry["metrics"] == {"prime_count": 1229, "range": 10000}


class TestExportSummary:

    def test_is_valid_json(self) -> None:
        data = json.loads(export_summary(sample_summary()))
        assert data["coreRatio"] == 3.0

    def test_escapes_quotes_and_control_characters(self) -> None:
        name = 'Single-Core "Quoted"\nName\t\\end'
        text = export_summary(sample_summary(name))

        assert "\\nName\\t" in text
        assert '\\"Quoted\\"' in text
        assert json.loads(text)["perTestResults"][0]["name"] == name

    def test_keeps_non_ascii_rating(self) -> None:
        assert "☆☆☆☆☆" in export_summary(sample_summary())

    def test_reads_back(self) -> None:
        summary = sample_summary()
        assert summary_from_json(export_summary(summary)) == summary


def test_save_summary_creates_directories(tmp_path) -> None:
    target = tmp_path / "nested" / "dir" / "summary.json"
    saved = save_summary(sample_summary(), target)

    assert saved == target.resolve()
    assert json.loads(target.read_text(encoding="utf-8"))["singleCoreScore"] == 10.0


def test_result_dict_helpers() -> None:
    result = sample_summary().per_test_results[0]
    data = result.to_dict()

    assert data["execution_time_ms"] == 12.5
    assert data["metrics"] == {"prime_count": 1229, "range": 10000}
    assert BenchmarkResult.from_dict(data) == result


@pytest.mark.parametrize("score", [float("inf"), float("nan")])
def test_non_finite_score_is_not_exported(score: float, tmp_path) -> None:
    summary = replace(sample_summary(), single_core_score=score)

    with pytest.raises(ValueError):
        export_summary(summary)
    with pytest.raises(ValueError):
        save_summary(summary, tmp_path / "summary.json")
    assert not (tmp_path / "summary.json").exists()
