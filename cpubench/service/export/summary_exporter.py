"""
Summary export.

Serializes a ScoreSummary to the JSON payload consumed outside the
benchmark (camelCase keys), and reads it back.
"""
import json
from pathlib import Path
from typing import Any, Dict, Union

from cpubench.models.benchmark_result import BenchmarkResult, ScoreSummary
from cpubench.util.log_config import setup_logger

logger = setup_logger(__name__)


def result_to_dict(result: BenchmarkResult) -> Dict[str, Any]:
    return {
        "name": result.name,
        "executionTimeMs": result.execution_time_ms,
        "opsPerSecond": result.ops_per_second,
        "isValid": result.is_valid,
        "metrics": dict(result.metrics),
    }


def result_from_dict(data: Dict[str, Any]) -> BenchmarkResult:
    return BenchmarkResult(
        name=data["name"],
        execution_time_ms=float(data["executionTimeMs"]),
        ops_per_second=float(data["opsPerSecond"]),
        is_valid=bool(data["isValid"]),
        metrics=dict(data.get("metrics") or {}),
    )


def summary_to_dict(summary: ScoreSummary) -> Dict[str, Any]:
    return {
        "singleCoreScore": summary.single_core_score,
        "multiCoreScore": summary.multi_core_score,
        "finalWeightedScore": summary.final_weighted_score,
        "normalizedScore": summary.normalized_score,
        "rating": summary.rating,
        "coreRatio": summary.core_ratio,
        "perTestResults": [result_to_dict(r) for r in summary.per_test_results],
    }


def export_summary(summary: ScoreSummary, indent: int = 2) -> str:
    """
    Serialize a summary to JSON text.

    Names and metric values are escaped by the JSON encoder; non-ASCII
    characters (the rating stars) are kept as-is.

    Raises:
        ValueError: if a score or measurement is NaN or infinite
    """
    return json.dumps(summary_to_dict(summary), indent=indent, ensure_ascii=False, allow_nan=False)


def summary_from_json(text: str) -> ScoreSummary:
    data = json.loads(text)
    return ScoreSummary(
        single_core_score=float(data["singleCoreScore"]),
        multi_core_score=float(data["multiCoreScore"]),
        final_weighted_score=float(data["finalWeightedScore"]),
        normalized_score=float(data["normalizedScore"]),
        rating=data["rating"],
        per_test_results=tuple(result_from_dict(r) for r in data.get("perTestResults", [])),
        core_ratio=float(data.get("coreRatio", 0.0)),
    )


def save_summary(summary: ScoreSummary, path: Union[str, Path]) -> Path:
    """
    Write the export payload to path, creating parent directories.

    Returns:
        The resolved output path
    """
    text = export_summary(summary)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(text)
    logger.debug(f"Wrote {len(summary.per_test_results)} result(s) to {path}")
    return path.resolve()
