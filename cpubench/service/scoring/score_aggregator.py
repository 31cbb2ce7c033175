"""
Score aggregation.

Folds the twenty per-test results of a run into single-core, multi-core,
weighted-final and normalized scores plus a rating label. Pure: the same
result set and config always produce the same summary.
"""
from typing import List, Mapping, Sequence, Tuple

from cpubench.config.scoring_config import ScoringConfig
from cpubench.config.suite import category_of, strip_core_prefix
from cpubench.consts.CoreMode import CoreMode
from cpubench.models.benchmark_result import BenchmarkResult, ScoreSummary
from cpubench.util.log_config import setup_logger

logger = setup_logger(__name__)

# Short forms of the factor table keys, checked in order
FACTOR_KEYWORDS = (
    ("prime", "Prime Generation"),
    ("fibonacci", "Fibonacci Recursive"),
    ("matrix", "Matrix Multiplication"),
    ("hash", "Hash Computing"),
    ("string", "String Sorting"),
    ("sort", "String Sorting"),
    ("ray", "Ray Tracing"),
    ("compression", "Compression"),
    ("monte", "Monte Carlo"),
    ("json", "JSON Parsing"),
    ("queens", "N-Queens"),
)


class ResultSetShapeError(ValueError):
    """Raised when a result set does not hold the expected single/multi split."""


class ScoreAggregator:

    def __init__(self, config: ScoringConfig):
        self.config = config

    def factor_for(self, name: str, mode: CoreMode) -> float:
        """
        Scaling factor for one benchmark.

        Looks the name up without its core prefix: exact key first, then the
        first key contained in the name (ignoring case), then the first
        keyword of FACTOR_KEYWORDS found in the name, then the category default.
        """
        if mode == CoreMode.MULTI:
            table, default = self.config.multi_core_factors, self.config.default_multi_core_factor
        else:
            table, default = self.config.single_core_factors, self.config.default_single_core_factor

        clean_name = strip_core_prefix(name)
        if clean_name in table:
            return table[clean_name]

        lowered = clean_name.lower()
        for key, factor in table.items():
            if key.lower() in lowered:
                return factor

        for keyword, key in FACTOR_KEYWORDS:
            if keyword in lowered:
                if keyword == "fibonacci":
                    key = "Fibonacci Memoized" if mode == CoreMode.MULTI else "Fibonacci Recursive"
                if key in table:
                    return table[key]
                break

        logger.warning(f"No scaling factor for '{name}', using default {default}")
        return default

    def weighted_score(self, result: BenchmarkResult) -> float:
        weight = 1.0 if result.is_valid else self.config.invalid_result_weight
        return result.ops_per_second * self.factor_for(result.name, category_of(result.name)) * weight

    def per_test_scores(self, results: Sequence[BenchmarkResult]) -> List[Tuple[str, float]]:
        return [(r.name, self.weighted_score(r)) for r in results]

    def rating_for(self, normalized_score: float) -> str:
        # Configured order is the priority order; first match wins
        for tier in self.config.rating_tiers:
            if normalized_score >= tier.threshold:
                return tier.label
        return self.config.lowest_rating

    def _partition(self, results: Sequence[BenchmarkResult]) -> Mapping[CoreMode, List[BenchmarkResult]]:
        parts = {CoreMode.SINGLE: [], CoreMode.MULTI: []}
        for result in results:
            parts[category_of(result.name)].append(result)

        single, multi = len(parts[CoreMode.SINGLE]), len(parts[CoreMode.MULTI])
        if single != self.config.expected_single_count or multi != self.config.expected_multi_count:
            raise ResultSetShapeError(
                f"Expected {self.config.expected_single_count} single-core and "
                f"{self.config.expected_multi_count} multi-core results, got {single} / {multi}"
            )
        return parts

    def aggregate(self, results: Sequence[BenchmarkResult]) -> ScoreSummary:
        """
        Build the score summary for a complete run.

        Args:
            results: Every result of the run, in execution order

        Raises:
            ResultSetShapeError: if the single/multi split is not the expected one
        """
        results = tuple(results)
        parts = self._partition(results)

        single_score = sum(self.weighted_score(r) for r in parts[CoreMode.SINGLE])
        multi_score = sum(self.weighted_score(r) for r in parts[CoreMode.MULTI])
        final_score = (single_score * self.config.single_core_weight
                       + multi_score * self.config.multi_core_weight)
        normalized = final_score * self.config.normalization_factor

        return ScoreSummary(
            single_core_score=single_score,
            multi_core_score=multi_score,
            final_weighted_score=final_score,
            normalized_score=normalized,
            rating=self.rating_for(normalized),
            per_test_results=results,
            core_ratio=multi_score / single_score if single_score > 0 else 0.0,
        )
