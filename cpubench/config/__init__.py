"""Configuration module for benchmark runs."""

from .benchmark_config import BenchmarkConfig
from .scoring_config import RatingTier, ScoringConfig
from .suite import DEFAULT_SUITE, SuiteEntry
from .workload_params import WorkloadParams

__all__ = ["BenchmarkConfig", "RatingTier", "ScoringConfig", "DEFAULT_SUITE", "SuiteEntry", "WorkloadParams"]
