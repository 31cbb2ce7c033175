"""Benchmark result data models."""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple


@dataclass(frozen=True)
class BenchmarkResult:
    """
    Represents the outcome of one kernel invocation.

    Created by a kernel, or synthesized with fallback() when the kernel
    raised. Never modified afterwards.
    """
    name: str
    execution_time_ms: float
    ops_per_second: float
    is_valid: bool
    # Kernel-specific payload, passed through unparsed; read-only after creation
    metrics: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        for attr in ("execution_time_ms", "ops_per_second"):
            value = getattr(self, attr)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{attr} must be finite and >= 0, got {value}")
        object.__setattr__(self, "metrics", MappingProxyType(dict(self.metrics)))

    @classmethod
    def fallback(cls, name: str) -> 'BenchmarkResult':
        """Zero-valued, invalid result standing in for a failed kernel."""
        return cls(name=name, execution_time_ms=0.0, ops_per_second=0.0, is_valid=False, metrics={})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "name": self.name,
            "execution_time_ms": self.execution_time_ms,
            "ops_per_second": self.ops_per_second,
            "is_valid": self.is_valid,
            "metrics": dict(self.metrics),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BenchmarkResult':
        """Create BenchmarkResult from dictionary."""
        return cls(
            name=data["name"],
            execution_time_ms=float(data["execution_time_ms"]),
            ops_per_second=float(data["ops_per_second"]),
            is_valid=bool(data["is_valid"]),
            metrics=dict(data.get("metrics") or {}),
        )


@dataclass(frozen=True)
class ScoreSummary:
    """
    Aggregated scores for one complete run.

    per_test_results keeps execution order and holds every result of the
    run, single-core and multi-core alike.
    """
    single_core_score: float
    multi_core_score: float
    final_weighted_score: float
    normalized_score: float
    rating: str
    per_test_results: Tuple[BenchmarkResult, ...] = ()
    core_ratio: float = 0.0

    @classmethod
    def zeroed(cls, rating: str) -> 'ScoreSummary':
        """All-zero summary shown when a run failed as a whole."""
        return cls(
            single_core_score=0.0,
            multi_core_score=0.0,
            final_weighted_score=0.0,
            normalized_score=0.0,
            rating=rating,
            per_test_results=(),
            core_ratio=0.0,
        )

    def format_scores(self) -> str:
        """Format the headline scores for display."""
        return ("single={:.2f}  multi={:.2f}  final={:.2f}  normalized={:.2f}  "
                "ratio={:.2f}x  rating={}").format(
            self.single_core_score,
            self.multi_core_score,
            self.final_weighted_score,
            self.normalized_score,
            self.core_ratio,
            self.rating,
        )
