"""
Workload size configuration data class.

This module provides the WorkloadParams class, one instance per device tier,
sizing the work each kernel performs.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class WorkloadParams:

    prime_range: int = 10_000
    fibonacci_n_range: Tuple[int, int] = (10, 15)
    matrix_size: int = 50
    hash_data_size_mb: int = 1
    string_count: int = 1_000
    ray_tracing_resolution: Tuple[int, int] = (64, 64)
    ray_tracing_depth: int = 2
    compression_data_size_mb: int = 1
    monte_carlo_samples: int = 10_000
    json_data_size_mb: int = 1
    nqueens_size: int = 8

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WorkloadParams':
        """Build from a YAML mapping; pairs arrive as lists."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown workload keys: {sorted(unknown)}")

        values = dict(data)
        for key in ("fibonacci_n_range", "ray_tracing_resolution"):
            if key in values:
                values[key] = tuple(values[key])
        return cls(**values)
