"""
Benchmark suite definition.

The suite is an ordered, immutable list of entries. Execution order is list
order; the category of an entry comes from its display name.
"""

import re
from collections import Counter
from dataclasses import dataclass
from typing import Sequence, Tuple

from cpubench.consts.BenchmarkId import BenchmarkId
from cpubench.consts.CoreMode import CoreMode

SINGLE_CORE_MARKER = "Single-Core"
MULTI_CORE_MARKER = "Multi-Core"

_CORE_PREFIX = re.compile(f"(?:{SINGLE_CORE_MARKER}|{MULTI_CORE_MARKER}) ", re.IGNORECASE)


def category_of(name: str) -> CoreMode:
    """A benchmark is MULTI when its name carries the multi-core marker."""
    return CoreMode.MULTI if MULTI_CORE_MARKER in name else CoreMode.SINGLE


def strip_core_prefix(name: str) -> str:
    return _CORE_PREFIX.sub("", name).strip()


@dataclass(frozen=True)
class SuiteEntry:

    display_name: str
    kernel_id: BenchmarkId

    @property
    def category(self) -> CoreMode:
        return category_of(self.display_name)


DEFAULT_SUITE: Tuple[SuiteEntry, ...] = (
    SuiteEntry("Single-Core Prime Generation", BenchmarkId.SINGLE_PRIME_GENERATION),
    SuiteEntry("Single-Core Fibonacci Recursive", BenchmarkId.SINGLE_FIBONACCI_RECURSIVE),
    SuiteEntry("Single-Core Matrix Multiplication", BenchmarkId.SINGLE_MATRIX_MULTIPLICATION),
    SuiteEntry("Single-Core Hash Computing", BenchmarkId.SINGLE_HASH_COMPUTING),
    SuiteEntry("Single-Core String Sorting", BenchmarkId.SINGLE_STRING_SORTING),
    SuiteEntry("Single-Core Ray Tracing", BenchmarkId.SINGLE_RAY_TRACING),
    SuiteEntry("Single-Core Compression", BenchmarkId.SINGLE_COMPRESSION),
    SuiteEntry("Single-Core Monte Carlo Pi", BenchmarkId.SINGLE_MONTE_CARLO),
    SuiteEntry("Single-Core JSON Parsing", BenchmarkId.SINGLE_JSON_PARSING),
    SuiteEntry("Single-Core N-Queens", BenchmarkId.SINGLE_N_QUEENS),
    SuiteEntry("Multi-Core Prime Generation", BenchmarkId.MULTI_PRIME_GENERATION),
    SuiteEntry("Multi-Core Fibonacci Memoized", BenchmarkId.MULTI_FIBONACCI_MEMOIZED),
    SuiteEntry("Multi-Core Matrix Multiplication", BenchmarkId.MULTI_MATRIX_MULTIPLICATION),
    SuiteEntry("Multi-Core Hash Computing", BenchmarkId.MULTI_HASH_COMPUTING),
    SuiteEntry("Multi-Core String Sorting", BenchmarkId.MULTI_STRING_SORTING),
    SuiteEntry("Multi-Core Ray Tracing", BenchmarkId.MULTI_RAY_TRACING),
    SuiteEntry("Multi-Core Compression", BenchmarkId.MULTI_COMPRESSION),
    SuiteEntry("Multi-Core Monte Carlo Pi", BenchmarkId.MULTI_MONTE_CARLO),
    SuiteEntry("Multi-Core JSON Parsing", BenchmarkId.MULTI_JSON_PARSING),
    SuiteEntry("Multi-Core N-Queens", BenchmarkId.MULTI_N_QUEENS),
)


def validate_suite(suite: Sequence[SuiteEntry], expected_single: int, expected_multi: int) -> None:
    """
    Check that a suite matches the partition the aggregator expects.

    Raises:
        ValueError: on duplicate display names or wrong partition sizes
    """
    duplicates = [name for name, count in Counter(e.display_name for e in suite).items() if count > 1]
    if duplicates:
        raise ValueError(f"Duplicate suite entries: {duplicates}")

    single = sum(1 for e in suite if e.category == CoreMode.SINGLE)
    multi = len(suite) - single
    if single != expected_single or multi != expected_multi:
        raise ValueError(
            f"Suite has {single} single-core / {multi} multi-core entries, "
            f"expected {expected_single} / {expected_multi}"
        )
