"""Tests for the reference kernels and the kernel registry, at tiny workloads."""

from dataclasses import replace

import pytest

from cpubench.config.suite import DEFAULT_SUITE
from cpubench.consts.BenchmarkId import BenchmarkId
from cpubench.service.kernel import helpers, multi_core, single_core
from cpubench.service.kernel.registry import KernelRegistry, UnknownKernelError, build_default_registry

from conftest import TINY_PARAMS, make_result

SINGLE_KERNELS = [
    single_core.prime_generation,
    single_core.fibonacci_recursive,
    single_core.matrix_multiplication,
    single_core.hash_computing,
    single_core.string_sorting,
    single_core.ray_tracing,
    single_core.compression,
    single_core.monte_carlo_pi,
    single_core.json_parsing,
    single_core.nqueens,
]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestHelpers:

    def test_sieve_matches_known_counts(self) -> None:
        for limit, expected in [(100, 25), (1_000, 168), (10_000, 1_229)]:
            assert helpers.sieve_count(limit) == expected

    def test_segments_add_up(self) -> None:
        spans = helpers.split_range(10_001, 4)
        assert sum(helpers.segment_prime_count(lo, hi) for lo, hi in spans) == 1_229

    def test_split_range(self) -> None:
        assert helpers.split_range(10, 3) == [(0, 4), (4, 7), (7, 10)]
        assert helpers.split_range(2, 8) == [(0, 1), (1, 2)]
        assert helpers.split_range(0, 4) == []

    def test_fibonacci(self) -> None:
        assert [helpers.fibonacci_recursive(n) for n in range(8)] == [0, 1, 1, 2, 3, 5, 8, 13]
        assert helpers.fibonacci_iterative(50) == 12_586_269_025
        assert helpers.fibonacci_memoized_batch(30, 3)[0] == helpers.fibonacci_iterative(30)

    def test_fibonacci_call_count(self) -> None:
        calls = 0

        def fib(n):
            nonlocal calls
            calls += 1
            return n if n < 2 else fib(n - 1) + fib(n - 2)

        fib(12)
        assert helpers.fibonacci_call_count(12) == calls

    def test_nqueens_split_matches_whole(self) -> None:
        whole, _ = helpers.nqueens_count(8)
        parts = [helpers.nqueens_count(8, list(range(i, 8, 3)))[0] for i in range(3)]
        assert whole == 92
        assert sum(parts) == 92

    def test_compression_roundtrip(self) -> None:
        data = helpers.compressible_data(200_000)
        size, ok = helpers.compress_roundtrip(data)
        assert ok
        assert 0 < size < len(data)

    def test_json_element_count(self) -> None:
        assert helpers.count_json_elements({"a": [1, 2], "b": {"c": None}}) == 6

    def test_ops_per_second_zero_duration(self) -> None:
        assert helpers.ops_per_second(1000, 0.0) == 0.0
        assert helpers.ops_per_second(1000, 500.0) == 2000.0

    def test_resolve_workers(self) -> None:
        assert helpers.resolve_workers(3) == 3
        assert helpers.resolve_workers(0) >= 1


# ---------------------------------------------------------------------------
# Single-core kernels
# ---------------------------------------------------------------------------


class TestSingleCoreKernels:

    @pytest.mark.parametrize("kernel", SINGLE_KERNELS, ids=lambda k: k.__name__)
    def test_kernel_is_valid(self, kernel) -> None:
        result = kernel(TINY_PARAMS)

        assert result.name.startswith("Single-Core ")
        assert result.is_valid, result.metrics
        assert result.execution_time_ms >= 0
        assert result.ops_per_second >= 0

    def test_names_match_suite(self) -> None:
        names = [k(TINY_PARAMS).name for k in SINGLE_KERNELS]
        assert names == [e.display_name for e in DEFAULT_SUITE[:10]]

    def test_unknown_prime_range_still_valid(self) -> None:
        result = single_core.prime_generation(replace(TINY_PARAMS, prime_range=1_234))
        assert result.is_valid
        assert result.metrics["prime_count"] == helpers.sieve_count(1_234)

    def test_nqueens_metrics(self) -> None:
        result = single_core.nqueens(TINY_PARAMS)
        assert result.metrics["solutions"] == 4


# ---------------------------------------------------------------------------
# Multi-core kernels
# ---------------------------------------------------------------------------


class TestMultiCoreKernels:

    def test_prime_generation(self) -> None:
        result = multi_core.prime_generation(TINY_PARAMS, 2)
        assert result.is_valid
        assert result.metrics["prime_count"] == 168
        assert result.metrics["workers"] == 2

    def test_nqueens(self) -> None:
        result = multi_core.nqueens(TINY_PARAMS, 2)
        assert result.is_valid
        assert result.metrics["solutions"] == 4

    def test_string_sorting(self) -> None:
        result = multi_core.string_sorting(TINY_PARAMS, 2)
        assert result.is_valid
        assert result.metrics["count"] == 2 * TINY_PARAMS.string_count

    def test_matrix_multiplication(self) -> None:
        result = multi_core.matrix_multiplication(TINY_PARAMS, 2)
        assert result.is_valid
        assert result.name == "Multi-Core Matrix Multiplication"


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestKernelRegistry:

    def test_default_registry_covers_suite(self) -> None:
        registry = build_default_registry(TINY_PARAMS, workers=1)

        assert len(registry) == 20
        assert registry.missing_kernels(e.kernel_id for e in DEFAULT_SUITE) == []

    def test_invoke_by_id_and_value(self) -> None:
        registry = KernelRegistry({BenchmarkId.SINGLE_N_QUEENS: lambda: make_result("Single-Core N-Queens")})

        assert registry.invoke(BenchmarkId.SINGLE_N_QUEENS).name == "Single-Core N-Queens"
        assert registry.invoke("single_core_n_queens").name == "Single-Core N-Queens"

    def test_unknown_identifier(self) -> None:
        registry = KernelRegistry({})

        with pytest.raises(UnknownKernelError):
            registry.invoke("no_such_kernel")
        with pytest.raises(KeyError):
            registry.invoke(BenchmarkId.MULTI_COMPRESSION)

    def test_missing_kernels(self) -> None:
        registry = KernelRegistry({BenchmarkId.SINGLE_N_QUEENS: lambda: make_result("x")})
        missing = registry.missing_kernels([BenchmarkId.SINGLE_N_QUEENS, BenchmarkId.MULTI_N_QUEENS])
        assert missing == [BenchmarkId.MULTI_N_QUEENS]

    def test_default_registry_runs_single_core_kernel(self) -> None:
        registry = build_default_registry(TINY_PARAMS, workers=1)
        result = registry.invoke(BenchmarkId.SINGLE_PRIME_GENERATION)
        assert result.is_valid
        assert result.metrics["prime_count"] == 168
