"""Shared pytest fixtures for cpubench tests.

Provides the packaged configuration, a scoring config, an in-memory kernel
registry and helpers that build full result sets for the default suite.
"""

from typing import Callable, Dict, List, Optional

import pytest

from cpubench.config.config_loader import ConfigLoader
from cpubench.config.scoring_config import ScoringConfig
from cpubench.config.suite import DEFAULT_SUITE
from cpubench.config.workload_params import WorkloadParams
from cpubench.consts.BenchmarkId import BenchmarkId
from cpubench.models.benchmark_result import BenchmarkResult
from cpubench.service.event_stream.event_stream import EventStream
from cpubench.service.kernel.registry import KernelRegistry
from cpubench.service.orchestrator.run_orchestrator import RunOrchestrator
from cpubench.service.orchestrator.state_store import RunStateStore
from cpubench.service.scoring.score_aggregator import ScoreAggregator

# Smallest workloads that still pass every kernel self-check
TINY_PARAMS = WorkloadParams(
    prime_range=1_000,
    fibonacci_n_range=(8, 10),
    matrix_size=16,
    hash_data_size_mb=1,
    string_count=200,
    ray_tracing_resolution=(8, 8),
    ray_tracing_depth=1,
    compression_data_size_mb=1,
    monte_carlo_samples=20_000,
    json_data_size_mb=1,
    nqueens_size=6,
)


@pytest.fixture()
def config() -> ConfigLoader:
    return ConfigLoader()


@pytest.fixture()
def scoring(config: ConfigLoader) -> ScoringConfig:
    return config.config_data.scoring


@pytest.fixture()
def aggregator(scoring: ScoringConfig) -> ScoreAggregator:
    return ScoreAggregator(scoring)


@pytest.fixture()
def tiny_params() -> WorkloadParams:
    return TINY_PARAMS


# ---------------------------------------------------------------------------
# Result-set builders
# ---------------------------------------------------------------------------


def make_result(name: str, ops: float = 1000.0, valid: bool = True, time_ms: float = 10.0) -> BenchmarkResult:
    return BenchmarkResult(name=name, execution_time_ms=time_ms, ops_per_second=ops, is_valid=valid)


@pytest.fixture()
def make_result_set() -> Callable[..., List[BenchmarkResult]]:
    """Factory for a full 20-result set in suite order."""

    def _factory(*, single_ops: float = 1000.0, multi_ops: float = 2000.0, valid: bool = True) -> List[BenchmarkResult]:
        return [
            make_result(e.display_name, single_ops if "Single-Core" in e.display_name else multi_ops, valid)
            for e in DEFAULT_SUITE
        ]

    return _factory


# ---------------------------------------------------------------------------
# Fake kernels
# ---------------------------------------------------------------------------


class RecordingKernels:
    """Kernel table that records invocation order and can fail on demand."""

    def __init__(self, ops: float = 1000.0, failing: Optional[set] = None):
        self.ops = ops
        self.failing = failing or set()
        self.calls: List[BenchmarkId] = []

    def kernel(self, entry_name: str, kernel_id: BenchmarkId):
        def _run() -> BenchmarkResult:
            self.calls.append(kernel_id)
            if kernel_id in self.failing:
                raise RuntimeError(f"{kernel_id.value} exploded")
            return make_result(entry_name, self.ops)

        return _run

    def registry(self) -> KernelRegistry:
        table: Dict[BenchmarkId, Callable[[], BenchmarkResult]] = {
            e.kernel_id: self.kernel(e.display_name, e.kernel_id) for e in DEFAULT_SUITE
        }
        return KernelRegistry(table)


@pytest.fixture()
def kernels() -> RecordingKernels:
    return RecordingKernels()


@pytest.fixture()
def make_orchestrator(aggregator: ScoreAggregator):
    """Factory wiring an orchestrator around a registry with fresh stream and store."""

    def _factory(registry: KernelRegistry):
        stream = EventStream(default_maxsize=64)
        store = RunStateStore()
        return RunOrchestrator(registry, stream, store, aggregator), stream, store

    return _factory
