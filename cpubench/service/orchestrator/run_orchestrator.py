"""
Run orchestrator.

Executes the benchmark suite one entry at a time, publishes progress to the
state store and one completion event per entry to the event stream, then
hands the collected results to the score aggregator.
"""
import threading
from dataclasses import replace
from typing import List, Optional, Sequence

from cpubench.config.suite import DEFAULT_SUITE, SuiteEntry, validate_suite
from cpubench.models.benchmark_result import BenchmarkResult
from cpubench.service.event_stream.event_stream import EventStream
from cpubench.service.kernel.registry import KernelRegistry
from cpubench.service.orchestrator import run_machine
from cpubench.service.orchestrator.state_store import RunStateStore
from cpubench.service.scoring.score_aggregator import ScoreAggregator
from cpubench.util.log_config import setup_logger

logger = setup_logger(__name__)


class RunOrchestrator:

    def __init__(self, registry: KernelRegistry, event_stream: EventStream, state_store: RunStateStore,
                 aggregator: ScoreAggregator, suite: Sequence[SuiteEntry] = DEFAULT_SUITE):
        validate_suite(suite, aggregator.config.expected_single_count, aggregator.config.expected_multi_count)
        self.registry = registry
        self.event_stream = event_stream
        self.state_store = state_store
        self.aggregator = aggregator
        self.suite = tuple(suite)
        self._run_lock = threading.Lock()

        missing = registry.missing_kernels(e.kernel_id for e in self.suite)
        if missing:
            logger.warning(f"No kernel registered for {len(missing)} suite entries: "
                           f"{', '.join(k.value for k in missing)}")

    @property
    def is_running(self) -> bool:
        return self._run_lock.locked()

    def run_suite(self) -> bool:
        """
        Run the whole suite in the calling thread.

        Returns:
            False if another run was already active (nothing happened),
            True once this run reached Completed or Failed
        """
        if not self._run_lock.acquire(blocking=False):
            logger.warning("Benchmark run already in progress, ignoring request")
            return False
        try:
            self._run()
        finally:
            self._run_lock.release()
        return True

    def start(self) -> Optional[threading.Thread]:
        """
        Run the suite on a daemon worker thread.

        Returns:
            The worker thread, or None if a run is already active
        """
        if not self._run_lock.acquire(blocking=False):
            logger.warning("Benchmark run already in progress, ignoring request")
            return None

        def worker():
            try:
                self._run()
            finally:
                self._run_lock.release()

        thread = threading.Thread(target=worker, name="cpubench-run", daemon=True)
        thread.start()
        return thread

    def _run(self) -> None:
        total = len(self.suite)
        logger.info(f"Running {total} benchmarks")
        try:
            results = self._execute_suite(total)
            summary = self.aggregator.aggregate(tuple(results))
            logger.info(f"✓ Suite completed: {summary.format_scores()}")
            self.state_store.publish(run_machine.run_completed(summary))
        except Exception as e:
            logger.exception("Benchmark run failed")
            self.state_store.publish(run_machine.run_failed(e))

    def _execute_suite(self, total: int) -> List[BenchmarkResult]:
        results: List[BenchmarkResult] = []
        for index, entry in enumerate(self.suite):
            self.state_store.publish(run_machine.entry_started(entry, index, total).state)
            logger.info(f"  Run {index + 1}/{total}: {entry.display_name}")

            result = self._invoke(entry)
            results.append(result)

            step = run_machine.entry_completed(entry, index, total, result)
            self.event_stream.publish(step.event)
            self.state_store.publish(step.state)
            logger.info(f"  Run {index + 1}/{total}: Time={result.execution_time_ms:.1f}ms, "
                        f"Ops/s={result.ops_per_second:,.2f}, Valid={result.is_valid}")
        return results

    def _invoke(self, entry: SuiteEntry) -> BenchmarkResult:
        try:
            result = self.registry.invoke(entry.kernel_id)
        except Exception:
            logger.exception(f"Benchmark {entry.display_name} failed, using fallback result")
            return BenchmarkResult.fallback(entry.display_name)

        if result.name != entry.display_name:
            result = replace(result, name=entry.display_name)
        return result
