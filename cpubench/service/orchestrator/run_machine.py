"""
Pure run state transitions.

Every function takes the facts of the current step and returns the states
(and event) the orchestrator has to publish. Nothing here touches the store,
the event stream or a kernel.
"""
from dataclasses import dataclass
from typing import Optional

from cpubench.config.suite import SuiteEntry
from cpubench.consts.EventPhase import EventPhase
from cpubench.models.benchmark_event import BenchmarkEvent
from cpubench.models.benchmark_result import BenchmarkResult, ScoreSummary
from cpubench.models.run_state import Completed, Failed, Running, RunProgress


@dataclass(frozen=True)
class Step:
    state: Running
    event: Optional[BenchmarkEvent] = None


def entry_started(entry: SuiteEntry, index: int, total: int) -> Step:
    """Progress shown before the kernel of entry `index` runs."""
    return Step(state=Running(RunProgress(entry.display_name, index, total)))


def entry_completed(entry: SuiteEntry, index: int, total: int, result: BenchmarkResult) -> Step:
    """Progress and completion event after the kernel of entry `index` returned."""
    event = BenchmarkEvent(
        test_name=entry.display_name,
        mode=entry.category,
        phase=EventPhase.COMPLETED,
        duration_ms=int(round(result.execution_time_ms)),
        score=result.ops_per_second,
    )
    return Step(state=Running(RunProgress(entry.display_name, index + 1, total)), event=event)


def run_completed(summary: ScoreSummary) -> Completed:
    return Completed(summary)


def run_failed(exc: BaseException) -> Failed:
    return Failed(str(exc) or type(exc).__name__)
