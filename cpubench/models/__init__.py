"""Models for benchmark data structures."""

from .benchmark_event import BenchmarkEvent
from .benchmark_result import BenchmarkResult, ScoreSummary
from .run_state import Completed, Failed, Idle, RunProgress, RunState, Running

__all__ = [
    "BenchmarkEvent",
    "BenchmarkResult",
    "ScoreSummary",
    "RunProgress",
    "RunState",
    "Idle",
    "Running",
    "Completed",
    "Failed",
]
