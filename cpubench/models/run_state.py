"""Run state snapshots published by the orchestrator."""

from dataclasses import dataclass
from typing import Union

from cpubench.models.benchmark_result import ScoreSummary


@dataclass(frozen=True)
class RunProgress:
    current_benchmark_name: str
    completed_count: int
    total_count: int

    def __post_init__(self):
        if self.total_count <= 0:
            raise ValueError(f"total_count must be positive, got {self.total_count}")
        if not 0 <= self.completed_count <= self.total_count:
            raise ValueError(
                f"completed_count {self.completed_count} outside 0..{self.total_count}"
            )

    @property
    def percent(self) -> int:
        return self.completed_count * 100 // self.total_count


@dataclass(frozen=True)
class Idle:
    is_terminal = False


@dataclass(frozen=True)
class Running:
    progress: RunProgress
    is_terminal = False


@dataclass(frozen=True)
class Completed:
    summary: ScoreSummary
    is_terminal = True


@dataclass(frozen=True)
class Failed:
    message: str
    is_terminal = True


RunState = Union[Idle, Running, Completed, Failed]
