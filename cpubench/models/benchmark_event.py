from dataclasses import dataclass

from cpubench.consts.CoreMode import CoreMode
from cpubench.consts.EventPhase import EventPhase


@dataclass(frozen=True)
class BenchmarkEvent:
    """One completed suite entry, as seen by live-progress subscribers."""
    test_name: str
    mode: CoreMode
    phase: EventPhase
    duration_ms: int
    score: float

    def __str__(self):
        return (f"{self.test_name} [{self.mode.value}] {self.phase.value}: "
                f"{self.duration_ms} ms, {self.score:,.2f} ops/s")
