"""
Host Monitor Module

Samples system-wide CPU and memory load while a benchmark run is active.
The numbers are reported next to the scores; they never feed into them.
"""
import threading
import time
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional

import psutil

from cpubench.util.log_config import setup_logger

logger = setup_logger(__name__)


@dataclass
class HostSnapshot:
    timestamp: float
    cpu_percent: float
    memory_percent: float


@dataclass
class HostMonitorResult:
    """Host resource usage over one run"""
    peak_cpu_percent: float
    avg_cpu_percent: float
    peak_memory_percent: float
    avg_memory_percent: float
    samples_count: int
    sampling_interval: float
    elapsed_seconds: float

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization"""
        return asdict(self)


class HostMonitor:
    """Monitor system-wide CPU and memory usage"""

    def __init__(self, interval: float = 0.5):
        """
        Initialize host monitor.

        Args:
            interval: Sampling interval in seconds
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval = interval
        self.snapshots: List[HostSnapshot] = []
        self.running = False
        self.thread: Optional[threading.Thread] = None
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self._stop_event = threading.Event()

    def start(self):
        """Start monitoring in a background thread"""
        if self.running:
            return

        # Prime cpu_percent (first call returns 0.0)
        psutil.cpu_percent(interval=None)

        self.snapshots = []
        self._stop_event.clear()
        self.start_time = time.time()
        self.end_time = None
        self.running = True
        self.thread = threading.Thread(target=self._monitor_loop, name="cpubench-monitor", daemon=True)
        self.thread.start()

    def stop(self) -> Optional[HostMonitorResult]:
        """
        Stop monitoring and return results.

        Returns:
            HostMonitorResult or None if no samples collected
        """
        self.running = False
        self._stop_event.set()
        self.end_time = time.time()

        if self.thread:
            self.thread.join(timeout=2.0)

        return self.get_results()

    def _monitor_loop(self):
        """Main monitoring loop (runs in background thread)"""
        while not self._stop_event.wait(self.interval):
            try:
                snapshot = HostSnapshot(
                    timestamp=time.time(),
                    cpu_percent=psutil.cpu_percent(interval=None),
                    memory_percent=psutil.virtual_memory().percent,
                )
            except psutil.Error as e:
                logger.warning(f"⚠ Host monitor error: {e}")
                break
            self.snapshots.append(snapshot)

    def get_results(self) -> Optional[HostMonitorResult]:
        if not self.snapshots:
            return None

        cpu_values = [s.cpu_percent for s in self.snapshots]
        memory_values = [s.memory_percent for s in self.snapshots]

        elapsed = 0.0
        if self.start_time and self.end_time:
            elapsed = self.end_time - self.start_time

        return HostMonitorResult(
            peak_cpu_percent=max(cpu_values),
            avg_cpu_percent=sum(cpu_values) / len(cpu_values),
            peak_memory_percent=max(memory_values),
            avg_memory_percent=sum(memory_values) / len(memory_values),
            samples_count=len(self.snapshots),
            sampling_interval=self.interval,
            elapsed_seconds=elapsed,
        )
