"""Tests for the host resource monitor."""

import time
from unittest.mock import MagicMock, patch

import pytest

from cpubench.service.monitor.host_monitor import HostMonitor


def fake_memory(percent: float) -> MagicMock:
    memory = MagicMock()
    memory.percent = percent
    return memory


class TestHostMonitor:

    def test_collects_samples(self) -> None:
        cpu_values = iter([0.0, 10.0, 30.0, 20.0] + [20.0] * 1000)
        with patch("psutil.cpu_percent", side_effect=lambda interval=None: next(cpu_values)), \
                patch("psutil.virtual_memory", return_value=fake_memory(40.0)):
            monitor = HostMonitor(interval=0.01)
            monitor.start()
            time.sleep(0.2)
            result = monitor.stop()

        assert result is not None
        assert result.samples_count >= 3
        assert result.peak_cpu_percent == 30.0
        assert result.peak_memory_percent == 40.0
        assert result.avg_memory_percent == pytest.approx(40.0)
        assert result.sampling_interval == 0.01
        assert result.elapsed_seconds > 0

    def test_no_samples(self) -> None:
        monitor = HostMonitor(interval=60.0)
        monitor.start()
        assert monitor.stop() is None

    def test_rejects_non_positive_interval(self) -> None:
        with pytest.raises(ValueError):
            HostMonitor(interval=0)

    def test_to_dict(self) -> None:
        with patch("psutil.cpu_percent", return_value=50.0), \
                patch("psutil.virtual_memory", return_value=fake_memory(25.0)):
            monitor = HostMonitor(interval=0.01)
            monitor.start()
            time.sleep(0.1)
            result = monitor.stop()

        data = result.to_dict()
        assert data["peak_cpu_percent"] == 50.0
        assert data["avg_memory_percent"] == 25.0
