from .host_monitor import HostMonitor, HostMonitorResult

__all__ = ["HostMonitor", "HostMonitorResult"]
