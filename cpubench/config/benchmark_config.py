from typing import Dict

from cpubench.config.scoring_config import ScoringConfig
from cpubench.config.workload_params import WorkloadParams
from cpubench.consts.DeviceTier import DeviceTier


class BenchmarkConfig:
    device_tier: DeviceTier
    workers: int  # 0 means one per logical CPU
    cwd: str
    event_queue_size: int
    monitor_interval: float
    scoring: ScoringConfig
    workloads: Dict[DeviceTier, WorkloadParams]

    def workload_for(self, tier: DeviceTier) -> WorkloadParams:
        if tier == DeviceTier.AUTO:
            raise ValueError("Resolve DeviceTier.AUTO before looking up a workload")
        try:
            return self.workloads[tier]
        except KeyError:
            raise KeyError(f"No workload configured for tier '{tier.value}'") from None
