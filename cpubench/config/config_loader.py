"""
Configuration manager for benchmark runs.

This module provides the ConfigLoader class for loading and validating
benchmark configuration from YAML files.
"""
from pathlib import Path
from typing import Any, Dict, Optional

import psutil
import yaml

from cpubench.config.benchmark_config import BenchmarkConfig
from cpubench.config.scoring_config import RatingTier, ScoringConfig
from cpubench.config.workload_params import WorkloadParams
from cpubench.consts.DeviceTier import DeviceTier
from cpubench.util.log_config import setup_logger

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config_yaml"

FLAGSHIP_MIN_CPUS = 8
FLAGSHIP_MIN_MEMORY_GB = 8
MID_MIN_CPUS = 4
MID_MIN_MEMORY_GB = 4

logger = setup_logger(__name__)


def detect_device_tier() -> DeviceTier:
    """Pick a workload tier from logical CPU count and total memory."""
    cpus = psutil.cpu_count(logical=True) or 1
    memory_gb = psutil.virtual_memory().total / (1024 ** 3)
    logger.debug(f"Detected {cpus} logical CPUs, {memory_gb:.1f} GB memory")

    if cpus >= FLAGSHIP_MIN_CPUS and memory_gb >= FLAGSHIP_MIN_MEMORY_GB:
        return DeviceTier.FLAGSHIP
    if cpus >= MID_MIN_CPUS and memory_gb >= MID_MIN_MEMORY_GB:
        return DeviceTier.MID
    return DeviceTier.SLOW


def _parse_scoring(data: Dict[str, Any]) -> ScoringConfig:
    tiers = []
    for item in data["rating_tiers"]:
        if len(item) != 2:
            raise ValueError(f"Rating tier must be [threshold, label], got {item!r}")
        threshold, label = item
        tiers.append(RatingTier(threshold=float(threshold), label=str(label)))

    return ScoringConfig(
        single_core_weight=float(data["single_core_weight"]),
        multi_core_weight=float(data["multi_core_weight"]),
        normalization_factor=float(data["normalization_factor"]),
        invalid_result_weight=float(data.get("invalid_result_weight", 0.0)),
        default_single_core_factor=float(data["default_single_core_factor"]),
        default_multi_core_factor=float(data["default_multi_core_factor"]),
        single_core_factors={str(k): float(v) for k, v in data["single_core_factors"].items()},
        multi_core_factors={str(k): float(v) for k, v in data["multi_core_factors"].items()},
        rating_tiers=tuple(tiers),
        lowest_rating=str(data["lowest_rating"]),
        expected_single_count=int(data.get("expected_single_count", 10)),
        expected_multi_count=int(data.get("expected_multi_count", 10)),
    )


class ConfigLoader:

    def __init__(self, config_path: Path = DEFAULT_CONFIG_PATH, env: Optional[str] = None):
        self.config_path = Path(config_path)
        self.env = env
        self.config_data = self._load_config()

    def _load_config(self) -> BenchmarkConfig:
        """
        Load and parse benchmark configuration from YAML file.
        Supports environment-specific overrides via config_<env>.yaml

        Returns:
            BenchmarkConfig: Configured benchmark configuration instance
        """
        base_config_file = self.config_path / "config.yaml"
        with open(base_config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if self.env:
            env_config_file = self.config_path / f"config_{self.env}.yaml"
            with open(env_config_file, "r", encoding="utf-8") as f:
                env_data = yaml.safe_load(f) or {}
                # Top-level keys from the env file replace the base ones
                data.update(env_data)

        config = BenchmarkConfig()
        config.device_tier = DeviceTier(data.get("device_tier", DeviceTier.AUTO.value))
        config.workers = int(data.get("workers", 0))
        if config.workers < 0:
            raise ValueError(f"workers must be >= 0, got {config.workers}")
        config.cwd = data["output_cwd"]
        config.event_queue_size = int(data.get("event_queue_size", 64))
        config.monitor_interval = float(data.get("monitor_interval", 0.5))
        config.scoring = _parse_scoring(data["scoring"])
        config.workloads = {
            DeviceTier(tier): WorkloadParams.from_dict(params or {})
            for tier, params in data["workloads"].items()
        }
        return config

    def resolve_tier(self, override: Optional[str] = None) -> DeviceTier:
        """
        Resolve the tier to run with: CLI override first, then config,
        detecting from the host when either says 'auto'.
        """
        tier = DeviceTier(override) if override else self.config_data.device_tier
        if tier == DeviceTier.AUTO:
            tier = detect_device_tier()
            logger.info(f"Auto-detected device tier: {tier.value}")
        return tier

    def workload(self, override: Optional[str] = None) -> WorkloadParams:
        return self.config_data.workload_for(self.resolve_tier(override))
