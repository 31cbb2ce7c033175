"""
Scoring configuration data class.

Weights, scaling factors and the rating table used by the score aggregator.
rating_tiers keeps the order it was configured in.
"""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class RatingTier:

    threshold: float
    label: str


@dataclass(frozen=True)
class ScoringConfig:
    single_core_weight: float
    multi_core_weight: float
    normalization_factor: float
    invalid_result_weight: float
    default_single_core_factor: float
    default_multi_core_factor: float
    single_core_factors: Dict[str, float]
    multi_core_factors: Dict[str, float]
    rating_tiers: Tuple[RatingTier, ...]
    lowest_rating: str
    expected_single_count: int = 10
    expected_multi_count: int = 10

    def __post_init__(self):
        if not 0.0 <= self.invalid_result_weight <= 1.0:
            raise ValueError(
                f"invalid_result_weight must be within 0..1, got {self.invalid_result_weight}"
            )
