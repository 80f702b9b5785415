# rank_engine/scoring.py

ENGINE_VERSION = "0.1.0"
RULESET_VERSION = "0.1.0"

import math
from dataclasses import dataclass
from typing import Mapping

from .metrics import METRICS, WEIGHTS

SCORE_BIAS = 2.5

# Practical score extremes and reference population for rank mapping
MIN_EXPECTED = 20.0
MAX_EXPECTED = 95.0
TOTAL_SAMPLES = 1000

MIN_MARGIN = 5
MARGIN_RATIO = 0.12

@dataclass(frozen=True)
class RankRange:
    estimated_rank: int
    margin: int
    rank_min: int
    rank_max: int

def clamp_score(score: float) -> float:
    return max(0.0, min(100.0, float(score)))

def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))

def weighted_sum(values: Mapping[str, float]) -> float:
    total = 0.0
    for key in METRICS:
        total += values[key] * WEIGHTS[key]
    return total

def compute_composite_score(values: Mapping[str, float]) -> float:
    return clamp_score(weighted_sum(values) + SCORE_BIAS)

def estimate_rank_range(score: float) -> RankRange:
    """
    Map a composite score onto a rank band in a population of TOTAL_SAMPLES.

    normalized is left unclamped, so scores below MIN_EXPECTED give ranks
    beyond TOTAL_SAMPLES. Only the lower end is floored at 1.
    """
    normalized = (score - MIN_EXPECTED) / (MAX_EXPECTED - MIN_EXPECTED)
    estimated = max(1, round_half_up(TOTAL_SAMPLES * (1 - normalized)))

    margin = max(MIN_MARGIN, math.floor(estimated * MARGIN_RATIO))
    return RankRange(
        estimated_rank=estimated,
        margin=margin,
        rank_min=max(1, estimated - margin),
        rank_max=estimated + margin,
    )
