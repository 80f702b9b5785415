"""
Rank prediction for a five-metric institutional profile.

compute() is a pure function: the same Profile always produces the same
ScoreResult, and nothing outside the returned value is touched.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List

from .explain import compute_contributions
from .metrics import DEFAULT_CATEGORY, METRICS
from .playbook import WHAT_IF_STEP, build_recommendations
from .scoring import compute_composite_score, estimate_rank_range

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class Profile:
    TLR: float
    RPC: float
    GO: float
    OI: float
    PR: float
    institution_name: str = ""
    category: str = DEFAULT_CATEGORY

    def values(self) -> Dict[str, float]:
        return {k: float(getattr(self, k)) for k in METRICS}

@dataclass
class ScoreResult:
    predicted_score: float
    rank_range_min: int
    rank_range_max: int
    estimated_rank: int
    shap_values: Dict[str, float] = field(default_factory=dict)
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "predicted_score": self.predicted_score,
            "rank_range_min": self.rank_range_min,
            "rank_range_max": self.rank_range_max,
            "shap_values": dict(self.shap_values),
            "recommendations": list(self.recommendations),
        }

def compute(profile: Profile) -> ScoreResult:
    values = profile.values()

    score = compute_composite_score(values)
    rank = estimate_rank_range(score)
    contributions = compute_contributions(values)
    recommendations = build_recommendations(contributions)

    logger.debug(
        "scored profile %s: score=%.2f rank=%d [%d, %d]",
        values, score, rank.estimated_rank, rank.rank_min, rank.rank_max,
    )

    return ScoreResult(
        predicted_score=score,
        rank_range_min=rank.rank_min,
        rank_range_max=rank.rank_max,
        estimated_rank=rank.estimated_rank,
        shap_values=contributions,
        recommendations=recommendations,
    )

def simulate_improvement(profile: Profile, metric: str, delta: float = WHAT_IF_STEP) -> Dict[str, object]:
    """
    Re-score the profile with one metric raised by delta.

    Unlike the flat 10 x weight estimate used for recommendations, this
    goes through the full pipeline, so score clamping applies.
    """
    if metric not in METRICS:
        raise KeyError(metric)

    before = compute(profile)
    raised = replace(profile, **{metric: getattr(profile, metric) + delta})
    after = compute(raised)

    return {
        "metric": metric,
        "delta": float(delta),
        "score_before": before.predicted_score,
        "score_after": after.predicted_score,
        "score_gain": round(after.predicted_score - before.predicted_score, 4),
        "rank_before": before.estimated_rank,
        "rank_after": after.estimated_rank,
    }
