from typing import Dict, List, Mapping, Tuple

from .metrics import BASELINES, METRICS, WEIGHTS

def compute_contributions(values: Mapping[str, float]) -> Dict[str, float]:
    """
    Signed contribution of each metric relative to its historical baseline.

    Positive means the metric sits above its baseline and pushes the score up.
    The sum equals weighted_sum(values) - baseline_score(); bias and clamping
    are not attributed to any metric.
    """
    return {k: (values[k] - BASELINES[k]) * WEIGHTS[k] for k in METRICS}

def baseline_score() -> float:
    return sum(BASELINES[k] * WEIGHTS[k] for k in METRICS)

def explain_contributions(contributions: Mapping[str, float]) -> Dict[str, object]:
    """
    Returns:
    - top_positive_contributors (2) by contribution
    - top_negative_contributors (2) by contribution
    - baseline_score
    """
    items: List[Tuple[str, float]] = [(k, contributions[k]) for k in METRICS]

    positive = sorted([i for i in items if i[1] > 0], key=lambda x: x[1], reverse=True)[:2]
    negative = sorted([i for i in items if i[1] < 0], key=lambda x: x[1])[:2]

    return {
        "top_positive_contributors": [{"metric": k, "weighted": round(c, 2)} for k, c in positive],
        "top_negative_contributors": [{"metric": k, "weighted": round(c, 2)} for k, c in negative],
        "baseline_score": round(baseline_score(), 2),
    }
