from typing import List, Mapping

from .metrics import METRICS, WEIGHTS

MAX_RECOMMENDATIONS = 5
WHAT_IF_STEP = 10.0

OBSERVATION_PREFIX = "AI Observation:"
ROI_PREFIX = "ML Recommendation:"
FOCUS_PREFIX = "Critical Area:"

EMPTY_MESSAGE = "Maintain current performance across all parameters."

def deficit_observations(contributions: Mapping[str, float]) -> List[str]:
    # sorted() is stable, so equal contributions keep canonical order
    ranked = sorted(METRICS, key=lambda k: contributions[k])
    out: List[str] = []
    for k in ranked:
        val = contributions[k]
        if val < 0:
            out.append(
                f"{OBSERVATION_PREFIX} {k} is currently below the benchmark, "
                f"detracting {abs(val):.2f} pts from your score."
            )
    return out

def highest_roi_metric() -> str:
    impacts = {k: WHAT_IF_STEP * WEIGHTS[k] for k in METRICS}
    return sorted(METRICS, key=lambda k: impacts[k], reverse=True)[0]

def dominant_driver(contributions: Mapping[str, float]) -> str:
    return sorted(METRICS, key=lambda k: abs(contributions[k]), reverse=True)[0]

def build_recommendations(contributions: Mapping[str, float]) -> List[str]:
    recommendations = deficit_observations(contributions)

    best = highest_roi_metric()
    recommendations.append(
        f"{ROI_PREFIX} Improvements in {best} will yield the highest score boost based on model weights."
    )

    focus = dominant_driver(contributions)
    recommendations.append(
        f"{FOCUS_PREFIX} {focus} currently has the most significant impact on your profile variance."
    )

    # Five or more deficits push the ROI and focus lines out
    return recommendations[:MAX_RECOMMENDATIONS]

def classify_recommendation(text: str) -> str:
    if text.startswith(ROI_PREFIX):
        return "roi"
    if text.startswith(FOCUS_PREFIX):
        return "focus"
    return "observation"
