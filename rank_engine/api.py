"""
Request/response boundary around the predictor.

Payloads are validated here so compute() never sees a malformed profile.
Out-of-range metric values are let through and only logged.
"""

import json
import logging
import math
from typing import Any, Dict, List, Mapping, Optional

from .metrics import CATEGORIES, DEFAULT_CATEGORY, METRICS
from .predictor import Profile, compute

logger = logging.getLogger(__name__)

class ProfileValidationError(ValueError):
    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("; ".join(errors))

def _as_number(x: Any) -> Optional[float]:
    # bool is an int subclass, but True/False is never a metric value
    if isinstance(x, bool) or not isinstance(x, (int, float)):
        return None
    try:
        x = float(x)
    except OverflowError:
        return None
    if math.isnan(x) or math.isinf(x):
        return None
    return x

def parse_profile(payload: Any) -> Profile:
    if not isinstance(payload, Mapping):
        raise ProfileValidationError(["Request body must be a JSON object."])

    errors: List[str] = []
    values: Dict[str, float] = {}

    for key in METRICS:
        if key not in payload:
            errors.append(f"Missing field '{key}'.")
            continue
        num = _as_number(payload[key])
        if num is None:
            raw = payload[key]
            if isinstance(raw, int) and not isinstance(raw, bool):
                # repr() of a huge int can itself fail
                errors.append(f"Field '{key}' is too large to score.")
            else:
                errors.append(f"Field '{key}' must be a finite number, got {raw!r}.")
            continue
        if num < 0 or num > 100:
            logger.warning("%s=%s is outside [0, 100]; scoring it as-is", key, num)
        values[key] = num

    category = payload.get("category", DEFAULT_CATEGORY)
    if category not in CATEGORIES:
        errors.append(f"Unknown category {category!r}. Expected one of: {', '.join(CATEGORIES)}.")

    name = payload.get("institution_name", "")
    if not isinstance(name, str):
        errors.append("Field 'institution_name' must be a string.")

    if errors:
        raise ProfileValidationError(errors)

    return Profile(institution_name=name.strip(), category=category, **values)

def predict(payload: Any) -> Dict[str, object]:
    profile = parse_profile(payload)
    result = compute(profile)
    logger.info(
        "prediction for %r (%s): score=%.2f rank=%d-%d",
        profile.institution_name or "unnamed",
        profile.category,
        result.predicted_score,
        result.rank_range_min,
        result.rank_range_max,
    )
    return result.to_dict()

def predict_json(body: str) -> str:
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as e:
        raise ProfileValidationError([f"Malformed JSON: {e.msg} (line {e.lineno}, column {e.colno})."]) from e
    except ValueError as e:
        # int literals past the interpreter's digit limit
        raise ProfileValidationError([f"Malformed JSON: {e}."]) from e
    return json.dumps(predict(payload), ensure_ascii=False)
