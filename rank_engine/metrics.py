from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Tuple

@dataclass(frozen=True)
class MetricSpec:
    key: str
    label: str
    weight: float
    historical_range: Tuple[float, float]  # (low, high) observed in past cycles

    @property
    def baseline(self) -> float:
        low, high = self.historical_range
        return (low + high) / 2

# Canonical order. Tie-breaks everywhere follow this sequence.
METRIC_SPECS: Tuple[MetricSpec, ...] = (
    MetricSpec("TLR", "Teaching (TLR)", 0.35, (30.0, 95.0)),
    MetricSpec("RPC", "Research (RPC)", 0.30, (5.0, 90.0)),
    MetricSpec("GO", "Graduation (GO)", 0.15, (40.0, 98.0)),
    MetricSpec("OI", "Inclusivity (OI)", 0.10, (30.0, 85.0)),
    MetricSpec("PR", "Perception (PR)", 0.10, (5.0, 95.0)),
)

METRICS: Tuple[str, ...] = tuple(m.key for m in METRIC_SPECS)

WEIGHTS: Mapping[str, float] = MappingProxyType({m.key: m.weight for m in METRIC_SPECS})
BASELINES: Mapping[str, float] = MappingProxyType({m.key: m.baseline for m in METRIC_SPECS})
LABELS: Mapping[str, str] = MappingProxyType({m.key: m.label for m in METRIC_SPECS})

CATEGORIES: List[str] = ["University", "Engineering", "Management", "Pharmacy", "Medical"]
DEFAULT_CATEGORY = "University"

# Starting values for the entry form.
DEFAULT_PROFILE: Mapping[str, float] = MappingProxyType({
    "TLR": 60.0,
    "RPC": 40.0,
    "GO": 70.0,
    "OI": 55.0,
    "PR": 20.0,
})
