from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class Baseline:
    temperature: float  # °C
    humidity: float  # % RH


DEFAULT_BASELINE = Baseline(temperature=22.0, humidity=50.0)

# Monthly indoor baselines (°C, % RH)
# Index 0 = January, 11 = December
MONTHLY_BASELINES = [
    ("January", Baseline(14.0, 65.0)),
    ("February", Baseline(17.0, 60.0)),
    ("March", Baseline(22.0, 50.0)),
    ("April", Baseline(28.0, 35.0)),
    ("May", Baseline(33.0, 38.0)),
    ("June", Baseline(34.0, 58.0)),
    ("July", Baseline(31.0, 75.0)),
    ("August", Baseline(30.0, 80.0)),
    ("September", Baseline(29.0, 75.0)),
    ("October", Baseline(26.0, 60.0)),
    ("November", Baseline(20.0, 55.0)),
    ("December", Baseline(15.0, 65.0)),
]

_BY_KEY: Dict[str, Baseline] = {name.lower(): baseline for name, baseline in MONTHLY_BASELINES}


def month_names() -> List[str]:
    return [name for name, _ in MONTHLY_BASELINES]


def is_known_month(month: str) -> bool:
    return isinstance(month, str) and month.strip().lower() in _BY_KEY


def get_baseline(month: str) -> Baseline:
    """Case-insensitive lookup; unknown keys fall back to DEFAULT_BASELINE."""
    if not isinstance(month, str):
        return DEFAULT_BASELINE
    return _BY_KEY.get(month.strip().lower(), DEFAULT_BASELINE)


def canonical_month(month: str) -> str:
    """Return the table spelling of a month name (e.g. 'JULY' -> 'July')."""
    key = month.strip().lower()
    for name, _ in MONTHLY_BASELINES:
        if name.lower() == key:
            return name
    raise ValueError(f"Unknown month: {month!r}")
