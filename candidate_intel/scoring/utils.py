"""
Numeric Utilities
candidate_intel/scoring/utils.py

Precision-safe helpers shared by the telemetry summarizer and the scoring
calculators. Every helper is total: empty inputs and unparsable values
return a neutral result instead of raising.
"""

import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional, Sequence


def to_decimal(value: float, places: int = 4) -> Decimal:
    """Convert float to Decimal with explicit precision."""
    return Decimal(str(value)).quantize(
        Decimal(10) ** -places, rounding=ROUND_HALF_UP
    )


def clamp(value, min_val=0, max_val=100):
    """Clamp value to range [min_val, max_val] (works for Decimal and float)."""
    return max(min_val, min(max_val, value))


def clamp_score(value: float) -> float:
    """Clamp a float to [0, 100], mapping NaN to 0."""
    if value is None or math.isnan(value):
        return 0.0
    return float(max(0.0, min(100.0, value)))


def round_half_up(value: float, places: int = 0) -> Decimal:
    """Round halves away from zero (ROUND_HALF_UP), not banker's rounding."""
    quantum = Decimal(1) if places == 0 else Decimal(10) ** -places
    return Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; 0.0 for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def variance(values: Sequence[float], center: Optional[float] = None) -> float:
    """Population variance; 0.0 for an empty sequence."""
    if not values:
        return 0.0
    mu = mean(values) if center is None else center
    return sum((v - mu) ** 2 for v in values) / len(values)


def median(values: Sequence[float]) -> float:
    """Median; 0.0 for an empty sequence."""
    if not values:
        return 0.0
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return float(ordered[mid])
    return (ordered[mid - 1] + ordered[mid]) / 2


def percentile_cont(values: Sequence[float], fraction: float) -> float:
    """
    Continuous percentile with linear interpolation between closest ranks.

    Formula: pos = fraction × (n − 1); result = v[⌊pos⌋] + (pos − ⌊pos⌋) × (v[⌈pos⌉] − v[⌊pos⌋])

    Examples:
        >>> percentile_cont([40, 50, 60, 70, 80, 90], 0.9)
        85.0
    """
    if not values:
        return 0.0
    ordered = sorted(values)
    pos = fraction * (len(ordered) - 1)
    lower = math.floor(pos)
    upper = math.ceil(pos)
    if lower == upper:
        return float(ordered[lower])
    return ordered[lower] + (pos - lower) * (ordered[upper] - ordered[lower])


def parse_number(value: Any, default: float = 0.0) -> float:
    """
    Parse a response value into a finite float.

    Strings such as "250000" or "1,200,000" are accepted; anything else
    (None, lists, "n/a", NaN, infinities) yields ``default``.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(Decimal(value.replace(",", "").strip()))
        except (InvalidOperation, ValueError):
            return default
    else:
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def as_list(value: Any) -> list:
    """Return list answers unchanged and wrap anything else (None becomes [])."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]
