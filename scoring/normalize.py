"""Clamping and numeric coercion shared by the scorers and the AI response parsers."""

import math
from typing import Any, Optional, Tuple

# Defaults substituted for missing persisted RICE inputs
DEFAULT_REACH = 50
DEFAULT_IMPACT = 1
DEFAULT_CONFIDENCE = 70
DEFAULT_EFFORT = 1


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def coerce_number(value: Any) -> Optional[float]:
    """Return ``value`` as a finite float, or None when it is missing or not numeric.

    Numeric strings are accepted since LLM responses often quote numbers.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().rstrip("%")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def number_or_default(value: Any, default: float) -> float:
    number = coerce_number(value)
    return default if number is None else number


def bounded(value: Any, default: float, low: float, high: float) -> float:
    """Coerce ``value`` (falling back to ``default``) and clamp it to [low, high]."""
    return clamp(number_or_default(value, default), low, high)


def normalize_rice_inputs(
    reach: Any,
    impact: Any,
    confidence: Any,
    effort: Any,
) -> Tuple[float, int, float, int]:
    """Normalize persisted-scale RICE inputs.

    reach and confidence land in [0, 100]; impact and effort are rounded and
    land in [1, 3]. Missing or non-numeric values take the module defaults.
    """
    return (
        bounded(reach, DEFAULT_REACH, 0, 100),
        int(clamp(round_half_up(number_or_default(impact, DEFAULT_IMPACT)), 1, 3)),
        bounded(confidence, DEFAULT_CONFIDENCE, 0, 100),
        int(clamp(round_half_up(number_or_default(effort, DEFAULT_EFFORT)), 1, 3)),
    )
