"""Small numeric helpers shared by the rating and simulation layers."""

import math


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity.

    Python's round() uses banker's rounding; rating tables were tuned
    with half-up rounding, so every rating path goes through here.
    """
    return math.floor(value + 0.5)
