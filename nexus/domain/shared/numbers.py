"""Numeric helpers shared by progress and percentage calculations."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Progress and budget percentages are shown as whole numbers and must
    round 12.5 up to 13 rather than to the nearest even integer.
    """
    return math.floor(value + 0.5)


def percent(part: float, whole: float) -> float:
    """Return part as a percentage of whole, or 0.0 when whole is not positive."""
    if whole <= 0:
        return 0.0
    return part / whole * 100
