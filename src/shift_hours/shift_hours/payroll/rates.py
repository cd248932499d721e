"""Rate multiplier labelling and validation."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

from ..core.constants import DEFAULT_RATE_VALID_UPPER_BOUND, RATE_MATCH_TOLERANCE

# Checked in order; first match within tolerance wins.
RATE_LABELS: tuple[tuple[float, str], ...] = (
    (1.0, "Regular"),
    (1.3, "Overtime (Bracket)"),
    (1.5, "Extra"),
    (2.0, "Bank Holiday"),
)


def format_multiplier(multiplier: float) -> str:
    """``1.75 -> "1.8x"`` (one decimal, half-up)."""
    if not math.isfinite(multiplier):
        return f"{multiplier}x"
    rounded = Decimal(str(multiplier)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{rounded}x"


def known_label(multiplier: float):
    for value, label in RATE_LABELS:
        if abs(multiplier - value) <= RATE_MATCH_TOLERANCE:
            return label
    return None


def rate_label(multiplier: float) -> str:
    return known_label(multiplier) or format_multiplier(multiplier)


def is_valid_rate(multiplier: float, upper_bound: float = DEFAULT_RATE_VALID_UPPER_BOUND) -> bool:
    if multiplier is None or math.isnan(multiplier):
        return False
    return 0 < multiplier <= upper_bound
