# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
"""
Rounding and display helpers for money amounts and rates.

Rounding is half away from zero, the way currency figures are usually
reconciled by hand (Python's round() rounds half to even).
"""
from __future__ import annotations

import math

__version__ = "0.1.0"

MONEY_DECIMALS: int = 4
RATE_DECIMALS: int = 4


def round_half_away(value: float, decimals: int) -> float:
    """Round to `decimals` places, halfway cases away from zero. NaN/Inf pass through."""
    if not math.isfinite(value):
        return value
    scale = 10.0 ** decimals
    return math.copysign(math.floor(abs(value) * scale + 0.5), value) / scale


def round_to_fraction_of_cent(value: float) -> float:
    """Round to four decimal places (the nearest 1/10,000th part)."""
    return round_half_away(value, 4)


def round_to_cent(value: float) -> float:
    """Round to two decimal places (the nearest 1/100th part)."""
    return round_half_away(value, 2)


def _non_finite_text(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    return "inf" if value > 0 else "-inf"


def format_money(value: float, decimals: int = MONEY_DECIMALS) -> str:
    """
    Format an amount with a fixed number of decimals.

    >>> format_money(3700.6107)
    '3700.6107'
    >>> format_money(float("nan"))
    'NaN'
    """
    if not math.isfinite(value):
        return _non_finite_text(value)
    return f"{value:.{decimals}f}"


def format_rate(rate: float, decimals: int = RATE_DECIMALS) -> str:
    """
    Format a fractional rate as a percentage.

    >>> format_rate(0.0825)
    '8.2500%'
    """
    if not math.isfinite(rate):
        return _non_finite_text(rate)
    return f"{rate * 100.0:.{decimals}f}%"
