# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
"""
Input-domain checks and non-fatal diagnostics.

Every check either returns (possibly with a list of TvmWarning records) or
raises InvalidInputError / DomainError. Nothing here writes to a global
logger: warnings are handed back to the caller, who decides where they go via
report().
"""
from __future__ import annotations

import math
import warnings

from .errors import (
    CompoundingFrequencyWarning,
    DomainError,
    InvalidInputError,
    RateMagnitudeWarning,
    TvmWarning,
)

__version__ = "0.1.0"

# =============================================================================
# Thresholds
# =============================================================================

# |rate| above this is computed but flagged (likely 5 passed for 5%)
RATE_WARNING_THRESHOLD: float = 1.0

# More compounding periods than days in a leap year is flagged
MAX_COMPOUNDS_PER_YEAR: int = 366


# =============================================================================
# Checks that raise
# =============================================================================

def check_finite(value: float, name: str) -> float:
    """
    Return value as a float, or raise InvalidInputError if it is NaN/Inf.

    Raises:
        InvalidInputError: If value is None, not a real number, NaN or infinite
    """
    if value is None:
        raise InvalidInputError(f"{name} is required")
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{name} must be a real number, got {value!r}") from e
    if not math.isfinite(value):
        raise InvalidInputError(f"{name} must be finite (not NaN or infinity), got {value}")
    return value


def check_rate(rate: float, name: str = "rate") -> tuple[float, list[TvmWarning]]:
    """
    Validate a rate and collect magnitude diagnostics.

    A rate whose magnitude exceeds RATE_WARNING_THRESHOLD is accepted; the
    returned warning list carries a RateMagnitudeWarning for it.

    Args:
        rate: Rate as a signed fraction (0.05 = 5%)
        name: Argument name used in messages

    Returns:
        Tuple of (rate as float, list of warnings)

    Raises:
        InvalidInputError: If rate is NaN or infinite
    """
    rate = check_finite(rate, name)
    found: list[TvmWarning] = []
    if abs(rate) > RATE_WARNING_THRESHOLD:
        found.append(RateMagnitudeWarning(
            f"{name} of {rate} is {rate * 100.0:g}% per period. "
            f"Are you sure you did not mean {rate / 100.0:g}?"
        ))
    return rate, found


def check_rate_above_minus_one(rate: float, name: str = "rate") -> None:
    """Raise DomainError unless (1 + rate) > 0."""
    if rate <= -1.0:
        raise DomainError(
            f"{name} must be greater than -1.0 (-100%) so that (1 + {name}) is positive, got {rate}"
        )


def check_periods(periods: float, minimum: float = 0.0, name: str = "periods") -> float:
    """
    Validate a period count.

    Args:
        periods: Number of periods (integer or fractional)
        minimum: Smallest accepted value (1 for payment-style solvers)
        name: Argument name used in messages

    Raises:
        InvalidInputError: If periods is NaN/Inf or below minimum
    """
    periods = check_finite(periods, name)
    if periods < minimum:
        raise InvalidInputError(f"{name} must be at least {minimum:g}, got {periods:g}")
    return periods


def check_compounds_per_year(
        compounds_per_year: int,
        name: str = "compounds_per_year"
) -> tuple[int, list[TvmWarning]]:
    """
    Validate a compounding frequency (a positive whole number).

    Raises:
        InvalidInputError: If the frequency is missing, fractional, zero or negative
    """
    if compounds_per_year is None:
        raise InvalidInputError(f"{name} is required")
    try:
        whole = int(compounds_per_year)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidInputError(f"{name} must be a whole number, got {compounds_per_year!r}") from e
    if isinstance(compounds_per_year, bool) or whole != compounds_per_year:
        raise InvalidInputError(f"{name} must be a whole number, got {compounds_per_year!r}")
    compounds_per_year = whole
    if compounds_per_year < 1:
        raise InvalidInputError(f"{name} must be at least 1, got {compounds_per_year}")
    found: list[TvmWarning] = []
    if compounds_per_year > MAX_COMPOUNDS_PER_YEAR:
        found.append(CompoundingFrequencyWarning(
            f"{name} of {compounds_per_year} is more than one per day. Are you sure?"
        ))
    return compounds_per_year, found


# =============================================================================
# Guarded arithmetic
# =============================================================================

def checked_power(base: float, exponent: float) -> float:
    """
    base ** exponent as a finite real, or DomainError.

    Python returns a complex number for a negative base with a fractional
    exponent and raises OverflowError past the double range; both are
    reported as DomainError.
    """
    if base < 0.0 and exponent != int(exponent):
        raise DomainError(
            f"({base}) ** {exponent} has no real value (negative base, fractional exponent)"
        )
    if base == 0.0 and exponent < 0.0:
        raise DomainError(f"0 ** {exponent} is undefined (division by zero)")
    try:
        result = base ** exponent
    except OverflowError as e:
        raise DomainError(f"({base}) ** {exponent} overflows a double") from e
    if not math.isfinite(result):
        raise DomainError(f"({base}) ** {exponent} is not finite")
    return result


def checked_exp(exponent: float) -> float:
    """math.exp(exponent), or DomainError when it overflows."""
    try:
        return math.exp(exponent)
    except OverflowError as e:
        raise DomainError(f"e ** {exponent} overflows a double") from e


# =============================================================================
# Diagnostics channel
# =============================================================================

def report(found: list[TvmWarning], diagnostics: list[TvmWarning] | None = None) -> None:
    """
    Deliver warnings to the caller's sink.

    When diagnostics is a list the warnings are appended to it and nothing
    else happens. Otherwise each one is issued with warnings.warn so the
    caller can filter or capture it with the standard warnings machinery.
    """
    if diagnostics is not None:
        diagnostics.extend(found)
        return
    for warning in found:
        warnings.warn(warning, stacklevel=3)
