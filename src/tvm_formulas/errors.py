# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
"""
Exceptions and warning categories raised by the TVM engine.

Hierarchy:

    TvmError(ValueError)
      DomainError                 mathematically undefined for the inputs
        InvalidInputError         input outside the documented domain
      NotSupportedError           argument combination an adapter cannot map

    TvmWarning(UserWarning)
      RateMagnitudeWarning        |rate| > 1, likely a percent/fraction mix-up
      CompoundingFrequencyWarning more compounding periods than days in a year

InvalidInputError derives from DomainError: an input outside a function's
domain is the simplest case of an undefined operation, so callers that only
catch DomainError still see every failure.
"""
from __future__ import annotations

__version__ = "0.1.0"


# =============================================================================
# ERRORS
# =============================================================================

class TvmError(ValueError):
    """Base class for every failure raised by tvm_formulas."""


class DomainError(TvmError):
    """
    The operation is mathematically undefined for the given inputs.

    Examples: rate <= -1 feeding a power formula, rate == 0 feeding a formula
    with the rate in a denominator, present and future values of opposite sign
    feeding a logarithm, or a growth factor that overflows a double.
    """


class InvalidInputError(DomainError):
    """
    An input is outside the documented domain of the function.

    Examples: NaN or infinite rate, zero or negative periods where a positive
    count is required, zero compounding frequency, missing solver input.
    """


class NotSupportedError(TvmError, NotImplementedError):
    """An adapter was called with an argument combination it does not map."""


# =============================================================================
# WARNINGS
# =============================================================================

class TvmWarning(UserWarning):
    """Non-fatal diagnostic attached to an otherwise valid result."""


class RateMagnitudeWarning(TvmWarning):
    """A rate above 100% per period, usually 5 passed instead of 0.05."""


class CompoundingFrequencyWarning(TvmWarning):
    """More compounding periods per year than there are days in a year."""
