# Requires Python 3.12+
"""
Conventions shared by the equation core, schedules and solutions.
"""

from enum import Enum


class TvmVariable(Enum):
    """Which of the five TVM quantities a solver computed."""
    RATE = "rate"
    PERIODS = "periods"
    PRESENT_VALUE = "present_value"
    FUTURE_VALUE = "future_value"
    PAYMENT = "payment"


class CompoundingMode(Enum):
    """Discrete (1 + r)^n growth or continuous e^(r * n) growth."""
    DISCRETE = "discrete"
    CONTINUOUS = "continuous"


class DueTiming(Enum):
    """Payment at period end (ordinary) or period start (due)."""
    ORDINARY = "ordinary"
    DUE = "due"

    @property
    def flag(self) -> int:
        """0 for ordinary, 1 for due; the `type`/`when` argument of spreadsheet functions."""
        return 1 if self is DueTiming.DUE else 0
