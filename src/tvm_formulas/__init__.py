# Requires Python 3.12+
"""
TVM Formulas - Time value of money: growth, discounting, annuities and loans.

Rates are signed fractions per period (0.05 = 5%). See equations.py for the
fundamental identity and the sign convention.
"""

from __future__ import annotations

__version__ = "0.1.0"

# Errors and diagnostics
from tvm_formulas.errors import (
    TvmError,
    DomainError,
    InvalidInputError,
    NotSupportedError,
    TvmWarning,
    RateMagnitudeWarning,
    CompoundingFrequencyWarning,
)

# Conventions
from tvm_formulas.enums import (
    TvmVariable,
    CompoundingMode,
    DueTiming,
)

# Rate conversion
from tvm_formulas.rates import (
    convert_apr_to_periodic,
    convert_periodic_to_apr,
    convert_apr_to_ear,
    convert_ear_to_apr,
    convert_periodic_to_ear,
    convert_ear_to_periodic,
    convert_apr_to_ear_continuous,
    convert_ear_to_apr_continuous,
    RateConversion,
    rate_conversion,
    rate_conversion_continuous,
)

# Equation core
from tvm_formulas.equations import (
    future_value,
    present_value,
    periods,
    rate,
    payment,
    payment_due,
    present_value_annuity,
    present_value_annuity_due,
    future_value_annuity,
    future_value_annuity_due,
    present_value_perpetuity_simple,
    present_value_perpetuity_general,
    net_present_value,
    net_present_value_schedule,
)

# Solutions and schedules
from tvm_formulas.schedule import (
    Schedule,
    SchedulePeriod,
    schedule_for,
    future_value_schedule,
    render_schedule,
)
from tvm_formulas.solution import (
    TvmSolution,
    PeriodScenarios,
    solution_for,
    future_value_solution,
    present_value_solution,
    periods_solution,
    rate_solution,
    payment_solution,
)

# Rounding and display
from tvm_formulas.rounding import (
    round_to_fraction_of_cent,
    round_to_cent,
    format_money,
    format_rate,
)

# Spreadsheet-style functions live in tvm_formulas.excel (fv, pv, pmt, ...)
from tvm_formulas import excel

__all__ = [
    "__version__",
    # Errors
    "TvmError",
    "DomainError",
    "InvalidInputError",
    "NotSupportedError",
    "TvmWarning",
    "RateMagnitudeWarning",
    "CompoundingFrequencyWarning",
    # Conventions
    "TvmVariable",
    "CompoundingMode",
    "DueTiming",
    # Rates
    "convert_apr_to_periodic",
    "convert_periodic_to_apr",
    "convert_apr_to_ear",
    "convert_ear_to_apr",
    "convert_periodic_to_ear",
    "convert_ear_to_periodic",
    "convert_apr_to_ear_continuous",
    "convert_ear_to_apr_continuous",
    "RateConversion",
    "rate_conversion",
    "rate_conversion_continuous",
    # Equations
    "future_value",
    "present_value",
    "periods",
    "rate",
    "payment",
    "payment_due",
    "present_value_annuity",
    "present_value_annuity_due",
    "future_value_annuity",
    "future_value_annuity_due",
    "present_value_perpetuity_simple",
    "present_value_perpetuity_general",
    "net_present_value",
    "net_present_value_schedule",
    # Schedules
    "Schedule",
    "SchedulePeriod",
    "schedule_for",
    "future_value_schedule",
    "render_schedule",
    # Solutions
    "TvmSolution",
    "PeriodScenarios",
    "solution_for",
    "future_value_solution",
    "present_value_solution",
    "periods_solution",
    "rate_solution",
    "payment_solution",
    # Rounding
    "round_to_fraction_of_cent",
    "round_to_cent",
    "format_money",
    "format_rate",
    # Spreadsheet functions
    "excel",
]
