# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, NamedTuple

import numpy as np

from .enums import CompoundingMode, DueTiming, TvmVariable
from .errors import DomainError, InvalidInputError, TvmWarning
from .rounding import MONEY_DECIMALS, format_money, format_rate, round_to_fraction_of_cent
from .validation import check_finite, check_rate, checked_exp, report

if TYPE_CHECKING:
    from .solution import TvmSolution

__version__ = "0.1.0"


# =============================================================================
# Period-by-period schedules
# =============================================================================
#
# A schedule expands a solved TVM problem into one row per period:
#
#   period 0        the present value exactly as given (never rounded)
#   period k >= 1   value[k-1] carried forward one period, rounded to 4 dp
#
# Growth schedules (fv, pv, periods, rate solutions):
#
#   value[k] = round(value[k-1] * (1 + r))      discrete
#   value[k] = round(value[k-1] * e^r)          continuous
#
# Payment schedules (payment solutions), starting from the loan balance:
#
#   ordinary:  interest[k] = round(value[k-1] * r)
#              value[k]    = round(value[k-1] + interest[k] + pmt)
#   due:       interest[k] = round((value[k-1] + pmt) * r)
#              value[k]    = round(value[k-1] + pmt + interest[k])
#
# By the fundamental identity the last balance is -fv (zero for a fully
# amortized loan), up to the rounding carried period to period.
#
# The number of rows is ceil(periods) + 1. A periods solution may end partway
# through its last period, so its last row holds the solved future value
# instead of one more full compounding step.
# =============================================================================

class SchedulePeriod(NamedTuple):
    """One row of a Schedule. payment and interest are None for growth schedules."""
    period: int
    periodic_rate: float
    value: float
    payment: float | None = None
    interest: float | None = None


@dataclass(frozen=True, eq=False)
class Schedule:
    """
    Period-by-period expansion of a TVM problem.

    All columns are read-only numpy arrays of equal length; period 0 is the
    starting state. periodic_rate[k] is the rate applied to reach period k
    (0.0 for period 0).

    Iterating yields SchedulePeriod rows. Every call to schedule_for() or
    TvmSolution.schedule() builds a new Schedule, so iteration can be
    restarted freely.
    """
    period: np.ndarray
    periodic_rate: np.ndarray
    value: np.ndarray
    payment: np.ndarray | None = None
    interest: np.ndarray | None = None

    def __post_init__(self) -> None:
        for column in (self.period, self.periodic_rate, self.value, self.payment, self.interest):
            if column is not None:
                column.setflags(write=False)

    def __len__(self) -> int:
        return len(self.period)

    def __getitem__(self, index: int) -> SchedulePeriod:
        return SchedulePeriod(
            period=int(self.period[index]),
            periodic_rate=float(self.periodic_rate[index]),
            value=float(self.value[index]),
            payment=None if self.payment is None else float(self.payment[index]),
            interest=None if self.interest is None else float(self.interest[index]),
        )

    def __iter__(self) -> Iterator[SchedulePeriod]:
        for index in range(len(self)):
            yield self[index]

    @property
    def has_payments(self) -> bool:
        return self.payment is not None

    @property
    def final_value(self) -> float:
        return float(self.value[-1])


# =============================================================================
# Builders
# =============================================================================

def _growth_schedule(
        present_value: float,
        rate: float,
        whole_periods: int,
        compounding: CompoundingMode,
        final_value: float | None = None
) -> Schedule:
    length = whole_periods + 1
    period = np.arange(length)
    periodic_rate = np.zeros(length)
    value = np.zeros(length)

    step = checked_exp(rate) if compounding is CompoundingMode.CONTINUOUS else 1.0 + rate
    value[0] = present_value
    for i in range(1, length):
        periodic_rate[i] = rate
        value[i] = round_to_fraction_of_cent(value[i - 1] * step)
    if final_value is not None and length > 1:
        value[-1] = final_value

    return Schedule(period=period, periodic_rate=periodic_rate, value=value)


def _payment_schedule(
        present_value: float,
        rate: float,
        payment: float,
        whole_periods: int,
        due: DueTiming,
        compounding: CompoundingMode
) -> Schedule:
    length = whole_periods + 1
    period = np.arange(length)
    periodic_rate = np.zeros(length)
    value = np.zeros(length)
    payments = np.zeros(length)
    interest = np.zeros(length)

    # Interest accrues at the effective periodic rate
    if compounding is CompoundingMode.CONTINUOUS:
        checked_exp(rate)
        p = math.expm1(rate)
    else:
        p = rate

    value[0] = present_value
    for i in range(1, length):
        periodic_rate[i] = rate
        payments[i] = payment
        if due is DueTiming.DUE:
            interest[i] = round_to_fraction_of_cent((value[i - 1] + payment) * p)
            value[i] = round_to_fraction_of_cent(value[i - 1] + payment + interest[i])
        else:
            interest[i] = round_to_fraction_of_cent(value[i - 1] * p)
            value[i] = round_to_fraction_of_cent(value[i - 1] + interest[i] + payment)

    return Schedule(
        period=period,
        periodic_rate=periodic_rate,
        value=value,
        payment=payments,
        interest=interest,
    )


def schedule_for(solution: TvmSolution) -> Schedule:
    """
    Build the period-by-period schedule of a solved TVM problem.

    Payment solutions (and any solution carrying a nonzero payment) produce
    an amortization schedule with payment and interest columns; every other
    solution produces a growth schedule from present_value.

    Args:
        solution: A TvmSolution from solution_for() or one of its wrappers

    Returns:
        A new Schedule with solution.whole_periods + 1 rows

    Example:
        >>> from tvm_formulas.solution import periods_solution
        >>> s = periods_solution(0.035, 100_000, 200_000).schedule()
        >>> len(s), s.final_value
        (22, 200000.0)
    """
    whole_periods = solution.whole_periods
    if solution.calculated_field is TvmVariable.PAYMENT or solution.payment != 0.0:
        return _payment_schedule(
            solution.present_value,
            solution.rate,
            solution.payment,
            whole_periods,
            solution.due,
            solution.compounding,
        )
    # A solved period count may end partway through the last period
    final_value = solution.future_value if solution.calculated_field is TvmVariable.PERIODS else None
    return _growth_schedule(
        solution.present_value,
        solution.rate,
        whole_periods,
        solution.compounding,
        final_value,
    )


def future_value_schedule(
        rates: list[float] | np.ndarray,
        present_value: float,
        diagnostics: list[TvmWarning] | None = None
) -> Schedule:
    """
    Grow present_value through a different discrete rate each period.

    rates[k-1] is applied to reach period k, so the schedule has
    len(rates) + 1 rows and final_value is the future value.

    Raises:
        InvalidInputError: If present_value or any rate is NaN/Inf
        DomainError: If any rate < -1

    Example:
        >>> s = future_value_schedule([0.10, 0.05], 1000)
        >>> list(s.value)
        [1000.0, 1100.0, 1155.0]
    """
    present_value = check_finite(present_value, "present_value")
    found: list[TvmWarning] = []
    checked: list[float] = []
    for k, r in enumerate(np.asarray(rates, dtype=float).ravel(), start=1):
        r, more = check_rate(r, f"rates[{k - 1}]")
        if r < -1.0:
            raise DomainError(f"rate for period {k} must be at least -1.0 (-100%), got {r}")
        found.extend(more)
        checked.append(r)
    report(found, diagnostics)

    length = len(checked) + 1
    period = np.arange(length)
    periodic_rate = np.zeros(length)
    value = np.zeros(length)
    value[0] = present_value
    for i in range(1, length):
        periodic_rate[i] = checked[i - 1]
        value[i] = round_to_fraction_of_cent(value[i - 1] * (1.0 + checked[i - 1]))

    return Schedule(period=period, periodic_rate=periodic_rate, value=value)


# =============================================================================
# Rendering
# =============================================================================

def render_schedule(schedule: Schedule, decimals: int = MONEY_DECIMALS) -> str:
    """
    Render a schedule as a fixed-width text table.

    Money columns use `decimals` places, rates are shown as percentages.
    Non-finite values appear as NaN, inf or -inf.

    Example:
        >>> print(render_schedule(future_value_schedule([0.10], 1000), decimals=2))
        period        rate           value
             0     0.0000%         1000.00
             1    10.0000%         1100.00
    """
    if decimals < 0:
        raise InvalidInputError(f"decimals must be non-negative, got {decimals}")
    headers = ["period", "rate", "value"]
    if schedule.has_payments:
        headers += ["payment", "interest"]
    lines = [f"{headers[0]:>6}" + "".join(f"{h:>{_column_width(h)}}" for h in headers[1:])]
    for row in schedule:
        cells = [f"{row.period:>6}", f"{format_rate(row.periodic_rate):>12}",
                 f"{format_money(row.value, decimals):>16}"]
        if schedule.has_payments:
            cells.append(f"{format_money(row.payment, decimals):>16}")
            cells.append(f"{format_money(row.interest, decimals):>16}")
        lines.append("".join(cells))
    return "\n".join(lines)


def _column_width(header: str) -> int:
    return 12 if header == "rate" else 16
