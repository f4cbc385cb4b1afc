# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

import numpy as np

from . import equations as tvm_eq
from .enums import CompoundingMode, DueTiming, TvmVariable
from .errors import InvalidInputError, TvmWarning
from .rounding import format_money, format_rate
from .schedule import Schedule, schedule_for
from .validation import check_periods

__version__ = "0.1.0"


# =============================================================================
# Formula templates
# =============================================================================
#
# Each template names the variables as {r}, {n}, {pv}, {fv} and {pmt}. The
# symbolic formula fills them with the symbols themselves; the concrete
# formula fills them with the values, each to 4 decimal places (negative
# values are parenthesised).
# =============================================================================

SYMBOLS: dict[str, str] = {"r": "r", "n": "n", "pv": "pv", "fv": "fv", "pmt": "pmt"}

_GROWTH_TEMPLATES: dict[tuple[TvmVariable, CompoundingMode], str] = {
    (TvmVariable.FUTURE_VALUE, CompoundingMode.DISCRETE): "{fv} = {pv} * (1 + {r})^{n}",
    (TvmVariable.FUTURE_VALUE, CompoundingMode.CONTINUOUS): "{fv} = {pv} * e^({r} * {n})",
    (TvmVariable.PRESENT_VALUE, CompoundingMode.DISCRETE): "{pv} = {fv} / (1 + {r})^{n}",
    (TvmVariable.PRESENT_VALUE, CompoundingMode.CONTINUOUS): "{pv} = {fv} / e^({r} * {n})",
    (TvmVariable.PERIODS, CompoundingMode.DISCRETE): "{n} = ln({fv} / {pv}) / ln(1 + {r})",
    (TvmVariable.PERIODS, CompoundingMode.CONTINUOUS): "{n} = ln({fv} / {pv}) / {r}",
    (TvmVariable.RATE, CompoundingMode.DISCRETE): "{r} = ({fv} / {pv})^(1 / {n}) - 1",
    (TvmVariable.RATE, CompoundingMode.CONTINUOUS): "{r} = ln({fv} / {pv}) / {n}",
}

_PAYMENT_TEMPLATES: dict[tuple[DueTiming, CompoundingMode], str] = {
    (DueTiming.ORDINARY, CompoundingMode.DISCRETE):
        "{pmt} = -({pv} * (1 + {r})^{n} + {fv}) * {r} / ((1 + {r})^{n} - 1)",
    (DueTiming.DUE, CompoundingMode.DISCRETE):
        "{pmt} = -({pv} * (1 + {r})^{n} + {fv}) * {r} / (((1 + {r})^{n} - 1) * (1 + {r}))",
    (DueTiming.ORDINARY, CompoundingMode.CONTINUOUS):
        "{pmt} = -({pv} * e^({r} * {n}) + {fv}) * (e^{r} - 1) / (e^({r} * {n}) - 1)",
    (DueTiming.DUE, CompoundingMode.CONTINUOUS):
        "{pmt} = -({pv} * e^({r} * {n}) + {fv}) * (e^{r} - 1) / ((e^({r} * {n}) - 1) * e^{r})",
}

_ZERO_RATE_PAYMENT_TEMPLATE = "{pmt} = -({pv} + {fv}) / {n}"
_ZERO_RATE_PERIODS_TEMPLATE = "{n} = 0"


def _concrete(value: float) -> str:
    text = format_money(value, 4)
    return f"({text})" if value < 0 else text


# =============================================================================
# Compounding scenarios
# =============================================================================

@dataclass(frozen=True, eq=False)
class PeriodScenarios:
    """
    The same growth solved for several compounding counts.

    periods[i] is a compounding count (inf for continuous compounding) and
    values[i] the present or future value it produces. Iterating yields
    (periods, value) pairs.
    """
    setup: str
    output_variable: TvmVariable
    periods: np.ndarray
    values: np.ndarray

    def __post_init__(self) -> None:
        self.periods.setflags(write=False)
        self.values.setflags(write=False)

    def __len__(self) -> int:
        return len(self.periods)

    def __iter__(self) -> Iterator[tuple[float, float]]:
        for n, value in zip(self.periods, self.values):
            yield float(n), float(value)

    def render(self, decimals: int = 4) -> str:
        """Fixed-width table of compounding count against value."""
        name = self.output_variable.value
        lines = [f"{'periods':>7}{name:>16}"]
        for n, value in self:
            label = str(int(n)) if n.is_integer() else f"{n:g}"
            lines.append(f"{label:>7}{format_money(value, decimals):>16}")
        return "\n".join(lines)


# =============================================================================
# Solution record
# =============================================================================

@dataclass(frozen=True)
class TvmSolution:
    """
    A solved TVM problem: every input, the computed variable and its formulas.

    calculated_field names which of rate / periods / present_value /
    future_value / payment was computed; the others echo the inputs. rate is
    the periodic rate as a fraction. payment is 0.0 for growth solutions.

    Example:
        >>> s = future_value_solution(0.034, 10, 1000)
        >>> round(s.value, 4)
        1397.0289
        >>> s.symbolic_formula
        'fv = pv * (1 + r)^n'
        >>> s.concrete_formula
        '1397.0289 = 1000.0000 * (1 + 0.0340)^10.0000'
    """
    calculated_field: TvmVariable
    compounding: CompoundingMode
    rate: float
    periods: float
    present_value: float
    future_value: float
    symbolic_formula: str
    concrete_formula: str
    payment: float = 0.0
    due: DueTiming = DueTiming.ORDINARY
    warnings: tuple[TvmWarning, ...] = ()

    @property
    def value(self) -> float:
        """The computed variable."""
        return getattr(self, self.calculated_field.value)

    @property
    def continuous(self) -> bool:
        return self.compounding is CompoundingMode.CONTINUOUS

    @property
    def whole_periods(self) -> int:
        """Periods rounded up to a whole number (16.06 periods -> 17)."""
        # Drop floating-point noise so that 2.0000000000000004 stays 2
        return math.ceil(round(self.periods, 9))

    @property
    def sum_of_payments(self) -> float:
        return self.payment * self.periods

    @property
    def sum_of_interest(self) -> float:
        """
        Total interest over the life of a payment solution.

        With pv negative (money lent) and payments positive, interest is what
        the payments return beyond the principal and the remaining balance.
        """
        return self.sum_of_payments + self.present_value + self.future_value

    def schedule(self) -> Schedule:
        """Build a fresh period-by-period Schedule (see schedule.schedule_for)."""
        return schedule_for(self)

    def solve_for(
            self,
            variable: TvmVariable,
            compounding: CompoundingMode | None = None,
            compounding_periods: float | None = None
    ) -> TvmSolution:
        """
        Re-solve the same problem for a different variable.

        Growth solutions (rate, periods, present_value, future_value) re-solve
        for another growth variable; payment solutions re-solve for a payment.
        The two keep pv and fv under different sign conventions, so crossing
        between them is refused.

        Args:
            variable: Which variable to compute
            compounding: Switch to DISCRETE or CONTINUOUS (default: keep)
            compounding_periods: Spread the same overall growth across this
                many periods. The periodic rate becomes rate * periods /
                compounding_periods. Not accepted when solving for periods;
                when solving for a rate it simply replaces the period count.

        Raises:
            InvalidInputError: If variable crosses between growth and payment
                solutions, compounding_periods is not positive, or it is given
                when solving for periods

        Example:
            Compounding quarterly instead of annually for 12 years at 10%:

            >>> annual = future_value_solution(0.10, 12, 10_000)
            >>> round(annual.future_value, 2)
            31384.28
            >>> quarterly = annual.solve_for(TvmVariable.FUTURE_VALUE, compounding_periods=48)
            >>> round(quarterly.rate, 4), round(quarterly.future_value, 2)
            (0.025, 32714.9)
        """
        if not isinstance(variable, TvmVariable):
            raise InvalidInputError(f"variable must be a TvmVariable, got {variable!r}")
        is_payment = self.calculated_field is TvmVariable.PAYMENT
        if is_payment != (variable is TvmVariable.PAYMENT):
            raise InvalidInputError(
                f"cannot re-solve a {self.calculated_field.value} solution for {variable.value}: "
                f"payment solutions and growth solutions sign pv and fv differently"
            )
        if compounding is None:
            compounding = self.compounding

        rate = self.rate
        periods = self.periods
        if compounding_periods is not None:
            if variable is TvmVariable.PERIODS:
                raise InvalidInputError("compounding_periods cannot be given when solving for periods")
            compounding_periods = check_periods(compounding_periods, name="compounding_periods")
            if compounding_periods == 0.0:
                raise InvalidInputError("compounding_periods must be greater than zero")
            if variable is not TvmVariable.RATE:
                rate = rate * periods / compounding_periods
            periods = compounding_periods

        return solution_for(
            variable,
            rate=rate,
            periods=periods,
            present_value=self.present_value,
            future_value=self.future_value,
            compounding=compounding,
            due=self.due,
        )

    def future_value_vary_periods(
            self,
            compounding_periods: list[float],
            include_continuous: bool = False
    ) -> PeriodScenarios:
        """
        What-if future values of present_value for several compounding counts.

        The overall rate (rate * periods) is spread evenly across each count
        in compounding_periods. With include_continuous a last scenario with
        continuous compounding is added, its period count shown as inf.

        Example:
            5% a quarter for a year, compounded 1, 4, 12, 52 and 365 times:

            >>> s = future_value_solution(0.05, 4, 100)
            >>> print(s.future_value_vary_periods([1, 4, 12, 52, 365], True).render())
            periods    future_value
                  1        120.0000
                  4        121.5506
                 12        121.9391
                 52        122.0934
                365        122.1336
                inf        122.1403
        """
        return self._vary_periods(TvmVariable.FUTURE_VALUE, compounding_periods, include_continuous)

    def present_value_vary_periods(
            self,
            compounding_periods: list[float],
            include_continuous: bool = False
    ) -> PeriodScenarios:
        """What-if present values of future_value; see future_value_vary_periods."""
        return self._vary_periods(TvmVariable.PRESENT_VALUE, compounding_periods, include_continuous)

    def _vary_periods(
            self,
            output: TvmVariable,
            compounding_periods: list[float],
            include_continuous: bool
    ) -> PeriodScenarios:
        if self.calculated_field is TvmVariable.PAYMENT:
            raise InvalidInputError("compounding scenarios apply to growth solutions only")
        overall_rate = self.rate * self.periods
        if output is TvmVariable.FUTURE_VALUE:
            solve, start, start_name = tvm_eq.future_value, self.present_value, "present value"
        else:
            solve, start, start_name = tvm_eq.present_value, self.future_value, "future value"

        counts: list[float] = []
        values: list[float] = []
        for n in compounding_periods:
            n = check_periods(n, name="compounding_periods")
            if n == 0.0:
                raise InvalidInputError("compounding_periods must be greater than zero")
            counts.append(n)
            values.append(solve(overall_rate / n, n, start, self.compounding, diagnostics=[]))
        if include_continuous:
            counts.append(math.inf)
            values.append(solve(overall_rate, 1.0, start, CompoundingMode.CONTINUOUS, diagnostics=[]))

        return PeriodScenarios(
            setup=(
                f"Compare {output.value.replace('_', ' ')}s with different compounding periods "
                f"where the rate is {format_rate(overall_rate)} and the {start_name} is {format_money(start)}."
            ),
            output_variable=output,
            periods=np.array(counts),
            values=np.array(values),
        )


# =============================================================================
# Dispatch
# =============================================================================

_REQUIRED_INPUTS: dict[TvmVariable, tuple[str, ...]] = {
    TvmVariable.FUTURE_VALUE: ("rate", "periods", "present_value"),
    TvmVariable.PRESENT_VALUE: ("rate", "periods", "future_value"),
    TvmVariable.PERIODS: ("rate", "present_value", "future_value"),
    TvmVariable.RATE: ("periods", "present_value", "future_value"),
    TvmVariable.PAYMENT: ("rate", "periods", "present_value", "future_value"),
}


def solution_for(
        variable: TvmVariable,
        rate: float | None = None,
        periods: float | None = None,
        present_value: float | None = None,
        future_value: float | None = None,
        compounding: CompoundingMode = CompoundingMode.DISCRETE,
        due: DueTiming = DueTiming.ORDINARY
) -> TvmSolution:
    """
    Solve for one TVM variable and record how it was computed.

    The slot of the variable being solved may be None (it is ignored if
    given); every other input that variable needs must be supplied.

    Args:
        variable: Which variable to compute
        rate: Periodic rate as a fraction
        periods: Number of periods
        present_value: Present value (loan balance for a payment solve)
        future_value: Future value (remaining balance for a payment solve)
        compounding: DISCRETE or CONTINUOUS
        due: ORDINARY or DUE, used by payment solves

    Returns:
        TvmSolution with value, formulas and any warnings raised on the way

    Raises:
        InvalidInputError: If a required input is missing or invalid
        DomainError: If the variable is undefined for the inputs

    Example:
        >>> s = solution_for(TvmVariable.PERIODS, rate=-0.06, present_value=15_000, future_value=12_000)
        >>> round(s.periods, 2), s.whole_periods
        (3.61, 4)
    """
    if not isinstance(variable, TvmVariable):
        raise InvalidInputError(f"variable must be a TvmVariable, got {variable!r}")
    inputs = {
        "rate": rate,
        "periods": periods,
        "present_value": present_value,
        "future_value": future_value,
    }
    missing = [name for name in _REQUIRED_INPUTS[variable] if inputs[name] is None]
    if missing:
        raise InvalidInputError(f"solving for {variable.value} requires {', '.join(missing)}")

    found: list[TvmWarning] = []
    payment = 0.0
    template = None

    if variable is TvmVariable.FUTURE_VALUE:
        future_value = tvm_eq.future_value(rate, periods, present_value, compounding, found)
    elif variable is TvmVariable.PRESENT_VALUE:
        present_value = tvm_eq.present_value(rate, periods, future_value, compounding, found)
    elif variable is TvmVariable.PERIODS:
        if rate == 0.0 and present_value == future_value:
            periods = 0.0
            template = _ZERO_RATE_PERIODS_TEMPLATE
        else:
            periods = tvm_eq.periods(rate, present_value, future_value, compounding, found)
    elif variable is TvmVariable.RATE:
        rate = tvm_eq.rate(periods, present_value, future_value, compounding, found)
    else:
        payment = tvm_eq.payment(rate, periods, present_value, future_value, due, compounding, found)
        if rate == 0.0:
            template = _ZERO_RATE_PAYMENT_TEMPLATE
        else:
            template = _PAYMENT_TEMPLATES[(due, compounding)]

    if template is None:
        template = _GROWTH_TEMPLATES[(variable, compounding)]

    values = {
        "r": float(rate),
        "n": float(periods),
        "pv": float(present_value),
        "fv": float(future_value),
        "pmt": float(payment),
    }
    return TvmSolution(
        calculated_field=variable,
        compounding=compounding,
        rate=values["r"],
        periods=values["n"],
        present_value=values["pv"],
        future_value=values["fv"],
        symbolic_formula=template.format(**SYMBOLS),
        concrete_formula=template.format(**{k: _concrete(v) for k, v in values.items()}),
        payment=values["pmt"],
        due=due,
        warnings=tuple(found),
    )


# =============================================================================
# Convenience entry points
# =============================================================================

def future_value_solution(
        rate: float,
        periods: float,
        present_value: float,
        compounding: CompoundingMode = CompoundingMode.DISCRETE
) -> TvmSolution:
    """
    Example:
        >>> round(future_value_solution(0.035, 12, 1000, CompoundingMode.CONTINUOUS).value, 4)
        1521.9616
    """
    return solution_for(
        TvmVariable.FUTURE_VALUE, rate=rate, periods=periods,
        present_value=present_value, compounding=compounding,
    )


def present_value_solution(
        rate: float,
        periods: float,
        future_value: float,
        compounding: CompoundingMode = CompoundingMode.DISCRETE
) -> TvmSolution:
    return solution_for(
        TvmVariable.PRESENT_VALUE, rate=rate, periods=periods,
        future_value=future_value, compounding=compounding,
    )


def periods_solution(
        rate: float,
        present_value: float,
        future_value: float,
        compounding: CompoundingMode = CompoundingMode.DISCRETE
) -> TvmSolution:
    return solution_for(
        TvmVariable.PERIODS, rate=rate, present_value=present_value,
        future_value=future_value, compounding=compounding,
    )


def rate_solution(
        periods: float,
        present_value: float,
        future_value: float,
        compounding: CompoundingMode = CompoundingMode.DISCRETE
) -> TvmSolution:
    return solution_for(
        TvmVariable.RATE, periods=periods, present_value=present_value,
        future_value=future_value, compounding=compounding,
    )


def payment_solution(
        rate: float,
        periods: float,
        present_value: float,
        future_value: float = 0.0,
        due: DueTiming = DueTiming.ORDINARY,
        compounding: CompoundingMode = CompoundingMode.DISCRETE
) -> TvmSolution:
    """
    Level payment that amortizes present_value down to -future_value.

    Example:
        A $12,500.50 loan made (pv negative) at 11.75% APR over 48 months:

        >>> s = payment_solution(0.1175 / 12, 48, -12_500.50)
        >>> round(s.payment, 4), round(s.sum_of_interest, 4)
        (327.6538, 3226.882)
    """
    return solution_for(
        TvmVariable.PAYMENT, rate=rate, periods=periods,
        present_value=present_value, future_value=future_value,
        compounding=compounding, due=due,
    )
