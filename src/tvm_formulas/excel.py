# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
"""
Spreadsheet-style TVM functions: FV, PV, PMT, IPMT, NPER and RATE.

All six follow the spreadsheet sign convention, which is the fundamental
identity

    pv * (1+r)^n + pmt * (1 + r*when) * ((1+r)^n - 1) / r + fv = 0

so money paid out and money received carry opposite signs. `when` is 0 (or
"end") for payments at the end of each period and 1 (or "begin") for the
start; a DueTiming is accepted as well.

>>> round(pmt(0.08 / 12, 120, 25_000, when="begin"), 4)
-301.3103
"""
from __future__ import annotations

import math

import numpy as np
from scipy.optimize import brentq

from . import equations as tvm_eq
from .enums import DueTiming
from .errors import DomainError, InvalidInputError, NotSupportedError, TvmWarning
from .validation import check_finite, check_periods, check_rate, check_rate_above_minus_one, report

__version__ = "0.1.0"

# RATE() search interval, root tolerance and iteration cap for brentq
RATE_BRACKET: tuple[float, float] = (-0.99, 10.0)
RATE_TOLERANCE: float = 1e-12
RATE_MAX_ITERATIONS: int = 200

# Points sampled across RATE_BRACKET to find a sign change for brentq
_RATE_GRID_POINTS = 4001

_WHEN = {
    0: DueTiming.ORDINARY,
    1: DueTiming.DUE,
    "end": DueTiming.ORDINARY,
    "begin": DueTiming.DUE,
}


def _due_timing(when: int | str | DueTiming) -> DueTiming:
    """Map a spreadsheet `when` argument to a DueTiming."""
    if isinstance(when, DueTiming):
        return when
    key = when.lower() if isinstance(when, str) else when
    try:
        return _WHEN[key]
    except (KeyError, TypeError) as e:
        raise NotSupportedError(
            f"when must be 0, 1, 'end', 'begin' or a DueTiming, got {when!r}"
        ) from e


# =============================================================================
# FV / PV / PMT
# =============================================================================

def fv(
        rate: float,
        nper: float,
        pmt: float,
        pv: float = 0.0,
        when: int | str | DueTiming = 0,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    Future value after nper periods of payments and growth.

        fv = -(pv * (1+r)^n + pmt * (1 + r*when) * ((1+r)^n - 1) / r)

    Example:
        Saving $100 a month (paid out, so negative) for 10 years at 5% APR,
        starting from $100 already saved:

        >>> round(fv(0.05 / 12, 120, -100, -100), 2)
        15692.93
    """
    found: list[TvmWarning] = []
    result = _balance(rate, nper, pmt, pv, _due_timing(when), found)
    report(found, diagnostics)
    return result


def _balance(rate, nper, pmt, pv, due, found):
    grown = tvm_eq.future_value(rate, nper, pv, diagnostics=found)
    annuity = tvm_eq.future_value_annuity(pmt, rate, nper, due, diagnostics=[])
    return -(grown + annuity)


def pv(
        rate: float,
        nper: float,
        pmt: float,
        fv: float = 0.0,
        when: int | str | DueTiming = 0,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    Present value of a stream of payments and a final amount.

        pv = -(fv / (1+r)^n + pmt * (1 + r*when) * (1 - (1+r)^-n) / r)

    Example:
        >>> round(pv(0.05 / 12, 120, -100, 15692.93), 2)
        -100.0
    """
    due = _due_timing(when)
    found: list[TvmWarning] = []
    discounted = tvm_eq.present_value(rate, nper, fv, diagnostics=found)
    annuity = tvm_eq.present_value_annuity(pmt, rate, nper, due, diagnostics=[])
    report(found, diagnostics)
    return -(discounted + annuity)


def pmt(
        rate: float,
        nper: float,
        pv: float,
        fv: float = 0.0,
        when: int | str | DueTiming = 0,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    Level payment per period. Same as equations.payment().

    Example:
        >>> round(pmt(0.10 / 12, 60, 10_000), 4)
        -212.4704
    """
    return tvm_eq.payment(rate, nper, pv, fv, _due_timing(when), diagnostics=diagnostics)


def ipmt(
        rate: float,
        per: int,
        nper: float,
        pv: float,
        fv: float = 0.0,
        when: int | str | DueTiming = 0,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    Interest portion of payment number `per` (1-based).

    The balance before the payment is the future value of the loan after
    per - 1 periods; its interest for one period is the interest portion.
    When payments are at the start of the period the first payment carries
    no interest and later ones are discounted by one period.

    Raises:
        InvalidInputError: If per is not a whole number in 1..nper

    Example:
        First month's interest on a $10,000, 60-month loan at 10% APR:

        >>> round(ipmt(0.10 / 12, 1, 60, 10_000), 4)
        -83.3333
    """
    due = _due_timing(when)
    nper = check_periods(nper, minimum=1.0, name="nper")
    per = check_finite(per, "per")
    if per != int(per) or per < 1 or per > nper:
        raise InvalidInputError(f"per must be a whole number between 1 and {nper:g}, got {per:g}")

    found: list[TvmWarning] = []
    payment = pmt(rate, nper, pv, fv, due, diagnostics=found)
    report(found, diagnostics)
    if due is DueTiming.DUE and per == 1:
        return 0.0

    rate = float(rate)
    balance = _balance(rate, per - 1, payment, pv, due, [])
    interest = balance * rate
    if due is DueTiming.DUE:
        interest /= 1.0 + rate
    return interest


def ppmt(
        rate: float,
        per: int,
        nper: float,
        pv: float,
        fv: float = 0.0,
        when: int | str | DueTiming = 0,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    Principal portion of payment number `per`: pmt - ipmt.

    Example:
        >>> round(ppmt(0.10 / 12, 1, 60, 10_000), 4)
        -129.1371
    """
    found: list[TvmWarning] = []
    total = pmt(rate, nper, pv, fv, when, diagnostics=found)
    interest = ipmt(rate, per, nper, pv, fv, when, diagnostics=[])
    report(found, diagnostics)
    return total - interest


# =============================================================================
# NPER / RATE
# =============================================================================

def nper(
        rate: float,
        pmt: float,
        pv: float,
        fv: float = 0.0,
        when: int | str | DueTiming = 0,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    Number of periods for the identity to balance.

        z = pmt * (1 + r*when) / r
        n = ln((z - fv) / (z + pv)) / ln(1 + r)

    With a zero rate: n = -(pv + fv) / pmt. The result may be negative, as in
    a spreadsheet, when the cash flows balance only by running time backward.

    Raises:
        DomainError: If the logarithm is undefined (the payment never covers
            the interest) or rate == 0 and pmt == 0

    Example:
        >>> round(nper(0.07 / 12, -150, 8000), 4)
        64.0733
    """
    due = _due_timing(when)
    rate, found = check_rate(rate)
    pmt = check_finite(pmt, "pmt")
    pv = check_finite(pv, "pv")
    fv = check_finite(fv, "fv")
    check_rate_above_minus_one(rate)
    report(found, diagnostics)

    if rate == 0.0:
        if pmt == 0.0:
            raise DomainError("nper is undefined when both rate and pmt are zero")
        return -(pv + fv) / pmt

    z = pmt * (1.0 + rate * due.flag) / rate
    if z + pv == 0.0:
        raise DomainError("payment exactly offsets the interest on pv; nper is unbounded")
    ratio = (z - fv) / (z + pv)
    if ratio <= 0.0:
        raise DomainError(
            f"no number of periods balances pv={pv}, pmt={pmt}, fv={fv} at rate {rate}"
        )
    return math.log(ratio) / math.log1p(rate)


def _rate_residual(r: float, nper: float, pmt: float, pv: float, fv: float, when: int) -> float:
    """Left-hand side of the fundamental identity at rate r."""
    if abs(r) < 1e-12:
        return pv + pmt * nper + fv
    with np.errstate(over="ignore", invalid="ignore"):
        growth_minus_one = np.expm1(nper * np.log1p(r))
        return float(pv * (growth_minus_one + 1.0) + pmt * (1.0 + r * when) * growth_minus_one / r + fv)


def rate(
        nper: float,
        pmt: float,
        pv: float,
        fv: float = 0.0,
        when: int | str | DueTiming = 0,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    Periodic rate that balances the identity, found numerically.

    RATE_BRACKET is sampled for sign changes of the identity's residual and
    the change closest to zero is refined with scipy's brentq.

    Raises:
        InvalidInputError: If an input is NaN/Inf or nper <= 0
        DomainError: If no rate in RATE_BRACKET balances the identity, or
            brentq fails to converge

    Example:
        Depositing $11,000 a year for 23 years to reach $366,000:

        >>> round(rate(23, -11_000, 0, 366_000), 4)
        0.0321
    """
    due = _due_timing(when)
    nper = check_periods(nper, name="nper")
    if nper == 0.0:
        raise InvalidInputError("nper must be greater than zero to solve for a rate")
    pmt = check_finite(pmt, "pmt")
    pv = check_finite(pv, "pv")
    fv = check_finite(fv, "fv")

    flag = due.flag
    grid = np.linspace(RATE_BRACKET[0], RATE_BRACKET[1], _RATE_GRID_POINTS)
    residuals = np.array([_rate_residual(r, nper, pmt, pv, fv, flag) for r in grid])
    finite = np.isfinite(residuals)

    exact = np.flatnonzero(finite & (residuals == 0.0))
    crossings = np.flatnonzero(
        finite[:-1] & finite[1:] & (np.sign(residuals[:-1]) * np.sign(residuals[1:]) < 0)
    )
    if exact.size == 0 and crossings.size == 0:
        raise DomainError(
            f"no rate between {RATE_BRACKET[0]} and {RATE_BRACKET[1]} balances "
            f"nper={nper}, pmt={pmt}, pv={pv}, fv={fv}"
        )

    candidates: list[float] = [float(grid[i]) for i in exact]
    for i in crossings:
        try:
            root = brentq(
                _rate_residual, grid[i], grid[i + 1],
                args=(nper, pmt, pv, fv, flag),
                xtol=RATE_TOLERANCE, maxiter=RATE_MAX_ITERATIONS,
            )
        except (ValueError, RuntimeError) as e:
            raise DomainError(
                f"rate search failed between {grid[i]:.6f} and {grid[i + 1]:.6f}: {e}"
            ) from e
        candidates.append(float(root))

    result = min(candidates, key=abs)
    _, found = check_rate(result)
    report(found, diagnostics)
    return result
