# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

import math

import numpy as np

from .enums import CompoundingMode, DueTiming
from .errors import DomainError, InvalidInputError, TvmWarning
from .validation import (
    check_compounds_per_year,
    check_finite,
    check_periods,
    check_rate,
    check_rate_above_minus_one,
    checked_exp,
    checked_power,
    report,
)

__version__ = "0.1.0"

DISCRETE = CompoundingMode.DISCRETE
CONTINUOUS = CompoundingMode.CONTINUOUS
ORDINARY = DueTiming.ORDINARY
DUE = DueTiming.DUE


# =============================================================================
# THE FUNDAMENTAL TVM IDENTITY
# =============================================================================
#
# Every solver in this module is a rearrangement of:
#
#   pv * (1+r)^n  +  pmt * ((1+r)^n - 1)/r * (1 + r*due)  +  fv  =  0
#
# Where:
#   r    = periodic rate (0.05 = 5% per period)
#   n    = number of periods (may be fractional)
#   pv   = present value
#   pmt  = level payment each period
#   fv   = future value
#   due  = 1 if payments fall at the start of each period, else 0
#
# SIGN CONVENTION:
# ----------------
# In the identity an outflow and the inflow it produces carry opposite signs
# (lend 1000 today, pv = -1000; receive 1100 later, fv = +1100). payment()
# and the spreadsheet adapters in excel.py follow the identity as written.
#
# The single-sum growth solvers future_value(), present_value(), periods()
# and rate() describe one position observed at two dates, so pv and fv carry
# the SAME sign there:
#
#   fv = pv * (1+r)^n
#
# Annuity and perpetuity values carry the sign of the payment. No function
# flips the sign of its result.
#
# CONTINUOUS COMPOUNDING:
# -----------------------
# (1+r)^n is replaced by e^(r*n). Cash-flow formulas (payment, annuities)
# need a per-period rate as well; they use the effective periodic rate
#
#   p = e^r - 1        so that (1+p)^n = e^(r*n)
#
# and the due factor becomes (1+p) = e^r.
# =============================================================================

def _growth_factor(rate: float, periods: float, compounding: CompoundingMode) -> float:
    """(1+r)^n or e^(r*n), DomainError on overflow or a non-real result."""
    if compounding is CONTINUOUS:
        return checked_exp(rate * periods)
    return checked_power(1.0 + rate, periods)


def _growth_minus_one(rate: float, periods: float, compounding: CompoundingMode) -> float:
    """(1+r)^n - 1 without cancellation for small r. Requires r > -1 when discrete."""
    exponent = rate * periods if compounding is CONTINUOUS else periods * math.log1p(rate)
    try:
        return math.expm1(exponent)
    except OverflowError as e:
        raise DomainError(f"growth over {periods} periods at {rate} overflows a double") from e


def _effective_periodic_rate(rate: float, compounding: CompoundingMode) -> float:
    """Rate applied to each cash flow per period: r, or e^r - 1 when continuous."""
    if compounding is CONTINUOUS:
        checked_exp(rate)
        return math.expm1(rate)
    return rate


def _check_compounding(compounding: CompoundingMode) -> CompoundingMode:
    if not isinstance(compounding, CompoundingMode):
        raise InvalidInputError(f"compounding must be a CompoundingMode, got {compounding!r}")
    return compounding


def _check_due(due: DueTiming) -> DueTiming:
    if not isinstance(due, DueTiming):
        raise InvalidInputError(f"due must be a DueTiming, got {due!r}")
    return due


# =============================================================================
# SINGLE-SUM GROWTH: fv, pv, periods, rate
# =============================================================================

def future_value(
        rate: float,
        periods: float,
        present_value: float,
        compounding: CompoundingMode = DISCRETE,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    Value of an investment after growing (or shrinking) for a number of periods.

    Formula:
        fv = pv * (1 + r)^n          (discrete)
        fv = pv * e^(r * n)          (continuous)

    When periods is zero the present value is returned unchanged whatever
    the rate, including a NaN or infinite rate, since the exponent is zero.

    Args:
        rate: Periodic rate as a fraction (0.04 for 4% per period)
        periods: Number of periods, integer or fractional, >= 0
        present_value: Starting value
        compounding: DISCRETE or CONTINUOUS
        diagnostics: Optional list that receives warnings instead of warnings.warn

    Returns:
        Future value, same sign as present_value

    Raises:
        InvalidInputError: If present_value or rate is NaN/Inf, or periods < 0
        DomainError: If rate < -1 (discrete) or the growth overflows

    Example:
        >>> round(future_value(0.04, 10, 2500), 2)
        3700.61
    """
    compounding = _check_compounding(compounding)
    present_value = check_finite(present_value, "present_value")
    periods = check_periods(periods)
    if periods == 0.0:
        return present_value
    rate, found = check_rate(rate)
    if compounding is DISCRETE and rate < -1.0:
        raise DomainError(f"rate must be at least -1.0 (-100%), got {rate}")
    report(found, diagnostics)
    return present_value * _growth_factor(rate, periods, compounding)


def present_value(
        rate: float,
        periods: float,
        future_value: float,
        compounding: CompoundingMode = DISCRETE,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    Value today of an amount received after a number of periods.

    Formula:
        pv = fv / (1 + r)^n          (discrete)
        pv = fv / e^(r * n)          (continuous)

    Args:
        rate: Periodic rate as a fraction
        periods: Number of periods, >= 0
        future_value: Amount at the end of the last period
        compounding: DISCRETE or CONTINUOUS
        diagnostics: Optional list that receives warnings instead of warnings.warn

    Returns:
        Present value, same sign as future_value

    Raises:
        InvalidInputError: If future_value or rate is NaN/Inf, or periods < 0
        DomainError: If rate <= -1 (discrete), the base of the denominator is not positive

    Example:
        >>> round(present_value(0.14, 13, 140_000), 2)
        25489.71
    """
    compounding = _check_compounding(compounding)
    future_value = check_finite(future_value, "future_value")
    periods = check_periods(periods)
    if periods == 0.0:
        return future_value
    rate, found = check_rate(rate)
    if compounding is DISCRETE:
        check_rate_above_minus_one(rate)
    report(found, diagnostics)
    growth = _growth_factor(rate, periods, compounding)
    if growth == 0.0:
        raise DomainError(f"discount factor over {periods} periods at {rate} underflows to zero")
    return future_value / growth


def periods(
        rate: float,
        present_value: float,
        future_value: float,
        compounding: CompoundingMode = DISCRETE,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    Number of periods for present_value to grow (or shrink) to future_value.

    Formula:
        n = ln(fv / pv) / ln(1 + r)  (discrete)
        n = ln(fv / pv) / r          (continuous)

    The result is usually fractional; take math.ceil() for the number of
    whole periods needed to reach the target.

    A zero rate never changes the value, so the closed form divides by
    ln(1) = 0 and is rejected. Callers wanting an answer in that case must
    check present_value == future_value themselves (zero periods) and treat
    anything else as unreachable.

    Raises:
        InvalidInputError: If any input is NaN/Inf
        DomainError: If rate == 0, rate <= -1 (discrete), present_value or
            future_value is zero, they have opposite signs, or the rate moves
            the value away from the target (negative result)

    Example:
        >>> round(periods(0.08, 136_000, 468_000), 4)
        16.0576
    """
    compounding = _check_compounding(compounding)
    rate, found = check_rate(rate)
    present_value = check_finite(present_value, "present_value")
    future_value = check_finite(future_value, "future_value")
    if rate == 0.0:
        raise DomainError(
            "rate is zero so the value never changes; periods is undefined "
            "(zero if present_value == future_value, otherwise never)"
        )
    if compounding is DISCRETE:
        check_rate_above_minus_one(rate)
    if present_value == 0.0 or future_value == 0.0:
        raise DomainError(
            f"present_value and future_value must be nonzero, got {present_value} and {future_value}"
        )
    if (present_value > 0.0) != (future_value > 0.0):
        raise DomainError(
            f"present_value ({present_value}) and future_value ({future_value}) have opposite signs"
        )
    log_ratio = math.log(future_value / present_value)
    if log_ratio == 0.0:
        report(found, diagnostics)
        return 0.0
    growth_per_period = rate if compounding is CONTINUOUS else math.log1p(rate)
    result = log_ratio / growth_per_period
    if result < 0.0:
        raise DomainError(
            f"a rate of {rate} moves {present_value} away from {future_value}; the target is never reached"
        )
    report(found, diagnostics)
    return result


def rate(
        periods: float,
        present_value: float,
        future_value: float,
        compounding: CompoundingMode = DISCRETE,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    Periodic rate that grows present_value to future_value over periods.

    Formula:
        r = (fv / pv)^(1 / n) - 1    (discrete)
        r = ln(fv / pv) / n          (continuous)

    Raises:
        InvalidInputError: If any input is NaN/Inf or periods < 0
        DomainError: If periods == 0, present_value == 0, or fv / pv < 0
            (continuous also fv == 0), or the rate overflows a double

    Example:
        >>> round(rate(365, 10_000, 11_000), 6)
        0.000261
    """
    compounding = _check_compounding(compounding)
    periods = check_periods(periods)
    present_value = check_finite(present_value, "present_value")
    future_value = check_finite(future_value, "future_value")
    if periods == 0.0:
        raise DomainError("periods must be nonzero to solve for a rate")
    if present_value == 0.0:
        raise DomainError("present_value must be nonzero to solve for a rate")
    ratio = future_value / present_value
    if ratio < 0.0:
        raise DomainError(
            f"present_value ({present_value}) and future_value ({future_value}) have opposite signs"
        )
    if ratio == 0.0:
        if compounding is CONTINUOUS:
            raise DomainError("a continuous rate cannot reduce a value to exactly zero")
        result = -1.0
    elif compounding is CONTINUOUS:
        result = math.log(ratio) / periods
    else:
        try:
            result = math.expm1(math.log(ratio) / periods)
        except OverflowError as e:
            raise DomainError(
                f"growing {present_value} to {future_value} in {periods} periods needs a rate that overflows a double"
            ) from e
    _, found = check_rate(result)
    report(found, diagnostics)
    return result


# =============================================================================
# LEVEL PAYMENTS
# =============================================================================

def payment(
        rate: float,
        periods: float,
        present_value: float,
        future_value: float = 0.0,
        due: DueTiming = ORDINARY,
        compounding: CompoundingMode = DISCRETE,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    Level payment per period that satisfies the fundamental identity.

    Formula (solving the identity for pmt):
        pmt = -(pv * (1+r)^n + fv) * r / (((1+r)^n - 1) * (1 + r*due))

    With a zero rate the identity degenerates to pmt*n + pv + fv = 0:
        pmt = -(pv + fv) / n

    A payment due at the start of each period is the ordinary payment divided
    by (1 + r): each payment earns one more period of interest, so less is
    needed.

    Args:
        rate: Periodic rate as a fraction
        periods: Number of payments, >= 1
        present_value: Loan principal or starting balance
        future_value: Balance remaining after the last payment (0 for a fully amortizing loan)
        due: ORDINARY (end of period) or DUE (start of period)
        compounding: DISCRETE or CONTINUOUS
        diagnostics: Optional list that receives warnings instead of warnings.warn

    Returns:
        Payment per period; opposite in sign to present_value when future_value is zero

    Raises:
        InvalidInputError: If any input is NaN/Inf or periods < 1
        DomainError: If rate <= -1 (discrete)

    Example:
        A $10,000 loan over 60 months at 10% APR:

        >>> round(payment(0.10 / 12, 60, 10_000), 4)
        -212.4704
    """
    compounding = _check_compounding(compounding)
    due = _check_due(due)
    rate, found = check_rate(rate)
    periods = check_periods(periods, minimum=1.0)
    present_value = check_finite(present_value, "present_value")
    future_value = check_finite(future_value, "future_value")
    if compounding is DISCRETE:
        check_rate_above_minus_one(rate)
    report(found, diagnostics)

    p = _effective_periodic_rate(rate, compounding)
    if p == 0.0:
        return -(present_value + future_value) / periods

    growth = _growth_factor(rate, periods, compounding)
    annuity_factor = _growth_minus_one(rate, periods, compounding) / p
    if due is DUE:
        annuity_factor *= 1.0 + p
    return -(present_value * growth + future_value) / annuity_factor


def payment_due(
        rate: float,
        periods: float,
        present_value: float,
        future_value: float = 0.0,
        compounding: CompoundingMode = DISCRETE,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """payment() with payments at the start of each period."""
    return payment(rate, periods, present_value, future_value, DUE, compounding, diagnostics)


# =============================================================================
# ANNUITIES
# =============================================================================
#
#   PVAF(n, r) = (1 - (1+r)^-n) / r        present value of n payments of 1
#   FVAF(n, r) = ((1+r)^n - 1) / r         future value of n payments of 1
#
# Annuity due: both factors are multiplied by (1+r).
# Zero rate: both factors reduce to n, the limiting form, which is used
# directly rather than raising.
# =============================================================================

def _annuity_inputs(payment, rate, periods, due, compounding):
    compounding = _check_compounding(compounding)
    due = _check_due(due)
    payment = check_finite(payment, "payment")
    rate, found = check_rate(rate)
    periods = check_periods(periods)
    if compounding is DISCRETE:
        check_rate_above_minus_one(rate)
    return payment, rate, periods, due, compounding, found


def present_value_annuity(
        payment: float,
        rate: float,
        periods: float,
        due: DueTiming = ORDINARY,
        compounding: CompoundingMode = DISCRETE,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    Present value of a level annuity.

    Formula:
        PV = pmt * (1 - (1+r)^-n) / r          (ordinary)
        PV = pmt * (1 - (1+r)^-n) / r * (1+r)  (due)
        PV = pmt * n                           (r == 0)

    Raises:
        InvalidInputError: If any input is NaN/Inf or periods < 0
        DomainError: If rate <= -1 (discrete)

    Example:
        $24,000 a year for 11 years discounted at 13%:

        >>> round(present_value_annuity(24_000, 0.13, 11), 2)
        136486.59
    """
    payment, rate, periods, due, compounding, found = _annuity_inputs(
        payment, rate, periods, due, compounding
    )
    report(found, diagnostics)
    p = _effective_periodic_rate(rate, compounding)
    if p == 0.0:
        return payment * periods
    value = payment * -_growth_minus_one(rate, -periods, compounding) / p
    if due is DUE:
        value *= 1.0 + p
    return value


def present_value_annuity_due(
        payment: float,
        rate: float,
        periods: float,
        compounding: CompoundingMode = DISCRETE,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    present_value_annuity() with payments at the start of each period.

    Example:
        >>> round(present_value_annuity_due(100_000, 0.05, 8))
        678637
    """
    return present_value_annuity(payment, rate, periods, DUE, compounding, diagnostics)


def future_value_annuity(
        payment: float,
        rate: float,
        periods: float,
        due: DueTiming = ORDINARY,
        compounding: CompoundingMode = DISCRETE,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    Future value of a level annuity at the end of the last period.

    Formula:
        FV = pmt * ((1+r)^n - 1) / r           (ordinary)
        FV = pmt * ((1+r)^n - 1) / r * (1+r)   (due)
        FV = pmt * n                           (r == 0)

    Example:
        $16,000 deposited at the end of each year for 12 years at 14%:

        >>> round(future_value_annuity(16_000, 0.14, 12), 2)
        436331.98
    """
    payment, rate, periods, due, compounding, found = _annuity_inputs(
        payment, rate, periods, due, compounding
    )
    report(found, diagnostics)
    p = _effective_periodic_rate(rate, compounding)
    if p == 0.0:
        return payment * periods
    value = payment * _growth_minus_one(rate, periods, compounding) / p
    if due is DUE:
        value *= 1.0 + p
    return value


def future_value_annuity_due(
        payment: float,
        rate: float,
        periods: float,
        compounding: CompoundingMode = DISCRETE,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """future_value_annuity() with payments at the start of each period."""
    return future_value_annuity(payment, rate, periods, DUE, compounding, diagnostics)


# =============================================================================
# PERPETUITIES
# =============================================================================

def present_value_perpetuity_simple(
        payment: float,
        rate: float,
        due: DueTiming = ORDINARY,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    Present value of a level payment received forever.

    Formula:
        PV = pmt / r             (ordinary)
        PV = pmt + pmt / r       (due: the first payment is received today)

    Raises:
        InvalidInputError: If payment or rate is NaN/Inf
        DomainError: If rate == 0

    Example:
        >>> present_value_perpetuity_simple(500, 0.01)
        50000.0
    """
    due = _check_due(due)
    payment = check_finite(payment, "payment")
    rate, found = check_rate(rate)
    if rate == 0.0:
        raise DomainError("a perpetuity at a zero rate has no finite present value")
    report(found, diagnostics)
    value = payment / rate
    if due is DUE:
        value += payment
    return value


def present_value_perpetuity_general(
        payment: float,
        rate: float,
        compounds_per_year: int,
        payments_per_year: int,
        due: DueTiming = ORDINARY,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    Perpetuity whose payment frequency differs from the compounding frequency.

    The nominal periodic rate is first converted to an effective rate per
    payment period:

        p = (1 + r)^(compounds_per_year / payments_per_year) - 1

    and the simple formula is applied with p.

    Args:
        payment: Payment per payment period
        rate: Rate per compounding period
        compounds_per_year: Compounding periods per year
        payments_per_year: Payments per year
        due: ORDINARY or DUE

    Raises:
        InvalidInputError: If inputs are NaN/Inf or a frequency is < 1
        DomainError: If rate == 0 or rate <= -1
    """
    due = _check_due(due)
    payment = check_finite(payment, "payment")
    rate, found = check_rate(rate)
    compounds_per_year, more = check_compounds_per_year(compounds_per_year)
    payments_per_year, more_still = check_compounds_per_year(payments_per_year, "payments_per_year")
    if rate == 0.0:
        raise DomainError("a perpetuity at a zero rate has no finite present value")
    check_rate_above_minus_one(rate)
    report(found + more + more_still, diagnostics)
    p = checked_power(1.0 + rate, compounds_per_year / payments_per_year) - 1.0
    return present_value_perpetuity_simple(payment, p, due, diagnostics=[])


# =============================================================================
# NET PRESENT VALUE
# =============================================================================

def net_present_value(
        rate: float,
        periods: int,
        initial_investment: float,
        cashflow: float,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    NPV of an initial investment followed by a constant cash flow each period.

    Formula:
        NPV = initial_investment + sum_{k=1..n} cashflow / (1+r)^k
            = initial_investment + cashflow * PVAF(n, r)

    initial_investment is normally negative (money paid out at time 0).

    Example:
        >>> round(net_present_value(0.10, 3, -1000, 500), 4)
        243.426
    """
    periods = check_periods(periods)
    if periods != int(periods):
        raise InvalidInputError(f"periods must be a whole number, got {periods}")
    initial_investment = check_finite(initial_investment, "initial_investment")
    return initial_investment + present_value_annuity(
        cashflow, rate, periods, diagnostics=diagnostics
    )


def net_present_value_schedule(
        rates: list[float] | np.ndarray,
        cashflows: list[float] | np.ndarray,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    NPV with a rate and a cash flow for each period.

    cashflows[0] is the amount at time 0 (not discounted); cashflows[k] is
    discounted k periods at its own rate rates[k-1]:

        NPV = cf0 + sum_{k=1..n} cf_k / (1 + r_k)^k

    Either input may be shortened to a single repeating value: one rate is
    applied to every cash flow, and with exactly one cash flow after cf0 that
    cash flow repeats once per rate.

    Raises:
        InvalidInputError: If cashflows or rates is empty, any value is
            NaN/Inf, or both series are given in full with different lengths
        DomainError: If any rate <= -1

    Example:
        >>> round(net_present_value_schedule([0.034, 0.089, 0.055], [-1000, 200, 300, 500]), 5)
        -127.80162
        >>> round(net_present_value_schedule([0.11], [0, 12_000, 14_000, 17_000, 19_000, 23_000, 29_000]), 2)
        76273.63
    """
    cashflows = np.asarray(cashflows, dtype=float).ravel()
    rates = np.asarray(rates, dtype=float).ravel()
    if cashflows.size == 0:
        raise InvalidInputError("cashflows cannot be empty")
    if rates.size == 0:
        raise InvalidInputError("rates cannot be empty")
    if not np.all(np.isfinite(cashflows)):
        raise InvalidInputError("cashflows must be finite (not NaN or infinity)")
    if not np.all(np.isfinite(rates)):
        raise InvalidInputError("rates must be finite (not NaN or infinity)")
    future_count = cashflows.size - 1
    if rates.size == 1:
        rates = np.full(future_count, rates[0])
    elif future_count == 1:
        # One repeating cash flow, one period per rate
        cashflows = np.concatenate(([cashflows[0]], np.full(rates.size, cashflows[1])))
    elif rates.size != future_count:
        raise InvalidInputError(
            f"got {rates.size} rates for {future_count} cash flows after time 0; "
            f"give one rate per cash flow, a single repeating rate, or a single repeating cash flow"
        )
    if np.any(rates <= -1.0):
        raise DomainError("every rate must be greater than -1.0 (-100%)")
    found: list[TvmWarning] = []
    for r in rates:
        found.extend(check_rate(float(r))[1])
    report(found, diagnostics)

    k = np.arange(1, rates.size + 1)
    with np.errstate(over="ignore"):
        discount = np.power(1.0 + rates, k)
    if not np.all(np.isfinite(discount)):
        raise DomainError("a discount factor overflows a double")
    return float(cashflows[0] + np.sum(cashflows[1:] / discount))
