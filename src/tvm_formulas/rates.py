# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import DomainError, TvmWarning
from .rounding import format_rate
from .validation import (
    check_compounds_per_year,
    check_rate,
    checked_power,
    checked_exp,
    report,
)

__version__ = "0.1.0"


# =============================================================================
# Rate conversions: APR, EPR (periodic) and EAR
# =============================================================================
#
# Three ways of quoting the same rate:
#
#   APR  nominal annual rate, the number usually quoted ("8% compounded monthly")
#   EPR  effective periodic rate, what is actually applied each period
#   EAR  effective annual rate, the growth over a whole year
#
# With m compounding periods per year:
#
#   EPR = APR / m
#   EAR = (1 + EPR)^m - 1 = (1 + APR/m)^m - 1
#
# With continuous compounding (m -> infinity):
#
#   EAR = e^APR - 1
#   APR = ln(1 + EAR)
#
# The equation core works in periodic rates throughout, so
# convert_apr_to_periodic() is the entry point most callers need.
# =============================================================================

def convert_apr_to_periodic(
        apr: float,
        compounds_per_year: int,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    Convert a nominal annual rate into the rate applied each compounding period.

    Formula:
        EPR = APR / m

    This is the simple proportional conversion used by the nominal-rate
    convention, not an effective-annual-rate conversion.

    Args:
        apr: Nominal annual rate as a fraction (0.08 for 8%)
        compounds_per_year: Compounding periods per year (m >= 1)
        diagnostics: Optional list that receives warnings instead of warnings.warn

    Returns:
        Periodic rate as a fraction

    Raises:
        InvalidInputError (a DomainError): If apr is NaN/Inf or compounds_per_year < 1

    Example:
        >>> convert_apr_to_periodic(0.08, 2)
        0.04
    """
    apr, found = check_rate(apr, "apr")
    compounds_per_year, more = check_compounds_per_year(compounds_per_year)
    report(found + more, diagnostics)
    return apr / compounds_per_year


def convert_periodic_to_apr(
        periodic_rate: float,
        compounds_per_year: int,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """APR = EPR * m."""
    periodic_rate, found = check_rate(periodic_rate, "periodic_rate")
    compounds_per_year, more = check_compounds_per_year(compounds_per_year)
    report(found + more, diagnostics)
    return periodic_rate * compounds_per_year


def convert_apr_to_ear(
        apr: float,
        compounds_per_year: int,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    EAR = (1 + APR/m)^m - 1

    Example:
        13% compounded quarterly is an effective 13.6476% per year.

        >>> round(convert_apr_to_ear(0.13, 4), 6)
        0.136476
    """
    apr, found = check_rate(apr, "apr")
    compounds_per_year, more = check_compounds_per_year(compounds_per_year)
    report(found + more, diagnostics)
    return checked_power(1.0 + apr / compounds_per_year, compounds_per_year) - 1.0


def convert_ear_to_apr(
        ear: float,
        compounds_per_year: int,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    APR = m * ((1 + EAR)^(1/m) - 1)

    Raises:
        DomainError: If ear <= -1 (the root of a non-positive number)
    """
    return convert_ear_to_periodic(ear, compounds_per_year, diagnostics) * int(compounds_per_year)


def convert_periodic_to_ear(
        periodic_rate: float,
        compounds_per_year: int,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """EAR = (1 + EPR)^m - 1"""
    periodic_rate, found = check_rate(periodic_rate, "periodic_rate")
    compounds_per_year, more = check_compounds_per_year(compounds_per_year)
    report(found + more, diagnostics)
    return checked_power(1.0 + periodic_rate, compounds_per_year) - 1.0


def convert_ear_to_periodic(
        ear: float,
        compounds_per_year: int,
        diagnostics: list[TvmWarning] | None = None
) -> float:
    """
    EPR = (1 + EAR)^(1/m) - 1

    Raises:
        DomainError: If ear <= -1 (the root of a non-positive number)
    """
    ear, found = check_rate(ear, "ear")
    compounds_per_year, more = check_compounds_per_year(compounds_per_year)
    if ear <= -1.0:
        raise DomainError(f"ear must be greater than -1.0 (-100%), got {ear}")
    report(found + more, diagnostics)
    return checked_power(1.0 + ear, 1.0 / compounds_per_year) - 1.0


def convert_apr_to_ear_continuous(apr: float, diagnostics: list[TvmWarning] | None = None) -> float:
    """EAR = e^APR - 1"""
    apr, found = check_rate(apr, "apr")
    report(found, diagnostics)
    checked_exp(apr)
    return math.expm1(apr)


def convert_ear_to_apr_continuous(ear: float, diagnostics: list[TvmWarning] | None = None) -> float:
    """
    APR = ln(1 + EAR)

    Raises:
        DomainError: If ear <= -1
    """
    ear, found = check_rate(ear, "ear")
    if ear <= -1.0:
        raise DomainError(f"ear must be greater than -1.0 (-100%), got {ear}")
    report(found, diagnostics)
    return math.log1p(ear)


# =============================================================================
# Rate conversion record
# =============================================================================

@dataclass(frozen=True)
class RateConversion:
    """
    One rate quoted three ways, with the formula used for each derived rate.

    epr is NaN for continuous compounding (there is no discrete period) and
    compounds_per_year is None.
    """
    apr: float
    epr: float
    ear: float
    compounds_per_year: int | None
    continuous: bool
    apr_formula: str
    epr_formula: str
    ear_formula: str
    warnings: tuple[TvmWarning, ...] = ()

    @property
    def apr_percent(self) -> str:
        return format_rate(self.apr)

    @property
    def epr_percent(self) -> str:
        return format_rate(self.epr)

    @property
    def ear_percent(self) -> str:
        return format_rate(self.ear)


def rate_conversion(apr: float, compounds_per_year: int) -> RateConversion:
    """
    Convert a nominal annual rate to periodic and effective annual rates.

    Example:
        >>> rc = rate_conversion(0.13, 4)
        >>> rc.epr_percent, rc.ear_percent
        ('3.2500%', '13.6476%')
    """
    found: list[TvmWarning] = []
    epr = convert_apr_to_periodic(apr, compounds_per_year, found)
    ear = convert_apr_to_ear(apr, compounds_per_year, [])
    m = int(compounds_per_year)
    return RateConversion(
        apr=float(apr),
        epr=epr,
        ear=ear,
        compounds_per_year=m,
        continuous=False,
        apr_formula=f"{float(apr):.6f}",
        epr_formula=f"{float(apr):.6f} / {m}",
        ear_formula=f"(1 + {float(apr):.6f} / {m})^{m} - 1",
        warnings=tuple(found),
    )


def rate_conversion_continuous(apr: float) -> RateConversion:
    """Continuous-compounding counterpart of rate_conversion()."""
    found: list[TvmWarning] = []
    ear = convert_apr_to_ear_continuous(apr, found)
    return RateConversion(
        apr=float(apr),
        epr=math.nan,
        ear=ear,
        compounds_per_year=None,
        continuous=True,
        apr_formula=f"{float(apr):.6f}",
        epr_formula="",
        ear_formula=f"e^{float(apr):.6f} - 1",
        warnings=tuple(found),
    )
