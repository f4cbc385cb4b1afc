"""
Unit tests for input validation, diagnostics, rounding and the error hierarchy.

Covers:
- errors: exception and warning class hierarchy
- validation: finiteness, rate magnitude, period and frequency checks,
  guarded power/exp, and the diagnostics channel (report)
- rounding: half-away-from-zero rounding and display helpers

Version: 0.1.0
Status: Active
"""

import math
import unittest
import warnings
from pathlib import Path

import tvm_formulas
from tvm_formulas.errors import (
    TvmError,
    DomainError,
    InvalidInputError,
    NotSupportedError,
    TvmWarning,
    RateMagnitudeWarning,
    CompoundingFrequencyWarning,
)
from tvm_formulas.validation import (
    MAX_COMPOUNDS_PER_YEAR,
    RATE_WARNING_THRESHOLD,
    check_compounds_per_year,
    check_finite,
    check_periods,
    check_rate,
    check_rate_above_minus_one,
    checked_exp,
    checked_power,
    report,
)
from tvm_formulas.rounding import (
    format_money,
    format_rate,
    round_half_away,
    round_to_cent,
    round_to_fraction_of_cent,
)


NON_FINITE = [math.nan, math.inf, -math.inf]


# =============================================================================
# Error hierarchy
# =============================================================================

class TestErrorHierarchy(unittest.TestCase):
    """Every failure is a ValueError; invalid input is a kind of domain error."""

    def test_errors_are_value_errors(self):
        for cls in (TvmError, DomainError, InvalidInputError, NotSupportedError):
            with self.subTest(cls=cls.__name__):
                self.assertTrue(issubclass(cls, ValueError))

    def test_invalid_input_is_domain_error(self):
        self.assertTrue(issubclass(InvalidInputError, DomainError))
        self.assertFalse(issubclass(DomainError, InvalidInputError))

    def test_not_supported_is_not_implemented(self):
        self.assertTrue(issubclass(NotSupportedError, NotImplementedError))
        self.assertFalse(issubclass(NotSupportedError, DomainError))

    def test_warning_categories(self):
        for cls in (RateMagnitudeWarning, CompoundingFrequencyWarning):
            with self.subTest(cls=cls.__name__):
                self.assertTrue(issubclass(cls, TvmWarning))
                self.assertTrue(issubclass(cls, UserWarning))


# =============================================================================
# Checks that raise
# =============================================================================

class TestCheckFinite(unittest.TestCase):

    def test_accepts_int_and_float(self):
        self.assertEqual(check_finite(5, "x"), 5.0)
        self.assertIsInstance(check_finite(5, "x"), float)
        self.assertEqual(check_finite(-0.25, "x"), -0.25)

    def test_rejects_non_finite(self):
        for value in NON_FINITE:
            with self.subTest(value=value):
                with self.assertRaises(InvalidInputError):
                    check_finite(value, "x")

    def test_rejects_missing_and_non_numeric(self):
        for value in (None, "abc", [1.0]):
            with self.subTest(value=value):
                with self.assertRaises(InvalidInputError):
                    check_finite(value, "x")

    def test_message_names_argument(self):
        with self.assertRaisesRegex(InvalidInputError, "present_value"):
            check_finite(math.nan, "present_value")


class TestCheckRate(unittest.TestCase):

    def test_normal_rate_has_no_warnings(self):
        rate, found = check_rate(0.05)
        self.assertEqual(rate, 0.05)
        self.assertEqual(found, [])

    def test_threshold_itself_is_not_flagged(self):
        for rate in (RATE_WARNING_THRESHOLD, -RATE_WARNING_THRESHOLD):
            with self.subTest(rate=rate):
                self.assertEqual(check_rate(rate)[1], [])

    def test_large_rate_is_flagged_not_rejected(self):
        for rate in (1.5, 5.0, -2.0):
            with self.subTest(rate=rate):
                value, found = check_rate(rate)
                self.assertEqual(value, rate)
                self.assertEqual(len(found), 1)
                self.assertIsInstance(found[0], RateMagnitudeWarning)

    def test_non_finite_rate_raises(self):
        for rate in NON_FINITE:
            with self.subTest(rate=rate):
                with self.assertRaises(InvalidInputError):
                    check_rate(rate)

    def test_rate_above_minus_one(self):
        check_rate_above_minus_one(-0.99)
        for rate in (-1.0, -1.5):
            with self.subTest(rate=rate):
                with self.assertRaises(DomainError):
                    check_rate_above_minus_one(rate)


class TestCheckPeriods(unittest.TestCase):

    def test_zero_and_fractional_accepted(self):
        self.assertEqual(check_periods(0), 0.0)
        self.assertEqual(check_periods(2.5), 2.5)

    def test_negative_rejected(self):
        with self.assertRaises(InvalidInputError):
            check_periods(-1)

    def test_minimum(self):
        self.assertEqual(check_periods(1, minimum=1.0), 1.0)
        with self.assertRaises(InvalidInputError):
            check_periods(0.5, minimum=1.0)


class TestCheckCompoundsPerYear(unittest.TestCase):

    def test_whole_numbers_accepted(self):
        for value, expected in ((1, 1), (12, 12), (12.0, 12), (365, 365)):
            with self.subTest(value=value):
                m, found = check_compounds_per_year(value)
                self.assertEqual(m, expected)
                self.assertIsInstance(m, int)
                self.assertEqual(found, [])

    def test_invalid_frequencies_rejected(self):
        for value in (0, -4, 2.5, None, True, math.nan, math.inf, "monthly"):
            with self.subTest(value=value):
                with self.assertRaises(InvalidInputError):
                    check_compounds_per_year(value)

    def test_more_than_daily_is_flagged(self):
        m, found = check_compounds_per_year(MAX_COMPOUNDS_PER_YEAR + 1)
        self.assertEqual(m, MAX_COMPOUNDS_PER_YEAR + 1)
        self.assertEqual(len(found), 1)
        self.assertIsInstance(found[0], CompoundingFrequencyWarning)

    def test_leap_year_days_not_flagged(self):
        self.assertEqual(check_compounds_per_year(MAX_COMPOUNDS_PER_YEAR)[1], [])


# =============================================================================
# Guarded arithmetic
# =============================================================================

class TestGuardedArithmetic(unittest.TestCase):

    def test_checked_power_normal(self):
        self.assertAlmostEqual(checked_power(1.04, 10), 1.4802442849, places=10)
        self.assertEqual(checked_power(-2.0, 3), -8.0)
        self.assertEqual(checked_power(0.0, 2.5), 0.0)

    def test_checked_power_domain_errors(self):
        cases = [
            (-8.0, 1.0 / 3.0),   # complex result
            (0.0, -1.0),         # division by zero
            (10.0, 400.0),       # overflow
        ]
        for base, exponent in cases:
            with self.subTest(base=base, exponent=exponent):
                with self.assertRaises(DomainError):
                    checked_power(base, exponent)

    def test_checked_exp(self):
        self.assertAlmostEqual(checked_exp(1.0), math.e, places=12)
        with self.assertRaises(DomainError):
            checked_exp(1000.0)


# =============================================================================
# Diagnostics channel
# =============================================================================

class TestReport(unittest.TestCase):

    def test_injected_list_receives_warnings(self):
        sink = []
        warning = RateMagnitudeWarning("big")
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            report([warning], sink)
        self.assertEqual(sink, [warning])

    def test_without_list_issues_python_warning(self):
        with self.assertWarns(RateMagnitudeWarning):
            report([RateMagnitudeWarning("big")])

    def test_nothing_to_report(self):
        sink = []
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            report([], sink)
            report([])
        self.assertEqual(sink, [])


# =============================================================================
# Rounding and display
# =============================================================================

class TestRounding(unittest.TestCase):

    def test_half_away_from_zero(self):
        cases = [
            (2.5, 0, 3.0),
            (-2.5, 0, -3.0),
            (0.125, 2, 0.13),
            (-0.125, 2, -0.13),
            (1.23456, 4, 1.2346),
            (1.23454, 4, 1.2345),
        ]
        for value, decimals, expected in cases:
            with self.subTest(value=value, decimals=decimals):
                self.assertEqual(round_half_away(value, decimals), expected)

    def test_named_helpers(self):
        self.assertEqual(round_to_fraction_of_cent(3700.61071), 3700.6107)
        self.assertEqual(round_to_cent(3700.61071), 3700.61)

    def test_non_finite_pass_through(self):
        self.assertTrue(math.isnan(round_to_cent(math.nan)))
        self.assertEqual(round_to_cent(math.inf), math.inf)

    def test_format_money(self):
        self.assertEqual(format_money(3700.6107), "3700.6107")
        self.assertEqual(format_money(-1.5), "-1.5000")
        self.assertEqual(format_money(1234.5678, 2), "1234.57")

    def test_format_rate(self):
        self.assertEqual(format_rate(0.0825), "8.2500%")
        self.assertEqual(format_rate(-0.06), "-6.0000%")
        self.assertEqual(format_rate(0.136476, 2), "13.65%")

    def test_format_non_finite(self):
        for func in (format_money, format_rate):
            with self.subTest(func=func.__name__):
                self.assertEqual(func(math.nan), "NaN")
                self.assertEqual(func(math.inf), "inf")
                self.assertEqual(func(-math.inf), "-inf")


# =============================================================================
# Source layout
# =============================================================================

class TestSourceHeaders(unittest.TestCase):

    def test_every_module_declares_python_version(self):
        package_dir = Path(tvm_formulas.__file__).parent
        modules = sorted(package_dir.glob("*.py"))
        self.assertGreater(len(modules), 0)
        for path in modules:
            with self.subTest(module=path.name):
                first_line = path.read_text(encoding="utf-8").splitlines()[0]
                self.assertEqual(first_line, "# Requires Python 3.12+")


if __name__ == '__main__':
    unittest.main()
