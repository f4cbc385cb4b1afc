"""
Unit tests for rate conversion between APR, periodic rate (EPR) and EAR.

Verifies the conversion formulas, their inverses, continuous compounding,
the RateConversion record and the domain errors.

Version: 0.1.0
Status: Active
"""

import math
import unittest

from tvm_formulas.errors import (
    DomainError,
    InvalidInputError,
    RateMagnitudeWarning,
    CompoundingFrequencyWarning,
)
from tvm_formulas.rates import (
    RateConversion,
    convert_apr_to_ear,
    convert_apr_to_ear_continuous,
    convert_apr_to_periodic,
    convert_ear_to_apr,
    convert_ear_to_apr_continuous,
    convert_ear_to_periodic,
    convert_periodic_to_apr,
    convert_periodic_to_ear,
    rate_conversion,
    rate_conversion_continuous,
)


# =============================================================================
# Test Parameters
# =============================================================================

DECIMAL_PLACES_FOR_ASSERTIONS: int = 12

APRS = [0.0, 0.01, 0.05, 0.08, 0.13, 0.25, -0.03]
FREQUENCIES = [1, 2, 4, 12, 52, 365]


class TestAprToPeriodic(unittest.TestCase):

    def test_semiannual(self):
        self.assertEqual(convert_apr_to_periodic(0.08, 2), 0.04)

    def test_monthly(self):
        self.assertAlmostEqual(convert_apr_to_periodic(0.12, 12), 0.01, places=15)

    def test_round_trip(self):
        for apr in APRS:
            for m in FREQUENCIES:
                with self.subTest(apr=apr, m=m):
                    epr = convert_apr_to_periodic(apr, m)
                    self.assertAlmostEqual(
                        convert_periodic_to_apr(epr, m), apr, places=DECIMAL_PLACES_FOR_ASSERTIONS
                    )

    def test_invalid_frequency(self):
        for m in (0, -1, 2.5):
            with self.subTest(m=m):
                with self.assertRaises(InvalidInputError):
                    convert_apr_to_periodic(0.08, m)

    def test_non_finite_apr(self):
        with self.assertRaises(InvalidInputError):
            convert_apr_to_periodic(math.nan, 12)

    def test_invalid_input_is_also_domain_error(self):
        with self.assertRaises(DomainError):
            convert_apr_to_periodic(0.08, 0)


class TestEffectiveAnnualRate(unittest.TestCase):

    def test_quarterly(self):
        self.assertAlmostEqual(convert_apr_to_ear(0.13, 4), 0.1364759, places=6)

    def test_annual_compounding_is_identity(self):
        for apr in APRS:
            with self.subTest(apr=apr):
                self.assertAlmostEqual(convert_apr_to_ear(apr, 1), apr, places=DECIMAL_PLACES_FOR_ASSERTIONS)

    def test_ear_exceeds_apr_for_positive_rates(self):
        for m in FREQUENCIES[1:]:
            with self.subTest(m=m):
                self.assertGreater(convert_apr_to_ear(0.08, m), 0.08)

    def test_round_trips(self):
        for apr in APRS:
            for m in FREQUENCIES:
                with self.subTest(apr=apr, m=m):
                    ear = convert_apr_to_ear(apr, m)
                    self.assertAlmostEqual(convert_ear_to_apr(ear, m), apr, places=10)
                    epr = convert_apr_to_periodic(apr, m)
                    self.assertAlmostEqual(convert_periodic_to_ear(epr, m), ear, places=10)
                    self.assertAlmostEqual(convert_ear_to_periodic(ear, m), epr, places=10)

    def test_ear_at_or_below_minus_one(self):
        for func in (convert_ear_to_apr, convert_ear_to_periodic):
            with self.subTest(func=func.__name__):
                with self.assertRaises(DomainError):
                    func(-1.0, 12)
                with self.assertRaises(DomainError):
                    func(-1.5, 12)


class TestContinuous(unittest.TestCase):

    def test_apr_to_ear(self):
        self.assertAlmostEqual(convert_apr_to_ear_continuous(0.08), math.exp(0.08) - 1, places=14)

    def test_round_trip(self):
        for apr in APRS:
            with self.subTest(apr=apr):
                ear = convert_apr_to_ear_continuous(apr)
                self.assertAlmostEqual(convert_ear_to_apr_continuous(ear), apr, places=DECIMAL_PLACES_FOR_ASSERTIONS)

    def test_continuous_is_limit_of_discrete(self):
        discrete = convert_apr_to_ear(0.08, 1_000_000, diagnostics=[])
        self.assertAlmostEqual(discrete, convert_apr_to_ear_continuous(0.08), places=7)

    def test_ear_at_minus_one(self):
        with self.assertRaises(DomainError):
            convert_ear_to_apr_continuous(-1.0)

    def test_overflow(self):
        with self.assertRaises(DomainError):
            convert_apr_to_ear_continuous(1000.0, diagnostics=[])


class TestDiagnostics(unittest.TestCase):

    def test_large_apr_warns_through_list(self):
        sink = []
        epr = convert_apr_to_periodic(8.0, 12, sink)
        self.assertAlmostEqual(epr, 8.0 / 12, places=15)
        self.assertEqual(len(sink), 1)
        self.assertIsInstance(sink[0], RateMagnitudeWarning)

    def test_large_apr_warns_through_warnings_module(self):
        with self.assertWarns(RateMagnitudeWarning):
            convert_apr_to_periodic(8.0, 12)

    def test_high_frequency_warns(self):
        sink = []
        convert_apr_to_ear(0.08, 8760, sink)
        self.assertTrue(any(isinstance(w, CompoundingFrequencyWarning) for w in sink))


class TestRateConversionRecord(unittest.TestCase):

    def test_quarterly_record(self):
        rc = rate_conversion(0.13, 4)
        self.assertIsInstance(rc, RateConversion)
        self.assertFalse(rc.continuous)
        self.assertEqual(rc.compounds_per_year, 4)
        self.assertAlmostEqual(rc.epr, 0.0325, places=15)
        self.assertEqual(rc.apr_percent, "13.0000%")
        self.assertEqual(rc.epr_percent, "3.2500%")
        self.assertEqual(rc.ear_percent, "13.6476%")
        self.assertEqual(rc.epr_formula, "0.130000 / 4")
        self.assertEqual(rc.ear_formula, "(1 + 0.130000 / 4)^4 - 1")
        self.assertEqual(rc.warnings, ())

    def test_continuous_record(self):
        rc = rate_conversion_continuous(0.08)
        self.assertTrue(rc.continuous)
        self.assertIsNone(rc.compounds_per_year)
        self.assertTrue(math.isnan(rc.epr))
        self.assertEqual(rc.epr_percent, "NaN")
        self.assertAlmostEqual(rc.ear, math.expm1(0.08), places=15)
        self.assertEqual(rc.ear_formula, "e^0.080000 - 1")

    def test_record_captures_warnings(self):
        rc = rate_conversion(3.0, 12)
        self.assertEqual(len(rc.warnings), 1)
        self.assertIsInstance(rc.warnings[0], RateMagnitudeWarning)

    def test_record_is_frozen(self):
        rc = rate_conversion(0.08, 12)
        with self.assertRaises(AttributeError):
            rc.apr = 0.09


if __name__ == '__main__':
    unittest.main()
