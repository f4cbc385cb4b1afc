"""
Unit tests for the spreadsheet-style functions FV, PV, PMT, IPMT, PPMT, NPER, RATE.

Reference values are the documented results of the equivalent spreadsheet
functions; consistency tests check every function against the fundamental
identity and against each other.

Version: 0.1.0
Status: Active
"""

import unittest

from tvm_formulas import excel
from tvm_formulas.enums import DueTiming
from tvm_formulas.errors import (
    DomainError,
    InvalidInputError,
    NotSupportedError,
    RateMagnitudeWarning,
)


# =============================================================================
# Test Parameters
# =============================================================================

IDENTITY_TOLERANCE: float = 1e-6

LOANS = [
    # (rate, nper, pv, fv)
    (0.10 / 12, 60, 10_000, 0),
    (0.075 / 12, 180, 200_000, 0),
    (0.05, 10, -1_000, 500),
    (0.0, 24, 12_000, 0),
    (0.2, 7, 3_000, -1_000),
]


def identity_residual(rate, nper, pmt, pv, fv, when=0):
    if rate == 0.0:
        return pv + pmt * nper + fv
    growth = (1.0 + rate) ** nper
    return pv * growth + pmt * (1.0 + rate * when) * (growth - 1.0) / rate + fv


class TestFv(unittest.TestCase):

    def test_savings(self):
        self.assertAlmostEqual(excel.fv(0.05 / 12, 120, -100, -100), 15692.93, delta=0.01)

    def test_zero_rate(self):
        self.assertEqual(excel.fv(0.0, 10, -100, -1_000), 2_000.0)

    def test_satisfies_identity(self):
        for rate, nper, pv, _ in LOANS:
            for when in (0, 1):
                with self.subTest(rate=rate, nper=nper, when=when):
                    fv = excel.fv(rate, nper, -150.0, pv, when)
                    self.assertLess(abs(identity_residual(rate, nper, -150.0, pv, fv, when)), IDENTITY_TOLERANCE)

    def test_warning_through_list(self):
        sink = []
        excel.fv(2.0, 2, 0, -1, diagnostics=sink)
        self.assertEqual(len(sink), 1)
        self.assertIsInstance(sink[0], RateMagnitudeWarning)


class TestPv(unittest.TestCase):

    def test_savings(self):
        self.assertAlmostEqual(excel.pv(0.05 / 12, 120, -100, 15692.93), -100.0, delta=0.01)

    def test_zero_rate(self):
        self.assertEqual(excel.pv(0.0, 10, -100), 1_000.0)

    def test_inverse_of_fv(self):
        for rate, nper, pv, _ in LOANS:
            with self.subTest(rate=rate, nper=nper):
                fv = excel.fv(rate, nper, -75.0, pv)
                self.assertAlmostEqual(excel.pv(rate, nper, -75.0, fv), pv, places=6)


class TestPmt(unittest.TestCase):

    def test_mortgage(self):
        self.assertAlmostEqual(excel.pmt(0.075 / 12, 12 * 15, 200_000), -1854.0247, places=4)

    def test_car_loan(self):
        self.assertAlmostEqual(excel.pmt(0.10 / 12, 60, 10_000), -212.4704, places=4)

    def test_when_spellings_agree(self):
        expected = -301.3103
        for when in (1, "begin", "BEGIN", DueTiming.DUE):
            with self.subTest(when=when):
                self.assertAlmostEqual(excel.pmt(0.08 / 12, 120, 25_000, when=when), expected, places=4)
        for when in (0, "end", DueTiming.ORDINARY):
            with self.subTest(when=when):
                self.assertAlmostEqual(excel.pmt(0.08 / 12, 120, 25_000, when=when), -303.3190, places=4)

    def test_unsupported_when(self):
        for when in (2, -1, "middle", None, 0.5):
            with self.subTest(when=when):
                with self.assertRaises(NotSupportedError):
                    excel.pmt(0.05, 10, 1_000, when=when)
        with self.assertRaises(NotImplementedError):
            excel.pmt(0.05, 10, 1_000, when="middle")

    def test_satisfies_identity(self):
        for rate, nper, pv, fv in LOANS:
            for when in (0, 1):
                with self.subTest(rate=rate, nper=nper, when=when):
                    pmt = excel.pmt(rate, nper, pv, fv, when)
                    self.assertLess(abs(identity_residual(rate, nper, pmt, pv, fv, when)), IDENTITY_TOLERANCE)


class TestIpmtPpmt(unittest.TestCase):

    def test_first_month_interest(self):
        self.assertAlmostEqual(excel.ipmt(0.10 / 12, 1, 60, 10_000), -83.3333, places=4)
        self.assertAlmostEqual(excel.ppmt(0.10 / 12, 1, 60, 10_000), -129.1371, places=4)

    def test_interest_plus_principal_is_payment(self):
        rate, nper, pv = 0.0824 / 12, 12, 2_500
        pmt = excel.pmt(rate, nper, pv)
        for per in range(1, nper + 1):
            with self.subTest(per=per):
                total = excel.ipmt(rate, per, nper, pv) + excel.ppmt(rate, per, nper, pv)
                self.assertAlmostEqual(total, pmt, places=10)

    def test_principal_repays_loan(self):
        for rate, nper, pv, fv in LOANS:
            with self.subTest(rate=rate, nper=nper):
                principal = sum(excel.ppmt(rate, per, nper, pv, fv) for per in range(1, nper + 1))
                self.assertAlmostEqual(principal, -(pv + fv), places=6)

    def test_principal_repays_loan_due(self):
        # With payments in advance a nonzero fv also accrues interest in the last period
        for rate, nper, pv, fv in LOANS:
            if fv != 0:
                continue
            with self.subTest(rate=rate, nper=nper):
                principal = sum(excel.ppmt(rate, per, nper, pv, fv, "begin") for per in range(1, nper + 1))
                self.assertAlmostEqual(principal, -pv, places=6)

    def test_first_payment_due_has_no_interest(self):
        self.assertEqual(excel.ipmt(0.01, 1, 12, 1_000, when="begin"), 0.0)

    def test_period_out_of_range(self):
        for per in (0, 61, 2.5):
            with self.subTest(per=per):
                with self.assertRaises(InvalidInputError):
                    excel.ipmt(0.10 / 12, per, 60, 10_000)


class TestNper(unittest.TestCase):

    def test_loan(self):
        self.assertAlmostEqual(excel.nper(0.07 / 12, -150, 8_000), 64.0733, places=4)

    def test_zero_rate(self):
        self.assertEqual(excel.nper(0.0, -100, 1_000), 10.0)

    def test_inverse_of_pmt(self):
        for rate, nper, pv, fv in LOANS:
            for when in (0, 1):
                with self.subTest(rate=rate, nper=nper, when=when):
                    pmt = excel.pmt(rate, nper, pv, fv, when)
                    self.assertAlmostEqual(excel.nper(rate, pmt, pv, fv, when), nper, places=6)

    def test_payment_below_interest(self):
        with self.assertRaises(DomainError):
            excel.nper(0.10, -50, 1_000)

    def test_zero_rate_and_payment(self):
        with self.assertRaises(DomainError):
            excel.nper(0.0, 0.0, 1_000)


class TestRate(unittest.TestCase):

    def test_savings_to_target(self):
        self.assertAlmostEqual(excel.rate(23, -11_000, 0, 366_000), 0.0321, delta=1e-4)
        self.assertAlmostEqual(excel.rate(19, -11_100, 0, 375_000, when="begin"), 0.0548, delta=1e-4)

    def test_inverse_of_pmt(self):
        for rate, nper, pv, fv in LOANS:
            for when in (0, 1):
                with self.subTest(rate=rate, nper=nper, when=when):
                    pmt = excel.pmt(rate, nper, pv, fv, when)
                    self.assertAlmostEqual(excel.rate(nper, pmt, pv, fv, when), rate, places=9)

    def test_growth_without_payments(self):
        self.assertAlmostEqual(excel.rate(14, 0, -137_000, 475_000), 0.0929, delta=1e-4)

    def test_no_solution(self):
        with self.assertRaises(DomainError):
            excel.rate(10, 100, 1_000, 1_000)

    def test_invalid_nper(self):
        with self.assertRaises(InvalidInputError):
            excel.rate(0, -100, 1_000)


if __name__ == '__main__':
    unittest.main()
