# Requires Python 3.12+
"""
TVM Formulas - Worked Examples

Textbook word problems with their inputs and published answers, one record
per problem. Rates are fractions (0.14 = 14%). Amounts follow the sign
convention of the function that solves them: the growth solvers keep pv and
fv on the same sign, the payment solvers return the payment opposite in sign
to the amount it pays off.

Structure:
  TvmExample.function  the callable that answers the problem
  TvmExample.inputs    keyword arguments passed to it
  TvmExample.scale     multiplier applied to the result (e.g. 1/12 to turn
                       months into years, 52 to turn a weekly rate into an APR)
  TvmExample.expected  published answer, compared to `decimals` places
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict

from . import equations as tvm_eq
from . import excel as tvm_excel
from . import rates as tvm_rates
from .enums import CompoundingMode, DueTiming


@dataclass(frozen=True)
class TvmExample:
    """A word problem, the function that answers it and the published answer."""
    id: str
    description: str
    function: Callable[..., float]
    inputs: Dict[str, Any] = field(default_factory=dict)
    expected: float = 0.0
    decimals: int = 2
    scale: float = 1.0

    def compute(self) -> float:
        """Answer the problem: function(**inputs) * scale."""
        return self.function(**self.inputs) * self.scale


# =============================================================================
# SINGLE SUMS
# =============================================================================

PV_LUMP_SUM = TvmExample(
    id="PV-1",
    description="Present value of 140,000 received in 13 years, discounted at 14%.",
    function=tvm_eq.present_value,
    inputs={"rate": 0.14, "periods": 13, "future_value": 140_000},
    expected=25_489.71,
)

FV_LUMP_SUM = TvmExample(
    id="FV-1",
    description="Future value of 247,000 invested for 9 years at 11%.",
    function=tvm_eq.future_value,
    inputs={"rate": 0.11, "periods": 9, "present_value": 247_000},
    expected=631_835.12,
)

FV_INTEREST_ON_INTEREST = TvmExample(
    id="FV-2",
    description="1,000 left for 10 periods at 3.4% per period.",
    function=tvm_eq.future_value,
    inputs={"rate": 0.034, "periods": 10, "present_value": 1_000},
    expected=1_397.0289,
    decimals=4,
)

FV_CONTINUOUS = TvmExample(
    id="FV-3",
    description="1,000 compounded continuously for 12 periods at 3.5%.",
    function=tvm_eq.future_value,
    inputs={
        "rate": 0.035, "periods": 12, "present_value": 1_000,
        "compounding": CompoundingMode.CONTINUOUS,
    },
    expected=1_521.9616,
    decimals=4,
)

PERIODS_TO_GROW = TvmExample(
    id="N-1",
    description="Years for 136,000 to grow to 468,000 at 8%.",
    function=tvm_eq.periods,
    inputs={"rate": 0.08, "present_value": 136_000, "future_value": 468_000},
    expected=16.06,
)

PERIODS_TO_SHRINK = TvmExample(
    id="N-2",
    description="Years for 15,000 to fall to 12,000 losing 6% a year.",
    function=tvm_eq.periods,
    inputs={"rate": -0.06, "present_value": 15_000, "future_value": 12_000},
    expected=3.61,
)

RATE_TO_GROW = TvmExample(
    id="R-1",
    description="Annual rate that grows 137,000 into 475,000 in 14 years.",
    function=tvm_eq.rate,
    inputs={"periods": 14, "present_value": 137_000, "future_value": 475_000},
    expected=0.0929,
    decimals=4,
)


# =============================================================================
# NOMINAL RATES WITH MORE THAN ONE COMPOUNDING PERIOD A YEAR
# =============================================================================

PV_SEMIANNUAL = TvmExample(
    id="APR-1",
    description="Present value of 197,000 due in 5 years at 13% APR compounded semiannually.",
    function=tvm_eq.present_value,
    inputs={
        "rate": tvm_rates.convert_apr_to_periodic(0.13, 2), "periods": 5 * 2,
        "future_value": 197_000,
    },
    expected=104_947.03,
)

FV_MONTHLY = TvmExample(
    id="APR-2",
    description="Future value of 153,000 after 13 years at 10% APR compounded monthly.",
    function=tvm_eq.future_value,
    inputs={
        "rate": tvm_rates.convert_apr_to_periodic(0.10, 12), "periods": 13 * 12,
        "present_value": 153_000,
    },
    expected=558_386.38,
)

YEARS_MONTHLY = TvmExample(
    id="APR-3",
    description="Years for 197,000 to grow to 554,000 at 8% APR compounded monthly.",
    function=tvm_eq.periods,
    inputs={
        "rate": tvm_rates.convert_apr_to_periodic(0.08, 12),
        "present_value": 197_000, "future_value": 554_000,
    },
    expected=12.97,
    scale=1 / 12,
)

APR_WEEKLY = TvmExample(
    id="APR-4",
    description="APR, compounded weekly, that grows 134,000 into 459,000 in 15 years.",
    function=tvm_eq.rate,
    inputs={"periods": 15 * 52, "present_value": 134_000, "future_value": 459_000},
    expected=0.0821,
    decimals=4,
    scale=52,
)

EAR_QUARTERLY = TvmExample(
    id="EAR-1",
    description="Effective annual rate of 13% APR compounded quarterly.",
    function=tvm_rates.convert_apr_to_ear,
    inputs={"apr": 0.13, "compounds_per_year": 4},
    expected=0.1365,
    decimals=4,
)


# =============================================================================
# ANNUITIES
# =============================================================================

PV_ANNUITY = TvmExample(
    id="ANN-1",
    description="Present value of 24,000 a year for 11 years at 13%.",
    function=tvm_eq.present_value_annuity,
    inputs={"payment": 24_000, "rate": 0.13, "periods": 11},
    expected=136_486.59,
)

FV_ANNUITY = TvmExample(
    id="ANN-2",
    description="Future value of 16,000 deposited at the end of each year for 12 years at 14%.",
    function=tvm_eq.future_value_annuity,
    inputs={"payment": 16_000, "rate": 0.14, "periods": 12},
    expected=436_331.98,
)

ANNUITY_PAYMENT = TvmExample(
    id="ANN-3",
    description="Annual payment that pays off 389,000 over 25 years at 14%.",
    function=tvm_eq.payment,
    inputs={"rate": 0.14, "periods": 25, "present_value": 389_000},
    expected=-56_598.88,
)

ANNUITY_RATE = TvmExample(
    id="ANN-4",
    description="Rate at which 11,000 deposited each year for 23 years grows to 366,000.",
    function=tvm_excel.rate,
    inputs={"nper": 23, "pmt": -11_000, "pv": 0, "fv": 366_000},
    expected=0.0321,
    decimals=4,
)

CAR_LOAN = TvmExample(
    id="ANN-5",
    description=(
        "Monthly payment on a 25,700 car with 3,598 down, "
        "financed for 60 months at 8% APR."
    ),
    function=tvm_eq.payment,
    inputs={
        "rate": tvm_rates.convert_apr_to_periodic(0.08, 12), "periods": 60,
        "present_value": 25_700 - 3_598,
    },
    expected=-448.15,
)

LOAN_PAYMENT = TvmExample(
    id="ANN-6",
    description="Monthly payment on 10,000 borrowed for 60 months at 10% APR.",
    function=tvm_eq.payment,
    inputs={"rate": 0.10 / 12, "periods": 60, "present_value": 10_000},
    expected=-212.4704,
    decimals=4,
)

LENDER_PAYMENT = TvmExample(
    id="ANN-7",
    description="Monthly payment received on 12,500.50 lent for 48 months at 11.75% APR.",
    function=tvm_eq.payment,
    inputs={"rate": 0.1175 / 12, "periods": 48, "present_value": -12_500.50},
    expected=327.6538,
    decimals=4,
)


# =============================================================================
# ANNUITIES DUE
# =============================================================================

PV_ANNUITY_DUE = TvmExample(
    id="DUE-1",
    description="Present value of 17,000 at the start of each year for 7 years at 11%.",
    function=tvm_eq.present_value_annuity_due,
    inputs={"payment": 17_000, "rate": 0.11, "periods": 7},
    expected=88_919.14,
)

FV_ANNUITY_DUE = TvmExample(
    id="DUE-2",
    description="Future value of 15,000 at the start of each year for 9 years at 8%.",
    function=tvm_eq.future_value_annuity_due,
    inputs={"payment": 15_000, "rate": 0.08, "periods": 9},
    expected=202_298.44,
)

SAVINGS_PAYMENT_DUE = TvmExample(
    id="DUE-3",
    description="Deposit at the start of each year for 12 years at 9% to reach 450,000.",
    function=tvm_eq.payment,
    inputs={
        "rate": 0.09, "periods": 12, "present_value": 0, "future_value": 450_000,
        "due": DueTiming.DUE,
    },
    expected=-20_497.98,
)

ANNUITY_DUE_RATE = TvmExample(
    id="DUE-4",
    description="Rate at which 11,100 deposited at the start of each year for 19 years grows to 375,000.",
    function=tvm_excel.rate,
    inputs={"nper": 19, "pmt": -11_100, "pv": 0, "fv": 375_000, "when": "begin"},
    expected=0.0548,
    decimals=4,
)

LOAN_PAYMENT_DUE = TvmExample(
    id="DUE-5",
    description="Payment at the start of each month on 25,000 over 120 months at 8% APR.",
    function=tvm_eq.payment_due,
    inputs={"rate": 0.08 / 12, "periods": 120, "present_value": 25_000},
    expected=-301.3103,
    decimals=4,
)


# =============================================================================
# PERPETUITIES AND NET PRESENT VALUE
# =============================================================================

PERPETUITY = TvmExample(
    id="PERP-1",
    description="500 a period forever at 1% per period.",
    function=tvm_eq.present_value_perpetuity_simple,
    inputs={"payment": 500, "rate": 0.01},
    expected=50_000.00,
)

PERPETUITY_DUE = TvmExample(
    id="PERP-2",
    description="500 a period forever at 1%, the first payment received today.",
    function=tvm_eq.present_value_perpetuity_simple,
    inputs={"payment": 500, "rate": 0.01, "due": DueTiming.DUE},
    expected=50_500.00,
)

NPV_UNEVEN = TvmExample(
    id="NPV-1",
    description="Present value of 12,000, 14,000, 17,000, 19,000, 23,000 and 29,000 over six years at 11%.",
    function=tvm_eq.net_present_value_schedule,
    inputs={"rates": [0.11], "cashflows": [0, 12_000, 14_000, 17_000, 19_000, 23_000, 29_000]},
    expected=76_273.63,
)


EXAMPLES = {
    # Single sums
    "PV_LUMP_SUM": PV_LUMP_SUM,
    "FV_LUMP_SUM": FV_LUMP_SUM,
    "FV_INTEREST_ON_INTEREST": FV_INTEREST_ON_INTEREST,
    "FV_CONTINUOUS": FV_CONTINUOUS,
    "PERIODS_TO_GROW": PERIODS_TO_GROW,
    "PERIODS_TO_SHRINK": PERIODS_TO_SHRINK,
    "RATE_TO_GROW": RATE_TO_GROW,

    # Nominal rates
    "PV_SEMIANNUAL": PV_SEMIANNUAL,
    "FV_MONTHLY": FV_MONTHLY,
    "YEARS_MONTHLY": YEARS_MONTHLY,
    "APR_WEEKLY": APR_WEEKLY,
    "EAR_QUARTERLY": EAR_QUARTERLY,

    # Annuities
    "PV_ANNUITY": PV_ANNUITY,
    "FV_ANNUITY": FV_ANNUITY,
    "ANNUITY_PAYMENT": ANNUITY_PAYMENT,
    "ANNUITY_RATE": ANNUITY_RATE,
    "CAR_LOAN": CAR_LOAN,
    "LOAN_PAYMENT": LOAN_PAYMENT,
    "LENDER_PAYMENT": LENDER_PAYMENT,

    # Annuities due
    "PV_ANNUITY_DUE": PV_ANNUITY_DUE,
    "FV_ANNUITY_DUE": FV_ANNUITY_DUE,
    "SAVINGS_PAYMENT_DUE": SAVINGS_PAYMENT_DUE,
    "ANNUITY_DUE_RATE": ANNUITY_DUE_RATE,
    "LOAN_PAYMENT_DUE": LOAN_PAYMENT_DUE,

    # Perpetuities and NPV
    "PERPETUITY": PERPETUITY,
    "PERPETUITY_DUE": PERPETUITY_DUE,
    "NPV_UNEVEN": NPV_UNEVEN,
}


# =============================================================================
# QUICK TEST
# =============================================================================
if __name__ == "__main__":
    print("TVM Worked Examples")
    print("=" * 70)

    for name, ex in EXAMPLES.items():
        result = ex.compute()
        status = "ok" if round(result, ex.decimals) == round(ex.expected, ex.decimals) else "MISMATCH"
        print(f"\n{ex.id} {name}: {ex.description}")
        print(f"  {ex.function.__name__}({ex.inputs})")
        print(f"  expected={ex.expected:,.{ex.decimals}f}  computed={result:,.{ex.decimals}f}  [{status}]")
