"""Loan program eligibility: conventional, FHA, VA and USDA.

Screening rules only. A lender still underwrites DTI, property and
location; USDA in particular also needs an eligible rural address.
"""

from decimal import Decimal

from homebuyer.engine.policy import PMI_EQUITY_THRESHOLD
from homebuyer.models.results import LoanProgram, LoanProgramType

CONVENTIONAL_MIN_CREDIT = 620
CONVENTIONAL_PRIME_CREDIT = 740  # 3% down without first-time buyer status
CONVENTIONAL_LOW_DOWN_PCT = Decimal("3")
CONVENTIONAL_STANDARD_DOWN_PCT = Decimal("5")

FHA_MIN_CREDIT = 500
FHA_LOW_DOWN_CREDIT = 580
FHA_LOW_DOWN_PCT = Decimal("3.5")
FHA_STANDARD_DOWN_PCT = Decimal("10")

USDA_INCOME_LIMIT = Decimal("115000")  # Typical 1-4 person household limit


def conventional_program(
    credit_score: int, down_payment_percent: Decimal, first_time_buyer: bool = False
) -> LoanProgram:
    """Conventional conforming loan.

    3% down is open to first-time buyers and to prime credit; everyone else
    needs 5%. PMI applies under 20% down.
    """
    low_down = first_time_buyer or credit_score >= CONVENTIONAL_PRIME_CREDIT
    min_down = CONVENTIONAL_LOW_DOWN_PCT if low_down else CONVENTIONAL_STANDARD_DOWN_PCT
    pmi = down_payment_percent < PMI_EQUITY_THRESHOLD * 100

    if credit_score < CONVENTIONAL_MIN_CREDIT:
        reason = f"Credit score {credit_score} below {CONVENTIONAL_MIN_CREDIT} minimum"
    elif down_payment_percent < min_down:
        reason = f"Need at least {min_down}% down payment"
    else:
        reason = "Meets all requirements"

    cons = []
    if pmi:
        cons.append("PMI required until 20% equity")
    if credit_score < 700:
        cons.append("Higher rates with lower credit")
    cons.append("Stricter DTI requirements")

    return LoanProgram(
        program=LoanProgramType.CONVENTIONAL,
        eligible=credit_score >= CONVENTIONAL_MIN_CREDIT and down_payment_percent >= min_down,
        eligibility_reason=reason,
        min_down_payment_percent=min_down,
        mortgage_insurance_required=pmi,
        pros=[
            "No upfront mortgage insurance premium",
            "PMI removable at 80% LTV",
            "Flexible property types",
            "Best rates with excellent credit" if credit_score >= CONVENTIONAL_PRIME_CREDIT else "Widely available",
        ],
        cons=cons,
    )


def fha_program(credit_score: int, first_time_buyer: bool = False) -> LoanProgram:
    low_down = credit_score >= FHA_LOW_DOWN_CREDIT
    if credit_score < FHA_MIN_CREDIT:
        reason = f"Credit score {credit_score} below {FHA_MIN_CREDIT} minimum"
    elif not low_down:
        reason = f"Eligible but requires {FHA_STANDARD_DOWN_PCT}% down payment"
    else:
        reason = "Meets all requirements"

    pros = [
        "Lower credit score requirements (500+)",
        "Only 3.5% down payment" if low_down else "Available with 10% down",
        "More lenient DTI ratios (up to 43%)",
    ]
    if first_time_buyer:
        pros.append("Pairs with most first-time buyer assistance programs")

    return LoanProgram(
        program=LoanProgramType.FHA,
        eligible=credit_score >= FHA_MIN_CREDIT,
        eligibility_reason=reason,
        min_down_payment_percent=FHA_LOW_DOWN_PCT if low_down else FHA_STANDARD_DOWN_PCT,
        mortgage_insurance_required=True,
        pros=pros,
        cons=[
            "Mortgage insurance for life of loan (if < 10% down)",
            "Upfront MIP of 1.75% of loan amount",
            "Property must meet FHA standards",
            "Loan limits may restrict options in high-cost areas",
        ],
    )


def va_program(military_veteran: bool) -> LoanProgram:
    return LoanProgram(
        program=LoanProgramType.VA,
        eligible=military_veteran,
        eligibility_reason=(
            "Eligible as military veteran/active duty"
            if military_veteran
            else "Not eligible - requires military service"
        ),
        min_down_payment_percent=Decimal("0"),
        mortgage_insurance_required=False,
        pros=[
            "No down payment required",
            "No PMI",
            "Competitive interest rates",
            "No loan limits for qualified buyers",
        ],
        cons=[
            "VA funding fee (1.25-3.3% of loan)",
            "Property must be primary residence",
            "Must meet VA appraisal requirements",
        ],
    )


def usda_program(annual_income: Decimal) -> LoanProgram:
    within_limit = annual_income <= USDA_INCOME_LIMIT
    return LoanProgram(
        program=LoanProgramType.USDA,
        eligible=within_limit,
        eligibility_reason=(
            "May be eligible (income within limits, must verify rural area)"
            if within_limit
            else "Income exceeds USDA limits for most areas"
        ),
        min_down_payment_percent=Decimal("0"),
        mortgage_insurance_required=True,
        pros=[
            "No down payment required",
            "Below-market interest rates",
            "Low mortgage insurance rates",
        ],
        cons=[
            "Property must be in USDA-eligible rural area",
            "Income limits apply",
            "Guarantee fee required (1% upfront + 0.35% annual)",
            "Primary residence only",
        ],
    )


def lookup_loan_programs(
    credit_score: int,
    down_payment_percent: Decimal,
    annual_income: Decimal,
    military_veteran: bool = False,
    first_time_buyer: bool = False,
) -> list[LoanProgram]:
    """All four programs, eligible or not, in a fixed order.

    down_payment_percent is a percentage (10 means 10%).
    """
    if down_payment_percent < 0:
        raise ValueError(f"down_payment_percent must not be negative, got {down_payment_percent}")
    return [
        conventional_program(credit_score, down_payment_percent, first_time_buyer),
        fha_program(credit_score, first_time_buyer),
        va_program(military_veteran),
        usda_program(annual_income),
    ]
