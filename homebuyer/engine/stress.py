"""Stress scenarios: rate hikes and income loss.

Pure functions over an already-computed affordability result. Both scenario
families return StressTestResult so callers can merge them into one list.
"""

import math
from decimal import Decimal, ROUND_HALF_UP

from homebuyer.engine.dti import dti_percent
from homebuyer.engine.payment import monthly_pi
from homebuyer.engine.policy import (
    BACK_END_MODERATE_MAX,
    BACK_END_SAFE_MAX,
    INCOME_LOSS_PERCENTS,
    INCOME_LOSS_UNSUSTAINABLE,
    RATE_HIKE_DELTAS,
    UNBOUNDED_SENTINEL,
)
from homebuyer.models.results import (
    AffordabilityResult,
    ScenarioKind,
    Severity,
    StressTestResult,
)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")


def _severity(dti: Decimal, unsustainable_above: Decimal) -> Severity:
    if dti <= BACK_END_SAFE_MAX:
        return Severity.MANAGEABLE
    if dti <= unsustainable_above:
        return Severity.STRAINED
    return Severity.UNSUSTAINABLE


def stress_test_rate_hike(
    loan_amount: Decimal,
    base_rate: Decimal,
    rate_increase: Decimal,
    loan_term_years: int,
    gross_monthly_income: Decimal,
    existing_monthly_debts: Decimal,
    property_tax_monthly: Decimal,
    insurance_monthly: Decimal,
    pmi_monthly: Decimal = ZERO,
) -> StressTestResult:
    """Re-price P&I at base_rate + rate_increase with tax, insurance and PMI held fixed.

    Rates are decimals (0.01 = one percentage point).
    """
    if gross_monthly_income <= 0:
        raise ValueError(f"gross_monthly_income must be positive, got {gross_monthly_income}")

    new_rate = base_rate + rate_increase
    new_payment = (
        monthly_pi(loan_amount, new_rate, loan_term_years)
        + property_tax_monthly + insurance_monthly + pmi_monthly
    ).quantize(TWO_PLACES, ROUND_HALF_UP)
    new_dti = dti_percent(new_payment + existing_monthly_debts, gross_monthly_income)

    points = (rate_increase * 100).normalize()
    return StressTestResult(
        scenario=f"Rate +{points:f}%",
        description=(
            f"Rates rise {points:f} points to {(new_rate * 100).quantize(TWO_PLACES)}%: "
            f"payment ${new_payment:,.2f}/mo, back-end DTI {new_dti}%"
        ),
        kind=ScenarioKind.RATE_HIKE,
        new_dti=new_dti,
        can_afford=new_dti <= BACK_END_MODERATE_MAX,
        severity=_severity(new_dti, BACK_END_MODERATE_MAX),
        new_monthly_payment=new_payment,
        new_rate=new_rate,
    )


def stress_test_income_loss(
    gross_monthly_income: Decimal,
    income_reduction_percent: Decimal,
    monthly_housing_payment: Decimal,
    existing_monthly_debts: Decimal,
    remaining_savings: Decimal,
    monthly_expenses: Decimal,
) -> StressTestResult:
    """Cut income by a percentage and measure DTI and savings runway.

    The housing payment is unchanged. Runway is how many months savings
    cover the deficit, or the 999 sentinel when there is no deficit.
    """
    if gross_monthly_income <= 0:
        raise ValueError(f"gross_monthly_income must be positive, got {gross_monthly_income}")
    if not ZERO <= income_reduction_percent <= 100:
        raise ValueError(f"income_reduction_percent must be in [0, 100], got {income_reduction_percent}")

    reduced_income = gross_monthly_income * (1 - income_reduction_percent / 100)
    total_obligations = monthly_housing_payment + existing_monthly_debts + monthly_expenses
    surplus = reduced_income - total_obligations

    if reduced_income > 0:
        new_dti = dti_percent(monthly_housing_payment + existing_monthly_debts, reduced_income)
    else:
        new_dti = Decimal(UNBOUNDED_SENTINEL)

    if surplus < 0:
        runway = math.floor(max(ZERO, remaining_savings) / abs(surplus))
    else:
        runway = UNBOUNDED_SENTINEL
    runway = min(runway, UNBOUNDED_SENTINEL)

    pct = income_reduction_percent.normalize()
    label = "Job loss" if income_reduction_percent == 100 else f"Income -{pct:f}%"
    if surplus < 0:
        tail = f"savings last {runway} months" if runway < UNBOUNDED_SENTINEL else "savings cover the gap"
        description = f"Income falls {pct:f}%: monthly deficit ${abs(surplus):,.2f}, {tail}"
    else:
        description = f"Income falls {pct:f}%: still ${surplus:,.2f}/mo surplus"

    return StressTestResult(
        scenario=label,
        description=description,
        kind=ScenarioKind.INCOME_LOSS,
        new_dti=new_dti,
        can_afford=new_dti <= INCOME_LOSS_UNSUSTAINABLE,
        severity=_severity(new_dti, INCOME_LOSS_UNSUSTAINABLE),
        reduced_income=reduced_income.quantize(TWO_PLACES, ROUND_HALF_UP),
        monthly_surplus_or_deficit=surplus.quantize(TWO_PLACES, ROUND_HALF_UP),
        months_of_runway=runway,
    )


def run_stress_tests(
    affordability: AffordabilityResult,
    gross_monthly_income: Decimal,
    existing_monthly_debts: Decimal,
    remaining_savings: Decimal,
    monthly_expenses: Decimal,
    rate_deltas: tuple[Decimal, ...] = RATE_HIKE_DELTAS,
    income_cuts: tuple[Decimal, ...] = INCOME_LOSS_PERCENTS,
) -> list[StressTestResult]:
    """Standard rate-hike and income-loss suite for one affordability result."""
    payment = affordability.monthly_payment
    results = [
        stress_test_rate_hike(
            loan_amount=affordability.loan_amount,
            base_rate=affordability.interest_rate,
            rate_increase=delta,
            loan_term_years=affordability.loan_term_years,
            gross_monthly_income=gross_monthly_income,
            existing_monthly_debts=existing_monthly_debts,
            property_tax_monthly=payment.property_tax,
            insurance_monthly=payment.home_insurance,
            pmi_monthly=payment.pmi,
        )
        for delta in rate_deltas
    ]
    results.extend(
        stress_test_income_loss(
            gross_monthly_income=gross_monthly_income,
            income_reduction_percent=cut,
            monthly_housing_payment=payment.total_monthly,
            existing_monthly_debts=existing_monthly_debts,
            remaining_savings=remaining_savings,
            monthly_expenses=monthly_expenses,
        )
        for cut in income_cuts
    )
    return results
