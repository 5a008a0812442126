"""Front-end / back-end debt-to-income classification."""

from decimal import Decimal, ROUND_HALF_UP

from homebuyer.engine.policy import (
    BACK_END_MODERATE_MAX,
    BACK_END_SAFE_MAX,
    FRONT_END_MODERATE_MAX,
    FRONT_END_SAFE_MAX,
)
from homebuyer.models.results import DTIAnalysis, DTIStatus

TWO_PLACES = Decimal("0.01")


def _band(ratio_pct: Decimal, safe_max: Decimal, moderate_max: Decimal) -> DTIStatus:
    if ratio_pct <= safe_max:
        return DTIStatus.SAFE
    if ratio_pct <= moderate_max:
        return DTIStatus.MODERATE
    return DTIStatus.RISKY


def classify_front_end(ratio_pct: Decimal) -> DTIStatus:
    return _band(ratio_pct, FRONT_END_SAFE_MAX, FRONT_END_MODERATE_MAX)


def classify_back_end(ratio_pct: Decimal) -> DTIStatus:
    return _band(ratio_pct, BACK_END_SAFE_MAX, BACK_END_MODERATE_MAX)


def dti_percent(obligations: Decimal, gross_monthly_income: Decimal) -> Decimal:
    """Obligations as a percent of income, 2dp."""
    return (obligations / gross_monthly_income * 100).quantize(TWO_PLACES, ROUND_HALF_UP)


def calculate_dti(
    gross_monthly_income: Decimal,
    proposed_housing_payment: Decimal,
    existing_monthly_debts: Decimal,
) -> DTIAnalysis:
    """Front-end = housing / income, back-end = (housing + debts) / income.

    Statuses are read off the reported 2dp ratios, so 28.00% is safe and
    28.01% is moderate.
    """
    if gross_monthly_income <= 0:
        raise ValueError(f"gross_monthly_income must be positive, got {gross_monthly_income}")
    if proposed_housing_payment < 0 or existing_monthly_debts < 0:
        raise ValueError("housing payment and debts must not be negative")

    front = dti_percent(proposed_housing_payment, gross_monthly_income)
    back = dti_percent(proposed_housing_payment + existing_monthly_debts, gross_monthly_income)

    return DTIAnalysis(
        front_end_ratio=front,
        back_end_ratio=back,
        front_end_status=classify_front_end(front),
        back_end_status=classify_back_end(back),
        max_front_end=FRONT_END_SAFE_MAX,
        max_back_end=BACK_END_SAFE_MAX,
    )
