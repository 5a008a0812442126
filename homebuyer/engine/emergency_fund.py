"""Post-purchase emergency fund runway."""

import math
from decimal import Decimal, ROUND_HALF_UP

from homebuyer.engine.policy import (
    EMERGENCY_FUND_MINIMUM_MONTHS,
    EMERGENCY_FUND_TARGET_MONTHS,
    UNBOUNDED_SENTINEL,
)
from homebuyer.models.results import EmergencyFundAnalysis

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")


def _recommendation(months: int) -> str:
    if months >= EMERGENCY_FUND_TARGET_MONTHS:
        return "Your emergency fund is adequate. You have a solid financial cushion."
    if months >= EMERGENCY_FUND_MINIMUM_MONTHS:
        return (
            f"You have {months} months of reserves. Consider building to "
            f"{EMERGENCY_FUND_TARGET_MONTHS} months before buying, or ensure stable income."
        )
    return (
        f"Only {months} months of reserves after purchase. This is risky. "
        "Consider saving more or reducing your target home price."
    )


def evaluate_emergency_fund(
    total_savings: Decimal,
    down_payment: Decimal,
    closing_costs: Decimal,
    monthly_expenses: Decimal,
    monthly_housing_payment: Decimal,
) -> EmergencyFundAnalysis:
    """Months of living expenses + housing covered by savings left after closing."""
    if min(total_savings, down_payment, closing_costs, monthly_expenses, monthly_housing_payment) < 0:
        raise ValueError("emergency fund inputs must not be negative")

    post_purchase = total_savings - down_payment - closing_costs
    monthly_need = monthly_expenses + monthly_housing_payment
    if monthly_need > 0:
        months = min(math.floor(max(ZERO, post_purchase) / monthly_need), UNBOUNDED_SENTINEL)
    else:
        months = UNBOUNDED_SENTINEL

    return EmergencyFundAnalysis(
        current_emergency_fund=total_savings,
        post_purchase_savings=post_purchase.quantize(TWO_PLACES, ROUND_HALF_UP),
        monthly_need=monthly_need.quantize(TWO_PLACES, ROUND_HALF_UP),
        months_covered=months,
        adequate=months >= EMERGENCY_FUND_TARGET_MONTHS,
        recommendation=_recommendation(months),
    )
