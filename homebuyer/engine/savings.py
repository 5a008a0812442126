"""Ways to close the gap between current savings and a 20% down payment."""

import math
from decimal import Decimal, ROUND_HALF_UP

from homebuyer.engine.policy import PMI_EQUITY_THRESHOLD
from homebuyer.models.results import Difficulty, SavingsStrategy

ZERO = Decimal("0")
WHOLE_DOLLAR = Decimal("1")

AGGRESSIVE_SHARE = Decimal("0.7")  # Of monthly surplus
MODERATE_SHARE = Decimal("0.4")
FHA_MIN_DOWN = Decimal("0.035")
ASSISTANCE_CAP = Decimal("25000")
ASSISTANCE_MONTHS = 2


def _dollars(value: Decimal) -> Decimal:
    return value.quantize(WHOLE_DOLLAR, ROUND_HALF_UP)


def target_down_payment(home_price: Decimal) -> Decimal:
    """Down payment that avoids PMI."""
    return _dollars(home_price * PMI_EQUITY_THRESHOLD)


def suggest_savings_strategies(
    current_savings: Decimal,
    target: Decimal,
    gross_monthly_income: Decimal,
    monthly_expenses: Decimal,
    monthly_debts: Decimal,
    first_time_buyer: bool = False,
) -> list[SavingsStrategy]:
    """Saving plans first, then the lower-down and assistance routes.

    Saving plans need a monthly surplus (gross income less expenses and
    debts). No gap means no strategies.
    """
    gap = max(ZERO, target - current_savings)
    if gap == 0:
        return []

    strategies: list[SavingsStrategy] = []
    surplus = gross_monthly_income - monthly_expenses - monthly_debts
    if surplus > 0:
        for title, share, difficulty in (
            ("Aggressive Savings Plan", AGGRESSIVE_SHARE, Difficulty.HARD),
            ("Moderate Savings Plan", MODERATE_SHARE, Difficulty.MODERATE),
        ):
            monthly = surplus * share
            strategies.append(SavingsStrategy(
                title=title,
                description=f"Save {share * 100:.0f}% of monthly surplus (${monthly:,.0f}/mo)",
                potential_savings=_dollars(gap),
                timeframe_months=math.ceil(gap / monthly),
                difficulty=difficulty,
            ))

    fha_down = _dollars(target / PMI_EQUITY_THRESHOLD * FHA_MIN_DOWN)
    strategies.append(SavingsStrategy(
        title="Consider Lower Down Payment",
        description=f"FHA allows 3.5% down (${fha_down:,.0f} instead of ${target:,.0f} at 20%)",
        potential_savings=_dollars(target - fha_down),
        timeframe_months=0,
        difficulty=Difficulty.EASY,
    ))

    if first_time_buyer:
        assistance = "As a first-time buyer you qualify for most state and local grants and forgivable loans."
    else:
        assistance = "Research state and local programs; many offer grants or forgivable loans."
    strategies.append(SavingsStrategy(
        title="Down Payment Assistance Programs",
        description=assistance,
        potential_savings=_dollars(min(gap, ASSISTANCE_CAP)),
        timeframe_months=ASSISTANCE_MONTHS,
        difficulty=Difficulty.MODERATE,
    ))
    return strategies
