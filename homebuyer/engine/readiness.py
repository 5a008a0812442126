"""Pre-approval readiness score.

Scoring dimensions (0-100 total):
  Debt-to-income:  0-25  (back-end DTI at the recommended price)
  Credit score:    0-25
  Down payment:    0-25  (savings as % of max affordable price)
  Debt health:     0-25  (0-15 existing debt load + 0-10 emergency fund months)

Breakpoints reuse the DTI and emergency fund policy bands so a borrower's
numbers never read differently here than in the DTI or risk sections.
"""

from decimal import Decimal, ROUND_HALF_UP

from homebuyer.engine.policy import (
    BACK_END_MODERATE_MAX,
    BACK_END_SAFE_MAX,
    EMERGENCY_FUND_MINIMUM_MONTHS,
    EMERGENCY_FUND_TARGET_MONTHS,
    FRONT_END_SAFE_MAX,
    INCOME_LOSS_UNSUSTAINABLE,
    PMI_EQUITY_THRESHOLD,
)
from homebuyer.models.results import (
    ActionItem,
    DTIAnalysis,
    PreApprovalReadinessScore,
    Priority,
    ReadinessComponents,
    ReadinessLevel,
)

TWO_PLACES = Decimal("0.01")
DIMENSION_MAX = 25
DEBT_LOAD_MAX = 15
EMERGENCY_MAX = 10

# (ceiling, score): first ceiling the value is at or under wins
DTI_BANDS: list[tuple[Decimal, int]] = [
    (FRONT_END_SAFE_MAX, 25),
    (BACK_END_SAFE_MAX, 20),
    (BACK_END_MODERATE_MAX, 12),
    (INCOME_LOSS_UNSUSTAINABLE, 5),
]
DEBT_LOAD_BANDS: list[tuple[Decimal, int]] = [
    (Decimal("10"), 15),
    (Decimal("20"), 10),
    (Decimal("30"), 5),
]

# (floor, score): first floor the value is at or over wins
CREDIT_BANDS: list[tuple[Decimal, int]] = [
    (Decimal("760"), 25),
    (Decimal("720"), 21),
    (Decimal("680"), 17),
    (Decimal("640"), 12),
    (Decimal("620"), 8),
    (Decimal("580"), 4),
]
DOWN_PAYMENT_BANDS: list[tuple[Decimal, int]] = [
    (PMI_EQUITY_THRESHOLD * 100, 25),
    (Decimal("10"), 18),
    (Decimal("5"), 12),
    (Decimal("3.5"), 8),  # FHA minimum
]
EMERGENCY_BANDS: list[tuple[Decimal, int]] = [
    (Decimal(EMERGENCY_FUND_TARGET_MONTHS), 10),
    (Decimal(EMERGENCY_FUND_MINIMUM_MONTHS), 6),
    (Decimal("1"), 3),
]

LEVEL_FLOORS: list[tuple[int, ReadinessLevel]] = [
    (85, ReadinessLevel.HIGHLY_PREPARED),
    (70, ReadinessLevel.READY),
    (50, ReadinessLevel.NEEDS_WORK),
]

_PRIORITY_ORDER = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


def _score_ceiling(value: Decimal, bands: list[tuple[Decimal, int]]) -> tuple[int, tuple[Decimal, int] | None]:
    """Score for lower-is-better values, plus the next better band."""
    for i, (ceiling, score) in enumerate(bands):
        if value <= ceiling:
            return score, bands[i - 1] if i > 0 else None
    return 0, bands[-1]


def _score_floor(value: Decimal, bands: list[tuple[Decimal, int]]) -> tuple[int, tuple[Decimal, int] | None]:
    """Score for higher-is-better values, plus the next better band."""
    for i, (floor, score) in enumerate(bands):
        if value >= floor:
            return score, bands[i - 1] if i > 0 else None
    return 0, bands[-1]


def _priority(score: int, max_score: int) -> Priority:
    share = score / max_score
    if share <= 0.4:
        return Priority.HIGH
    if share <= 0.75:
        return Priority.MEDIUM
    return Priority.LOW


def _impact(points: int) -> str:
    return f"Could improve your score by up to {points} points"


def readiness_level(overall: int) -> ReadinessLevel:
    for floor, level in LEVEL_FLOORS:
        if overall >= floor:
            return level
    return ReadinessLevel.NOT_READY


def score_readiness(
    credit_score: int,
    dti: DTIAnalysis,
    down_payment_savings: Decimal,
    max_home_price: Decimal,
    monthly_debts: Decimal,
    gross_monthly_income: Decimal,
    emergency_fund_months: int,
) -> PreApprovalReadinessScore:
    """Composite 0-100 readiness with action items for every dimension below its top band."""
    if gross_monthly_income <= 0:
        raise ValueError(f"gross_monthly_income must be positive, got {gross_monthly_income}")

    items: list[ActionItem] = []

    # DTI
    dti_score, dti_next = _score_ceiling(dti.back_end_ratio, DTI_BANDS)
    if dti_next is not None:
        target, next_score = dti_next
        items.append(ActionItem(
            category="dti",
            priority=_priority(dti_score, DIMENSION_MAX),
            action=(
                f"Lower your back-end DTI from {dti.back_end_ratio}% to {target}% or less "
                "by paying down debts or targeting a lower price"
            ),
            impact=_impact(next_score - dti_score),
            points=next_score - dti_score,
        ))

    # Credit
    credit_pts, credit_next = _score_floor(Decimal(credit_score), CREDIT_BANDS)
    if credit_next is not None:
        target, next_score = credit_next
        items.append(ActionItem(
            category="credit",
            priority=_priority(credit_pts, DIMENSION_MAX),
            action=(
                f"Raise your credit score from {credit_score} to {target}+ by paying on time "
                "and keeping card utilization under 30%"
            ),
            impact=_impact(next_score - credit_pts),
            points=next_score - credit_pts,
        ))

    # Down payment
    if max_home_price > 0:
        down_pct = (down_payment_savings / max_home_price * 100).quantize(TWO_PLACES, ROUND_HALF_UP)
    else:
        down_pct = Decimal("0")
    down_score, down_next = _score_floor(down_pct, DOWN_PAYMENT_BANDS)
    if down_next is not None:
        target, next_score = down_next
        if max_home_price > 0:
            gap = max(Decimal("0"), max_home_price * target / 100 - down_payment_savings)
            action = (
                f"Save an additional ${gap:,.0f} to reach a {target.normalize():f}% down payment "
                f"on a ${max_home_price:,.0f} home"
            )
        else:
            action = "Increase income or reduce debts so you qualify for a loan, then build a down payment"
        items.append(ActionItem(
            category="down_payment",
            priority=_priority(down_score, DIMENSION_MAX),
            action=action,
            impact=_impact(next_score - down_score),
            points=next_score - down_score,
        ))

    # Debt health: existing debt load + emergency fund
    debt_ratio = (monthly_debts / gross_monthly_income * 100).quantize(TWO_PLACES, ROUND_HALF_UP)
    load_score, load_next = _score_ceiling(debt_ratio, DEBT_LOAD_BANDS)
    if load_next is not None:
        target, next_score = load_next
        items.append(ActionItem(
            category="debt_health",
            priority=_priority(load_score, DEBT_LOAD_MAX),
            action=(
                f"Pay down existing debts from {debt_ratio}% to {target.normalize():f}% "
                "of gross monthly income"
            ),
            impact=_impact(next_score - load_score),
            points=next_score - load_score,
        ))

    fund_score, fund_next = _score_floor(Decimal(emergency_fund_months), EMERGENCY_BANDS)
    if fund_next is not None:
        target, next_score = fund_next
        items.append(ActionItem(
            category="emergency_fund",
            priority=_priority(fund_score, EMERGENCY_MAX),
            action=(
                f"Build your post-purchase emergency fund from {emergency_fund_months} to "
                f"{target.normalize():f} months of expenses"
            ),
            impact=_impact(next_score - fund_score),
            points=next_score - fund_score,
        ))

    components = ReadinessComponents(
        dti_score=dti_score,
        credit_score=credit_pts,
        down_payment_score=down_score,
        debt_health_score=load_score + fund_score,
    )
    overall = components.total
    items.sort(key=lambda item: _PRIORITY_ORDER[item.priority])

    return PreApprovalReadinessScore(
        overall_score=overall,
        level=readiness_level(overall),
        components=components,
        action_items=items,
    )
