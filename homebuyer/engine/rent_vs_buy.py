"""Month-by-month rent vs. buy simulation.

Three compounding processes run in one loop:
  - the mortgage amortizes monthly at the loan's monthly rate
  - home value and rent step up once per 12-month boundary
  - down payment + closing costs compound annually at the opportunity-cost
    rate, as if they had been invested instead

Net buy cost = cash outlay - equity + forgone investment growth.
Snapshots are taken only at year boundaries; state updates every month.

Tax, insurance and PMI stay at their purchase-price values for the whole
horizon.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from homebuyer.engine.payment import monthly_pi
from homebuyer.models.assumptions import EconomicAssumptions
from homebuyer.models.results import RentVsBuyReport, RentVsBuyVerdict, RentVsBuyYear

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")
MAX_HORIZON_MONTHS = 360

VERDICT_YEAR = 5

# Verdict thresholds on the 5-year net advantage
BUY_CLEARLY_ABOVE = Decimal("20000")
BUY_SLIGHTLY_ABOVE = Decimal("0")
TOSS_UP_ABOVE = Decimal("-15000")

_DEFAULTS = EconomicAssumptions()


def _q(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def rent_vs_buy_verdict(five_year_advantage: Decimal) -> RentVsBuyVerdict:
    if five_year_advantage > BUY_CLEARLY_ABOVE:
        return RentVsBuyVerdict.BUY_CLEARLY
    if five_year_advantage > BUY_SLIGHTLY_ABOVE:
        return RentVsBuyVerdict.BUY_SLIGHTLY
    if five_year_advantage > TOSS_UP_ABOVE:
        return RentVsBuyVerdict.TOSS_UP
    return RentVsBuyVerdict.RENT_BETTER


def _explain(
    verdict: RentVsBuyVerdict, advantage: Decimal, years: int, break_even_year: int | None
) -> str:
    when = (
        f"Buying breaks even in year {break_even_year}."
        if break_even_year is not None
        else "Buying never breaks even within the loan horizon."
    )
    amount = f"${abs(advantage):,.0f}"
    span = f"{years} year" if years == 1 else f"{years} years"
    if verdict is RentVsBuyVerdict.BUY_CLEARLY:
        return f"Buying comes out {amount} ahead after {span}. {when}"
    if verdict is RentVsBuyVerdict.BUY_SLIGHTLY:
        return f"Buying is modestly ahead ({amount}) after {span}. {when}"
    if verdict is RentVsBuyVerdict.TOSS_UP:
        return (
            f"Renting and buying are within {amount} of each other after {span}; "
            f"the decision rests on how long you stay. {when}"
        )
    return f"Renting is {amount} cheaper over {span}. {when}"


def _snapshot_at(snapshots: list[RentVsBuyYear], year: int) -> RentVsBuyYear | None:
    if year > len(snapshots):
        return None
    return snapshots[year - 1]


def simulate_rent_vs_buy(
    home_price: Decimal,
    down_payment: Decimal,
    annual_rate: Decimal,
    loan_term_years: int,
    monthly_rent: Decimal,
    property_tax_monthly: Decimal,
    insurance_monthly: Decimal,
    pmi_monthly: Decimal = ZERO,
    home_appreciation: Decimal = _DEFAULTS.home_appreciation,
    rent_growth: Decimal = _DEFAULTS.rent_growth,
    maintenance_rate: Decimal = _DEFAULTS.maintenance_rate,
    closing_cost_pct: Decimal = _DEFAULTS.closing_cost_pct,
    opportunity_cost_rate: Decimal = _DEFAULTS.opportunity_cost_rate,
) -> RentVsBuyReport:
    """Compare cumulative rent against the net cost of owning, month by month.

    Break-even is the first month cumulative rent exceeds net buy cost; it is
    recorded once and never revised.
    """
    if home_price <= 0:
        raise ValueError(f"home_price must be positive, got {home_price}")
    if down_payment < 0 or monthly_rent < 0:
        raise ValueError("down_payment and monthly_rent must not be negative")
    if loan_term_years < 1:
        raise ValueError(f"loan_term_years must be at least 1, got {loan_term_years}")

    loan_amount = max(ZERO, home_price - down_payment)
    pmt = monthly_pi(loan_amount, annual_rate, loan_term_years)
    monthly_rate = annual_rate / 12
    fixed_monthly = property_tax_monthly + insurance_monthly + pmi_monthly
    monthly_buy_cost = pmt + fixed_monthly

    horizon = min(loan_term_years * 12, MAX_HORIZON_MONTHS)
    upfront = down_payment + home_price * closing_cost_pct

    # Rent side
    rent = monthly_rent
    rent_cumulative = ZERO

    # Buy side
    balance = loan_amount
    home_value = home_price
    buy_outlay = upfront

    # Counterfactual: upfront cash invested instead
    invested = upfront

    break_even_month: int | None = None
    snapshots: list[RentVsBuyYear] = []

    for month in range(1, horizon + 1):
        rent_cumulative += rent

        if balance > 0:
            interest = balance * monthly_rate
            principal = min(pmt - interest, balance)
            balance -= principal
            payment = interest + principal
        else:
            payment = ZERO
        maintenance = home_value * maintenance_rate / 12
        buy_outlay += payment + fixed_monthly + maintenance

        if month % 12 == 0:
            home_value *= 1 + home_appreciation
            invested *= 1 + opportunity_cost_rate
            rent *= 1 + rent_growth

        equity = home_value - balance
        net_buy_cost = buy_outlay - equity + (invested - upfront)

        if break_even_month is None and rent_cumulative > net_buy_cost:
            break_even_month = month

        if month % 12 == 0:
            snapshots.append(RentVsBuyYear(
                year=month // 12,
                rent_cumulative=_q(rent_cumulative),
                buy_cumulative=_q(net_buy_cost),
                equity_built=_q(equity),
                net_buy_advantage=_q(rent_cumulative - net_buy_cost),
            ))

    five = _snapshot_at(snapshots, VERDICT_YEAR)
    ten = _snapshot_at(snapshots, 10)
    # Horizons shorter than 5 years are judged at their last year-end
    verdict_years = min(VERDICT_YEAR, len(snapshots))
    basis = snapshots[verdict_years - 1]
    break_even_year = (break_even_month + 11) // 12 if break_even_month is not None else None
    verdict = rent_vs_buy_verdict(basis.net_buy_advantage)

    logger.debug(
        "Rent vs buy: %syr advantage %s, break-even month %s, verdict %s",
        verdict_years, basis.net_buy_advantage, break_even_month, verdict.value,
    )

    return RentVsBuyReport(
        current_rent=_q(monthly_rent),
        monthly_buy_cost=_q(monthly_buy_cost),
        monthly_cost_difference=_q(monthly_buy_cost - monthly_rent),
        break_even_month=break_even_month,
        break_even_year=break_even_year,
        five_year_rent_total=five.rent_cumulative if five else None,
        five_year_buy_total=five.buy_cumulative if five else None,
        five_year_equity=five.equity_built if five else None,
        five_year_net_advantage=five.net_buy_advantage if five else None,
        ten_year_net_advantage=ten.net_buy_advantage if ten else None,
        year_by_year=snapshots,
        verdict=verdict,
        verdict_horizon_years=verdict_years,
        verdict_explanation=_explain(verdict, basis.net_buy_advantage, verdict_years, break_even_year),
    )
