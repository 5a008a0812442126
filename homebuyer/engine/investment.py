"""Rental investment analysis: operating expenses, NOI, cash flow, returns.

Pure functions: Decimal in, dataclass out. No I/O.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from scipy.optimize import brentq

from homebuyer.engine.amortization import amortization_schedule, yearly_summary
from homebuyer.engine.payment import monthly_pi
from homebuyer.models.assumptions import EconomicAssumptions
from homebuyer.models.results import (
    InvestmentAnalysis,
    InvestmentProjectionYear,
    InvestmentVerdict,
    OperatingExpenses,
    RentSource,
)

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")

DEFAULT_RENT_TO_PRICE = Decimal("0.007")  # Monthly rent / price, national single-family average
DEFAULT_MANAGEMENT_PCT = Decimal("0.08")
DEFAULT_VACANCY_PCT = Decimal("0.05")
DEFAULT_CAPEX_PCT = Decimal("0.05")

# Verdict bands (percent)
STRONG_CAP_RATE = Decimal("6")
STRONG_CASH_ON_CASH = Decimal("8")
MODERATE_CAP_RATE = Decimal("4.5")
MODERATE_CASH_ON_CASH = Decimal("4")

IRR_BRACKET = (-0.99, 10.0)  # Annual rate search range

_DEFAULTS = EconomicAssumptions()


def _q(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def estimate_monthly_rent(
    purchase_price: Decimal,
    monthly_rent: Decimal | None = None,
    rent_to_price_ratio: Decimal | None = None,
) -> tuple[Decimal, RentSource]:
    """User-supplied rent wins; otherwise price x area rent-to-price ratio."""
    if monthly_rent is not None:
        return _q(monthly_rent), RentSource.USER_OVERRIDE
    ratio = rent_to_price_ratio if rent_to_price_ratio is not None else DEFAULT_RENT_TO_PRICE
    return _q(purchase_price * ratio), RentSource.AUTO_ESTIMATE


def operating_expenses(
    monthly_rent: Decimal,
    purchase_price: Decimal,
    annual_property_tax: Decimal,
    annual_insurance: Decimal,
    monthly_hoa: Decimal = ZERO,
    maintenance_rate: Decimal = _DEFAULTS.maintenance_rate,
    management_pct: Decimal = DEFAULT_MANAGEMENT_PCT,
    vacancy_pct: Decimal = DEFAULT_VACANCY_PCT,
    capex_pct: Decimal = DEFAULT_CAPEX_PCT,
) -> OperatingExpenses:
    """Itemized monthly operating expenses.

    Management, vacancy and CapEx are percentages of gross rent; maintenance
    is a percentage of the purchase price per year.
    """
    return OperatingExpenses(
        property_management=_q(monthly_rent * management_pct),
        vacancy=_q(monthly_rent * vacancy_pct),
        capex_reserve=_q(monthly_rent * capex_pct),
        property_tax=_q(annual_property_tax / 12),
        insurance=_q(annual_insurance / 12),
        hoa=_q(monthly_hoa),
        maintenance=_q(purchase_price * maintenance_rate / 12),
    )


def investment_verdict(
    cap_rate: Decimal, monthly_cash_flow: Decimal, cash_on_cash: Decimal
) -> InvestmentVerdict:
    if monthly_cash_flow < 0:
        return InvestmentVerdict.NEGATIVE_CASH_FLOW
    if cap_rate >= STRONG_CAP_RATE and cash_on_cash >= STRONG_CASH_ON_CASH:
        return InvestmentVerdict.STRONG
    if cap_rate >= MODERATE_CAP_RATE and cash_on_cash >= MODERATE_CASH_ON_CASH:
        return InvestmentVerdict.MODERATE
    return InvestmentVerdict.MARGINAL


def _explain(verdict: InvestmentVerdict, cap_rate: Decimal, coc: Decimal, cash_flow: Decimal) -> str:
    metrics = f"{cap_rate}% cap rate, {coc}% cash-on-cash"
    if verdict is InvestmentVerdict.NEGATIVE_CASH_FLOW:
        return (
            f"Loses ${abs(cash_flow):,.0f}/mo after the mortgage ({metrics}); "
            "returns depend on appreciation."
        )
    if verdict is InvestmentVerdict.STRONG:
        return f"Strong rental: {metrics}, ${cash_flow:,.0f}/mo cash flow."
    if verdict is InvestmentVerdict.MODERATE:
        return f"Solid but not exceptional: {metrics}."
    return f"Thin margins: {metrics}. Small rent or expense changes could turn it negative."


def _annualized(total_return_pct: Decimal, years: int) -> Decimal:
    ratio = 1 + float(total_return_pct) / 100
    if ratio <= 0:
        return Decimal("-100.00")
    return Decimal(str((ratio ** (1 / years) - 1) * 100)).quantize(TWO_PLACES, ROUND_HALF_UP)


def _hold_period_irr(
    cash_invested: Decimal, yearly_cash_flows: list[Decimal], sale_equity: Decimal
) -> Decimal:
    """Annual IRR, in percent, of putting cash_invested in at purchase,
    collecting each year's cash flow and walking away with the equity at the
    end of the last year.

    0 when NPV has no root inside the search bracket, e.g. a hold that never
    recovers its cash.
    """
    if cash_invested <= 0 or not yearly_cash_flows:
        return ZERO
    flows = [-float(cash_invested)] + [float(cf) for cf in yearly_cash_flows]
    flows[-1] += float(sale_equity)

    def npv(rate: float) -> float:
        return sum(flow / (1 + rate) ** year for year, flow in enumerate(flows))

    try:
        rate = brentq(npv, IRR_BRACKET[0], IRR_BRACKET[1], xtol=1e-10)
    except ValueError:
        logger.debug("No hold-period IRR in %s for %s invested", IRR_BRACKET, cash_invested)
        return ZERO
    return _q(Decimal(str(rate * 100)))


def analyze_investment(
    purchase_price: Decimal,
    down_payment: Decimal,
    annual_rate: Decimal,
    loan_term_years: int,
    annual_property_tax: Decimal,
    annual_insurance: Decimal,
    monthly_pmi: Decimal = ZERO,
    monthly_rent: Decimal | None = None,
    rent_to_price_ratio: Decimal | None = None,
    monthly_hoa: Decimal = ZERO,
    maintenance_rate: Decimal = _DEFAULTS.maintenance_rate,
    closing_cost_pct: Decimal = _DEFAULTS.closing_cost_pct,
    management_pct: Decimal = DEFAULT_MANAGEMENT_PCT,
    vacancy_pct: Decimal = DEFAULT_VACANCY_PCT,
    capex_pct: Decimal = DEFAULT_CAPEX_PCT,
    annual_appreciation: Decimal = _DEFAULTS.home_appreciation,
    annual_rent_growth: Decimal = _DEFAULTS.investment_rent_growth,
    projection_years: int = _DEFAULTS.investment_projection_years,
) -> InvestmentAnalysis:
    """Year-1 rental metrics plus a multi-year return projection."""
    if purchase_price <= 0:
        raise ValueError(f"purchase_price must be positive, got {purchase_price}")
    if down_payment < 0:
        raise ValueError(f"down_payment must not be negative, got {down_payment}")
    if projection_years < 1:
        raise ValueError(f"projection_years must be at least 1, got {projection_years}")

    rent, rent_source = estimate_monthly_rent(purchase_price, monthly_rent, rent_to_price_ratio)
    expenses = operating_expenses(
        monthly_rent=rent,
        purchase_price=purchase_price,
        annual_property_tax=annual_property_tax,
        annual_insurance=annual_insurance,
        monthly_hoa=monthly_hoa,
        maintenance_rate=maintenance_rate,
        management_pct=management_pct,
        vacancy_pct=vacancy_pct,
        capex_pct=capex_pct,
    )

    loan_amount = max(ZERO, purchase_price - down_payment)
    mortgage_pi = monthly_pi(loan_amount, annual_rate, loan_term_years)

    monthly_noi = rent - expenses.total
    monthly_cash_flow = monthly_noi - mortgage_pi - _q(monthly_pmi)
    annual_noi = monthly_noi * 12
    annual_cash_flow = monthly_cash_flow * 12
    total_cash_invested = _q(down_payment + purchase_price * closing_cost_pct)

    cap_rate = _q(annual_noi / purchase_price * 100)
    coc = _q(annual_cash_flow / total_cash_invested * 100) if total_cash_invested > 0 else ZERO
    grm = _q(purchase_price / (rent * 12)) if rent > 0 else ZERO
    rent_to_price = _q(rent / purchase_price * 100)

    # Multi-year projection
    schedule = amortization_schedule(loan_amount, annual_rate, loan_term_years, hold_years=projection_years)
    debt_years = yearly_summary(schedule)

    projections: list[InvestmentProjectionYear] = []
    cumulative = ZERO
    for year in range(1, projection_years + 1):
        paid_off = year > loan_term_years
        balance = debt_years[year - 1].remaining_balance if year <= len(debt_years) else ZERO
        value = _q(purchase_price * (1 + annual_appreciation) ** year)
        equity = value - balance
        growth = (1 + annual_rent_growth) ** (year - 1)
        year_rent = _q(rent * 12 * growth)
        # P&I and PMI stop once the loan is paid off
        year_cash_flow = _q((annual_noi if paid_off else annual_cash_flow) * growth)
        cumulative += year_cash_flow

        total_return = equity + cumulative - total_cash_invested
        if total_cash_invested > 0:
            return_pct = _q(total_return / total_cash_invested * 100)
            annualized = _annualized(return_pct, year)
        else:
            return_pct = annualized = ZERO

        projections.append(InvestmentProjectionYear(
            year=year,
            property_value=value,
            equity=equity,
            annual_rent=year_rent,
            annual_cash_flow=year_cash_flow,
            cumulative_cash_flow=cumulative,
            total_return=total_return,
            total_return_percent=return_pct,
            annualized_return=annualized,
        ))

    hold_irr = _hold_period_irr(
        total_cash_invested,
        [p.annual_cash_flow for p in projections],
        projections[-1].equity,
    )

    verdict = investment_verdict(cap_rate, monthly_cash_flow, coc)
    logger.debug("Investment: cap %s%%, CoC %s%%, verdict %s", cap_rate, coc, verdict.value)

    return InvestmentAnalysis(
        monthly_gross_rent=rent,
        rent_source=rent_source,
        monthly_operating_expenses=expenses,
        monthly_noi=monthly_noi,
        monthly_cash_flow=monthly_cash_flow,
        annual_noi=annual_noi,
        annual_cash_flow=annual_cash_flow,
        cap_rate=cap_rate,
        cash_on_cash_return=coc,
        gross_rent_multiplier=grm,
        rent_to_price=rent_to_price,
        total_cash_invested=total_cash_invested,
        purchase_price=purchase_price,
        projections=projections,
        hold_period_irr=hold_irr,
        verdict=verdict,
        verdict_explanation=_explain(verdict, cap_rate, coc, monthly_cash_flow),
    )
