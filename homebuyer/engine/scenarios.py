"""Side-by-side loan scenarios for the same purchase.

Total cost is every monthly payment (PITI + PMI) over the full term; PMI is
charged for the whole term, as on the quoted payment.
"""

from dataclasses import dataclass
from decimal import Decimal

from homebuyer.engine.payment import calculate_monthly_payment
from homebuyer.models.assumptions import EconomicAssumptions
from homebuyer.models.profile import MarketSnapshot
from homebuyer.models.results import LoanScenario, ScenarioComparison

ZERO = Decimal("0")

_DEFAULTS = EconomicAssumptions()


@dataclass(frozen=True)
class ScenarioTerms:
    label: str
    annual_rate: Decimal
    term_years: int


def price_loan_scenario(
    terms: ScenarioTerms,
    home_price: Decimal,
    down_payment: Decimal,
    property_tax_rate: Decimal = _DEFAULTS.property_tax_rate,
    insurance_annual: Decimal = _DEFAULTS.insurance_annual,
    pmi_rate: Decimal = _DEFAULTS.pmi_rate,
) -> LoanScenario:
    payment = calculate_monthly_payment(
        home_price=home_price,
        down_payment=down_payment,
        annual_rate=terms.annual_rate,
        term_years=terms.term_years,
        property_tax_rate=property_tax_rate,
        insurance_annual=insurance_annual,
        pmi_rate=pmi_rate,
    )
    months = terms.term_years * 12
    loan_amount = max(ZERO, home_price - down_payment)
    return LoanScenario(
        label=terms.label,
        interest_rate=terms.annual_rate,
        loan_term_years=terms.term_years,
        monthly_payment=payment,
        total_cost=payment.total_monthly * months,
        total_interest=max(ZERO, payment.principal_and_interest * months - loan_amount),
    )


def compare_loan_scenarios(
    home_price: Decimal,
    down_payment: Decimal,
    first: ScenarioTerms,
    second: ScenarioTerms,
    property_tax_rate: Decimal = _DEFAULTS.property_tax_rate,
    insurance_annual: Decimal = _DEFAULTS.insurance_annual,
    pmi_rate: Decimal = _DEFAULTS.pmi_rate,
) -> ScenarioComparison:
    """Price two loans on the same home and down payment.

    Differences are first minus second, so a negative total-interest
    difference means the first loan is cheaper to carry.
    """
    if home_price <= 0:
        raise ValueError(f"home_price must be positive, got {home_price}")
    a, b = (
        price_loan_scenario(t, home_price, down_payment, property_tax_rate, insurance_annual, pmi_rate)
        for t in (first, second)
    )
    return ScenarioComparison(
        home_price=home_price,
        down_payment=down_payment,
        loan_amount=max(ZERO, home_price - down_payment),
        first=a,
        second=b,
        monthly_difference=a.monthly_payment.total_monthly - b.monthly_payment.total_monthly,
        total_cost_difference=a.total_cost - b.total_cost,
        total_interest_difference=a.total_interest - b.total_interest,
    )


def compare_loan_terms(
    home_price: Decimal,
    down_payment: Decimal,
    market: MarketSnapshot,
    assumptions: EconomicAssumptions | None = None,
) -> ScenarioComparison:
    """15-year fixed against 30-year fixed at today's rates."""
    a = assumptions or _DEFAULTS
    return compare_loan_scenarios(
        home_price,
        down_payment,
        ScenarioTerms("15-year fixed", market.rate_for(15), 15),
        ScenarioTerms("30-year fixed", market.rate_for(30), 30),
        property_tax_rate=a.property_tax_rate,
        insurance_annual=a.insurance_annual,
        pmi_rate=a.pmi_rate,
    )
