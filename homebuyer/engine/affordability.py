"""Maximum affordable home price under front-end and back-end DTI limits.

Total payment is non-decreasing in price (PMI only switches on as price
rises past 5x the down payment), so a fixed-iteration bisection converges
without needing an inverse of the payment formula.
"""

import logging
from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP

from homebuyer.engine.amortization import amortization_summary
from homebuyer.engine.dti import calculate_dti
from homebuyer.engine.payment import calculate_monthly_payment, payment_factor, requires_pmi
from homebuyer.engine.policy import (
    DEFAULT_MAX_BACK_END_DTI,
    DEFAULT_MAX_FRONT_END_DTI,
    MAX_SEARCH_PRICE,
    SOLVER_ITERATIONS,
)
from homebuyer.models.assumptions import EconomicAssumptions
from homebuyer.models.profile import BorrowerProfile, MarketSnapshot
from homebuyer.models.results import AffordabilityResult, MaxPriceResult, PaymentBreakdown

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")
FRONT_END = "front-end DTI"
BACK_END = "back-end DTI"


class SolverCache:
    """Memoizes solver results by their full argument tuple.

    Passed in explicitly by callers that re-solve the same inputs; the engine
    keeps no cache of its own.
    """

    def __init__(self) -> None:
        self._results: dict[tuple, MaxPriceResult] = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: tuple) -> MaxPriceResult | None:
        result = self._results.get(key)
        if result is None:
            self.misses += 1
        else:
            self.hits += 1
        return result

    def put(self, key: tuple, result: MaxPriceResult) -> None:
        self._results[key] = result

    def __len__(self) -> int:
        return len(self._results)


def calculate_max_home_price(
    annual_income: Decimal,
    monthly_debts: Decimal,
    down_payment: Decimal,
    annual_rate: Decimal,
    term_years: int,
    property_tax_rate: Decimal,
    insurance_annual: Decimal,
    pmi_rate: Decimal = EconomicAssumptions.pmi_rate,
    max_front_end_dti: Decimal = DEFAULT_MAX_FRONT_END_DTI,
    max_back_end_dti: Decimal = DEFAULT_MAX_BACK_END_DTI,
    cache: SolverCache | None = None,
) -> MaxPriceResult:
    """Binary-search the highest price whose full payment fits both DTI limits.

    A max price of 0 means the borrower cannot qualify; it is not an error.
    Precision is bounded by the search range / 2**60.
    """
    if annual_income <= 0:
        raise ValueError(f"annual_income must be positive, got {annual_income}")
    if monthly_debts < 0 or down_payment < 0:
        raise ValueError("monthly_debts and down_payment must not be negative")
    if annual_rate <= 0:
        raise ValueError(f"annual_rate must be positive, got {annual_rate}")

    key = (
        annual_income, monthly_debts, down_payment, annual_rate, term_years,
        property_tax_rate, insurance_annual, pmi_rate, max_front_end_dti, max_back_end_dti,
    )
    if cache is not None:
        cached = cache.get(key)
        if cached is not None:
            return cached

    monthly_income = annual_income / 12
    max_housing_front = monthly_income * max_front_end_dti
    max_housing_back = monthly_income * max_back_end_dti - monthly_debts
    max_housing_payment = min(max_housing_front, max_housing_back)
    limiting_factor = FRONT_END if max_housing_front < max_housing_back else BACK_END

    factor = payment_factor(annual_rate, term_years)
    monthly_insurance = insurance_annual / 12

    lo = ZERO
    hi = MAX_SEARCH_PRICE
    for _ in range(SOLVER_ITERATIONS):
        mid = (lo + hi) / 2
        loan_amount = max(ZERO, mid - down_payment)
        pi = loan_amount * factor
        monthly_tax = mid * property_tax_rate / 12
        pmi = loan_amount * pmi_rate / 12 if requires_pmi(mid, down_payment) else ZERO
        total_payment = pi + monthly_tax + monthly_insurance + pmi

        if total_payment < max_housing_payment:
            lo = mid
        else:
            hi = mid

    max_home_price = lo.to_integral_value(rounding=ROUND_FLOOR)
    result = MaxPriceResult(
        max_home_price=max_home_price,
        max_loan_amount=max(ZERO, max_home_price - down_payment),
        limiting_factor=limiting_factor,
        max_housing_payment=max(ZERO, max_housing_payment).quantize(TWO_PLACES, ROUND_HALF_UP),
    )
    logger.debug(
        "Max price %s (limit %s, ceiling %s/mo)",
        result.max_home_price, limiting_factor, result.max_housing_payment,
    )

    if cache is not None:
        cache.put(key, result)
    return result


def analyze_affordability(
    profile: BorrowerProfile,
    market: MarketSnapshot,
    assumptions: EconomicAssumptions | None = None,
    cache: SolverCache | None = None,
) -> AffordabilityResult:
    """Max and recommended price, with payment, DTI and amortization at the recommended price."""
    a = assumptions or EconomicAssumptions()
    term = profile.preferred_loan_term
    rate = market.rate_for(term, profile.loan_type)

    max_result = calculate_max_home_price(
        annual_income=profile.total_annual_income,
        monthly_debts=profile.monthly_debt_payments,
        down_payment=profile.down_payment_savings,
        annual_rate=rate,
        term_years=term,
        property_tax_rate=a.property_tax_rate,
        insurance_annual=a.insurance_annual,
        pmi_rate=a.pmi_rate,
        cache=cache,
    )

    recommended = (max_result.max_home_price * a.recommended_price_fraction).to_integral_value(
        rounding=ROUND_FLOOR
    )
    down_payment = min(profile.down_payment_savings, recommended)
    loan_amount = max(ZERO, recommended - down_payment)
    if recommended > 0:
        down_pct = (down_payment / recommended * 100).quantize(TWO_PLACES, ROUND_HALF_UP)
        payment = calculate_monthly_payment(
            home_price=recommended,
            down_payment=down_payment,
            annual_rate=rate,
            term_years=term,
            property_tax_rate=a.property_tax_rate,
            insurance_annual=a.insurance_annual,
            pmi_rate=a.pmi_rate,
        )
    else:
        # No home, so no insurance or tax either
        down_pct = ZERO
        payment = PaymentBreakdown(ZERO, ZERO, ZERO, ZERO, ZERO, ZERO)
    dti = calculate_dti(
        gross_monthly_income=profile.gross_monthly_income,
        proposed_housing_payment=payment.total_monthly,
        existing_monthly_debts=profile.monthly_debt_payments,
    )

    return AffordabilityResult(
        max_home_price=max_result.max_home_price,
        recommended_home_price=recommended,
        down_payment_amount=down_payment,
        down_payment_percent=down_pct,
        loan_amount=loan_amount,
        monthly_payment=payment,
        dti_analysis=dti,
        amortization_summary=amortization_summary(loan_amount, rate, term),
        limiting_factor=max_result.limiting_factor,
        max_loan_amount=max_result.max_loan_amount,
        interest_rate=rate,
        loan_term_years=term,
    )
