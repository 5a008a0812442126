"""Full homebuyer report for one profile and market snapshot.

Runs the engine stages in dependency order:
  affordability -> emergency fund -> stress tests -> rent vs buy
  -> risk -> readiness -> (optional) investment
  -> loan programs -> 15 vs 30 year -> closing costs -> savings strategies
"""

import logging

from homebuyer.config import settings
from homebuyer.engine.affordability import SolverCache, analyze_affordability
from homebuyer.engine.closing_costs import estimate_closing_costs
from homebuyer.engine.emergency_fund import evaluate_emergency_fund
from homebuyer.engine.investment import analyze_investment
from homebuyer.engine.loan_programs import lookup_loan_programs
from homebuyer.engine.readiness import score_readiness
from homebuyer.engine.rent_vs_buy import simulate_rent_vs_buy
from homebuyer.engine.risk import assess_risk
from homebuyer.engine.savings import suggest_savings_strategies, target_down_payment
from homebuyer.engine.scenarios import compare_loan_terms
from homebuyer.engine.stress import run_stress_tests
from homebuyer.models.assumptions import EconomicAssumptions
from homebuyer.models.profile import BorrowerProfile, InvestmentInputs, MarketSnapshot
from homebuyer.models.results import (
    ClosingCostEstimate,
    HomebuyerReport,
    InvestmentAnalysis,
    SavingsStrategy,
    ScenarioComparison,
)

logger = logging.getLogger(__name__)

DISCLAIMERS = [
    "This analysis is for informational purposes only and does not constitute financial advice.",
    "Consult a licensed mortgage professional before making any home purchase decisions.",
    "Market data is based on the most recent available figures and may not reflect real-time conditions.",
]


def build_report(
    profile: BorrowerProfile,
    market: MarketSnapshot,
    assumptions: EconomicAssumptions | None = None,
    investment: InvestmentInputs | None = None,
    cache: SolverCache | None = None,
) -> HomebuyerReport:
    a = assumptions or settings.assumptions()

    affordability = analyze_affordability(profile, market, a, cache=cache)
    payment = affordability.monthly_payment
    price = affordability.recommended_home_price
    logger.info(
        "Affordability: max $%s, recommended $%s at %s",
        affordability.max_home_price, price, affordability.interest_rate,
    )

    closing_costs = a.closing_costs(price)
    remaining_savings = profile.total_savings - affordability.down_payment_amount - closing_costs

    emergency_fund = evaluate_emergency_fund(
        total_savings=profile.total_savings,
        down_payment=affordability.down_payment_amount,
        closing_costs=closing_costs,
        monthly_expenses=profile.living_expenses,
        monthly_housing_payment=payment.total_monthly,
    )
    stress_tests = run_stress_tests(
        affordability,
        gross_monthly_income=profile.gross_monthly_income,
        existing_monthly_debts=profile.monthly_debt_payments,
        remaining_savings=remaining_savings,
        monthly_expenses=profile.living_expenses,
    )

    # A borrower who cannot qualify still gets a report; rent vs buy needs a price
    if price > 0:
        rent_vs_buy = simulate_rent_vs_buy(
            home_price=price,
            down_payment=affordability.down_payment_amount,
            annual_rate=affordability.interest_rate,
            loan_term_years=affordability.loan_term_years,
            monthly_rent=profile.monthly_rent,
            property_tax_monthly=payment.property_tax,
            insurance_monthly=payment.home_insurance,
            pmi_monthly=payment.pmi,
            home_appreciation=a.home_appreciation,
            rent_growth=a.rent_growth,
            maintenance_rate=a.maintenance_rate,
            closing_cost_pct=a.closing_cost_pct,
            opportunity_cost_rate=a.opportunity_cost_rate,
        )
    else:
        logger.warning("Recommended price is 0; borrower does not qualify for a loan")
        rent_vs_buy = None

    risk = assess_risk(
        stress_tests=stress_tests,
        emergency_fund=emergency_fund,
        rent_vs_buy=rent_vs_buy,
        dti=affordability.dti_analysis,
        credit_score=profile.credit_score,
    )
    logger.info("Risk: %s (%s/100)", risk.overall_risk_level.value, risk.overall_score)

    readiness = score_readiness(
        credit_score=profile.credit_score,
        dti=affordability.dti_analysis,
        down_payment_savings=profile.down_payment_savings,
        max_home_price=affordability.max_home_price,
        monthly_debts=profile.monthly_debt_payments,
        gross_monthly_income=profile.gross_monthly_income,
        emergency_fund_months=emergency_fund.months_covered,
    )
    logger.info("Readiness: %s (%s/100)", readiness.level.value, readiness.overall_score)

    investment_result: InvestmentAnalysis | None = None
    if investment is not None and investment.is_investment_property and price > 0:
        investment_result = analyze_investment(
            purchase_price=price,
            down_payment=affordability.down_payment_amount,
            annual_rate=affordability.interest_rate,
            loan_term_years=affordability.loan_term_years,
            annual_property_tax=price * a.property_tax_rate,
            annual_insurance=a.insurance_annual,
            monthly_pmi=payment.pmi,
            monthly_rent=investment.expected_monthly_rent,
            rent_to_price_ratio=investment.area_rent_to_price_ratio,
            monthly_hoa=investment.monthly_hoa,
            maintenance_rate=a.maintenance_rate,
            closing_cost_pct=a.closing_cost_pct,
            management_pct=investment.property_management_pct,
            vacancy_pct=investment.vacancy_rate_pct,
            capex_pct=investment.capex_reserve_pct,
            annual_appreciation=a.home_appreciation,
            annual_rent_growth=a.investment_rent_growth,
            projection_years=a.investment_projection_years,
        )
        logger.info("Investment: %s", investment_result.verdict.value)

    loan_programs = lookup_loan_programs(
        credit_score=profile.credit_score,
        down_payment_percent=affordability.down_payment_percent,
        annual_income=profile.total_annual_income,
        military_veteran=profile.military_veteran,
        first_time_buyer=profile.first_time_buyer,
    )
    logger.info(
        "Loan programs: %s eligible",
        ", ".join(p.program.value for p in loan_programs if p.eligible) or "none",
    )

    term_comparison: ScenarioComparison | None = None
    closing_estimate: ClosingCostEstimate | None = None
    savings_strategies: list[SavingsStrategy] = []
    if price > 0:
        term_comparison = compare_loan_terms(price, affordability.down_payment_amount, market, a)
        # A known state brings its own tax and insurance averages
        closing_estimate = estimate_closing_costs(
            home_price=price,
            loan_amount=affordability.loan_amount,
            annual_rate=affordability.interest_rate,
            state=profile.state,
            property_tax_rate=None if profile.state else a.property_tax_rate,
            insurance_annual=None if profile.state else a.insurance_annual,
        )
        savings_strategies = suggest_savings_strategies(
            current_savings=profile.down_payment_savings,
            target=target_down_payment(price),
            gross_monthly_income=profile.gross_monthly_income,
            monthly_expenses=profile.living_expenses,
            monthly_debts=profile.monthly_debt_payments,
            first_time_buyer=profile.first_time_buyer,
        )

    return HomebuyerReport(
        affordability=affordability,
        risk=risk,
        readiness=readiness,
        investment=investment_result,
        loan_programs=loan_programs,
        term_comparison=term_comparison,
        closing_cost_estimate=closing_estimate,
        savings_strategies=savings_strategies,
        disclaimers=list(DISCLAIMERS),
    )
