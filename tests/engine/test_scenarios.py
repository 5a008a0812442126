from decimal import Decimal

import pytest

from homebuyer.engine.scenarios import (
    ScenarioTerms,
    compare_loan_scenarios,
    compare_loan_terms,
    price_loan_scenario,
)


class TestPriceLoanScenario:
    def test_total_cost_splits_into_loan_interest_and_escrow(self):
        scenario = price_loan_scenario(
            ScenarioTerms("30-year fixed", Decimal("0.065"), 30),
            home_price=Decimal("300000"),
            down_payment=Decimal("30000"),
        )
        payment = scenario.monthly_payment
        escrow = (payment.property_tax + payment.home_insurance + payment.pmi) * 360
        assert scenario.total_cost == payment.total_monthly * 360
        assert scenario.total_cost == Decimal("270000") + scenario.total_interest + escrow

    def test_zero_rate_has_no_interest(self):
        scenario = price_loan_scenario(
            ScenarioTerms("interest free", Decimal("0"), 15),
            home_price=Decimal("300000"),
            down_payment=Decimal("60000"),
        )
        # 240,000 / 180 rounds down to 1,333.33
        assert scenario.monthly_payment.principal_and_interest == Decimal("1333.33")
        assert scenario.total_interest == Decimal("0")


class TestCompareLoanScenarios:
    def test_differences_are_first_minus_second(self):
        comparison = compare_loan_scenarios(
            Decimal("300000"),
            Decimal("60000"),
            ScenarioTerms("A", Decimal("0.06"), 30),
            ScenarioTerms("B", Decimal("0.07"), 30),
        )
        assert comparison.loan_amount == Decimal("240000")
        assert comparison.monthly_difference == (
            comparison.first.monthly_payment.total_monthly - comparison.second.monthly_payment.total_monthly
        )
        assert comparison.monthly_difference < 0
        assert comparison.total_interest_difference < 0
        assert comparison.total_cost_difference == comparison.first.total_cost - comparison.second.total_cost

    def test_rejects_zero_price(self):
        with pytest.raises(ValueError):
            compare_loan_scenarios(
                Decimal("0"), Decimal("0"),
                ScenarioTerms("A", Decimal("0.06"), 30), ScenarioTerms("B", Decimal("0.06"), 15),
            )


class TestCompareLoanTerms:
    def test_fifteen_costs_more_monthly_and_less_overall(self, canonical_market, canonical_assumptions):
        comparison = compare_loan_terms(
            Decimal("350000"), Decimal("70000"), canonical_market, canonical_assumptions
        )
        fifteen, thirty = comparison.first, comparison.second
        assert (fifteen.loan_term_years, thirty.loan_term_years) == (15, 30)
        assert fifteen.interest_rate == Decimal("0.058")
        assert thirty.interest_rate == Decimal("0.065")
        assert comparison.monthly_difference > 0
        assert comparison.total_interest_difference < 0
        assert comparison.total_cost_difference < 0
