from decimal import Decimal

from homebuyer.engine.savings import suggest_savings_strategies, target_down_payment
from homebuyer.models.results import Difficulty


def _suggest(current="20000", target="60000", income="100000", first_time_buyer=False):
    return suggest_savings_strategies(
        current_savings=Decimal(current),
        target=Decimal(target),
        gross_monthly_income=Decimal(income) / 12,
        monthly_expenses=Decimal("3000"),
        monthly_debts=Decimal("500"),
        first_time_buyer=first_time_buyer,
    )


class TestSuggestSavingsStrategies:
    def test_four_strategies_with_surplus(self):
        strategies = _suggest()
        assert [s.title for s in strategies] == [
            "Aggressive Savings Plan",
            "Moderate Savings Plan",
            "Consider Lower Down Payment",
            "Down Payment Assistance Programs",
        ]

    def test_savings_timeframes(self):
        aggressive, moderate = _suggest()[:2]
        # Surplus 8,333.33 - 3,500 = 4,833.33; gap 40,000
        assert aggressive.timeframe_months == 12
        assert aggressive.difficulty is Difficulty.HARD
        assert "$3,383/mo" in aggressive.description
        assert moderate.timeframe_months == 21
        assert moderate.potential_savings == Decimal("40000")

    def test_fha_and_assistance(self):
        fha, assistance = _suggest()[2:]
        assert "$10,500" in fha.description
        assert fha.potential_savings == Decimal("49500")
        assert fha.timeframe_months == 0
        assert assistance.potential_savings == Decimal("25000")

    def test_no_surplus_skips_savings_plans(self):
        strategies = _suggest(income="30000")
        assert [s.difficulty for s in strategies] == [Difficulty.EASY, Difficulty.MODERATE]

    def test_first_time_buyer_assistance(self):
        assistance = _suggest(first_time_buyer=True)[-1]
        assert "first-time buyer" in assistance.description

    def test_no_gap(self):
        assert _suggest(current="60000") == []


class TestTargetDownPayment:
    def test_twenty_percent(self):
        assert target_down_payment(Decimal("312345")) == Decimal("62469")
