from decimal import Decimal

import pytest
from pydantic import ValidationError

from homebuyer.models.profile import BorrowerProfile, InvestmentInputs, LoanType, MarketSnapshot


def _profile(**overrides) -> BorrowerProfile:
    fields = dict(
        annual_gross_income=Decimal("90000"),
        down_payment_savings=Decimal("40000"),
        credit_score=700,
    )
    fields.update(overrides)
    return BorrowerProfile(**fields)


class TestBorrowerProfile:
    def test_derived_income_and_savings(self):
        profile = _profile(additional_income=Decimal("6000"), additional_savings=Decimal("15000"))
        assert profile.total_annual_income == Decimal("96000")
        assert profile.gross_monthly_income == Decimal("8000")
        assert profile.total_savings == Decimal("55000")

    def test_expense_and_rent_fallbacks(self):
        profile = _profile()
        assert profile.living_expenses == Decimal("3000")
        assert profile.monthly_rent == Decimal("1200")

    def test_rent_falls_back_to_share_of_given_expenses(self):
        assert _profile(monthly_expenses=Decimal("4000")).monthly_rent == Decimal("1600")

    def test_given_rent_wins(self):
        assert _profile(current_monthly_rent=Decimal("1750")).monthly_rent == Decimal("1750")

    def test_loan_type_from_value(self):
        assert _profile(loan_type="7/1_arm").loan_type is LoanType.ARM_7_1

    @pytest.mark.parametrize("field,value", [
        ("annual_gross_income", Decimal("0")),
        ("down_payment_savings", Decimal("-1")),
        ("monthly_debt_payments", Decimal("-50")),
        ("credit_score", 299),
        ("credit_score", 851),
        ("preferred_loan_term", 25),
    ])
    def test_rejects_invalid(self, field, value):
        with pytest.raises(ValidationError):
            _profile(**{field: value})

    def test_frozen(self):
        profile = _profile()
        with pytest.raises(ValidationError):
            profile.credit_score = 800

    def test_program_flags_default_off(self):
        profile = _profile()
        assert not profile.first_time_buyer
        assert not profile.military_veteran
        assert profile.state is None

    def test_state_normalized(self):
        assert _profile(state=" ny ").state == "NY"

    def test_rejects_unknown_state(self):
        with pytest.raises(ValidationError):
            _profile(state="XX")


class TestMarketSnapshot:
    def test_rate_for_term(self):
        market = MarketSnapshot(thirty_year_fixed=Decimal("6.5"), fifteen_year_fixed=Decimal("5.8"))
        assert market.rate_for(30) == Decimal("0.065")
        assert market.rate_for(20) == Decimal("0.065")
        assert market.rate_for(15) == Decimal("0.058")

    def test_arm_discount(self):
        market = MarketSnapshot(thirty_year_fixed=Decimal("6.5"), fifteen_year_fixed=Decimal("5.8"))
        assert market.rate_for(30, LoanType.ARM_5_1) == Decimal("0.0575")

    def test_arm_discount_never_below_half(self):
        market = MarketSnapshot(thirty_year_fixed=Decimal("1"), fifteen_year_fixed=Decimal("1"))
        assert market.rate_for(30, LoanType.ARM_5_1) == Decimal("0.005")

    def test_rejects_non_positive_rate(self):
        with pytest.raises(ValidationError):
            MarketSnapshot(thirty_year_fixed=Decimal("0"), fifteen_year_fixed=Decimal("5.8"))


class TestInvestmentInputs:
    def test_defaults(self):
        inputs = InvestmentInputs()
        assert not inputs.is_investment_property
        assert inputs.property_management_pct == Decimal("0.08")

    def test_rejects_percent_over_one(self):
        with pytest.raises(ValidationError):
            InvestmentInputs(vacancy_rate_pct=Decimal("5"))
