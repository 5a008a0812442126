"""Canonical test fixtures used across all engine tests.

Borrower: $100K/yr, $500/mo debts, $60K down + $30K other savings, 740 credit.
Market: 6.5% 30yr fixed, 5.8% 15yr fixed.
"""

import pytest
from decimal import Decimal

from homebuyer.models.assumptions import EconomicAssumptions
from homebuyer.models.profile import BorrowerProfile, InvestmentInputs, MarketSnapshot


@pytest.fixture
def canonical_profile() -> BorrowerProfile:
    return BorrowerProfile(
        annual_gross_income=Decimal("100000"),
        monthly_debt_payments=Decimal("500"),
        down_payment_savings=Decimal("60000"),
        additional_savings=Decimal("30000"),
        credit_score=740,
        monthly_expenses=Decimal("3000"),
        current_monthly_rent=Decimal("2000"),
    )


@pytest.fixture
def canonical_market() -> MarketSnapshot:
    return MarketSnapshot(
        thirty_year_fixed=Decimal("6.5"),
        fifteen_year_fixed=Decimal("5.8"),
    )


@pytest.fixture
def canonical_assumptions() -> EconomicAssumptions:
    return EconomicAssumptions()


@pytest.fixture
def rental_inputs() -> InvestmentInputs:
    """Buy-to-rent with a known rent."""
    return InvestmentInputs(
        is_investment_property=True,
        expected_monthly_rent=Decimal("2400"),
    )
