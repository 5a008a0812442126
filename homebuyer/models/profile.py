"""Validated engine inputs: borrower profile, market snapshot, investment options.

Everything entering the engine passes through these models, so invalid
financial inputs are rejected before any computation runs.
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from homebuyer.engine.policy import CREDIT_SCORE_MAX, CREDIT_SCORE_MIN
from homebuyer.engine.state_costs import STATE_COSTS

DEFAULT_MONTHLY_EXPENSES = Decimal("3000")
RENT_SHARE_OF_EXPENSES = Decimal("0.4")  # Rough rent estimate when none is given
ARM_INITIAL_RATE_DISCOUNT = Decimal("0.0075")  # Teaser period vs 30yr fixed
ALLOWED_LOAN_TERMS = (15, 20, 30)


class LoanType(Enum):
    FIXED = "fixed"
    ARM_5_1 = "5/1_arm"
    ARM_7_1 = "7/1_arm"

    @property
    def is_arm(self) -> bool:
        return self is not LoanType.FIXED


class BorrowerProfile(BaseModel):
    model_config = {"frozen": True}

    annual_gross_income: Decimal = Field(..., gt=0)
    additional_income: Decimal = Field(Decimal("0"), ge=0)
    monthly_debt_payments: Decimal = Field(Decimal("0"), ge=0)
    down_payment_savings: Decimal = Field(..., ge=0)
    additional_savings: Decimal = Field(Decimal("0"), ge=0)
    credit_score: int = Field(..., ge=CREDIT_SCORE_MIN, le=CREDIT_SCORE_MAX)
    monthly_expenses: Decimal | None = Field(None, ge=0, description="Non-debt living expenses")
    current_monthly_rent: Decimal | None = Field(None, ge=0)
    preferred_loan_term: int = 30
    loan_type: LoanType = LoanType.FIXED
    first_time_buyer: bool = False
    military_veteran: bool = False
    state: str | None = Field(None, description="Two-letter US state code for purchase costs")

    @field_validator("preferred_loan_term")
    @classmethod
    def _check_term(cls, v: int) -> int:
        if v not in ALLOWED_LOAN_TERMS:
            raise ValueError(f"loan term must be one of {ALLOWED_LOAN_TERMS}, got {v}")
        return v

    @field_validator("state")
    @classmethod
    def _check_state(cls, v: str | None) -> str | None:
        if v is None:
            return v
        code = v.strip().upper()
        if code not in STATE_COSTS:
            raise ValueError(f"unknown US state code {v!r}")
        return code

    @property
    def total_annual_income(self) -> Decimal:
        return self.annual_gross_income + self.additional_income

    @property
    def gross_monthly_income(self) -> Decimal:
        return self.total_annual_income / 12

    @property
    def total_savings(self) -> Decimal:
        return self.down_payment_savings + self.additional_savings

    @property
    def living_expenses(self) -> Decimal:
        if self.monthly_expenses is not None:
            return self.monthly_expenses
        return DEFAULT_MONTHLY_EXPENSES

    @property
    def monthly_rent(self) -> Decimal:
        if self.current_monthly_rent is not None:
            return self.current_monthly_rent
        return self.living_expenses * RENT_SHARE_OF_EXPENSES


class MarketSnapshot(BaseModel):
    """Rates are percentages (6.5 means 6.5%)."""

    model_config = {"frozen": True}

    thirty_year_fixed: Decimal = Field(..., gt=0, lt=100)
    fifteen_year_fixed: Decimal = Field(..., gt=0, lt=100)
    federal_funds_rate: Decimal | None = None
    shelter_inflation_rate: Decimal | None = None
    general_inflation_rate: Decimal | None = None
    data_date: str | None = None

    def rate_for(self, term_years: int, loan_type: LoanType = LoanType.FIXED) -> Decimal:
        """Decimal annual rate for a loan term, e.g. Decimal("0.065")."""
        pct = self.fifteen_year_fixed if term_years == 15 else self.thirty_year_fixed
        rate = pct / 100
        if loan_type.is_arm:
            rate = max(rate - ARM_INITIAL_RATE_DISCOUNT, rate / 2)
        return rate


class InvestmentInputs(BaseModel):
    model_config = {"frozen": True}

    is_investment_property: bool = False
    expected_monthly_rent: Decimal | None = Field(None, ge=0)
    property_management_pct: Decimal = Field(Decimal("0.08"), ge=0, le=1)
    vacancy_rate_pct: Decimal = Field(Decimal("0.05"), ge=0, le=1)
    capex_reserve_pct: Decimal = Field(Decimal("0.05"), ge=0, le=1)
    monthly_hoa: Decimal = Field(Decimal("0"), ge=0)
    area_rent_to_price_ratio: Decimal | None = Field(None, gt=0, lt=1)
