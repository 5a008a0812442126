"""Monthly mortgage payment (PITI + PMI).

Pure functions: Decimal in, dataclass out. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

from homebuyer.engine.policy import PMI_EQUITY_THRESHOLD
from homebuyer.models.results import PaymentBreakdown

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")


def payment_factor(annual_rate: Decimal, term_years: int) -> Decimal:
    """Monthly P&I per dollar borrowed: r(1+r)^n / ((1+r)^n - 1)."""
    if term_years <= 0:
        raise ValueError(f"term_years must be positive, got {term_years}")
    if annual_rate < 0:
        raise ValueError(f"annual_rate must not be negative, got {annual_rate}")
    n = term_years * 12
    if annual_rate == 0:
        return Decimal("1") / n

    r = annual_rate / 12
    factor = (1 + r) ** n
    return r * factor / (factor - 1)


def monthly_pi(principal: Decimal, annual_rate: Decimal, term_years: int) -> Decimal:
    """Fixed monthly principal & interest, rounded to cents."""
    if principal <= 0:
        return ZERO
    return (principal * payment_factor(annual_rate, term_years)).quantize(TWO_PLACES, ROUND_HALF_UP)


def requires_pmi(home_price: Decimal, down_payment: Decimal) -> bool:
    if home_price <= 0:
        return False
    return down_payment / home_price < PMI_EQUITY_THRESHOLD


def monthly_pmi(
    home_price: Decimal, down_payment: Decimal, loan_amount: Decimal, pmi_rate: Decimal
) -> Decimal:
    if loan_amount <= 0 or not requires_pmi(home_price, down_payment):
        return ZERO
    return loan_amount * pmi_rate / 12


def calculate_monthly_payment(
    home_price: Decimal,
    down_payment: Decimal,
    annual_rate: Decimal,
    term_years: int,
    property_tax_rate: Decimal,
    insurance_annual: Decimal,
    pmi_rate: Decimal,
) -> PaymentBreakdown:
    """Full monthly payment for a purchase.

    Args:
        home_price: Purchase price
        down_payment: Cash down; a down payment at or above the price means no loan
        annual_rate: Annual interest rate as a decimal (0.065 for 6.5%)
        term_years: Loan term in years
        property_tax_rate: Annual property tax as a fraction of price
        insurance_annual: Annual homeowners insurance premium
        pmi_rate: Annual PMI as a fraction of the loan, charged under 20% down
    """
    if home_price < 0 or down_payment < 0:
        raise ValueError("home_price and down_payment must not be negative")
    if property_tax_rate < 0 or insurance_annual < 0 or pmi_rate < 0:
        raise ValueError("tax, insurance and PMI inputs must not be negative")

    loan_amount = max(ZERO, home_price - down_payment)
    pi = monthly_pi(loan_amount, annual_rate, term_years)

    # First month split of the rounded payment
    if pi > 0:
        interest = (loan_amount * annual_rate / 12).quantize(TWO_PLACES, ROUND_HALF_UP)
        principal = pi - interest
    else:
        interest = principal = ZERO

    property_tax = (home_price * property_tax_rate / 12).quantize(TWO_PLACES, ROUND_HALF_UP)
    home_insurance = (insurance_annual / 12).quantize(TWO_PLACES, ROUND_HALF_UP)
    pmi = monthly_pmi(home_price, down_payment, loan_amount, pmi_rate).quantize(
        TWO_PLACES, ROUND_HALF_UP
    )

    return PaymentBreakdown(
        principal=principal,
        interest=interest,
        property_tax=property_tax,
        home_insurance=home_insurance,
        pmi=pmi,
        total_monthly=principal + interest + property_tax + home_insurance + pmi,
    )
