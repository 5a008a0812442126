"""Amortization schedule and yearly equity summary.

Pure functions: Decimal in, dataclass out. No I/O. The schedule is driven by
the same cent-rounded payment the payment calculator quotes.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from homebuyer.engine.payment import monthly_pi
from homebuyer.models.results import AmortizationYear

TWO_PLACES = Decimal("0.01")
SUMMARY_YEARS = 5


@dataclass(frozen=True)
class AmortizationPayment:
    period: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal


@dataclass(frozen=True)
class AmortizationSchedule:
    loan_amount: Decimal
    payments: list[AmortizationPayment]
    monthly_payment: Decimal
    total_interest: Decimal
    total_principal: Decimal


def amortization_schedule(
    principal: Decimal,
    annual_rate: Decimal,
    term_years: int,
    hold_years: int | None = None,
) -> AmortizationSchedule:
    """Month-by-month payoff of a loan at the quoted cent-rounded payment.

    With hold_years the schedule stops early; the last scheduled month of a
    full term absorbs any rounding residue so the balance ends at zero.
    """
    pmt = monthly_pi(principal, annual_rate, term_years)
    r = annual_rate / 12
    years = min(hold_years, term_years) if hold_years is not None else term_years
    n_periods = years * 12 if principal > 0 else 0

    payments: list[AmortizationPayment] = []
    balance = principal
    total_interest = Decimal("0")
    total_principal = Decimal("0")

    for period in range(1, n_periods + 1):
        if balance <= 0:
            break
        interest = (balance * r).quantize(TWO_PLACES, ROUND_HALF_UP)
        final_month = period == term_years * 12
        principal_paid = balance if final_month else min(pmt - interest, balance)
        actual_payment = interest + principal_paid

        balance -= principal_paid
        total_interest += interest
        total_principal += principal_paid

        payments.append(AmortizationPayment(
            period=period,
            payment=actual_payment,
            principal=principal_paid,
            interest=interest,
            balance=balance.quantize(TWO_PLACES, ROUND_HALF_UP),
        ))

    return AmortizationSchedule(
        loan_amount=principal,
        payments=payments,
        monthly_payment=pmt,
        total_interest=total_interest,
        total_principal=total_principal,
    )


def yearly_summary(schedule: AmortizationSchedule) -> list[AmortizationYear]:
    """Aggregate a schedule into one record per (possibly partial) year."""
    if schedule.loan_amount <= 0:
        return []

    yearly: list[AmortizationYear] = []
    year_principal = Decimal("0")
    year_interest = Decimal("0")

    for p in schedule.payments:
        year_principal += p.principal
        year_interest += p.interest

        if p.period % 12 == 0 or p.period == len(schedule.payments):
            repaid = (schedule.loan_amount - p.balance) / schedule.loan_amount * 100
            equity = min(Decimal("100"), max(Decimal("0"), repaid))
            yearly.append(AmortizationYear(
                year=(p.period - 1) // 12 + 1,
                principal_paid=year_principal.quantize(TWO_PLACES, ROUND_HALF_UP),
                interest_paid=year_interest.quantize(TWO_PLACES, ROUND_HALF_UP),
                remaining_balance=p.balance,
                equity_percent=equity.quantize(TWO_PLACES, ROUND_HALF_UP),
            ))
            year_principal = Decimal("0")
            year_interest = Decimal("0")

    return yearly


def amortization_summary(
    loan_amount: Decimal,
    annual_rate: Decimal,
    term_years: int,
    years: int = SUMMARY_YEARS,
) -> list[AmortizationYear]:
    """Year-by-year principal, interest, balance and equity for the first `years` years."""
    if loan_amount < 0:
        raise ValueError(f"loan_amount must not be negative, got {loan_amount}")
    schedule = amortization_schedule(loan_amount, annual_rate, term_years, hold_years=years)
    return yearly_summary(schedule)
