from decimal import Decimal

import pytest

from homebuyer.engine.amortization import amortization_schedule, amortization_summary, yearly_summary


class TestAmortizationSchedule:
    def test_payment_count(self):
        schedule = amortization_schedule(Decimal("400000"), Decimal("0.07"), 30)
        assert len(schedule.payments) == 360

    def test_partial_schedule(self):
        schedule = amortization_schedule(Decimal("400000"), Decimal("0.07"), 30, hold_years=7)
        assert len(schedule.payments) == 84

    def test_hold_capped_at_term(self):
        schedule = amortization_schedule(Decimal("100000"), Decimal("0.05"), 15, hold_years=40)
        assert len(schedule.payments) == 180

    def test_first_payment_mostly_interest(self):
        schedule = amortization_schedule(Decimal("400000"), Decimal("0.07"), 30)
        first = schedule.payments[0]
        # 400000 * 0.07 / 12
        assert first.interest == Decimal("2333.33")
        assert first.principal == Decimal("327.88")

    def test_balance_decreases(self):
        schedule = amortization_schedule(Decimal("400000"), Decimal("0.07"), 30)
        for i in range(1, len(schedule.payments)):
            assert schedule.payments[i].balance < schedule.payments[i - 1].balance

    def test_paid_off_at_term(self):
        schedule = amortization_schedule(Decimal("400000"), Decimal("0.07"), 30)
        assert schedule.payments[-1].balance == Decimal("0")
        assert schedule.total_principal == Decimal("400000")

    def test_only_last_payment_differs_from_quote(self):
        schedule = amortization_schedule(Decimal("400000"), Decimal("0.07"), 30)
        assert all(p.payment == schedule.monthly_payment for p in schedule.payments[:-1])
        last = schedule.payments[-1]
        assert last.payment == last.principal + last.interest

    def test_zero_loan(self):
        schedule = amortization_schedule(Decimal("0"), Decimal("0.07"), 30)
        assert schedule.payments == []
        assert schedule.monthly_payment == Decimal("0")


class TestAmortizationSummary:
    def test_five_years_by_default(self):
        years = amortization_summary(Decimal("320000"), Decimal("0.065"), 30)
        assert [y.year for y in years] == [1, 2, 3, 4, 5]

    def test_balance_non_increasing_equity_non_decreasing(self):
        years = amortization_summary(Decimal("320000"), Decimal("0.065"), 30, years=30)
        for prev, cur in zip(years, years[1:]):
            assert cur.remaining_balance <= prev.remaining_balance
            assert cur.equity_percent >= prev.equity_percent
        for y in years:
            assert Decimal("0") <= y.equity_percent <= Decimal("100")
        assert years[-1].equity_percent == Decimal("100.00")

    def test_yearly_totals_match(self):
        schedule = amortization_schedule(Decimal("320000"), Decimal("0.065"), 30, hold_years=3)
        years = yearly_summary(schedule)
        principal = sum(y.principal_paid for y in years)
        assert abs(principal - schedule.total_principal) <= Decimal("0.05")
        assert years[-1].remaining_balance == schedule.payments[-1].balance

    def test_principal_share_grows(self):
        years = amortization_summary(Decimal("320000"), Decimal("0.065"), 30)
        assert years[4].principal_paid > years[0].principal_paid
        assert years[4].interest_paid < years[0].interest_paid

    def test_zero_loan_is_empty(self):
        assert amortization_summary(Decimal("0"), Decimal("0.065"), 30) == []

    def test_negative_loan_rejected(self):
        with pytest.raises(ValueError):
            amortization_summary(Decimal("-1"), Decimal("0.065"), 30)
