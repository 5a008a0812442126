from decimal import Decimal

import pytest

from homebuyer.engine.payment import (
    calculate_monthly_payment,
    monthly_pi,
    payment_factor,
    requires_pmi,
)


def _payment(home_price: str, down_payment: str, **overrides):
    kwargs = dict(
        home_price=Decimal(home_price),
        down_payment=Decimal(down_payment),
        annual_rate=Decimal("0.065"),
        term_years=30,
        property_tax_rate=Decimal("0.012"),
        insurance_annual=Decimal("1500"),
        pmi_rate=Decimal("0.005"),
    )
    kwargs.update(overrides)
    return calculate_monthly_payment(**kwargs)


class TestMonthlyPI:
    def test_standard_mortgage(self):
        """$400K loan at 7% for 30 years."""
        assert monthly_pi(Decimal("400000"), Decimal("0.07"), 30) == Decimal("2661.21")

    def test_zero_rate(self):
        assert monthly_pi(Decimal("360000"), Decimal("0"), 30) == Decimal("1000.00")

    def test_zero_principal(self):
        assert monthly_pi(Decimal("0"), Decimal("0.07"), 30) == Decimal("0")

    def test_negative_principal_is_no_loan(self):
        assert monthly_pi(Decimal("-5000"), Decimal("0.07"), 30) == Decimal("0")

    def test_invalid_term(self):
        with pytest.raises(ValueError):
            payment_factor(Decimal("0.07"), 0)


class TestPMI:
    def test_twenty_percent_down_no_pmi(self):
        """$400K home, $80K down."""
        assert _payment("400000", "80000").pmi == Decimal("0")

    def test_ten_percent_down_has_pmi(self):
        pay = _payment("400000", "40000")
        assert pay.pmi > 0
        # 360000 * 0.005 / 12
        assert pay.pmi == Decimal("150.00")

    def test_threshold_is_exclusive(self):
        assert not requires_pmi(Decimal("100000"), Decimal("20000"))
        assert requires_pmi(Decimal("100000"), Decimal("19999"))

    def test_zero_price(self):
        assert not requires_pmi(Decimal("0"), Decimal("0"))


class TestCalculateMonthlyPayment:
    def test_components(self):
        pay = _payment("400000", "80000")
        assert pay.property_tax == Decimal("400.00")  # 400000 * 1.2% / 12
        assert pay.home_insurance == Decimal("125.00")
        # First month interest = 320000 * 0.065 / 12
        assert pay.interest == Decimal("1733.33")
        assert pay.principal_and_interest == monthly_pi(Decimal("320000"), Decimal("0.065"), 30)

    def test_total_is_sum_of_components(self):
        for down in ("0", "20000", "40000", "80000", "150000"):
            pay = _payment("400000", down)
            parts = pay.principal + pay.interest + pay.property_tax + pay.home_insurance + pay.pmi
            assert abs(pay.total_monthly - parts) <= Decimal("0.01")

    def test_down_payment_covers_price(self):
        pay = _payment("300000", "350000")
        assert pay.principal == Decimal("0")
        assert pay.interest == Decimal("0")
        assert pay.pmi == Decimal("0")
        assert pay.total_monthly == pay.property_tax + pay.home_insurance

    def test_negative_inputs_rejected(self):
        with pytest.raises(ValueError):
            _payment("-1", "0")
        with pytest.raises(ValueError):
            _payment("400000", "0", insurance_annual=Decimal("-1"))
