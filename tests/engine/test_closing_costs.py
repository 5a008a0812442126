from decimal import Decimal

import pytest

from homebuyer.engine.closing_costs import estimate_closing_costs


def _estimate(state=None, **overrides):
    kwargs = dict(
        home_price=Decimal("300000"),
        loan_amount=Decimal("240000"),
        annual_rate=Decimal("0.065"),
        state=state,
    )
    kwargs.update(overrides)
    return estimate_closing_costs(**kwargs)


def _amount(estimate, prefix):
    return next(i.amount for i in estimate.items if i.item.startswith(prefix))


class TestNationalDefaults:
    def test_itemized_total(self):
        estimate = _estimate()
        assert _amount(estimate, "Loan origination") == Decimal("2400")
        assert _amount(estimate, "Title insurance") == Decimal("1500")
        assert _amount(estimate, "Prepaid property taxes") == Decimal("825")
        # 240,000 x 6.5% x 15 / 365
        assert _amount(estimate, "Prepaid interest") == Decimal("641")
        assert estimate.category_totals == {
            "lender": Decimal("3700"),
            "title_escrow": Decimal("2300"),
            "government": Decimal("200"),
            "prepaid": Decimal("3366"),
        }
        assert estimate.total == Decimal("9566")

    def test_range_is_fifteen_percent_either_side(self):
        estimate = _estimate()
        assert estimate.low_estimate == Decimal("8131")
        assert estimate.high_estimate == Decimal("11001")

    def test_not_state_specific(self):
        estimate = _estimate()
        assert not estimate.is_state_specific
        assert estimate.state is None
        assert not any(i.item.startswith(("Transfer tax", "Attorney")) for i in estimate.items)

    def test_no_loan_means_no_lender_percentage_fees(self):
        estimate = _estimate(loan_amount=Decimal("0"))
        assert _amount(estimate, "Loan origination") == Decimal("0")
        assert _amount(estimate, "Prepaid interest") == Decimal("0")


class TestStateSpecific:
    def test_attorney_state_with_transfer_tax(self):
        estimate = _estimate(state="ny")
        assert estimate.is_state_specific
        assert estimate.state == "NY"
        assert estimate.state_name == "New York"
        assert _amount(estimate, "Attorney fee") == Decimal("2000")
        assert _amount(estimate, "Transfer tax (0.40%)") == Decimal("1200")
        assert _amount(estimate, "Recording fees") == Decimal("400")
        # State average 1.68% property tax, $1,600 insurance
        assert _amount(estimate, "Prepaid property taxes") == Decimal("1260")
        assert _amount(estimate, "Prepaid homeowners insurance") == Decimal("1600")
        assert len(estimate.items) == 14
        assert estimate.total == Decimal("13801")

    def test_no_transfer_tax_or_attorney(self):
        estimate = _estimate(state="TX")
        assert len(estimate.items) == 12
        assert _amount(estimate, "Title insurance") == Decimal("1800")

    def test_explicit_rates_win_over_state_averages(self):
        estimate = _estimate(state="NY", property_tax_rate=Decimal("0.01"), insurance_annual=Decimal("1200"))
        assert _amount(estimate, "Prepaid property taxes") == Decimal("750")
        assert _amount(estimate, "Prepaid homeowners insurance") == Decimal("1200")

    def test_unknown_state_falls_back(self, caplog):
        estimate = _estimate(state="ZZ")
        assert not estimate.is_state_specific
        assert estimate.total == _estimate().total
        assert "ZZ" in caplog.text

    def test_rejects_zero_price(self):
        with pytest.raises(ValueError):
            _estimate(home_price=Decimal("0"))
