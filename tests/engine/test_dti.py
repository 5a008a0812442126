from decimal import Decimal

import pytest

from homebuyer.engine.dti import calculate_dti, classify_back_end, classify_front_end
from homebuyer.models.results import DTIStatus


class TestCalculateDTI:
    def test_standard_case(self):
        """$8K/mo income, $2K housing, $500 debts."""
        dti = calculate_dti(Decimal("8000"), Decimal("2000"), Decimal("500"))
        assert dti.front_end_ratio == Decimal("25.00")
        assert dti.back_end_ratio == Decimal("31.25")
        assert dti.front_end_status is DTIStatus.SAFE
        assert dti.back_end_status is DTIStatus.SAFE

    def test_reports_guideline_maxima(self):
        dti = calculate_dti(Decimal("8000"), Decimal("2000"), Decimal("0"))
        assert dti.max_front_end == Decimal("28")
        assert dti.max_back_end == Decimal("36")

    def test_front_end_boundary(self):
        assert calculate_dti(Decimal("10000"), Decimal("2800"), Decimal("0")).front_end_status is DTIStatus.SAFE
        assert calculate_dti(Decimal("10000"), Decimal("2801"), Decimal("0")).front_end_status is DTIStatus.MODERATE

    def test_back_end_boundaries(self):
        income = Decimal("10000")
        housing = Decimal("2000")
        assert calculate_dti(income, housing, Decimal("1600")).back_end_status is DTIStatus.SAFE
        assert calculate_dti(income, housing, Decimal("1601")).back_end_status is DTIStatus.MODERATE
        assert calculate_dti(income, housing, Decimal("2300")).back_end_status is DTIStatus.MODERATE
        assert calculate_dti(income, housing, Decimal("2301")).back_end_status is DTIStatus.RISKY

    def test_invalid_income(self):
        with pytest.raises(ValueError):
            calculate_dti(Decimal("0"), Decimal("2000"), Decimal("0"))

    def test_negative_debts(self):
        with pytest.raises(ValueError):
            calculate_dti(Decimal("8000"), Decimal("2000"), Decimal("-1"))


class TestClassify:
    def test_front_end_bands(self):
        assert classify_front_end(Decimal("28.00")) is DTIStatus.SAFE
        assert classify_front_end(Decimal("32.00")) is DTIStatus.MODERATE
        assert classify_front_end(Decimal("32.01")) is DTIStatus.RISKY

    def test_back_end_bands(self):
        assert classify_back_end(Decimal("36.00")) is DTIStatus.SAFE
        assert classify_back_end(Decimal("43.00")) is DTIStatus.MODERATE
        assert classify_back_end(Decimal("43.01")) is DTIStatus.RISKY
