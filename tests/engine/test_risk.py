from decimal import Decimal

from homebuyer.engine.dti import calculate_dti
from homebuyer.engine.emergency_fund import evaluate_emergency_fund
from homebuyer.engine.risk import assess_risk, risk_level
from homebuyer.engine.stress import stress_test_income_loss, stress_test_rate_hike
from homebuyer.models.results import FlagSeverity, RiskLevel


def _fund(savings: str):
    return evaluate_emergency_fund(
        total_savings=Decimal(savings),
        down_payment=Decimal("0"),
        closing_costs=Decimal("0"),
        monthly_expenses=Decimal("3000"),
        monthly_housing_payment=Decimal("2000"),
    )


def _hike(debts: str):
    return stress_test_rate_hike(
        loan_amount=Decimal("320000"),
        base_rate=Decimal("0.065"),
        rate_increase=Decimal("0.03"),
        loan_term_years=30,
        gross_monthly_income=Decimal("10000"),
        existing_monthly_debts=Decimal(debts),
        property_tax_monthly=Decimal("400"),
        insurance_monthly=Decimal("125"),
    )


def _job_loss(savings: str):
    return stress_test_income_loss(
        gross_monthly_income=Decimal("10000"),
        income_reduction_percent=Decimal("100"),
        monthly_housing_payment=Decimal("2000"),
        existing_monthly_debts=Decimal("0"),
        remaining_savings=Decimal(savings),
        monthly_expenses=Decimal("3000"),
    )


class TestAssessRisk:
    def test_low_risk_borrower(self):
        report = assess_risk(
            stress_tests=[_hike("0"), _job_loss("60000")],
            emergency_fund=_fund("60000"),
            rent_vs_buy=None,
            dti=calculate_dti(Decimal("10000"), Decimal("2500"), Decimal("0")),
            credit_score=760,
        )
        # 12 months of runway, rate hike stays manageable
        assert report.overall_score == 100
        assert report.overall_risk_level is RiskLevel.LOW
        assert report.risk_flags == []

    def test_high_risk_borrower(self):
        report = assess_risk(
            stress_tests=[_hike("2500"), _job_loss("10000")],
            emergency_fund=_fund("10000"),
            rent_vs_buy=None,
            dti=calculate_dti(Decimal("10000"), Decimal("3000"), Decimal("1500")),
            credit_score=600,
        )
        # -8 hike, -10 job-loss runway, -20 reserves, -20 DTI, -15 credit
        assert report.overall_score == 27
        assert report.overall_risk_level is RiskLevel.VERY_HIGH
        assert {f.category for f in report.risk_flags} == {"income", "debt", "savings", "credit"}

    def test_flags_sorted_critical_first(self):
        report = assess_risk(
            stress_tests=[_hike("2500"), _job_loss("10000")],
            emergency_fund=_fund("20000"),
            rent_vs_buy=None,
            dti=calculate_dti(Decimal("10000"), Decimal("2500"), Decimal("1500")),
            credit_score=650,
        )
        severities = [f.severity for f in report.risk_flags]
        order = {FlagSeverity.CRITICAL: 0, FlagSeverity.WARNING: 1, FlagSeverity.INFO: 2}
        assert [order[s] for s in severities] == sorted(order[s] for s in severities)
        assert severities[0] is FlagSeverity.CRITICAL

    def test_carries_inputs_through(self):
        tests = [_hike("0"), _job_loss("60000")]
        fund = _fund("60000")
        report = assess_risk(
            stress_tests=tests,
            emergency_fund=fund,
            rent_vs_buy=None,
            dti=calculate_dti(Decimal("10000"), Decimal("2500"), Decimal("0")),
            credit_score=760,
        )
        assert report.stress_tests == tests
        assert report.emergency_fund is fund


class TestRiskLevel:
    def test_floors(self):
        assert risk_level(80) is RiskLevel.LOW
        assert risk_level(79) is RiskLevel.MODERATE
        assert risk_level(60) is RiskLevel.MODERATE
        assert risk_level(40) is RiskLevel.HIGH
        assert risk_level(39) is RiskLevel.VERY_HIGH
        assert risk_level(0) is RiskLevel.VERY_HIGH
