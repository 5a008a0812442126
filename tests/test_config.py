from decimal import Decimal

from homebuyer.config import Settings
from homebuyer.models.assumptions import EconomicAssumptions


class TestSettings:
    def test_defaults_match_assumptions(self, monkeypatch):
        monkeypatch.delenv("HOMEBUYER_PMI_RATE", raising=False)
        assert Settings(_env_file=None).assumptions() == EconomicAssumptions()

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("HOMEBUYER_PMI_RATE", "0.007")
        monkeypatch.setenv("HOMEBUYER_INVESTMENT_PROJECTION_YEARS", "7")
        assumptions = Settings(_env_file=None).assumptions()
        assert assumptions.pmi_rate == Decimal("0.007")
        assert assumptions.investment_projection_years == 7

    def test_log_level(self, monkeypatch):
        monkeypatch.setenv("HOMEBUYER_LOG_LEVEL", "DEBUG")
        assert Settings(_env_file=None).log_level == "DEBUG"


class TestEconomicAssumptions:
    def test_closing_costs(self):
        assert EconomicAssumptions().closing_costs(Decimal("300000")) == Decimal("9000")
