from decimal import Decimal

from pydantic_settings import BaseSettings

from homebuyer.models.assumptions import EconomicAssumptions

_DEFAULTS = EconomicAssumptions()


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "HOMEBUYER_"}

    # App
    log_level: str = "INFO"

    # Economic assumptions (override per deployment, e.g. HOMEBUYER_PMI_RATE=0.007)
    property_tax_rate: Decimal = _DEFAULTS.property_tax_rate
    insurance_annual: Decimal = _DEFAULTS.insurance_annual
    pmi_rate: Decimal = _DEFAULTS.pmi_rate
    closing_cost_pct: Decimal = _DEFAULTS.closing_cost_pct
    home_appreciation: Decimal = _DEFAULTS.home_appreciation
    rent_growth: Decimal = _DEFAULTS.rent_growth
    maintenance_rate: Decimal = _DEFAULTS.maintenance_rate
    opportunity_cost_rate: Decimal = _DEFAULTS.opportunity_cost_rate
    investment_rent_growth: Decimal = _DEFAULTS.investment_rent_growth
    recommended_price_fraction: Decimal = _DEFAULTS.recommended_price_fraction
    investment_projection_years: int = _DEFAULTS.investment_projection_years

    def assumptions(self) -> EconomicAssumptions:
        return EconomicAssumptions(
            property_tax_rate=self.property_tax_rate,
            insurance_annual=self.insurance_annual,
            pmi_rate=self.pmi_rate,
            closing_cost_pct=self.closing_cost_pct,
            home_appreciation=self.home_appreciation,
            rent_growth=self.rent_growth,
            maintenance_rate=self.maintenance_rate,
            opportunity_cost_rate=self.opportunity_cost_rate,
            investment_rent_growth=self.investment_rent_growth,
            recommended_price_fraction=self.recommended_price_fraction,
            investment_projection_years=self.investment_projection_years,
        )


settings = Settings()
