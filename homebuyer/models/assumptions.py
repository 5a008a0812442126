from dataclasses import dataclass
from decimal import Decimal

from homebuyer.engine.policy import RECOMMENDED_PRICE_FRACTION


@dataclass(frozen=True)
class EconomicAssumptions:
    # Ownership costs
    property_tax_rate: Decimal = Decimal("0.011")  # Annual, % of price
    insurance_annual: Decimal = Decimal("1500")
    pmi_rate: Decimal = Decimal("0.005")  # Annual, % of loan
    closing_cost_pct: Decimal = Decimal("0.03")  # Buyer closing costs, % of price
    maintenance_rate: Decimal = Decimal("0.01")  # Annual, % of home value

    # Growth
    home_appreciation: Decimal = Decimal("0.03")
    rent_growth: Decimal = Decimal("0.035")
    opportunity_cost_rate: Decimal = Decimal("0.06")  # Return on capital not put into the house
    investment_rent_growth: Decimal = Decimal("0.03")

    # Affordability
    recommended_price_fraction: Decimal = RECOMMENDED_PRICE_FRACTION  # Of max home price

    # Investment
    investment_projection_years: int = 10

    def closing_costs(self, home_price: Decimal) -> Decimal:
        return home_price * self.closing_cost_pct
