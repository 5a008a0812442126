"""Per-state purchase cost rates: transfer tax, recording, attorney, title.

2024 averages (Tax Foundation, ALTA, NAIC, CFPB). Rates are fractions of
the sale price; fees are flat dollar estimates.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class StateCostRates:
    transfer_tax_rate: Decimal  # Buyer portion
    recording_fees: Decimal
    attorney_fee: Decimal  # 0 where closing attorneys are not required
    title_insurance_rate: Decimal
    avg_home_insurance_annual: Decimal
    avg_property_tax_rate: Decimal

    @property
    def attorney_required(self) -> bool:
        return self.attorney_fee > 0


def _rates(transfer: str, recording: int, attorney: int, title: str, insurance: int, tax: str) -> StateCostRates:
    return StateCostRates(
        transfer_tax_rate=Decimal(transfer),
        recording_fees=Decimal(recording),
        attorney_fee=Decimal(attorney),
        title_insurance_rate=Decimal(title),
        avg_home_insurance_annual=Decimal(insurance),
        avg_property_tax_rate=Decimal(tax),
    )


STATE_COSTS: dict[str, StateCostRates] = {
    "AL": _rates("0.001", 250, 0, "0.005", 1800, "0.0040"),
    "AK": _rates("0", 200, 0, "0.005", 1200, "0.0119"),
    "AZ": _rates("0", 200, 0, "0.005", 1900, "0.0062"),
    "AR": _rates("0.0033", 200, 0, "0.005", 2100, "0.0062"),
    "CA": _rates("0.0011", 250, 0, "0.005", 1500, "0.0076"),
    "CO": _rates("0.0001", 200, 0, "0.005", 2400, "0.0055"),
    "CT": _rates("0.0075", 300, 1200, "0.005", 1800, "0.0198"),
    "DE": _rates("0.02", 200, 1500, "0.005", 1000, "0.0056"),
    "DC": _rates("0.011", 300, 1200, "0.0045", 1300, "0.0085"),
    "FL": _rates("0.006", 200, 0, "0.006", 4000, "0.0089"),
    "GA": _rates("0.001", 250, 1000, "0.005", 1800, "0.0092"),
    "HI": _rates("0.001", 250, 0, "0.005", 1200, "0.0028"),
    "ID": _rates("0", 200, 0, "0.005", 1400, "0.0063"),
    "IL": _rates("0.001", 250, 1000, "0.005", 1700, "0.0197"),
    "IN": _rates("0", 200, 0, "0.005", 1400, "0.0085"),
    "IA": _rates("0.0016", 200, 0, "0.005", 1500, "0.0153"),
    "KS": _rates("0", 200, 0, "0.005", 2400, "0.0139"),
    "KY": _rates("0.001", 200, 800, "0.005", 1800, "0.0083"),
    "LA": _rates("0", 300, 1000, "0.006", 3500, "0.0055"),
    "ME": _rates("0.0044", 200, 1000, "0.005", 1200, "0.0130"),
    "MD": _rates("0.005", 300, 1200, "0.005", 1500, "0.0101"),
    "MA": _rates("0.00456", 300, 1500, "0.005", 1700, "0.0112"),
    "MI": _rates("0.0075", 200, 0, "0.005", 1600, "0.0162"),
    "MN": _rates("0.0033", 300, 0, "0.005", 1800, "0.0112"),
    "MS": _rates("0", 200, 800, "0.005", 2400, "0.0079"),
    "MO": _rates("0", 200, 0, "0.005", 1700, "0.0100"),
    "MT": _rates("0", 200, 0, "0.005", 1800, "0.0083"),
    "NE": _rates("0.00225", 200, 0, "0.005", 2200, "0.0163"),
    "NV": _rates("0.00195", 200, 0, "0.005", 1400, "0.0053"),
    "NH": _rates("0.0075", 200, 1000, "0.005", 1200, "0.0186"),
    "NJ": _rates("0.004", 300, 1500, "0.005", 1400, "0.0241"),
    "NM": _rates("0", 200, 0, "0.005", 1600, "0.0079"),
    "NY": _rates("0.004", 400, 2000, "0.006", 1600, "0.0168"),
    "NC": _rates("0.002", 200, 800, "0.005", 1800, "0.0082"),
    "ND": _rates("0", 200, 0, "0.005", 1800, "0.0098"),
    "OH": _rates("0.001", 200, 0, "0.005", 1400, "0.0153"),
    "OK": _rates("0.00075", 200, 0, "0.005", 2800, "0.0087"),
    "OR": _rates("0.001", 200, 0, "0.005", 1200, "0.0093"),
    "PA": _rates("0.01", 300, 1200, "0.005", 1300, "0.0134"),
    "RI": _rates("0.0046", 250, 1000, "0.005", 1700, "0.0146"),
    "SC": _rates("0.00185", 200, 800, "0.005", 2000, "0.0057"),
    "SD": _rates("0.001", 200, 0, "0.005", 2200, "0.0122"),
    "TN": _rates("0.0037", 200, 0, "0.005", 2000, "0.0066"),
    "TX": _rates("0", 200, 0, "0.006", 3200, "0.0167"),
    "UT": _rates("0", 200, 0, "0.005", 1200, "0.0058"),
    "VT": _rates("0.0125", 200, 1000, "0.005", 800, "0.0183"),
    "VA": _rates("0.0025", 250, 1000, "0.005", 1300, "0.0080"),
    "WA": _rates("0.011", 250, 0, "0.005", 1300, "0.0092"),
    "WV": _rates("0.0033", 200, 800, "0.005", 1300, "0.0058"),
    "WI": _rates("0.003", 200, 0, "0.005", 1200, "0.0185"),
    "WY": _rates("0", 200, 0, "0.005", 1400, "0.0057"),
}

STATE_NAMES: dict[str, str] = {
    "AL": "Alabama", "AK": "Alaska", "AZ": "Arizona", "AR": "Arkansas", "CA": "California",
    "CO": "Colorado", "CT": "Connecticut", "DE": "Delaware", "DC": "District of Columbia", "FL": "Florida",
    "GA": "Georgia", "HI": "Hawaii", "ID": "Idaho", "IL": "Illinois", "IN": "Indiana",
    "IA": "Iowa", "KS": "Kansas", "KY": "Kentucky", "LA": "Louisiana", "ME": "Maine",
    "MD": "Maryland", "MA": "Massachusetts", "MI": "Michigan", "MN": "Minnesota", "MS": "Mississippi",
    "MO": "Missouri", "MT": "Montana", "NE": "Nebraska", "NV": "Nevada", "NH": "New Hampshire",
    "NJ": "New Jersey", "NM": "New Mexico", "NY": "New York", "NC": "North Carolina", "ND": "North Dakota",
    "OH": "Ohio", "OK": "Oklahoma", "OR": "Oregon", "PA": "Pennsylvania", "RI": "Rhode Island",
    "SC": "South Carolina", "SD": "South Dakota", "TN": "Tennessee", "TX": "Texas", "UT": "Utah",
    "VT": "Vermont", "VA": "Virginia", "WA": "Washington", "WV": "West Virginia", "WI": "Wisconsin",
    "WY": "Wyoming",
}


def state_costs(state: str) -> StateCostRates | None:
    return STATE_COSTS.get(state.upper())
