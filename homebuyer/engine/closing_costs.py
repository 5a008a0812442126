"""Itemized buyer closing costs, state-aware where the state is known.

Line items are whole dollars. The range is the itemized total +/- 15%.
Without a state, national defaults apply: no transfer tax or attorney,
$200 recording, 0.5% title insurance.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from homebuyer.engine.state_costs import STATE_NAMES, state_costs
from homebuyer.models.assumptions import EconomicAssumptions
from homebuyer.models.results import ClosingCostCategory, ClosingCostEstimate, ClosingCostItem

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
WHOLE_DOLLAR = Decimal("1")

ORIGINATION_FEE_RATE = Decimal("0.01")
APPRAISAL_FEE = Decimal("500")
CREDIT_REPORT_FEE = Decimal("50")
UNDERWRITING_FEE = Decimal("750")
TITLE_SEARCH_FEE = Decimal("300")
ESCROW_FEE = Decimal("500")
HOME_INSPECTION_FEE = Decimal("400")
PREPAID_INTEREST_DAYS = 15
PREPAID_TAX_MONTHS = 3

DEFAULT_RECORDING_FEES = Decimal("200")
DEFAULT_TITLE_INSURANCE_RATE = Decimal("0.005")

LOW_FACTOR = Decimal("0.85")
HIGH_FACTOR = Decimal("1.15")

_DEFAULTS = EconomicAssumptions()


def _dollars(value: Decimal) -> Decimal:
    return value.quantize(WHOLE_DOLLAR, ROUND_HALF_UP)


def estimate_closing_costs(
    home_price: Decimal,
    loan_amount: Decimal,
    annual_rate: Decimal,
    state: str | None = None,
    property_tax_rate: Decimal | None = None,
    insurance_annual: Decimal | None = None,
) -> ClosingCostEstimate:
    """Lender, title/escrow, government and prepaid items for one purchase.

    An explicit property tax rate or insurance premium wins over the state
    average, which wins over the national default. An unrecognized state
    falls back to national figures.
    """
    if home_price <= 0:
        raise ValueError(f"home_price must be positive, got {home_price}")
    if loan_amount < 0:
        raise ValueError(f"loan_amount must not be negative, got {loan_amount}")

    rates = state_costs(state) if state else None
    if state and rates is None:
        logger.warning("No closing cost data for state %r; using national defaults", state)

    if property_tax_rate is None:
        property_tax_rate = rates.avg_property_tax_rate if rates else _DEFAULTS.property_tax_rate
    if insurance_annual is None:
        insurance_annual = rates.avg_home_insurance_annual if rates else _DEFAULTS.insurance_annual
    title_rate = rates.title_insurance_rate if rates else DEFAULT_TITLE_INSURANCE_RATE

    lender = ClosingCostCategory.LENDER
    title = ClosingCostCategory.TITLE_ESCROW
    government = ClosingCostCategory.GOVERNMENT
    prepaid = ClosingCostCategory.PREPAID

    items = [
        ClosingCostItem("Loan origination fee (1%)", _dollars(loan_amount * ORIGINATION_FEE_RATE), lender),
        ClosingCostItem("Appraisal", APPRAISAL_FEE, lender),
        ClosingCostItem("Credit report", CREDIT_REPORT_FEE, lender),
        ClosingCostItem("Underwriting fee", UNDERWRITING_FEE, lender),
        ClosingCostItem("Title insurance", _dollars(home_price * title_rate), title),
        ClosingCostItem("Title search", TITLE_SEARCH_FEE, title),
        ClosingCostItem("Escrow/settlement fee", ESCROW_FEE, title),
    ]
    if rates and rates.attorney_required:
        items.append(ClosingCostItem("Attorney fee (required)", rates.attorney_fee, title))
    items.append(ClosingCostItem(
        "Recording fees", rates.recording_fees if rates else DEFAULT_RECORDING_FEES, government,
    ))
    if rates and rates.transfer_tax_rate > 0:
        items.append(ClosingCostItem(
            f"Transfer tax ({rates.transfer_tax_rate * 100:.2f}%)",
            _dollars(home_price * rates.transfer_tax_rate),
            government,
        ))
    items += [
        ClosingCostItem(
            f"Prepaid property taxes ({PREPAID_TAX_MONTHS} months)",
            _dollars(home_price * property_tax_rate * PREPAID_TAX_MONTHS / 12),
            prepaid,
        ),
        ClosingCostItem("Prepaid homeowners insurance (1 year)", _dollars(insurance_annual), prepaid),
        ClosingCostItem(
            f"Prepaid interest ({PREPAID_INTEREST_DAYS} days est.)",
            _dollars(loan_amount * annual_rate * PREPAID_INTEREST_DAYS / 365),
            prepaid,
        ),
        ClosingCostItem("Home inspection", HOME_INSPECTION_FEE, prepaid),
    ]

    total = sum((i.amount for i in items), ZERO)
    category_totals = {
        category.value: sum((i.amount for i in items if i.category is category), ZERO)
        for category in ClosingCostCategory
    }
    code = state.upper() if rates else None
    return ClosingCostEstimate(
        items=items,
        total=total,
        low_estimate=_dollars(total * LOW_FACTOR),
        high_estimate=_dollars(total * HIGH_FACTOR),
        category_totals=category_totals,
        state=code,
        state_name=STATE_NAMES.get(code) if code else None,
        is_state_specific=rates is not None,
    )
