"""Qualified-mortgage policy bands and engine limits.

Shared by the DTI evaluator, stress tester, emergency fund evaluator,
readiness scorer and risk assessor. Ratios are percentages.
"""

from decimal import Decimal

# Debt-to-income bands (percent of gross monthly income)
FRONT_END_SAFE_MAX = Decimal("28")
FRONT_END_MODERATE_MAX = Decimal("32")
BACK_END_SAFE_MAX = Decimal("36")
BACK_END_MODERATE_MAX = Decimal("43")  # QM ceiling
INCOME_LOSS_UNSUSTAINABLE = Decimal("50")

# Solver defaults are the safe bands as fractions
DEFAULT_MAX_FRONT_END_DTI = FRONT_END_SAFE_MAX / 100
DEFAULT_MAX_BACK_END_DTI = BACK_END_SAFE_MAX / 100

# PMI drops off at 20% equity
PMI_EQUITY_THRESHOLD = Decimal("0.20")

# Emergency fund (months of living expenses + housing)
EMERGENCY_FUND_TARGET_MONTHS = 6
EMERGENCY_FUND_MINIMUM_MONTHS = 3

# Sentinel for unbounded outputs (runway with no deficit, DTI on zero income)
UNBOUNDED_SENTINEL = 999

# Affordability search
MAX_SEARCH_PRICE = Decimal("3000000")
SOLVER_ITERATIONS = 60
RECOMMENDED_PRICE_FRACTION = Decimal("0.80")

# Stress scenarios
RATE_HIKE_DELTAS = (Decimal("0.01"), Decimal("0.02"), Decimal("0.03"))
INCOME_LOSS_PERCENTS = (Decimal("25"), Decimal("50"), Decimal("100"))

# Credit
CREDIT_SCORE_MIN = 300
CREDIT_SCORE_MAX = 850
