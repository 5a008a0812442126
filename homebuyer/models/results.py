from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class DTIStatus(Enum):
    SAFE = "safe"
    MODERATE = "moderate"
    RISKY = "risky"


class Severity(Enum):
    MANAGEABLE = "manageable"
    STRAINED = "strained"
    UNSUSTAINABLE = "unsustainable"


class ScenarioKind(Enum):
    RATE_HIKE = "rate_hike"
    INCOME_LOSS = "income_loss"


class RentVsBuyVerdict(Enum):
    BUY_CLEARLY = "buy_clearly"
    BUY_SLIGHTLY = "buy_slightly"
    TOSS_UP = "toss_up"
    RENT_BETTER = "rent_better"


class InvestmentVerdict(Enum):
    STRONG = "strong_investment"
    MODERATE = "moderate_investment"
    MARGINAL = "marginal"
    NEGATIVE_CASH_FLOW = "negative_cash_flow"


class RentSource(Enum):
    AUTO_ESTIMATE = "auto_estimate"
    USER_OVERRIDE = "user_override"


class ReadinessLevel(Enum):
    NOT_READY = "not_ready"
    NEEDS_WORK = "needs_work"
    READY = "ready"
    HIGHLY_PREPARED = "highly_prepared"


class Priority(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RiskLevel(Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very_high"


class FlagSeverity(Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class LoanProgramType(Enum):
    CONVENTIONAL = "conventional"
    FHA = "fha"
    VA = "va"
    USDA = "usda"


class ClosingCostCategory(Enum):
    LENDER = "lender"
    TITLE_ESCROW = "title_escrow"
    GOVERNMENT = "government"
    PREPAID = "prepaid"


class Difficulty(Enum):
    EASY = "easy"
    MODERATE = "moderate"
    HARD = "hard"


# ---- Payment & affordability ----

@dataclass(frozen=True)
class PaymentBreakdown:
    """Monthly PITI + PMI. Principal/interest are the first month's split."""
    principal: Decimal
    interest: Decimal
    property_tax: Decimal
    home_insurance: Decimal
    pmi: Decimal
    total_monthly: Decimal

    @property
    def principal_and_interest(self) -> Decimal:
        return self.principal + self.interest


@dataclass(frozen=True)
class DTIAnalysis:
    front_end_ratio: Decimal  # Percent, 2dp
    back_end_ratio: Decimal
    front_end_status: DTIStatus
    back_end_status: DTIStatus
    max_front_end: Decimal
    max_back_end: Decimal


@dataclass(frozen=True)
class MaxPriceResult:
    max_home_price: Decimal
    max_loan_amount: Decimal
    limiting_factor: str  # "front-end DTI" or "back-end DTI"
    max_housing_payment: Decimal


@dataclass(frozen=True)
class AmortizationYear:
    year: int
    principal_paid: Decimal
    interest_paid: Decimal
    remaining_balance: Decimal
    equity_percent: Decimal  # Share of original loan repaid


@dataclass(frozen=True)
class AffordabilityResult:
    max_home_price: Decimal
    recommended_home_price: Decimal
    down_payment_amount: Decimal
    down_payment_percent: Decimal
    loan_amount: Decimal
    monthly_payment: PaymentBreakdown
    dti_analysis: DTIAnalysis
    amortization_summary: list[AmortizationYear]
    limiting_factor: str
    max_loan_amount: Decimal
    interest_rate: Decimal  # Decimal annual rate used
    loan_term_years: int


# ---- Risk ----

@dataclass(frozen=True)
class StressTestResult:
    scenario: str
    description: str
    kind: ScenarioKind
    new_dti: Decimal
    can_afford: bool
    severity: Severity
    new_monthly_payment: Decimal | None = None
    new_rate: Decimal | None = None
    reduced_income: Decimal | None = None
    monthly_surplus_or_deficit: Decimal | None = None
    months_of_runway: int | None = None


@dataclass(frozen=True)
class EmergencyFundAnalysis:
    current_emergency_fund: Decimal
    post_purchase_savings: Decimal
    monthly_need: Decimal
    months_covered: int
    adequate: bool
    recommendation: str


@dataclass(frozen=True)
class RentVsBuyYear:
    year: int
    rent_cumulative: Decimal
    buy_cumulative: Decimal  # Net cost: outlay - equity + forgone returns
    equity_built: Decimal
    net_buy_advantage: Decimal  # Positive = buying is ahead


@dataclass(frozen=True)
class RentVsBuyReport:
    current_rent: Decimal
    monthly_buy_cost: Decimal
    monthly_cost_difference: Decimal  # Buy - rent
    break_even_month: int | None
    break_even_year: int | None
    # 5- and 10-year figures are None when the loan horizon is shorter
    five_year_rent_total: Decimal | None
    five_year_buy_total: Decimal | None
    five_year_equity: Decimal | None
    five_year_net_advantage: Decimal | None
    ten_year_net_advantage: Decimal | None
    year_by_year: list[RentVsBuyYear]
    verdict: RentVsBuyVerdict
    verdict_horizon_years: int  # Year-end the verdict is judged at, 5 unless the loan is shorter
    verdict_explanation: str


@dataclass(frozen=True)
class RiskFlag:
    category: str  # income, debt, savings, credit, market
    severity: FlagSeverity
    message: str
    recommendation: str


@dataclass(frozen=True)
class RiskReport:
    overall_risk_level: RiskLevel
    overall_score: int  # 0-100, higher is better
    stress_tests: list[StressTestResult]
    risk_flags: list[RiskFlag]
    emergency_fund: EmergencyFundAnalysis
    rent_vs_buy: RentVsBuyReport | None  # None when the borrower cannot qualify


# ---- Investment ----

@dataclass(frozen=True)
class OperatingExpenses:
    """Monthly landlord operating expenses."""
    property_management: Decimal
    vacancy: Decimal
    capex_reserve: Decimal
    property_tax: Decimal
    insurance: Decimal
    hoa: Decimal
    maintenance: Decimal

    @property
    def total(self) -> Decimal:
        return (
            self.property_management + self.vacancy + self.capex_reserve
            + self.property_tax + self.insurance + self.hoa + self.maintenance
        )


@dataclass(frozen=True)
class InvestmentProjectionYear:
    year: int
    property_value: Decimal
    equity: Decimal
    annual_rent: Decimal
    annual_cash_flow: Decimal
    cumulative_cash_flow: Decimal
    total_return: Decimal
    total_return_percent: Decimal
    annualized_return: Decimal


@dataclass(frozen=True)
class InvestmentAnalysis:
    monthly_gross_rent: Decimal
    rent_source: RentSource
    monthly_operating_expenses: OperatingExpenses
    monthly_noi: Decimal
    monthly_cash_flow: Decimal
    annual_noi: Decimal
    annual_cash_flow: Decimal
    cap_rate: Decimal  # Percent
    cash_on_cash_return: Decimal  # Percent
    gross_rent_multiplier: Decimal
    rent_to_price: Decimal  # Percent, monthly
    total_cash_invested: Decimal
    purchase_price: Decimal
    projections: list[InvestmentProjectionYear]
    hold_period_irr: Decimal  # Percent, sale at final-year equity
    verdict: InvestmentVerdict
    verdict_explanation: str


# ---- Readiness ----

@dataclass(frozen=True)
class ReadinessComponents:
    dti_score: int
    credit_score: int
    down_payment_score: int
    debt_health_score: int

    @property
    def total(self) -> int:
        return self.dti_score + self.credit_score + self.down_payment_score + self.debt_health_score


@dataclass(frozen=True)
class ActionItem:
    category: str  # dti, credit, down_payment, debt_health, emergency_fund
    priority: Priority
    action: str
    impact: str
    points: int = 0  # Estimated score gain


@dataclass(frozen=True)
class PreApprovalReadinessScore:
    overall_score: int
    level: ReadinessLevel
    components: ReadinessComponents
    action_items: list[ActionItem] = field(default_factory=list)


# ---- Loan options & purchase costs ----

@dataclass(frozen=True)
class LoanProgram:
    program: LoanProgramType
    eligible: bool
    eligibility_reason: str
    min_down_payment_percent: Decimal
    mortgage_insurance_required: bool
    pros: list[str] = field(default_factory=list)
    cons: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class LoanScenario:
    label: str
    interest_rate: Decimal
    loan_term_years: int
    monthly_payment: PaymentBreakdown
    total_cost: Decimal  # Every monthly payment over the full term
    total_interest: Decimal


@dataclass(frozen=True)
class ScenarioComparison:
    home_price: Decimal
    down_payment: Decimal
    loan_amount: Decimal
    first: LoanScenario
    second: LoanScenario
    monthly_difference: Decimal  # first - second
    total_cost_difference: Decimal
    total_interest_difference: Decimal


@dataclass(frozen=True)
class ClosingCostItem:
    item: str
    amount: Decimal  # Whole dollars
    category: ClosingCostCategory


@dataclass(frozen=True)
class ClosingCostEstimate:
    items: list[ClosingCostItem]
    total: Decimal
    low_estimate: Decimal
    high_estimate: Decimal
    category_totals: dict[str, Decimal]  # Keyed by ClosingCostCategory value
    state: str | None
    state_name: str | None
    is_state_specific: bool


@dataclass(frozen=True)
class SavingsStrategy:
    title: str
    description: str
    potential_savings: Decimal
    timeframe_months: int
    difficulty: Difficulty


# ---- Full report ----

@dataclass(frozen=True)
class HomebuyerReport:
    affordability: AffordabilityResult
    risk: RiskReport
    readiness: PreApprovalReadinessScore
    investment: InvestmentAnalysis | None = None
    loan_programs: list[LoanProgram] = field(default_factory=list)
    term_comparison: ScenarioComparison | None = None  # 15- vs 30-year fixed
    closing_cost_estimate: ClosingCostEstimate | None = None
    savings_strategies: list[SavingsStrategy] = field(default_factory=list)
    disclaimers: list[str] = field(default_factory=list)
