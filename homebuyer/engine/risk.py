"""Overall purchase risk: flags plus a 0-100 score (higher is safer).

Composes stress tests, emergency fund, DTI, credit and rent-vs-buy results
that were computed upstream; nothing here re-runs them.
"""

from homebuyer.engine.policy import EMERGENCY_FUND_MINIMUM_MONTHS, EMERGENCY_FUND_TARGET_MONTHS
from homebuyer.models.results import (
    DTIAnalysis,
    DTIStatus,
    EmergencyFundAnalysis,
    FlagSeverity,
    RentVsBuyReport,
    RentVsBuyVerdict,
    RiskFlag,
    RiskLevel,
    RiskReport,
    ScenarioKind,
    Severity,
    StressTestResult,
)

SEVERITY_PENALTY: dict[Severity, int] = {
    Severity.MANAGEABLE: 0,
    Severity.STRAINED: 4,
    Severity.UNSUSTAINABLE: 8,
}
DTI_PENALTY: dict[DTIStatus, int] = {
    DTIStatus.SAFE: 0,
    DTIStatus.MODERATE: 10,
    DTIStatus.RISKY: 20,
}
# (floor, penalty): first floor the credit score is at or over wins
CREDIT_PENALTY: list[tuple[int, int]] = [(720, 0), (680, 3), (620, 8)]
SUBPRIME_PENALTY = 15

RISK_LEVEL_FLOORS: list[tuple[int, RiskLevel]] = [
    (80, RiskLevel.LOW),
    (60, RiskLevel.MODERATE),
    (40, RiskLevel.HIGH),
]

_FLAG_ORDER = {FlagSeverity.CRITICAL: 0, FlagSeverity.WARNING: 1, FlagSeverity.INFO: 2}


def _is_job_loss(test: StressTestResult) -> bool:
    return test.kind is ScenarioKind.INCOME_LOSS and test.reduced_income is not None and test.reduced_income <= 0


def _credit_penalty(credit_score: int) -> int:
    for floor, penalty in CREDIT_PENALTY:
        if credit_score >= floor:
            return penalty
    return SUBPRIME_PENALTY


def risk_level(score: int) -> RiskLevel:
    for floor, level in RISK_LEVEL_FLOORS:
        if score >= floor:
            return level
    return RiskLevel.VERY_HIGH


def _flags(
    stress_tests: list[StressTestResult],
    emergency_fund: EmergencyFundAnalysis,
    rent_vs_buy: RentVsBuyReport | None,
    dti: DTIAnalysis,
    credit_score: int,
) -> list[RiskFlag]:
    flags: list[RiskFlag] = []

    failing_hikes = [t for t in stress_tests if t.kind is ScenarioKind.RATE_HIKE and not t.can_afford]
    if failing_hikes:
        first = failing_hikes[0]
        flags.append(RiskFlag(
            category="income",
            severity=FlagSeverity.WARNING,
            message=f"{first.scenario} would push your back-end DTI to {first.new_dti}%",
            recommendation="Lock a fixed rate or target a lower price to leave room for rate increases",
        ))

    for test in stress_tests:
        if _is_job_loss(test) and test.months_of_runway is not None:
            if test.months_of_runway < EMERGENCY_FUND_MINIMUM_MONTHS:
                flags.append(RiskFlag(
                    category="income",
                    severity=FlagSeverity.CRITICAL,
                    message=f"Savings would cover only {test.months_of_runway} months after a job loss",
                    recommendation="Keep at least 3 months of total obligations in cash after closing",
                ))

    if dti.back_end_status is DTIStatus.RISKY:
        flags.append(RiskFlag(
            category="debt",
            severity=FlagSeverity.CRITICAL,
            message=f"Back-end DTI of {dti.back_end_ratio}% exceeds the 43% qualified-mortgage limit",
            recommendation="Pay down debts before applying or choose a less expensive home",
        ))
    elif dti.back_end_status is DTIStatus.MODERATE:
        flags.append(RiskFlag(
            category="debt",
            severity=FlagSeverity.WARNING,
            message=f"Back-end DTI of {dti.back_end_ratio}% is above the {dti.max_back_end}% guideline",
            recommendation="Reducing monthly debts will improve loan terms",
        ))

    if not emergency_fund.adequate:
        severity = (
            FlagSeverity.WARNING
            if emergency_fund.months_covered >= EMERGENCY_FUND_MINIMUM_MONTHS
            else FlagSeverity.CRITICAL
        )
        flags.append(RiskFlag(
            category="savings",
            severity=severity,
            message=f"Only {emergency_fund.months_covered} months of reserves after closing",
            recommendation=f"Build reserves to {EMERGENCY_FUND_TARGET_MONTHS} months of expenses",
        ))

    if credit_score < 620:
        flags.append(RiskFlag(
            category="credit",
            severity=FlagSeverity.CRITICAL,
            message=f"Credit score {credit_score} is below most conventional loan minimums",
            recommendation="Look at FHA programs or spend 6-12 months rebuilding credit",
        ))
    elif credit_score < 680:
        flags.append(RiskFlag(
            category="credit",
            severity=FlagSeverity.WARNING,
            message=f"Credit score {credit_score} will carry a rate premium",
            recommendation="Raising your score above 680 could lower your rate",
        ))

    if rent_vs_buy is not None and rent_vs_buy.verdict is RentVsBuyVerdict.RENT_BETTER:
        flags.append(RiskFlag(
            category="market",
            severity=FlagSeverity.INFO,
            message=(
                f"Renting comes out ahead over a {rent_vs_buy.verdict_horizon_years}-year horizon "
                "at current prices and rents"
            ),
            recommendation=(
                f"Buy only if you expect to stay well beyond {rent_vs_buy.verdict_horizon_years} years"
            ),
        ))

    flags.sort(key=lambda f: _FLAG_ORDER[f.severity])
    return flags


def assess_risk(
    stress_tests: list[StressTestResult],
    emergency_fund: EmergencyFundAnalysis,
    rent_vs_buy: RentVsBuyReport | None,
    dti: DTIAnalysis,
    credit_score: int,
) -> RiskReport:
    score = 100
    for test in stress_tests:
        if _is_job_loss(test):
            # Total job loss is always unsustainable; weigh it by runway instead
            runway = test.months_of_runway or 0
            if runway < EMERGENCY_FUND_MINIMUM_MONTHS:
                score -= 10
            elif runway < EMERGENCY_FUND_TARGET_MONTHS:
                score -= 5
        else:
            score -= SEVERITY_PENALTY[test.severity]

    if not emergency_fund.adequate:
        score -= 10 if emergency_fund.months_covered >= EMERGENCY_FUND_MINIMUM_MONTHS else 20
    score -= DTI_PENALTY[dti.back_end_status]
    score -= _credit_penalty(credit_score)
    if rent_vs_buy is not None and rent_vs_buy.verdict is RentVsBuyVerdict.RENT_BETTER:
        score -= 5
    score = max(0, min(100, score))

    return RiskReport(
        overall_risk_level=risk_level(score),
        overall_score=score,
        stress_tests=stress_tests,
        risk_flags=_flags(stress_tests, emergency_fund, rent_vs_buy, dti, credit_score),
        emergency_fund=emergency_fund,
        rent_vs_buy=rent_vs_buy,
    )
