"""Terminal report for a homebuyer profile.

Usage:
    homebuyer profile.json
    homebuyer profile.json --json

The input file holds {"profile": {...}, "market": {...}, "investment": {...}};
"investment" is optional.
"""

import argparse
import dataclasses
import json
import logging
import sys
from decimal import Decimal
from enum import Enum
from pathlib import Path

from pydantic import ValidationError

from homebuyer.config import settings
from homebuyer.engine.report import build_report
from homebuyer.models.profile import BorrowerProfile, InvestmentInputs, MarketSnapshot
from homebuyer.models.results import HomebuyerReport


# ── Helpers ──────────────────────────────────────────────────────────────────

def _pct(v) -> str:
    """Format an already-scaled percentage (28.5 -> 28.50%)."""
    return f"{float(v):.2f}%"


def _rate(v) -> str:
    """Format a decimal rate (0.065 -> 6.50%)."""
    return f"{float(v) * 100:.2f}%"


def _dollar(v) -> str:
    return f"${float(v):,.0f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


def _json_default(value):
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def report_to_json(report: HomebuyerReport) -> str:
    return json.dumps(dataclasses.asdict(report), default=_json_default, indent=2)


def load_inputs(path: Path) -> tuple[BorrowerProfile, MarketSnapshot, InvestmentInputs | None]:
    """Parse and validate the input file.

    Raises ValidationError on bad values and ValueError when the top level is
    not a JSON object.
    """
    raw = json.loads(path.read_text(encoding="utf-8"), parse_float=Decimal)
    if not isinstance(raw, dict):
        raise ValueError(f"expected a JSON object at the top level, got {type(raw).__name__}")
    profile = BorrowerProfile.model_validate(raw.get("profile", {}))
    market = MarketSnapshot.model_validate(raw.get("market", {}))
    investment = None
    if raw.get("investment") is not None:
        investment = InvestmentInputs.model_validate(raw["investment"])
    return profile, market, investment


# ── Report sections ──────────────────────────────────────────────────────────

def print_affordability(report: HomebuyerReport) -> None:
    aff = report.affordability
    pay = aff.monthly_payment
    dti = aff.dti_analysis
    _header("Affordability")
    print(f"  Max Home Price:       {_dollar(aff.max_home_price)}  (limited by {aff.limiting_factor})")
    print(f"  Recommended Price:    {_dollar(aff.recommended_home_price)}")
    print(f"  Down Payment:         {_dollar(aff.down_payment_amount)} ({_pct(aff.down_payment_percent)})")
    print(f"  Loan:                 {_dollar(aff.loan_amount)} at {_rate(aff.interest_rate)}, {aff.loan_term_years}yr")
    print()
    print(f"  Principal & Interest: ${pay.principal_and_interest:,.2f}")
    print(f"  Property Tax:         ${pay.property_tax:,.2f}")
    print(f"  Insurance:            ${pay.home_insurance:,.2f}")
    print(f"  PMI:                  ${pay.pmi:,.2f}")
    print(f"  Total Monthly:        ${pay.total_monthly:,.2f}")
    print()
    print(f"  Front-End DTI:        {_pct(dti.front_end_ratio)} ({dti.front_end_status.value})")
    print(f"  Back-End DTI:         {_pct(dti.back_end_ratio)} ({dti.back_end_status.value})")

    if aff.amortization_summary:
        print()
        print(f"  {'Yr':>3}  {'Principal':>11}  {'Interest':>11}  {'Balance':>11}  {'Equity':>7}")
        for yr in aff.amortization_summary:
            print(
                f"  {yr.year:>3}  {_dollar(yr.principal_paid):>11}  {_dollar(yr.interest_paid):>11}  "
                f"{_dollar(yr.remaining_balance):>11}  {_pct(yr.equity_percent):>7}"
            )


def print_risk(report: HomebuyerReport) -> None:
    risk = report.risk
    _header(f"Risk: {risk.overall_risk_level.value} ({risk.overall_score}/100)")
    for test in risk.stress_tests:
        status = "ok" if test.can_afford else "FAIL"
        print(f"  {test.scenario:<14} DTI {_pct(test.new_dti):>8}  {test.severity.value:<13} {status}")
    fund = risk.emergency_fund
    print()
    print(f"  Emergency Fund:       {fund.months_covered} months after closing")
    print(f"                        {fund.recommendation}")
    if risk.rent_vs_buy is not None:
        rvb = risk.rent_vs_buy
        print()
        print(f"  Rent vs Buy:          {rvb.verdict.value}")
        print(f"                        {rvb.verdict_explanation}")
    if risk.risk_flags:
        print()
        for flag in risk.risk_flags:
            print(f"  [{flag.severity.value.upper():>8}] {flag.message}")
            print(f"             {flag.recommendation}")


def print_readiness(report: HomebuyerReport) -> None:
    ready = report.readiness
    comp = ready.components
    _header(f"Pre-Approval Readiness: {ready.overall_score}/100 ({ready.level.value})")
    print(f"  DTI:          {comp.dti_score:>2}/25")
    print(f"  Credit:       {comp.credit_score:>2}/25")
    print(f"  Down Payment: {comp.down_payment_score:>2}/25")
    print(f"  Debt Health:  {comp.debt_health_score:>2}/25")
    for item in ready.action_items:
        print(f"  - [{item.priority.value}] {item.action}")


def print_investment(report: HomebuyerReport) -> None:
    inv = report.investment
    if inv is None:
        return
    _header("Investment")
    print(f"  Gross Rent:           {_dollar(inv.monthly_gross_rent)}/mo ({inv.rent_source.value})")
    print(f"  Operating Expenses:   {_dollar(inv.monthly_operating_expenses.total)}/mo")
    print(f"  NOI:                  {_dollar(inv.monthly_noi)}/mo")
    print(f"  Cash Flow:            {_dollar(inv.monthly_cash_flow)}/mo")
    print(f"  Cap Rate:             {_pct(inv.cap_rate)}")
    print(f"  Cash-on-Cash:         {_pct(inv.cash_on_cash_return)}")
    print(f"  Hold-Period IRR:      {_pct(inv.hold_period_irr)}")
    print(f"  Verdict:              {inv.verdict.value}")
    print(f"                        {inv.verdict_explanation}")


def print_loan_options(report: HomebuyerReport) -> None:
    _header("Loan Options")
    for program in report.loan_programs:
        mark = "yes" if program.eligible else "no"
        print(
            f"  {program.program.value.upper():<13} eligible: {mark:<4}"
            f"min down {program.min_down_payment_percent}%  {program.eligibility_reason}"
        )

    comparison = report.term_comparison
    if comparison is not None:
        print()
        for scenario in (comparison.first, comparison.second):
            print(
                f"  {scenario.label:<14} {_rate(scenario.interest_rate)}  "
                f"${scenario.monthly_payment.total_monthly:,.2f}/mo  "
                f"interest {_dollar(scenario.total_interest)}  total {_dollar(scenario.total_cost)}"
            )
        print(f"  Monthly difference:   ${comparison.monthly_difference:,.2f}")
        print(f"  Interest difference:  {_dollar(comparison.total_interest_difference)}")

    estimate = report.closing_cost_estimate
    if estimate is not None:
        where = estimate.state_name or "national averages"
        print()
        print(
            f"  Closing Costs ({where}): {_dollar(estimate.low_estimate)} - "
            f"{_dollar(estimate.high_estimate)}"
        )
        for item in estimate.items:
            print(f"    {item.item:<40} {_dollar(item.amount):>9}")

    if report.savings_strategies:
        print()
        print("  Savings Strategies:")
        for strategy in report.savings_strategies:
            when = f"{strategy.timeframe_months} months" if strategy.timeframe_months else "now"
            print(f"  - [{strategy.difficulty.value}] {strategy.title} ({when}): {strategy.description}")


# ── Main ─────────────────────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Homebuyer affordability and risk report")
    parser.add_argument("input", type=Path, help="JSON file with profile, market and optional investment")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level)

    try:
        profile, market, investment = load_inputs(args.input)
    except OSError as exc:
        print(f"Error: could not read {args.input}: {exc}", file=sys.stderr)
        sys.exit(1)
    except json.JSONDecodeError as exc:
        print(f"Error: {args.input} is not valid JSON: {exc}", file=sys.stderr)
        sys.exit(2)
    except ValidationError as exc:
        print(f"Error: invalid input\n{exc}", file=sys.stderr)
        sys.exit(2)
    except ValueError as exc:
        print(f"Error: {args.input}: {exc}", file=sys.stderr)
        sys.exit(2)

    report = build_report(profile, market, investment=investment)

    if args.json:
        print(report_to_json(report))
        return

    print_affordability(report)
    print_risk(report)
    print_readiness(report)
    print_investment(report)
    print_loan_options(report)
    print()
    for line in report.disclaimers:
        print(f"  * {line}")


if __name__ == "__main__":
    main()
