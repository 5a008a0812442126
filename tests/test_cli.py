import json

import pytest

from homebuyer.cli import main

PAYLOAD = {
    "profile": {
        "annual_gross_income": 100000,
        "monthly_debt_payments": 500,
        "down_payment_savings": 60000,
        "additional_savings": 30000,
        "credit_score": 740,
        "current_monthly_rent": 2000,
    },
    "market": {"thirty_year_fixed": 6.5, "fifteen_year_fixed": 5.8},
}


@pytest.fixture
def input_file(tmp_path):
    def write(payload):
        path = tmp_path / "profile.json"
        path.write_text(json.dumps(payload))
        return str(path)
    return write


class TestCLI:
    def test_terminal_report(self, input_file, capsys):
        main([input_file(PAYLOAD)])
        out = capsys.readouterr().out
        assert "Affordability" in out
        assert "Pre-Approval Readiness" in out
        assert "Job loss" in out
        assert "not constitute financial advice" in out

    def test_json_report(self, input_file, capsys):
        main([input_file(PAYLOAD), "--json"])
        data = json.loads(capsys.readouterr().out)
        assert set(data) == {
            "affordability", "risk", "readiness", "investment", "loan_programs",
            "term_comparison", "closing_cost_estimate", "savings_strategies", "disclaimers",
        }
        assert data["investment"] is None
        # Decimals are strings, enums are their values
        assert isinstance(data["affordability"]["max_home_price"], str)
        assert data["affordability"]["dti_analysis"]["front_end_status"] in ("safe", "moderate", "risky")

    def test_json_report_with_investment(self, input_file, capsys):
        payload = dict(PAYLOAD, investment={"is_investment_property": True, "expected_monthly_rent": 2400})
        main([input_file(payload), "--json"])
        data = json.loads(capsys.readouterr().out)
        assert data["investment"]["rent_source"] == "user_override"

    def test_validation_error_exits_2(self, input_file, capsys):
        bad = dict(PAYLOAD, profile=dict(PAYLOAD["profile"], credit_score=900))
        with pytest.raises(SystemExit) as exc:
            main([input_file(bad)])
        assert exc.value.code == 2
        assert "credit_score" in capsys.readouterr().err

    def test_missing_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main([str(tmp_path / "missing.json")])
        assert exc.value.code == 1

    @pytest.mark.parametrize("payload", [[PAYLOAD], "profile", 42])
    def test_top_level_must_be_object(self, input_file, capsys, payload):
        with pytest.raises(SystemExit) as exc:
            main([input_file(payload)])
        assert exc.value.code == 2
        assert "JSON object" in capsys.readouterr().err

    def test_loan_options_section(self, input_file, capsys):
        payload = dict(PAYLOAD, profile=dict(PAYLOAD["profile"], state="NY", military_veteran=True))
        main([input_file(payload)])
        out = capsys.readouterr().out
        assert "Loan Options" in out
        assert "15-year fixed" in out
        assert "Closing Costs (New York)" in out

    def test_json_closing_costs_by_category(self, input_file, capsys):
        main([input_file(PAYLOAD), "--json"])
        data = json.loads(capsys.readouterr().out)
        totals = data["closing_cost_estimate"]["category_totals"]
        assert set(totals) == {"lender", "title_escrow", "government", "prepaid"}
        assert data["loan_programs"][0]["program"] == "conventional"
