"""Unit tests for currency formatting, display helpers and text output."""

import pytest

from repayment_calc.data_models import CalculatorInput
from repayment_calc.engine import simulate
from repayment_calc.formatter import (
    describe_payoff,
    first_payments,
    format_currency,
    interest_paid,
    interest_savings,
    last_payments,
    normalize_currency,
    print_comparison,
    print_schedule,
    print_summary,
    select_months,
    total_interest,
)
from repayment_calc.utils import format_duration


class TestCurrency:

    @pytest.mark.parametrize(
        "amount, code, expected",
        [
            (1234.5, "USD", "$1,234.50"),
            (0, "USD", "$0.00"),
            (1000000, "EUR", "€1,000,000.00"),
            (-12, "GBP", "-£12.00"),
        ],
    )
    def test_format(self, amount, code, expected):
        assert format_currency(amount, code) == expected

    def test_unknown_currency_falls_back_to_usd(self):
        assert normalize_currency("jpy") == "USD"
        assert normalize_currency(None) == "USD"
        assert format_currency(5, "JPY") == "$5.00"

    def test_lower_case_code(self):
        assert normalize_currency(" gbp ") == "GBP"


class TestAggregates:

    def test_interest_paid_is_total_minus_balance(self, default_result):
        scenario = default_result.fixed_minimum
        assert interest_paid(scenario, 5000.0) == pytest.approx(scenario.total_paid - 5000.0, abs=0.01)

    def test_total_interest_close_to_interest_paid(self, default_result):
        for scenario in default_result.scenarios:
            assert total_interest(scenario) == pytest.approx(
                interest_paid(scenario, 5000.0), abs=0.005 * scenario.months + 0.02
            )

    def test_interest_savings_positive_for_default_card(self, default_result):
        savings = interest_savings(default_result)
        assert set(savings) == {"fixed_minimum", "fixed_custom"}
        assert savings["fixed_custom"] > savings["fixed_minimum"] > 0

    def test_savings_are_differences_of_totals(self, default_result):
        savings = interest_savings(default_result)
        baseline = total_interest(default_result.minimum)
        assert savings["fixed_custom"] == pytest.approx(
            baseline - total_interest(default_result.fixed_custom), abs=0.01
        )


class TestSelectMonths:

    def test_all(self, default_result):
        entries = default_result.fixed_custom.entries
        assert select_months(entries, "all") == list(entries)

    @pytest.mark.parametrize("name, count", [("first12", 12), ("first24", 24)])
    def test_first_n(self, default_result, name, count):
        rows = select_months(default_result.minimum.entries, name)
        assert [r.month for r in rows] == list(range(1, count + 1))

    def test_first60_on_short_schedule(self, default_result):
        entries = default_result.fixed_custom.entries
        assert len(select_months(entries, "first60")) == min(60, len(entries))

    def test_last12(self, default_result):
        entries = default_result.minimum.entries
        rows = select_months(entries, "last12")
        assert len(rows) == 12
        assert rows[-1] is entries[-1]

    def test_unknown_range(self, default_result):
        with pytest.raises(ValueError, match="Unknown display range"):
            select_months(default_result.minimum.entries, "first7")

    def test_first_and_last_payments(self, default_result):
        entries = default_result.fixed_minimum.entries
        assert first_payments(entries) == [(1, 100.0), (2, 100.0), (3, 100.0)]
        last = last_payments(entries)
        assert [m for m, _ in last] == [len(entries) - 2, len(entries) - 1, len(entries)]


class TestTextOutput:

    def test_describe_payoff(self, default_result, runaway_result):
        scenario = default_result.fixed_custom
        assert describe_payoff(scenario) == format_duration(scenario.months)
        assert describe_payoff(runaway_result.minimum) == "Not paid off within 50 years"

    def test_describe_payoff_uses_actual_cap(self):
        result = simulate(10000.0, 29.99, 0.1, 10.0, max_months=18)
        assert describe_payoff(result.minimum) == "Not paid off within 1 year and 6 months"

    def test_print_summary(self, capsys, default_result, default_inputs):
        print_summary(default_result, default_inputs, "EUR")
        out = capsys.readouterr().out
        assert "Scenario 1: Minimum Payment Only" in out
        assert "Initial minimum payment : €100.00" in out
        assert "Decreasing (starts at €100.00)" in out
        assert "Balance left" not in out

    def test_print_summary_unpaid(self, capsys, runaway_result):
        print_summary(runaway_result, CalculatorInput(10000.0, 29.99, 0.1, 10.0))
        out = capsys.readouterr().out
        assert "Not paid off within 50 years" in out
        assert "Balance left" in out

    def test_print_schedule(self, capsys, default_result):
        print_schedule(default_result.minimum.entries[:2])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split("\t") == ["Month", "Payment", "Interest", "Balance"]
        assert lines[1].split("\t") == ["1", "$100.00", "$78.75", "$4,978.75"]
        assert len(lines) == 3

    def test_print_comparison(self, capsys, default_result, default_inputs):
        print_comparison(default_result, default_inputs)
        out = capsys.readouterr().out
        assert "Side-by-Side Comparison" in out
        assert "Interest saved vs. min" in out
        assert "$200.00" in out
