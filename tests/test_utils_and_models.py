"""Unit tests for input parsing, rounding and input validation."""

import math

import pytest

from repayment_calc.data_models import CalculatorInput, InvalidInputError, ScenarioKey
from repayment_calc.utils import format_duration, parse_amount, parse_percent, round2


class TestRound2:

    def test_rounds_half_up(self):
        assert round2(0.125) == 0.13
        assert round2(2.675) == 2.67  # stored as 2.67499999...

    def test_negative_rounds_away_from_zero(self):
        assert round2(-0.125) == -0.13

    def test_already_rounded(self):
        assert round2(100.0) == 100.0

    def test_very_large_values(self):
        assert round2(1e30) == 1e30
        assert round2(1.7e308) == 1.7e308

    def test_non_finite_passes_through(self):
        assert round2(float("inf")) == float("inf")
        assert round2(float("-inf")) == float("-inf")
        assert math.isnan(round2(float("nan")))


class TestParsing:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("5000", 5000.0),
            ("5,000.50", 5000.5),
            ("$5000", 5000.0),
            ("£1,200", 1200.0),
            ("5k", 5000.0),
            ("1.5M", 1_500_000.0),
            (" 250 ", 250.0),
        ],
    )
    def test_parse_amount(self, raw, expected):
        assert parse_amount(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", ["", "abc", "5kk"])
    def test_parse_amount_rejects_junk(self, raw):
        with pytest.raises(ValueError):
            parse_amount(raw)

    def test_parse_percent_keeps_percent_units(self):
        assert parse_percent("18.9%") == pytest.approx(18.9)
        assert parse_percent("2") == pytest.approx(2.0)

    def test_parse_percent_rejects_junk(self):
        with pytest.raises(ValueError, match="Invalid percentage"):
            parse_percent("high")


class TestFormatDuration:

    @pytest.mark.parametrize(
        "months, expected",
        [
            (0, "0 months"),
            (1, "1 month"),
            (7, "7 months"),
            (12, "1 year"),
            (24, "2 years"),
            (13, "1 year and 1 month"),
            (25, "2 years and 1 month"),
            (600, "50 years"),
        ],
    )
    def test_format(self, months, expected):
        assert format_duration(months) == expected


class TestCalculatorInput:

    def test_defaults_are_valid(self):
        inputs = CalculatorInput()
        assert inputs.validate() is inputs
        assert inputs.as_dict() == {
            "balance": 5000.0,
            "apr": 18.9,
            "minimum_percentage": 2.0,
            "fixed_amount": 200.0,
        }

    @pytest.mark.parametrize(
        "field, message",
        [
            ("balance", "Please enter a positive balance amount."),
            ("apr", "Please enter a positive APR percentage."),
            ("minimum_percentage", "Please enter a positive minimum repayment percentage."),
            ("fixed_amount", "Please enter a positive fixed payment amount."),
        ],
    )
    def test_non_positive_field_rejected(self, field, message):
        inputs = CalculatorInput(**{field: 0.0})
        with pytest.raises(InvalidInputError) as excinfo:
            inputs.validate()
        assert excinfo.value.field == field
        assert str(excinfo.value) == message

    def test_first_bad_field_reported(self):
        with pytest.raises(InvalidInputError) as excinfo:
            CalculatorInput(balance=-1, fixed_amount=-1).validate()
        assert excinfo.value.field == "balance"

    @pytest.mark.parametrize(
        "field, raw, parse",
        [
            ("balance", "inf", parse_amount),
            ("fixed_amount", "nan", parse_amount),
            ("apr", "Infinity", parse_percent),
            ("minimum_percentage", "NaN%", parse_percent),
        ],
    )
    def test_non_finite_rejected(self, field, raw, parse):
        inputs = CalculatorInput(**{field: parse(raw)})
        with pytest.raises(InvalidInputError) as excinfo:
            inputs.validate()
        assert excinfo.value.field == field

    def test_is_value_error(self):
        assert issubclass(InvalidInputError, ValueError)


class TestScenarioKey:

    def test_labels(self):
        assert ScenarioKey.MINIMUM.label == "Minimum Payment Only"
        assert ScenarioKey.FIXED_MINIMUM.label == "Fixed Payment Equal to Initial Minimum"
        assert ScenarioKey.FIXED_CUSTOM.label == "Fixed Custom Payment"

    def test_lookup_by_value(self, default_result):
        assert default_result.scenario("fixed_custom") is default_result.fixed_custom
        with pytest.raises(ValueError):
            default_result.scenario("snowball")
