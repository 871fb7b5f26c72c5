import re

from mortgage_calc.formatters import (
    format_currency,
    format_number,
    format_percentage,
    format_result,
    parse_currency_input,
    parse_numeric_input,
    parse_percentage_input,
)
from mortgage_calc.models import CalculatorResult


def test_currency_rounds_and_groups():
    assert format_currency(1234.56) == "$1,235"
    assert format_currency(1234.5, 2) == "$1,234.50"
    assert format_currency(-1500) == "-$1,500"
    assert format_currency(0) == "$0"


def test_ties_round_half_up():
    assert format_number(2.5) == "3"
    assert format_number(0.5) == "1"
    assert format_number(-2.5) == "-3"
    assert format_currency(1234.5) == "$1,235"
    assert format_currency(0.125, 2) == "$0.13"
    assert format_percentage(0.125, 0) == "13%"


def test_large_values_keep_every_digit():
    assert format_number(1e30, 2) == "1,000,000,000,000,000,000,000,000,000,000.00"


def test_currency_never_shows_negative_zero():
    assert format_currency(-0.001, 2) == "$0.00"


def test_currency_two_decimals_across_range():
    for x in [0, 0.005, 1, 99.999, 12345.678, 9_999_999.99, 10_000_000]:
        assert re.fullmatch(r"\$[\d,]+\.\d{2}", format_currency(x, 2))


def test_non_finite_values_render_as_zero():
    assert format_currency(float("nan")) == "$0"
    assert format_currency(float("inf"), 2) == "$0.00"
    assert format_percentage(float("-inf")) == "0.00%"


def test_percentage_takes_fraction():
    assert format_percentage(0.05) == "5.00%"
    assert format_percentage(0.8, 0) == "80%"
    assert format_percentage(0.123456, 4) == "12.3456%"
    for x in [0, 0.0001, 0.5, 1, 3.33333]:
        assert re.fullmatch(r"-?\d+\.\d{4}%", format_percentage(x, 4))


def test_number_format():
    assert format_number(1234567.891, 2) == "1,234,567.89"
    assert format_number(20) == "20"


def test_input_cleaning_keeps_digits_and_first_point():
    assert parse_currency_input("$1,234.56") == "1234.56"
    assert parse_percentage_input("7.5%") == "7.5"
    assert parse_currency_input("1.2.3") == "1.23"
    assert parse_currency_input("") == ""


def test_parse_numeric_input_defaults():
    assert parse_numeric_input("$350,000") == 350000.0
    assert parse_numeric_input("-5") == 0.0
    assert parse_numeric_input("abc", 3.0) == 3.0
    assert parse_numeric_input(None) == 0.0
    assert parse_numeric_input(".") == 0.0
    assert parse_numeric_input(-2.5, 1.0) == 1.0
    assert parse_numeric_input(float("nan"), 4.0) == 4.0
    assert parse_numeric_input(12) == 12.0


def test_format_result_by_type():
    assert format_result(CalculatorResult(label="Payment", value=1862.85)) == "$1,863"
    assert format_result(CalculatorResult(label="LTV", value=0.8, format="percentage")) == "80.00%"
    assert format_result(CalculatorResult(label="DSCR", value=1.2345, format="number")) == "1.23"
