import pytest

from mortgage_calc.insurance import (
    convert_insurance,
    dollar_to_percent,
    percent_to_dollar,
    resolve_annual_insurance,
)
from mortgage_calc.models import InsuranceMode


@pytest.mark.parametrize("home_value", [50000, 350000, 1_234_567.89])
@pytest.mark.parametrize("dollars", [0, 1200, 2450.37, 18000])
def test_dollar_round_trip(home_value, dollars):
    assert abs(percent_to_dollar(dollar_to_percent(dollars, home_value), home_value) - dollars) < 0.01


@pytest.mark.parametrize("percent", [0, 0.35, 1.0, 2.75])
def test_percent_round_trip(percent):
    assert abs(dollar_to_percent(percent_to_dollar(percent, 425000), 425000) - percent) < 0.0001


def test_zero_home_value_gives_zero_percent():
    assert dollar_to_percent(1200, 0) == 0
    assert dollar_to_percent(1200, -5) == 0


def test_conversion_is_linear():
    assert dollar_to_percent(2400, 300000) == pytest.approx(2 * dollar_to_percent(1200, 300000))
    assert percent_to_dollar(0.5, 600000) == pytest.approx(2 * percent_to_dollar(0.5, 300000))


def test_toggle_between_modes():
    pct = convert_insurance(1200, InsuranceMode.DOLLAR, InsuranceMode.PERCENT, 300000)
    assert pct == pytest.approx(0.4)
    assert convert_insurance(pct, "percent", "dollar", 300000) == pytest.approx(1200)
    assert convert_insurance(1200, "dollar", "dollar", 300000) == 1200


def test_percent_mode_tracks_home_value():
    assert resolve_annual_insurance(InsuranceMode.PERCENT, 0.5, 300000) == pytest.approx(1500)
    assert resolve_annual_insurance(InsuranceMode.PERCENT, 0.5, 400000) == pytest.approx(2000)
    assert resolve_annual_insurance(InsuranceMode.DOLLAR, 1500, 400000) == 1500
