"""Homeowners insurance entered either in dollars or as a percent of value."""
from __future__ import annotations

from mortgage_calc.models import InsuranceMode


def dollar_to_percent(dollar_amount: float, home_value: float) -> float:
    """Annual premium as a percent-number of ``home_value`` (0 when no value)."""

    return dollar_amount / home_value * 100 if home_value > 0 else 0.0


def percent_to_dollar(percent: float, home_value: float) -> float:
    return home_value * percent / 100


def convert_insurance(value: float, from_mode: InsuranceMode, to_mode: InsuranceMode, home_value: float) -> float:
    """Re-express ``value`` when the user flips the $/% toggle."""

    from_mode, to_mode = InsuranceMode(from_mode), InsuranceMode(to_mode)
    if from_mode == to_mode:
        return value
    if to_mode == InsuranceMode.PERCENT:
        return dollar_to_percent(value, home_value)
    return percent_to_dollar(value, home_value)


def resolve_annual_insurance(mode: InsuranceMode, value: float, home_value: float) -> float:
    """Annual premium in dollars for the current home value.

    In percent mode the dollar amount tracks ``home_value``, so a price change
    re-prices the premium; in dollar mode ``value`` is used as entered.
    """

    if InsuranceMode(mode) == InsuranceMode.PERCENT:
        return percent_to_dollar(value, home_value)
    return value
