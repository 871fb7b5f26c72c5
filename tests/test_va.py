import pytest

from mortgage_calc.models import FeeType, PaymentFrequency
from mortgage_calc.va import (
    adjust_payment_for_frequency,
    calculate_final_mortgage_amount,
    calculate_va_funding_fee,
    get_periods_per_year,
)


@pytest.mark.parametrize("base", [0, 1, 150000, 350000.55, 2_000_000])
def test_funding_fee_rates(base):
    assert calculate_va_funding_fee(base, FeeType.FIRST_TIME) == pytest.approx(0.0215 * base)
    assert calculate_va_funding_fee(base, FeeType.SUBSEQUENT) == pytest.approx(0.033 * base)
    assert calculate_va_funding_fee(base, FeeType.EXEMPT) == 0
    if base > 0:
        assert calculate_va_funding_fee(base, "subsequent") > calculate_va_funding_fee(base, "first-time")


def test_funding_fee_is_linear():
    for fee_type in FeeType:
        assert calculate_va_funding_fee(400000, fee_type) == pytest.approx(
            2 * calculate_va_funding_fee(200000, fee_type)
        )


def test_funding_fee_custom_table():
    table = {FeeType.FIRST_TIME: 0.0125, FeeType.SUBSEQUENT: 0.0125, FeeType.EXEMPT: 0.0}
    assert calculate_va_funding_fee(100000, FeeType.FIRST_TIME, table) == pytest.approx(1250)


def test_final_mortgage_amount():
    base = 300000
    fee = calculate_va_funding_fee(base, FeeType.FIRST_TIME)
    final = calculate_final_mortgage_amount(base, fee)
    assert final >= base
    assert abs((final - base) - fee) < 0.01
    assert calculate_final_mortgage_amount(base, 0) == base


def test_periods_per_year():
    assert {f: get_periods_per_year(f) for f in PaymentFrequency} == {
        PaymentFrequency.MONTHLY: 12,
        PaymentFrequency.BI_WEEKLY: 26,
        PaymentFrequency.WEEKLY: 52,
    }
    assert get_periods_per_year("bi-weekly") == get_periods_per_year("bi-weekly") == 26


def test_unknown_frequency_rejected():
    with pytest.raises(ValueError):
        get_periods_per_year("daily")


def test_payment_per_period_keeps_annual_total():
    for f in PaymentFrequency:
        per = adjust_payment_for_frequency(1500, f)
        assert per * get_periods_per_year(f) == pytest.approx(1500 * 12)
    assert adjust_payment_for_frequency(1300, PaymentFrequency.BI_WEEKLY) == pytest.approx(600)
