import math

from mortgage_calc.amortization import (
    amortization_schedule,
    calculate_amortization,
    monthly_payment,
    principal_from_payment,
    remaining_balance,
    yearly_summary,
)
from mortgage_calc.models import AmortizationResult


def test_standard_payment_matches_known_value():
    pi = monthly_payment(280000, 7.0, 360)
    assert abs(pi - 1862.49) <= 0.5
    r = 0.07 / 12
    expected = 280000 * (r * (1 + r) ** 360) / ((1 + r) ** 360 - 1)
    assert math.isclose(pi, expected, rel_tol=1e-12)


def test_zero_rate_is_straight_line():
    assert monthly_payment(120000, 0, 360) == 120000 / 360
    res = calculate_amortization(120000, 0, 360)
    assert res.monthly_principal_and_interest == 120000 / 360
    assert res.total_interest == 0
    assert res.actual_term_in_months == 360


def test_zero_principal_or_term_is_all_zero():
    assert calculate_amortization(0, 6.5, 360) == AmortizationResult()
    assert calculate_amortization(-100, 6.5, 360) == AmortizationResult()
    assert calculate_amortization(100000, 6.5, 0) == AmortizationResult()
    assert monthly_payment(100000, 6.5, -12) == 0.0


def test_payoff_without_extra_runs_full_term():
    res = calculate_amortization(200000, 6.0, 360)
    assert res.actual_term_in_months == 360
    assert abs(res.total_interest - (res.monthly_principal_and_interest * 360 - 200000)) < 1.0


def test_extra_payment_shortens_loan():
    base = calculate_amortization(200000, 6.0, 360)
    fast = calculate_amortization(200000, 6.0, 360, 200)
    assert fast.actual_term_in_months < base.actual_term_in_months
    assert fast.total_interest < base.total_interest
    assert fast.monthly_principal_and_interest == base.monthly_principal_and_interest


def test_huge_extra_payment_is_capped():
    res = calculate_amortization(100000, 6.0, 360, 1e9)
    pi = monthly_payment(100000, 6.0, 360)
    assert 0 < res.actual_term_in_months < 360
    assert math.isfinite(res.total_interest) and res.total_interest >= 0
    schedule = amortization_schedule(100000, 6.0, 360, 1e9)
    assert (schedule["Balance"] >= 0).all()
    assert (schedule["Extra"] <= pi + 1e-9).all()


def test_negative_extra_payment_ignored():
    assert calculate_amortization(100000, 5.0, 180, -50) == calculate_amortization(100000, 5.0, 180)


def test_term_never_exceeds_twice_the_schedule():
    for rate in (0, 3.0, 12.0, 20.0):
        res = calculate_amortization(50000, rate, 12)
        assert res.actual_term_in_months <= 24


def test_principal_from_payment_inverse():
    pmt = monthly_payment(400000, 6.5, 360)
    assert abs(principal_from_payment(pmt, 6.5, 360) - 400000) < 1e-6
    assert principal_from_payment(1000, 0, 360) == 360000
    assert principal_from_payment(0, 6.5, 360) == 0.0


def test_remaining_balance():
    assert abs(remaining_balance(250000, 6.0, 360, 0) - 250000) < 1e-6
    assert remaining_balance(250000, 6.0, 360, 360) == 0.0
    mid = remaining_balance(250000, 6.0, 360, 60)
    schedule = amortization_schedule(250000, 6.0, 360)
    assert abs(mid - schedule.loc[59, "Balance"]) < 0.01


def test_schedule_and_yearly_summary():
    schedule = amortization_schedule(150000, 5.0, 180)
    assert list(schedule.columns) == ["Month", "Payment", "Principal", "Interest", "Extra", "Balance"]
    assert len(schedule) == 180
    assert abs(schedule["Principal"].sum() - 150000) < 0.01
    yearly = yearly_summary(schedule)
    assert len(yearly) == 15
    assert yearly["Ending Balance"].iloc[-1] < 0.01
    assert abs(yearly["Interest"].sum() - schedule["Interest"].sum()) < 1e-6


def test_empty_schedule():
    assert amortization_schedule(0, 5.0, 360).empty
    assert yearly_summary(amortization_schedule(0, 5.0, 360)).empty
