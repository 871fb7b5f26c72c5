"""Early payoff strategies and payment date schedules."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional

import pandas as pd

from mortgage_calc.amortization import calculate_amortization
from mortgage_calc.models import AmortizationResult, LumpSumFrequency, PaymentFrequency
from mortgage_calc.presets import FIRST_PAYMENT_OFFSET_DAYS
from mortgage_calc.va import get_periods_per_year

logger = logging.getLogger(__name__)

PAYMENT_STEPS = {
    PaymentFrequency.MONTHLY: ("months", 1),
    PaymentFrequency.BI_WEEKLY: ("days", 14),
    PaymentFrequency.WEEKLY: ("days", 7),
}


@dataclass(frozen=True)
class EarlyPayoffResult:
    baseline: AmortizationResult
    accelerated: AmortizationResult
    extra_monthly: float
    interest_savings: float
    new_monthly_outlay: float
    term_reduction_months: int


def lump_sum_per_month(amount: float, frequency: LumpSumFrequency, term_in_months: int) -> float:
    """Monthly equivalent of a recurring (or one-time) lump sum."""

    if amount <= 0:
        return 0.0
    frequency = LumpSumFrequency(frequency)
    if frequency == LumpSumFrequency.ONE_TIME:
        return amount / term_in_months if term_in_months > 0 else 0.0
    if frequency == LumpSumFrequency.YEARLY:
        return amount / 12
    return amount / 3


def calculate_early_payoff(
    principal,
    annual_rate_pct,
    term_in_months,
    extra_per_period=0.0,
    frequency=PaymentFrequency.MONTHLY,
    lump_sum_amount=0.0,
    lump_sum_frequency=LumpSumFrequency.ONE_TIME,
) -> EarlyPayoffResult:
    """Compare the standard payoff against one with extra payments.

    ``extra_per_period`` is paid every period of ``frequency`` and is converted
    to its monthly equivalent; lump sums are spread evenly per month. The
    combined extra is subject to the usual cap at the standard P&I payment.
    """

    periods = get_periods_per_year(frequency)
    extra_monthly = max(0.0, extra_per_period) * periods / 12
    extra_monthly += lump_sum_per_month(lump_sum_amount, lump_sum_frequency, int(term_in_months))

    baseline = calculate_amortization(principal, annual_rate_pct, term_in_months)
    applied = min(extra_monthly, baseline.monthly_principal_and_interest)
    if applied < extra_monthly:
        logger.debug("Extra payment %.2f capped at P&I %.2f", extra_monthly, applied)
    accelerated = calculate_amortization(principal, annual_rate_pct, term_in_months, applied)
    return EarlyPayoffResult(
        baseline=baseline,
        accelerated=accelerated,
        extra_monthly=applied,
        interest_savings=baseline.total_interest - accelerated.total_interest,
        new_monthly_outlay=baseline.monthly_principal_and_interest + applied,
        term_reduction_months=baseline.actual_term_in_months - accelerated.actual_term_in_months,
    )


def payment_schedule(first_payment_date, frequency: PaymentFrequency, number_of_payments: int) -> List[date]:
    """Due dates starting on ``first_payment_date``.

    Monthly dates step by calendar month from the first date (Jan 31 is
    followed by the last day of February, then Mar 31).
    """

    if number_of_payments <= 0:
        return []
    start = pd.Timestamp(first_payment_date)
    unit, size = PAYMENT_STEPS[PaymentFrequency(frequency)]
    return [
        (start + pd.DateOffset(**{unit: size * i})).date()
        for i in range(int(number_of_payments))
    ]


def default_first_payment_date(today: Optional[date] = None) -> date:
    return (today or date.today()) + timedelta(days=FIRST_PAYMENT_OFFSET_DAYS)
