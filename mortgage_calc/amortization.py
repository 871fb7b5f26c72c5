from __future__ import annotations

import logging
from typing import Iterator

import pandas as pd

from mortgage_calc.models import AmortizationResult

logger = logging.getLogger(__name__)

# Balances below half a cent count as paid off
SETTLED_BALANCE = 0.005


def _monthly_rate(annual_rate_pct: float) -> float:
    return annual_rate_pct / 100 / 12


def monthly_payment(principal, annual_rate_pct, term_in_months) -> float:
    """Level monthly principal & interest payment.

    ``annual_rate_pct`` is a percent-number (``7.0`` for 7%). A zero rate
    falls back to straight-line repayment ``principal / term_in_months``.
    """

    n = int(term_in_months)
    if principal <= 0 or n <= 0:
        return 0.0
    r = _monthly_rate(annual_rate_pct)
    if r == 0:
        return principal / n
    growth = (1 + r) ** n
    return principal * (r * growth) / (growth - 1)


def principal_from_payment(payment, annual_rate_pct, term_in_months) -> float:
    """Reverse amortization: the loan amount a monthly payment supports."""

    n = int(term_in_months)
    if payment <= 0 or n <= 0:
        return 0.0
    r = _monthly_rate(annual_rate_pct)
    if r == 0:
        return payment * n
    return payment * (1 - (1 + r) ** (-n)) / r


def remaining_balance(principal, annual_rate_pct, term_in_months, months_paid) -> float:
    """Balance left after ``months_paid`` level payments."""

    n = int(term_in_months)
    if principal <= 0 or n <= 0 or months_paid >= n:
        return 0.0
    pi = monthly_payment(principal, annual_rate_pct, n)
    r = _monthly_rate(annual_rate_pct)
    if r == 0:
        return max(0.0, principal - pi * months_paid)
    return pi * (1 - (1 + r) ** (-(n - months_paid))) / r


def _simulate(principal, annual_rate_pct, n, extra) -> Iterator[dict]:
    r = _monthly_rate(annual_rate_pct)
    pi = monthly_payment(principal, annual_rate_pct, n)
    extra = min(max(0.0, extra), pi)
    balance = float(principal)
    month = 0
    limit = 2 * n
    while balance > SETTLED_BALANCE and month < limit:
        interest = balance * r
        paid = min(pi - interest + extra, balance)
        balance -= paid
        month += 1
        yield {
            "Month": month,
            "Payment": paid + interest,
            "Principal": paid,
            "Interest": interest,
            "Extra": max(0.0, paid - (pi - interest)),
            "Balance": max(0.0, balance),
        }
    if balance > SETTLED_BALANCE:
        logger.warning(
            "Payoff simulation stopped at %d months with %.2f outstanding", limit, balance
        )


def calculate_amortization(
    principal, annual_rate_pct, term_in_months, extra_monthly_payment=0.0
) -> AmortizationResult:
    """Standard payment plus the actual payoff under an extra monthly payment.

    The extra payment is capped at the standard P&I amount and the simulation
    runs at most ``2 * term_in_months`` periods. The returned monthly P&I is
    the standard payment; total interest and term reflect the extra payment.
    """

    n = int(term_in_months)
    if principal <= 0 or n <= 0:
        return AmortizationResult()
    total_interest = 0.0
    months = 0
    for row in _simulate(principal, annual_rate_pct, n, extra_monthly_payment):
        total_interest += row["Interest"]
        months = row["Month"]
    return AmortizationResult(
        monthly_principal_and_interest=monthly_payment(principal, annual_rate_pct, n),
        total_interest=total_interest,
        actual_term_in_months=months,
    )


def amortization_schedule(
    principal, annual_rate_pct, term_in_months, extra_monthly_payment=0.0
) -> pd.DataFrame:
    """Month-by-month schedule with the same capping rules as the payoff math."""

    columns = ["Month", "Payment", "Principal", "Interest", "Extra", "Balance"]
    n = int(term_in_months)
    if principal <= 0 or n <= 0:
        return pd.DataFrame(columns=columns)
    rows = list(_simulate(principal, annual_rate_pct, n, extra_monthly_payment))
    return pd.DataFrame(rows, columns=columns)


def yearly_summary(schedule: pd.DataFrame) -> pd.DataFrame:
    """Aggregate a monthly schedule to one row per loan year."""

    if schedule is None or schedule.empty:
        return pd.DataFrame(columns=["Year", "Principal", "Interest", "Ending Balance"])
    out = schedule.copy()
    out["Year"] = (out["Month"] - 1) // 12 + 1
    agg = (
        out.groupby("Year")
        .agg(
            Principal=("Principal", "sum"),
            Interest=("Interest", "sum"),
            **{"Ending Balance": ("Balance", "last")},
        )
        .reset_index()
    )
    return agg
