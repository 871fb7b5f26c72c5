"""VA funding fee and payment frequency rules."""
from __future__ import annotations

from typing import Dict, Optional

from mortgage_calc.models import FeeType, PaymentFrequency
from mortgage_calc.presets import PERIODS_PER_YEAR, VA_FUNDING_FEE_RATES


def calculate_va_funding_fee(
    base_mortgage_amount: float,
    fee_type: FeeType,
    rates: Optional[Dict[FeeType, float]] = None,
) -> float:
    """Funding fee owed on ``base_mortgage_amount``.

    First-time use is 2.15%, subsequent use 3.3% and exempt veterans pay
    nothing. The fee is financed into the loan, see
    :func:`calculate_final_mortgage_amount`.
    """

    table = VA_FUNDING_FEE_RATES if rates is None else rates
    return max(0.0, base_mortgage_amount) * table[FeeType(fee_type)]


def calculate_final_mortgage_amount(base_mortgage_amount: float, va_funding_fee_amount: float) -> float:
    return base_mortgage_amount + va_funding_fee_amount


def get_periods_per_year(frequency: PaymentFrequency) -> int:
    return PERIODS_PER_YEAR[PaymentFrequency(frequency)]


def adjust_payment_for_frequency(monthly_payment: float, frequency: PaymentFrequency) -> float:
    """Spread a monthly amount over the periods of ``frequency``.

    The annual total stays constant: ``result * periods == monthly * 12``.
    """

    return monthly_payment * 12 / get_periods_per_year(frequency)
