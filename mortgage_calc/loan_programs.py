"""Monthly mortgage insurance (or equivalent fee) by loan program."""
from __future__ import annotations

from typing import Dict, Optional

from mortgage_calc.models import LoanProgram
from mortgage_calc.presets import LOAN_PROGRAM_MI_LABELS, LOAN_PROGRAM_MI_RATES


def monthly_mortgage_insurance(
    program: LoanProgram,
    loan_balance: float,
    manual_monthly: Optional[float] = None,
    rates: Optional[Dict[LoanProgram, float]] = None,
) -> float:
    """Monthly PMI / MIP / guarantee fee for ``loan_balance``.

    A ``manual_monthly`` amount wins over the estimate for every program but
    VA, which carries no monthly mortgage insurance at all. Jumbo estimates to
    zero (20%+ equity assumed) unless a manual amount is supplied.
    """

    program = LoanProgram(program)
    if program == LoanProgram.VA:
        return 0.0
    if manual_monthly is not None:
        return float(manual_monthly)
    table = LOAN_PROGRAM_MI_RATES if rates is None else rates
    return max(0.0, loan_balance) * table[program] / 12


def mortgage_insurance_label(program: LoanProgram) -> str:
    return LOAN_PROGRAM_MI_LABELS[LoanProgram(program)]
