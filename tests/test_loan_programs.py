import pytest

from mortgage_calc.loan_programs import monthly_mortgage_insurance, mortgage_insurance_label
from mortgage_calc.models import LoanProgram


@pytest.mark.parametrize(
    "program, expected",
    [
        (LoanProgram.CONVENTIONAL, 300000 * 0.005 / 12),
        (LoanProgram.FHA, 300000 * 0.0085 / 12),
        (LoanProgram.USDA, 300000 * 0.0035 / 12),
        (LoanProgram.VA, 0.0),
        (LoanProgram.JUMBO, 0.0),
    ],
)
def test_estimated_insurance(program, expected):
    assert monthly_mortgage_insurance(program, 300000) == pytest.approx(expected)


def test_manual_override_wins_except_for_va():
    assert monthly_mortgage_insurance(LoanProgram.CONVENTIONAL, 300000, 95.0) == 95.0
    assert monthly_mortgage_insurance(LoanProgram.JUMBO, 900000, 150.0) == 150.0
    assert monthly_mortgage_insurance(LoanProgram.USDA, 300000, 0.0) == 0.0
    assert monthly_mortgage_insurance(LoanProgram.VA, 300000, 200.0) == 0.0


def test_program_accepts_string_value():
    assert monthly_mortgage_insurance("FHA", 120000) == pytest.approx(85.0)


def test_rate_table_override():
    rates = {p: 0.01 for p in LoanProgram}
    assert monthly_mortgage_insurance(LoanProgram.CONVENTIONAL, 120000, rates=rates) == pytest.approx(100.0)
    # VA stays at zero regardless of the table
    assert monthly_mortgage_insurance(LoanProgram.VA, 120000, rates=rates) == 0.0


def test_negative_balance_has_no_insurance():
    assert monthly_mortgage_insurance(LoanProgram.FHA, -5000) == 0.0


def test_labels():
    assert mortgage_insurance_label(LoanProgram.CONVENTIONAL) == "PMI"
    assert mortgage_insurance_label(LoanProgram.FHA) == "MIP"
    assert mortgage_insurance_label("USDA") == "USDA Guarantee Fee"
