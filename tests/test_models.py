import pytest
from pydantic import TypeAdapter, ValidationError

from mortgage_calc.models import (
    CalculatorResult,
    DSCRInputs,
    PurchaseInputs,
    ScenarioInputs,
    validate_inputs,
)


def test_result_scrubs_non_finite_values():
    assert CalculatorResult(label="x", value=float("inf")).value == 0.0
    assert CalculatorResult(label="x", value=float("nan")).value == 0.0
    assert CalculatorResult(label="x", value=12.5).highlight is False


def test_down_payment_cannot_exceed_price():
    with pytest.raises(ValidationError):
        PurchaseInputs(home_price=100000, down_payment=200000)
    with pytest.raises(ValidationError):
        DSCRInputs(property_price=100000, down_payment=150000, monthly_rent=1000)


def test_bounds_enforced():
    with pytest.raises(ValidationError):
        PurchaseInputs(home_price=350000, interest_rate=25)
    with pytest.raises(ValidationError):
        PurchaseInputs(home_price=350000, loan_term_years=0)


def test_discriminated_union_picks_model():
    adapter = TypeAdapter(ScenarioInputs)
    data = adapter.validate_python(
        {"kind": "dscr", "property_price": 400000, "down_payment": 100000, "monthly_rent": 3000}
    )
    assert isinstance(data, DSCRInputs)
    assert data.interest_rate == 7.5


def test_validate_inputs_success():
    outcome = validate_inputs("purchase", {"kind": "purchase", "home_price": 350000, "down_payment": 70000})
    assert outcome.success
    assert outcome.errors == {}
    assert isinstance(outcome.data, PurchaseInputs)


def test_validate_inputs_collects_field_errors():
    outcome = validate_inputs("purchase", {"home_price": 500, "interest_rate": 50})
    assert not outcome.success
    assert outcome.data is None
    assert set(outcome.errors) == {"home_price", "interest_rate"}


def test_validate_inputs_rejects_unknown_enum():
    outcome = validate_inputs(
        "va_refinance",
        {"current_balance": 200000, "current_rate": 6, "new_rate": 5, "fee_type": "sometimes"},
    )
    assert "fee_type" in outcome.errors


def test_validate_inputs_unknown_kind():
    with pytest.raises(KeyError):
        validate_inputs("reverse_mortgage", {})


def test_validate_inputs_tags_payload_with_kind():
    outcome = validate_inputs(
        "dscr", {"kind": "purchase", "property_price": 400000, "down_payment": 100000, "monthly_rent": 3000}
    )
    assert outcome.success
    assert isinstance(outcome.data, DSCRInputs)
    assert outcome.data.kind == "dscr"


def test_validate_inputs_reports_validator_errors_by_field():
    outcome = validate_inputs("purchase", {"home_price": 100000, "down_payment": 200000})
    assert list(outcome.errors) == ["down_payment"]
