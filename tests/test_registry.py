import pytest
from pydantic import ValidationError

from mortgage_calc.calculators import CALCULATORS
from mortgage_calc.models import INPUT_MODELS, PurchaseInputs
from mortgage_calc.registry import REGISTRY, CalculatorConfig, CalculatorInput, get_calculator


def test_every_calculator_registered():
    assert set(REGISTRY) == set(INPUT_MODELS) == set(CALCULATORS)
    for calc_id, config in REGISTRY.items():
        assert config.id == calc_id
        assert config.model is INPUT_MODELS[calc_id]
        assert config.calculate is CALCULATORS[calc_id]
        assert config.title and config.description


def test_field_definitions_follow_models():
    purchase = get_calculator("purchase")
    rate = purchase.field("interest_rate")
    assert rate.type == "percentage"
    assert rate.default == 7.0
    assert (rate.min, rate.max, rate.step) == (0, 20, 0.1)
    assert purchase.field("home_price").default is None
    assert purchase.field("home_price").placeholder == "350000"


def test_enum_fields_list_options():
    va = get_calculator("va_purchase")
    fee = va.field("fee_type")
    assert fee.type == "select"
    assert fee.options == ["first-time", "subsequent", "exempt"]
    assert fee.default == "first-time"
    program = get_calculator("purchase").field("loan_program")
    assert not program.required
    assert program.default is None


def test_unknown_field_lookup():
    with pytest.raises(KeyError):
        get_calculator("dscr").field("home_price")


def test_config_rejects_fields_missing_from_model():
    with pytest.raises(ValidationError):
        CalculatorConfig(
            id="broken",
            title="Broken",
            description="",
            inputs=[CalculatorInput(label="Nope", name="nope", type="number")],
            model=PurchaseInputs,
            calculate=lambda inputs: [],
        )
