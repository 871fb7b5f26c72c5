"""Typed inputs and results for the calculators.

Every calculator takes one input model tagged by ``kind`` and returns a list
of :class:`CalculatorResult`. Interest rates, tax rates and fee rates on the
input models are percent-numbers (``7.0`` means 7%); percentage *results* are
fractions (``0.8`` means 80%) and are rendered by
:func:`mortgage_calc.formatters.format_percentage`.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Dict, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, ValidationInfo, field_validator

logger = logging.getLogger(__name__)


class FeeType(str, Enum):
    FIRST_TIME = "first-time"
    SUBSEQUENT = "subsequent"
    EXEMPT = "exempt"


class PaymentFrequency(str, Enum):
    MONTHLY = "monthly"
    BI_WEEKLY = "bi-weekly"
    WEEKLY = "weekly"


class LumpSumFrequency(str, Enum):
    ONE_TIME = "one-time"
    YEARLY = "yearly"
    QUARTERLY = "quarterly"


class LoanProgram(str, Enum):
    CONVENTIONAL = "Conventional"
    FHA = "FHA"
    VA = "VA"
    USDA = "USDA"
    JUMBO = "Jumbo"


class InsuranceMode(str, Enum):
    DOLLAR = "dollar"
    PERCENT = "percent"


class ResultFormat(str, Enum):
    CURRENCY = "currency"
    PERCENTAGE = "percentage"
    NUMBER = "number"


class CalculatorResult(BaseModel):
    label: str
    value: float
    format: ResultFormat = ResultFormat.CURRENCY
    highlight: bool = False
    description: Optional[str] = None

    @field_validator("value")
    @classmethod
    def _finite_value(cls, v: float) -> float:
        if not math.isfinite(v):
            logger.warning("Replacing non-finite result value %r with 0", v)
            return 0.0
        return v


@dataclass(frozen=True)
class AmortizationResult:
    monthly_principal_and_interest: float = 0.0
    total_interest: float = 0.0
    actual_term_in_months: int = 0


def _down_payment_within(price_field: str, v: float, info: ValidationInfo) -> float:
    price = info.data.get(price_field)
    if price is not None and v > price:
        raise ValueError(f"Down payment cannot exceed {price_field.replace('_', ' ')}")
    return v


class PurchaseInputs(BaseModel):
    kind: Literal["purchase"] = "purchase"
    home_price: float = Field(ge=1000, le=100_000_000)
    down_payment: float = Field(0.0, ge=0, le=100_000_000)
    interest_rate: float = Field(7.0, ge=0, le=20)
    loan_term_years: int = Field(30, ge=1, le=40)
    property_tax_rate: float = Field(1.2, ge=0, le=10)
    annual_insurance: float = Field(1200.0, ge=0, le=100_000)
    insurance_mode: InsuranceMode = InsuranceMode.DOLLAR
    insurance_percent: float = Field(0.0, ge=0, le=10)
    monthly_hoa: float = Field(0.0, ge=0, le=10_000)
    loan_program: Optional[LoanProgram] = None
    manual_monthly_mi: Optional[float] = Field(None, ge=0)
    extra_monthly_payment: float = Field(0.0, ge=0)

    @field_validator("down_payment")
    @classmethod
    def _down_payment(cls, v, info):
        return _down_payment_within("home_price", v, info)


class RefinanceInputs(BaseModel):
    kind: Literal["refinance"] = "refinance"
    current_balance: float = Field(ge=1000, le=100_000_000)
    current_rate: float = Field(ge=0, le=20)
    new_rate: float = Field(ge=0, le=20)
    remaining_term_years: int = Field(30, ge=1, le=30)
    new_term_years: int = Field(30, ge=1, le=30)
    closing_costs: float = Field(0.0, ge=0, le=100_000)
    current_monthly_mi: float = Field(0.0, ge=0)
    loan_program: Optional[LoanProgram] = None
    manual_monthly_mi: Optional[float] = Field(None, ge=0)


class AffordabilityInputs(BaseModel):
    kind: Literal["affordability"] = "affordability"
    annual_income: float = Field(ge=0, le=10_000_000)
    monthly_debts: float = Field(0.0, ge=0, le=100_000)
    down_payment: float = Field(0.0, ge=0, le=10_000_000)
    interest_rate: float = Field(7.0, ge=0, le=20)


class RentVsBuyInputs(BaseModel):
    kind: Literal["rent_vs_buy"] = "rent_vs_buy"
    home_price: float = Field(ge=1000, le=100_000_000)
    down_payment: float = Field(0.0, ge=0, le=100_000_000)
    interest_rate: float = Field(7.0, ge=0, le=20)
    rent_amount: float = Field(ge=0, le=50_000)
    years_to_stay: int = Field(5, ge=1, le=30)
    appreciation_rate: float = Field(3.0, ge=-10, le=20)

    @field_validator("down_payment")
    @classmethod
    def _down_payment(cls, v, info):
        return _down_payment_within("home_price", v, info)


class DSCRInputs(BaseModel):
    kind: Literal["dscr"] = "dscr"
    property_price: float = Field(ge=1000, le=100_000_000)
    down_payment: float = Field(0.0, ge=0, le=100_000_000)
    interest_rate: float = Field(7.5, ge=0, le=20)
    monthly_rent: float = Field(ge=0, le=100_000)
    monthly_expenses: float = Field(0.0, ge=0, le=100_000)

    @field_validator("down_payment")
    @classmethod
    def _down_payment(cls, v, info):
        return _down_payment_within("property_price", v, info)


class VAPurchaseInputs(BaseModel):
    kind: Literal["va_purchase"] = "va_purchase"
    home_price: float = Field(ge=1000, le=100_000_000)
    down_payment: float = Field(0.0, ge=0, le=100_000_000)
    interest_rate: float = Field(6.5, ge=0, le=20)
    loan_term_years: int = Field(30, ge=1, le=40)
    fee_type: FeeType = FeeType.FIRST_TIME
    property_tax_rate: float = Field(1.2, ge=0, le=10)
    annual_insurance: float = Field(1200.0, ge=0, le=100_000)
    insurance_mode: InsuranceMode = InsuranceMode.DOLLAR
    insurance_percent: float = Field(0.0, ge=0, le=10)
    monthly_hoa: float = Field(0.0, ge=0, le=10_000)
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    extra_payment_per_period: float = Field(0.0, ge=0)
    lump_sum_amount: float = Field(0.0, ge=0)
    lump_sum_frequency: LumpSumFrequency = LumpSumFrequency.ONE_TIME

    @field_validator("down_payment")
    @classmethod
    def _down_payment(cls, v, info):
        return _down_payment_within("home_price", v, info)


class VARefinanceInputs(BaseModel):
    kind: Literal["va_refinance"] = "va_refinance"
    current_balance: float = Field(ge=1000, le=100_000_000)
    current_rate: float = Field(ge=0, le=20)
    new_rate: float = Field(ge=0, le=20)
    cash_out_amount: float = Field(0.0, ge=0, le=10_000_000)
    fee_type: FeeType = FeeType.FIRST_TIME


class FixFlipInputs(BaseModel):
    kind: Literal["fix_flip"] = "fix_flip"
    purchase_price: float = Field(ge=0, le=100_000_000)
    renovation_cost: float = Field(0.0, ge=0, le=100_000_000)
    after_repair_value: float = Field(ge=0, le=100_000_000)
    loan_length_months: int = Field(6, ge=1, le=36)
    annual_property_taxes: float = Field(0.0, ge=0)
    annual_insurance: float = Field(0.0, ge=0)
    purchase_price_ltv: float = Field(80.0, ge=0, le=100)
    interest_rate: float = Field(10.0, ge=0, le=30)
    origination_fee: float = Field(2.0, ge=0, le=10)
    other_closing_costs: float = Field(3.0, ge=0, le=10)
    cost_to_sell: float = Field(5.0, ge=0, le=15)


ScenarioInputs = Annotated[
    Union[
        PurchaseInputs,
        RefinanceInputs,
        AffordabilityInputs,
        RentVsBuyInputs,
        DSCRInputs,
        VAPurchaseInputs,
        VARefinanceInputs,
        FixFlipInputs,
    ],
    Field(discriminator="kind"),
]

INPUT_MODELS = {
    "purchase": PurchaseInputs,
    "refinance": RefinanceInputs,
    "affordability": AffordabilityInputs,
    "rent_vs_buy": RentVsBuyInputs,
    "dscr": DSCRInputs,
    "va_purchase": VAPurchaseInputs,
    "va_refinance": VARefinanceInputs,
    "fix_flip": FixFlipInputs,
}

SCENARIO_ADAPTER = TypeAdapter(ScenarioInputs)


@dataclass
class ValidationOutcome:
    success: bool
    errors: Dict[str, str] = field(default_factory=dict)
    data: Optional[BaseModel] = None


def validate_inputs(kind: str, raw: Mapping[str, Any]) -> ValidationOutcome:
    """Validate a raw field mapping against the input model for ``kind``.

    The mapping is tagged with ``kind`` and parsed through the
    :data:`ScenarioInputs` union. Returns the first error message per field
    instead of raising, so a form can show messages next to its inputs.
    Unknown ``kind`` raises ``KeyError``.
    """

    if kind not in INPUT_MODELS:
        raise KeyError(kind)
    payload = {**raw, "kind": kind}
    try:
        data = SCENARIO_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        errors: Dict[str, str] = {}
        for err in exc.errors():
            # union errors are located under the tag first
            loc = err["loc"][1:] if err["loc"][:1] == (kind,) else err["loc"]
            name = str(loc[0]) if loc else "general"
            errors.setdefault(name, err["msg"])
        return ValidationOutcome(success=False, errors=errors)
    return ValidationOutcome(success=True, data=data)
