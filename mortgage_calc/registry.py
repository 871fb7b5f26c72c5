"""Calculator metadata and input field definitions used by the page.

The engine never reads these; they describe how the UI should render each
input (label, bounds, step) and which model/function back a calculator.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Literal, Optional, Type

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic_core import PydanticUndefined

from mortgage_calc import calculators
from mortgage_calc.models import (
    INPUT_MODELS,
    FeeType,
    InsuranceMode,
    LoanProgram,
    LumpSumFrequency,
    PaymentFrequency,
)

FieldType = Literal["currency", "percentage", "number", "select"]


class CalculatorInput(BaseModel):
    label: str
    name: str
    type: FieldType
    placeholder: str = ""
    default: Any = None
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    required: bool = True
    help_text: str = ""
    options: List[str] = []


class CalculatorConfig(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str
    title: str
    description: str
    icon: str = ""
    inputs: List[CalculatorInput]
    model: Type[BaseModel]
    calculate: Callable

    @model_validator(mode="after")
    def _fields_exist(self):
        known = set(self.model.model_fields)
        missing = [i.name for i in self.inputs if i.name not in known]
        if missing:
            raise ValueError(f"{self.id}: unknown input fields {missing}")
        return self

    def field(self, name: str) -> CalculatorInput:
        for item in self.inputs:
            if item.name == name:
                return item
        raise KeyError(name)


def _default(kind: str, name: str):
    value = INPUT_MODELS[kind].model_fields[name].default
    if value is PydanticUndefined:
        return None
    return getattr(value, "value", value)


def _field(kind, name, label, type_, help_text, placeholder="", min=0, max=None, step=None, required=True):
    return CalculatorInput(
        label=label,
        name=name,
        type=type_,
        placeholder=placeholder,
        default=_default(kind, name),
        min=min,
        max=max,
        step=step,
        required=required,
        help_text=help_text,
    )


def _select(kind, name, label, enum_cls, help_text, required=True):
    return CalculatorInput(
        label=label,
        name=name,
        type="select",
        default=_default(kind, name),
        required=required,
        help_text=help_text,
        options=[e.value for e in enum_cls],
    )


def _insurance_fields(kind):
    return [
        _field(kind, "annual_insurance", "Annual Insurance", "currency",
               "Annual homeowners insurance premium", "1200", max=100_000, step=100),
        _select(kind, "insurance_mode", "Insurance Entered As", InsuranceMode,
                "Enter insurance as a dollar amount or a percent of home price"),
        _field(kind, "insurance_percent", "Insurance Rate (%)", "percentage",
               "Annual insurance as percentage of home price", "0.35", max=10, step=0.05, required=False),
    ]


PURCHASE = CalculatorConfig(
    id="purchase",
    title="Purchase Calculator",
    description=(
        "Estimate your monthly mortgage payment including principal, interest, "
        "taxes, insurance, and HOA fees."
    ),
    icon="🏠",
    inputs=[
        _field("purchase", "home_price", "Home Price", "currency",
               "The purchase price of the home", "350000", min=1000, max=100_000_000, step=1000),
        _field("purchase", "down_payment", "Down Payment", "currency",
               "Amount you plan to put down on the home", "70000", max=100_000_000, step=1000),
        _field("purchase", "interest_rate", "Interest Rate (%)", "percentage",
               "Current mortgage interest rate", "7.0", max=20, step=0.1),
        _field("purchase", "loan_term_years", "Loan Term (years)", "number",
               "Length of the mortgage in years", "30", min=1, max=40, step=1),
        _field("purchase", "property_tax_rate", "Property Tax Rate (%)", "percentage",
               "Annual property tax as percentage of home price", "1.2", max=10, step=0.1),
        *_insurance_fields("purchase"),
        _field("purchase", "monthly_hoa", "Monthly HOA Fees", "currency",
               "Monthly homeowners association fees", "0", max=10_000, step=25),
        _select("purchase", "loan_program", "Loan Program", LoanProgram,
                "Adds the program's monthly mortgage insurance", required=False),
        _field("purchase", "manual_monthly_mi", "Monthly Mortgage Insurance", "currency",
               "Overrides the estimated PMI / MIP / guarantee fee", step=10, required=False),
        _field("purchase", "extra_monthly_payment", "Extra Monthly Payment", "currency",
               "Additional principal paid each month", "0", step=50, required=False),
    ],
    model=INPUT_MODELS["purchase"],
    calculate=calculators.calculate_purchase,
)

REFINANCE = CalculatorConfig(
    id="refinance",
    title="Refinance Calculator",
    description=(
        "Calculate your potential savings from refinancing your mortgage. Compare "
        "your current loan to a new loan and see your break-even point."
    ),
    icon="🔄",
    inputs=[
        _field("refinance", "current_balance", "Current Loan Balance", "currency",
               "Your current outstanding mortgage balance", "250000", min=1000, max=100_000_000, step=1000),
        _field("refinance", "current_rate", "Current Interest Rate (%)", "percentage",
               "Your current mortgage interest rate", "7.5", max=20, step=0.1),
        _field("refinance", "new_rate", "New Interest Rate (%)", "percentage",
               "The new interest rate you qualify for", "6.5", max=20, step=0.1),
        _field("refinance", "remaining_term_years", "Remaining Term (years)", "number",
               "Years remaining on your current mortgage", "30", min=1, max=30, step=1),
        _field("refinance", "new_term_years", "New Loan Term (years)", "number",
               "Length of the new mortgage in years", "30", min=1, max=30, step=1),
        _field("refinance", "closing_costs", "Closing Costs", "currency",
               "Upfront costs to refinance", "5000", max=100_000, step=500),
        _field("refinance", "current_monthly_mi", "Current Monthly Mortgage Insurance", "currency",
               "Mortgage insurance on your current loan", "0", step=10, required=False),
        _select("refinance", "loan_program", "New Loan Program", LoanProgram,
                "Adds the program's monthly mortgage insurance to the new payment", required=False),
        _field("refinance", "manual_monthly_mi", "New Monthly Mortgage Insurance", "currency",
               "Overrides the estimated PMI / MIP / guarantee fee", step=10, required=False),
    ],
    model=INPUT_MODELS["refinance"],
    calculate=calculators.calculate_refinance,
)

AFFORDABILITY = CalculatorConfig(
    id="affordability",
    title="How Much Can I Afford?",
    description=(
        "Calculate your maximum home purchase price based on your income, debts, "
        "and down payment."
    ),
    icon="💵",
    inputs=[
        _field("affordability", "annual_income", "Annual Gross Income", "currency",
               "Your total annual income before taxes", "100000", max=10_000_000, step=1000),
        _field("affordability", "monthly_debts", "Monthly Debts", "currency",
               "Car payments, credit cards, student loans, etc.", "500", max=100_000, step=50),
        _field("affordability", "down_payment", "Down Payment", "currency",
               "Amount you plan to put down on the home", "50000", max=10_000_000, step=1000),
        _field("affordability", "interest_rate", "Interest Rate (%)", "percentage",
               "Current mortgage interest rate", "7.0", max=20, step=0.1),
    ],
    model=INPUT_MODELS["affordability"],
    calculate=calculators.calculate_affordability,
)

RENT_VS_BUY = CalculatorConfig(
    id="rent_vs_buy",
    title="Rent vs Buy Calculator",
    description=(
        "Compare the total costs of renting versus buying a home over time. See "
        "which option makes more financial sense for your situation."
    ),
    icon="🏘️",
    inputs=[
        _field("rent_vs_buy", "home_price", "Home Price", "currency",
               "The purchase price of the home", "350000", min=1000, max=100_000_000, step=1000),
        _field("rent_vs_buy", "down_payment", "Down Payment", "currency",
               "Amount you plan to put down on the home", "70000", max=100_000_000, step=1000),
        _field("rent_vs_buy", "interest_rate", "Interest Rate (%)", "percentage",
               "Mortgage interest rate", "7.0", max=20, step=0.1),
        _field("rent_vs_buy", "rent_amount", "Monthly Rent", "currency",
               "Your current monthly rent payment", "2000", max=50_000, step=50),
        _field("rent_vs_buy", "years_to_stay", "Years to Stay", "number",
               "How long you plan to stay in the home", "5", min=1, max=30, step=1),
        _field("rent_vs_buy", "appreciation_rate", "Home Appreciation Rate (%)", "percentage",
               "Expected annual home value appreciation", "3.0", min=-10, max=20, step=0.1),
    ],
    model=INPUT_MODELS["rent_vs_buy"],
    calculate=calculators.calculate_rent_vs_buy,
)

DSCR = CalculatorConfig(
    id="dscr",
    title="DSCR Investment Calculator",
    description=(
        "Calculate Debt Service Coverage Ratio (DSCR) for investment property "
        "loans and analyze cash flow and ROI."
    ),
    icon="🏢",
    inputs=[
        _field("dscr", "property_price", "Property Price", "currency",
               "The purchase price of the investment property", "400000", min=1000, max=100_000_000, step=1000),
        _field("dscr", "down_payment", "Down Payment", "currency",
               "Amount you plan to put down (typically 20-25% for investment properties)",
               "100000", max=100_000_000, step=1000),
        _field("dscr", "interest_rate", "Interest Rate (%)", "percentage",
               "Current interest rate for investment property loans", "7.5", max=20, step=0.1),
        _field("dscr", "monthly_rent", "Monthly Rent", "currency",
               "Expected monthly rental income from the property", "3000", max=100_000, step=50),
        _field("dscr", "monthly_expenses", "Monthly Expenses", "currency",
               "Property taxes, insurance, maintenance, HOA, property management, etc.",
               "800", max=100_000, step=50),
    ],
    model=INPUT_MODELS["dscr"],
    calculate=calculators.calculate_dscr,
)

VA_PURCHASE = CalculatorConfig(
    id="va_purchase",
    title="VA Purchase Calculator",
    description=(
        "Calculate your monthly VA loan payment with no PMI required. Includes "
        "VA funding fee, property taxes, and insurance."
    ),
    icon="🎖️",
    inputs=[
        _field("va_purchase", "home_price", "Home Price", "currency",
               "The purchase price of the home", "350000", min=1000, max=100_000_000, step=1000),
        _field("va_purchase", "down_payment", "Down Payment", "currency",
               "VA loans allow 0% down payment (optional down payment reduces loan amount)",
               "0", max=100_000_000, step=1000),
        _field("va_purchase", "interest_rate", "Interest Rate (%)", "percentage",
               "Current VA loan interest rate", "6.5", max=20, step=0.1),
        _field("va_purchase", "loan_term_years", "Loan Term (years)", "number",
               "Length of the mortgage in years", "30", min=1, max=40, step=1),
        _select("va_purchase", "fee_type", "VA Loan Usage", FeeType,
                "First-time use, subsequent use or funding fee exempt"),
        _field("va_purchase", "property_tax_rate", "Property Tax Rate (%)", "percentage",
               "Annual property tax as percentage of home price", "1.2", max=10, step=0.1),
        *_insurance_fields("va_purchase"),
        _field("va_purchase", "monthly_hoa", "Monthly HOA Fees", "currency",
               "Monthly homeowners association fees", "0", max=10_000, step=25),
        _select("va_purchase", "payment_frequency", "Payment Frequency", PaymentFrequency,
                "How often payments are made"),
        _field("va_purchase", "extra_payment_per_period", "Extra Payment per Period", "currency",
               "Additional principal paid with each payment", "0", step=25, required=False),
        _field("va_purchase", "lump_sum_amount", "Lump Sum Payment", "currency",
               "Additional principal paid as a lump sum", "0", step=500, required=False),
        _select("va_purchase", "lump_sum_frequency", "Lump Sum Frequency", LumpSumFrequency,
                "How often the lump sum is paid", required=False),
    ],
    model=INPUT_MODELS["va_purchase"],
    calculate=calculators.calculate_va_purchase,
)

VA_REFINANCE = CalculatorConfig(
    id="va_refinance",
    title="VA Refinance Calculator",
    description=(
        "Calculate your VA refinance savings with IRRRL or cash-out refinance "
        "options. Includes VA funding fee and cash-out analysis."
    ),
    icon="🏠",
    inputs=[
        _field("va_refinance", "current_balance", "Current Loan Balance", "currency",
               "Your current mortgage balance", "250000", min=1000, max=100_000_000, step=1000),
        _field("va_refinance", "current_rate", "Current Interest Rate (%)", "percentage",
               "Your current mortgage interest rate", "7.0", max=20, step=0.1),
        _field("va_refinance", "new_rate", "New Interest Rate (%)", "percentage",
               "The new VA loan interest rate", "6.0", max=20, step=0.1),
        _field("va_refinance", "cash_out_amount", "Cash Out Amount", "currency",
               "Amount of cash you want to take out (0 for rate-and-term refinance)",
               "0", max=10_000_000, step=1000),
        _select("va_refinance", "fee_type", "VA Loan Usage", FeeType,
                "First-time use, subsequent use or funding fee exempt"),
    ],
    model=INPUT_MODELS["va_refinance"],
    calculate=calculators.calculate_va_refinance,
)

FIX_FLIP = CalculatorConfig(
    id="fix_flip",
    title="Fix & Flip Calculator",
    description="Calculate potential returns on fix and flip investment properties",
    icon="🔨",
    inputs=[
        _field("fix_flip", "purchase_price", "Purchase Price", "currency",
               "Price paid for the property", "200000", max=100_000_000, step=1000),
        _field("fix_flip", "renovation_cost", "Renovation Cost", "currency",
               "Budget for repairs and improvements", "50000", max=100_000_000, step=1000),
        _field("fix_flip", "after_repair_value", "After Repaired Value", "currency",
               "Expected sale price once renovations are complete", "325000", max=100_000_000, step=1000),
        _field("fix_flip", "loan_length_months", "Length of Loan (months)", "number",
               "Months the loan is held before the sale", "6", min=1, max=36, step=1),
        _field("fix_flip", "annual_property_taxes", "Annual Property Taxes", "currency",
               "Property taxes for a full year", "3000", step=100),
        _field("fix_flip", "annual_insurance", "Annual Insurance", "currency",
               "Insurance premium for a full year", "1500", step=100),
        _field("fix_flip", "purchase_price_ltv", "Purchase Price LTV (%)", "percentage",
               "Share of the purchase price financed", "80", max=100, step=5),
        _field("fix_flip", "interest_rate", "Interest Rate (%)", "percentage",
               "Annual rate on the interest-only loan", "10", max=30, step=0.25),
        _field("fix_flip", "origination_fee", "Origination Fee (%)", "percentage",
               "Lender points on the loan amount", "2", max=10, step=0.25),
        _field("fix_flip", "other_closing_costs", "Other Closing Costs (%)", "percentage",
               "Title, escrow and other costs on the purchase price", "3", max=10, step=0.25),
        _field("fix_flip", "cost_to_sell", "Cost To Sell (%)", "percentage",
               "Commissions and closing costs on the sale", "5", max=15, step=0.25),
    ],
    model=INPUT_MODELS["fix_flip"],
    calculate=calculators.calculate_fix_flip,
)

REGISTRY: Dict[str, CalculatorConfig] = {
    c.id: c
    for c in (PURCHASE, REFINANCE, AFFORDABILITY, RENT_VS_BUY, DSCR, VA_PURCHASE, VA_REFINANCE, FIX_FLIP)
}


def get_calculator(calculator_id: str) -> CalculatorConfig:
    return REGISTRY[calculator_id]
