"""Scenario calculators.

Each calculator takes its typed input model and returns an ordered list of
:class:`~mortgage_calc.models.CalculatorResult` with exactly one highlighted
headline. Numeric edge cases (zero price, zero rate, no savings) degrade to
``0`` or a descriptive result instead of raising.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from mortgage_calc.amortization import (
    calculate_amortization,
    monthly_payment,
    principal_from_payment,
    remaining_balance,
)
from mortgage_calc.insurance import resolve_annual_insurance
from mortgage_calc.loan_programs import monthly_mortgage_insurance, mortgage_insurance_label
from mortgage_calc.models import (
    AffordabilityInputs,
    CalculatorResult,
    DSCRInputs,
    FixFlipInputs,
    InsuranceMode,
    PaymentFrequency,
    PurchaseInputs,
    RefinanceInputs,
    RentVsBuyInputs,
    ResultFormat,
    VAPurchaseInputs,
    VARefinanceInputs,
    validate_inputs,
)
from mortgage_calc.payoff import calculate_early_payoff
from mortgage_calc.presets import (
    AFFORDABILITY_TERM_MONTHS,
    DSCR_CASH_PURCHASE,
    DSCR_CLOSING_COST_RATE,
    DSCR_MINIMUM,
    DSCR_POOR,
    DSCR_TIERS,
    DSCR_TERM_YEARS,
    DTI_RATIO,
    RENT_VS_BUY_ASSUMPTIONS,
    VA_REFINANCE_TERM_YEARS,
)
from mortgage_calc.va import (
    adjust_payment_for_frequency,
    calculate_final_mortgage_amount,
    calculate_va_funding_fee,
)

logger = logging.getLogger(__name__)

CURRENCY = ResultFormat.CURRENCY
PERCENTAGE = ResultFormat.PERCENTAGE
NUMBER = ResultFormat.NUMBER

NEVER_BREAKS_EVEN = "Never breaks even with current parameters"


class CalculatorInputError(ValueError):
    """Raised by :func:`run_calculator` when raw inputs fail validation."""

    def __init__(self, kind: str, errors: Dict[str, str]):
        self.kind = kind
        self.errors = errors
        detail = "; ".join(f"{k}: {v}" for k, v in errors.items())
        super().__init__(f"Invalid {kind} inputs: {detail}")


def _result(label, value, fmt=CURRENCY, description=None, highlight=False) -> CalculatorResult:
    return CalculatorResult(
        label=label, value=value, format=fmt, highlight=highlight, description=description
    )


def _annual_insurance(inputs) -> float:
    if inputs.insurance_mode == InsuranceMode.PERCENT:
        return resolve_annual_insurance(inputs.insurance_mode, inputs.insurance_percent, inputs.home_price)
    return inputs.annual_insurance


def _ratio(part: float, whole: float) -> float:
    return part / whole if whole > 0 else 0.0


def break_even_months(closing_costs: float, monthly_savings: float) -> Optional[float]:
    """Months of savings needed to recover ``closing_costs``.

    ``None`` means the refinance never breaks even (no positive savings).
    """

    if monthly_savings <= 0:
        return None
    return closing_costs / monthly_savings


def total_refinance_savings(monthly_savings: float, term_in_months: int, closing_costs: float) -> float:
    """Savings over the new loan's full term net of the upfront closing costs."""

    return monthly_savings * term_in_months - closing_costs


def dscr_qualification(ratio: float, financed: bool = True) -> Tuple[str, str]:
    """Qualification tier ``(status, description)`` for a DSCR ratio."""

    if not financed:
        return "Cash Purchase", "No loan required - purchasing with cash"
    for threshold, status, description in DSCR_TIERS:
        if ratio >= threshold:
            return status, description
    return DSCR_POOR


# ---------------------------------------------------------------------------
# Purchase
# ---------------------------------------------------------------------------


def calculate_purchase(inputs: PurchaseInputs) -> List[CalculatorResult]:
    """Monthly PITI plus HOA and optional program MI for a home purchase.

    An extra monthly payment adds the interest it saves and the shortened
    payoff time.
    """

    price = inputs.home_price
    down = inputs.down_payment
    loan_amount = max(0.0, price - down)
    months = inputs.loan_term_years * 12

    amort = calculate_amortization(
        loan_amount, inputs.interest_rate, months, inputs.extra_monthly_payment
    )
    pi = amort.monthly_principal_and_interest
    tax = price * inputs.property_tax_rate / 100 / 12
    ins = _annual_insurance(inputs) / 12
    hoa = inputs.monthly_hoa
    mi = 0.0
    if inputs.loan_program is not None:
        mi = monthly_mortgage_insurance(inputs.loan_program, loan_amount, inputs.manual_monthly_mi)
    total = pi + tax + ins + hoa + mi
    logger.debug("Purchase total monthly payment %.2f on loan %.2f", total, loan_amount)

    term_label = f"{inputs.loan_term_years} years"
    results = [
        _result(
            "Total Monthly Payment",
            total,
            description="Your total monthly payment including P&I, taxes, insurance, and HOA",
            highlight=True,
        ),
        _result("Principal & Interest", pi, description="Monthly principal and interest payment on the loan"),
        _result("Property Taxes", tax, description="Estimated monthly property tax payment"),
        _result("Homeowners Insurance", ins, description="Monthly homeowners insurance payment"),
        _result("HOA Fees", hoa, description="Monthly homeowners association fees"),
    ]
    if inputs.loan_program is not None:
        label = mortgage_insurance_label(inputs.loan_program)
        results.append(
            _result(label, mi, description=f"Monthly {label} for a {inputs.loan_program.value} loan")
        )
    results += [
        _result("Loan Amount", loan_amount, description="The mortgage loan amount (home price minus down payment)"),
        _result(
            "Down Payment",
            down,
            description=f"Your down payment ({_ratio(down, price) * 100:.1f}% of home price)",
        ),
        _result("Total Interest Paid", amort.total_interest, description=f"Total interest paid over {term_label}"),
    ]
    if inputs.extra_monthly_payment > 0:
        baseline = calculate_amortization(loan_amount, inputs.interest_rate, months)
        saved = baseline.actual_term_in_months - amort.actual_term_in_months
        results += [
            _result(
                "Interest Saved",
                baseline.total_interest - amort.total_interest,
                description="Interest avoided by the extra monthly payment",
            ),
            _result(
                "Payoff Time",
                amort.actual_term_in_months,
                NUMBER,
                description=f"Months to pay off the loan ({saved} months sooner)",
            ),
        ]
    total_cost = down + amort.total_interest + loan_amount + (tax + ins + hoa + mi) * months
    results += [
        _result(
            "Total Cost",
            total_cost,
            description=(
                "Total cost including down payment, all payments, taxes, insurance, "
                f"and HOA over {term_label}"
            ),
        ),
        _result(
            "Loan-to-Value Ratio",
            _ratio(loan_amount, price),
            PERCENTAGE,
            description="The ratio of your loan amount to the home price",
        ),
    ]
    return results


# ---------------------------------------------------------------------------
# Refinance
# ---------------------------------------------------------------------------


def calculate_refinance(inputs: RefinanceInputs) -> List[CalculatorResult]:
    """Compare the current loan with a new one and report the break-even month."""

    balance = inputs.current_balance
    current_months = inputs.remaining_term_years * 12
    new_months = inputs.new_term_years * 12

    current_pi = monthly_payment(balance, inputs.current_rate, current_months)
    new_pi = monthly_payment(balance, inputs.new_rate, new_months)
    new_mi = 0.0
    if inputs.loan_program is not None:
        new_mi = monthly_mortgage_insurance(inputs.loan_program, balance, inputs.manual_monthly_mi)
    current_payment = current_pi + inputs.current_monthly_mi
    new_payment = new_pi + new_mi
    savings = current_payment - new_payment

    closing = inputs.closing_costs
    months_to_recover = break_even_months(closing, savings)
    total_savings = total_refinance_savings(savings, new_months, closing)
    current_interest = current_pi * current_months - balance
    new_interest = new_pi * new_months - balance
    rate_change = inputs.current_rate - inputs.new_rate
    logger.debug("Refinance savings %.2f/month, break-even %s", savings, months_to_recover)

    return [
        _result(
            "Monthly Savings",
            savings,
            description="Amount you save each month" if savings >= 0 else "Additional monthly cost (negative savings)",
            highlight=True,
        ),
        _result("New Monthly Payment", new_payment, description="Your new monthly payment"),
        _result("Current Monthly Payment", current_payment, description="Your current monthly payment"),
        _result(
            "Break-Even Point",
            months_to_recover if months_to_recover is not None else 0.0,
            NUMBER,
            description=(
                "Months to recover closing costs through savings"
                if months_to_recover is not None
                else NEVER_BREAKS_EVEN
            ),
        ),
        _result(
            "Total Savings",
            total_savings,
            description=(
                f"Total savings over {inputs.new_term_years} years after closing costs"
                if total_savings >= 0
                else f"Additional cost over {inputs.new_term_years} years after closing costs"
            ),
        ),
        _result("Closing Costs", closing, description="Upfront costs to refinance"),
        _result(
            "Interest Rate Reduction",
            rate_change / 100,
            PERCENTAGE,
            description="Reduction in interest rate" if rate_change >= 0 else "Increase in interest rate",
        ),
        _result(
            "Total Interest (Current Loan)",
            current_interest,
            description=f"Total interest over remaining {inputs.remaining_term_years} years",
        ),
        _result(
            "Total Interest (New Loan)",
            new_interest,
            description=f"Total interest over {inputs.new_term_years} years",
        ),
    ]


# ---------------------------------------------------------------------------
# Affordability
# ---------------------------------------------------------------------------


def calculate_affordability(inputs: AffordabilityInputs, dti_ratio: float = DTI_RATIO) -> List[CalculatorResult]:
    """Largest home price whose payment fits under ``dti_ratio`` of gross income."""

    monthly_income = inputs.annual_income / 12
    max_payment = max(0.0, monthly_income * dti_ratio - inputs.monthly_debts)
    max_loan = principal_from_payment(max_payment, inputs.interest_rate, AFFORDABILITY_TERM_MONTHS)
    max_price = max_loan + inputs.down_payment
    est_payment = monthly_payment(max_loan, inputs.interest_rate, AFFORDABILITY_TERM_MONTHS)
    dti = _ratio(est_payment + inputs.monthly_debts, monthly_income)
    logger.debug("Affordability max price %.2f at payment %.2f", max_price, max_payment)

    return [
        _result(
            "Maximum Home Price",
            max_price,
            description="The maximum home price you can afford based on your income and debts",
            highlight=True,
        ),
        _result("Maximum Loan Amount", max_loan, description="The maximum mortgage loan amount you qualify for"),
        _result("Down Payment", inputs.down_payment, description="Your planned down payment amount"),
        _result(
            "Estimated Monthly Payment",
            est_payment,
            description="Estimated principal and interest payment (excludes taxes and insurance)",
        ),
        _result(
            "Loan-to-Value Ratio",
            _ratio(max_loan, max_price),
            PERCENTAGE,
            description="The ratio of your loan amount to the home price",
        ),
        _result(
            "Debt-to-Income Ratio",
            dti,
            PERCENTAGE,
            description="Your total monthly debt payments as a percentage of gross income",
        ),
    ]


# ---------------------------------------------------------------------------
# Rent vs buy
# ---------------------------------------------------------------------------


def _net_buying_cost(inputs: RentVsBuyInputs, years: int, monthly_owning: float, a: dict) -> Tuple[float, float, float]:
    """Net buying cost, equity and appreciation after ``years`` of ownership."""

    price = inputs.home_price
    loan_amount = max(0.0, price - inputs.down_payment)
    months = years * 12
    closing = price * a["closing_cost_rate"]
    outlay = inputs.down_payment + closing + monthly_owning * months
    appreciation = price * (1 + inputs.appreciation_rate / 100) ** years - price
    balance = remaining_balance(loan_amount, inputs.interest_rate, a["term_months"], months)
    equity = inputs.down_payment + (loan_amount - balance) + appreciation
    return outlay - equity, equity, appreciation


def _renting_cost(rent: float, years: int, inflation: float) -> float:
    return sum(rent * 12 * (1 + inflation) ** y for y in range(years))


def calculate_rent_vs_buy(inputs: RentVsBuyInputs, assumptions: Optional[dict] = None) -> List[CalculatorResult]:
    """Total cost of renting against net cost of buying over the holding period.

    ``assumptions`` overrides the default rent growth, maintenance and selling
    cost rates.
    """

    a = RENT_VS_BUY_ASSUMPTIONS if assumptions is None else assumptions
    price = inputs.home_price
    years = inputs.years_to_stay
    loan_amount = max(0.0, price - inputs.down_payment)

    pi = monthly_payment(loan_amount, inputs.interest_rate, a["term_months"])
    owning = pi + price * (a["property_tax_rate"] + a["insurance_rate"] + a["maintenance_rate"]) / 12
    net_buying, equity, appreciation = _net_buying_cost(inputs, years, owning, a)
    renting = _renting_cost(inputs.rent_amount, years, a["rent_inflation_rate"])
    difference = renting - net_buying

    if difference > 0:
        recommendation = "Buying is more cost-effective"
    elif difference < 0:
        recommendation = "Renting is more cost-effective"
    else:
        recommendation = "Costs are equal"

    break_even_years = 0
    if difference < 0:
        for y in range(years + 1, a["max_break_even_years"] + 1):
            cost, _, _ = _net_buying_cost(inputs, y, owning, a)
            if _renting_cost(inputs.rent_amount, y, a["rent_inflation_rate"]) >= cost:
                break_even_years = y
                break
    logger.debug("Rent vs buy difference %.2f over %d years", difference, years)

    if break_even_years:
        break_even_text = "Years until buying becomes more cost-effective"
    elif difference < 0:
        break_even_text = f"Buying does not break even within {a['max_break_even_years']} years"
    else:
        break_even_text = "Buying is already more cost-effective"

    return [
        _result(
            "Net Difference",
            abs(difference),
            description="Buying saves you this amount" if difference > 0 else "Renting saves you this amount",
            highlight=True,
        ),
        _result(
            "Total Cost of Buying",
            net_buying,
            description=f"Net cost of buying over {years} years (after equity and appreciation)",
        ),
        _result(
            "Total Cost of Renting",
            renting,
            description=(
                f"Total rent paid over {years} years "
                f"(with {a['rent_inflation_rate'] * 100:g}% annual inflation)"
            ),
        ),
        _result("Recommendation", 0.0, NUMBER, description=recommendation),
        _result("Monthly Mortgage Payment", pi, description="Principal and interest payment"),
        _result(
            "Total Monthly Homeownership Cost",
            owning,
            description="Includes P&I, taxes, insurance, and maintenance",
        ),
        _result("Current Monthly Rent", inputs.rent_amount, description="Your current monthly rent payment"),
        _result("Equity Built", equity, description="Down payment + principal paid + home appreciation"),
        _result(
            "Home Value After Period",
            price + appreciation,
            description=f"Estimated home value after {years} years",
        ),
        _result("Total Appreciation", appreciation, description=f"Home value increase over {years} years"),
        _result(
            "Closing Costs",
            price * a["closing_cost_rate"],
            description=f"Estimated closing costs ({a['closing_cost_rate'] * 100:g}% of home price)",
        ),
        _result("Break-Even Point", break_even_years, NUMBER, description=break_even_text),
    ]


# ---------------------------------------------------------------------------
# DSCR
# ---------------------------------------------------------------------------


def calculate_dscr(inputs: DSCRInputs) -> List[CalculatorResult]:
    """Debt service coverage of a rental: net operating income over debt service."""

    price = inputs.property_price
    down = inputs.down_payment
    loan_amount = max(0.0, price - down)
    months = DSCR_TERM_YEARS * 12

    pi = monthly_payment(loan_amount, inputs.interest_rate, months)
    noi = inputs.monthly_rent - inputs.monthly_expenses
    if pi == 0:
        ratio = DSCR_CASH_PURCHASE if noi > 0 else 0.0
    else:
        ratio = min(noi / pi, DSCR_CASH_PURCHASE)
    status, status_text = dscr_qualification(ratio, financed=loan_amount > 0)
    cash_flow = noi - pi
    invested = down + price * DSCR_CLOSING_COST_RATE
    roi = _ratio(cash_flow * 12, invested)
    logger.debug("DSCR %.3f (%s)", ratio, status)

    qualifies = loan_amount == 0 or ratio >= DSCR_MINIMUM
    return [
        _result(
            "DSCR Ratio",
            ratio,
            NUMBER,
            description=(
                "No debt service (cash purchase)"
                if ratio >= DSCR_CASH_PURCHASE
                else f"Debt Service Coverage Ratio ({ratio:.2f})"
            ),
            highlight=True,
        ),
        _result(
            "Qualification Status",
            1.0 if qualifies else 0.0,
            NUMBER,
            description=f"{status}: {status_text}",
        ),
        _result(
            "Monthly Cash Flow",
            cash_flow,
            description="Positive monthly cash flow" if cash_flow >= 0 else "Negative monthly cash flow (cash drain)",
        ),
        _result("Annual Cash Flow", cash_flow * 12, description="Total cash flow over 12 months"),
        _result(
            "Annual ROI (Cash-on-Cash)",
            roi,
            PERCENTAGE,
            description="Return on investment based on cash invested",
        ),
        _result("Monthly Rent Income", inputs.monthly_rent, description="Gross monthly rental income"),
        _result(
            "Monthly Expenses",
            inputs.monthly_expenses,
            description="Operating expenses (taxes, insurance, maintenance, etc.)",
        ),
        _result("Net Operating Income", noi, description="Monthly rent minus monthly expenses"),
        _result("Monthly Debt Service (P&I)", pi, description="Monthly principal and interest payment"),
        _result(
            "Loan Amount",
            loan_amount,
            description=f"Mortgage loan amount ({_ratio(loan_amount, price) * 100:.1f}% LTV)",
        ),
        _result(
            "Down Payment",
            down,
            description=f"Your down payment ({_ratio(down, price) * 100:.1f}% of property price)",
        ),
        _result(
            "Total Cash Invested",
            invested,
            description=f"Down payment plus estimated closing costs ({DSCR_CLOSING_COST_RATE * 100:g}%)",
        ),
        _result(
            "Cap Rate",
            _ratio(noi * 12, price),
            PERCENTAGE,
            description="Capitalization rate (annual NOI / property price)",
        ),
        _result(
            "Total Interest Paid",
            pi * months - loan_amount,
            description=f"Total interest paid over {DSCR_TERM_YEARS} years",
        ),
    ]


# ---------------------------------------------------------------------------
# VA purchase
# ---------------------------------------------------------------------------


def calculate_va_purchase(inputs: VAPurchaseInputs) -> List[CalculatorResult]:
    """VA purchase with the funding fee financed into the loan.

    Extra payments per period and lump sums shorten the payoff; non-monthly
    frequencies also report the payment per period.
    """

    price = inputs.home_price
    down = inputs.down_payment
    base = max(0.0, price - down)
    fee = calculate_va_funding_fee(base, inputs.fee_type)
    loan_amount = calculate_final_mortgage_amount(base, fee)
    months = inputs.loan_term_years * 12

    payoff = calculate_early_payoff(
        loan_amount,
        inputs.interest_rate,
        months,
        inputs.extra_payment_per_period,
        inputs.payment_frequency,
        inputs.lump_sum_amount,
        inputs.lump_sum_frequency,
    )
    pi = payoff.baseline.monthly_principal_and_interest
    tax = price * inputs.property_tax_rate / 100 / 12
    ins = _annual_insurance(inputs) / 12
    hoa = inputs.monthly_hoa
    total = pi + tax + ins + hoa
    frequency = PaymentFrequency(inputs.payment_frequency)
    per_period = adjust_payment_for_frequency(total, frequency)
    logger.debug("VA purchase total %.2f/month, %.2f per %s period", total, per_period, frequency.value)

    results = [
        _result(
            "Total Monthly Payment",
            total,
            description="Your total monthly payment including P&I, taxes, insurance, and HOA (no PMI required)",
            highlight=True,
        ),
    ]
    if frequency != PaymentFrequency.MONTHLY:
        results.append(
            _result(
                "Payment per Period",
                per_period,
                description=f"Total payment made {frequency.value}",
            )
        )
    results += [
        _result("Principal & Interest", pi, description="Monthly principal and interest payment on the loan"),
        _result("Property Taxes", tax, description="Estimated monthly property tax payment"),
        _result("Homeowners Insurance", ins, description="Monthly homeowners insurance payment"),
        _result("HOA Fees", hoa, description="Monthly homeowners association fees"),
        _result(
            "Base Loan Amount",
            base,
            description="The mortgage loan amount before funding fee (home price minus down payment)",
        ),
        _result(
            "VA Funding Fee",
            fee,
            description=f"VA funding fee ({_ratio(fee, base) * 100:.2f}% of loan amount, financed into loan)",
        ),
        _result("Total Loan Amount", loan_amount, description="Total loan amount including VA funding fee"),
        _result(
            "Down Payment",
            down,
            description=f"Your down payment ({_ratio(down, price) * 100:.1f}% of home price)",
        ),
        _result(
            "Total Interest Paid",
            payoff.accelerated.total_interest,
            description=f"Total interest paid over {inputs.loan_term_years} years",
        ),
    ]
    if payoff.extra_monthly > 0:
        results += [
            _result(
                "Interest Saved",
                payoff.interest_savings,
                description="Interest avoided by extra payments and lump sums",
            ),
            _result(
                "Payoff Time",
                payoff.accelerated.actual_term_in_months,
                NUMBER,
                description=f"Months to pay off the loan ({payoff.term_reduction_months} months sooner)",
            ),
            _result(
                "New Monthly Outlay",
                payoff.new_monthly_outlay,
                description="Principal and interest plus the monthly equivalent of extra payments",
            ),
        ]
    total_cost = down + loan_amount + payoff.accelerated.total_interest + (tax + ins + hoa) * months
    results += [
        _result(
            "Total Cost",
            total_cost,
            description=(
                "Total cost including down payment, all payments, taxes, insurance, "
                f"and HOA over {inputs.loan_term_years} years"
            ),
        ),
        _result(
            "Loan-to-Value Ratio",
            _ratio(base, price),
            PERCENTAGE,
            description="The ratio of your base loan amount to the home price",
        ),
    ]
    return results


# ---------------------------------------------------------------------------
# VA refinance
# ---------------------------------------------------------------------------


def calculate_va_refinance(inputs: VARefinanceInputs) -> List[CalculatorResult]:
    """VA streamline or cash-out refinance over a fixed 30 year term."""

    balance = inputs.current_balance
    months = VA_REFINANCE_TERM_YEARS * 12

    current_pi = monthly_payment(balance, inputs.current_rate, months)
    base = balance + inputs.cash_out_amount
    fee = calculate_va_funding_fee(base, inputs.fee_type)
    new_loan = calculate_final_mortgage_amount(base, fee)
    new_pi = monthly_payment(new_loan, inputs.new_rate, months)
    savings = current_pi - new_pi
    lifetime = (current_pi - new_pi) * months
    rate_change = inputs.current_rate - inputs.new_rate
    logger.debug("VA refinance savings %.2f/month on new loan %.2f", savings, new_loan)

    return [
        _result(
            "Monthly Savings",
            savings,
            description="Amount you save each month" if savings >= 0 else "Additional monthly cost (negative savings)",
            highlight=True,
        ),
        _result("New Monthly Payment", new_pi, description="Your new monthly principal and interest payment"),
        _result(
            "Current Monthly Payment",
            current_pi,
            description="Your current monthly principal and interest payment",
        ),
        _result("Cash Out Amount", inputs.cash_out_amount, description="Cash you receive from the refinance"),
        _result(
            "VA Funding Fee",
            fee,
            description=f"VA funding fee ({_ratio(fee, base) * 100:.2f}% of loan amount, financed into loan)",
        ),
        _result(
            "New Loan Amount",
            new_loan,
            description="Total new loan amount including cash out and funding fee",
        ),
        _result("Current Loan Balance", balance, description="Your current mortgage balance"),
        _result(
            "Loan Increase",
            new_loan - balance,
            description="Amount your loan balance will increase (cash out + funding fee)",
        ),
        _result(
            "Interest Rate Reduction",
            rate_change / 100,
            PERCENTAGE,
            description="Reduction in interest rate" if rate_change >= 0 else "Increase in interest rate",
        ),
        _result(
            "Lifetime Savings",
            lifetime,
            description=(
                f"Total savings over {VA_REFINANCE_TERM_YEARS} years"
                if lifetime >= 0
                else f"Additional cost over {VA_REFINANCE_TERM_YEARS} years"
            ),
        ),
        _result(
            "Total Interest (Current Loan)",
            current_pi * months - balance,
            description=f"Total interest over {VA_REFINANCE_TERM_YEARS} years at current rate",
        ),
        _result(
            "Total Interest (New Loan)",
            new_pi * months - new_loan,
            description=f"Total interest over {VA_REFINANCE_TERM_YEARS} years at new rate",
        ),
    ]


# ---------------------------------------------------------------------------
# Fix & flip
# ---------------------------------------------------------------------------


def calculate_fix_flip(inputs: FixFlipInputs) -> List[CalculatorResult]:
    """Interest-only hard-money loan on the purchase, held for the loan term."""

    price = inputs.purchase_price
    arv = inputs.after_repair_value
    months = inputs.loan_length_months
    loan_amount = price * inputs.purchase_price_ltv / 100
    down = price - loan_amount

    monthly_interest = loan_amount * inputs.interest_rate / 100 / 12
    total_interest = monthly_interest * months
    origination = loan_amount * inputs.origination_fee / 100
    other_closing = price * inputs.other_closing_costs / 100
    closing = origination + other_closing
    selling = arv * inputs.cost_to_sell / 100
    carrying = (inputs.annual_property_taxes + inputs.annual_insurance) / 12 * months
    total_costs = price + inputs.renovation_cost + total_interest + closing + carrying + selling
    profit = arv - total_costs
    cash_needed = down + inputs.renovation_cost + closing
    logger.debug("Fix & flip net profit %.2f on cash %.2f", profit, cash_needed)

    return [
        _result(
            "Net Profit",
            profit,
            description="After repair value minus all purchase, holding and selling costs",
            highlight=True,
        ),
        _result(
            "Return on Investment",
            _ratio(profit, cash_needed),
            PERCENTAGE,
            description="Net profit as a share of cash needed",
        ),
        _result(
            "Cash Needed",
            cash_needed,
            description="Down payment, renovation and closing costs paid out of pocket",
        ),
        _result("Loan Amount", loan_amount, description=f"{inputs.purchase_price_ltv:g}% of purchase price"),
        _result("Down Payment", down, description="Purchase price not covered by the loan"),
        _result("Monthly Interest Payment", monthly_interest, description="Interest-only payment on the loan"),
        _result("Total Interest", total_interest, description=f"Interest over {months} months"),
        _result("Origination Fee", origination, description=f"{inputs.origination_fee:g}% of loan amount"),
        _result(
            "Other Closing Costs",
            other_closing,
            description=f"{inputs.other_closing_costs:g}% of purchase price",
        ),
        _result(
            "Carrying Costs",
            carrying,
            description=f"Property taxes and insurance over {months} months",
        ),
        _result("Cost to Sell", selling, description=f"{inputs.cost_to_sell:g}% of after repair value"),
        _result("Total Costs", total_costs, description="Everything spent from purchase to sale"),
        _result(
            "Loan to After Repair Value",
            _ratio(loan_amount, arv),
            PERCENTAGE,
            description="Loan amount relative to the after repair value",
        ),
    ]


CALCULATORS = {
    "purchase": calculate_purchase,
    "refinance": calculate_refinance,
    "affordability": calculate_affordability,
    "rent_vs_buy": calculate_rent_vs_buy,
    "dscr": calculate_dscr,
    "va_purchase": calculate_va_purchase,
    "va_refinance": calculate_va_refinance,
    "fix_flip": calculate_fix_flip,
}


def calculate(inputs) -> List[CalculatorResult]:
    """Run the calculator matching ``inputs.kind``."""

    return CALCULATORS[inputs.kind](inputs)


def run_calculator(kind: str, raw: Mapping[str, Any]) -> List[CalculatorResult]:
    """Validate ``raw`` for ``kind`` and run the calculator.

    Raises :class:`CalculatorInputError` with a per-field error map when the
    inputs are invalid and ``KeyError`` for an unknown ``kind``.
    """

    if kind not in CALCULATORS:
        raise KeyError(kind)
    outcome = validate_inputs(kind, raw)
    if not outcome.success:
        logger.info("Rejected %s inputs: %s", kind, outcome.errors)
        raise CalculatorInputError(kind, outcome.errors)
    return calculate(outcome.data)
