import logging

import pandas as pd
import streamlit as st

from mortgage_calc.amortization import amortization_schedule, yearly_summary
from mortgage_calc.formatters import (
    format_currency,
    format_result,
    parse_currency_input,
    parse_numeric_input,
    parse_percentage_input,
)
from mortgage_calc.insurance import convert_insurance
from mortgage_calc.models import InsuranceMode, PaymentFrequency, validate_inputs
from mortgage_calc.payoff import calculate_early_payoff, default_first_payment_date, payment_schedule
from mortgage_calc.pdf_export import build_results_pdf
from mortgage_calc.presets import DISCLAIMER
from mortgage_calc.registry import REGISTRY, CalculatorConfig, CalculatorInput
from mortgage_calc.va import calculate_final_mortgage_amount, calculate_va_funding_fee

logger = logging.getLogger(__name__)

INSURANCE_FIELDS = ("annual_insurance", "insurance_mode", "insurance_percent")


def _key(calc_id: str, name: str) -> str:
    return f"{calc_id}__{name}"


def _initial_text(item: CalculatorInput) -> str:
    value = item.default if item.default is not None else item.placeholder
    if value is None:
        return ""
    return str(value)


def _parse_text(item: CalculatorInput, text: str):
    """Raw text to a number, or ``None`` for an empty optional override."""

    if item.default is None and not item.required and not (text or "").strip():
        return None
    fallback = item.default if isinstance(item.default, (int, float)) else 0.0
    if item.type == "percentage":
        return parse_numeric_input(parse_percentage_input(text), fallback)
    return parse_numeric_input(parse_currency_input(text), fallback)


def render_field(config: CalculatorConfig, item: CalculatorInput):
    """Render one input widget and return its parsed value."""

    key = _key(config.id, item.name)
    if item.type == "select":
        options = list(item.options) if item.required else [""] + list(item.options)
        st.session_state.setdefault(key, item.default if item.default is not None else options[0])
        value = st.selectbox(
            item.label, options, key=key, help=item.help_text, format_func=lambda v: v or "None"
        )
        return value or None
    if item.type == "number" or (item.min is not None and item.min < 0):
        # number_input rejects mixed int and float arguments
        cast = int if isinstance(item.default, int) else float
        st.session_state.setdefault(key, cast(item.default or 0))
        return st.number_input(
            item.label,
            min_value=None if item.min is None else cast(item.min),
            max_value=None if item.max is None else cast(item.max),
            step=cast(item.step or 1),
            key=key,
            help=item.help_text,
        )
    st.session_state.setdefault(key, _initial_text(item))
    text = st.text_input(item.label, key=key, placeholder=item.placeholder, help=item.help_text)
    return _parse_text(item, text)


def render_insurance_inputs(config: CalculatorConfig, home_price: float) -> dict:
    """Insurance entry with a $ / % toggle.

    Flipping the toggle converts the value already entered so the premium
    stays the same; in percent mode the dollar premium follows the price.
    """

    mode_key = _key(config.id, "insurance_mode")
    prev_key = mode_key + "_prev"
    dollar_key = _key(config.id, "annual_insurance")
    pct_key = _key(config.id, "insurance_percent")
    st.session_state.setdefault(dollar_key, _initial_text(config.field("annual_insurance")))
    st.session_state.setdefault(pct_key, _initial_text(config.field("insurance_percent")))
    st.session_state.setdefault(mode_key, InsuranceMode.DOLLAR.value)

    mode = st.radio(
        "Insurance Entered As",
        [m.value for m in InsuranceMode],
        key=mode_key,
        horizontal=True,
        format_func=lambda m: "$ per year" if m == InsuranceMode.DOLLAR.value else "% of price",
    )
    prev = st.session_state.get(prev_key, mode)
    if prev != mode:
        source, target = (dollar_key, pct_key) if mode == InsuranceMode.PERCENT.value else (pct_key, dollar_key)
        current = parse_numeric_input(parse_currency_input(st.session_state[source]))
        converted = convert_insurance(current, prev, mode, home_price)
        st.session_state[target] = f"{converted:.4f}" if mode == InsuranceMode.PERCENT.value else f"{converted:.2f}"
        logger.debug("Insurance toggled %s -> %s: %s", prev, mode, st.session_state[target])
    st.session_state[prev_key] = mode

    values = {"insurance_mode": mode}
    if mode == InsuranceMode.PERCENT.value:
        item = config.field("insurance_percent")
        values["insurance_percent"] = render_field(config, item)
        dollars = convert_insurance(values["insurance_percent"], mode, InsuranceMode.DOLLAR, home_price)
        st.caption(f"Annual premium: {format_currency(dollars, 2)}")
    else:
        values["annual_insurance"] = render_field(config, config.field("annual_insurance"))
    return values


def render_inputs(config: CalculatorConfig) -> dict:
    raw = {}
    insurance_done = False
    for item in config.inputs:
        if item.name in INSURANCE_FIELDS:
            if not insurance_done:
                raw.update(render_insurance_inputs(config, raw.get("home_price") or 0.0))
                insurance_done = True
            continue
        raw[item.name] = render_field(config, item)
    return raw


def render_results(config: CalculatorConfig, results):
    headline = next(r for r in results if r.highlight)
    st.metric(headline.label, format_result(headline), help=headline.description)
    rows = [
        {"Result": r.label, "Value": format_result(r), "Details": r.description or ""}
        for r in results
        if not r.highlight
    ]
    st.dataframe(pd.DataFrame(rows), hide_index=True)


def _financed_loan(data):
    """Loan amount and monthly extra payment behind a purchase-style scenario."""

    base = max(0.0, data.home_price - data.down_payment)
    if data.kind == "va_purchase":
        loan = calculate_final_mortgage_amount(base, calculate_va_funding_fee(base, data.fee_type))
        payoff = calculate_early_payoff(
            loan,
            data.interest_rate,
            data.loan_term_years * 12,
            data.extra_payment_per_period,
            data.payment_frequency,
            data.lump_sum_amount,
            data.lump_sum_frequency,
        )
        return loan, payoff.extra_monthly
    return base, data.extra_monthly_payment


def render_schedule(data):
    loan, extra = _financed_loan(data)
    schedule = amortization_schedule(loan, data.interest_rate, data.loan_term_years * 12, extra)
    with st.expander("Amortization Schedule"):
        st.dataframe(yearly_summary(schedule), hide_index=True)
    if data.kind == "va_purchase":
        frequency = PaymentFrequency(data.payment_frequency)
        dates = payment_schedule(default_first_payment_date(), frequency, 4)
        st.caption("Next payments: " + ", ".join(d.strftime("%b %d, %Y") for d in dates))
    return schedule


def render_calculator(calc_id: str):
    config = REGISTRY[calc_id]
    st.header(f"{config.icon} {config.title}")
    st.caption(config.description)

    raw = render_inputs(config)
    outcome = validate_inputs(config.id, raw)
    if not outcome.success:
        labels = {i.name: i.label for i in config.inputs}
        for name, msg in outcome.errors.items():
            st.error(f"{labels.get(name, name)}: {msg}")
        st.session_state["results"] = []
        return None

    results = config.calculate(outcome.data)
    st.session_state["results"] = [r.model_dump() for r in results]
    render_results(config, results)
    if calc_id in ("purchase", "va_purchase"):
        render_schedule(outcome.data)

    shown = {i.label: raw.get(i.name) for i in config.inputs if raw.get(i.name) is not None}
    st.download_button(
        "Download PDF",
        data=build_results_pdf(config.title, results, shown),
        file_name=f"{config.id}_results.pdf",
        mime="application/pdf",
    )
    return results


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    st.set_page_config(page_title="Mortgage Calculators", page_icon="🏠", layout="wide")
    calc_id = st.sidebar.selectbox(
        "Calculator",
        list(REGISTRY),
        format_func=lambda k: f"{REGISTRY[k].icon} {REGISTRY[k].title}",
    )
    st.title("MORTGAGE CALCULATORS")
    render_calculator(calc_id)
    st.caption(DISCLAIMER)


if __name__ == "__main__":
    main()
