"""Display formatting and raw input cleaning.

``format_percentage`` takes a fraction (``0.05`` renders as ``"5.00%"``).
Calculator inputs such as ``interest_rate`` are percent-numbers and are never
passed through it directly; percentage results are stored as fractions.
"""
from __future__ import annotations

import logging
import math
import re
from decimal import ROUND_HALF_UP, Context, Decimal

from mortgage_calc.models import CalculatorResult, ResultFormat

logger = logging.getLogger(__name__)

_NON_NUMERIC = re.compile(r"[^0-9.]")


def _finite(value) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        logger.warning("Formatting non-numeric value %r as 0", value)
        return 0.0
    if not math.isfinite(v):
        logger.warning("Formatting non-finite value %r as 0", v)
        return 0.0
    return v


def _grouped(value: float, decimals: int) -> str:
    # ties round away from zero: 2.5 -> "3", 0.125 at two places -> "0.13"
    exact = Decimal(repr(abs(value)))
    context = Context(prec=max(28, exact.adjusted() + decimals + 2))
    rounded = exact.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP, context=context)
    text = f"{rounded:,.{decimals}f}"
    # -0.001 rounds to zero; do not render a minus sign for it
    if value < 0 and any(ch not in "0.," for ch in text):
        return "-" + text
    return text


def format_currency(value, decimals: int = 0) -> str:
    """Format ``value`` as US dollars, e.g. ``1234.5`` -> ``"$1,235"``."""

    v = _finite(value)
    text = _grouped(v, decimals)
    if text.startswith("-"):
        return "-$" + text[1:]
    return "$" + text


def format_percentage(value, decimals: int = 2) -> str:
    """Format a fraction as a percentage, e.g. ``0.05`` -> ``"5.00%"``."""

    return _grouped(_finite(value) * 100, decimals).replace(",", "") + "%"


def format_number(value, decimals: int = 0) -> str:
    """Format a plain number with thousands separators and fixed decimals."""

    return _grouped(_finite(value), decimals)


def _clean_numeric_text(text: str) -> str:
    cleaned = _NON_NUMERIC.sub("", text or "")
    head, dot, tail = cleaned.partition(".")
    return head + dot + tail.replace(".", "")


def parse_currency_input(text: str) -> str:
    """Strip everything but digits and the first decimal point."""

    return _clean_numeric_text(text)


def parse_percentage_input(text: str) -> str:
    """Strip everything but digits and the first decimal point."""

    return _clean_numeric_text(text)


def parse_numeric_input(text, default: float = 0.0) -> float:
    """Turn user-typed text into a non-negative float.

    Empty, unparsable and negative input all fall back to ``default``; the
    calculators themselves do not re-check signs.
    """

    if text is None:
        return default
    if isinstance(text, (int, float)):
        v = float(text)
    else:
        raw = str(text).strip()
        if raw.startswith("-"):
            return default
        cleaned = _clean_numeric_text(raw)
        if cleaned in ("", "."):
            return default
        v = float(cleaned)
    if not math.isfinite(v) or v < 0:
        return default
    return v


def format_result(result: CalculatorResult) -> str:
    if result.format == ResultFormat.CURRENCY:
        return format_currency(result.value)
    if result.format == ResultFormat.PERCENTAGE:
        return format_percentage(result.value)
    return format_number(result.value, 2)
