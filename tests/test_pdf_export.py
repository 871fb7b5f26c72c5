from datetime import date

from mortgage_calc.calculators import calculate_purchase
from mortgage_calc.models import PurchaseInputs
from mortgage_calc.pdf_export import build_results_pdf


def test_results_pdf_bytes():
    results = calculate_purchase(PurchaseInputs(home_price=350000, down_payment=70000))
    pdf = build_results_pdf(
        "Purchase Calculator",
        results,
        {"Home Price": "$350,000", "Down Payment": "$70,000"},
        generated_on=date(2024, 5, 1),
    )
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000


def test_results_pdf_without_inputs_or_results():
    pdf = build_results_pdf("Empty", [])
    assert pdf.startswith(b"%PDF")
