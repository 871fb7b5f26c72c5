from __future__ import annotations

import io
import logging
from datetime import date
from typing import Iterable, Mapping, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from mortgage_calc.formatters import format_result
from mortgage_calc.models import CalculatorResult
from mortgage_calc.presets import DISCLAIMER

logger = logging.getLogger(__name__)

TABLE_STYLE = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("BOX", (0, 0), (-1, -1), 1, colors.black),
        ("INNERGRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ]
)


def _table(header, rows, col_widths=None):
    t = Table([header] + rows, hAlign="LEFT", colWidths=col_widths)
    t.setStyle(TABLE_STYLE)
    return t


def build_results_pdf(
    title: str,
    results: Iterable[CalculatorResult],
    inputs: Optional[Mapping[str, str]] = None,
    generated_on: Optional[date] = None,
) -> bytes:
    """Render a calculator's results (and optionally its inputs) to PDF bytes.

    Values go through :func:`format_result` so the PDF matches the page. The
    highlighted headline is listed first and bolded.
    """

    styles = getSampleStyleSheet()
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=LETTER, leftMargin=36, rightMargin=36, topMargin=36, bottomMargin=36)
    story = [Paragraph(f"<b>{title}</b>", styles["Title"]), Spacer(1, 6)]
    story.append(Paragraph(f"Generated {(generated_on or date.today()).isoformat()}", styles["Normal"]))
    story.append(Spacer(1, 12))

    if inputs:
        rows = [[label, str(value)] for label, value in inputs.items()]
        story += [
            Paragraph("<b>Inputs</b>", styles["Heading3"]),
            Spacer(1, 6),
            _table(["Input", "Value"], rows, [200, 320]),
            Spacer(1, 12),
        ]

    ordered = sorted(results, key=lambda r: not r.highlight)
    rows = []
    for r in ordered:
        label = Paragraph(f"<b>{r.label}</b>", styles["Normal"]) if r.highlight else r.label
        rows.append([label, format_result(r), Paragraph(r.description or "", styles["Normal"])])
    story += [
        Paragraph("<b>Results</b>", styles["Heading3"]),
        Spacer(1, 6),
        _table(["Result", "Value", "Details"], rows, [150, 90, 280]),
    ]

    story += [Spacer(1, 12), Paragraph(f"<font size=8>{DISCLAIMER}</font>", styles["Normal"])]
    doc.build(story)
    logger.debug("Built %s PDF with %d results", title, len(rows))
    return buf.getvalue()
