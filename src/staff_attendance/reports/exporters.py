from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable
from xml.sax.saxutils import escape

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import LongTable, Paragraph, SimpleDocTemplate, Spacer, TableStyle

from ..core.constants import DATETIME_FORMAT
from ..core.enums import ReportFormat
from ..core.exceptions import ValidationError
from .service import ReportData

PAGE_SIZE = landscape(A4)
PAGE_WIDTH, PAGE_HEIGHT = PAGE_SIZE
MARGIN = 12 * mm
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN

# Relative widths for Employee ID .. Status
COLUMN_WEIGHTS = [1.1, 1.8, 1.8, 1.0, 0.9, 1.0, 1.0, 0.9]

PALETTE = {
    "navy": colors.HexColor("#0F172A"),
    "muted": colors.HexColor("#64748B"),
    "line": colors.HexColor("#D1D5DB"),
    "grid": colors.HexColor("#E2E8F0"),
    "stripe_even": colors.HexColor("#F8FAFC"),
    "stripe_odd": colors.HexColor("#F1F5F9"),
}

_STYLES = getSampleStyleSheet()
TITLE_STYLE = ParagraphStyle(
    "report-title",
    parent=_STYLES["Heading2"],
    fontName="Helvetica-Bold",
    textColor=PALETTE["navy"],
    spaceAfter=2,
)
SUBTITLE_STYLE = ParagraphStyle(
    "report-subtitle",
    parent=_STYLES["BodyText"],
    fontName="Helvetica",
    fontSize=9,
    textColor=PALETTE["muted"],
)
TABLE_HEADER_STYLE = ParagraphStyle(
    "table-header",
    parent=_STYLES["BodyText"],
    fontName="Helvetica-Bold",
    fontSize=9,
    leading=11,
    textColor=colors.white,
)
TABLE_CELL_STYLE = ParagraphStyle(
    "table-cell",
    parent=_STYLES["BodyText"],
    fontName="Helvetica",
    fontSize=8.6,
    leading=10,
    textColor=PALETTE["navy"],
    wordWrap="CJK",
)


@dataclass(frozen=True)
class ExportedFile:
    content: bytes
    filename: str
    mimetype: str


def export_xlsx(report: ReportData) -> bytes:
    df = pd.DataFrame(report.rows, columns=report.columns)
    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=report.sheet_name[:31])
    return out.getvalue()


def export_csv(report: ReportData) -> bytes:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=report.columns)
    writer.writeheader()
    for row in report.rows:
        writer.writerow(row)
    # BOM so Excel picks up UTF-8 names
    return out.getvalue().encode("utf-8-sig")


def _cell(value: Any, style: ParagraphStyle) -> Paragraph:
    text = "-" if value is None or str(value).strip() == "" else str(value)
    return Paragraph(escape(text), style)


class NumberedCanvas(canvas.Canvas):
    """Canvas that knows the page count when drawing footers."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._saved_page_states: list[dict[str, Any]] = []

    def showPage(self) -> None:
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self) -> None:
        total_pages = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_footer(total_pages)
            canvas.Canvas.showPage(self)
        canvas.Canvas.save(self)

    def _draw_footer(self, total_pages: int) -> None:
        line_y = 9 * mm
        text_y = 5.6 * mm

        self.saveState()
        self.setStrokeColor(PALETTE["line"])
        self.setLineWidth(0.5)
        self.line(MARGIN, line_y, PAGE_WIDTH - MARGIN, line_y)

        self.setFillColor(PALETTE["muted"])
        self.setFont("Helvetica", 8)
        self.drawString(MARGIN, text_y, "Generated by Staff Attendance")
        self.drawRightString(PAGE_WIDTH - MARGIN, text_y, f"Page {self._pageNumber} of {total_pages}")
        self.restoreState()


def _build_table(report: ReportData) -> LongTable:
    columns = report.columns
    data: list[list[Any]] = [[_cell(c, TABLE_HEADER_STYLE) for c in columns]]
    for row in report.rows:
        data.append([_cell(row.get(c), TABLE_CELL_STYLE) for c in columns])
    if not report.rows:
        data.append([_cell("No data", TABLE_CELL_STYLE)] + [_cell("", TABLE_CELL_STYLE) for _ in columns[1:]])

    total_weight = sum(COLUMN_WEIGHTS)
    widths = [CONTENT_WIDTH * w / total_weight for w in COLUMN_WEIGHTS]
    table = LongTable(data, colWidths=widths, repeatRows=1, hAlign="LEFT")

    style_commands: list[tuple[Any, ...]] = [
        ("BACKGROUND", (0, 0), (-1, 0), PALETTE["navy"]),
        ("GRID", (0, 0), (-1, -1), 0.4, PALETTE["grid"]),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LEFTPADDING", (0, 0), (-1, -1), 5),
        ("RIGHTPADDING", (0, 0), (-1, -1), 5),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]
    for row_index in range(1, len(data)):
        background = PALETTE["stripe_even"] if row_index % 2 else PALETTE["stripe_odd"]
        style_commands.append(("BACKGROUND", (0, row_index), (-1, row_index), background))
    table.setStyle(TableStyle(style_commands))
    return table


def export_pdf(report: ReportData, *, heading: str = "", generated_at: datetime | None = None) -> bytes:
    generated_at = generated_at or datetime.now()
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=PAGE_SIZE,
        leftMargin=MARGIN,
        rightMargin=MARGIN,
        topMargin=MARGIN,
        bottomMargin=14 * mm,
        title=report.title,
    )
    story = [
        Paragraph(escape(heading or report.title), TITLE_STYLE),
        Paragraph(escape(f"{report.title} | {len(report.rows)} records | generated {generated_at.strftime(DATETIME_FORMAT)}"), SUBTITLE_STYLE),
        Spacer(1, 6 * mm),
        _build_table(report),
    ]
    doc.build(story, canvasmaker=NumberedCanvas)
    return buffer.getvalue()


EXPORTERS: dict[ReportFormat, tuple[Callable[..., bytes], str]] = {
    ReportFormat.XLSX: (export_xlsx, "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"),
    ReportFormat.CSV: (export_csv, "text/csv"),
    ReportFormat.PDF: (export_pdf, "application/pdf"),
}


def parse_format(value: str | None) -> ReportFormat:
    try:
        return ReportFormat((value or ReportFormat.XLSX.value).lower())
    except ValueError:
        raise ValidationError(f"Unsupported report format: {value}")


def export_report(report: ReportData, fmt: ReportFormat, *, heading: str = "") -> ExportedFile:
    exporter, mimetype = EXPORTERS[fmt]
    content = exporter(report, heading=heading) if fmt == ReportFormat.PDF else exporter(report)
    return ExportedFile(content=content, filename=f"{report.filename_stem}.{fmt.value}", mimetype=mimetype)
