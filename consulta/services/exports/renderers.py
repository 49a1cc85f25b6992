# Standard library imports
import csv
from datetime import UTC, datetime
import io

# Third-party imports
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen.canvas import Canvas
from reportlab.platypus import LongTable, Paragraph, SimpleDocTemplate, Spacer, TableStyle

# Local application imports
from consulta.services.exports.row_services import EXPORT_HEADERS, sanitize_cell

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"
EXCEL_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MEDIA_TYPE = "application/pdf"

EXCEL_SHEET_NAME = "Consultas"
EXCEL_COLUMN_WIDTHS = [38, 12, 16, 28, 18, 20, 24, 22, 30, 60, 12]

PDF_TITLE = "Reporte de Consultas Ciudadanas"
# Relative widths of the PDF table columns, in the order of EXPORT_HEADERS
PDF_COLUMN_WEIGHTS = [3.2, 2.0, 2.0, 3.2, 2.6, 2.6, 2.8, 2.8, 3.2, 6.6, 1.8]


def render_csv(rows: list[list[str]]) -> bytes:
    """UTF-8 CSV with BOM and every field quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow([sanitize_cell(header) for header in EXPORT_HEADERS])
    writer.writerows(rows)
    return ("\ufeff" + buffer.getvalue()).encode("utf-8")


def render_excel(rows: list[list[str]]) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = EXCEL_SHEET_NAME

    sheet.append(EXPORT_HEADERS)
    header_fill = PatternFill("solid", fgColor="1F4E79")
    for cell in sheet[1]:
        cell.font = Font(bold=True, color="FFFFFF")
        cell.fill = header_fill
        cell.alignment = Alignment(vertical="center")

    for row in rows:
        sheet.append(row)
        # Cells are text even when they look like numbers or dates
        for cell in sheet[sheet.max_row]:
            cell.data_type = "s"

    for index, width in enumerate(EXCEL_COLUMN_WIDTHS, start=1):
        sheet.column_dimensions[sheet.cell(row=1, column=index).column_letter].width = width
    sheet.freeze_panes = "A2"

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


class _NumberedCanvas(Canvas):
    """Canvas that knows the page count when drawing each footer."""

    def __init__(self, *args, generated_at: str = "", **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._saved_page_states: list[dict] = []
        self._generated_at = generated_at

    def showPage(self) -> None:  # noqa: N802
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self) -> None:
        page_count = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_footer(page_count)
            super().showPage()
        super().save()

    def _draw_footer(self, page_count: int) -> None:
        width, _ = self._pagesize
        self.setFont("Helvetica", 8)
        self.setFillColor(colors.grey)
        self.drawString(15 * mm, 10 * mm, f"Generado: {self._generated_at}")
        self.drawRightString(width - 15 * mm, 10 * mm, f"Página {self._pageNumber} de {page_count}")


def render_pdf(rows: list[list[str]], period: str, generated_at: datetime | None = None) -> bytes:
    """A4 landscape report with a repeated table header and numbered pages."""
    generated_at = generated_at or datetime.now(UTC)
    generated_label = generated_at.strftime("%d/%m/%Y %H:%M")

    buffer = io.BytesIO()
    page_size = landscape(A4)
    document = SimpleDocTemplate(
        buffer,
        pagesize=page_size,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=18 * mm,
        title=PDF_TITLE,
    )

    styles = getSampleStyleSheet()
    cell_style = ParagraphStyle("cell", parent=styles["BodyText"], fontSize=7, leading=8.5)
    header_style = ParagraphStyle("header", parent=cell_style, fontName="Helvetica-Bold", textColor=colors.white)

    total_weight = sum(PDF_COLUMN_WEIGHTS)
    column_widths = [document.width * weight / total_weight for weight in PDF_COLUMN_WEIGHTS]

    # Paragraph parses markup, cell text must be escaped first
    def paragraph(text: str, style: ParagraphStyle) -> Paragraph:
        escaped = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        return Paragraph(escaped, style)

    table_data = [[paragraph(header, header_style) for header in EXPORT_HEADERS]]
    table_data.extend([paragraph(value, cell_style) for value in row] for row in rows)

    table = LongTable(table_data, colWidths=column_widths, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#1F4E79")),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#B0B7C3")),
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#F2F5F9")]),
            ]
        )
    )

    story = [
        Paragraph(PDF_TITLE, styles["Title"]),
        Paragraph(f"Período: {period}", styles["Normal"]),
        Paragraph(f"Total de consultas: {len(rows)}", styles["Normal"]),
        Spacer(1, 6 * mm),
        table,
    ]

    document.build(
        story,
        canvasmaker=lambda *args, **kwargs: _NumberedCanvas(*args, generated_at=generated_label, **kwargs),
    )
    return buffer.getvalue()
