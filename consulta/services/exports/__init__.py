# Local application imports
from consulta.services.exports.renderers import (
    CSV_MEDIA_TYPE,
    EXCEL_MEDIA_TYPE,
    PDF_MEDIA_TYPE,
    render_csv,
    render_excel,
    render_pdf,
)
from consulta.services.exports.row_services import (
    EXPORT_HEADERS,
    build_export_row,
    build_export_rows,
    display_name,
    export_file_name,
    sanitize_cell,
)

__all__ = [
    "CSV_MEDIA_TYPE",
    "EXCEL_MEDIA_TYPE",
    "EXPORT_HEADERS",
    "PDF_MEDIA_TYPE",
    "build_export_row",
    "build_export_rows",
    "display_name",
    "export_file_name",
    "render_csv",
    "render_excel",
    "render_pdf",
    "sanitize_cell",
]
