from .csv_report import CSV_HEADERS, csv_filename, export_csv, render_csv, write_csv
from .pdf_report import DocumentCanvas, ReportLabCanvas, export_pdf, pdf_filename, render_pdf, write_pdf
from .rows import ReportRow, build_report_rows, collect_dates

__all__ = [
    "CSV_HEADERS",
    "DocumentCanvas",
    "ReportLabCanvas",
    "ReportRow",
    "build_report_rows",
    "collect_dates",
    "csv_filename",
    "export_csv",
    "export_pdf",
    "pdf_filename",
    "render_csv",
    "render_pdf",
    "write_csv",
    "write_pdf",
]
