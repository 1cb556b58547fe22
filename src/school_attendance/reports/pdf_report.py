from __future__ import annotations

import io
import logging
from datetime import date
from pathlib import Path
from typing import Protocol, Sequence

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas as pdf_canvas

from school_attendance.models import GRADE_CONFIGS, GRADES
from school_attendance.reports.rows import AttendanceMapping, ReportRow, collect_dates, rows_for_date
from school_attendance.utils import today_iso

logger = logging.getLogger(__name__)

RGB = tuple[int, int, int]

SCHOOL_TITLE = "SR PRIME SCHOOL ATTENDANCE"
SCHOOL_SUBTITLE = "GOPALAPURAM, KHAMMAM"
SECTION_TITLE = "Daily Attendance Records"
CONTINUED_TITLE = f"{SECTION_TITLE} (Continued)"

TABLE_HEADERS: tuple[str, ...] = ("Class Grade", "Strength", "Present", "Absent", "Present %", "Absent %")
COLUMN_WIDTHS: tuple[float, ...] = (30, 20, 20, 20, 25, 25)

# Layout units are millimetres from the top-left corner of the page.
MARGIN = 14
ROW_HEIGHT = 7
HEADER_HEIGHT = 7
TEXT_INDENT = 1
TEXT_BASELINE = 5
TITLE_Y = 20
SUBTITLE_Y = 28
SECTION_Y = 45
CONTINUED_Y = 20
SECTION_GAP = 10
DATE_LABEL_GAP = 7
DATE_BLOCK_GAP = 5

HEADER_FILL: RGB = (52, 152, 219)
WHITE: RGB = (255, 255, 255)
BLACK: RGB = (0, 0, 0)

ROW_FILLS: tuple[RGB, ...] = tuple(config.pdf_fill_rgb for config in GRADE_CONFIGS)

# Date label, header and every grade row, plus the gap after the block.
MIN_SPACE_FOR_DATE = SECTION_GAP + DATE_LABEL_GAP + HEADER_HEIGHT + len(GRADES) * ROW_HEIGHT + DATE_BLOCK_GAP


class DocumentCanvas(Protocol):
    page_width: float
    page_height: float

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        *,
        size: float,
        bold: bool = False,
        align: str = "left",
        color: RGB = BLACK,
    ) -> None: ...

    def draw_filled_rect(self, x: float, y: float, width: float, height: float, fill: RGB) -> None: ...

    def new_page(self) -> None: ...

    def save(self, path: Path) -> None: ...


class ReportLabCanvas:
    """:class:`DocumentCanvas` drawing onto a reportlab canvas, in millimetres."""

    def __init__(self, pagesize: tuple[float, float] = A4) -> None:
        self._buffer = io.BytesIO()
        self._canvas = pdf_canvas.Canvas(self._buffer, pagesize=pagesize)
        self.page_width = pagesize[0] / mm
        self.page_height = pagesize[1] / mm

    def _to_points(self, x: float, y: float) -> tuple[float, float]:
        return x * mm, (self.page_height - y) * mm

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        *,
        size: float,
        bold: bool = False,
        align: str = "left",
        color: RGB = BLACK,
    ) -> None:
        self._canvas.setFont("Helvetica-Bold" if bold else "Helvetica", size)
        self._canvas.setFillColorRGB(*(channel / 255 for channel in color))
        px, py = self._to_points(x, y)
        if align == "center":
            self._canvas.drawCentredString(px, py, text)
        else:
            self._canvas.drawString(px, py, text)

    def draw_filled_rect(self, x: float, y: float, width: float, height: float, fill: RGB) -> None:
        self._canvas.setFillColorRGB(*(channel / 255 for channel in fill))
        self._canvas.setStrokeColorRGB(0, 0, 0)
        px, py = self._to_points(x, y + height)
        self._canvas.rect(px, py, width * mm, height * mm, stroke=1, fill=1)

    def new_page(self) -> None:
        self._canvas.showPage()

    def save(self, path: Path) -> None:
        self._canvas.save()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self._buffer.getvalue())


class AttendancePdfReport:
    """Lays out the daily attendance tables, one block per recorded date."""

    def __init__(self, document: DocumentCanvas) -> None:
        self._doc = document
        self._table_width = sum(COLUMN_WIDTHS)
        self._table_x = (document.page_width - self._table_width) / 2
        self._y: float = 0

    @property
    def _page_bottom(self) -> float:
        return self._doc.page_height - MARGIN

    def render(self, data: AttendanceMapping) -> None:
        self._draw_title_block()

        for date_text in collect_dates(data):
            if self._y + MIN_SPACE_FOR_DATE > self._page_bottom:
                self._start_continued_page()

            self._doc.draw_text(f"Date: {date_text}", MARGIN, self._y, size=12, bold=True)
            self._y += DATE_LABEL_GAP
            self._draw_table_header()

            for row in rows_for_date(data, date_text):
                if self._y + ROW_HEIGHT > self._page_bottom:
                    self._start_continued_page()
                    self._draw_table_header()
                self._draw_row(row)

            self._y += DATE_BLOCK_GAP

    def _draw_title_block(self) -> None:
        center = self._doc.page_width / 2
        self._doc.draw_text(SCHOOL_TITLE, center, TITLE_Y, size=18, bold=True, align="center")
        self._doc.draw_text(SCHOOL_SUBTITLE, center, SUBTITLE_Y, size=12, align="center")

        self._y = SECTION_Y
        self._doc.draw_text(SECTION_TITLE, MARGIN, self._y, size=14, bold=True)
        self._y += SECTION_GAP

    def _start_continued_page(self) -> None:
        self._doc.new_page()
        self._y = CONTINUED_Y
        self._doc.draw_text(CONTINUED_TITLE, MARGIN, self._y, size=14, bold=True)
        self._y += SECTION_GAP

    def _draw_table_header(self) -> None:
        self._doc.draw_filled_rect(self._table_x, self._y, self._table_width, HEADER_HEIGHT, HEADER_FILL)
        self._draw_cells(TABLE_HEADERS, size=10, bold=True, color=WHITE)
        self._y += HEADER_HEIGHT

    def _draw_row(self, row: ReportRow) -> None:
        fill = ROW_FILLS[GRADES.index(row.grade) % len(ROW_FILLS)]
        self._doc.draw_filled_rect(self._table_x, self._y, self._table_width, ROW_HEIGHT, fill)
        self._draw_cells(row.cells(), size=10, bold=False, color=BLACK)
        self._y += ROW_HEIGHT

    def _draw_cells(self, cells: Sequence[str], *, size: float, bold: bool, color: RGB) -> None:
        x = self._table_x + TEXT_INDENT
        for cell, width in zip(cells, COLUMN_WIDTHS):
            self._doc.draw_text(cell, x, self._y + TEXT_BASELINE, size=size, bold=bold, color=color)
            x += width


def pdf_filename(today: date | None = None) -> str:
    return f"school_attendance_summary_{today_iso(today=today)}.pdf"


def render_pdf(data: AttendanceMapping, document: DocumentCanvas) -> None:
    AttendancePdfReport(document).render(data)


def write_pdf(data: AttendanceMapping, destination: Path) -> Path:
    document = ReportLabCanvas()
    render_pdf(data, document)
    document.save(destination)

    logger.info("Exported attendance PDF to %s", destination)
    return destination


def export_pdf(data: AttendanceMapping, directory: Path, *, today: date | None = None) -> Path:
    return write_pdf(data, Path(directory) / pdf_filename(today))
