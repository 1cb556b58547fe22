from __future__ import annotations

from datetime import date
from pathlib import Path

from school_attendance.models import GRADES, Grade
from school_attendance.reports import export_pdf, pdf_filename, render_pdf
from school_attendance.reports.pdf_report import CONTINUED_TITLE, HEADER_FILL, ROW_FILLS, TABLE_HEADERS


class RecordingCanvas:
    def __init__(self, page_width: float = 210, page_height: float = 297) -> None:
        self.page_width = page_width
        self.page_height = page_height
        self.pages: list[list[tuple]] = [[]]

    def draw_text(self, text, x, y, *, size, bold=False, align="left", color=(0, 0, 0)):
        self.pages[-1].append(("text", text, x, y))

    def draw_filled_rect(self, x, y, width, height, fill):
        self.pages[-1].append(("rect", fill, x, y, width, height))

    def new_page(self):
        self.pages.append([])

    def save(self, path: Path) -> None:
        raise AssertionError("rendering must not save")

    def texts(self, page: int) -> list[str]:
        return [item[1] for item in self.pages[page] if item[0] == "text"]

    def rects(self, page: int) -> list[tuple]:
        return [item for item in self.pages[page] if item[0] == "rect"]


def _fill_day(store, day: str) -> None:
    for grade in GRADES:
        store.commit(grade, day, 10, 2)


def test_title_block_and_date_tables(store):
    store.commit(Grade.SIXTH, "2024-06-01", 15, 4)
    canvas = RecordingCanvas()

    render_pdf(store.data, canvas)

    texts = canvas.texts(0)
    assert texts[:3] == ["SR PRIME SCHOOL ATTENDANCE", "GOPALAPURAM, KHAMMAM", "Daily Attendance Records"]
    assert "Date: 2024-06-01" in texts
    assert list(TABLE_HEADERS) == texts[4:10]
    assert texts[10:] == ["6th Grade", "19", "15", "4", "78.9%", "21.1%"]
    assert len(canvas.pages) == 1


def test_table_is_centered_on_the_page(store):
    store.commit(Grade.SIXTH, "2024-06-01", 15, 4)
    canvas = RecordingCanvas()

    render_pdf(store.data, canvas)

    header_rect = canvas.rects(0)[0]
    assert header_rect[1] == HEADER_FILL
    assert header_rect[2] == 35
    assert header_rect[4] == 140


def test_rows_are_tinted_by_grade_position(store):
    store.commit(Grade.EIGHTH, "2024-06-01", 40, 7)
    store.commit(Grade.TENTH, "2024-06-01", 60, 6)
    canvas = RecordingCanvas()

    render_pdf(store.data, canvas)

    fills = [rect[1] for rect in canvas.rects(0)[1:]]
    assert fills == [ROW_FILLS[2], ROW_FILLS[4]]


def test_new_page_when_date_block_does_not_fit(store):
    days = [f"2024-01-0{day}" for day in range(1, 6)]
    for day in days:
        _fill_day(store, day)
    canvas = RecordingCanvas()

    render_pdf(store.data, canvas)

    assert len(canvas.pages) == 2
    assert "Date: 2024-01-04" in canvas.texts(0)
    assert canvas.texts(1)[:2] == [CONTINUED_TITLE, "Date: 2024-01-05"]


def test_rows_break_across_pages_with_repeated_header(store):
    _fill_day(store, "2024-01-01")
    canvas = RecordingCanvas(page_height=80)

    render_pdf(store.data, canvas)

    assert len(canvas.pages) == 3
    assert canvas.texts(1)[:2] == [CONTINUED_TITLE, "Date: 2024-01-01"]
    assert canvas.texts(2)[0] == CONTINUED_TITLE
    assert canvas.texts(2)[1:7] == list(TABLE_HEADERS)
    row_count = sum(len(canvas.rects(page)) - 1 for page in (1, 2))
    assert row_count == len(GRADES)


def test_export_writes_pdf_file(store, tmp_path):
    _fill_day(store, "2024-06-01")
    store.commit(Grade.SIXTH, "2024-06-02", 0, 0)

    path = export_pdf(store.data, tmp_path, today=date(2024, 6, 3))

    assert path.name == pdf_filename(date(2024, 6, 3)) == "school_attendance_summary_2024-06-03.pdf"
    assert path.read_bytes().startswith(b"%PDF")
