from __future__ import annotations

import csv
import io
import logging
from datetime import date
from pathlib import Path

from school_attendance.reports.rows import AttendanceMapping, build_report_rows
from school_attendance.utils import today_iso

logger = logging.getLogger(__name__)

CSV_HEADERS: tuple[str, ...] = (
    "Date",
    "Class Grade",
    "Total Strength",
    "Present",
    "Absent",
    "Present Percentage",
    "Absent Percentage",
)


def csv_filename(today: date | None = None) -> str:
    return f"school_attendance_data_{today_iso(today=today)}.csv"


def render_csv(data: AttendanceMapping) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for row in build_report_rows(data):
        writer.writerow([row.date, *row.cells()])
    return buffer.getvalue()


def write_csv(data: AttendanceMapping, destination: Path) -> Path:
    destination.parent.mkdir(parents=True, exist_ok=True)
    with open(destination, "w", newline="", encoding="utf-8") as handle:
        handle.write(render_csv(data))

    logger.info("Exported attendance CSV to %s", destination)
    return destination


def export_csv(data: AttendanceMapping, directory: Path, *, today: date | None = None) -> Path:
    return write_csv(data, Path(directory) / csv_filename(today))
