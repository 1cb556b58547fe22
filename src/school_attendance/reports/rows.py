from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Mapping

from school_attendance.models import GRADES, DailyRecord, Grade, class_strength, format_percentage

AttendanceMapping = Mapping[Grade, Mapping[str, DailyRecord]]


@dataclass(frozen=True, slots=True)
class ReportRow:
    date: str
    grade: Grade
    strength: int
    present: int
    absent: int
    present_percentage: float
    absent_percentage: float

    def cells(self) -> list[str]:
        """Grade-table cells shared by both exports: grade, strength, counts, percentages."""
        return [
            self.grade.label,
            str(self.strength),
            str(self.present),
            str(self.absent),
            format_percentage(self.present_percentage),
            format_percentage(self.absent_percentage),
        ]


def collect_dates(data: AttendanceMapping) -> list[str]:
    dates: set[str] = set()
    for grade in GRADES:
        dates.update(data.get(grade, {}).keys())
    return sorted(dates)


def rows_for_date(data: AttendanceMapping, date: str) -> Iterator[ReportRow]:
    for grade in GRADES:
        record = data.get(grade, {}).get(date)
        if record is None:
            continue
        yield ReportRow(
            date=date,
            grade=grade,
            strength=class_strength(grade),
            present=record.present,
            absent=record.absent,
            present_percentage=record.present_percentage,
            absent_percentage=record.absent_percentage,
        )


def build_report_rows(data: AttendanceMapping) -> Iterator[ReportRow]:
    """Every recorded (date, grade) pair, dates ascending, grades in class order."""
    for date in collect_dates(data):
        yield from rows_for_date(data, date)
