from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Dict, Mapping


class Grade(str, Enum):
    SIXTH = "6th Grade"
    SEVENTH = "7th Grade"
    EIGHTH = "8th Grade"
    NINTH = "9th Grade"
    TENTH = "10th Grade"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class GradeConfig:
    grade: Grade
    strength: int
    display_color: str
    pdf_fill_rgb: tuple[int, int, int]


GRADE_CONFIGS: tuple[GradeConfig, ...] = (
    GradeConfig(Grade.SIXTH, 19, "#BFDBFE", (219, 234, 254)),
    GradeConfig(Grade.SEVENTH, 48, "#A7F3D0", (209, 250, 229)),
    GradeConfig(Grade.EIGHTH, 47, "#FDE68A", (253, 230, 138)),
    GradeConfig(Grade.NINTH, 56, "#C7D2FE", (224, 231, 255)),
    GradeConfig(Grade.TENTH, 66, "#FECDD3", (255, 228, 230)),
)

GRADES: tuple[Grade, ...] = tuple(config.grade for config in GRADE_CONFIGS)
_CONFIG_BY_GRADE = {config.grade: config for config in GRADE_CONFIGS}


def class_strength(grade: Grade) -> int:
    return _CONFIG_BY_GRADE[grade].strength


@dataclass(frozen=True, slots=True)
class DailyRecord:
    present: int = 0
    absent: int = 0

    @property
    def total(self) -> int:
        return self.present + self.absent

    @property
    def present_percentage(self) -> float:
        return percentage(self.present, self.total)

    @property
    def absent_percentage(self) -> float:
        return percentage(self.absent, self.total)

    def to_dict(self) -> dict[str, int]:
        return {"present": self.present, "absent": self.absent}


EMPTY_RECORD = DailyRecord()

# grade -> ISO date -> record
AttendanceData = Dict[Grade, Dict[str, DailyRecord]]


def default_attendance_data() -> AttendanceData:
    return {grade: {} for grade in GRADES}


def percentage(part: int, total: int) -> float:
    """Return ``part`` as a percentage of ``total``, ``0.0`` when nothing was recorded."""
    if total <= 0:
        return 0.0
    return part / total * 100


def round_one_decimal(value: float) -> Decimal:
    # Half-up on the exact binary value, so 12.25 becomes 12.3.
    return Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def format_percentage(value: float) -> str:
    return f"{round_one_decimal(value)}%"


@dataclass(frozen=True, slots=True)
class DaySummary:
    date: str
    total_strength: int
    present: int
    absent: int

    @property
    def present_percentage(self) -> float:
        return percentage(self.present, self.present + self.absent)

    @property
    def absent_percentage(self) -> float:
        return percentage(self.absent, self.present + self.absent)


def record_for(data: Mapping[Grade, Mapping[str, DailyRecord]], grade: Grade, date: str) -> DailyRecord | None:
    return data.get(grade, {}).get(date)


def summarize_day(data: Mapping[Grade, Mapping[str, DailyRecord]], date: str) -> DaySummary:
    """Totals across every grade for one date, as shown in the table footer."""

    present = 0
    absent = 0
    for grade in GRADES:
        record = record_for(data, grade, date)
        if record is not None:
            present += record.present
            absent += record.absent

    return DaySummary(
        date=date,
        total_strength=sum(config.strength for config in GRADE_CONFIGS),
        present=present,
        absent=absent,
    )
