from .attendance import (
    EMPTY_RECORD,
    GRADE_CONFIGS,
    GRADES,
    AttendanceData,
    DailyRecord,
    DaySummary,
    Grade,
    GradeConfig,
    class_strength,
    default_attendance_data,
    format_percentage,
    percentage,
    record_for,
    summarize_day,
)

__all__ = [
    "AttendanceData",
    "DailyRecord",
    "DaySummary",
    "EMPTY_RECORD",
    "GRADES",
    "GRADE_CONFIGS",
    "Grade",
    "GradeConfig",
    "class_strength",
    "default_attendance_data",
    "format_percentage",
    "percentage",
    "record_for",
    "summarize_day",
]
