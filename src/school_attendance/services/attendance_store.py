from __future__ import annotations

import json
import logging
import math
from typing import Any, Mapping, Protocol

from school_attendance.models import (
    GRADES,
    AttendanceData,
    DailyRecord,
    Grade,
    default_attendance_data,
    record_for,
)
from school_attendance.utils import InvalidDate, parse_iso_date

logger = logging.getLogger(__name__)

ATTENDANCE_STORAGE_KEY = "schoolClassAttendanceData"


class KeyValueBackend(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class AttendanceStore:
    """Canonical grade -> date -> record mapping, persisted after every commit.

    Persistence is best-effort: read and write failures are logged and
    absorbed, and the in-memory data stays authoritative.
    """

    def __init__(self, backend: KeyValueBackend, *, storage_key: str = ATTENDANCE_STORAGE_KEY) -> None:
        self._backend = backend
        self._storage_key = storage_key
        self._data: AttendanceData = default_attendance_data()

    @property
    def data(self) -> AttendanceData:
        return self._data

    def record(self, grade: Grade, date: str) -> DailyRecord | None:
        return record_for(self._data, grade, date)

    def load(self) -> AttendanceData:
        try:
            raw = self._backend.get(self._storage_key)
            data = deserialize(raw) if raw else default_attendance_data()
        except (OSError, ValueError, TypeError, OverflowError, RecursionError):
            logger.exception("Failed to load attendance data, starting from an empty store")
            data = default_attendance_data()

        self._data = data
        return data

    def save(self, data: AttendanceData | None = None) -> None:
        payload = self._data if data is None else data
        try:
            self._backend.set(self._storage_key, serialize(payload))
        except (OSError, ValueError, TypeError):
            logger.exception("Failed to save attendance data")

    def commit(self, grade: Grade, date: str, present: int, absent: int) -> AttendanceData:
        """Replace the single ``(grade, date)`` entry and persist the result."""

        updated_grade = dict(self._data.get(grade, {}))
        updated_grade[date] = DailyRecord(present=present, absent=absent)

        new_data = dict(self._data)
        new_data[grade] = updated_grade
        self._data = new_data

        logger.debug("Committed %s on %s: present=%s absent=%s", grade.label, date, present, absent)
        self.save(new_data)
        return new_data


def serialize(data: Mapping[Grade, Mapping[str, DailyRecord]]) -> str:
    payload = {
        grade.value: {date: record.to_dict() for date, record in data.get(grade, {}).items()}
        for grade in GRADES
    }
    return json.dumps(payload)


def deserialize(raw: str) -> AttendanceData:
    payload = json.loads(raw)
    if not isinstance(payload, dict):
        raise ValueError("Attendance snapshot must be a JSON object.")

    data = default_attendance_data()
    for grade_label, dates in payload.items():
        try:
            grade = Grade(grade_label)
        except ValueError:
            logger.warning("Ignoring unknown grade %r in attendance snapshot", grade_label)
            continue

        if not isinstance(dates, dict):
            logger.warning("Ignoring malformed entries for %s", grade_label)
            continue

        for date, entry in dates.items():
            record = _parse_record(entry)
            if record is None or not _is_iso_date(date):
                logger.warning("Skipping malformed record for %s on %r", grade_label, date)
                continue
            data[grade][date] = record

    return data


def _parse_record(entry: Any) -> DailyRecord | None:
    if not isinstance(entry, dict):
        return None

    present = entry.get("present")
    absent = entry.get("absent")
    for value in (present, absent):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        if isinstance(value, float) and not math.isfinite(value):
            return None
        if value < 0:
            return None
    return DailyRecord(present=int(present), absent=int(absent))


def _is_iso_date(value: str) -> bool:
    try:
        parse_iso_date(value)
    except InvalidDate:
        return False
    return True
