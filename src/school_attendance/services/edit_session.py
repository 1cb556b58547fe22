from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Literal, Mapping, Union

from school_attendance.models import EMPTY_RECORD, GRADES, AttendanceData, DailyRecord, Grade, class_strength
from school_attendance.services.attendance_store import AttendanceStore
from school_attendance.utils import shift_iso_date, today_iso

logger = logging.getLogger(__name__)

Field = Literal["present", "absent"]
EDITABLE_FIELDS: tuple[str, ...] = ("present", "absent")

_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")


class EditSessionError(RuntimeError):
    """Raised when an edit action does not apply to the current editing state."""


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class EditingRow:
    grade: Grade
    buffer: DailyRecord


@dataclass(frozen=True)
class BulkEditing:
    buffers: Mapping[Grade, DailyRecord] = field(default_factory=dict)


EditState = Union[Idle, EditingRow, BulkEditing]

IDLE = Idle()


def coerce_count(value: object) -> int:
    """Turn raw entry text into a count; anything unparseable becomes ``0``."""

    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value and abs(value) != float("inf") else 0
    if isinstance(value, str):
        match = _LEADING_INTEGER.match(value)
        if match:
            return int(match.group(1))
    return 0


def clamp_count(value: int, grade: Grade) -> int:
    return max(0, min(value, class_strength(grade)))


class EditSession:
    """Pending edits for the selected date, layered over an :class:`AttendanceStore`.

    Either one grade row is being edited, or every grade is being edited at
    once (bulk mode). Changing the selected date discards whatever is pending.
    """

    def __init__(self, store: AttendanceStore, *, selected_date: str | None = None) -> None:
        self._store = store
        self._selected_date = selected_date or today_iso()
        self._state: EditState = IDLE

    # ------------------------------------------------------------------
    # State inspection
    # ------------------------------------------------------------------
    @property
    def selected_date(self) -> str:
        return self._selected_date

    @property
    def state(self) -> EditState:
        return self._state

    @property
    def is_bulk(self) -> bool:
        return isinstance(self._state, BulkEditing)

    @property
    def editing_grade(self) -> Grade | None:
        if isinstance(self._state, EditingRow):
            return self._state.grade
        return None

    def is_editing(self, grade: Grade) -> bool:
        return self.is_bulk or self.editing_grade == grade

    def stored_record(self, grade: Grade) -> DailyRecord:
        return self._store.record(grade, self._selected_date) or EMPTY_RECORD

    def pending(self, grade: Grade) -> DailyRecord | None:
        state = self._state
        if isinstance(state, EditingRow) and state.grade == grade:
            return state.buffer
        if isinstance(state, BulkEditing):
            return state.buffers.get(grade)
        return None

    def displayed_record(self, grade: Grade) -> DailyRecord:
        return self.pending(grade) or self.stored_record(grade)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    def edit_field(self, grade: Grade, field_name: Field, value: object) -> DailyRecord:
        if field_name not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown attendance field: {field_name!r}")

        count = coerce_count(value)
        state = self._state

        if isinstance(state, BulkEditing):
            current = state.buffers.get(grade) or self.stored_record(grade)
            updated = replace(current, **{field_name: count})
            buffers = dict(state.buffers)
            buffers[grade] = updated
            self._state = BulkEditing(MappingProxyType(buffers))
            return updated

        if isinstance(state, EditingRow) and state.grade == grade:
            current = state.buffer
        else:
            if isinstance(state, EditingRow):
                logger.debug("Discarding pending edit for %s", state.grade.label)
            current = self.stored_record(grade)

        updated = replace(current, **{field_name: count})
        self._state = EditingRow(grade=grade, buffer=updated)
        return updated

    def commit_row(self, grade: Grade) -> AttendanceData:
        state = self._state
        if not isinstance(state, EditingRow) or state.grade != grade:
            raise EditSessionError(f"{grade.label} is not being edited on its own.")

        data = self._commit(grade, state.buffer)
        self._state = IDLE
        return data

    def begin_row(self, grade: Grade) -> DailyRecord:
        """Start editing one row with its stored values, dropping any other pending edit."""
        record = self.stored_record(grade)
        self._state = EditingRow(grade=grade, buffer=record)
        return record

    def begin_bulk(self) -> None:
        buffers = {grade: self.stored_record(grade) for grade in GRADES}
        self._state = BulkEditing(MappingProxyType(buffers))

    def save_all(self) -> AttendanceData:
        state = self._state
        if not isinstance(state, BulkEditing):
            raise EditSessionError("Save all is only available while bulk editing.")

        data = self._store.data
        for grade in GRADES:
            buffered = state.buffers.get(grade)
            if buffered is not None:
                data = self._commit(grade, buffered)

        self._state = IDLE
        return data

    def cancel(self) -> None:
        self._state = IDLE

    # ------------------------------------------------------------------
    # Date navigation
    # ------------------------------------------------------------------
    def select_date(self, date: str) -> None:
        if not isinstance(self._state, Idle):
            logger.debug("Discarding pending edits for %s", self._selected_date)
        self._selected_date = date
        self._state = IDLE

    def go_to_previous_day(self) -> str:
        self.select_date(shift_iso_date(self._selected_date, -1))
        return self._selected_date

    def go_to_next_day(self) -> str:
        self.select_date(shift_iso_date(self._selected_date, 1))
        return self._selected_date

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _commit(self, grade: Grade, record: DailyRecord) -> AttendanceData:
        present = clamp_count(record.present, grade)
        absent = clamp_count(record.absent, grade)
        if present + absent > class_strength(grade):
            logger.info(
                "%s on %s records %s students against a strength of %s",
                grade.label,
                self._selected_date,
                present + absent,
                class_strength(grade),
            )
        return self._store.commit(grade, self._selected_date, present, absent)
