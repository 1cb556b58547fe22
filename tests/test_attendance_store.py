from __future__ import annotations

import json
import logging

from school_attendance.data import JsonKeyValueStore
from school_attendance.models import GRADES, DailyRecord, Grade
from school_attendance.services import ATTENDANCE_STORAGE_KEY, AttendanceStore

from conftest import MemoryBackend


class BrokenBackend:
    def get(self, key: str) -> str | None:
        raise OSError("disk unavailable")

    def set(self, key: str, value: str) -> None:
        raise OSError("disk unavailable")


def test_load_without_snapshot_has_every_grade(store):
    assert set(store.data) == set(GRADES)
    assert all(dates == {} for dates in store.data.values())


def test_round_trip_through_json_file(tmp_path):
    path = tmp_path / "attendance_store.json"
    writer = AttendanceStore(JsonKeyValueStore(path))
    writer.load()
    writer.commit(Grade.SIXTH, "2024-06-01", 15, 4)
    writer.commit(Grade.TENTH, "2024-06-02", 60, 6)

    reader = AttendanceStore(JsonKeyValueStore(path))
    loaded = reader.load()

    assert loaded == writer.data
    assert loaded[Grade.SIXTH]["2024-06-01"] == DailyRecord(present=15, absent=4)
    assert loaded[Grade.EIGHTH] == {}


def test_load_backfills_missing_grades_and_skips_bad_entries(caplog):
    snapshot = {
        "7th Grade": {
            "2024-01-05": {"present": 40, "absent": 8},
            "2024-01-06": {"present": "many", "absent": 1},
            "not-a-date": {"present": 1, "absent": 1},
        },
        "11th Grade": {"2024-01-05": {"present": 1, "absent": 1}},
    }
    backend = MemoryBackend({ATTENDANCE_STORAGE_KEY: json.dumps(snapshot)})
    attendance_store = AttendanceStore(backend)

    with caplog.at_level(logging.WARNING):
        data = attendance_store.load()

    assert set(data) == set(GRADES)
    assert data[Grade.SEVENTH] == {"2024-01-05": DailyRecord(present=40, absent=8)}
    assert "11th Grade" in caplog.text


def test_malformed_snapshot_falls_back_to_defaults(caplog):
    backend = MemoryBackend({ATTENDANCE_STORAGE_KEY: "{not json"})
    attendance_store = AttendanceStore(backend)

    with caplog.at_level(logging.ERROR):
        data = attendance_store.load()

    assert data == {grade: {} for grade in GRADES}
    assert "Failed to load attendance data" in caplog.text


def test_backend_failures_are_absorbed(caplog):
    attendance_store = AttendanceStore(BrokenBackend())

    with caplog.at_level(logging.ERROR):
        attendance_store.load()
        data = attendance_store.commit(Grade.NINTH, "2024-03-01", 50, 6)

    assert data[Grade.NINTH]["2024-03-01"] == DailyRecord(present=50, absent=6)
    assert attendance_store.data is data
    assert "Failed to save attendance data" in caplog.text


def test_commit_only_replaces_one_entry(store, memory_backend):
    store.commit(Grade.SIXTH, "2024-01-01", 10, 2)
    store.commit(Grade.SIXTH, "2024-01-02", 11, 1)
    store.commit(Grade.SEVENTH, "2024-01-01", 30, 5)
    before = store.data
    writes_before = memory_backend.writes

    after = store.commit(Grade.SIXTH, "2024-01-02", 12, 0)

    assert after is not before
    assert after[Grade.SIXTH]["2024-01-02"] == DailyRecord(present=12, absent=0)
    assert after[Grade.SIXTH]["2024-01-01"] is before[Grade.SIXTH]["2024-01-01"]
    assert after[Grade.SEVENTH] is before[Grade.SEVENTH]
    assert before[Grade.SIXTH]["2024-01-02"] == DailyRecord(present=11, absent=1)
    assert memory_backend.writes == writes_before + 1


def test_persisted_format_uses_grade_labels(store, memory_backend):
    store.commit(Grade.SIXTH, "2024-06-01", 15, 4)

    payload = json.loads(memory_backend.values[ATTENDANCE_STORAGE_KEY])

    assert payload["6th Grade"] == {"2024-06-01": {"present": 15, "absent": 4}}
    assert payload["10th Grade"] == {}


def test_non_object_snapshot_falls_back_to_defaults(caplog):
    backend = MemoryBackend({ATTENDANCE_STORAGE_KEY: "[]"})
    attendance_store = AttendanceStore(backend)

    with caplog.at_level(logging.ERROR):
        data = attendance_store.load()

    assert data == {grade: {} for grade in GRADES}
    assert "Failed to load attendance data" in caplog.text


def test_non_finite_counts_are_skipped_one_by_one():
    raw = (
        '{"6th Grade": {"2024-01-01": {"present": 1e400, "absent": 1}},'
        ' "7th Grade": {"2024-01-05": {"present": 40, "absent": 8},'
        ' "2024-01-06": {"present": NaN, "absent": 1},'
        ' "2024-01-07": {"present": 3, "absent": -Infinity}}}'
    )
    attendance_store = AttendanceStore(MemoryBackend({ATTENDANCE_STORAGE_KEY: raw}))

    data = attendance_store.load()

    assert data[Grade.SIXTH] == {}
    assert data[Grade.SEVENTH] == {"2024-01-05": DailyRecord(present=40, absent=8)}


def test_deeply_nested_snapshot_does_not_escape_load(caplog):
    raw = "[" * 200000 + "]" * 200000
    attendance_store = AttendanceStore(MemoryBackend({ATTENDANCE_STORAGE_KEY: raw}))

    with caplog.at_level(logging.ERROR):
        data = attendance_store.load()

    assert data == {grade: {} for grade in GRADES}


def test_date_keys_must_be_exact_iso_dates():
    snapshot = {
        "8th Grade": {
            "20240101": {"present": 1, "absent": 1},
            " 2024-01-02": {"present": 2, "absent": 2},
            "2024-01-03": {"present": 3, "absent": 3},
        }
    }
    attendance_store = AttendanceStore(MemoryBackend({ATTENDANCE_STORAGE_KEY: json.dumps(snapshot)}))

    data = attendance_store.load()

    assert list(data[Grade.EIGHTH]) == ["2024-01-03"]
