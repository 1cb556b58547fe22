from __future__ import annotations

import sys
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from school_attendance.data import JsonKeyValueStore  # noqa: E402
from school_attendance.services import AttendanceStore  # noqa: E402


class MemoryBackend:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})
        self.writes = 0

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.writes += 1
        self.values[key] = value


@pytest.fixture
def memory_backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def store(memory_backend: MemoryBackend) -> AttendanceStore:
    attendance_store = AttendanceStore(memory_backend)
    attendance_store.load()
    return attendance_store


@pytest.fixture
def file_store(tmp_path: Path) -> AttendanceStore:
    attendance_store = AttendanceStore(JsonKeyValueStore(tmp_path / "attendance_store.json"))
    attendance_store.load()
    return attendance_store
