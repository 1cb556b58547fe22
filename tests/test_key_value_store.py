from __future__ import annotations

from pathlib import Path

import pytest

from school_attendance.data import JsonKeyValueStore


def test_set_then_get_survives_reopen(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "store.json"
    JsonKeyValueStore(path).set("greeting", "hello")

    reopened = JsonKeyValueStore(path)

    assert reopened.get("greeting") == "hello"
    assert reopened.get("missing") is None
    assert not path.with_name("store.json.tmp").exists()


def test_unreadable_file_raises_on_get(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text("[1, 2", encoding="utf-8")

    with pytest.raises(ValueError):
        JsonKeyValueStore(path).get("anything")


def test_set_replaces_unreadable_file(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text("not json", encoding="utf-8")
    kv_store = JsonKeyValueStore(path)

    kv_store.set("key", "value")

    assert JsonKeyValueStore(path).get("key") == "value"
