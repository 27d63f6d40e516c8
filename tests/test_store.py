from __future__ import annotations

import json
from pathlib import Path

import pytest

from timetabler.data.settings import TimetableSettings
from timetabler.data.store import TimetableStore
from timetabler.errors import StoreError
from timetabler.models import SchoolClass, Subject, TimeSlot
from timetabler.scheduler import generate

SLOTS = [TimeSlot("1", "08:00", "08:40")]


def _classes():
    return [
        SchoolClass("c1", "Grade 5", "A", subjects=[Subject("a", "Maths", "c1", "t1")]),
        SchoolClass("c2", "Grade 5", "B", subjects=[Subject("b", "Urdu", "c2")]),
        SchoolClass("c3", "Grade 6", "A"),
    ]


def test_save_all_writes_one_document_per_generated_class(tmp_path: Path) -> None:
    store = TimetableStore(tmp_path)
    classes = _classes()
    tt = generate(classes, ["Monday"], SLOTS, {"t1": "One"})
    saved = store.save_all(tt, classes, ["Monday"], SLOTS)
    assert saved == ["c1", "c2"]
    doc = store.load_timetable("c1")
    assert doc["className"] == "Grade 5 - A"
    assert doc["days"] == ["Monday"]
    assert doc["slots"] == [{"id": "1", "start": "08:00", "end": "08:40"}]
    assert doc["schedule"]["Monday"]["1"] == {
        "subjectId": "a",
        "subjectName": "Maths",
        "teacherId": "t1",
        "teacherName": "One",
    }
    assert "updatedAt" in doc
    assert store.load_timetable("c3") is None


def test_save_merges_into_existing_document(tmp_path: Path) -> None:
    store = TimetableStore(tmp_path)
    path = store.timetable_path("c1")
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps({"classId": "c1", "note": "keep me", "schedule": {"Sunday": {}}}))
    classes = _classes()
    tt = generate(classes, ["Monday"], SLOTS, {})
    store.save_timetable(classes[0], tt.schedule_for("c1"), ["Monday"], SLOTS)
    doc = store.load_timetable("c1")
    assert doc["note"] == "keep me"
    assert list(doc["schedule"]) == ["Monday"]


def test_partial_failure_is_reported_after_all_writes(tmp_path: Path) -> None:
    store = TimetableStore(tmp_path)
    # A directory where c1's document should be makes that write fail
    store.timetable_path("c1").mkdir(parents=True)
    classes = _classes()
    tt = generate(classes, ["Monday"], SLOTS, {})
    with pytest.raises(StoreError) as exc:
        store.save_all(tt, classes, ["Monday"], SLOTS)
    assert exc.value.failed == ["c1"]
    assert store.load_timetable("c2")["classId"] == "c2"


def test_load_all(tmp_path: Path) -> None:
    store = TimetableStore(tmp_path)
    assert store.load_all() == {}
    classes = _classes()
    store.save_all(generate(classes, ["Monday"], SLOTS, {}), classes, ["Monday"], SLOTS)
    assert sorted(store.load_all()) == ["c1", "c2"]


def test_settings_round_trip(tmp_path: Path) -> None:
    store = TimetableStore(tmp_path)
    assert store.load_settings() is None
    settings = TimetableSettings()
    settings.toggle_day("Saturday")
    store.save_settings(settings)
    assert store.load_settings() == settings


def test_unreadable_document_raises_store_error(tmp_path: Path) -> None:
    store = TimetableStore(tmp_path)
    path = store.timetable_path("c1")
    path.parent.mkdir(parents=True)
    path.write_bytes(b'{"classId": "\xff"}')
    with pytest.raises(StoreError):
        store.load_timetable("c1")
