from __future__ import annotations

import json
from pathlib import Path

import pytest

CLASSES = [
    {"id": "c1", "name": "Grade 5", "section": "A", "teacherId": "t1"},
    {"id": "c2", "name": "Grade 5", "section": "B", "teacherId": "t2"},
    {"id": "c3", "name": "Grade 6", "section": "A"},
]
SUBJECTS = [
    {"id": "s1", "name": "Mathematics", "classId": "c1", "teacherId": "t3"},
    {"id": "s2", "name": "English", "classId": "c1"},
    {"id": "s3", "name": "Mathematics", "classId": "c2", "teacherId": "t3"},
    {"id": "s4", "name": "Urdu", "classId": "c2"},
]
USERS = [
    {"id": "t1", "name": "Ms. Ayesha Khan", "role": "teacher"},
    {"id": "t2", "name": "Mr. Bilal Ahmed", "role": "teacher"},
    {"id": "t3", "name": "Mr. Usman Tariq", "role": "teacher"},
    {"id": "p1", "name": "Mr. Kamran Ali", "role": "parent"},
    {"id": "u1", "name": "Ali Kamran", "role": "student", "classId": "c1", "parentId": "p1"},
    {"id": "u2", "name": "Zara Kamran", "role": "student", "classId": "c2", "parentId": "p1"},
    {"id": "u3", "name": "Omar Farooq", "role": "student"},
]


def write_data(root: Path, classes=CLASSES, subjects=SUBJECTS, users=USERS) -> Path:
    data_dir = root / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    for name, rows in (("classes", classes), ("subjects", subjects), ("users", users)):
        (data_dir / f"{name}.json").write_text(json.dumps(rows), encoding="utf-8")
    return data_dir


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    write_data(tmp_path)
    return tmp_path
