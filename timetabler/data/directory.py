from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from ..models import SchoolClass, Subject, Teacher, User
from .loader import LoadedData, load_data


def _opt(value: Any) -> str | None:
    return str(value) if value else None


def _text(value: Any) -> str:
    # JSON null reads as an empty string, never "None"
    return str(value) if value is not None else ""


class Directory:
    """Read-only snapshot of classes, subjects and users."""

    def __init__(self, data: LoadedData):
        self.classes: List[SchoolClass] = [
            SchoolClass(
                id=str(c["id"]),
                name=_text(c.get("name")),
                section=_text(c.get("section")),
                grade=_text(c.get("grade")),
                teacher_id=_opt(c.get("teacherId")),
            )
            for c in data.classes
        ]
        self.subjects: List[Subject] = [
            Subject(
                id=str(s["id"]),
                name=_text(s.get("name")),
                class_id=_text(s.get("classId")),
                teacher_id=_opt(s.get("teacherId")),
                code=_text(s.get("code")),
            )
            for s in data.subjects
        ]
        self.users: List[User] = [
            User(
                id=str(u["id"]),
                name=_text(u.get("name")),
                role=_text(u.get("role")),
                class_id=_opt(u.get("classId")),
                parent_id=_opt(u.get("parentId")),
            )
            for u in data.users
        ]

    def subjects_by_class(self) -> Dict[str, List[Subject]]:
        out: Dict[str, List[Subject]] = {}
        for s in self.subjects:
            out.setdefault(s.class_id, []).append(s)
        return out

    def classes_with_subjects(self) -> List[SchoolClass]:
        by_class = self.subjects_by_class()
        for c in self.classes:
            c.subjects = list(by_class.get(c.id, []))
        return self.classes

    def class_by_id(self, class_id: str) -> SchoolClass | None:
        for c in self.classes:
            if c.id == class_id:
                return c
        return None

    def teachers(self) -> List[Teacher]:
        return [Teacher(u.id, u.name) for u in self.users if u.role == "teacher"]

    def teacher_names(self) -> Dict[str, str]:
        return {t.id: t.name for t in self.teachers()}

    def classes_for_teacher(self, teacher_id: str) -> List[SchoolClass]:
        # Class-teacher classes first, then classes of taught subjects
        out = [c for c in self.classes if c.teacher_id == teacher_id]
        seen = {c.id for c in out}
        for s in self.subjects:
            if s.teacher_id != teacher_id or not s.class_id or s.class_id in seen:
                continue
            c = self.class_by_id(s.class_id)
            if c is not None:
                out.append(c)
                seen.add(c.id)
        return out

    def class_for_student(self, user_id: str) -> SchoolClass | None:
        for u in self.users:
            if u.id == user_id:
                return self.class_by_id(u.class_id) if u.class_id else None
        return None

    def children_of(self, parent_id: str) -> List[User]:
        return [u for u in self.users if u.role == "student" and u.parent_id == parent_id]


def load_directory(data_dir: Path) -> Directory:
    return Directory(load_data(data_dir))
