from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Subject:
    id: str
    name: str
    class_id: str
    teacher_id: str | None = None
    code: str = ""


@dataclass
class SchoolClass:
    id: str
    name: str
    section: str = ""
    grade: str = ""
    teacher_id: str | None = None
    subjects: List[Subject] = field(default_factory=list)

    @property
    def label(self) -> str:
        return f"{self.name} - {self.section}"

    def effective_teacher(self, subject: Subject) -> str | None:
        # Subject's own teacher first, then the class teacher
        return subject.teacher_id or self.teacher_id or None


@dataclass(frozen=True)
class Teacher:
    id: str
    name: str


@dataclass(frozen=True)
class User:
    id: str
    name: str
    role: str
    class_id: str | None = None
    parent_id: str | None = None
