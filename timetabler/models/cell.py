from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

BREAK_NAME = "Break"


@dataclass(frozen=True)
class ScheduleCell:
    subject_id: str | None
    subject_name: str
    teacher_id: str | None = None
    teacher_name: str = ""

    @classmethod
    def break_cell(cls) -> "ScheduleCell":
        return cls(subject_id=None, subject_name=BREAK_NAME, teacher_id=None, teacher_name="")

    @property
    def is_break(self) -> bool:
        return self.subject_id is None

    def to_dict(self) -> Dict[str, Any]:
        # camelCase keys match the stored timetable documents
        return {
            "subjectId": self.subject_id,
            "subjectName": self.subject_name,
            "teacherId": self.teacher_id,
            "teacherName": self.teacher_name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScheduleCell":
        return cls(
            subject_id=data.get("subjectId"),
            subject_name=data.get("subjectName") or "",
            teacher_id=data.get("teacherId"),
            teacher_name=data.get("teacherName") or "",
        )
