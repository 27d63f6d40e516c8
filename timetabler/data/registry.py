from __future__ import annotations

from typing import Dict, Tuple


class OccupancyLedger:
    def __init__(self):
        # (teacher_id, day, slot_id) -> class_id holding that teacher
        self.teacher_busy: Dict[Tuple[str, str, str], str] = {}

    def is_busy(self, teacher: str | None, day: str, slot_id: str) -> bool:
        if teacher is None:
            return False
        return (teacher, day, slot_id) in self.teacher_busy

    def place(self, teacher: str | None, class_id: str, day: str, slot_id: str) -> None:
        # Teacherless placements never occupy anyone
        if teacher is not None:
            self.teacher_busy.setdefault((teacher, day, slot_id), class_id)
