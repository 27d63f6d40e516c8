from __future__ import annotations

import logging
from typing import Mapping

from ..models import ClassSchedule, ScheduleCell, Subject

logger = logging.getLogger(__name__)


def edit_cell(
    schedule: ClassSchedule,
    day: str,
    slot_id: str,
    subject: Subject | None,
    teacher_lookup: Mapping[str, str] | None = None,
) -> ClassSchedule:
    """Return a copy of ``schedule`` with one cell replaced.

    No teacher-busy check runs here: a manual edit is taken as intended even
    when it double-books a teacher. Only the subject's own teacher is used,
    the class teacher is not filled in. ``None`` clears the cell to a Break.
    """
    lookup = teacher_lookup or {}
    out: ClassSchedule = {d: dict(by_slot) for d, by_slot in schedule.items()}
    if subject is not None:
        cell = ScheduleCell(
            subject_id=subject.id,
            subject_name=subject.name,
            teacher_id=subject.teacher_id or None,
            teacher_name=lookup.get(subject.teacher_id, "") if subject.teacher_id else "",
        )
    else:
        cell = ScheduleCell.break_cell()
    out.setdefault(day, {})[slot_id] = cell
    logger.info(f"Edit {day} {slot_id} -> {cell.subject_name}")
    return out
