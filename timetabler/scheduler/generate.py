from __future__ import annotations

import logging
from typing import List, Mapping, Sequence, Tuple

from ..data.registry import OccupancyLedger
from ..models import ScheduleCell, SchoolClass, TimeSlot, Timetable


def fill_schedule(
    tt: Timetable,
    ledger: OccupancyLedger,
    classes: Sequence[SchoolClass],
    days: Sequence[str],
    slots: Sequence[TimeSlot],
    teacher_lookup: Mapping[str, str],
) -> Tuple[Timetable, List[str]]:
    """Round-robin fill of every (day, slot) for each class.

    Classes are handled in input order. Each class keeps a cursor into its
    subject list; for every slot up to N subjects are tried starting at the
    cursor, and the first one whose effective teacher is free (or who has no
    teacher) is placed. The cursor then moves one step from where it was.
    When every candidate's teacher is busy the slot becomes a Break and the
    cursor stays put.
    """
    logger = logging.getLogger(__name__)
    audit: List[str] = []

    for cls in classes:
        subjects = list(cls.subjects)
        if not subjects:
            logger.info(f"Skip {cls.id}: no subjects")
            audit.append(f"{cls.id}: skipped (no subjects)")
            continue
        tt.init_class(cls.id, days)
        n = len(subjects)
        subject_index = 0
        placed = breaks = 0
        for day in days:
            for slot in slots:
                cell: ScheduleCell | None = None
                for attempts in range(n):
                    subj = subjects[(subject_index + attempts) % n]
                    teacher_id = cls.effective_teacher(subj)
                    if teacher_id is None or not ledger.is_busy(teacher_id, day, slot.id):
                        cell = ScheduleCell(
                            subject_id=subj.id,
                            subject_name=subj.name,
                            teacher_id=teacher_id,
                            teacher_name=teacher_lookup.get(teacher_id, "") if teacher_id else "",
                        )
                        subject_index = (subject_index + 1) % n
                        break
                if cell is None:
                    cell = ScheduleCell.break_cell()
                    breaks += 1
                else:
                    ledger.place(cell.teacher_id, cls.id, day, slot.id)
                    placed += 1
                tt.place(cls.id, day, slot.id, cell)
                logger.debug(f"Fill {cls.id} {day} {slot.id} -> {cell.subject_name} – {cell.teacher_name}")
        logger.info(f"Generated {cls.id}: {placed} placed, {breaks} break(s)")
        audit.append(f"{cls.id}: {placed} placed, {breaks} break(s)")
    return tt, audit


def generate(
    classes: Sequence[SchoolClass],
    days: Sequence[str],
    slots: Sequence[TimeSlot],
    teacher_lookup: Mapping[str, str] | None = None,
) -> Timetable:
    tt, _ = fill_schedule(Timetable(), OccupancyLedger(), classes, days, slots, teacher_lookup or {})
    return tt


def generate_with_audit(
    classes: Sequence[SchoolClass],
    days: Sequence[str],
    slots: Sequence[TimeSlot],
    teacher_lookup: Mapping[str, str] | None = None,
) -> Tuple[Timetable, List[str]]:
    return fill_schedule(Timetable(), OccupancyLedger(), classes, days, slots, teacher_lookup or {})
