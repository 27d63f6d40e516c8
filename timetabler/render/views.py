from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from ..models import ScheduleCell, SchoolClass, TimeSlot, Timetable
from ..models.timetable import schedule_from_dict

PLACEHOLDER = "—"


@dataclass
class ViewCell:
    subject: str
    teacher: str = ""
    is_break: bool = False


@dataclass
class TimetableView:
    class_id: str
    class_name: str
    days: List[str]
    slots: List[TimeSlot]
    cells: Dict[str, Dict[str, ViewCell]] = field(default_factory=dict)

    def cell(self, day: str, slot_id: str) -> ViewCell:
        return self.cells.get(day, {}).get(slot_id) or ViewCell(PLACEHOLDER)


def _view_cell(cell: ScheduleCell, teacher_names: Mapping[str, str]) -> ViewCell:
    # Older documents may carry an id without a name
    name = cell.teacher_name or (teacher_names.get(cell.teacher_id, "") if cell.teacher_id else "")
    return ViewCell(cell.subject_name or PLACEHOLDER, name, cell.is_break)


def view_from_document(doc: Dict[str, Any], teacher_names: Mapping[str, str] | None = None) -> TimetableView:
    names = teacher_names or {}
    schedule = schedule_from_dict(doc.get("schedule") or {})
    view = TimetableView(
        class_id=str(doc.get("classId", "")),
        class_name=str(doc.get("className", "")),
        days=list(doc.get("days") or []),
        slots=[TimeSlot.from_dict(s) for s in doc.get("slots") or []],
    )
    for day, by_slot in schedule.items():
        view.cells[day] = {sid: _view_cell(c, names) for sid, c in by_slot.items()}
    return view


def view_from_timetable(
    tt: Timetable,
    cls: SchoolClass,
    days: Sequence[str],
    slots: Sequence[TimeSlot],
    teacher_names: Mapping[str, str] | None = None,
) -> TimetableView:
    names = teacher_names or {}
    view = TimetableView(cls.id, cls.label, list(days), list(slots))
    for day, by_slot in tt.schedules.get(cls.id, {}).items():
        view.cells[day] = {sid: _view_cell(c, names) for sid, c in by_slot.items()}
    return view


def teacher_sessions(docs: Iterable[Dict[str, Any]], teacher_id: str) -> List[Dict[str, str]]:
    """Every stored cell, across all classes, that puts ``teacher_id`` in front of a class."""
    out: List[Dict[str, str]] = []
    for doc in docs:
        schedule = schedule_from_dict(doc.get("schedule") or {})
        days = list(doc.get("days") or schedule.keys())
        slot_ids = [str(s["id"]) for s in doc.get("slots") or []]
        for day in days:
            by_slot = schedule.get(day, {})
            for sid in slot_ids or list(by_slot):
                cell = by_slot.get(sid)
                if cell is not None and cell.teacher_id == teacher_id:
                    out.append(
                        {
                            "classId": str(doc.get("classId", "")),
                            "className": str(doc.get("className", "")),
                            "day": day,
                            "slot": sid,
                            "subject": cell.subject_name,
                        }
                    )
    return out


def format_view(view: TimetableView) -> str:
    """Plain-text grid, one line per day."""
    lines = [view.class_name or view.class_id]
    head = ["Day / Slot"] + [f"{s.start} - {s.end}" for s in view.slots]
    lines.append(" | ".join(head))
    for day in view.days:
        row = [day]
        for s in view.slots:
            c = view.cell(day, s.id)
            row.append(f"{c.subject} ({c.teacher})" if c.teacher else c.subject)
        lines.append(" | ".join(row))
    return "\n".join(lines)
