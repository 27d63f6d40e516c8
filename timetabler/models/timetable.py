from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

from .cell import ScheduleCell


# day -> slot_id -> cell
ClassSchedule = Dict[str, Dict[str, ScheduleCell]]

Key = Tuple[str, str, str]  # (class_id, day, slot_id)


@dataclass
class Timetable:
    schedules: Dict[str, ClassSchedule] = field(default_factory=dict)

    def init_class(self, class_id: str, days: Iterable[str]) -> None:
        self.schedules[class_id] = {d: {} for d in days}

    def place(self, class_id: str, day: str, slot_id: str, cell: ScheduleCell) -> None:
        self.schedules.setdefault(class_id, {}).setdefault(day, {})[slot_id] = cell

    def get(self, class_id: str, day: str, slot_id: str) -> ScheduleCell | None:
        return self.schedules.get(class_id, {}).get(day, {}).get(slot_id)

    def class_ids(self) -> List[str]:
        return list(self.schedules)

    def schedule_for(self, class_id: str) -> ClassSchedule:
        return self.schedules[class_id]

    def all(self) -> Iterable[Tuple[Key, ScheduleCell]]:
        for cid, by_day in self.schedules.items():
            for day, by_slot in by_day.items():
                for sid, cell in by_slot.items():
                    yield (cid, day, sid), cell

    def __contains__(self, class_id: object) -> bool:
        return class_id in self.schedules


def schedule_to_dict(schedule: ClassSchedule) -> Dict[str, Dict[str, Dict[str, Any]]]:
    return {day: {sid: cell.to_dict() for sid, cell in by_slot.items()} for day, by_slot in schedule.items()}


def schedule_from_dict(data: Dict[str, Dict[str, Dict[str, Any]]]) -> ClassSchedule:
    return {
        day: {sid: ScheduleCell.from_dict(raw) for sid, raw in (by_slot or {}).items()}
        for day, by_slot in (data or {}).items()
    }
