from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..errors import SettingsError
from ..models import TimeSlot

ALL_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
DEFAULT_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
DEFAULT_SLOTS = [
    TimeSlot("1", "08:00", "08:40"),
    TimeSlot("2", "08:45", "09:25"),
    TimeSlot("3", "09:30", "10:10"),
    TimeSlot("4", "10:20", "11:00"),
    TimeSlot("5", "11:05", "11:45"),
    TimeSlot("6", "11:50", "12:30"),
]

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _check_time(value: str) -> str:
    if not _TIME_RE.match(value):
        raise SettingsError(f"invalid time {value!r}, expected HH:MM")
    return value


def slot_from_record(raw: Any) -> TimeSlot:
    if not isinstance(raw, dict) or raw.get("id") in (None, ""):
        raise SettingsError(f"malformed slot record {raw!r}, expected an id")
    return TimeSlot.from_dict(raw)


@dataclass
class TimetableSettings:
    days: List[str] = field(default_factory=lambda: list(DEFAULT_DAYS))
    slots: List[TimeSlot] = field(default_factory=lambda: list(DEFAULT_SLOTS))

    def toggle_day(self, day: str) -> None:
        if day not in ALL_DAYS:
            raise SettingsError(f"unknown day {day!r}")
        chosen = set(self.days)
        if day in chosen:
            chosen.remove(day)
        else:
            chosen.add(day)
        self.days = [d for d in ALL_DAYS if d in chosen]

    def add_slot(self, start: str = "13:00", end: str = "13:40") -> TimeSlot:
        slot = TimeSlot(str(len(self.slots) + 1), _check_time(start), _check_time(end))
        self.slots.append(slot)
        return slot

    def remove_slot(self, slot_id: str) -> None:
        if slot_id not in self.slot_ids():
            raise SettingsError(f"unknown slot {slot_id!r}")
        if len(self.slots) <= 1:
            raise SettingsError("at least one slot is required")
        kept = [s for s in self.slots if s.id != slot_id]
        # Ids are positional, so renumber after a removal
        self.slots = [TimeSlot(str(i), s.start, s.end) for i, s in enumerate(kept, start=1)]

    def update_slot(self, slot_id: str, start: str | None = None, end: str | None = None) -> TimeSlot:
        for i, s in enumerate(self.slots):
            if s.id == slot_id:
                new = TimeSlot(
                    s.id,
                    _check_time(start) if start is not None else s.start,
                    _check_time(end) if end is not None else s.end,
                )
                self.slots[i] = new
                return new
        raise SettingsError(f"unknown slot {slot_id!r}")

    def slot_ids(self) -> List[str]:
        return [s.id for s in self.slots]

    def to_dict(self) -> Dict[str, Any]:
        return {"days": list(self.days), "slots": [s.to_dict() for s in self.slots]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> "TimetableSettings":
        # Empty or missing fields fall back to the defaults one by one
        data = data or {}
        if not isinstance(data, dict):
            raise SettingsError("settings document must be a JSON object")
        out = cls()
        days = data.get("days")
        if isinstance(days, list) and days:
            out.days = [str(d) for d in days]
        slots = data.get("slots")
        if isinstance(slots, list) and slots:
            out.slots = [slot_from_record(s) for s in slots]
        return out
