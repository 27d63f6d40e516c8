from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class TimeSlot:
    id: str
    start: str
    end: str

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "start": self.start, "end": self.end}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TimeSlot":
        return cls(id=str(data["id"]), start=str(data.get("start") or ""), end=str(data.get("end") or ""))
