from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from ..errors import StoreError
from ..models import ClassSchedule, SchoolClass, TimeSlot, Timetable
from ..models.timetable import schedule_to_dict
from .settings import TimetableSettings

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class TimetableStore:
    """JSON documents on disk: one per class timetable plus the settings document."""

    def __init__(self, root: Path):
        self.root = root
        self.timetables_dir = root / "timetables"
        self.settings_path = root / "settings" / "timetable.json"

    def _read(self, path: Path) -> Dict[str, Any] | None:
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StoreError(f"cannot read {path}: {e}") from e

    def _merge_write(self, path: Path, doc: Dict[str, Any]) -> Dict[str, Any]:
        # Top-level keys overwrite, everything else already stored is kept
        merged = dict(self._read(path) or {})
        merged.update(doc)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(merged, f, indent=2)
        tmp.replace(path)
        return merged

    def timetable_path(self, class_id: str) -> Path:
        return self.timetables_dir / f"{class_id}.json"

    def save_timetable(
        self,
        cls: SchoolClass,
        schedule: ClassSchedule,
        days: List[str],
        slots: List[TimeSlot],
    ) -> Dict[str, Any]:
        doc = {
            "classId": cls.id,
            "className": cls.label,
            "schedule": schedule_to_dict(schedule),
            "days": list(days),
            "slots": [s.to_dict() for s in slots],
            "updatedAt": _now(),
        }
        try:
            return self._merge_write(self.timetable_path(cls.id), doc)
        except OSError as e:
            raise StoreError(f"cannot write timetable for {cls.id}: {e}", [cls.id]) from e

    def save_all(
        self,
        tt: Timetable,
        classes: List[SchoolClass],
        days: List[str],
        slots: List[TimeSlot],
    ) -> List[str]:
        saved: List[str] = []
        failed: List[str] = []
        for c in classes:
            if c.id not in tt:
                continue
            try:
                self.save_timetable(c, tt.schedule_for(c.id), days, slots)
                saved.append(c.id)
            except StoreError as e:
                logger.error(f"Failed to save timetable {c.id}: {e}")
                failed.append(c.id)
        if failed:
            raise StoreError(f"failed to save {len(failed)} timetable(s): {', '.join(failed)}", failed)
        logger.info(f"Saved {len(saved)} timetable document(s) to {self.timetables_dir}")
        return saved

    def load_timetable(self, class_id: str) -> Dict[str, Any] | None:
        return self._read(self.timetable_path(class_id))

    def load_all(self) -> Dict[str, Dict[str, Any]]:
        out: Dict[str, Dict[str, Any]] = {}
        if not self.timetables_dir.exists():
            return out
        for p in sorted(self.timetables_dir.glob("*.json")):
            doc = self._read(p)
            if doc is not None:
                out[str(doc.get("classId", p.stem))] = doc
        return out

    def load_settings(self) -> TimetableSettings | None:
        doc = self._read(self.settings_path)
        return TimetableSettings.from_dict(doc) if doc is not None else None

    def save_settings(self, settings: TimetableSettings) -> None:
        try:
            self._merge_write(self.settings_path, settings.to_dict())
        except OSError as e:
            raise StoreError(f"cannot write settings: {e}") from e
        logger.info(f"Saved timetable settings to {self.settings_path}")
