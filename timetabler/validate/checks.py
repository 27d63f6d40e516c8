from __future__ import annotations

from collections import Counter, defaultdict
from typing import Dict, List, Sequence

from ..models import TimeSlot, Timetable


def validate_all(
    tt: Timetable,
    days: Sequence[str],
    slots: Sequence[TimeSlot],
) -> Dict[str, object]:
    report: Dict[str, object] = {}

    # Teacher double-booking across classes
    teacher_slots: Dict[tuple, List[str]] = defaultdict(list)
    for (cid, day, sid), cell in tt.all():
        if cell.teacher_id:
            teacher_slots[(cell.teacher_id, day, sid)].append(cid)
    clashes = {f"{t}:{d}:{s}": cids for (t, d, s), cids in teacher_slots.items() if len(cids) > 1}
    report["clash_count"] = len(clashes)
    report["clashes"] = clashes

    # Every configured (day, slot) must hold a cell
    missing: List[str] = []
    for cid in tt.class_ids():
        for d in days:
            for s in slots:
                if tt.get(cid, d, s.id) is None:
                    missing.append(f"{cid} {d} {s.id}")
    report["missing_cells"] = missing

    break_count: Dict[str, int] = {}
    subject_counts: Dict[str, Dict[str, int]] = {}
    for cid in tt.class_ids():
        ctr: Counter = Counter()
        breaks = 0
        for (c, _, _), cell in tt.all():
            if c != cid:
                continue
            if cell.is_break:
                breaks += 1
            else:
                ctr[cell.subject_name] += 1
        break_count[cid] = breaks
        subject_counts[cid] = dict(ctr)
    report["break_count"] = break_count
    report["subject_counts"] = subject_counts
    return report
