from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import List, Sequence

from ..models import SchoolClass, TimeSlot, Timetable

HEADER = "Class,Day,PeriodStart,PeriodEnd,Subject,Teacher"


def _row(fields: Sequence[str]) -> str:
    # Names may contain commas or quotes, so fields are quoted as needed
    buf = io.StringIO()
    csv.writer(buf, lineterminator="").writerow(fields)
    return buf.getvalue()


def csv_blocks(
    tt: Timetable,
    classes: Sequence[SchoolClass],
    days: Sequence[str],
    slots: Sequence[TimeSlot],
) -> str:
    lines: List[str] = []
    for c in classes:
        if c.id not in tt:
            continue
        lines.append(HEADER)
        for d in days:
            for s in slots:
                cell = tt.get(c.id, d, s.id)
                if cell is None:
                    lines.append(_row([c.label, d, s.start, s.end, "", ""]))
                else:
                    lines.append(_row([c.label, d, s.start, s.end, cell.subject_name, cell.teacher_name]))
        lines.append("")  # blank line
    return "\n".join(lines)


def write_csv_blocks(text: str, outputs_dir: Path) -> Path:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    path = outputs_dir / "timetable.csv"
    with path.open("w", encoding="utf-8") as f:
        f.write(text)
    return path
