from __future__ import annotations

from html import escape
from pathlib import Path
from typing import List, Sequence

from .views import TimetableView


def build_html(views: Sequence[TimetableView], title: str = "Class Timetables") -> str:
    def cell_html(view: TimetableView, day: str, sid: str) -> str:
        c = view.cell(day, sid)
        if c.is_break:
            return "<td class='break'><strong>BREAK</strong></td>"
        teacher = f"<br/><span class='teacher'>{escape(c.teacher)}</span>" if c.teacher else ""
        return f"<td><div class='cell'><span class='subj'>{escape(c.subject)}</span>{teacher}</div></td>"

    blocks: List[str] = []
    for v in views:
        head_cells = "".join(
            f"<th>{escape(s.id)}<br/><span class='time'>{escape(s.start)}–{escape(s.end)}</span></th>"
            for s in v.slots
        )
        rows_html = []
        for d in v.days:
            row_cells = "".join(cell_html(v, d, s.id) for s in v.slots)
            rows_html.append(f"<tr><th class='day'>{escape(d)}</th>{row_cells}</tr>")
        blocks.append(
            f"<section class='class'>"
            f"<h2>{escape(v.class_name or v.class_id)}</h2>"
            f"<table class='tt'>"
            f"<thead><tr><th class='corner'>Day / Slot</th>{head_cells}</tr></thead>"
            f"<tbody>{''.join(rows_html)}</tbody>"
            f"</table>"
            f"</section>"
        )

    style = """
    <style>
    body { font-family: system-ui, Arial, sans-serif; margin: 20px; color: #222; }
    .class { margin-bottom: 36px; page-break-inside: avoid; }
    .tt { border-collapse: collapse; width: 100%; table-layout: fixed; }
    .tt th, .tt td { border: 1px solid #ddd; padding: 6px; vertical-align: middle; text-align: center; }
    .tt thead th { background:#f7f7f7; font-weight:600; }
    .tt .day { background:#fafafa; width: 110px; text-align:left; padding-left:8px; }
    .tt .corner { background:#fff; width:110px; }
    .time { font-size: 11px; color:#666; }
    .subj { font-weight: 600; }
    .teacher { font-size: 12px; color:#444; }
    .break { background:#eee; color:#555; }
    @media print { body { margin: 0; } }
    </style>
    """
    return (
        f"<html><head><meta charset='utf-8'><title>{escape(title)}</title>" + style + "</head><body>"
        f"<h1>{escape(title)}</h1>" + "".join(blocks) + "</body></html>"
    )


def write_html_ui(views: Sequence[TimetableView], outputs_dir: Path) -> Path:
    ui_dir = outputs_dir / "ui"
    ui_dir.mkdir(parents=True, exist_ok=True)
    out_path = ui_dir / "index.html"
    out_path.write_text(build_html(views), encoding="utf-8")
    return out_path
