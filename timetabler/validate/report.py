from __future__ import annotations

import json
from pathlib import Path
from typing import Dict


def write_validation_report(report: Dict[str, object], outputs_dir: Path) -> Path:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    path = outputs_dir / "validation.json"
    with path.open("w", encoding="utf-8") as f:
        json.dump(report, f, indent=2)
    return path


def format_validation_report(report: Dict[str, object]) -> str:
    lines: list[str] = []
    lines.append(f"clash_count: {report.get('clash_count')}")
    clashes = report.get("clashes", {})
    if isinstance(clashes, dict):
        for k, v in clashes.items():
            lines.append(f"  - {k}: {', '.join(v)}")
    missing = report.get("missing_cells", [])
    lines.append(f"missing_cells: {len(missing)}")
    lines.append("break_count:")
    breaks = report.get("break_count", {})
    if isinstance(breaks, dict):
        for k, v in breaks.items():
            lines.append(f"  - {k}: {v}")
    return "\n".join(lines)
