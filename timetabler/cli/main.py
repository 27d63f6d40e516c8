from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer

from ..config import EngineConfig, load_config
from ..data.directory import Directory, load_directory
from ..data.settings import TimetableSettings
from ..data.store import TimetableStore
from ..errors import DirectoryError, SettingsError, TimetablerError
from ..models import TimeSlot
from ..models.timetable import schedule_from_dict
from ..render.csv_out import csv_blocks, write_csv_blocks
from ..render.html_ui import write_html_ui
from ..render.views import format_view, teacher_sessions, view_from_document, view_from_timetable
from ..scheduler import edit_cell, generate_with_audit
from ..validate.checks import validate_all
from ..validate.report import format_validation_report, write_validation_report

logger = logging.getLogger(__name__)


def _setup_logging(project_root: Path, level: int = logging.INFO) -> None:
    logs_dir = project_root / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(logs_dir / "engine.log", encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )
    logging.getLogger().setLevel(level)


@dataclass
class Project:
    root: Path
    config: EngineConfig
    directory: Directory
    store: TimetableStore

    def settings(self) -> TimetableSettings:
        # Stored settings win, then the config file, then the defaults
        stored = self.store.load_settings()
        if stored is not None:
            return stored
        return TimetableSettings.from_dict({"days": self.config.days, "slots": self.config.slots})


def open_project(root: Path, *, log_level: int | None = None) -> Project:
    cfg = load_config(root)
    _setup_logging(root, log_level if log_level is not None else cfg.level)
    return Project(
        root=root,
        config=cfg,
        directory=load_directory(cfg.resolve(root, "data_dir")),
        store=TimetableStore(cfg.resolve(root, "store_dir")),
    )


def run_pipeline(
    project_root: Path,
    *,
    log_level: int | None = None,
    persist: bool = True,
) -> tuple[str, str, str]:
    project = open_project(project_root, log_level=log_level)
    settings = project.settings()
    directory = project.directory
    classes = directory.classes_with_subjects()
    teacher_names = directory.teacher_names()
    days: List[str] = settings.days
    slots: List[TimeSlot] = settings.slots
    logger.info(f"Generating timetables for {len(classes)} class(es), {len(days)} day(s) x {len(slots)} slot(s)")

    tt, audit = generate_with_audit(classes, days, slots, teacher_names)
    report = validate_all(tt, days, slots)

    outputs_dir = project.config.resolve(project_root, "outputs_dir")
    write_validation_report(report, outputs_dir)
    csv = csv_blocks(tt, classes, days, slots)
    write_csv_blocks(csv, outputs_dir)
    views = [view_from_timetable(tt, c, days, slots, teacher_names) for c in classes if c.id in tt]
    write_html_ui(views, outputs_dir)
    # Persist intermediate JSON schedule
    json_dir = outputs_dir / "json"
    json_dir.mkdir(parents=True, exist_ok=True)
    schedule_json = [
        {"class": cid, "day": day, "slot": sid, **cell.to_dict()}
        for (cid, day, sid), cell in tt.all()
    ]
    with (json_dir / "schedule.json").open("w", encoding="utf-8") as f:
        json.dump(schedule_json, f, indent=2)

    if persist:
        project.store.save_all(tt, classes, days, slots)

    audit_text = "\n".join(["Generated:"] + audit)
    with (outputs_dir / "audit.txt").open("w", encoding="utf-8") as f:
        f.write(audit_text)

    return csv, format_validation_report(report), audit_text


def apply_edit(
    project: Project,
    class_id: str,
    day: str,
    slot_id: str,
    subject_id: str | None,
) -> Dict[str, Any]:
    directory = project.directory
    cls = directory.class_by_id(class_id)
    if cls is None:
        raise DirectoryError(f"unknown class {class_id!r}")
    settings = project.settings()
    if day not in settings.days:
        raise SettingsError(f"{day!r} is not a configured day")
    if slot_id not in settings.slot_ids():
        raise SettingsError(f"{slot_id!r} is not a configured slot")
    subjects = directory.subjects_by_class().get(class_id, [])
    # A subject outside this class clears the cell
    subject = next((s for s in subjects if s.id == subject_id), None) if subject_id else None
    if subject_id and subject is None:
        logger.warning(f"Subject {subject_id} is not taught in {class_id}; clearing the cell")
    doc = project.store.load_timetable(class_id) or {}
    schedule = schedule_from_dict(doc.get("schedule") or {})
    updated = edit_cell(schedule, day, slot_id, subject, directory.teacher_names())
    return project.store.save_timetable(cls, updated, settings.days, settings.slots)


app = typer.Typer(add_completion=False, help="School class timetable generator")

RootOption = typer.Option(Path("."), "--root", help="Project root holding data/ and timetabler.toml")


def _project(root: Path, log_level: Optional[str] = None) -> Project:
    level = getattr(logging, log_level.upper(), logging.INFO) if log_level else None
    return open_project(root.resolve(), log_level=level)


def _fail(e: TimetablerError) -> typer.Exit:
    logger.error(str(e))
    typer.echo(f"Error: {e}", err=True)
    return typer.Exit(code=1)


@app.command("generate")
def cli_generate(
    root: Path = RootOption,
    log_level: str = typer.Option("INFO", help="Log level"),
    save: bool = typer.Option(True, "--save/--no-save", help="Write per-class timetable documents"),
) -> None:
    level = getattr(logging, log_level.upper(), logging.INFO)
    try:
        csv, validation, audit = run_pipeline(root.resolve(), log_level=level, persist=save)
    except TimetablerError as e:
        raise _fail(e)
    typer.echo(csv)
    typer.echo(validation)
    typer.echo(audit)


@app.command("validate")
def cli_validate(root: Path = RootOption) -> None:
    try:
        _, validation, _ = run_pipeline(root.resolve(), persist=False)
    except TimetablerError as e:
        raise _fail(e)
    typer.echo(validation)


@app.command("export-csv")
def cli_export_csv(root: Path = RootOption) -> None:
    try:
        csv, _, _ = run_pipeline(root.resolve(), persist=False)
    except TimetablerError as e:
        raise _fail(e)
    typer.echo(csv)


@app.command("show")
def cli_show(
    root: Path = RootOption,
    class_id: Optional[str] = typer.Option(None, "--class", help="Class id"),
    student: Optional[str] = typer.Option(None, help="Show the timetable of this student's class"),
    parent: Optional[str] = typer.Option(None, help="Show the timetables of this parent's children"),
    teacher: Optional[str] = typer.Option(None, help="Show the classes this teacher is involved with"),
) -> None:
    try:
        project = _project(root)
        directory = project.directory
        class_ids: List[str] = []
        if class_id:
            class_ids.append(class_id)
        if student:
            cls = directory.class_for_student(student)
            if cls is None:
                raise DirectoryError(f"student {student!r} has no class assigned")
            class_ids.append(cls.id)
        if parent:
            for child in directory.children_of(parent):
                if child.class_id:
                    class_ids.append(child.class_id)
        if teacher:
            class_ids.extend(c.id for c in directory.classes_for_teacher(teacher))
        if not class_ids:
            raise DirectoryError("nothing to show; pass --class, --student, --parent or --teacher")
        names = directory.teacher_names()
        for cid in dict.fromkeys(class_ids):
            doc = project.store.load_timetable(cid)
            if doc is None:
                typer.echo(f"{cid}: timetable not available yet.")
                continue
            typer.echo(format_view(view_from_document(doc, names)))
            typer.echo("")
        if teacher:
            sessions = teacher_sessions(project.store.load_all().values(), teacher)
            typer.echo(f"{len(sessions)} teaching period(s) for {names.get(teacher, teacher)}")
            for s in sessions:
                typer.echo(f"  {s['day']} {s['slot']}: {s['subject']} ({s['className']})")
    except TimetablerError as e:
        raise _fail(e)


@app.command("edit")
def cli_edit(
    class_id: str = typer.Argument(..., help="Class id"),
    day: str = typer.Argument(..., help="Day name"),
    slot: str = typer.Argument(..., help="Slot id"),
    subject: Optional[str] = typer.Option(None, help="Subject id; omit to clear the cell to Break"),
    root: Path = RootOption,
) -> None:
    try:
        doc = apply_edit(_project(root), class_id, day, slot, subject)
    except TimetablerError as e:
        raise _fail(e)
    cell = doc["schedule"][day][slot]
    typer.echo(f"{doc['className']} {day} {slot} -> {cell['subjectName']}")


def _edit_settings(root: Path, change) -> TimetableSettings:
    project = _project(root)
    settings = project.settings()
    change(settings)
    project.store.save_settings(settings)
    return settings


def _echo_settings(settings: TimetableSettings) -> None:
    typer.echo(f"days: {', '.join(settings.days)}")
    for s in settings.slots:
        typer.echo(f"slot {s.id}: {s.start}-{s.end}")


@app.command("settings")
def cli_settings(root: Path = RootOption) -> None:
    try:
        _echo_settings(_project(root).settings())
    except TimetablerError as e:
        raise _fail(e)


@app.command("toggle-day")
def cli_toggle_day(day: str, root: Path = RootOption) -> None:
    try:
        _echo_settings(_edit_settings(root, lambda s: s.toggle_day(day)))
    except TimetablerError as e:
        raise _fail(e)


@app.command("add-slot")
def cli_add_slot(
    start: str = typer.Option("13:00", help="Start time HH:MM"),
    end: str = typer.Option("13:40", help="End time HH:MM"),
    root: Path = RootOption,
) -> None:
    try:
        _echo_settings(_edit_settings(root, lambda s: s.add_slot(start, end)))
    except TimetablerError as e:
        raise _fail(e)


@app.command("remove-slot")
def cli_remove_slot(slot: str, root: Path = RootOption) -> None:
    try:
        _echo_settings(_edit_settings(root, lambda s: s.remove_slot(slot)))
    except TimetablerError as e:
        raise _fail(e)


@app.command("update-slot")
def cli_update_slot(
    slot: str,
    start: Optional[str] = typer.Option(None, help="Start time HH:MM"),
    end: Optional[str] = typer.Option(None, help="End time HH:MM"),
    root: Path = RootOption,
) -> None:
    try:
        _echo_settings(_edit_settings(root, lambda s: s.update_slot(slot, start, end)))
    except TimetablerError as e:
        raise _fail(e)


def main() -> None:  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
