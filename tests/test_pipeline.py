from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from timetabler.cli.main import app, apply_edit, open_project, run_pipeline
from timetabler.config import load_config
from timetabler.errors import SettingsError

from conftest import write_data

runner = CliRunner()


def test_pipeline_runs_and_persists(project_root: Path) -> None:
    csv, validation, audit = run_pipeline(project_root)
    assert "Class,Day,PeriodStart,PeriodEnd,Subject,Teacher" in csv
    assert "clash_count: 0" in validation
    assert "c3: skipped (no subjects)" in audit
    outputs = project_root / "outputs"
    for name in ("timetable.csv", "validation.json", "audit.txt", "ui/index.html", "json/schedule.json"):
        assert (outputs / name).exists(), name
    report = json.loads((outputs / "validation.json").read_text(encoding="utf-8"))
    assert report["missing_cells"] == []
    docs = sorted(p.stem for p in (project_root / "store" / "timetables").glob("*.json"))
    assert docs == ["c1", "c2"]


def test_pipeline_without_persist(project_root: Path) -> None:
    run_pipeline(project_root, persist=False)
    assert not (project_root / "store" / "timetables").exists()


def test_shared_subject_teacher_never_double_booked(project_root: Path) -> None:
    run_pipeline(project_root)
    rows = json.loads((project_root / "outputs" / "json" / "schedule.json").read_text(encoding="utf-8"))
    t3 = [(r["day"], r["slot"]) for r in rows if r["teacherId"] == "t3"]
    assert len(t3) == len(set(t3))


def test_stored_settings_drive_generation(project_root: Path) -> None:
    result = runner.invoke(app, ["toggle-day", "Friday", "--root", str(project_root)])
    assert result.exit_code == 0
    result = runner.invoke(app, ["remove-slot", "6", "--root", str(project_root)])
    assert result.exit_code == 0
    run_pipeline(project_root)
    doc = json.loads((project_root / "store" / "timetables" / "c1.json").read_text(encoding="utf-8"))
    assert doc["days"] == ["Monday", "Tuesday", "Wednesday", "Thursday"]
    assert [s["id"] for s in doc["slots"]] == ["1", "2", "3", "4", "5"]


def test_config_file_overrides_paths_and_days(project_root: Path) -> None:
    (project_root / "timetabler.toml").write_text(
        '[timetabler]\nstore_dir = "db"\ndays = ["Saturday"]\n'
        'slots = [{id = "1", start = "09:00", end = "09:45"}]\n',
        encoding="utf-8",
    )
    cfg = load_config(project_root)
    assert cfg.store_dir == "db"
    run_pipeline(project_root)
    doc = json.loads((project_root / "db" / "timetables" / "c1.json").read_text(encoding="utf-8"))
    assert list(doc["schedule"]) == ["Saturday"]
    assert list(doc["schedule"]["Saturday"]) == ["1"]


def test_apply_edit_overwrites_one_cell(project_root: Path) -> None:
    run_pipeline(project_root)
    project = open_project(project_root)
    before = project.store.load_timetable("c1")["schedule"]
    doc = apply_edit(project, "c1", "Monday", "2", "s1")
    assert doc["schedule"]["Monday"]["2"]["subjectId"] == "s1"
    assert doc["schedule"]["Monday"]["2"]["teacherName"] == "Mr. Usman Tariq"
    assert doc["schedule"]["Monday"]["1"] == before["Monday"]["1"]
    assert doc["schedule"]["Tuesday"] == before["Tuesday"]
    # A subject from another class clears the cell
    doc = apply_edit(project, "c1", "Monday", "2", "s3")
    assert doc["schedule"]["Monday"]["2"]["subjectName"] == "Break"


def test_cli_generate_and_show(project_root: Path) -> None:
    result = runner.invoke(app, ["generate", "--root", str(project_root)])
    assert result.exit_code == 0, result.output
    assert "clash_count: 0" in result.output

    result = runner.invoke(app, ["show", "--student", "u1", "--root", str(project_root)])
    assert result.exit_code == 0, result.output
    assert "Grade 5 - A" in result.output

    result = runner.invoke(app, ["show", "--teacher", "t3", "--root", str(project_root)])
    assert result.exit_code == 0, result.output
    assert "teaching period(s) for Mr. Usman Tariq" in result.output


def test_cli_edit_and_errors(project_root: Path) -> None:
    runner.invoke(app, ["generate", "--root", str(project_root)])
    result = runner.invoke(app, ["edit", "c2", "Monday", "1", "--root", str(project_root)])
    assert result.exit_code == 0, result.output
    assert "Grade 5 - B Monday 1 -> Break" in result.output

    assert runner.invoke(app, ["edit", "nope", "Monday", "1", "--root", str(project_root)]).exit_code == 1
    assert runner.invoke(app, ["edit", "c2", "Sunday", "1", "--root", str(project_root)]).exit_code == 1
    assert runner.invoke(app, ["toggle-day", "Funday", "--root", str(project_root)]).exit_code == 1
    assert runner.invoke(app, ["show", "--student", "u3", "--root", str(project_root)]).exit_code == 1


def test_null_names_are_stored_empty(tmp_path: Path) -> None:
    write_data(
        tmp_path,
        classes=[{"id": "c1", "name": "Grade 5", "section": None, "teacherId": "t1"}],
        subjects=[{"id": "s1", "name": "Maths", "classId": "c1"}],
        users=[{"id": "t1", "name": None, "role": "teacher"}],
    )
    run_pipeline(tmp_path)
    doc = json.loads((tmp_path / "store" / "timetables" / "c1.json").read_text(encoding="utf-8"))
    assert doc["className"] == "Grade 5 - "
    assert doc["schedule"]["Monday"]["1"]["teacherName"] == ""


def test_malformed_stored_settings_exit_cleanly(project_root: Path) -> None:
    settings_dir = project_root / "store" / "settings"
    settings_dir.mkdir(parents=True)
    (settings_dir / "timetable.json").write_text('{"slots": [{"start": "08:00", "end": "08:40"}]}', encoding="utf-8")
    result = runner.invoke(app, ["settings", "--root", str(project_root)])
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)


def test_malformed_config_raises_settings_error(project_root: Path) -> None:
    cfg = project_root / "timetabler.toml"
    cfg.write_text('[timetabler]\nslots = [{start = "09:00", end = "09:45"}]\n', encoding="utf-8")
    with pytest.raises(SettingsError):
        load_config(project_root)
    cfg.write_text("[timetabler\n", encoding="utf-8")
    with pytest.raises(SettingsError):
        load_config(project_root)
    result = runner.invoke(app, ["generate", "--root", str(project_root)])
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)


def test_undecodable_snapshot_exits_cleanly(project_root: Path) -> None:
    (project_root / "data" / "users.json").write_bytes(b'[{"id": "t1", "name": "\xff"}]')
    result = runner.invoke(app, ["generate", "--root", str(project_root)])
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
