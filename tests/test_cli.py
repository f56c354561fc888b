"""
Tests for the command-line interface.
"""

import json

from typer.testing import CliRunner

from studyslots import __version__
from studyslots.cli.app import app

runner = CliRunner()


def _write_timetable(tmp_path):
    path = tmp_path / "timetable.json"
    path.write_text(
        json.dumps(
            {
                "Monday": [
                    {"start": "09:00", "end": "10:00", "subject": "Maths"},
                    {"start": "11:00", "end": "12:00", "subject": "DBMS"},
                ],
                "Tuesday": [
                    {"start": "09:00", "end": "10:30", "subject": "Lab"},
                    {"start": "10:00", "end": "11:00", "subject": "Lecture"},
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


def _write_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("timezone: Europe/Berlin\n", encoding="utf-8")
    return path


def test_slots_lists_free_time(tmp_path):
    """The slots command shows free slots and the total."""
    result = runner.invoke(
        app,
        ["slots", "Monday", "-t", str(_write_timetable(tmp_path)), "-c", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 0, result.output
    assert "Maths" in result.output
    assert "06:00 - 09:00" in result.output
    assert "12:00 - 23:00" in result.output
    assert "Total free time: 15h" in result.output


def test_slots_with_window_override(tmp_path):
    """Window and gap options override the config."""
    result = runner.invoke(
        app,
        [
            "slots", "Monday",
            "-t", str(_write_timetable(tmp_path)),
            "-c", str(_write_config(tmp_path)),
            "--day-start", "08:00",
            "--day-end", "13:00",
            "--min-gap", "90",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "No free slots" in result.output


def test_slots_strict_rejects_overlaps(tmp_path):
    """Strict mode reports overlapping classes and exits with an error."""
    result = runner.invoke(
        app,
        [
            "slots", "Tuesday",
            "-t", str(_write_timetable(tmp_path)),
            "-c", str(_write_config(tmp_path)),
            "--strict",
        ],
    )

    assert result.exit_code == 1
    assert "overlap" in result.output


def test_slots_missing_timetable_whole_day_free(tmp_path):
    """Without a timetable the whole day is free."""
    result = runner.invoke(
        app,
        ["slots", "Friday", "-t", str(tmp_path / "none.json"), "-c", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 0, result.output
    assert "No classes on Friday" in result.output
    assert "Total free time: 17h" in result.output


def test_slots_unknown_day(tmp_path):
    """Unknown day names exit with an error."""
    result = runner.invoke(app, ["slots", "Funday", "-c", str(_write_config(tmp_path))])

    assert result.exit_code == 1
    assert "Unknown day" in result.output


def test_missing_config_file(tmp_path):
    """An explicitly given config file must exist."""
    result = runner.invoke(app, ["slots", "Monday", "-c", str(tmp_path / "absent.yaml")])

    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_classes_command(tmp_path):
    """The classes command lists a day's classes."""
    result = runner.invoke(
        app,
        ["classes", "monday", "-t", str(_write_timetable(tmp_path)), "-c", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 0, result.output
    assert "DBMS" in result.output
    assert "11:00 - 12:00" in result.output


def test_classes_command_empty_day(tmp_path):
    """Days without classes say so."""
    result = runner.invoke(
        app,
        ["classes", "Sunday", "-t", str(_write_timetable(tmp_path)), "-c", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 0, result.output
    assert "No classes on Sunday" in result.output


def test_version():
    """The version command prints the package version."""
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_slots_rejects_inverted_window_override(tmp_path):
    """A day that closes before it opens is reported, not computed."""
    result = runner.invoke(
        app,
        [
            "slots", "Monday",
            "-t", str(_write_timetable(tmp_path)),
            "-c", str(_write_config(tmp_path)),
            "--day-start", "23:00",
            "--day-end", "06:00",
        ],
    )

    assert result.exit_code == 1
    assert "day_end must be later than day_start" in result.output
    assert "Free slots" not in result.output


def test_slots_rejects_out_of_range_override(tmp_path):
    """Override times must be real clock times."""
    result = runner.invoke(
        app,
        [
            "slots", "Monday",
            "-t", str(_write_timetable(tmp_path)),
            "-c", str(_write_config(tmp_path)),
            "--day-end", "25:99",
        ],
    )

    assert result.exit_code == 1
    assert "Invalid clock time" in result.output


def test_slots_rejects_non_positive_gap(tmp_path):
    """A zero gap threshold is a usage error."""
    result = runner.invoke(
        app,
        ["slots", "Monday", "-c", str(_write_config(tmp_path)), "--min-gap", "0"],
    )

    assert result.exit_code == 1
    assert "min_gap_minutes" in result.output


def test_slots_override_checked_against_config_window(tmp_path):
    """A single override must still fit the window from the config file."""
    config = tmp_path / "config.yaml"
    config.write_text("defaults:\n  day_start: '08:00'\n  day_end: '20:00'\n", encoding="utf-8")

    result = runner.invoke(app, ["slots", "Monday", "-c", str(config), "--day-start", "21:00"])

    assert result.exit_code == 1
    assert "day_end must be later than day_start" in result.output


def test_slots_uses_config_defaults(tmp_path):
    """Without overrides the window comes from the config file."""
    config = tmp_path / "config.yaml"
    config.write_text(
        "defaults:\n  day_start: '08:00'\n  day_end: '13:00'\n  min_gap_minutes: 60\n",
        encoding="utf-8",
    )

    result = runner.invoke(app, ["slots", "Monday", "-t", str(_write_timetable(tmp_path)), "-c", str(config)])

    assert result.exit_code == 0, result.output
    assert "(08:00 - 13:00)" in result.output
    assert "08:00 - 09:00" in result.output
    assert "12:00 - 13:00" in result.output
    assert "Total free time: 3h" in result.output


def test_add_class_creates_timetable(tmp_path):
    """Adding a class writes a new timetable file."""
    timetable = tmp_path / "timetable.json"

    result = runner.invoke(
        app,
        ["add-class", "wednesday", "14:00", "15:30", "Physics", "-t", str(timetable), "-c", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(timetable.read_text(encoding="utf-8")) == {
        "Wednesday": [{"start": "14:00", "end": "15:30", "subject": "Physics"}]
    }


def test_add_class_keeps_existing_classes(tmp_path):
    """Added classes are merged into the stored day in start order."""
    timetable = _write_timetable(tmp_path)

    result = runner.invoke(
        app,
        ["add-class", "Monday", "07:00", "08:00", "Gym", "-t", str(timetable), "-c", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 0, result.output
    stored = json.loads(timetable.read_text(encoding="utf-8"))
    assert [entry["subject"] for entry in stored["Monday"]] == ["Gym", "Maths", "DBMS"]
    assert len(stored["Tuesday"]) == 2


def test_add_class_rejects_inverted_class(tmp_path):
    """A class must end after it starts."""
    timetable = tmp_path / "timetable.json"

    result = runner.invoke(
        app,
        ["add-class", "Monday", "10:00", "09:00", "-t", str(timetable), "-c", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 1
    assert "must be later than its start" in result.output
    assert not timetable.exists()


def test_add_class_rejects_bad_time(tmp_path):
    """Class times must be valid clock times."""
    result = runner.invoke(
        app,
        ["add-class", "Monday", "9am", "10:00", "-t", str(tmp_path / "t.json"), "-c", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 1
    assert "Invalid clock time" in result.output


def test_import_timetable_replaces_imported_days(tmp_path):
    """Imported weekdays replace the stored ones and other days are kept."""
    timetable = _write_timetable(tmp_path)
    source = tmp_path / "semester.yaml"
    source.write_text(
        "monday:\n  - start: '13:00'\n    end: '14:00'\n    subject: Ethics\n"
        "Thursday:\n  - start: '08:00'\n    end: '09:00'\n",
        encoding="utf-8",
    )

    result = runner.invoke(
        app,
        ["import-timetable", str(source), "-t", str(timetable), "-c", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 0, result.output
    stored = json.loads(timetable.read_text(encoding="utf-8"))
    assert stored["Monday"] == [{"start": "13:00", "end": "14:00", "subject": "Ethics"}]
    assert stored["Thursday"] == [{"start": "08:00", "end": "09:00", "subject": ""}]
    assert len(stored["Tuesday"]) == 2


def test_import_timetable_missing_source(tmp_path):
    """Importing a file that does not exist is an error."""
    result = runner.invoke(
        app,
        ["import-timetable", str(tmp_path / "absent.json"), "-t", str(tmp_path / "t.json"), "-c", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 1
    assert "not found" in result.output


def test_import_timetable_unknown_day(tmp_path):
    """Imported day names must be weekdays."""
    source = tmp_path / "bad.json"
    source.write_text(json.dumps({"Funday": []}), encoding="utf-8")
    timetable = tmp_path / "timetable.json"

    result = runner.invoke(
        app,
        ["import-timetable", str(source), "-t", str(timetable), "-c", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 1
    assert "Unknown day" in result.output
    assert not timetable.exists()


def test_clear_timetable_with_yes(tmp_path):
    """Clearing with --yes deletes the timetable without asking."""
    timetable = _write_timetable(tmp_path)

    result = runner.invoke(
        app,
        ["clear-timetable", "--yes", "-t", str(timetable), "-c", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 0, result.output
    assert "Cleared timetable" in result.output
    assert not timetable.exists()


def test_clear_timetable_declined(tmp_path):
    """Declining the prompt keeps the timetable."""
    timetable = _write_timetable(tmp_path)

    result = runner.invoke(
        app,
        ["clear-timetable", "-t", str(timetable), "-c", str(_write_config(tmp_path))],
        input="n\n",
    )

    assert result.exit_code == 1
    assert timetable.exists()


def test_clear_timetable_nothing_stored(tmp_path):
    """Clearing a missing timetable says so."""
    result = runner.invoke(
        app,
        ["clear-timetable", "-y", "-t", str(tmp_path / "none.json"), "-c", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 0, result.output
    assert "No timetable stored" in result.output


def test_tasks_add_done_and_list(tmp_path):
    """Tasks can be added, checked off and listed with progress."""
    tasks_file = str(tmp_path / "tasks.json")
    common = ["--tasks-file", tasks_file, "-c", str(_write_config(tmp_path))]

    assert runner.invoke(app, ["tasks", "add", "Revise DBMS", *common]).exit_code == 0
    assert runner.invoke(app, ["tasks", "add", "Gym", *common]).exit_code == 0

    done = runner.invoke(app, ["tasks", "done", "2", *common])
    assert done.exit_code == 0, done.output
    assert "1/2 done" in done.output

    listed = runner.invoke(app, ["tasks", "list", *common])
    assert listed.exit_code == 0, listed.output
    assert "Revise DBMS" in listed.output
    assert "Progress: 1/2 done" in listed.output


def test_tasks_done_unknown_id(tmp_path):
    """Checking off a missing task is an error."""
    result = runner.invoke(
        app,
        ["tasks", "done", "9", "--tasks-file", str(tmp_path / "tasks.json"), "-c", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 1
    assert "No task with id 9" in result.output


def test_tasks_add_blank(tmp_path):
    """Blank tasks are rejected."""
    tasks_file = tmp_path / "tasks.json"

    result = runner.invoke(
        app,
        ["tasks", "add", "  ", "--tasks-file", str(tasks_file), "-c", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 1
    assert not tasks_file.exists()


def test_tasks_import_plan(tmp_path):
    """A day plan becomes a fresh checklist, one task per line."""
    plan = tmp_path / "plan.txt"
    plan.write_text("⏰ 07:00 Wake up\n\n📚 Study Maths\n- Gym\n", encoding="utf-8")
    tasks_file = tmp_path / "tasks.json"

    result = runner.invoke(
        app,
        ["tasks", "import", str(plan), "--tasks-file", str(tasks_file), "-c", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 0, result.output
    assert "Imported 3 task(s)" in result.output
    stored = json.loads(tasks_file.read_text(encoding="utf-8"))
    assert [task["text"] for task in stored] == ["07:00 Wake up", "Study Maths", "Gym"]
    assert not any(task["done"] for task in stored)


def test_tasks_clear(tmp_path):
    """Clearing removes the stored checklist."""
    tasks_file = tmp_path / "tasks.json"
    tasks_file.write_text(json.dumps([{"id": "1", "text": "Gym", "done": False}]), encoding="utf-8")
    common = ["--tasks-file", str(tasks_file), "-c", str(_write_config(tmp_path))]

    result = runner.invoke(app, ["tasks", "clear", *common])

    assert result.exit_code == 0, result.output
    assert not tasks_file.exists()
    assert "No tasks for today" in runner.invoke(app, ["tasks", "list", *common]).output
