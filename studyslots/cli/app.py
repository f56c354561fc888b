"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import NoReturn, Optional, Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..adapters.task_file import TaskFileStore
from ..adapters.timetable_file import TimetableFileSource
from ..config import AppConfig, get_default_config_path
from ..domain.clock import parse_clock_time, to_minutes
from ..domain.duration import format_duration
from ..domain.exceptions import InvalidInterval, StudySlotsError
from ..domain.models import ClassEntry, DayWindow, WeeklyTimetable, normalize_day
from ..domain.tasks import DailyChecklist, parse_plan_to_tasks
from ..logging_config import configure_logging
from ..services.day_planner import DayPlannerService, DaySummary

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="studyslots",
    help="Find free study time between your classes",
    add_completion=False
)

tasks_app = typer.Typer(
    help="Manage today's task checklist",
    no_args_is_help=True,
)
app.add_typer(tasks_app, name="tasks")

console = Console()

DEFAULT_TIMETABLE_FILE = "timetable.json"
DEFAULT_TASKS_FILE = "tasks.json"

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
TimetableOption = Annotated[Optional[Path], typer.Option("--timetable", "-t", help="Weekly timetable (JSON or YAML). Defaults to ./timetable.json")]
TasksFileOption = Annotated[Optional[Path], typer.Option("--tasks-file", help="Task checklist (JSON or YAML). Defaults to ./tasks.json")]
DayArgument = Annotated[Optional[str], typer.Argument(help="Weekday name, e.g. 'Monday'. Defaults to today.")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")]


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """Load the config file; fall back to defaults when no default file exists."""
    if config_file is not None:
        return AppConfig.load_from_yaml(config_file)

    config_path = get_default_config_path()
    if config_path.exists():
        return AppConfig.load_from_yaml(config_path)

    logger.debug("No config file found at %s, using defaults", config_path)
    return AppConfig()


def _timetable_source(config: AppConfig, timetable: Optional[Path]) -> TimetableFileSource:
    return TimetableFileSource(timetable or config.timetable_path or Path.cwd() / DEFAULT_TIMETABLE_FILE)


def _task_store(config: AppConfig, tasks_file: Optional[Path]) -> TaskFileStore:
    return TaskFileStore(tasks_file or config.tasks_path or Path.cwd() / DEFAULT_TASKS_FILE)


def _build_service(config: AppConfig, timetable: Optional[Path]) -> DayPlannerService:
    """Wire the timetable source and the calculator described by the config."""
    return DayPlannerService(
        timetable_source=_timetable_source(config, timetable),
        slot_calculator=config.build_calculator(),
        timezone=config.timezone,
    )


def _validation_message(exc: ValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        message = error["msg"].removeprefix("Value error, ")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)


def _fail(exc: Exception) -> NoReturn:
    message = _validation_message(exc) if isinstance(exc, ValidationError) else str(exc)
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    raise typer.Exit(1)


def _render_summary(summary: DaySummary, window: DayWindow) -> None:
    console.print(f"\n[bold cyan]🧠 {summary.day}[/bold cyan]  ({window.day_start} - {window.day_end})\n")

    if summary.classes:
        classes_table = Table(title="Classes", show_header=True, header_style="bold cyan")
        classes_table.add_column("Time", style="bold yellow")
        classes_table.add_column("Subject")
        for entry in sorted(summary.classes, key=lambda c: c.start_minutes):
            classes_table.add_row(f"{entry.start} - {entry.end}", entry.subject)
        console.print(classes_table)
    else:
        console.print(f"No classes on {summary.day} 🎉")

    console.print()

    if not summary.free_slots:
        console.print("[yellow]⚠ No free slots left in this day.[/yellow]\n")
        return

    slots_table = Table(title="Free slots", show_header=True, header_style="bold green")
    slots_table.add_column("Time", style="bold green")
    slots_table.add_column("Duration", justify="right")
    for slot in summary.free_slots:
        slots_table.add_row(str(slot), format_duration(slot.duration_minutes()))
    console.print(slots_table)

    console.print(f"\n[bold]Total free time:[/bold] {summary.total_free_display}\n")


def _render_checklist(checklist: DailyChecklist) -> None:
    if not checklist.tasks:
        console.print("No tasks for today. Add one with [bold]studyslots tasks add[/bold].")
        return

    table = Table(title="✅ Today's tasks", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Done", justify="center")
    table.add_column("Task")
    for task in checklist.tasks:
        mark = "[green]✔[/green]" if task.done else "○"
        text = f"[strike dim]{escape(task.text)}[/strike dim]" if task.done else escape(task.text)
        table.add_row(task.id, mark, text)

    console.print()
    console.print(table)
    console.print(f"\n[bold]Progress:[/bold] {checklist.progress_display()}\n")


@app.command()
def slots(
    day: DayArgument = None,
    config_file: ConfigOption = None,
    timetable: TimetableOption = None,
    day_start: Annotated[Optional[str], typer.Option("--day-start", help="Start of the day (HH:MM)")] = None,
    day_end: Annotated[Optional[str], typer.Option("--day-end", help="End of the day (HH:MM)")] = None,
    min_gap: Annotated[Optional[int], typer.Option("--min-gap", help="Shortest gap worth listing, in minutes")] = None,
    strict: Annotated[bool, typer.Option("--strict", help="Reject overlapping or out-of-window classes instead of merging them.")] = False,
    verbose: VerboseOption = False,
):
    """
    Show a day's classes and the free slots between them.

    Examples:

        studyslots slots
        studyslots slots monday --timetable week.yaml
        studyslots slots --day-start 08:00 --day-end 20:00 --min-gap 45
    """
    configure_logging(verbose)

    try:
        config = _load_config(config_file).with_overrides(
            day_start=day_start,
            day_end=day_end,
            min_gap_minutes=min_gap,
            strict=strict,
        )
        service = _build_service(config, timetable)
        summary = asyncio.run(service.plan_day(day))

    except (StudySlotsError, FileNotFoundError, ValidationError, ValueError) as e:
        _fail(e)

    _render_summary(summary, config.defaults.get_window())


@app.command()
def classes(
    day: DayArgument = None,
    config_file: ConfigOption = None,
    timetable: TimetableOption = None,
    verbose: VerboseOption = False,
):
    """
    List the classes scheduled on a day.
    """
    configure_logging(verbose)

    try:
        config = _load_config(config_file)
        service = _build_service(config, timetable)
        day_name = service.resolve_day(day)
        entries = asyncio.run(service.classes_for_day(day_name))

    except (StudySlotsError, FileNotFoundError, ValidationError, ValueError) as e:
        _fail(e)

    if not entries:
        console.print(f"No classes on {day_name} 🎉")
        return

    table = Table(title=f"📚 {day_name}", show_header=True, header_style="bold cyan")
    table.add_column("Time", style="bold yellow")
    table.add_column("Subject")
    for entry in entries:
        table.add_row(f"{entry.start} - {entry.end}", entry.subject)

    console.print()
    console.print(table)
    console.print()


@app.command("add-class")
def add_class(
    day: Annotated[str, typer.Argument(help="Weekday name, e.g. 'Monday'")],
    start: Annotated[str, typer.Argument(help="Class start (HH:MM)")],
    end: Annotated[str, typer.Argument(help="Class end (HH:MM)")],
    subject: Annotated[str, typer.Argument(help="Subject shown next to the class")] = "",
    config_file: ConfigOption = None,
    timetable: TimetableOption = None,
    verbose: VerboseOption = False,
):
    """
    Add a class to a weekday in the stored timetable.

    Examples:

        studyslots add-class monday 09:00 10:00 Maths
    """
    configure_logging(verbose)

    try:
        config = _load_config(config_file)
        source = _timetable_source(config, timetable)
        day_name = normalize_day(day)
        entry = ClassEntry(start=parse_clock_time(start), end=parse_clock_time(end), subject=subject)
        if to_minutes(entry.end) <= to_minutes(entry.start):
            raise InvalidInterval(f"Class end {entry.end} must be later than its start {entry.start}")

        week = source.read() or WeeklyTimetable()
        week.add_class(day_name, entry)
        source.save(week)

    except (StudySlotsError, FileNotFoundError, ValidationError, ValueError) as e:
        _fail(e)

    console.print(f"[green]✔[/green] Added {escape(str(entry))} on {day_name} ({source.path})")


@app.command("import-timetable")
def import_timetable(
    source_file: Annotated[Path, typer.Argument(help="Timetable file (JSON or YAML) to import")],
    config_file: ConfigOption = None,
    timetable: TimetableOption = None,
    verbose: VerboseOption = False,
):
    """
    Import classes from another timetable file.

    Every weekday present in the imported file replaces that day in the stored
    timetable; other days are kept.
    """
    configure_logging(verbose)

    try:
        config = _load_config(config_file)
        target = _timetable_source(config, timetable)

        imported = TimetableFileSource(source_file).read()
        if imported is None:
            raise FileNotFoundError(f"Timetable file not found: {source_file}")

        week = target.read() or WeeklyTimetable()
        imported_days = []
        for day, entries in imported.days.items():
            day_name = normalize_day(day)
            week.clear_day(day_name)
            for entry in entries:
                week.add_class(day_name, entry)
            imported_days.append(day_name)

        target.save(week)

    except (StudySlotsError, FileNotFoundError, ValidationError, ValueError) as e:
        _fail(e)

    if not imported_days:
        console.print(f"[yellow]⚠ No weekdays found in {source_file}.[/yellow]")
        return

    console.print(f"[green]✔[/green] Imported {', '.join(imported_days)} into {target.path}")


@app.command("clear-timetable")
def clear_timetable(
    config_file: ConfigOption = None,
    timetable: TimetableOption = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation.")] = False,
    verbose: VerboseOption = False,
):
    """
    Delete the stored timetable.
    """
    configure_logging(verbose)

    try:
        config = _load_config(config_file)
        source = _timetable_source(config, timetable)
    except (StudySlotsError, FileNotFoundError, ValidationError, ValueError) as e:
        _fail(e)

    if not yes and not typer.confirm(f"Delete the timetable at {source.path}?"):
        console.print("Aborted.")
        raise typer.Exit(1)

    try:
        removed = source.clear()
    except StudySlotsError as e:
        _fail(e)

    if removed:
        console.print(f"[green]✔[/green] Cleared timetable {source.path}")
    else:
        console.print(f"No timetable stored at {source.path}")


@tasks_app.command("list")
def list_tasks(
    config_file: ConfigOption = None,
    tasks_file: TasksFileOption = None,
    verbose: VerboseOption = False,
):
    """
    Show today's tasks and how many are done.
    """
    configure_logging(verbose)

    try:
        checklist = _task_store(_load_config(config_file), tasks_file).load()
    except (StudySlotsError, FileNotFoundError, ValidationError, ValueError) as e:
        _fail(e)

    _render_checklist(checklist)


@tasks_app.command("add")
def add_task(
    text: Annotated[str, typer.Argument(help="What needs doing")],
    config_file: ConfigOption = None,
    tasks_file: TasksFileOption = None,
    verbose: VerboseOption = False,
):
    """
    Append a task to today's checklist.
    """
    configure_logging(verbose)

    try:
        store = _task_store(_load_config(config_file), tasks_file)
        checklist = store.load()
        task = checklist.add(text)
        store.save(checklist)
    except (StudySlotsError, FileNotFoundError, ValidationError, ValueError) as e:
        _fail(e)

    console.print(f"[green]✔[/green] Added task #{task.id}: {escape(task.text)}")


@tasks_app.command("done")
def toggle_task(
    task_id: Annotated[str, typer.Argument(help="Task number shown by 'tasks list'")],
    config_file: ConfigOption = None,
    tasks_file: TasksFileOption = None,
    verbose: VerboseOption = False,
):
    """
    Mark a task as done, or reopen it if it is already done.
    """
    configure_logging(verbose)

    try:
        store = _task_store(_load_config(config_file), tasks_file)
        checklist = store.load()
        try:
            task = checklist.toggle(task_id)
        except KeyError:
            raise ValueError(f"No task with id {task_id}") from None
        store.save(checklist)
    except (StudySlotsError, FileNotFoundError, ValidationError, ValueError) as e:
        _fail(e)

    state = "done" if task.done else "open"
    console.print(f"Task #{task.id} is {state}. {checklist.progress_display()}")


@tasks_app.command("import")
def import_tasks(
    plan_file: Annotated[Path, typer.Argument(help="Text file with one plan step per line")],
    config_file: ConfigOption = None,
    tasks_file: TasksFileOption = None,
    verbose: VerboseOption = False,
):
    """
    Replace today's checklist with the steps of a day plan.
    """
    configure_logging(verbose)

    try:
        store = _task_store(_load_config(config_file), tasks_file)
        plan_text = plan_file.read_text(encoding="utf-8")
        checklist = parse_plan_to_tasks(plan_text)
        store.save(checklist)
    except (StudySlotsError, OSError, ValidationError, ValueError) as e:
        _fail(e)

    console.print(f"[green]✔[/green] Imported {checklist.total} task(s) from {plan_file}")


@tasks_app.command("clear")
def clear_tasks(
    config_file: ConfigOption = None,
    tasks_file: TasksFileOption = None,
    verbose: VerboseOption = False,
):
    """
    Delete today's checklist.
    """
    configure_logging(verbose)

    try:
        store = _task_store(_load_config(config_file), tasks_file)
        removed = store.clear()
    except (StudySlotsError, FileNotFoundError, ValidationError, ValueError) as e:
        _fail(e)

    if removed:
        console.print(f"[green]✔[/green] Cleared tasks {store.path}")
    else:
        console.print(f"No tasks stored at {store.path}")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]studyslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
