"""taskroutine CLI - to-do list with reminders."""

import json
import logging
import sys
from datetime import date, datetime, timedelta

import click

from .config import load_config
from .core.buckets import Buckets
from .core.errors import ValidationError
from .core.reminders import Declined, ReminderRequest, ScheduledHandle
from .core.tasks import Task, format_date, format_time, parse_date, parse_time
from .ports import Notifier, TaskRepository
from .workflows import (
    add_task,
    clear_completed_tasks,
    complete_task,
    find_task,
    get_notifier,
    get_repository,
    load_buckets,
    load_by_date,
    rearm_reminders,
    remove_task,
)

logger = logging.getLogger(__name__)

SHORT_ID = 8
DELETE_PROMPT = "Are you sure you want to delete this task?"
CLEAR_PROMPT = "Clear all completed tasks?"


class DateParam(click.ParamType):
    name = "DD/MM/YYYY"

    def convert(self, value, param, ctx):
        if isinstance(value, date):
            return value
        try:
            return parse_date(value)
        except ValueError:
            self.fail(f"{value!r} is not a DD/MM/YYYY date", param, ctx)


class TimeParam(click.ParamType):
    name = "hh:mm AM/PM"

    def convert(self, value, param, ctx):
        if not isinstance(value, str):
            return value
        try:
            return parse_time(value)
        except ValueError:
            self.fail(f"{value!r} is not a time like 09:30 AM or 21:30", param, ctx)


DATE = DateParam()
TIME = TimeParam()


# ============== Rendering ==============


def _task_line(task: Task) -> str:
    title = click.style(task.title, strikethrough=task.completed, dim=task.completed)
    return f"  [{task.id[:SHORT_ID]}] {title}\n      🗓️  {task.date_label()}       🕒 {task.time_label()}"


def _show_section(heading: str, tasks: tuple[Task, ...], empty_msg: str | None) -> None:
    click.echo(click.style(heading, bold=True))
    if not tasks:
        if empty_msg:
            click.echo(f"  {empty_msg}")
        return
    for task in tasks:
        click.echo(_task_line(task))


def _show_buckets(buckets: Buckets, as_json: bool) -> None:
    """Home view: today, tomorrow, upcoming, completed."""
    if as_json:
        click.echo(
            json.dumps(
                {
                    "today": [t.to_record() for t in buckets.today],
                    "tomorrow": [t.to_record() for t in buckets.tomorrow],
                    "upcoming": [t.to_record() for t in buckets.upcoming],
                    "completed": [t.to_record() for t in buckets.completed],
                },
                indent=2,
            )
        )
        return

    _show_section("Today's Tasks", buckets.today, "No tasks for today")
    click.echo()
    _show_section("Tomorrow's Tasks", buckets.tomorrow, "No tasks for tomorrow")
    click.echo()
    _show_section("Upcoming Tasks", buckets.upcoming, "No upcoming tasks")
    if buckets.completed:
        click.echo()
        _show_section(f"Completed Tasks ({len(buckets.completed)})", buckets.completed, None)


def _show_by_date(grouped: dict[date, tuple[Task, ...]], as_json: bool) -> None:
    """All tasks grouped by date."""
    if as_json:
        click.echo(
            json.dumps(
                {format_date(d): [t.to_record() for t in tasks] for d, tasks in grouped.items()},
                indent=2,
            )
        )
        return

    if not grouped:
        click.echo("No tasks available")
        return

    click.echo(click.style("📅 All Tasks by Date", bold=True))
    for d, tasks in grouped.items():
        click.echo(f"\n### {format_date(d)}")
        for task in tasks:
            done = " ✓" if task.completed else ""
            title = click.style(task.title, strikethrough=task.completed)
            click.echo(f"  🕒 {task.time_label()}  {title}{done}")


def _describe_reminder(outcome) -> str:
    if isinstance(outcome, ScheduledHandle):
        return f"Reminder set for {format_date(outcome.trigger_at.date())} {format_time(outcome.trigger_at.time())}"
    if isinstance(outcome, ReminderRequest):
        return (
            f"Reminder for {format_date(outcome.trigger_at.date())} {format_time(outcome.trigger_at.time())} "
            "will be delivered by 'taskroutine app'"
        )
    return "Notification not scheduled"


def _resolve(repo: TaskRepository, id_or_prefix: str) -> Task | None:
    task = find_task(repo.load(), id_or_prefix)
    if task is None:
        click.echo(f"No task matches '{id_or_prefix}'.", err=True)
    return task


# ============== Commands ==============


@click.group()
@click.version_option()
def main():
    """taskroutine - to-do list with reminders."""
    pass


@main.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_tasks(as_json: bool):
    """Show today's, tomorrow's, upcoming and completed tasks."""
    repo = get_repository(load_config())
    _show_buckets(load_buckets(repo), as_json)


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def dates(as_json: bool):
    """Show all tasks grouped by date."""
    repo = get_repository(load_config())
    _show_by_date(load_by_date(repo), as_json)


@main.command()
@click.argument("title")
@click.option("--date", "-d", "due_date", type=DATE, default=None, help="Due date (DD/MM/YYYY), defaults to today")
@click.option("--time", "-t", "due_time", type=TIME, required=True, help="Due time (hh:mm AM/PM or HH:MM)")
def add(title: str, due_date: date | None, due_time):
    """Add a task."""
    repo = get_repository(load_config())
    try:
        task, outcome = add_task(repo, None, title, due_date or date.today(), due_time)
    except ValidationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Task added successfully [{task.id[:SHORT_ID]}]")
    click.echo(_describe_reminder(outcome))


@main.command()
@click.argument("task_id")
def done(task_id: str):
    """Toggle a task's completion."""
    repo = get_repository(load_config())
    task = _resolve(repo, task_id)
    if task is None:
        sys.exit(1)
    complete_task(repo, task.id)
    state = "pending" if task.completed else "completed"
    click.echo(f"Marked '{task.title}' {state}.")


@main.command()
@click.argument("task_id")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def delete(task_id: str, yes: bool):
    """Delete a task."""
    repo = get_repository(load_config())
    task = _resolve(repo, task_id)
    if task is None:
        sys.exit(1)
    if not yes and not click.confirm(DELETE_PROMPT):
        return
    remove_task(repo, task.id)
    click.echo(f"Deleted '{task.title}'.")


@main.command()
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def clear(yes: bool):
    """Delete all completed tasks."""
    repo = get_repository(load_config())
    if not yes and not click.confirm(CLEAR_PROMPT):
        return
    before = len(repo.load())
    after = len(clear_completed_tasks(repo))
    click.echo(f"Cleared {before - after} completed tasks.")


@main.command()
def routine():
    """Show your daily routine."""
    click.echo("🗓️ Your Daily Routine")
    click.echo("Your routine setup will appear here!")


# ============== Interactive session ==============

MENU = {
    "l": "list",
    "a": "add",
    "d": "done",
    "x": "delete",
    "c": "clear",
    "t": "dates",
    "r": "routine",
    "q": "quit",
}


def _default_due(now: datetime) -> datetime:
    """Next whole minute; date and time roll over together past midnight."""
    return now.replace(second=0, microsecond=0) + timedelta(minutes=1)


def _session_add(repo: TaskRepository, notifier: Notifier) -> None:
    title = click.prompt("Task Title", default="", show_default=False)
    if not title.strip():
        click.echo("Please enter a task title.")
        return
    default_due = _default_due(datetime.now())
    due_date = click.prompt("Date", type=DATE, default=format_date(default_due.date()))
    due_time = click.prompt("Time", type=TIME, default=format_time(default_due.time()))
    try:
        task, outcome = add_task(repo, notifier, title, due_date, due_time)
    except ValidationError as e:
        click.echo(f"Invalid: {e}")
        return
    click.echo(f"Task added successfully [{task.id[:SHORT_ID]}]")
    if isinstance(outcome, Declined):
        click.echo(_describe_reminder(outcome))


def _session_pick(repo: TaskRepository) -> Task | None:
    return _resolve(repo, click.prompt("Task id"))


def _run_session(repo: TaskRepository, notifier: Notifier) -> None:
    choices = " ".join(f"[{k}]{v[1:] if v[0] == k else ' ' + v}" for k, v in MENU.items())
    while True:
        click.echo(f"\n🕓 {datetime.now():%I:%M:%S %p}")
        key = click.prompt(choices, type=click.Choice(list(MENU)), default="l", show_choices=False)
        action = MENU[key]

        if action == "quit":
            return
        if action == "list":
            _show_buckets(load_buckets(repo), as_json=False)
        elif action == "dates":
            _show_by_date(load_by_date(repo), as_json=False)
        elif action == "add":
            _session_add(repo, notifier)
        elif action == "done":
            task = _session_pick(repo)
            if task:
                complete_task(repo, task.id)
        elif action == "delete":
            task = _session_pick(repo)
            if task and click.confirm(DELETE_PROMPT):
                remove_task(repo, task.id)
        elif action == "clear":
            if click.confirm(CLEAR_PROMPT):
                clear_completed_tasks(repo)
        elif action == "routine":
            click.echo("Your routine setup will appear here!")


@main.command()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def app(debug: bool):
    """Run the interactive task session with live reminders."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else logging.WARNING,
    )

    config = load_config()
    repo = get_repository(config)
    try:
        notifier = get_notifier(config)
    except ValueError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    granted = notifier.request_permission()
    logger.info(f"Notification permission granted: {granted}")
    rearm_reminders(repo, notifier)

    try:
        _run_session(repo, notifier)
    except (KeyboardInterrupt, click.Abort):
        click.echo()
    finally:
        notifier.shutdown()
        click.echo("Bye.")


if __name__ == "__main__":
    main()
