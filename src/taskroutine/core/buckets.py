"""Pure display bucketing - no I/O dependencies."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from .tasks import Task


@dataclass(frozen=True)
class Buckets:
    """Tasks grouped for the home view."""

    today: tuple[Task, ...] = ()
    tomorrow: tuple[Task, ...] = ()
    upcoming: tuple[Task, ...] = ()
    completed: tuple[Task, ...] = ()

    @property
    def pending_count(self) -> int:
        return len(self.today) + len(self.tomorrow) + len(self.upcoming)

    def is_empty(self) -> bool:
        return self.pending_count == 0 and not self.completed


def _by_time(t: Task):
    return t.time


def _by_date_then_time(t: Task):
    return (t.date, t.time)


def bucket_tasks(tasks: Iterable[Task], now: datetime) -> Buckets:
    """
    Partition tasks into today / tomorrow / upcoming / completed.

    Only the calendar date of `now` is used. Pending tasks dated before
    today (overdue) fall into no bucket at all.

    Pure function - no I/O, input is not modified.
    """
    today = now.date()
    tomorrow = today + timedelta(days=1)

    todays, tomorrows, upcoming, completed = [], [], [], []
    for task in tasks:
        if task.completed:
            completed.append(task)
        elif task.date == today:
            todays.append(task)
        elif task.date == tomorrow:
            tomorrows.append(task)
        elif task.date > tomorrow:
            upcoming.append(task)
        # Overdue pending tasks are hidden from the home view

    return Buckets(
        today=tuple(sorted(todays, key=_by_time)),
        tomorrow=tuple(sorted(tomorrows, key=_by_time)),
        upcoming=tuple(sorted(upcoming, key=_by_date_then_time)),
        completed=tuple(completed),
    )


def group_by_date(tasks: Iterable[Task]) -> dict[date, tuple[Task, ...]]:
    """
    Group every task by calendar date, completed and overdue included.

    Keys are in calendar order, each group sorted by time.
    """
    grouped: dict[date, list[Task]] = {}
    for task in tasks:
        grouped.setdefault(task.date, []).append(task)
    return {d: tuple(sorted(grouped[d], key=_by_time)) for d in sorted(grouped)}
