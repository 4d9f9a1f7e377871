"""
Task lifecycle operations.

Each operation takes the current collection and returns a new one.
Inputs are never mutated.
"""

import uuid
from collections.abc import Callable, Sequence
from datetime import date, datetime, time

from .errors import ValidationError
from .tasks import Task

EMPTY_TITLE_MESSAGE = "Please enter a task title."
PAST_INSTANT_MESSAGE = "Please select a future date and time."


def new_task_id() -> str:
    return uuid.uuid4().hex


def create_task(
    tasks: Sequence[Task],
    title: str,
    due_date: date,
    due_time: time,
    now: datetime,
    id_factory: Callable[[], str] | None = None,
) -> tuple[tuple[Task, ...], Task]:
    """
    Validate and append a new pending task.

    Returns (new collection, created task). Raises ValidationError on an
    empty title or a due instant that is not after `now`.
    """
    if not title or not title.strip():
        raise ValidationError(EMPTY_TITLE_MESSAGE)

    due_time = due_time.replace(second=0, microsecond=0)
    if datetime.combine(due_date, due_time) <= now:
        raise ValidationError(PAST_INSTANT_MESSAGE)

    id_factory = id_factory or new_task_id
    existing = {t.id for t in tasks}
    task_id = id_factory()
    while task_id in existing:
        task_id = id_factory()

    task = Task(id=task_id, title=title, date=due_date, time=due_time)
    return (*tasks, task), task


def toggle_complete(tasks: Sequence[Task], task_id: str) -> tuple[Task, ...]:
    """Flip `completed` on the matching task. Unknown ids are a no-op."""
    return tuple(t.toggled() if t.id == task_id else t for t in tasks)


def delete_task(tasks: Sequence[Task], task_id: str) -> tuple[Task, ...]:
    """Remove the matching task, if present."""
    return tuple(t for t in tasks if t.id != task_id)


def clear_completed(tasks: Sequence[Task]) -> tuple[Task, ...]:
    """Remove every completed task."""
    return tuple(t for t in tasks if not t.completed)
