"""Pure reminder planning - no I/O dependencies."""

from dataclasses import dataclass
from datetime import datetime

from .tasks import Task

REMINDER_TITLE = "Task Reminder"


@dataclass(frozen=True)
class ReminderRequest:
    """A one-shot reminder ready to hand to a notifier."""

    task_id: str
    title: str
    body: str
    trigger_at: datetime


@dataclass(frozen=True)
class Declined:
    """No reminder was submitted for a task."""

    task_id: str
    trigger_at: datetime
    reason: str


@dataclass(frozen=True)
class ScheduledHandle:
    """
    Opaque handle for a submitted reminder.

    There is no cancel operation: deleting or completing the task does
    not retract a reminder that has already been submitted.
    """

    id: str
    task_id: str
    trigger_at: datetime


def plan_reminder(task: Task, now: datetime) -> ReminderRequest | Declined:
    """
    Build the reminder for a task, or decline if its instant has passed.

    Pure function - no I/O.
    """
    trigger_at = task.due_at()
    if trigger_at <= now:
        return Declined(task_id=task.id, trigger_at=trigger_at, reason="time is in the past")
    return ReminderRequest(
        task_id=task.id,
        title=REMINDER_TITLE,
        body=task.title,
        trigger_at=trigger_at,
    )
