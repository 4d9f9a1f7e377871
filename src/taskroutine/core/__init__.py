"""Functional core - pure business logic with no I/O."""

from .tasks import Task, tasks_from_blob, tasks_to_blob, parse_date, parse_time
from .buckets import Buckets, bucket_tasks, group_by_date
from .lifecycle import create_task, toggle_complete, delete_task, clear_completed
from .reminders import REMINDER_TITLE, ReminderRequest, Declined, ScheduledHandle, plan_reminder
from .errors import ValidationError, StorageError, NotificationSchedulingError

__all__ = [
    # Tasks
    "Task",
    "tasks_from_blob",
    "tasks_to_blob",
    "parse_date",
    "parse_time",
    # Buckets
    "Buckets",
    "bucket_tasks",
    "group_by_date",
    # Lifecycle
    "create_task",
    "toggle_complete",
    "delete_task",
    "clear_completed",
    # Reminders
    "REMINDER_TITLE",
    "ReminderRequest",
    "Declined",
    "ScheduledHandle",
    "plan_reminder",
    # Errors
    "ValidationError",
    "StorageError",
    "NotificationSchedulingError",
]
