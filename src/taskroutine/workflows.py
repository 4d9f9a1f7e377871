"""Shared workflow layer between the CLI commands and the interactive session.

Each mutating workflow loads the collection from the repository, applies a
pure lifecycle operation, saves the result, and returns it.
"""

import logging
from collections.abc import Sequence
from datetime import date, datetime, time
from pathlib import Path

from .adapters.apscheduler_notifier import APSchedulerNotifier
from .adapters.blob_task_repo import BlobTaskRepository
from .adapters.delivery import ConsoleDelivery, TelegramDelivery
from .adapters.file_kv_store import FileKeyValueStore
from .config import DATA_DIR, Config
from .core.buckets import Buckets, bucket_tasks, group_by_date
from .core.lifecycle import clear_completed, create_task, delete_task, toggle_complete
from .core.reminders import Declined, ReminderRequest, ScheduledHandle, plan_reminder
from .core.tasks import Task
from .ports import Notifier, TaskRepository

logger = logging.getLogger(__name__)

ReminderOutcome = ScheduledHandle | ReminderRequest | Declined


def get_repository(config: Config) -> BlobTaskRepository:
    """Resolve the task repository from config."""
    data_dir = Path(config.data_dir).expanduser() if config.data_dir else DATA_DIR
    return BlobTaskRepository(FileKeyValueStore(data_dir))


def get_notifier(config: Config) -> APSchedulerNotifier:
    """Resolve the notifier and its delivery channel from config."""
    if config.notify_channel == "telegram":
        deliver = TelegramDelivery(config.telegram_bot_token, config.telegram_chat_id)
    else:
        deliver = ConsoleDelivery(sound=config.notify_sound)
    return APSchedulerNotifier(deliver, misfire_grace_seconds=config.misfire_grace_seconds)


# ============== Reminders ==============


def schedule_reminder(
    task: Task,
    notifier: Notifier | None,
    now: datetime | None = None,
) -> ReminderOutcome:
    """
    Plan a reminder for a task and hand it to the notifier.

    Returns Declined when the task's instant has passed or the notifier
    fails; never raises. With no notifier the planned request is returned
    unsubmitted.
    """
    now = now or datetime.now()
    planned = plan_reminder(task, now)
    if isinstance(planned, Declined):
        logger.info(f"Selected time is in the past. Reminder for task {task.id} not scheduled.")
        return planned
    if notifier is None:
        return planned

    try:
        return notifier.schedule_one_shot(
            planned.title, planned.body, planned.trigger_at, task_id=task.id
        )
    except Exception as e:
        # NotificationSchedulingError from our adapters; anything else from third-party notifiers
        logger.error(f"Error scheduling reminder for task {task.id}: {e}")
        return Declined(task_id=task.id, trigger_at=planned.trigger_at, reason="scheduling failed")


def rearm_reminders(
    repo: TaskRepository,
    notifier: Notifier,
    now: datetime | None = None,
) -> list[ScheduledHandle]:
    """Schedule reminders for every pending task that is still in the future."""
    now = now or datetime.now()
    handles = []
    for task in repo.load():
        if task.completed:
            continue
        outcome = schedule_reminder(task, notifier, now)
        if isinstance(outcome, ScheduledHandle):
            handles.append(outcome)
    logger.info(f"Re-armed {len(handles)} reminders")
    return handles


# ============== Lifecycle ==============


def add_task(
    repo: TaskRepository,
    notifier: Notifier | None,
    title: str,
    due_date: date,
    due_time: time,
    now: datetime | None = None,
) -> tuple[Task, ReminderOutcome]:
    """
    Create, persist, and schedule a reminder for a new task.

    ValidationError propagates with nothing saved. The task is saved
    regardless of the reminder outcome.
    """
    now = now or datetime.now()
    tasks, task = create_task(repo.load(), title, due_date, due_time, now)
    repo.save(tasks)
    logger.info(f"Added task {task.id} due {task.date_label()} {task.time_label()}")
    return task, schedule_reminder(task, notifier, now)


def complete_task(repo: TaskRepository, task_id: str) -> tuple[Task, ...]:
    """Toggle completion of a task and persist."""
    tasks = toggle_complete(repo.load(), task_id)
    repo.save(tasks)
    return tasks


def remove_task(repo: TaskRepository, task_id: str) -> tuple[Task, ...]:
    """Delete a task and persist. The caller confirms first."""
    tasks = delete_task(repo.load(), task_id)
    repo.save(tasks)
    return tasks


def clear_completed_tasks(repo: TaskRepository) -> tuple[Task, ...]:
    """Delete every completed task and persist. The caller confirms first."""
    tasks = clear_completed(repo.load())
    repo.save(tasks)
    return tasks


# ============== Views ==============


def load_buckets(repo: TaskRepository, now: datetime | None = None) -> Buckets:
    """Fresh load of the home view."""
    return bucket_tasks(repo.load(), now or datetime.now())


def load_by_date(repo: TaskRepository) -> dict[date, tuple[Task, ...]]:
    """Fresh load of the all-tasks-by-date view."""
    return group_by_date(repo.load())


def find_task(tasks: Sequence[Task], id_or_prefix: str) -> Task | None:
    """Resolve a full id or a unique id prefix."""
    id_or_prefix = id_or_prefix.strip()
    if not id_or_prefix:
        return None
    for task in tasks:
        if task.id == id_or_prefix:
            return task
    matches = [t for t in tasks if t.id.startswith(id_or_prefix)]
    return matches[0] if len(matches) == 1 else None
