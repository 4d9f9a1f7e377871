"""Adapters - I/O implementations of ports."""

from .file_kv_store import FileKeyValueStore
from .blob_task_repo import BlobTaskRepository, TASKS_KEY
from .apscheduler_notifier import APSchedulerNotifier
from .delivery import ConsoleDelivery, TelegramDelivery

__all__ = [
    "FileKeyValueStore",
    "BlobTaskRepository",
    "TASKS_KEY",
    "APSchedulerNotifier",
    "ConsoleDelivery",
    "TelegramDelivery",
]
