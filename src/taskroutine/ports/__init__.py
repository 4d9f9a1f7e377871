"""Ports - interfaces/protocols for external dependencies."""

from .task_repo import TaskRepository
from .kv_store import KeyValueStore
from .notifier import Notifier

__all__ = [
    "TaskRepository",
    "KeyValueStore",
    "Notifier",
]
