"""Notification subsystem interface."""

from datetime import datetime
from typing import Protocol

from taskroutine.core.reminders import ScheduledHandle


class Notifier(Protocol):
    """Interface for one-shot local reminders."""

    def request_permission(self) -> bool:
        """Ask to deliver notifications. Callers do not block on the answer."""
        ...

    def schedule_one_shot(self, title: str, body: str, trigger_at: datetime, task_id: str = "") -> ScheduledHandle:
        """Fire a notification once at `trigger_at`. Fire-and-forget."""
        ...
