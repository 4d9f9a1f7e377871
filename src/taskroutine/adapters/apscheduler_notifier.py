"""APScheduler notifier adapter - in-process one-shot reminders."""

import logging
import uuid
from collections.abc import Callable
from datetime import datetime

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.date import DateTrigger

from taskroutine.core.errors import NotificationSchedulingError
from taskroutine.core.reminders import ScheduledHandle

logger = logging.getLogger(__name__)

Delivery = Callable[[str, str], None]


class APSchedulerNotifier:
    """
    One-shot reminders on a background APScheduler.

    Implements Notifier protocol. Each reminder is a job with a DateTrigger
    that calls `deliver(title, body)` once. Jobs live only as long as the
    process; nothing is persisted and nothing is ever cancelled.
    """

    def __init__(
        self,
        deliver: Delivery,
        misfire_grace_seconds: int = 60,
        scheduler: BackgroundScheduler | None = None,
    ):
        self.deliver = deliver
        self.misfire_grace_seconds = misfire_grace_seconds
        self.scheduler = scheduler or BackgroundScheduler()

    def request_permission(self) -> bool:
        """Start delivering. A terminal has no permission prompt, so always granted."""
        if not self.scheduler.running:
            self.scheduler.start()
            logger.info("Reminder scheduler started")
        return True

    def schedule_one_shot(self, title: str, body: str, trigger_at: datetime, task_id: str = "") -> ScheduledHandle:
        """Register a job that fires once at `trigger_at`."""
        handle_id = uuid.uuid4().hex
        try:
            self.scheduler.add_job(
                self._fire,
                DateTrigger(run_date=trigger_at),
                args=[title, body],
                id=handle_id,
                misfire_grace_time=self.misfire_grace_seconds,
            )
        except Exception as e:
            raise NotificationSchedulingError(f"APScheduler rejected reminder: {e}") from e
        logger.info(f"Scheduled reminder {handle_id} for task {task_id or '?'} at {trigger_at:%d/%m/%Y %I:%M %p}")
        return ScheduledHandle(id=handle_id, task_id=task_id, trigger_at=trigger_at)

    def _fire(self, title: str, body: str) -> None:
        try:
            self.deliver(title, body)
        except Exception as e:
            logger.error(f"Failed to deliver reminder '{body}': {e}")

    def shutdown(self) -> None:
        """Stop the scheduler. Pending reminders are dropped."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Reminder scheduler stopped")
