"""Task repository over a key-value blob store."""

import logging
from collections.abc import Sequence

from taskroutine.core.errors import StorageError
from taskroutine.core.tasks import Task, tasks_from_blob, tasks_to_blob
from taskroutine.ports.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"


class BlobTaskRepository:
    """
    Stores the whole collection as one serialized blob.

    Implements TaskRepository protocol. Storage failures are logged and
    swallowed: a failed load reads as empty, a failed save leaves the caller's
    in-memory collection ahead of what is persisted.
    """

    def __init__(self, store: KeyValueStore, key: str = TASKS_KEY):
        self.store = store
        self.key = key

    def load(self) -> tuple[Task, ...]:
        """Load all tasks. Absent or unreadable data gives an empty collection."""
        try:
            blob = self.store.get(self.key)
        except StorageError:
            logger.exception("Error loading tasks")
            return ()
        return tasks_from_blob(blob)

    def save(self, tasks: Sequence[Task]) -> None:
        """Replace the stored collection."""
        try:
            self.store.set(self.key, tasks_to_blob(tasks))
        except StorageError:
            logger.exception("Error saving tasks")
            return
        logger.debug(f"Saved {len(tasks)} tasks")
