"""Task repository interface."""

from collections.abc import Sequence
from typing import Protocol

from taskroutine.core.tasks import Task


class TaskRepository(Protocol):
    """Interface for loading and saving the whole task collection."""

    def load(self) -> tuple[Task, ...]:
        """Load all tasks. Returns an empty collection if nothing is stored."""
        ...

    def save(self, tasks: Sequence[Task]) -> None:
        """Replace the stored collection."""
        ...
