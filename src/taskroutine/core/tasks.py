"""Pure task domain logic - no I/O dependencies."""

import json
import logging
from dataclasses import dataclass, replace
from datetime import date, datetime, time

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d/%m/%Y"
TIME_FORMAT = "%I:%M %p"
# Accepted on read; always written back as TIME_FORMAT
TIME_INPUT_FORMATS = (TIME_FORMAT, "%I:%M%p", "%H:%M")


@dataclass(frozen=True)
class Task:
    """A to-do item with a due date and time."""

    id: str
    title: str
    date: date
    time: time
    completed: bool = False

    def due_at(self) -> datetime:
        """Local due instant (date + wall clock time, seconds dropped)."""
        return datetime.combine(self.date, self.time.replace(second=0, microsecond=0))

    def date_label(self) -> str:
        return format_date(self.date)

    def time_label(self) -> str:
        return format_time(self.time)

    def toggled(self) -> "Task":
        return replace(self, completed=not self.completed)

    def to_record(self) -> dict:
        """Serialize to the stored record shape."""
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date_label(),
            "time": self.time_label(),
            "completed": self.completed,
        }

    @classmethod
    def from_record(cls, data: dict) -> "Task":
        """Create Task from a stored record. Raises ValueError/KeyError if malformed."""
        task_id = data["id"]
        title = data["title"]
        if not isinstance(task_id, str) or not task_id:
            raise ValueError(f"Invalid task id: {task_id!r}")
        if not isinstance(title, str):
            raise ValueError(f"Invalid task title: {title!r}")
        completed = data.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"Invalid completed flag: {completed!r}")
        return cls(
            id=task_id,
            title=title,
            date=parse_date(data["date"]),
            time=parse_time(data["time"]),
            completed=completed,
        )


def format_date(d: date) -> str:
    """Canonical DD/MM/YYYY form."""
    return d.strftime(DATE_FORMAT)


def format_time(t: time) -> str:
    """Canonical 12-hour hh:mm AM/PM form."""
    return t.strftime(TIME_FORMAT)


def parse_date(value: str) -> date:
    """Parse a DD/MM/YYYY date."""
    return datetime.strptime(value.strip(), DATE_FORMAT).date()


def parse_time(value: str) -> time:
    """Parse hh:mm AM/PM or 24-hour HH:MM into a time with seconds zeroed."""
    value = value.strip().upper()
    for fmt in TIME_INPUT_FORMATS:
        try:
            return datetime.strptime(value, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Unrecognized time: {value!r}")


def tasks_to_blob(tasks) -> str:
    """Serialize the whole collection, preserving order."""
    return json.dumps([t.to_record() for t in tasks])


def tasks_from_blob(blob: str | None) -> tuple[Task, ...]:
    """
    Deserialize a stored collection.

    Fails closed: absent, empty or malformed blobs give an empty collection.
    Malformed records are skipped; duplicate ids keep the first occurrence.
    """
    if not blob:
        return ()
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as e:
        logger.warning(f"Stored tasks are not valid JSON, starting empty: {e}")
        return ()
    if not isinstance(data, list):
        logger.warning(f"Stored tasks are not a list ({type(data).__name__}), starting empty")
        return ()

    tasks = []
    seen: set[str] = set()
    for item in data:
        if not isinstance(item, dict):
            logger.warning(f"Skipping non-record entry: {item!r}")
            continue
        try:
            task = Task.from_record(item)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Skipping malformed task record {item!r}: {e}")
            continue
        if task.id in seen:
            logger.warning(f"Skipping duplicate task id {task.id}")
            continue
        seen.add(task.id)
        tasks.append(task)
    return tuple(tasks)
