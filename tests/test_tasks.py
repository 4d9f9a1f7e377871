"""Tests for the Task record and blob codec."""

import json
from datetime import date, datetime, time

import pytest

from taskroutine.core.tasks import (
    Task,
    format_time,
    parse_date,
    parse_time,
    tasks_from_blob,
    tasks_to_blob,
)


@pytest.fixture
def task():
    return Task(id="a1", title="Buy milk", date=date(2025, 1, 15), time=time(9, 30))


class TestTask:
    def test_defaults_to_pending(self, task):
        assert task.completed is False

    def test_due_at_combines_date_and_time(self, task):
        assert task.due_at() == datetime(2025, 1, 15, 9, 30)

    def test_due_at_drops_seconds(self):
        t = Task(id="a", title="x", date=date(2025, 1, 15), time=time(9, 30, 45))
        assert t.due_at() == datetime(2025, 1, 15, 9, 30, 0)

    def test_labels(self, task):
        assert task.date_label() == "15/01/2025"
        assert task.time_label() == "09:30 AM"

    def test_toggled_flips_only_completed(self, task):
        toggled = task.toggled()
        assert toggled.completed is True
        assert (toggled.id, toggled.title, toggled.date, toggled.time) == (
            task.id,
            task.title,
            task.date,
            task.time,
        )
        assert task.completed is False

    def test_is_frozen(self, task):
        with pytest.raises(AttributeError):
            task.completed = True

    def test_to_record(self, task):
        assert task.to_record() == {
            "id": "a1",
            "title": "Buy milk",
            "date": "15/01/2025",
            "time": "09:30 AM",
            "completed": False,
        }

    def test_from_record(self):
        t = Task.from_record(
            {"id": "b2", "title": "Gym", "date": "01/02/2025", "time": "06:15 PM", "completed": True}
        )
        assert t == Task(id="b2", title="Gym", date=date(2025, 2, 1), time=time(18, 15), completed=True)

    def test_from_record_missing_completed(self):
        t = Task.from_record({"id": "b2", "title": "Gym", "date": "01/02/2025", "time": "06:15 PM"})
        assert t.completed is False


class TestParsing:
    def test_parse_date_is_day_first(self):
        assert parse_date("03/04/2025") == date(2025, 4, 3)

    def test_parse_date_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_date("2025-04-03")

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("12:00 AM", time(0, 0)),
            ("12:30 PM", time(12, 30)),
            ("01:05 pm", time(13, 5)),
            ("9:45PM", time(21, 45)),
            ("21:45", time(21, 45)),
        ],
    )
    def test_parse_time(self, text, expected):
        assert parse_time(text) == expected

    def test_parse_time_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_time("noon")

    def test_format_time_midnight_and_noon(self):
        assert format_time(time(0, 0)) == "12:00 AM"
        assert format_time(time(12, 0)) == "12:00 PM"


class TestBlobCodec:
    def test_roundtrip_preserves_order(self):
        tasks = (
            Task(id="2", title="Second", date=date(2025, 1, 16), time=time(8, 0)),
            Task(id="1", title="First", date=date(2025, 1, 15), time=time(23, 59), completed=True),
        )
        assert tasks_from_blob(tasks_to_blob(tasks)) == tasks

    def test_blob_uses_stored_field_formats(self, task):
        records = json.loads(tasks_to_blob([task]))
        assert records == [task.to_record()]

    @pytest.mark.parametrize("blob", [None, "", "not json", "{}", '"tasks"', "42"])
    def test_malformed_blob_is_empty(self, blob):
        assert tasks_from_blob(blob) == ()

    def test_malformed_records_are_skipped(self, task):
        blob = json.dumps(
            [
                "oops",
                {"id": "x", "title": "No date", "time": "09:00 AM"},
                {"id": "y", "title": "Bad date", "date": "2025-01-15", "time": "09:00 AM"},
                {"id": "", "title": "Empty id", "date": "15/01/2025", "time": "09:00 AM"},
                {"id": "z", "title": "Bad time", "date": "15/01/2025", "time": 900},
                task.to_record(),
            ]
        )
        assert tasks_from_blob(blob) == (task,)

    @pytest.mark.parametrize("flag", ["false", "0", 0, 1, None, "true"])
    def test_non_bool_completed_is_skipped(self, task, flag):
        bad = dict(task.to_record(), id="bad", completed=flag)
        assert tasks_from_blob(json.dumps([bad, task.to_record()])) == (task,)

    def test_duplicate_ids_keep_first(self, task):
        dup = dict(task.to_record(), title="Imposter")
        assert tasks_from_blob(json.dumps([task.to_record(), dup])) == (task,)
