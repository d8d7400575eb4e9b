# tests/test_task_store.py

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from remindbot.tasks.task_models import Task
from remindbot.tasks.task_store import TaskStore


def _at(minutes: int) -> datetime:
    return datetime.now() + timedelta(minutes=minutes)


def test_add_list_preserves_insertion_order() -> None:
    store = TaskStore()
    a = store.add_task(description="a", reminder_time=_at(10), chat_id=1)
    b = store.add_task(description="b", reminder_time=_at(5), chat_id=2)

    assert a.id != b.id
    assert not a.delivered
    assert [t.description for t in store.list_tasks()] == ["a", "b"]
    assert [t.description for t in store.list_tasks(chat_id=2)] == ["b"]
    assert store.count_tasks() == 2
    assert store.count_tasks(chat_id=1) == 1


def test_list_returns_copies() -> None:
    store = TaskStore()
    store.add_task(description="a", reminder_time=_at(10), chat_id=1)

    snapshot = store.list_tasks()
    snapshot[0].delivered = True
    snapshot.clear()

    assert store.count_tasks() == 1
    assert store.list_tasks()[0].delivered is False


def test_add_requires_description() -> None:
    store = TaskStore()
    with pytest.raises(ValueError):
        store.add_task(description="   ", reminder_time=_at(1), chat_id=1)


def test_delete_at_position_is_one_based_and_range_checked() -> None:
    store = TaskStore()
    for name in ("a", "b", "c"):
        store.add_task(description=name, reminder_time=_at(10), chat_id=1)

    assert store.delete_at_position(0) is None
    assert store.delete_at_position(4) is None

    removed = store.delete_at_position(2)
    assert removed is not None and removed.description == "b"
    assert [t.description for t in store.list_tasks()] == ["a", "c"]


def test_delete_at_position_scoped_to_chat() -> None:
    store = TaskStore()
    store.add_task(description="mine-1", reminder_time=_at(10), chat_id=1)
    store.add_task(description="other", reminder_time=_at(10), chat_id=2)
    store.add_task(description="mine-2", reminder_time=_at(10), chat_id=1)

    removed = store.delete_at_position(2, chat_id=1)
    assert removed is not None and removed.description == "mine-2"
    assert [t.description for t in store.list_tasks()] == ["mine-1", "other"]


def test_due_mark_and_remove_delivered() -> None:
    store = TaskStore()
    past = store.add_task(description="past", reminder_time=_at(-1), chat_id=1)
    store.add_task(description="future", reminder_time=_at(60), chat_id=1)

    due = store.list_due_tasks(now=datetime.now())
    assert [t.id for t in due] == [past.id]

    assert store.mark_delivered(past.id) is True
    assert store.list_due_tasks(now=datetime.now()) == []

    removed = store.remove_delivered()
    assert [t.id for t in removed] == [past.id]
    assert [t.description for t in store.list_tasks()] == ["future"]


def test_mark_delivered_after_delete_is_noop() -> None:
    store = TaskStore()
    t = store.add_task(description="x", reminder_time=_at(-1), chat_id=1)
    assert store.delete_task(t.id) is not None
    assert store.mark_delivered(t.id) is False
    assert store.remove_delivered() == []


def test_close_drops_pending_tasks() -> None:
    store = TaskStore()
    store.add_task(description="x", reminder_time=_at(1), chat_id=1)
    store.close()
    assert store.count_tasks() == 0


def test_task_carries_only_model_fields() -> None:
    store = TaskStore()
    task = store.add_task(description="x", reminder_time=_at(1), chat_id=1)

    assert set(Task.__dataclass_fields__) == {"id", "description", "reminder_time", "chat_id", "delivered"}
    assert task.delivered is False
