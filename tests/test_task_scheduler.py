# tests/test_task_scheduler.py

from __future__ import annotations

import asyncio
import time
from datetime import datetime, timedelta

import pytest

from remindbot.connectors.routing import RoutingMessenger
from remindbot.tasks.task_scheduler import run_reminder_scanner, scan_once, start_scanner_in_background
from remindbot.tasks.task_store import TaskStore

from .fakes import FakeMessenger


def _past() -> datetime:
    return datetime.now() - timedelta(minutes=1)


def _future() -> datetime:
    return datetime.now() + timedelta(hours=1)


@pytest.mark.asyncio
async def test_scan_delivers_due_task_once_and_removes_it() -> None:
    store = TaskStore()
    store.add_task(description="ping", reminder_time=_past(), chat_id=5)
    store.add_task(description="later", reminder_time=_future(), chat_id=5)
    messenger = FakeMessenger()

    assert await scan_once(store, messenger) == 1
    assert await scan_once(store, messenger) == 0

    assert [(m.chat_id, m.text) for m in messenger.sent] == [(5, "Напоминание: ping")]
    assert [t.description for t in store.list_tasks()] == ["later"]


@pytest.mark.asyncio
async def test_scan_delivers_in_insertion_order() -> None:
    store = TaskStore()
    same_time = _past()
    for name in ("first", "second", "third"):
        store.add_task(description=name, reminder_time=same_time, chat_id=1)
    messenger = FakeMessenger()

    await scan_once(store, messenger)

    assert [m.text for m in messenger.sent] == [
        "Напоминание: first",
        "Напоминание: second",
        "Напоминание: third",
    ]
    assert store.count_tasks() == 0


@pytest.mark.asyncio
async def test_failed_send_is_retried_next_cycle() -> None:
    store = TaskStore()
    store.add_task(description="unreachable", reminder_time=_past(), chat_id=9)
    store.add_task(description="fine", reminder_time=_past(), chat_id=1)
    messenger = FakeMessenger(failing_chats={9})

    assert await scan_once(store, messenger) == 1
    remaining = store.list_tasks()
    assert [t.description for t in remaining] == ["unreachable"]
    assert remaining[0].delivered is False

    messenger.failing_chats.clear()
    assert await scan_once(store, messenger) == 1
    assert [m.text for m in messenger.sent] == ["Напоминание: fine", "Напоминание: unreachable"]
    assert store.count_tasks() == 0


@pytest.mark.asyncio
async def test_scanner_loop_runs_until_stop_event() -> None:
    store = TaskStore()
    store.add_task(description="ping", reminder_time=_past(), chat_id=3)
    messenger = FakeMessenger()
    stop_event = asyncio.Event()

    runner = asyncio.create_task(
        run_reminder_scanner(store, messenger, interval_seconds=0.01, stop_event=stop_event)
    )
    await asyncio.sleep(0.05)
    stop_event.set()
    await asyncio.wait_for(runner, timeout=1.0)

    assert len(messenger.sent) == 1
    assert messenger.sent[0].chat_id == 3


@pytest.mark.asyncio
async def test_scanner_stop_interrupts_long_interval() -> None:
    store = TaskStore()
    messenger = FakeMessenger()
    stop_event = asyncio.Event()

    runner = asyncio.create_task(
        run_reminder_scanner(store, messenger, interval_seconds=3600, stop_event=stop_event)
    )
    await asyncio.sleep(0.01)
    stop_event.set()
    await asyncio.wait_for(runner, timeout=1.0)


@pytest.mark.asyncio
async def test_scanner_can_be_cancelled() -> None:
    runner = asyncio.create_task(
        run_reminder_scanner(TaskStore(), FakeMessenger(), interval_seconds=3600)
    )
    await asyncio.sleep(0.01)
    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner


@pytest.mark.asyncio
async def test_routing_messenger_without_target_keeps_task() -> None:
    store = TaskStore()
    store.add_task(description="tg", reminder_time=_past(), chat_id=77)
    console = FakeMessenger()
    messenger = RoutingMessenger(console=console, telegram=None, console_chat_id=0)

    assert await scan_once(store, messenger) == 0
    assert store.count_tasks() == 1

    store.add_task(description="local", reminder_time=_past(), chat_id=0)
    assert await scan_once(store, messenger) == 1
    assert [m.text for m in console.sent] == ["Напоминание: local"]


def test_background_scanner_delivers_and_stops(state) -> None:
    state.task_store.add_task(description="bg", reminder_time=_past(), chat_id=1)
    messenger = FakeMessenger()

    runner = start_scanner_in_background(state, messenger)
    assert runner is not None

    deadline = time.monotonic() + 2.0
    while not messenger.sent and time.monotonic() < deadline:
        time.sleep(0.01)

    runner.stop()
    runner.join(timeout=2.0)

    assert not runner.thread.is_alive()
    assert [m.text for m in messenger.sent] == ["Напоминание: bg"]
    assert state.task_store.count_tasks() == 0
