# src/remindbot/tasks/task_scheduler.py

from __future__ import annotations

"""
Reminder scanner.

A small polling loop that:
- fetches due tasks,
- sends one reminder per task via an injected messenger port,
- marks delivered tasks and removes them from the store.

A failed send leaves the task undelivered, so the next cycle retries it.
Transport details (keyboards, threads, formatting) belong to the connector.
"""

import asyncio
import contextlib
import logging
import threading
from dataclasses import dataclass
from datetime import datetime

from ..core.ports import OutboundMessenger, TaskRepo
from .task_api import render_reminder

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 10.0


async def scan_once(task_store: TaskRepo, messenger: OutboundMessenger, *, now: datetime | None = None) -> int:
    """
    One scan cycle. Returns the number of reminders delivered.

    Delivery order is insertion order.
    """
    if now is None:
        now = datetime.now()

    try:
        due = task_store.list_due_tasks(now=now)
    except Exception:
        logger.exception("list_due_tasks failed")
        return 0

    delivered = 0
    for task in due:
        try:
            await messenger.send_text(chat_id=task.chat_id, text=render_reminder(task))
        except Exception:
            logger.exception("reminder send failed task_id=%s chat_id=%s", task.id, task.chat_id)
            continue

        if task_store.mark_delivered(task.id):
            delivered += 1
            logger.info("Task %s reminder delivered to chat %s", task.id, task.chat_id)
        else:
            logger.debug("Task %s deleted while its reminder was in flight", task.id)

    removed = task_store.remove_delivered()
    if removed:
        logger.debug("Removed %d delivered task(s)", len(removed))
    return delivered


async def run_reminder_scanner(
        task_store: TaskRepo,
        messenger: OutboundMessenger,
        *,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        stop_event: asyncio.Event | None = None,
) -> None:
    """
    Simple polling scanner.

    Every interval_seconds run scan_once(). Returns when stop_event is set;
    the wait between cycles is interrupted by the event, so shutdown does not
    block for a full interval. Cancelling the coroutine also stops it.
    """
    sleep_s = max(0.01, float(interval_seconds))
    if stop_event is None:
        stop_event = asyncio.Event()

    logger.info("Reminder scanner started (interval=%.1fs)", sleep_s)
    while not stop_event.is_set():
        await scan_once(task_store, messenger)

        with contextlib.suppress(asyncio.TimeoutError):
            await asyncio.wait_for(stop_event.wait(), timeout=sleep_s)

    logger.info("Reminder scanner stopped")


@dataclass
class ScannerBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except RuntimeError:
            logger.debug("Scanner loop already closed.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_scanner_in_background(state, messenger: OutboundMessenger) -> ScannerBackgroundRunner | None:
    """
    Start the reminder scanner in a background thread with its own event loop.

    The console REPL blocks the main thread on input(), so the scanner needs
    a loop of its own.
    """
    interval = float(getattr(state.settings, "reminder_interval_seconds", DEFAULT_INTERVAL_SECONDS))

    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        try:
            loop.run_until_complete(
                run_reminder_scanner(
                    state.task_store,
                    messenger,
                    interval_seconds=interval,
                    stop_event=stop_event,
                )
            )
        except Exception:
            logger.exception("Reminder scanner crashed.")
        finally:
            with contextlib.suppress(Exception):
                loop.close()

    t = threading.Thread(target=runner, name="reminder-scanner", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Scanner thread did not initialize properly.")
        return None

    logger.info("Reminder scanner background thread started.")
    return ScannerBackgroundRunner(thread=t, loop=loop, stop_event=stop_event)
