# src/remindbot/tasks/task_store.py

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import replace
from datetime import datetime

from .task_models import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory task store.

    The list is the single owner of task state:
    - insertion order is both the listing order and the delivery order
    - callers only ever receive copies, never the live list

    Thread-safety:
    - every method runs under one re-entrant lock; AppState shares that lock
      with the stopped-chat set so all mutable state has a single guard
    """

    def __init__(self, *, lock: threading.RLock | None = None) -> None:
        self._lock = lock or threading.RLock()
        self._tasks: list[Task] = []
        self._ids = itertools.count(1)
        logger.info("TaskStore ready (in-memory)")

    def close(self) -> None:
        """Shutdown hook: nothing is persisted, pending tasks are dropped."""
        with self._lock:
            dropped = len(self._tasks)
            self._tasks.clear()
        if dropped:
            logger.warning("TaskStore closed, %d pending task(s) dropped", dropped)
        else:
            logger.info("TaskStore closed")

    # ---- low-level helpers ----

    def _visible(self, chat_id: int | None) -> list[Task]:
        if chat_id is None:
            return list(self._tasks)
        return [t for t in self._tasks if t.chat_id == chat_id]

    # ---- public API ----

    def count_tasks(self, chat_id: int | None = None) -> int:
        with self._lock:
            return len(self._visible(chat_id))

    def add_task(self, *, description: str, reminder_time: datetime, chat_id: int) -> Task:
        if not description or not description.strip():
            raise ValueError("description is required")

        with self._lock:
            task = Task(
                id=next(self._ids),
                description=description.strip(),
                reminder_time=reminder_time,
                chat_id=chat_id,
            )
            self._tasks.append(task)
            logger.debug(
                "Task added id=%s chat_id=%s reminder_time=%s",
                task.id,
                chat_id,
                reminder_time,
            )
            return replace(task)

    def list_tasks(self, chat_id: int | None = None) -> list[Task]:
        """Snapshot of tasks in insertion order (optionally one chat only)."""
        with self._lock:
            return [replace(t) for t in self._visible(chat_id)]

    def delete_task(self, task_id: int) -> Task | None:
        with self._lock:
            for i, t in enumerate(self._tasks):
                if t.id == task_id:
                    del self._tasks[i]
                    logger.debug("Task deleted id=%s", task_id)
                    return t
        return None

    def delete_at_position(self, position: int, chat_id: int | None = None) -> Task | None:
        """
        Delete the task shown at 1-based `position` in the current listing.

        The position is resolved to a task id and removed under the same lock,
        so a concurrent scanner pass cannot make it hit a different task.
        Out of range returns None.
        """
        with self._lock:
            visible = self._visible(chat_id)
            if position < 1 or position > len(visible):
                return None
            return self.delete_task(visible[position - 1].id)

    def list_due_tasks(self, *, now: datetime) -> list[Task]:
        """
        Return tasks that are ready to be delivered.

        A task is due if it is not delivered yet and reminder_time <= now.
        Order is insertion order (stable for equal reminder times).
        """
        with self._lock:
            return [replace(t) for t in self._tasks if t.is_due(now)]

    def mark_delivered(self, task_id: int) -> bool:
        """Flag a task as delivered. False if it was deleted in the meantime."""
        with self._lock:
            for t in self._tasks:
                if t.id == task_id:
                    t.delivered = True
                    return True
        return False

    def remove_delivered(self) -> list[Task]:
        with self._lock:
            removed = [t for t in self._tasks if t.delivered]
            if removed:
                self._tasks = [t for t in self._tasks if not t.delivered]
            return removed
