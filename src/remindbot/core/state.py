# src/remindbot/core/state.py

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


class StoppedChats:
    """Chats that issued /stop and have not sent /start since."""

    def __init__(self, *, lock: threading.RLock | None = None) -> None:
        self._lock = lock or threading.RLock()
        self._chats: set[int] = set()

    def stop(self, chat_id: int) -> None:
        with self._lock:
            self._chats.add(chat_id)

    def resume(self, chat_id: int) -> None:
        with self._lock:
            self._chats.discard(chat_id)

    def is_stopped(self, chat_id: int) -> bool:
        with self._lock:
            return chat_id in self._chats

    def __len__(self) -> int:
        with self._lock:
            return len(self._chats)


@dataclass
class AppState:
    # Settings object (config.Settings or a test SimpleNamespace).
    settings: Any

    task_store: TaskStore
    stopped_chats: StoppedChats

    # Single guard shared by task_store and stopped_chats.
    lock: threading.RLock = field(default_factory=threading.RLock)

    def shutdown(self) -> None:
        logger.info("Shutting down state (stopped chats=%d).", len(self.stopped_chats))
        self.task_store.close()
