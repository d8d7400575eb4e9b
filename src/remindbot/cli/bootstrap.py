# src/remindbot/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the shared lock, task store and stopped-chat set into AppState.
"""

from __future__ import annotations

import logging
import threading

from ..config import get_settings
from ..core.state import AppState, StoppedChats
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    # One lock for every piece of shared mutable state.
    lock = threading.RLock()

    state = AppState(
        settings=settings,
        task_store=TaskStore(lock=lock),
        stopped_chats=StoppedChats(lock=lock),
        lock=lock,
    )
    return state
