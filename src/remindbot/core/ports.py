# src/remindbot/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps connectors and storage swappable and makes testing easier.
"""

from collections.abc import Awaitable
from datetime import datetime
from typing import Protocol

from ..tasks.task_models import Task


class OutboundMessenger(Protocol):
    """
    Connector-side port: how services (reminder scanner) send text outward.

    show_menu asks the connector to attach the main menu, if it has one.
    """

    def send_text(
            self,
            *,
            chat_id: int,
            text: str,
            show_menu: bool = False,
    ) -> Awaitable[None]: ...


class TaskRepo(Protocol):
    # Dispatcher API
    def add_task(self, *, description: str, reminder_time: datetime, chat_id: int) -> Task: ...
    def list_tasks(self, chat_id: int | None = None) -> list[Task]: ...
    def count_tasks(self, chat_id: int | None = None) -> int: ...
    def delete_at_position(self, position: int, chat_id: int | None = None) -> Task | None: ...

    # Scanner API
    def list_due_tasks(self, *, now: datetime) -> list[Task]: ...
    def mark_delivered(self, task_id: int) -> bool: ...
    def remove_delivered(self) -> list[Task]: ...
