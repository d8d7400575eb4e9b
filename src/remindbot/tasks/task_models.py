# src/remindbot/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class Task:
    """
    One user-entered reminder.

    Notes:
    - id is assigned by the store and never reused; positional numbering exists
      only in listings.
    - delivered is a transient marker: the scanner removes delivered tasks in
      the same pass that sent them.
    """

    id: int
    description: str
    reminder_time: datetime
    chat_id: int
    delivered: bool = False

    def is_due(self, now: datetime) -> bool:
        return not self.delivered and self.reminder_time <= now
