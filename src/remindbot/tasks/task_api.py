# src/remindbot/tasks/task_api.py

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime

from ..core import texts
from ..core.state import AppState
from .task_models import Task

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = ";"
DEFAULT_DATETIME_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%d.%m.%Y %H:%M",
)
DEFAULT_DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"


class TaskFormatError(ValueError):
    """User-supplied task entry does not match `<description><sep><date-time>`."""


def parse_datetime(raw: str, formats: Iterable[str] = DEFAULT_DATETIME_FORMATS) -> datetime:
    value = raw.strip()
    for fmt in formats:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise TaskFormatError(f"unrecognized date-time: {raw!r}")


def parse_task_entry(
    text: str,
    *,
    separator: str = DEFAULT_SEPARATOR,
    formats: Iterable[str] = DEFAULT_DATETIME_FORMATS,
) -> tuple[str, datetime]:
    """
    Split "description;YYYY-MM-DD HH:MM" into (description, reminder_time).

    Exactly one separator is allowed and the description must not be blank.
    """
    parts = text.split(separator)
    if len(parts) != 2:
        raise TaskFormatError(f"expected exactly 2 parts, got {len(parts)}")

    description = parts[0].strip()
    if not description:
        raise TaskFormatError("description is empty")

    return description, parse_datetime(parts[1], formats)


def add_task_from_entry(state: AppState, chat_id: int, text: str) -> Task:
    """Parse a task entry and store it for `chat_id`. Raises TaskFormatError."""
    settings = state.settings
    description, reminder_time = parse_task_entry(
        text,
        separator=getattr(settings, "task_separator", DEFAULT_SEPARATOR),
        formats=getattr(settings, "datetime_formats", DEFAULT_DATETIME_FORMATS),
    )
    task = state.task_store.add_task(
        description=description,
        reminder_time=reminder_time,
        chat_id=chat_id,
    )
    logger.info("Task %s added chat_id=%s due=%s", task.id, chat_id, reminder_time)
    return task


def format_task_lines(tasks: Sequence[Task], display_format: str = DEFAULT_DISPLAY_FORMAT) -> list[str]:
    return [
        texts.TASK_LINE.format(
            n=i,
            description=t.description,
            when=t.reminder_time.strftime(display_format),
        )
        for i, t in enumerate(tasks, start=1)
    ]


def render_reminder(task: Task) -> str:
    return texts.REMINDER.format(description=task.description)
