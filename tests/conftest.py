# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from remindbot.cli.bootstrap import create_initial_state
from remindbot.core.state import AppState


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and core modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="remindbot-test",
        data_dir=tmp_path / "data",
        console_enabled=False,
        telegram_enabled=False,
        telegram_bot_token=None,
        console_chat_id=0,
        reminder_interval_seconds=0.01,
        task_separator=";",
        datetime_formats=["%Y-%m-%d %H:%M", "%Y-%m-%d %H:%M:%S"],
        display_datetime_format="%Y-%m-%d %H:%M:%S",
        scope_tasks_per_chat=False,
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """AppState built through the real composition root."""
    return create_initial_state(settings=settings)
