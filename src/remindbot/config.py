# src/remindbot/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

ENV_PREFIX = "REMINDBOT"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_formats(name: str, default: List[str]) -> List[str]:
    # strptime formats contain spaces, so the list separator is "|".
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.split("|") if p.strip()]


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connector flags ----
    console_enabled: bool
    telegram_enabled: bool

    # ---- Telegram ----
    telegram_bot_token: Optional[str]

    # ---- Console ----
    console_chat_id: int

    # ---- Local data paths (ignored by git) ----
    data_dir: Path

    # ---- Tasks / reminders ----
    reminder_interval_seconds: float
    task_separator: str
    datetime_formats: List[str]
    display_datetime_format: str
    scope_tasks_per_chat: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "remindbot") or "remindbot"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        telegram_bot_token = _first_env(_k("TELEGRAM_BOT_TOKEN"), "TELEGRAM_BOT_TOKEN", default=None)

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)
        # Telegram defaults to on only when a token is present.
        telegram_enabled = _env_bool(_k("TELEGRAM_ENABLED"), bool(telegram_bot_token))

        console_chat_id = _env_int(_k("CONSOLE_CHAT_ID"), 0)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/remindbot"))

        reminder_interval_seconds = _env_float(_k("REMINDER_INTERVAL_SECONDS"), 10.0)
        task_separator = _env(_k("TASK_SEPARATOR"), ";") or ";"
        datetime_formats = _env_formats(
            _k("DATETIME_FORMATS"),
            ["%Y-%m-%d %H:%M", "%Y-%m-%d %H:%M:%S", "%d.%m.%Y %H:%M"],
        )
        display_datetime_format = _env(_k("DISPLAY_DATETIME_FORMAT"), "%Y-%m-%d %H:%M:%S")
        scope_tasks_per_chat = _env_bool(_k("SCOPE_TASKS_PER_CHAT"), False)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            telegram_enabled=telegram_enabled,
            telegram_bot_token=telegram_bot_token,
            console_chat_id=console_chat_id,
            data_dir=data_dir,
            reminder_interval_seconds=reminder_interval_seconds,
            task_separator=task_separator,
            datetime_formats=datetime_formats,
            display_datetime_format=display_datetime_format,
            scope_tasks_per_chat=scope_tasks_per_chat,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
