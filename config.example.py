# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets: keep the bot token in .env (local, gitignored).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "REMINDBOT_APP_NAME": "App display name (default: remindbot).",
    "REMINDBOT_LOG_LEVEL": "Console logging level (default: INFO).",
    # Connectors
    "REMINDBOT_CONSOLE_ENABLED": "Enable console connector (true/false, default: true).",
    "REMINDBOT_TELEGRAM_ENABLED": "Enable Telegram connector (default: true when a token is set).",
    "REMINDBOT_TELEGRAM_BOT_TOKEN": "Telegram bot token (TELEGRAM_BOT_TOKEN is accepted too).",
    "REMINDBOT_CONSOLE_CHAT_ID": "Chat id used by the console connector (default: 0).",
    # Paths (gitignored)
    "REMINDBOT_DATA_DIR": "Local data directory for logs (default: .local/remindbot).",
    # Tasks / reminders
    "REMINDBOT_REMINDER_INTERVAL_SECONDS": "Seconds between reminder scans (default: 10).",
    "REMINDBOT_TASK_SEPARATOR": "Separator between description and date-time (default: ;).",
    "REMINDBOT_DATETIME_FORMATS": (
        "'|'-separated strptime formats accepted in task entries "
        "(default: %Y-%m-%d %H:%M|%Y-%m-%d %H:%M:%S|%d.%m.%Y %H:%M)."
    ),
    "REMINDBOT_DISPLAY_DATETIME_FORMAT": "strftime format used in task listings (default: %Y-%m-%d %H:%M:%S).",
    "REMINDBOT_SCOPE_TASKS_PER_CHAT": "List/delete only the caller's own tasks (true/false, default: false).",
}
