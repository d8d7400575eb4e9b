# src/remindbot/core/texts.py

"""
User-facing strings.

Menu labels are matched by exact equality, so they double as command names.
"""

from __future__ import annotations

from typing import Final

CMD_START: Final = "/start"
CMD_STOP: Final = "/stop"
CMD_HELP: Final = "/help"

LABEL_ADD_TASK: Final = "Добавить задачу"
LABEL_LIST_TASKS: Final = "Посмотреть задачи"
LABEL_DELETE_TASK: Final = "Удалить задачу"

# Two rows: [add, list], [delete]
MAIN_MENU: Final = ((LABEL_ADD_TASK, LABEL_LIST_TASKS), (LABEL_DELETE_TASK,))

GREETING: Final = "Привет! Я бот для задач. Используйте кнопки ниже для управления задачами."
FAREWELL: Final = "Разговор завершен. До свидания!"
SESSION_ENDED: Final = "Разговор завершен. Используйте /start для нового сеанса."

ADD_TASK_PROMPT: Final = "Введите задачу в формате: описание;ГГГГ-ММ-ДД ЧЧ:ММ"
TASK_ADDED: Final = "Задача добавлена!"
TASK_FORMAT_ERROR: Final = "Неверный формат. Используйте: описание;ГГГГ-ММ-ДД ЧЧ:ММ"
TASK_DELETED: Final = 'Задача "{description}" удалена.'

NO_TASKS: Final = "Задач пока нет."
NO_TASKS_TO_DELETE: Final = "Нет задач для удаления."
LIST_HEADER: Final = "Ваши задачи:"
DELETE_HEADER: Final = "Выберите задачу для удаления (введите номер):"
TASK_LINE: Final = "{n}. {description} (Напоминание: {when})"

REMINDER: Final = "Напоминание: {description}"

HELP_HEADER: Final = "Доступные команды:"
INTERNAL_ERROR: Final = "Внутренняя ошибка при обработке сообщения."
