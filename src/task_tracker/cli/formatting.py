# src/task_tracker/cli/formatting.py

"""ANSI color helpers for command output.

Decisions:
- "auto" colors only when the output stream is a TTY.
- FORCE_COLOR=1 turns colors on in "auto" mode; NO_COLOR always wins over it.
- An explicit TASK_CLI_COLOR=always/never beats both.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import IO

from ..tasks.task_models import Task, TaskStatus, format_timestamp

RESET = "\033[0m"
BOLD = "\033[1m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
CYAN = "\033[36m"

STATUS_COLOR: dict[TaskStatus, str] = {
    TaskStatus.TODO: RED,
    TaskStatus.IN_PROGRESS: YELLOW,
    TaskStatus.DONE: GREEN,
}


def _truthy(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def colors_enabled(mode: str, stream: IO[str], env: Mapping[str, str] | None = None) -> bool:
    if mode == "always":
        return True
    if mode == "never":
        return False
    if env is None:
        env = os.environ
    if env.get("NO_COLOR") is not None:
        return False
    if _truthy(env.get("FORCE_COLOR")):
        return True
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class Styler:
    """Applies ANSI styles when enabled, returns text untouched otherwise."""

    def __init__(self, enabled: bool = False) -> None:
        self.enabled = enabled

    def paint(self, text: str, *styles: str) -> str:
        if not self.enabled or not styles:
            return text
        return "".join(styles) + text + RESET

    def success(self, text: str) -> str:
        return self.paint(text, GREEN)

    def error(self, text: str) -> str:
        return self.paint(text, RED)

    def notice(self, text: str) -> str:
        return self.paint(text, YELLOW)

    def status(self, status: TaskStatus) -> str:
        return self.paint(status.value, STATUS_COLOR[status])

    def label(self, name: str) -> str:
        return self.paint(f"{name}:", BOLD)

    def task_line(self, task: Task) -> str:
        label = self.label
        return (
            f"{label('ID')} {task.id}, "
            f"{label('Description')} {task.description}, "
            f"{label('Status')} {self.status(task.status)}, "
            f"{label('Created')} {format_timestamp(task.created_at)}, "
            f"{label('Updated')} {format_timestamp(task.updated_at)}"
        )

    def task_table(self, tasks: list[Task]) -> str:
        if not tasks:
            return self.notice("No tasks found")
        lines = [self.paint("Tasks:", BOLD, CYAN)]
        lines.extend(self.task_line(t) for t in tasks)
        return "\n".join(lines)
