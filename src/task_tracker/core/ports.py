# src/task_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the command layer.

Commands depend on this Protocol instead of TaskStore directly, so tests can
swap in an in-memory repo and the JSON file stays an implementation detail.
"""

from typing import Iterable, Protocol

from ..tasks.task_models import Task, TaskStatus


class TaskRepo(Protocol):
    """Whole-collection persistence: load everything, save everything."""

    def initialize(self) -> None: ...
    def load(self) -> list[Task]: ...
    def save(self, tasks: Iterable[Task]) -> None: ...


class OutputStyle(Protocol):
    """Renders command results; the CLI supplies a plain or ANSI-colored implementation."""

    def paint(self, text: str, *styles: str) -> str: ...
    def success(self, text: str) -> str: ...
    def error(self, text: str) -> str: ...
    def notice(self, text: str) -> str: ...
    def status(self, status: TaskStatus) -> str: ...
    def task_table(self, tasks: list[Task]) -> str: ...
