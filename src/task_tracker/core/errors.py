# src/task_tracker/core/errors.py

"""
Error hierarchy for the tracker.

Every failure the CLI knows how to report derives from TaskTrackerError.
The entry point catches the base class, prints `str(err)` and exits non-zero.
"""

from __future__ import annotations

from pathlib import Path


class TaskTrackerError(Exception):
    """Base class: the message is user-facing."""

    exit_code = 1


class UsageError(TaskTrackerError):
    """No command, or a command the registry does not know. Carries the usage text to print."""

    exit_code = 2

    def __init__(self, message: str = "", *, usage: str = "") -> None:
        super().__init__(message)
        self.usage = usage


class InvalidInput(TaskTrackerError):
    """A required argument is missing, empty or malformed."""


class NotFound(TaskTrackerError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task not found (ID: {task_id})")
        self.task_id = task_id


class InvalidFilter(TaskTrackerError):
    def __init__(self, value: str, allowed: tuple[str, ...]) -> None:
        choices = ", ".join(f'"{a}"' for a in allowed)
        super().__init__(f'Invalid status "{value}". Use {choices}')
        self.value = value


class CorruptStore(TaskTrackerError):
    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"Task file {path} is corrupt: {reason}")
        self.path = Path(path)
        self.reason = reason


class IOFailure(TaskTrackerError):
    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"Cannot access task file {path}: {reason}")
        self.path = Path(path)
        self.reason = reason
