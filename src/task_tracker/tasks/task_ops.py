# src/task_tracker/tasks/task_ops.py

"""
Pure operations over an in-memory task list.

Nothing here touches the filesystem: callers load from TaskStore, apply one
operation, and save the returned list. Inputs are never mutated; every
mutating operation returns a fresh list plus the affected task.

`now` is injectable so tests (and callers batching several edits) control the clock.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime

from ..core.errors import InvalidFilter, InvalidInput, NotFound
from .task_models import Task, TaskStatus, utc_now

logger = logging.getLogger(__name__)

MARKABLE_STATUSES: frozenset[TaskStatus] = frozenset({TaskStatus.IN_PROGRESS, TaskStatus.DONE})


def next_task_id(tasks: Sequence[Task]) -> int:
    """Max existing id + 1 (1 for an empty list). Never derived from len()."""
    return max((t.id for t in tasks), default=0) + 1


def parse_task_id(raw: str | None) -> int:
    if raw is None or not raw.strip():
        raise InvalidInput("ID is required")
    text = raw.strip()
    if not (text.isascii() and text.isdigit()) or int(text) < 1:
        raise InvalidInput(f"Invalid task ID: {raw!r}")
    return int(text)


def parse_status_filter(raw: str | None) -> TaskStatus | None:
    """None / empty means "no filter"; anything outside the three statuses is rejected."""
    if raw is None or raw == "":
        return None
    try:
        return TaskStatus(raw)
    except ValueError:
        raise InvalidFilter(raw, TaskStatus.values()) from None


def _clean_description(description: str | None) -> str:
    text = (description or "").strip()
    if not text:
        raise InvalidInput("Description is required")
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        # Undecodable argv bytes arrive as lone surrogates; the task file is UTF-8.
        raise InvalidInput("Description is not valid UTF-8 text") from None
    return text


def _index_of(tasks: Sequence[Task], task_id: int) -> int:
    for i, t in enumerate(tasks):
        if t.id == task_id:
            return i
    raise NotFound(task_id)


def _touch(task: Task, now: datetime | None, **changes) -> Task:
    ts = now or utc_now()
    # updated_at must never precede created_at, even with a skewed clock.
    return replace(task, updated_at=max(ts, task.created_at), **changes)


def add_task(
    tasks: Sequence[Task],
    description: str,
    *,
    now: datetime | None = None,
) -> tuple[list[Task], Task]:
    text = _clean_description(description)
    ts = now or utc_now()
    task = Task(
        id=next_task_id(tasks),
        description=text,
        status=TaskStatus.TODO,
        created_at=ts,
        updated_at=ts,
    )
    logger.debug("Task added id=%s", task.id)
    return [*tasks, task], task


def update_task(
    tasks: Sequence[Task],
    task_id: int,
    description: str,
    *,
    now: datetime | None = None,
) -> tuple[list[Task], Task]:
    idx = _index_of(tasks, task_id)
    text = _clean_description(description)

    updated = _touch(tasks[idx], now, description=text)
    new_tasks = list(tasks)
    new_tasks[idx] = updated
    logger.debug("Task updated id=%s", task_id)
    return new_tasks, updated


def delete_task(tasks: Sequence[Task], task_id: int) -> list[Task]:
    idx = _index_of(tasks, task_id)
    logger.debug("Task deleted id=%s", task_id)
    return [*tasks[:idx], *tasks[idx + 1 :]]


def mark_status(
    tasks: Sequence[Task],
    task_id: int,
    status: TaskStatus,
    *,
    now: datetime | None = None,
) -> tuple[list[Task], Task]:
    """
    Set a task's status to in-progress or done.

    Re-marking with the current status still refreshes updated_at.
    """
    try:
        status = TaskStatus(status)
    except ValueError:
        raise InvalidInput(f"Unknown status: {status!r}") from None
    if status not in MARKABLE_STATUSES:
        raise InvalidInput(f"Cannot mark a task as {status.value}")

    idx = _index_of(tasks, task_id)
    updated = _touch(tasks[idx], now, status=status)
    new_tasks = list(tasks)
    new_tasks[idx] = updated
    logger.debug("Task marked id=%s status=%s", task_id, status.value)
    return new_tasks, updated


def list_tasks(tasks: Sequence[Task], status: TaskStatus | None = None) -> list[Task]:
    if status is None:
        return list(tasks)
    return [t for t in tasks if t.status == status]
