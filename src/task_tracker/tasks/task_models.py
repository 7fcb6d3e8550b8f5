# src/task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Notes:
    - TODO is only ever set on creation; mark commands reach IN_PROGRESS and DONE.
    - no ordering is enforced between the three values.
    """

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(s.value for s in cls)


def utc_now() -> datetime:
    """Current UTC time at the precision the task file keeps (milliseconds)."""
    now = datetime.now(UTC)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def format_timestamp(ts: datetime) -> str:
    """ISO-8601, millisecond precision, `Z` for UTC (e.g. 2024-05-01T10:20:30.123Z)."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    text = ts.isoformat(timespec="milliseconds")
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def parse_timestamp(raw: str) -> datetime:
    """Inverse of format_timestamp. Naive values are read as UTC."""
    ts = datetime.fromisoformat(raw)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    description: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime

    def to_record(self) -> dict[str, Any]:
        """JSON-ready dict using the on-disk key names."""
        return {
            "id": self.id,
            "description": self.description,
            "status": self.status.value,
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_record(cls, record: Any) -> Task:
        """
        Build a Task from one decoded JSON record.

        Raises ValueError/TypeError describing the first problem found;
        the store turns those into CorruptStore.
        """
        if not isinstance(record, dict):
            raise TypeError(f"expected an object, got {type(record).__name__}")

        missing = [k for k in ("id", "description", "status", "createdAt", "updatedAt") if k not in record]
        if missing:
            raise ValueError(f"missing field(s): {', '.join(missing)}")

        task_id = record["id"]
        # bool is an int subclass; reject it explicitly.
        if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < 1:
            raise ValueError(f"invalid id {task_id!r}")

        description = record["description"]
        if not isinstance(description, str):
            raise TypeError(f"task {task_id}: description must be text")
        if not description.strip():
            raise ValueError(f"task {task_id}: empty description")

        status_raw = record["status"]
        if status_raw not in TaskStatus.values():
            raise ValueError(f"task {task_id}: unknown status {status_raw!r}")

        stamps: list[datetime] = []
        for key in ("createdAt", "updatedAt"):
            raw = record[key]
            if not isinstance(raw, str):
                raise TypeError(f"task {task_id}: {key} must be text")
            try:
                stamps.append(parse_timestamp(raw))
            except ValueError:
                raise ValueError(f"task {task_id}: bad {key} {raw!r}") from None
        if stamps[1] < stamps[0]:
            raise ValueError(f"task {task_id}: updatedAt is earlier than createdAt")

        return cls(
            id=task_id,
            description=description,
            status=TaskStatus(status_raw),
            created_at=stamps[0],
            updated_at=stamps[1],
        )
