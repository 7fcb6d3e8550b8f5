# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ..core.errors import CorruptStore, IOFailure
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    JSON-file task store.

    The file holds one JSON array of task records, fully read on load and
    fully rewritten on save:
    - missing file -> created empty (on initialize, and again on load)
    - unparsable content -> CorruptStore, never silently reset
    - save writes a temp file next to the target and os.replace()s it in

    There is no locking: concurrent writers race and the last save wins.
    """

    def __init__(self, path: str | Path = "tasks.json") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ---- low-level helpers ----

    @staticmethod
    def _dumps(records: list[dict[str, Any]]) -> str:
        return json.dumps(records, ensure_ascii=False, indent=2) + "\n"

    def _write_atomic(self, text: str) -> None:
        parent = self._path.parent
        parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", suffix=".tmp", dir=parent)
        tmp = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            # mkstemp creates 0600; keep the replaced file's mode, or 0644 for a new file.
            with contextlib.suppress(OSError):
                mode = self._path.stat().st_mode & 0o777 if self._path.exists() else 0o644
                os.chmod(tmp, mode)
            os.replace(tmp, self._path)
        except BaseException:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise

    def _decode(self, raw: str) -> list[Task]:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptStore(self._path, f"invalid JSON ({e.msg} at line {e.lineno})") from e

        if not isinstance(data, list):
            raise CorruptStore(self._path, f"expected a JSON array, got {type(data).__name__}")

        tasks: list[Task] = []
        seen: set[int] = set()
        for pos, record in enumerate(data):
            try:
                task = Task.from_record(record)
            except (TypeError, ValueError) as e:
                raise CorruptStore(self._path, f"record #{pos + 1}: {e}") from e
            if task.id in seen:
                raise CorruptStore(self._path, f"duplicate task id {task.id}")
            seen.add(task.id)
            tasks.append(task)
        return tasks

    # ---- public API ----

    def initialize(self) -> None:
        """Create the file with an empty list if it does not exist yet. Safe to call every run."""
        try:
            if self._path.exists():
                return
            self._write_atomic(self._dumps([]))
        except OSError as e:
            raise IOFailure(self._path, e.strerror or str(e)) from e
        logger.info("TaskStore created empty file=%s", self._path)

    def load(self) -> list[Task]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("Task file %s disappeared; recreating it empty.", self._path)
            self.initialize()
            return []
        except UnicodeDecodeError as e:
            raise CorruptStore(self._path, "not valid UTF-8 text") from e
        except OSError as e:
            raise IOFailure(self._path, e.strerror or str(e)) from e

        try:
            tasks = self._decode(raw)
        except CorruptStore:
            logger.info("Task file %s could not be parsed.", self._path)
            raise

        logger.debug("TaskStore loaded file=%s total=%d", self._path, len(tasks))
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        records = [t.to_record() for t in tasks]
        try:
            self._write_atomic(self._dumps(records))
        except OSError as e:
            raise IOFailure(self._path, e.strerror or str(e)) from e
        logger.debug("TaskStore saved file=%s total=%d", self._path, len(records))
