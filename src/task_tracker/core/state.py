# src/task_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .ports import OutputStyle, TaskRepo


@dataclass(slots=True)
class AppState:
    """Everything a command handler needs for one invocation."""

    # Settings (or a SimpleNamespace with the same attributes in tests).
    settings: Any
    task_store: TaskRepo
    style: OutputStyle
