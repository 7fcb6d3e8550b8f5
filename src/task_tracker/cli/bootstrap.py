# src/task_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- takes settings (loaded once by the caller, or get_settings()),
- wires the JSON TaskStore at the configured path,
- makes sure the task file exists before any command runs,
- picks plain or colored output for the current stream.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_store import TaskStore
from .formatting import Styler, colors_enabled

logger = logging.getLogger(__name__)


def build_styler(settings, stream: IO[str] | None = None) -> Styler:
    mode = str(getattr(settings, "color", "auto"))
    return Styler(enabled=colors_enabled(mode, stream or sys.stdout))


def create_initial_state(*, settings=None, style: Styler | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    store = TaskStore(settings.tasks_file)
    store.initialize()
    logger.debug("TaskStore ready file=%s", store.path)

    return AppState(
        settings=settings,
        task_store=store,
        style=style if style is not None else build_styler(settings),
    )
