# tests/conftest.py

from __future__ import annotations

import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

from task_tracker.cli.formatting import Styler
from task_tracker.core.state import AppState
from task_tracker.tasks.task_store import TaskStore

from .fakes import FakeTaskRepo


@pytest.fixture(autouse=True)
def _reset_root_logging():
    """main() reconfigures the root logger; undo that so tests stay independent."""
    root = logging.getLogger()
    level = root.level
    yield
    for h in list(root.handlers):
        if type(h) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    logging.captureWarnings(False)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="task-cli",
        log_level="WARNING",
        log_file=None,
        tasks_file=tmp_path / "tasks.json",
        color="never",
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    s = TaskStore(settings.tasks_file)
    s.initialize()
    return s


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    """
    AppState wired to a real JSON TaskStore in a temp dir.

    Plain (uncolored) output so assertions can compare text directly.
    """
    return AppState(settings=settings, task_store=store, style=Styler(enabled=False))


@pytest.fixture()
def fake_state(settings: SimpleNamespace) -> AppState:
    return AppState(settings=settings, task_store=FakeTaskRepo(), style=Styler(enabled=False))
