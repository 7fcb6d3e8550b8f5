# src/task_tracker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app, built on first use.
- Nothing reads os.environ outside this module; the store gets its path passed in.
- Malformed values fall back to defaults instead of failing the command.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TASK_CLI"

COLOR_MODES = ("auto", "always", "never")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(env: Mapping[str, str], name: str, default: str = "") -> str:
    v = env.get(name)
    return default if v is None else v


def _env_choice(env: Mapping[str, str], name: str, choices: tuple[str, ...], default: str) -> str:
    raw = env.get(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    return v if v in choices else default


def _env_path(env: Mapping[str, str], name: str, default: Path | None) -> Path | None:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_file: Path | None

    # ---- Storage ----
    tasks_file: Path

    # ---- Output ----
    color: str

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> "Settings":
        if env is None:
            env = os.environ

        app_name = _env(env, _k("APP_NAME"), "task-cli").strip() or "task-cli"
        log_level = _env(env, _k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"
        log_file = _env_path(env, _k("LOG_FILE"), None)

        # Relative paths resolve against the current working directory at use time.
        tasks_file = _env_path(env, _k("TASKS_FILE"), Path("tasks.json")) or Path("tasks.json")

        color = _env_choice(env, _k("COLOR"), COLOR_MODES, "auto")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_file=log_file,
            tasks_file=tasks_file,
            color=color,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        # .env is looked up from the working directory (next to tasks.json), never overriding real env.
        load_dotenv(find_dotenv(usecwd=True), override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
