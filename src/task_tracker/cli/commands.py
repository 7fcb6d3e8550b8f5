# src/task_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.errors import InvalidInput, UsageError
from ..core.state import AppState
from ..tasks import task_ops
from ..tasks.task_models import TaskStatus
from .formatting import BLUE

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Maps the first CLI word (add, list, ...) to a handler returning the text to print."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._usage: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        usage: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._usage[key] = usage
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def names(self) -> list[str]:
        return list(self._usage)

    def handle(self, state: AppState, argv: list[str]) -> str:
        """
        Run the command named by argv[0] with the remaining words.

        No command or an unknown one raises UsageError carrying the usage text.
        """
        if not argv:
            raise UsageError(usage=self.build_help(state))

        name = argv[0].lower()
        args = argv[1:]

        handler = self._handlers.get(name)
        if not handler:
            raise UsageError(f"Unknown command: {argv[0]}", usage=self.build_help(state))

        logger.debug("Dispatching command=%s args=%d", name, len(args))
        return handler(state, args)

    def build_help(self, state: AppState) -> str:
        style = state.style
        prog = str(getattr(state.settings, "app_name", "task-cli"))
        lines = [style.error("Usage:")]
        for usage in self._usage.values():
            if usage:
                lines.append("  " + style.paint(f"{prog} {usage}", BLUE))
        return "\n".join(lines)


registry = CommandRegistry()


def _single_id(args: list[str]) -> int:
    if not args:
        raise InvalidInput("ID is required")
    if len(args) > 1:
        raise InvalidInput(f"Unexpected argument(s): {' '.join(args[1:])}")
    return task_ops.parse_task_id(args[0])


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help(state)


def cmd_add(state: AppState, args: list[str]) -> str:
    description = " ".join(args).strip()
    if not description:
        raise InvalidInput("Description is required")

    store = state.task_store
    tasks, task = task_ops.add_task(store.load(), description)
    store.save(tasks)
    logger.info("Added task id=%s", task.id)
    return state.style.success(f"Task added successfully (ID: {task.id})")


def cmd_update(state: AppState, args: list[str]) -> str:
    if len(args) < 2 or not " ".join(args[1:]).strip():
        raise InvalidInput("ID and description are required")
    task_id = task_ops.parse_task_id(args[0])

    store = state.task_store
    tasks, _ = task_ops.update_task(store.load(), task_id, " ".join(args[1:]))
    store.save(tasks)
    logger.info("Updated task id=%s", task_id)
    return state.style.success("Task updated successfully")


def cmd_delete(state: AppState, args: list[str]) -> str:
    task_id = _single_id(args)

    store = state.task_store
    tasks = task_ops.delete_task(store.load(), task_id)
    store.save(tasks)
    logger.info("Deleted task id=%s", task_id)
    return state.style.success("Task deleted successfully")


def _mark(state: AppState, args: list[str], status: TaskStatus) -> str:
    task_id = _single_id(args)

    store = state.task_store
    tasks, task = task_ops.mark_status(store.load(), task_id, status)
    store.save(tasks)
    logger.info("Marked task id=%s status=%s", task_id, status.value)
    style = state.style
    return style.success("Task marked as ") + style.status(task.status)


def cmd_mark_in_progress(state: AppState, args: list[str]) -> str:
    return _mark(state, args, TaskStatus.IN_PROGRESS)


def cmd_mark_done(state: AppState, args: list[str]) -> str:
    return _mark(state, args, TaskStatus.DONE)


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    list          -> every task, in insertion order
    list <status> -> only tasks with that status (todo | in-progress | done)
    """
    if len(args) > 1:
        raise InvalidInput(f"Unexpected argument(s): {' '.join(args[1:])}")
    status = task_ops.parse_status_filter(args[0] if args else None)

    tasks = task_ops.list_tasks(state.task_store.load(), status)
    return state.style.task_table(tasks)


registry.register("add", cmd_add, usage='add "Task description"')
registry.register("update", cmd_update, usage='update <id> "New description"')
registry.register("delete", cmd_delete, usage="delete <id>")
registry.register("mark-in-progress", cmd_mark_in_progress, usage="mark-in-progress <id>")
registry.register("mark-done", cmd_mark_done, usage="mark-done <id>")
registry.register("list", cmd_list, usage="list [done|todo|in-progress]")
registry.register("help", cmd_help, usage="help", aliases=["-h", "--help"])
