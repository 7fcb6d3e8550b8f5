# src/task_tracker/cli/main.py

"""
CLI entrypoint.

One invocation = one command: set up logging, build AppState (which makes
sure the task file exists), dispatch argv through the command registry,
print the result. Errors are reported on stderr and mapped to exit codes:
0 ok, 1 task-tracker error, 2 usage.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import build_styler, create_initial_state
from ..cli.commands import registry
from ..config import get_settings
from ..core.errors import TaskTrackerError, UsageError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _configure_logging(settings) -> None:
    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    if not isinstance(console_level, int):
        console_level = logging.WARNING

    log_file = getattr(settings, "log_file", None)
    try:
        setup_logging(console_level=console_level, log_file=log_file)
    except OSError as e:
        # Unwritable log file: keep going with console logging only.
        setup_logging(console_level=console_level)
        logger.warning("Cannot open log file %s (%s); file logging disabled.", log_file, e)


def main(argv: list[str] | None = None, *, settings=None) -> int:
    if settings is None:
        settings = get_settings()
    if argv is None:
        argv = sys.argv[1:]

    _configure_logging(settings)

    out_style = build_styler(settings, sys.stdout)
    err_style = build_styler(settings, sys.stderr)

    try:
        state = create_initial_state(settings=settings, style=out_style)
        output = registry.handle(state, argv)
    except UsageError as e:
        logger.debug("Usage error: %s", e)
        if str(e):
            print(err_style.error(f"Error: {e}"), file=sys.stderr)
        if e.usage:
            print(e.usage, file=sys.stderr)
        return e.exit_code
    except TaskTrackerError as e:
        logger.info("Command failed: %s", e)
        print(err_style.error(f"Error: {e}"), file=sys.stderr)
        return e.exit_code
    except Exception:
        logger.exception("Unexpected failure running %s", argv[:1])
        print(err_style.error("Error: unexpected failure"), file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
