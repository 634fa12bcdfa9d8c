# src/todo_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads the todo file, then runs:
- the auto-save loop in a background thread,
- the menu REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state, load_todos, shutdown, start_autosave
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()

    # The menu owns stdout; console logging stays at WARNING unless asked otherwise.
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = max(getattr(logging, level_name, logging.INFO), logging.WARNING)
    if level_name == "DEBUG":
        console_level = logging.DEBUG

    log_file = setup_logging(log_dir=settings.log_dir, console_level=console_level)
    logger.info("Starting %s (file=%s, log=%s)...", settings.app_name, settings.todo_file_path, log_file)

    state = create_initial_state(settings=settings)
    load_todos(state)
    start_autosave(state)

    try:
        run_console_loop(state)
    finally:
        shutdown(state)
        logger.info("Bye.")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
