# src/todo_tracker/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import EXIT_MESSAGE, MenuRegistry
from ..cli.commands import registry as menu_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

BANNER = (
    "Welcome to the Enhanced To-Do Application with Auto-Save!\n"
    "----------------------------------------------------------"
)


def run_console_loop(
    state: AppState,
    *,
    read: Callable[[str], str] | None = None,
    write: Callable[[str], None] = print,
    menu: MenuRegistry | None = None,
) -> None:
    """
    Menu REPL. Returns when the user picks Exit, or on EOF / Ctrl+C.

    Store calls are short and take the store lock themselves; nothing here
    holds it while waiting for input.
    """
    menu = menu or menu_registry
    read = read or input
    logger.info("Console connector started.")
    write(BANNER)

    while True:
        write(menu.build_menu())
        try:
            choice = read(menu.prompt()).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            write(EXIT_MESSAGE)
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write(EXIT_MESSAGE)
            break

        if menu.is_exit(choice):
            logger.info("Console exit choice received.")
            write(EXIT_MESSAGE)
            break

        try:
            response = menu.handle(state, choice, read, write)
        except (EOFError, KeyboardInterrupt):
            logger.info("Console input closed mid-command, exiting.")
            write(EXIT_MESSAGE)
            break
        except Exception:
            logger.exception("Menu handler crashed (choice=%r).", choice)
            response = "Internal error while handling that option."

        write(response)

    logger.info("Console connector finished.")
