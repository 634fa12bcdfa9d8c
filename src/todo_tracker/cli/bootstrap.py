# src/todo_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- builds the store and the file adapter and wires them into AppState,
- hydrates the store from disk,
- starts and stops the background auto-save.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.autosave import start_autosave_in_background
from ..tasks.todo_file import PersistenceError, TodoFile
from ..tasks.todo_store import TodoStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    return AppState(
        settings=settings,
        store=TodoStore(),
        storage=TodoFile(
            settings.todo_file_path,
            restore_id_counter=bool(getattr(settings, "restore_id_counter", False)),
        ),
    )


def load_todos(state: AppState) -> bool:
    """
    Load the todo file into the store.

    A missing file is the normal first run. Any other failure is reported
    on stdout and the app continues with an empty store.
    """
    try:
        loaded = state.storage.load(state.store)
    except PersistenceError as e:
        logger.error("Failed to load todos: %s", e)
        print(f"Error loading file: {e}")
        return False

    if loaded:
        print("To-Do list loaded from file.")
    return loaded


def start_autosave(state: AppState) -> None:
    interval = float(getattr(state.settings, "autosave_interval_seconds", 10.0))
    state.autosave = start_autosave_in_background(
        state.store, state.storage, interval_seconds=interval
    )
    if state.autosave is None:
        logger.warning("Auto-save is not running; changes are saved on exit only.")


def shutdown(state: AppState, *, join_timeout: float | None = None) -> None:
    """
    Stop auto-save, wait for it to finish, then give unsaved changes
    one last chance to reach the disk. No exceptions escape.
    """
    runner = state.autosave
    if runner is not None:
        runner.stop()
        if not runner.join(timeout=join_timeout):
            logger.warning("Auto-save did not stop within %s seconds.", join_timeout)
        else:
            print("Auto-save stopped.")

    if not getattr(state.settings, "save_on_exit", True):
        return
    if not state.store.is_dirty:
        return

    try:
        state.storage.save(state.store)
        print("To-Do list saved to file.")
    except PersistenceError as e:
        logger.error("Final save failed: %s", e)
        print(f"Error saving file: {e}")
