# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_tracker.core.state import AppState
from todo_tracker.tasks.todo_file import TodoFile
from todo_tracker.tasks.todo_store import TodoStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="todo-tracker-test",
        log_level="DEBUG",
        log_dir=tmp_path / "logs",
        todo_file_path=tmp_path / "todos.json",
        autosave_interval_seconds=0.05,
        save_on_exit=True,
        restore_id_counter=False,
    )


@pytest.fixture()
def store() -> TodoStore:
    return TodoStore()


@pytest.fixture()
def todo_file(settings: SimpleNamespace) -> TodoFile:
    return TodoFile(settings.todo_file_path)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TodoStore, todo_file: TodoFile) -> AppState:
    """AppState wired with the real store and a tmp_path-backed file."""
    return AppState(settings=settings, store=store, storage=todo_file)


@pytest.fixture()
def restore_root_logging():
    """setup_logging replaces root handlers; put pytest's back afterwards."""
    import logging

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)
