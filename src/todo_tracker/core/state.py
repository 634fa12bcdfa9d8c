# src/todo_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.autosave import AutoSaveRunner
from ..tasks.todo_file import TodoFile
from ..tasks.todo_store import TodoStore


@dataclass
class AppState:
    # Settings are kept on the state so the shell and shutdown can read them.
    settings: Any

    store: TodoStore
    storage: TodoFile

    autosave: AutoSaveRunner | None = None
