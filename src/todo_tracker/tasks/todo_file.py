# src/todo_tracker/tasks/todo_file.py

from __future__ import annotations

"""
JSON file persistence for TodoStore.

File layout: a JSON array of {"id", "title", "completed", "created_at"} objects.
The id counter is not stored.

Lock policy: only the snapshot copy is taken under the store lock;
encoding and file I/O run after it is released.
"""

import json
import logging
import os
from pathlib import Path

from .todo_models import Todo
from .todo_store import TodoStore

logger = logging.getLogger(__name__)


class PersistenceError(RuntimeError):
    """Saving or loading the todo file failed."""


class TodoFile:
    def __init__(self, path: str | Path = "todos.json", *, restore_id_counter: bool = False) -> None:
        self._path = Path(path)
        self._restore_id_counter = restore_id_counter

    @property
    def path(self) -> Path:
        return self._path

    def save(self, store: TodoStore) -> None:
        """
        Write the whole store to disk (temp file + os.replace).

        On success the store's dirty flag is cleared (unless it changed
        meanwhile). On failure PersistenceError is raised and the store stays dirty.
        """
        todos, revision = store.snapshot()
        try:
            payload = json.dumps([t.to_dict() for t in todos], ensure_ascii=False, indent=2)
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_name(self._path.name + ".tmp")
            tmp.write_text(payload + "\n", "utf-8")
            os.replace(tmp, self._path)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"failed to save todos to {self._path}: {e}") from e

        store.mark_saved(revision)
        logger.info("Saved %d todos to %s", len(todos), self._path)

    def load(self, store: TodoStore) -> bool:
        """
        Replace the store contents with the file contents.

        Returns False if the file does not exist (first run; store untouched).
        Raises PersistenceError on any other I/O or format problem; the store
        is then left empty.
        """
        try:
            raw = self._path.read_text("utf-8")
        except FileNotFoundError:
            logger.info("No todo file at %s; starting empty", self._path)
            return False
        except (OSError, UnicodeDecodeError) as e:
            store.replace_all([])
            raise PersistenceError(f"failed to read {self._path}: {e}") from e

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            todos = [Todo.from_dict(item) for item in data]
        except (ValueError, RecursionError) as e:
            # json.JSONDecodeError is a ValueError; absurd nesting hits the recursion limit.
            store.replace_all([])
            raise PersistenceError(f"invalid todo file {self._path}: {e}") from e

        store.replace_all(todos, restore_id_counter=self._restore_id_counter)
        logger.info("Loaded %d todos from %s", len(todos), self._path)
        return True
