# src/todo_tracker/tasks/todo_store.py

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import replace

from .todo_models import Todo, now_local

logger = logging.getLogger(__name__)


class TodoStore:
    """
    In-memory todo list guarded by a single exclusive lock.

    - records keep insertion order (= display order)
    - ids come from a counter that never goes down, so deleted ids are not reused
    - `dirty` is set by every mutation and cleared by a successful save

    Saves race with mutations: the file adapter snapshots under the lock,
    writes outside of it, then calls mark_saved(revision). The flag is only
    cleared if nothing changed since the snapshot.

    Public methods return copies; callers never see the internal records.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._todos: list[Todo] = []
        self._id_counter = 0
        self._dirty = False
        self._revision = 0

    # ---- internal ----

    def _touch(self) -> None:
        # Caller holds the lock.
        self._dirty = True
        self._revision += 1

    def _index_of(self, todo_id: int) -> int | None:
        for i, todo in enumerate(self._todos):
            if todo.id == todo_id:
                return i
        return None

    # ---- public API ----

    def create(self, title: str) -> Todo:
        with self._lock:
            self._id_counter += 1
            todo = Todo(
                id=self._id_counter,
                title=title,
                completed=False,
                created_at=now_local(),
            )
            self._todos.append(todo)
            self._touch()
            logger.debug("Todo created id=%s", todo.id)
            return replace(todo)

    def list(self) -> list[Todo]:
        with self._lock:
            return [replace(t) for t in self._todos]

    def get(self, todo_id: int) -> Todo | None:
        with self._lock:
            idx = self._index_of(todo_id)
            return None if idx is None else replace(self._todos[idx])

    def count(self) -> int:
        with self._lock:
            return len(self._todos)

    def update(self, todo_id: int, new_title: str, completed: bool) -> bool:
        """
        Update a todo in place.

        An empty new_title keeps the current title; `completed` is always
        overwritten. Returns False if no todo has this id.
        """
        with self._lock:
            idx = self._index_of(todo_id)
            if idx is None:
                logger.debug("Todo update: id=%s not found", todo_id)
                return False
            todo = self._todos[idx]
            if new_title != "":
                todo.title = new_title
            todo.completed = bool(completed)
            self._touch()
            logger.debug("Todo updated id=%s completed=%s", todo_id, todo.completed)
            return True

    def delete(self, todo_id: int) -> bool:
        with self._lock:
            idx = self._index_of(todo_id)
            if idx is None:
                logger.debug("Todo delete: id=%s not found", todo_id)
                return False
            del self._todos[idx]
            self._touch()
            logger.debug("Todo deleted id=%s", todo_id)
            return True

    @property
    def is_dirty(self) -> bool:
        with self._lock:
            return self._dirty

    @property
    def last_id(self) -> int:
        with self._lock:
            return self._id_counter

    # ---- persistence hooks (used by TodoFile) ----

    def snapshot(self) -> tuple[list[Todo], int]:
        """Copy of all todos plus the revision the copy corresponds to."""
        with self._lock:
            return [replace(t) for t in self._todos], self._revision

    def mark_saved(self, revision: int) -> bool:
        """
        Clear the dirty flag after a save of `revision`.

        Returns False (and keeps the store dirty) when a mutation landed
        after that snapshot was taken.
        """
        with self._lock:
            if revision != self._revision:
                logger.debug(
                    "Store changed during save (saved=%s current=%s); staying dirty",
                    revision,
                    self._revision,
                )
                return False
            self._dirty = False
            return True

    def replace_all(self, todos: Iterable[Todo], *, restore_id_counter: bool = False) -> None:
        """
        Replace the whole sequence with loaded records.

        The id counter is left alone unless restore_id_counter is set, in which
        case it is raised to the highest loaded id. It never decreases.
        The dirty flag is not touched: loaded state matches the file.
        """
        loaded = [replace(t) for t in todos]
        with self._lock:
            self._todos = loaded
            self._revision += 1
            if restore_id_counter and loaded:
                self._id_counter = max(self._id_counter, max(t.id for t in loaded))
            logger.debug(
                "Store replaced: %d todos, id_counter=%s", len(loaded), self._id_counter
            )
