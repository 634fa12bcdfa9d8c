# src/todo_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The shell and the auto-save loop depend on Protocols instead of concrete
classes, so tests can swap in fakes (failing storage, recording storage).
"""

from typing import Any, Protocol


class TodoRepo(Protocol):
    """What the interactive shell and the auto-save loop need from the store."""

    def create(self, title: str) -> Any: ...
    def list(self) -> list[Any]: ...
    def update(self, todo_id: int, new_title: str, completed: bool) -> bool: ...
    def delete(self, todo_id: int) -> bool: ...

    @property
    def is_dirty(self) -> bool: ...


class TodoStorage(Protocol):
    """
    Persistence port.

    save() raises on failure and clears the store's dirty flag on success.
    load() returns False when there is nothing to load.
    """

    def save(self, store: Any) -> None: ...
    def load(self, store: Any) -> bool: ...
