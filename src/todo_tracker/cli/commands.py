# src/todo_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..core.state import AppState
from ..tasks.todo_models import DISPLAY_TIME_FORMAT, Todo

MenuReader = Callable[[str], str]
MenuEmitter = Callable[[str], None]
MenuHandler = Callable[[AppState, MenuReader, MenuEmitter], str]

logger = logging.getLogger(__name__)

EXIT_MESSAGE = "\n👋 Exiting the application... Goodbye!"
INVALID_ID_MESSAGE = "⚠️ Invalid ID. Please enter a numeric value."
NOT_FOUND_MESSAGE = "⚠️ To-Do not found."


@dataclass(slots=True, frozen=True)
class MenuEntry:
    key: str
    label: str
    handler: MenuHandler | None
    exits: bool = False


class MenuRegistry:
    """Numbered main-menu registry used by the console connector (1..5)."""

    def __init__(self) -> None:
        self._entries: dict[str, MenuEntry] = {}

    def register(
        self,
        key: str,
        handler: MenuHandler | None,
        label: str,
        *,
        exits: bool = False,
    ) -> None:
        self._entries[key] = MenuEntry(key=key, label=label, handler=handler, exits=exits)

    def is_exit(self, choice: str) -> bool:
        entry = self._entries.get(choice.strip())
        return entry is not None and entry.exits

    def handle(
        self,
        state: AppState,
        choice: str,
        read: MenuReader,
        emit: MenuEmitter,
    ) -> str:
        """
        Run the handler for a menu choice like "3".
        Returns the feedback line to show the user.
        """
        entry = self._entries.get(choice.strip())
        if entry is None or entry.exits or entry.handler is None:
            return f"⚠️ Invalid choice. Please enter a valid option (1-{len(self._entries)})."
        return entry.handler(state, read, emit)

    def build_menu(self) -> str:
        lines = ["\n🔷 MAIN MENU"]
        for entry in self._entries.values():
            lines.append(f"{entry.key}️⃣  ➡  {entry.label}")
        return "\n".join(lines)

    def prompt(self) -> str:
        return f"Please enter your choice (1-{len(self._entries)}): "


registry = MenuRegistry()


def _parse_id(raw: str) -> int | None:
    try:
        return int(raw.strip())
    except ValueError:
        return None


def format_todo(todo: Todo) -> str:
    created = todo.created_at.strftime(DISPLAY_TIME_FORMAT)
    return (
        f"ID: {todo.id} | Title: {todo.title} | "
        f"Status: {todo.status_label} | Created At: {created}"
    )


def cmd_create(state: AppState, read: MenuReader, emit: MenuEmitter) -> str:
    emit("\n📝 CREATE A NEW TO-DO")
    title = read("Enter the title of the new to-do: ").strip()
    if not title:
        return "⚠️ Title cannot be empty. Please try again."
    todo = state.store.create(title)
    logger.info("Created todo id=%s", todo.id)
    return "✅ To-Do created successfully!"


def cmd_list(state: AppState, read: MenuReader, emit: MenuEmitter) -> str:
    emit("\n📋 VIEW ALL TO-DOS")
    todos = state.store.list()
    if not todos:
        return "No To-Dos found."
    lines = ["\nTo-Do List:"]
    lines.extend(format_todo(t) for t in todos)
    return "\n".join(lines)


def cmd_update(state: AppState, read: MenuReader, emit: MenuEmitter) -> str:
    """
    Asks for: id, new title (empty keeps the current one), completed (yes/no).
    Only "yes" (any case) marks the todo completed.
    """
    emit("\n✏️ UPDATE A TO-DO")
    todo_id = _parse_id(read("Enter the ID of the to-do to update: "))
    if todo_id is None:
        return INVALID_ID_MESSAGE

    new_title = read("Enter new title (leave empty to keep the current title): ").strip()
    completed = read("Mark as completed? (yes/no): ").strip().lower() == "yes"

    if not state.store.update(todo_id, new_title, completed):
        return NOT_FOUND_MESSAGE
    logger.info("Updated todo id=%s completed=%s", todo_id, completed)
    return "✅ To-Do updated successfully!"


def cmd_delete(state: AppState, read: MenuReader, emit: MenuEmitter) -> str:
    emit("\n🗑️ DELETE A TO-DO")
    todo_id = _parse_id(read("Enter the ID of the to-do to delete: "))
    if todo_id is None:
        return INVALID_ID_MESSAGE

    if not state.store.delete(todo_id):
        return NOT_FOUND_MESSAGE
    logger.info("Deleted todo id=%s", todo_id)
    return "✅ To-Do deleted successfully!"


registry.register("1", cmd_create, "Create a New To-Do")
registry.register("2", cmd_list, "View All To-Dos")
registry.register("3", cmd_update, "Update an Existing To-Do")
registry.register("4", cmd_delete, "Delete a To-Do")
registry.register("5", None, "Exit", exits=True)
