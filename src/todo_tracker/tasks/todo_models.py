# src/todo_tracker/tasks/todo_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

# RFC 822 with numeric zone, used for list output.
DISPLAY_TIME_FORMAT = "%d %b %y %H:%M %z"


def now_local() -> datetime:
    return datetime.now().astimezone()


@dataclass(slots=True)
class Todo:
    id: int
    title: str
    completed: bool
    created_at: datetime

    @property
    def status_label(self) -> str:
        return "Completed" if self.completed else "Incomplete"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, raw: Any) -> Todo:
        """
        Build a Todo from its JSON object form.

        Raises ValueError on anything that is not a well-formed record;
        the file adapter turns that into a PersistenceError.
        """
        if not isinstance(raw, dict):
            raise ValueError(f"todo entry must be an object, got {type(raw).__name__}")

        tid = raw.get("id")
        if not isinstance(tid, int) or isinstance(tid, bool):
            raise ValueError(f"todo id must be an integer, got {tid!r}")

        title = raw.get("title", "")
        if not isinstance(title, str):
            raise ValueError(f"todo {tid} title must be a string")

        completed = raw.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"todo {tid} completed must be a boolean")

        created_raw = raw.get("created_at")
        if not isinstance(created_raw, str):
            raise ValueError(f"todo {tid} created_at must be a timestamp string")
        created_at = datetime.fromisoformat(created_raw)

        return cls(id=tid, title=title, completed=completed, created_at=created_at)
