# src/todo_tracker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app, read once at startup.
- Every value has a sensible default, so a bare `todo-tracker` just works.
- The auto-save interval is fixed for the lifetime of the process.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Path

    # ---- Persistence ----
    todo_file_path: Path
    autosave_interval_seconds: float
    save_on_exit: bool
    restore_id_counter: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo-tracker")
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        log_dir = _env_path(_k("LOG_DIR"), Path(".local/todo"))

        # Relative paths resolve against the working directory.
        todo_file_path = _env_path(_k("FILE"), Path("todos.json"))
        autosave_interval_seconds = max(0.05, _env_float(_k("AUTOSAVE_INTERVAL"), 10.0))
        save_on_exit = _env_bool(_k("SAVE_ON_EXIT"), True)

        # Off by default: ids of loaded todos are not fed back into the counter.
        restore_id_counter = _env_bool(_k("RESTORE_ID_COUNTER"), False)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            todo_file_path=todo_file_path,
            autosave_interval_seconds=autosave_interval_seconds,
            save_on_exit=save_on_exit,
            restore_id_counter=restore_id_counter,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Load .env (if present) and build Settings on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
