# tests/test_config.py

from __future__ import annotations

from pathlib import Path

from todo_tracker.config import Settings


def test_defaults(monkeypatch) -> None:
    for name in (
        "TODO_APP_NAME",
        "TODO_LOG_LEVEL",
        "TODO_LOG_DIR",
        "TODO_FILE",
        "TODO_AUTOSAVE_INTERVAL",
        "TODO_SAVE_ON_EXIT",
        "TODO_RESTORE_ID_COUNTER",
    ):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()
    assert s.todo_file_path == Path("todos.json")
    assert s.autosave_interval_seconds == 10.0
    assert s.save_on_exit is True
    assert s.restore_id_counter is False


def test_env_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TODO_FILE", str(tmp_path / "mine.json"))
    monkeypatch.setenv("TODO_AUTOSAVE_INTERVAL", "2.5")
    monkeypatch.setenv("TODO_SAVE_ON_EXIT", "no")
    monkeypatch.setenv("TODO_RESTORE_ID_COUNTER", "yes")

    s = Settings.from_env()
    assert s.todo_file_path == tmp_path / "mine.json"
    assert s.autosave_interval_seconds == 2.5
    assert s.save_on_exit is False
    assert s.restore_id_counter is True


def test_bad_interval_falls_back(monkeypatch) -> None:
    monkeypatch.setenv("TODO_AUTOSAVE_INTERVAL", "soon")
    assert Settings.from_env().autosave_interval_seconds == 10.0

    monkeypatch.setenv("TODO_AUTOSAVE_INTERVAL", "0")
    assert Settings.from_env().autosave_interval_seconds == 0.05
