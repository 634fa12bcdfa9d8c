# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

from todo_tracker.logging_setup import AUTOSAVE_THREAD_NAME, _MenuSafeFilter, setup_logging


def _record(name: str, level: int, thread: str = "MainThread") -> logging.LogRecord:
    rec = logging.LogRecord(name, level, __file__, 1, "msg", None, None)
    rec.threadName = thread
    return rec


def test_filter_hides_background_chatter() -> None:
    f = _MenuSafeFilter()
    assert f.filter(_record("todo_tracker.cli.main", logging.INFO))
    assert not f.filter(_record("todo_tracker.tasks.todo_file", logging.INFO, AUTOSAVE_THREAD_NAME))
    assert f.filter(_record("todo_tracker.tasks.autosave", logging.ERROR, AUTOSAVE_THREAD_NAME))
    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert f.filter(_record("urllib3", logging.ERROR))


def test_setup_logging_writes_debug_to_file(tmp_path: Path, restore_root_logging) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs", console=False)

    logging.getLogger("todo_tracker.test").debug("hello from the test")
    for h in logging.getLogger().handlers:
        h.flush()

    assert log_file == tmp_path / "logs" / "todo.log"
    assert "hello from the test" in log_file.read_text("utf-8")
    assert not any(type(h) is logging.StreamHandler for h in logging.getLogger().handlers)


def test_setup_logging_replaces_previous_handlers(tmp_path: Path, restore_root_logging) -> None:
    setup_logging(log_dir=tmp_path / "a")
    setup_logging(log_dir=tmp_path / "b")

    files = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
    assert len(files) == 1
    assert Path(files[0].baseFilename).parent == tmp_path / "b"
