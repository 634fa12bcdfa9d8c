# src/todo_tracker/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "todo.log"
AUTOSAVE_THREAD_NAME = "autosave"

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s [%(threadName)s] %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _MenuSafeFilter(logging.Filter):
    """
    The menu shares the terminal with stderr, so the console only gets:
    - todo_tracker records from the foreground thread
    - WARNING+ from the auto-save thread (a save every ten seconds is not news)
    - ERROR+ from anything else (py.warnings, libraries)
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not record.name.startswith("todo_tracker."):
            return record.levelno >= logging.ERROR
        if record.threadName == AUTOSAVE_THREAD_NAME:
            return record.levelno >= logging.WARNING
        return True


def _formatter() -> logging.Formatter:
    return logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)


def _reset_root(root: logging.Logger) -> None:
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()


def setup_logging(
    *,
    log_dir: str | Path = ".local/todo",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
    console: bool = True,
) -> Path:
    """
    Send everything at file_level to <log_dir>/todo.log and, unless console
    is False, a filtered copy to stderr. Replaces existing root handlers.

    Returns the log file path.
    """
    log_file = Path(log_dir) / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    _reset_root(root)
    root.setLevel(min(file_level, console_level))

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(_formatter())
    root.addHandler(fh)

    if console:
        ch = logging.StreamHandler(sys.stderr)
        ch.setLevel(console_level)
        ch.setFormatter(_formatter())
        ch.addFilter(_MenuSafeFilter())
        root.addHandler(ch)

    logging.captureWarnings(True)
    return log_file
