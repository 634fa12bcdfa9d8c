# src/todo_tracker/tasks/autosave.py

from __future__ import annotations

"""
Auto-save loop.

A small timer loop that:
- wakes every interval_seconds,
- checks the store's dirty flag,
- saves through the injected storage port only when something changed,
- exits as soon as the stop event is set (no further ticks).

The console REPL blocks on input(), so the loop gets its own event loop
in a background thread (see start_autosave_in_background).
"""

import asyncio
import contextlib
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from ..core.ports import TodoRepo, TodoStorage
from ..logging_setup import AUTOSAVE_THREAD_NAME
from .todo_file import PersistenceError

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 10.0
MIN_INTERVAL_SECONDS = 0.05


class AutoSaveState(str, Enum):
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"


StateListener = Callable[[AutoSaveState], None]


async def _wait_for_stop(stop_event: asyncio.Event, timeout: float) -> bool:
    """True if stop was requested, False if the interval elapsed first."""
    try:
        await asyncio.wait_for(stop_event.wait(), timeout=timeout)
    except TimeoutError:
        return False
    return True


def _notify(on_state: StateListener | None, state: AutoSaveState) -> None:
    if on_state is None:
        return
    try:
        on_state(state)
    except Exception:
        logger.debug("Auto-save state listener failed.", exc_info=True)


async def run_autosave_loop(
        store: TodoRepo,
        storage: TodoStorage,
        *,
        stop_event: asyncio.Event,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        on_state: StateListener | None = None,
) -> int:
    """
    Save the store every interval_seconds if it is dirty.

    Save failures are logged and the loop keeps going; the store stays
    dirty, so the next tick retries. A save in progress is never
    interrupted: stop is only observed between ticks.

    Returns the number of successful saves.
    """
    sleep_s = max(MIN_INTERVAL_SECONDS, float(interval_seconds))
    saves = 0

    _notify(on_state, AutoSaveState.RUNNING)
    logger.info("Auto-save started (interval=%.2fs).", sleep_s)

    while True:
        if await _wait_for_stop(stop_event, sleep_s):
            break

        try:
            dirty = store.is_dirty
        except Exception:
            logger.exception("Auto-save: dirty check failed")
            continue

        if not dirty:
            continue

        try:
            storage.save(store)
            saves += 1
        except PersistenceError as e:
            logger.error("Auto-save failed: %s", e)
        except Exception:
            logger.exception("Auto-save crashed while saving")

    _notify(on_state, AutoSaveState.STOPPING)
    logger.info("Auto-save stopped (saves=%d).", saves)
    _notify(on_state, AutoSaveState.STOPPED)
    return saves


@dataclass
class AutoSaveRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event
    state: AutoSaveState = AutoSaveState.RUNNING
    saves: int = 0
    _done: threading.Event = field(default_factory=threading.Event)

    def stop(self) -> None:
        """Send the one-shot shutdown signal. Safe to call more than once."""
        if self.state == AutoSaveState.STOPPED:
            return
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except RuntimeError:
            # Loop already closed: the thread is finishing on its own.
            logger.debug("Auto-save loop already closed.", exc_info=True)

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the loop to acknowledge shutdown. True if it finished."""
        self.thread.join(timeout=timeout)
        return self._done.is_set()

    def _set_state(self, state: AutoSaveState) -> None:
        self.state = state


def start_autosave_in_background(
        store: TodoRepo,
        storage: TodoStorage,
        *,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
) -> AutoSaveRunner | None:
    """
    Start the auto-save loop in a background thread with its own event loop.

    Returns None if the thread did not come up.
    """
    ready = threading.Event()
    holder_ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        # Wait until the caller has built the runner object we report into.
        started = holder_ready.wait(timeout=5.0)
        autosave = holder.get("runner")
        if not started or not isinstance(autosave, AutoSaveRunner):
            loop.close()
            return

        try:
            autosave.saves = loop.run_until_complete(
                run_autosave_loop(
                    store,
                    storage,
                    stop_event=stop_event,
                    interval_seconds=interval_seconds,
                    on_state=autosave._set_state,
                )
            )
        except Exception:
            logger.exception("Auto-save loop crashed.")
        finally:
            autosave._set_state(AutoSaveState.STOPPED)
            with contextlib.suppress(Exception):
                loop.close()
            autosave._done.set()

    t = threading.Thread(target=runner, name=AUTOSAVE_THREAD_NAME, daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Auto-save thread did not initialize properly.")
        holder_ready.set()
        return None

    autosave = AutoSaveRunner(thread=t, loop=loop, stop_event=stop_event)
    holder["runner"] = autosave
    holder_ready.set()

    logger.info("Auto-save background thread started.")
    return autosave
