# tests/test_autosave.py

from __future__ import annotations

import asyncio
import time

import pytest

from todo_tracker.tasks.autosave import (
    MIN_INTERVAL_SECONDS,
    AutoSaveState,
    run_autosave_loop,
    start_autosave_in_background,
)
from todo_tracker.tasks.todo_file import TodoFile
from todo_tracker.tasks.todo_store import TodoStore

from .fakes import FailingStorage, RecordingStorage, TickCountingStore

TICK = MIN_INTERVAL_SECONDS


def _wait_until(predicate, timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


async def _await_until(predicate, timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        await asyncio.sleep(0.01)
    return predicate()


@pytest.mark.asyncio
async def test_loop_saves_only_when_dirty(store: TodoStore) -> None:
    counting = TickCountingStore(store)
    storage = RecordingStorage()
    stop = asyncio.Event()

    runner = asyncio.create_task(
        run_autosave_loop(counting, storage, stop_event=stop, interval_seconds=TICK)
    )

    # Clean store: several ticks, no saves.
    assert await _await_until(lambda: counting.ticks >= 3)
    assert storage.saves == 0

    store.create("Buy milk")
    assert await _await_until(lambda: storage.saves >= 1)
    ticks_at_save = counting.ticks
    assert await _await_until(lambda: counting.ticks >= ticks_at_save + 3)

    stop.set()
    saves = await runner

    # One change -> exactly one save, however many ticks passed.
    assert saves == 1
    assert storage.saved == [["Buy milk"]]
    assert not store.is_dirty


@pytest.mark.asyncio
async def test_loop_keeps_running_after_save_failures(store: TodoStore) -> None:
    storage = FailingStorage()
    stop = asyncio.Event()
    store.create("unsaved")

    runner = asyncio.create_task(
        run_autosave_loop(store, storage, stop_event=stop, interval_seconds=TICK)
    )
    assert await _await_until(lambda: storage.attempts >= 2)
    assert not runner.done()

    stop.set()
    saves = await runner

    assert saves == 0
    assert store.is_dirty


@pytest.mark.asyncio
async def test_stop_ends_loop_without_waiting_for_interval(store: TodoStore) -> None:
    storage = RecordingStorage()
    stop = asyncio.Event()
    states: list[AutoSaveState] = []
    store.create("pending")

    runner = asyncio.create_task(
        run_autosave_loop(
            store, storage, stop_event=stop, interval_seconds=60.0, on_state=states.append
        )
    )
    await asyncio.sleep(0)
    stop.set()
    saves = await asyncio.wait_for(runner, timeout=1.0)

    assert saves == 0
    assert storage.saves == 0
    assert states == [AutoSaveState.RUNNING, AutoSaveState.STOPPING, AutoSaveState.STOPPED]


@pytest.mark.asyncio
async def test_no_ticks_after_stop(store: TodoStore) -> None:
    storage = RecordingStorage()
    stop = asyncio.Event()

    counting = TickCountingStore(store)
    runner = asyncio.create_task(
        run_autosave_loop(counting, storage, stop_event=stop, interval_seconds=TICK)
    )
    await asyncio.sleep(TICK / 2)
    stop.set()
    await runner

    store.create("after stop")
    await asyncio.sleep(TICK * 3)
    assert storage.saves == 0
    assert counting.ticks == 0


def test_background_runner_saves_and_stops(store: TodoStore, todo_file: TodoFile) -> None:
    runner = start_autosave_in_background(store, todo_file, interval_seconds=TICK)
    assert runner is not None
    assert runner.state == AutoSaveState.RUNNING

    store.create("Walk dog")
    assert _wait_until(lambda: todo_file.path.exists() and not store.is_dirty)

    runner.stop()
    assert runner.join(timeout=2.0) is True
    assert runner.state == AutoSaveState.STOPPED
    assert runner.saves >= 1

    # Second stop is harmless.
    runner.stop()

    fresh = TodoStore()
    todo_file.load(fresh)
    assert [t.title for t in fresh.list()] == ["Walk dog"]


def test_background_runner_stops_promptly_with_long_interval(store: TodoStore) -> None:
    runner = start_autosave_in_background(store, RecordingStorage(), interval_seconds=30.0)
    assert runner is not None

    started = time.monotonic()
    runner.stop()
    assert runner.join(timeout=2.0) is True
    assert time.monotonic() - started < 2.0
    assert runner.saves == 0
