import concurrent.futures
import threading
import time

import pytest

from polling_scheduler import (
    ManualPollingStrategy,
    SchedulerError,
    SchedulerShutdownError,
    immediate_failure,
    immediate_success,
)


def test_fire_runs_exactly_one_poll():
    calls = []
    strategy = ManualPollingStrategy()
    try:
        strategy.execute(lambda: calls.append(1))
        assert calls == []
        strategy.fire(timeout=1.0)
        assert calls == [1]
        strategy.fire(timeout=1.0)
        assert calls == [1, 1]
    finally:
        strategy.shutdown()


def test_fire_propagates_poll_error():
    def callback():
        raise ValueError("bad poll")

    strategy = ManualPollingStrategy()
    try:
        strategy.execute(callback)
        with pytest.raises(ValueError, match="bad poll"):
            strategy.fire(timeout=1.0)
        # the worker keeps serving requests after a failure
        with pytest.raises(ValueError):
            strategy.fire(timeout=1.0)
    finally:
        strategy.shutdown()


def test_fire_without_execute():
    with pytest.raises(SchedulerError):
        ManualPollingStrategy().fire()


def test_single_callback_only():
    strategy = ManualPollingStrategy()
    try:
        strategy.execute(lambda: None)
        with pytest.raises(SchedulerError):
            strategy.execute(lambda: None)
    finally:
        strategy.shutdown()


def test_shutdown_ends_worker():
    strategy = ManualPollingStrategy()
    future = strategy.execute(lambda: None)
    strategy.shutdown()
    assert future.result(timeout=1.0) is None


def test_immediate_futures():
    assert immediate_success(5).result() == 5
    failed = immediate_failure(RuntimeError("x"))
    assert failed.done()
    with pytest.raises(RuntimeError):
        failed.result()
    assert isinstance(failed, concurrent.futures.Future)


def test_fire_after_shutdown_raises():
    strategy = ManualPollingStrategy()
    strategy.execute(lambda: None)
    strategy.shutdown()
    assert strategy.is_shutdown
    with pytest.raises(SchedulerShutdownError):
        strategy.fire(timeout=1.0)


def test_execute_after_shutdown_raises():
    strategy = ManualPollingStrategy()
    strategy.shutdown()
    with pytest.raises(SchedulerShutdownError):
        strategy.execute(lambda: None)


def test_shutdown_fails_queued_polls():
    started = threading.Event()
    release = threading.Event()
    outcomes = {}

    def callback():
        started.set()
        release.wait(5.0)

    def fire(name):
        try:
            strategy.fire(timeout=5.0)
            outcomes[name] = "ok"
        except SchedulerShutdownError:
            outcomes[name] = "shutdown"

    strategy = ManualPollingStrategy()
    strategy.execute(callback)
    running = threading.Thread(target=fire, args=("running",))
    running.start()
    assert started.wait(2.0)

    queued = threading.Thread(target=fire, args=("queued",))
    queued.start()
    deadline = time.monotonic() + 2.0
    while strategy.pending == 0 and time.monotonic() < deadline:
        time.sleep(0.01)
    assert strategy.pending == 1

    strategy.shutdown()
    queued.join(2.0)
    assert outcomes.get("queued") == "shutdown"

    release.set()
    running.join(2.0)
    assert outcomes.get("running") == "ok"


def test_shutdown_is_idempotent():
    strategy = ManualPollingStrategy()
    strategy.execute(lambda: None)
    strategy.shutdown()
    strategy.shutdown()
