"""
Tests for FixedPollingStrategy.
"""
import threading
import time

import pytest

from polling_scheduler import (
    FixedPollingStrategy,
    SchedulerSettings,
    SchedulerShutdownError,
    load_settings,
)


def wait_for(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


def fast_settings(**kwargs):
    values = {"interval": 0.05, "retry_delay": 0.01}
    values.update(kwargs)
    return SchedulerSettings(**values)


class TestSyncInit:
    def test_blocks_until_third_attempt_then_polls_periodically(self):
        calls = []

        def callback():
            calls.append(threading.current_thread().name)
            if len(calls) <= 2:
                raise RuntimeError(f"failure {len(calls)}")
            return len(calls)

        caller = threading.current_thread().name
        strategy = FixedPollingStrategy(settings=fast_settings())
        try:
            future = strategy.execute(callback)
            # Returned only after the successful third attempt on this thread
            assert calls == [caller, caller, caller]
            assert not future.done()

            state = strategy.states[0]
            assert state.failures == 2
            assert state.last_result == 3
            assert state.last_success_at is not None

            assert wait_for(lambda: len(calls) >= 5)
            assert calls[3] != caller
        finally:
            strategy.shutdown(wait=True, timeout=1.0)

    def test_shutdown_interrupts_initial_retries(self):
        strategy = FixedPollingStrategy(settings=fast_settings(retry_delay=10.0))
        started = threading.Event()

        def callback():
            started.set()
            raise RuntimeError("never works")

        result = {}
        worker = threading.Thread(target=lambda: result.setdefault("future", strategy.execute(callback)))
        worker.start()
        assert started.wait(1.0)
        strategy.shutdown()
        worker.join(1.0)

        future = result["future"]
        assert future.done()
        error = future.exception()
        assert isinstance(error, SchedulerShutdownError)
        assert str(error.cause) == "never works"

    def test_execute_after_shutdown_fails_fast(self):
        strategy = FixedPollingStrategy(settings=fast_settings())
        strategy.shutdown()
        future = strategy.execute(lambda: None)
        assert isinstance(future.exception(), SchedulerShutdownError)


class TestPeriodic:
    def test_async_init_runs_on_background_thread(self):
        ran = threading.Event()
        strategy = FixedPollingStrategy(settings=fast_settings(sync_init=False))
        try:
            strategy.execute(ran.set)
            assert ran.wait(1.0)
        finally:
            strategy.shutdown(wait=True, timeout=1.0)

    def test_failures_are_swallowed(self):
        calls = []

        def callback():
            calls.append(1)
            if len(calls) > 1:
                raise RuntimeError("flaky")

        strategy = FixedPollingStrategy(settings=fast_settings())
        try:
            strategy.execute(callback)
            assert wait_for(lambda: len(calls) >= 4)
            assert isinstance(strategy.states[0].last_error, RuntimeError)
        finally:
            strategy.shutdown(wait=True, timeout=1.0)

    def test_shutdown_stops_polls_and_completes_future(self):
        calls = []
        strategy = FixedPollingStrategy(settings=fast_settings())
        future = strategy.execute(lambda: calls.append(1))
        strategy.shutdown(wait=True, timeout=1.0)
        count = len(calls)
        time.sleep(0.15)
        assert len(calls) == count
        assert future.result(1.0).attempts == count

    def test_cancel_stops_one_callback(self):
        calls = []
        strategy = FixedPollingStrategy(settings=fast_settings())
        try:
            future = strategy.execute(lambda: calls.append(1))
            assert future.cancel()
            time.sleep(0.2)
            assert len(calls) <= 2
        finally:
            strategy.shutdown(wait=True, timeout=1.0)


class TestSettings:
    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("CONFIG_POLL_INTERVAL_SECONDS", "5")
        monkeypatch.setenv("CONFIG_POLL_SYNC_INIT", "false")
        monkeypatch.setenv("CONFIG_POLL_RETRY_DELAY_SECONDS", "0.5")
        settings = load_settings()
        assert settings.interval == 5.0
        assert settings.sync_init is False
        assert settings.retry_delay == 0.5

    def test_argument_beats_env(self, monkeypatch):
        monkeypatch.setenv("CONFIG_POLL_INTERVAL_SECONDS", "5")
        assert load_settings(interval=2).interval == 2.0

    def test_invalid_env_falls_back(self, monkeypatch):
        monkeypatch.setenv("CONFIG_POLL_INTERVAL_SECONDS", "soon")
        assert load_settings().interval == 30.0

    def test_backoff_is_capped(self):
        settings = SchedulerSettings(retry_delay=1.0, backoff_multiplier=2.0, max_retry_delay=5.0)
        assert [settings.retry_delay_for(n) for n in (1, 2, 3, 4)] == [1.0, 2.0, 4.0, 5.0]

    def test_fixed_delay_by_default(self):
        settings = SchedulerSettings(retry_delay=0.3)
        assert settings.retry_delay_for(1) == settings.retry_delay_for(5) == 0.3

    def test_interval_must_be_positive(self):
        with pytest.raises(ValueError):
            SchedulerSettings(interval=0)

    def test_constructor_arguments_override_settings(self):
        strategy = FixedPollingStrategy(interval=7, settings=SchedulerSettings(sync_init=False))
        assert strategy.settings.interval == 7
        assert strategy.settings.sync_init is False
