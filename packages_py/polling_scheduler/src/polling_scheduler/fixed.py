"""
Fixed-rate polling.

With sync_init (the default) execute() runs the first poll on the calling
thread and retries it until it succeeds, so the caller starts with a
populated config. Only shutdown() ends that retry loop early; the returned
future then already holds the failure. Subsequent polls run on a daemon
thread at a fixed rate, and their failures are logged and swallowed.
"""
import itertools
import logging
import threading
import time
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, List, Optional

from .config import SchedulerSettings, load_settings
from .errors import SchedulerShutdownError
from .futures import immediate_failure
from .strategy import PollCallback, PollingStrategy

logger = logging.getLogger(__name__)

_thread_ids = itertools.count(1)


@dataclass
class PollState:
    """Bookkeeping for one scheduled callback."""
    name: str
    last_result: Any = None
    last_error: Optional[Exception] = None
    last_success_at: Optional[float] = None
    next_due_at: Optional[float] = None
    attempts: int = 0
    failures: int = 0


class FixedPollingStrategy(PollingStrategy):
    def __init__(
        self,
        interval: Optional[float] = None,
        sync_init: Optional[bool] = None,
        settings: Optional[SchedulerSettings] = None
    ):
        if settings is None:
            settings = load_settings(interval=interval, sync_init=sync_init)
        elif interval is not None or sync_init is not None:
            overrides = {}
            if interval is not None:
                overrides["interval"] = interval
            if sync_init is not None:
                overrides["sync_init"] = sync_init
            settings = settings.model_copy(update=overrides)
        self.settings = settings
        self._stop = threading.Event()
        self._threads: List[threading.Thread] = []
        self.states: List[PollState] = []

    @property
    def is_shutdown(self) -> bool:
        return self._stop.is_set()

    def execute(self, callback: PollCallback) -> Future:
        if self._stop.is_set():
            return immediate_failure(SchedulerShutdownError())

        name = f"{self.settings.thread_name_prefix}-{next(_thread_ids)}"
        state = PollState(name=name)
        self.states.append(state)
        future: Future = Future()

        first_delay = 0.0
        if self.settings.sync_init:
            error = self._initial_poll(callback, state)
            if error is not None:
                return immediate_failure(SchedulerShutdownError("Shut down before initial poll succeeded", error))
            first_delay = self.settings.interval

        thread = threading.Thread(
            target=self._loop,
            args=(callback, state, future, first_delay),
            name=name,
            daemon=True
        )
        self._threads.append(thread)
        thread.start()
        logger.info(f"[{name}] polling every {self.settings.interval}s")
        return future

    def shutdown(self, wait: bool = False, timeout: Optional[float] = None) -> None:
        """
        Stop future polls. A poll in flight finishes and applies its result.
        With wait=True, block until polling threads have exited.
        """
        if not self._stop.is_set():
            logger.info("Shutting down polling scheduler")
        self._stop.set()
        if wait:
            for thread in self._threads:
                thread.join(timeout)

    # ========== Internals ==========

    def _run_once(self, callback: PollCallback, state: PollState) -> None:
        state.attempts += 1
        try:
            state.last_result = callback()
        except Exception as e:
            state.failures += 1
            state.last_error = e
            raise
        state.last_error = None
        state.last_success_at = time.time()

    def _initial_poll(self, callback: PollCallback, state: PollState) -> Optional[Exception]:
        """Retry until success (returns None) or shutdown (returns the last error)."""
        failures = 0
        while True:
            try:
                self._run_once(callback, state)
                return None
            except Exception as e:
                failures += 1
                delay = self.settings.retry_delay_for(failures)
                logger.warning(f"[{state.name}] initial poll failed (attempt {failures}), retrying in {delay}s: {e}")
                if self._stop.wait(delay):
                    logger.error(f"[{state.name}] shut down before initial poll succeeded")
                    return e

    def _loop(self, callback: PollCallback, state: PollState, future: Future, first_delay: float) -> None:
        next_due = time.monotonic() + first_delay
        state.next_due_at = time.time() + first_delay
        while not self._stop.wait(max(next_due - time.monotonic(), 0.0)):
            if future.cancelled():
                break
            try:
                self._run_once(callback, state)
            except Exception as e:
                logger.warning(f"[{state.name}] poll failed: {e}")
            next_due += self.settings.interval
            # Skip missed slots rather than firing a burst
            now = time.monotonic()
            if next_due < now:
                next_due = now
            state.next_due_at = time.time() + (next_due - now)

        logger.debug(f"[{state.name}] polling stopped after {state.attempts} attempts")
        if not future.done():
            future.set_result(state)
