"""
Manually triggered polling for deterministic tests.

    strategy = ManualPollingStrategy()
    config = PollingDynamicConfig(source, strategy)
    strategy.fire()   # runs one poll, re-raises its error
"""
import logging
import queue
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from .errors import SchedulerError, SchedulerShutdownError
from .strategy import PollCallback, PollingStrategy

logger = logging.getLogger(__name__)

_STOP = None


class ManualPollingStrategy(PollingStrategy):
    def __init__(self):
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="config-manual-poller")
        self._requests: "queue.Queue[Optional[Future]]" = queue.Queue()
        self._future: Optional[Future] = None
        self._lock = threading.Lock()
        self._shutdown = False

    @property
    def is_shutdown(self) -> bool:
        return self._shutdown

    @property
    def pending(self) -> int:
        """Fired polls still waiting for the worker."""
        return self._requests.qsize()

    def execute(self, callback: PollCallback) -> Future:
        with self._lock:
            if self._shutdown:
                raise SchedulerShutdownError()
            if self._future is not None:
                raise SchedulerError("ManualPollingStrategy drives a single callback")
            self._future = self._executor.submit(self._worker, callback)
        return self._future

    def _worker(self, callback: PollCallback) -> None:
        while True:
            request = self._requests.get()
            if request is _STOP:
                return
            if not request.set_running_or_notify_cancel():
                continue
            try:
                request.set_result(callback())
            except Exception as e:
                request.set_exception(e)

    def fire(self, timeout: Optional[float] = None) -> None:
        """
        Release exactly one pending poll and wait for it.

        Raises whatever the poll raised, SchedulerShutdownError once the
        strategy is shut down, or concurrent.futures.TimeoutError if the
        poll does not finish within timeout.
        """
        request: Future = Future()
        with self._lock:
            if self._shutdown:
                raise SchedulerShutdownError()
            if self._future is None:
                raise SchedulerError("No callback registered; call execute() first")
            self._requests.put(request)
        request.result(timeout)

    def shutdown(self) -> None:
        """Stop the worker. A poll in flight finishes; queued ones fail."""
        with self._lock:
            if self._shutdown:
                return
            self._shutdown = True
            dropped = 0
            while True:
                try:
                    request = self._requests.get_nowait()
                except queue.Empty:
                    break
                if request is not _STOP and request.set_running_or_notify_cancel():
                    request.set_exception(SchedulerShutdownError())
                    dropped += 1
            self._requests.put(_STOP)
        if dropped:
            logger.info(f"Manual poller shut down with {dropped} queued polls")
        self._executor.shutdown(wait=False)
