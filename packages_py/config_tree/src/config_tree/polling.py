"""
Leaf configs fed by external config sources.

A source is polled outside any lock; the node lock is held only while the
resulting mapping is swapped in.
"""
import logging
import threading
from concurrent.futures import Future
from typing import Any, Callable, Mapping, Optional, Protocol, Union, runtime_checkable

from .base import LeafConfig, generate_unique_name
from .domain import PollingResponse
from .errors import PollingError

logger = logging.getLogger(__name__)


@runtime_checkable
class ConfigSource(Protocol):
    def poll(self, is_initial: bool, checkpoint: Optional[Any]) -> PollingResponse:
        ...


SourceLike = Union[ConfigSource, Callable[[], Union[PollingResponse, Mapping[str, Any]]]]


class DynamicLeafConfig(LeafConfig):
    """Leaf whose contents come from PollingResponse objects."""

    def __init__(self, name: Optional[str] = None):
        super().__init__(name)
        self._checkpoint: Optional[Any] = None

    @property
    def checkpoint(self) -> Optional[Any]:
        return self._checkpoint

    def _apply(self, response: PollingResponse) -> bool:
        """Apply response; returns True when the node contents were replaced."""
        if response.checkpoint is not None:
            self._checkpoint = response.checkpoint
        if not response.has_data:
            return False

        with self._lock:
            self._swap(response.apply_to(self._props))
        logger.debug(
            f"[{self.name}] applied {'delta' if response.is_delta else 'snapshot'} "
            f"(+{len(response.to_add)} -{len(response.to_remove)}, version {self.version})"
        )
        self._notify_updated(self)
        return True


class WatchedDynamicConfig(DynamicLeafConfig):
    """Push-style leaf updated by a watch-based source calling on_update()."""

    def __init__(self, name: Optional[str] = None):
        super().__init__(name or generate_unique_name("watched-"))

    def on_update(self, response: PollingResponse) -> None:
        self._apply(response)


class PollingDynamicConfig(DynamicLeafConfig):
    """
    Leaf refreshed by a polling strategy.

    The strategy receives the update callback through execute(); with a
    synchronous-init strategy the node is populated before the constructor
    returns. Overlapping updates are skipped rather than queued.
    """

    def __init__(self, source: SourceLike, strategy: Any, name: Optional[str] = None):
        super().__init__(name or generate_unique_name("polling-"))
        self._source = source
        self._strategy = strategy
        self._busy = threading.Lock()
        self._initial = True
        self.update_count = 0
        self.error_count = 0
        self.last_error: Optional[Exception] = None
        self.future: Future = strategy.execute(self._update)

    def _poll(self) -> PollingResponse:
        if isinstance(self._source, ConfigSource):
            result = self._source.poll(self._initial, self._checkpoint)
        else:
            result = self._source()
        if isinstance(result, PollingResponse):
            return result
        if isinstance(result, Mapping):
            return PollingResponse.for_snapshot(result)
        raise TypeError(f"Config source returned unsupported result: {type(result).__name__}")

    def _update(self) -> None:
        if not self._busy.acquire(blocking=False):
            logger.debug(f"[{self.name}] update already in progress, skipping")
            return
        try:
            response = self._poll()
            self._apply(response)
            self._initial = False
            self.update_count += 1
        except Exception as e:
            self.error_count += 1
            self.last_error = e
            logger.warning(f"[{self.name}] poll failed: {e}")
            self._notify_error(e, self)
            raise PollingError(self.name, e) from e
        finally:
            self._busy.release()

    def shutdown(self) -> None:
        self._strategy.shutdown()
