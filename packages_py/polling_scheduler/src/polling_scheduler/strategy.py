from abc import ABC, abstractmethod
from concurrent.futures import Future
from typing import Any, Callable

PollCallback = Callable[[], Any]


class PollingStrategy(ABC):
    """Decides when a poll callback runs."""

    @abstractmethod
    def execute(self, callback: PollCallback) -> Future:
        """Start running callback; the returned future tracks the schedule."""
        pass

    @abstractmethod
    def shutdown(self) -> None:
        """Stop scheduling further polls. A poll in flight is not interrupted."""
        pass
