import os
from typing import Mapping, Optional
from .base import LeafConfig


class EnvironmentConfig(LeafConfig):
    """Leaf over a snapshot of the process environment."""

    def __init__(self, name: str = "environment", environ: Optional[Mapping[str, str]] = None):
        self._environ = environ
        super().__init__(name, self._snapshot())

    def _snapshot(self) -> dict:
        return dict(self._environ if self._environ is not None else os.environ)

    def reload(self) -> None:
        """Re-read the environment and notify listeners if anything changed."""
        snapshot = self._snapshot()
        with self._lock:
            if snapshot == dict(self._props):
                return
            self._swap(snapshot)
        self._notify_updated(self)
