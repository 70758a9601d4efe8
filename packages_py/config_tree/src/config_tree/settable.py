import logging
from typing import Any, Mapping, Optional
from .base import LeafConfig, generate_unique_name

logger = logging.getLogger(__name__)


class SettableConfig(LeafConfig):
    """Leaf whose properties can be changed at runtime."""

    def __init__(self, name: Optional[str] = None, properties: Optional[Mapping[str, Any]] = None):
        super().__init__(name or generate_unique_name("settable-"), properties)

    def set_property(self, key: str, value: Any) -> None:
        with self._lock:
            props = dict(self._props)
            props[key] = value
            self._swap(props)
        logger.debug(f"[{self.name}] set '{key}' (version {self.version})")
        self._notify_updated(self)

    def set_properties(self, properties: Mapping[str, Any]) -> None:
        if not properties:
            return
        with self._lock:
            props = dict(self._props)
            props.update(properties)
            self._swap(props)
        logger.debug(f"[{self.name}] set {len(properties)} properties (version {self.version})")
        self._notify_updated(self)

    def clear_property(self, key: str) -> None:
        with self._lock:
            if key not in self._props:
                return
            props = dict(self._props)
            del props[key]
            self._swap(props)
        logger.debug(f"[{self.name}] cleared '{key}' (version {self.version})")
        self._notify_updated(self)

    def clear(self) -> None:
        with self._lock:
            if not self._props:
                return
            self._swap({})
        self._notify_updated(self)
