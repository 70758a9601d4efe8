"""
Base configuration node.

A node exposes raw values only. Interpolation and type conversion belong
to the property layer that reads through the tree.
"""
import itertools
import logging
import threading
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from .errors import NotFoundError

logger = logging.getLogger(__name__)


class _NotFound:
    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> bool:
        return False


# Returned by lookups that miss when the caller passes it as the default
NOT_FOUND = _NotFound()

_id_counter = itertools.count(1)


def generate_unique_name(prefix: str) -> str:
    return f"{prefix}{next(_id_counter)}"


class ConfigListener:
    """Receives change events from a config node. All hooks default to no-ops."""

    def on_config_added(self, config: 'Config') -> None:
        pass

    def on_config_removed(self, config: 'Config') -> None:
        pass

    def on_config_updated(self, config: 'Config') -> None:
        pass

    def on_error(self, error: Exception, config: 'Config') -> None:
        pass


class Config(ABC):
    """A named, versioned source of raw key/value pairs."""

    def __init__(self, name: Optional[str] = None):
        self._name = name or generate_unique_name("unnamed-")
        self._version = 0
        self._lock = threading.RLock()
        self._listeners: Tuple[ConfigListener, ...] = ()

    @property
    def name(self) -> str:
        return self._name

    @property
    def version(self) -> int:
        return self._version

    # ========== Abstract API ==========

    @abstractmethod
    def get_raw_property(self, key: str, default: Any = None) -> Any:
        """Raw value for key, or default when no layer defines it."""
        pass

    @abstractmethod
    def contains_key(self, key: str) -> bool:
        pass

    @abstractmethod
    def _iter_keys(self) -> Iterator[str]:
        pass

    # ========== Shared Implementation ==========

    def get(self, key: str) -> Any:
        value = self.get_raw_property(key, NOT_FOUND)
        if value is NOT_FOUND:
            raise NotFoundError(key, self._name)
        return value

    def keys(self, prefix: Optional[str] = None) -> List[str]:
        if not prefix:
            return list(self._iter_keys())
        return [k for k in self._iter_keys() if k.startswith(prefix)]

    def is_empty(self) -> bool:
        for _ in self._iter_keys():
            return False
        return True

    def for_each_property(self, fn: Callable[[str, Any], None]) -> None:
        for key in self.keys():
            value = self.get_raw_property(key, NOT_FOUND)
            if value is not NOT_FOUND:
                fn(key, value)

    def accept(self, visitor: Any) -> Any:
        """Call visitor.visit_key(key, value) for every property of this node."""
        result = None
        for key in self.keys():
            value = self.get_raw_property(key, NOT_FOUND)
            if value is not NOT_FOUND:
                result = visitor.visit_key(key, value)
        return result

    def get_prefixed_view(self, prefix: str) -> 'Config':
        if not prefix or prefix == ".":
            return self
        from .prefixed import PrefixedViewConfig
        return PrefixedViewConfig(prefix, self)

    # ========== Listeners ==========

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: ConfigListener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners = self._listeners + (listener,)

    def remove_listener(self, listener: ConfigListener) -> None:
        with self._lock:
            self._listeners = tuple(l for l in self._listeners if l is not listener)

    def _notify(self, event: str, *args: Any) -> None:
        # Iterate a snapshot; listeners may register or unregister while we run
        for listener in self._listeners:
            try:
                getattr(listener, event)(*args)
            except Exception as e:
                logger.warning(f"Config listener {listener!r} failed on {event} for '{self._name}': {e}")

    def _notify_added(self, child: 'Config') -> None:
        self._notify("on_config_added", child)

    def _notify_removed(self, child: 'Config') -> None:
        self._notify("on_config_removed", child)

    def _notify_updated(self, child: 'Config') -> None:
        self._notify("on_config_updated", child)

    def _notify_error(self, error: Exception, child: 'Config') -> None:
        self._notify("on_error", error, child)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, version={self._version})"


class LeafConfig(Config):
    """
    Config node backed by a flat key/value mapping.

    The mapping is never mutated in place. Writers build a new dict and swap
    the reference under the node lock, so readers always see a complete
    snapshot without locking.
    """

    def __init__(self, name: Optional[str] = None, properties: Optional[Mapping[str, Any]] = None):
        super().__init__(name)
        self._props: Mapping[str, Any] = MappingProxyType(dict(properties or {}))

    def get_raw_property(self, key: str, default: Any = None) -> Any:
        return self._props.get(key, default)

    def contains_key(self, key: str) -> bool:
        return key in self._props

    def _iter_keys(self) -> Iterator[str]:
        return iter(list(self._props.keys()))

    def is_empty(self) -> bool:
        return not self._props

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._props)

    def for_each_property(self, fn: Callable[[str, Any], None]) -> None:
        for key, value in self._props.items():
            fn(key, value)

    def accept(self, visitor: Any) -> Any:
        result = None
        for key, value in self._props.items():
            result = visitor.visit_key(key, value)
        return result

    def _swap(self, properties: Dict[str, Any]) -> None:
        """Install a new mapping and bump the version. Caller holds the lock."""
        self._props = MappingProxyType(properties)
        self._version += 1

    def __len__(self) -> int:
        return len(self._props)
