from typing import Any, Iterator
from .base import Config, ConfigListener


class _ForwardingListener(ConfigListener):
    def __init__(self, view: 'PrefixedViewConfig'):
        self._view = view

    def on_config_added(self, config: Config) -> None:
        self._view._on_parent_change()

    def on_config_removed(self, config: Config) -> None:
        self._view._on_parent_change()

    def on_config_updated(self, config: Config) -> None:
        self._view._on_parent_change()

    def on_error(self, error: Exception, config: Config) -> None:
        self._view._notify_error(error, self._view)


class PrefixedViewConfig(Config):
    """
    Read-only view that exposes `prefix.key` of a parent config as `key`.

    The view subscribes to its parent only while it has listeners of its
    own, so views that nobody observes can be dropped freely.
    """

    def __init__(self, prefix: str, config: Config):
        super().__init__(f"{config.name}[{prefix}]")
        self._prefix = prefix if prefix.endswith(".") else prefix + "."
        self._config = config
        self._forwarder = _ForwardingListener(self)

    @property
    def prefix(self) -> str:
        return self._prefix

    def get_raw_property(self, key: str, default: Any = None) -> Any:
        return self._config.get_raw_property(self._prefix + key, default)

    def contains_key(self, key: str) -> bool:
        return self._config.contains_key(self._prefix + key)

    def _iter_keys(self) -> Iterator[str]:
        n = len(self._prefix)
        return iter([k[n:] for k in self._config.keys(self._prefix)])

    def add_listener(self, listener: ConfigListener) -> None:
        with self._lock:
            super().add_listener(listener)
            self._config.add_listener(self._forwarder)

    def remove_listener(self, listener: ConfigListener) -> None:
        with self._lock:
            super().remove_listener(listener)
            if not self._listeners:
                self._config.remove_listener(self._forwarder)

    def _on_parent_change(self) -> None:
        with self._lock:
            self._version += 1
        self._notify_updated(self)
