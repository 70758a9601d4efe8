"""
Ordered overlay of named child configs.

Resolution is a linear scan in priority order that stops at the first child
defining the key. Nested composites resolve internally, so each behaves as a
single layer from its parent's point of view. Nothing is cached here; every
lookup sees the current structure.
"""
import logging
from typing import Any, Iterator, List, Optional, Tuple

from .base import Config, ConfigListener, NOT_FOUND
from .domain import ResolutionResult
from .errors import ConfigAlreadyExistsError

logger = logging.getLogger(__name__)

Child = Tuple[str, Config]


class CompositeVisitor:
    """Visitor that is told about each child of a composite."""

    def visit_key(self, key: str, value: Any) -> Any:
        return None

    def visit_child(self, name: str, child: Config) -> Any:
        return None


class _ChildListener(ConfigListener):
    """Re-publishes child events as events of the owning composite."""

    def __init__(self, owner: 'CompositeConfig'):
        self._owner = owner

    def on_config_added(self, config: Config) -> None:
        self._owner._on_child_change()

    def on_config_removed(self, config: Config) -> None:
        self._owner._on_child_change()

    def on_config_updated(self, config: Config) -> None:
        self._owner._on_child_change()

    def on_error(self, error: Exception, config: Config) -> None:
        self._owner._notify_error(error, config)


class CompositeConfig(Config):
    """
    Config whose children are searched in priority order.

    Children are held as an immutable tuple of (name, config) pairs. Writers
    build a new tuple under the node lock and swap the reference; readers
    grab the current tuple once and scan it without locking.
    """

    def __init__(self, name: Optional[str] = None, unique_names: bool = False):
        super().__init__(name)
        self._children: Tuple[Child, ...] = ()
        self._unique_names = unique_names
        self._child_listener = _ChildListener(self)

    # ========== Structure ==========

    def add_first(self, name: str, config: Config) -> None:
        """Insert config ahead of every existing child (highest priority)."""
        self._insert(0, name, config)

    def add_last(self, name: str, config: Config) -> None:
        """Append config behind every existing child (lowest priority)."""
        self._insert(None, name, config)

    def _insert(self, index: Optional[int], name: str, config: Config) -> None:
        if config is None:
            raise ValueError("Child configuration must not be None")
        if not name:
            raise ValueError("Child configuration must be named")

        with self._lock:
            if self._unique_names and self._index_of(name) >= 0:
                raise ConfigAlreadyExistsError(name, self.name)
            children = list(self._children)
            if index is None:
                children.append((name, config))
            else:
                children.insert(index, (name, config))
            self._children = tuple(children)
            self._version += 1

        config.add_listener(self._child_listener)
        logger.debug(f"[{self.name}] added '{name}' at {'end' if index is None else index}")
        self._notify_added(config)

    def remove(self, name: str) -> Optional[Config]:
        """Remove the highest-priority child with this name and return it."""
        with self._lock:
            index = self._index_of(name)
            if index < 0:
                return None
            children = list(self._children)
            _, removed = children.pop(index)
            self._children = tuple(children)
            self._version += 1
            still_attached = any(child is removed for _, child in children)

        if not still_attached:
            removed.remove_listener(self._child_listener)
        logger.debug(f"[{self.name}] removed '{name}'")
        self._notify_removed(removed)
        return removed

    def replace(self, name: str, config: Config) -> Optional[Config]:
        """
        Swap the child named `name` for config in the same position.
        Appends when no such child exists. Returns the replaced child.
        """
        if config is None:
            raise ValueError("Child configuration must not be None")

        with self._lock:
            index = self._index_of(name)
            if index < 0:
                previous = None
            else:
                children = list(self._children)
                previous = children[index][1]
                children[index] = (name, config)
                self._children = tuple(children)
                self._version += 1

        if previous is None:
            self.add_last(name, config)
            return None

        if not any(child is previous for _, child in self._children):
            previous.remove_listener(self._child_listener)
        config.add_listener(self._child_listener)
        self._notify_updated(self)
        return previous

    def get_config(self, name: str) -> Optional[Config]:
        for child_name, child in self._children:
            if child_name == name:
                return child
        return None

    def config_names(self) -> List[str]:
        return [name for name, _ in self._children]

    def children(self) -> List[Child]:
        return list(self._children)

    def _index_of(self, name: str) -> int:
        for i, (child_name, _) in enumerate(self._children):
            if child_name == name:
                return i
        return -1

    # ========== Lookup ==========

    def get_raw_property(self, key: str, default: Any = None) -> Any:
        for _, child in self._children:
            value = child.get_raw_property(key, NOT_FOUND)
            if value is not NOT_FOUND:
                return value
        return default

    def contains_key(self, key: str) -> bool:
        return any(child.contains_key(key) for _, child in self._children)

    def _iter_keys(self) -> Iterator[str]:
        seen = {}
        for _, child in self._children:
            for key in child.keys():
                seen.setdefault(key, None)
        return iter(seen)

    def is_empty(self) -> bool:
        return all(child.is_empty() for _, child in self._children)

    def resolve_source(self, key: str) -> Optional[ResolutionResult]:
        """Describe which child supplies key, or None if none does."""
        return self._resolve_source(key, 0, ())

    def _resolve_source(self, key: str, depth: int, path: Tuple[str, ...]) -> Optional[ResolutionResult]:
        for child_name, child in self._children:
            child_path = path + (child_name,)
            if isinstance(child, CompositeConfig):
                found = child._resolve_source(key, depth + 1, child_path)
                if found is not None:
                    return found
                continue
            value = child.get_raw_property(key, NOT_FOUND)
            if value is not NOT_FOUND:
                return ResolutionResult(
                    key=key,
                    value=value,
                    source=child_name,
                    depth=depth,
                    path="/".join(child_path)
                )
        return None

    # ========== Traversal ==========

    def accept(self, visitor: Any) -> Any:
        result = None
        if isinstance(visitor, CompositeVisitor):
            for name, child in self._children:
                result = visitor.visit_child(name, child)
        else:
            for _, child in self._children:
                result = child.accept(visitor)
        return result

    def _on_child_change(self) -> None:
        with self._lock:
            self._version += 1
        self._notify_updated(self)

    def __repr__(self) -> str:
        names = ", ".join(self.config_names())
        return f"{type(self).__name__}(name={self.name!r}, children=[{names}])"
