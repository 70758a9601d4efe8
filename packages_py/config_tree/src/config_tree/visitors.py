"""
Diagnostic visitors for config trees.

    root.accept(PrintVisitor())
    root.accept(PropertyOverrideVisitor("db.host"))
    # => {"application/app-prod": "prod-db", "defaults": "localhost"}
"""
import logging
import sys
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Set, TextIO

from .base import Config, NOT_FOUND
from .composite import CompositeConfig, CompositeVisitor
from .sensitive import mask_value


class Visitor:
    """Receives every (key, value) pair of the nodes it is passed to."""

    def visit_key(self, key: str, value: Any) -> Any:
        return None


class _IndentingVisitor(CompositeVisitor, ABC):
    def __init__(self, indent: str = "  "):
        self._indent = indent
        self._depth = 0

    @abstractmethod
    def _emit(self, line: str) -> None:
        pass

    def visit_key(self, key: str, value: Any) -> Any:
        self._emit(f"{self._indent * self._depth}{key} = {mask_value(key, value)}")
        return None

    def visit_child(self, name: str, child: Config) -> Any:
        self._emit(f"{self._indent * self._depth}{name}")
        self._depth += 1
        try:
            child.accept(self)
        finally:
            self._depth -= 1
        return None


class PrintVisitor(_IndentingVisitor):
    """Writes the indented tree to a stream. Sensitive values are masked."""

    def __init__(self, stream: Optional[TextIO] = None, indent: str = "  "):
        super().__init__(indent)
        self._stream = stream or sys.stdout

    def _emit(self, line: str) -> None:
        self._stream.write(line + "\n")


class LoggingVisitor(_IndentingVisitor):
    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO, indent: str = "  "):
        super().__init__(indent)
        self._logger = logger or logging.getLogger(__name__)
        self._level = level

    def _emit(self, line: str) -> None:
        self._logger.log(self._level, line)


class PropertyOverrideVisitor(CompositeVisitor):
    """
    Collects every layer that defines key, highest priority first.

    The result maps the slash-joined path of each defining child to its raw
    value, so the first entry is the value that wins.
    """

    def __init__(self, key: str):
        self.key = key
        self.result: Dict[str, Any] = {}
        self._path: List[str] = []

    def visit_key(self, key: str, value: Any) -> Dict[str, Any]:
        if key == self.key:
            self.result.setdefault("/".join(self._path), value)
        return self.result

    def visit_child(self, name: str, child: Config) -> Dict[str, Any]:
        self._path.append(name)
        try:
            if isinstance(child, CompositeConfig):
                child.accept(self)
            else:
                value = child.get_raw_property(self.key, NOT_FOUND)
                if value is not NOT_FOUND:
                    self.result["/".join(self._path)] = value
        finally:
            self._path.pop()
        return self.result


class FlattenedNamesVisitor(Visitor):
    def __init__(self):
        self.names: Set[str] = set()

    def visit_key(self, key: str, value: Any) -> Set[str]:
        self.names.add(key)
        return self.names
