from typing import Any, Callable, Optional


class PropertyListener:
    """Receives value changes and decode failures of one property."""

    def on_change(self, value: Any) -> None:
        pass

    def on_parse_error(self, error: Exception) -> None:
        pass


class FunctionListener(PropertyListener):
    """Adapts plain callables. Equal when wrapping the same callables."""

    def __init__(self, on_change: Callable[[Any], None], on_error: Optional[Callable[[Exception], None]] = None):
        self._on_change = on_change
        self._on_error = on_error

    def on_change(self, value: Any) -> None:
        self._on_change(value)

    def on_parse_error(self, error: Exception) -> None:
        if self._on_error is not None:
            self._on_error(error)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FunctionListener):
            return NotImplemented
        return self._on_change == other._on_change and self._on_error == other._on_error

    def __hash__(self) -> int:
        return hash((self._on_change, self._on_error))


def as_listener(listener: Any) -> PropertyListener:
    if isinstance(listener, PropertyListener):
        return listener
    if callable(listener):
        return FunctionListener(listener)
    raise TypeError(f"Expected a PropertyListener or callable, got {type(listener).__name__}")
