"""
Typed, cached, observable property handle.

A handle caches its decoded value together with the registry version it
was computed at. Any config change bumps the registry version, so every
handle becomes stale at once and recomputes on its next read:

    Uninitialized -> Cached -> Stale -> Cached -> ...

A handle may chain several keys. The first key with a value wins and the
default applies only when none of them is set:

    timeout = registry.get_property("client.timeout").as_integer(30)
    timeout = timeout.or_else_key("http.timeout")
"""
import logging
import time
from typing import TYPE_CHECKING, Any, Callable, Generic, Optional, Tuple, TypeVar

from config_interpolator import InterpolationError

from .errors import DecodeError
from .listeners import PropertyListener, as_listener

if TYPE_CHECKING:
    from .registry import PropertyRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNINITIALIZED = -1


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


def _error_signature(error: Optional[Exception]) -> Optional[Tuple[type, str]]:
    if error is None:
        return None
    return (type(error), str(error))


class Property(Generic[T]):
    def __init__(
        self,
        registry: 'PropertyRegistry',
        keys: Tuple[str, ...],
        type_: Any,
        default: Optional[T],
        decode: Callable[[Any], T]
    ):
        if not keys:
            raise ValueError("A property needs at least one key")
        self._registry = registry
        self.keys = keys
        self.key = keys[0]
        self.type = type_
        self.default = default
        self._decode = decode

        self._cache_version = _UNINITIALIZED
        self._value: Optional[T] = default
        self._has_good_value = False
        self._error: Optional[Exception] = None
        self._reported_signature: Optional[Tuple[type, str]] = None
        self._notified: Any = UNSET
        self._listeners: Tuple[PropertyListener, ...] = ()
        self.source_key: Optional[str] = None
        self.last_update_time: Optional[float] = None

    # ========== Reads ==========

    def get(self) -> Optional[T]:
        """Current decoded value, or the default when no key is set."""
        version = self._registry.version
        if self._cache_version == version:
            return self._value
        with self._registry.locks.lock_for(self.key):
            if self._cache_version != version:
                self._recompute(version)
            return self._value

    @property
    def is_stale(self) -> bool:
        return self._cache_version != self._registry.version

    def or_else_key(self, key: str) -> 'Property[T]':
        """Handle that reads this handle's keys, then key, then the default."""
        return self._registry.get_handle(self.keys + (key,), self.type, self.default, decode=self._decode)

    def _lookup(self) -> Tuple[Optional[str], Any]:
        for key in self.keys:
            raw = self._registry.raw_value(key)
            if raw is not None:
                return key, raw
        return None, None

    def _recompute(self, version: int) -> None:
        """Refresh the cached value. Caller holds the first key's shard lock."""
        try:
            source_key, raw = self._lookup()
            value = self.default if raw is None else self._decode(raw)
        except (DecodeError, InterpolationError) as e:
            logger.warning(f"Property '{self.key}' keeps its last value: {e}")
            self._error = e
            if not self._has_good_value:
                self._value = self.default
        else:
            self._error = None
            if value != self._value or not self._has_good_value:
                self.last_update_time = time.time()
            self._value = value
            self._has_good_value = raw is not None
            self.source_key = source_key
        self._cache_version = version

    # ========== Listeners ==========

    @property
    def has_listeners(self) -> bool:
        return bool(self._listeners)

    def add_listener(self, listener: Any) -> PropertyListener:
        """Register a PropertyListener or a callable taking the new value."""
        wrapped = as_listener(listener)
        with self._registry.locks.lock_for(self.key):
            if not self._listeners:
                self._notified = self.get()
            if wrapped not in self._listeners:
                self._listeners = self._listeners + (wrapped,)
        return wrapped

    def remove_listener(self, listener: Any) -> None:
        wrapped = as_listener(listener)
        with self._registry.locks.lock_for(self.key):
            self._listeners = tuple(l for l in self._listeners if l != wrapped)

    def subscribe(self, fn: Callable[[Optional[T]], None]) -> Callable[[], None]:
        """Register fn and return a function that unregisters it."""
        listener = self.add_listener(fn)
        return lambda: self.remove_listener(listener)

    def _refresh(self) -> None:
        """Run on the notification thread after a config change."""
        lock = self._registry.locks.lock_for(self.key)
        with lock:
            value = self.get()
            error = self._error
            # Recomputes build a fresh exception each time; a key that stays
            # malformed is reported once
            signature = _error_signature(error)
            report_error = signature is not None and signature != self._reported_signature
            self._reported_signature = signature
            changed = self._notified is not UNSET and value != self._notified
            if changed or self._notified is UNSET:
                self._notified = value
            listeners = self._listeners

        # Callbacks run without any lock held; they may read or mutate config
        for listener in listeners:
            try:
                if report_error:
                    listener.on_parse_error(error)
                if changed:
                    listener.on_change(value)
            except Exception as e:
                logger.warning(f"Listener for property '{self.key}' failed: {e}")

    def __repr__(self) -> str:
        type_name = getattr(self.type, "__name__", str(self.type))
        keys = self.key if len(self.keys) == 1 else list(self.keys)
        return f"Property(key={keys!r}, type={type_name}, default={self.default!r})"
