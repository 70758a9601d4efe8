"""
Property registry.

Hands out typed property handles over a config tree and keeps them
current. Invalidation is deliberately coarse: any event from the tree
bumps a single version number, which makes every handle stale at once.
Listener notification runs on one dedicated thread, in order, never on
the thread that mutated the config.

    registry = PropertyRegistry(app_config)
    timeout = registry.get_property("http.timeout").as_integer(30)
    timeout.subscribe(lambda value: client.set_timeout(value))
"""
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Set, Tuple, Union

from config_interpolator import Interpolator
from config_tree import Config, ConfigListener

from .config import RegistryOptions, load_options
from .decoder import Byte, Decoder, Long, Short
from .errors import ConverterNotFoundError, ParseError
from .locks import ShardedLock
from .property import Property

logger = logging.getLogger(__name__)

HandleKey = Tuple[Tuple[str, ...], Any]


class PropertyRegistry(ConfigListener):
    def __init__(
        self,
        config: Config,
        interpolator: Optional[Interpolator] = None,
        decoder: Optional[Decoder] = None,
        options: Optional[RegistryOptions] = None
    ):
        self.options = options or load_options()
        self.config = config
        self.interpolator = interpolator or Interpolator(missing=self.options.missing)
        self.decoder = decoder or Decoder(self.options.list_delimiter)
        self.locks = ShardedLock(self.options.lock_shards)

        self._version = 0
        self._version_lock = threading.Lock()
        self._handles: Dict[HandleKey, Property] = {}
        self._handles_lock = threading.Lock()
        self._pass_pending = False
        self._executor = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix=self.options.notification_thread_name
        )
        self._closed = False

        config.add_listener(self)

    @property
    def version(self) -> int:
        return self._version

    # ========== Handles ==========

    def get_property(self, key: str) -> 'PropertyContainer':
        return PropertyContainer(self, key)

    def get_handle(
        self,
        key: Union[str, Tuple[str, ...]],
        type_: Any,
        default: Any = None,
        decode: Optional[Callable[[Any], Any]] = None
    ) -> Property:
        """
        Identical (key, type) requests share one handle. The default given
        on the first request sticks; later requests get that same handle.
        A tuple of keys builds a chained handle over them in order.
        """
        keys = (key,) if isinstance(key, str) else tuple(key)
        cache_key = (keys, type_)
        handle = self._handles.get(cache_key)
        if handle is not None:
            if default is not None and default != handle.default:
                logger.debug(f"Property {handle!r} already registered; ignoring default {default!r}")
            return handle

        if decode is None:
            if not self.decoder.supports(type_):
                raise ConverterNotFoundError(type_)
            decode = lambda raw: self.decoder.decode(type_, raw)

        with self._handles_lock:
            handle = self._handles.get(cache_key)
            if handle is None:
                handle = Property(self, keys, type_, default, decode)
                self._handles[cache_key] = handle
        return handle

    def handles(self) -> List[Property]:
        return list(self._handles.values())

    def raw_value(self, key: str) -> Optional[Any]:
        """Raw value for key with placeholders resolved; None when unset."""
        raw = self.config.get_raw_property(key)
        if isinstance(raw, str) and self.interpolator.has_placeholders(raw):
            return self.interpolator.resolve(raw, self.config.get_raw_property)
        return raw

    # ========== Invalidation ==========

    def invalidate(self) -> None:
        """Mark every handle stale and schedule a notification pass."""
        with self._version_lock:
            self._version += 1
            if self._pass_pending or self._closed:
                return
            self._pass_pending = True
        self._executor.submit(self._notification_pass)

    def on_config_added(self, config: Config) -> None:
        self.invalidate()

    def on_config_removed(self, config: Config) -> None:
        self.invalidate()

    def on_config_updated(self, config: Config) -> None:
        self.invalidate()

    def on_error(self, error: Exception, config: Config) -> None:
        logger.debug(f"Config '{config.name}' reported an error: {error}")
        self.invalidate()

    def _notification_pass(self) -> None:
        with self._version_lock:
            self._pass_pending = False
        eager = self.options.eager_refresh
        for handle in self.handles():
            if eager or handle.has_listeners:
                try:
                    handle._refresh()
                except Exception as e:
                    logger.error(f"Refreshing property '{handle.key}' failed: {e}")

    def flush(self, timeout: Optional[float] = None) -> None:
        """Block until every scheduled notification pass has run."""
        if self._closed:
            return
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            remaining = None if deadline is None else max(deadline - time.monotonic(), 0.0)
            self._executor.submit(lambda: None).result(remaining)
            with self._version_lock:
                if not self._pass_pending:
                    return

    def shutdown(self, wait: bool = True) -> None:
        self.config.remove_listener(self)
        with self._version_lock:
            self._closed = True
        self._executor.shutdown(wait=wait)
        logger.info("Property registry shut down")


class PropertyContainer:
    """Typed accessors for one key."""

    def __init__(self, registry: PropertyRegistry, key: str):
        self._registry = registry
        self.key = key

    def _handle(self, type_: Any, default: Any) -> Property:
        return self._registry.get_handle(self.key, type_, default)

    def as_string(self, default: Optional[str] = None) -> Property:
        return self._handle(str, default)

    def as_integer(self, default: Optional[int] = None) -> Property:
        return self._handle(int, default)

    def as_long(self, default: Optional[int] = None) -> Property:
        return self._handle(Long, default)

    def as_short(self, default: Optional[int] = None) -> Property:
        return self._handle(Short, default)

    def as_byte(self, default: Optional[int] = None) -> Property:
        return self._handle(Byte, default)

    def as_float(self, default: Optional[float] = None) -> Property:
        return self._handle(float, default)

    def as_decimal(self, default: Optional[Decimal] = None) -> Property:
        return self._handle(Decimal, default)

    def as_boolean(self, default: Optional[bool] = None) -> Property:
        return self._handle(bool, default)

    def as_list(self, item_type: Any = str, default: Optional[list] = None) -> Property:
        return self._handle(List[item_type], default)

    def as_set(self, item_type: Any = str, default: Optional[set] = None) -> Property:
        return self._handle(Set[item_type], default)

    def as_type(self, type_: Any, default: Any = None) -> Property:
        return self._handle(type_, default)

    def as_mapped(self, fn: Callable[[str], Any], default: Any = None) -> Property:
        """Handle decoded by fn applied to the raw value's string form."""
        decoder = self._registry.decoder

        def decode(raw: Any) -> Any:
            text = decoder.decode(str, raw)
            try:
                return fn(text)
            except (ValueError, TypeError, ArithmeticError, KeyError) as e:
                raise ParseError(text, fn, e, self.key) from e

        return self._registry.get_handle(self.key, fn, default, decode=decode)
