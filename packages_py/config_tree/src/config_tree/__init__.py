"""
Composite configuration tree.

Nodes hold raw key/value pairs. A CompositeConfig overlays named children
in priority order; the first child that defines a key wins.
"""
from .base import Config, ConfigListener, LeafConfig, NOT_FOUND
from .composite import CompositeConfig, CompositeVisitor
from .domain import PollingResponse, ResolutionResult
from .environment import EnvironmentConfig
from .errors import ConfigAlreadyExistsError, ConfigError, NotFoundError, PollingError
from .flatten import flatten_mapping
from .map_config import MapConfig
from .polling import ConfigSource, DynamicLeafConfig, PollingDynamicConfig, WatchedDynamicConfig
from .prefixed import PrefixedViewConfig
from .sensitive import mask_value, set_log_mask, is_log_mask_enabled, register_sensitive_word
from .settable import SettableConfig
from .sources import HttpConfigSource, HttpSourceSettings
from .visitors import (
    FlattenedNamesVisitor,
    LoggingVisitor,
    PrintVisitor,
    PropertyOverrideVisitor,
    Visitor,
)

__all__ = [
    "Config",
    "ConfigListener",
    "LeafConfig",
    "NOT_FOUND",
    "CompositeConfig",
    "CompositeVisitor",
    "PollingResponse",
    "ResolutionResult",
    "EnvironmentConfig",
    "ConfigError",
    "ConfigAlreadyExistsError",
    "NotFoundError",
    "PollingError",
    "flatten_mapping",
    "MapConfig",
    "ConfigSource",
    "DynamicLeafConfig",
    "PollingDynamicConfig",
    "WatchedDynamicConfig",
    "PrefixedViewConfig",
    "mask_value",
    "set_log_mask",
    "is_log_mask_enabled",
    "register_sensitive_word",
    "SettableConfig",
    "HttpConfigSource",
    "HttpSourceSettings",
    "FlattenedNamesVisitor",
    "LoggingVisitor",
    "PrintVisitor",
    "PropertyOverrideVisitor",
    "Visitor",
]
