from typing import Any, Mapping, Optional
from .base import LeafConfig
from .flatten import flatten_mapping


class MapConfig(LeafConfig):
    """Immutable leaf holding a copy of a dict."""

    def __init__(self, name: Optional[str] = None, properties: Optional[Mapping[str, Any]] = None):
        super().__init__(name, properties)

    @classmethod
    def from_nested(cls, name: Optional[str], data: Mapping[str, Any], separator: str = '.') -> 'MapConfig':
        """Build from a nested mapping, flattening it into dotted keys."""
        return cls(name, flatten_mapping(data, separator=separator))
