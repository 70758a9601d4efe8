from enum import Enum
from typing import Any, Callable, Optional

# (key) -> raw value, or None when the key is unknown
Lookup = Callable[[str], Optional[Any]]


class MissingStrategy(Enum):
    KEEP = 'KEEP'
    EMPTY = 'EMPTY'
    ERROR = 'ERROR'
