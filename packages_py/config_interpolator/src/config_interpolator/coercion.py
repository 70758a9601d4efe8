from decimal import Decimal
from enum import Enum
from typing import Any
import json


def coerce_to_string(value: Any) -> str:
    """Convert a looked-up value to text for substitution."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, Enum):
        return str(value.name)
    if isinstance(value, Decimal):
        return format(value, 'f')
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, default=str)
    return str(value)
