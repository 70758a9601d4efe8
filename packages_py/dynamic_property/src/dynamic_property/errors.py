"""Exceptions raised while decoding property values."""
from typing import Any, Optional


def _type_name(target_type: Any) -> str:
    return getattr(target_type, "__name__", None) or str(target_type)


class DecodeError(Exception):
    """Base exception for property decoding errors."""
    pass


class ParseError(DecodeError):
    def __init__(self, value: Any, target_type: Any, cause: Optional[Exception] = None, key: str = ""):
        msg = f"Cannot convert {value!r} to {_type_name(target_type)}"
        if key:
            msg += f" for property '{key}'"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)
        self.value = value
        self.target_type = target_type
        self.cause = cause
        self.key = key


class ConverterNotFoundError(DecodeError):
    def __init__(self, target_type: Any):
        super().__init__(f"No decoder registered for type {_type_name(target_type)}")
        self.target_type = target_type
