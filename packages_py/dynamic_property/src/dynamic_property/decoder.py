"""
Raw value to typed value conversion.

Raw values are usually strings (files, environment, HTTP sources) but may
already be typed (YAML ints and lists). Conversion is total for the
built-in scalar types and extensible through register().

Integer widths are distinct types so that a property can be declared as a
16-bit value and reject 70000:

    decoder.decode(Short, "70000")   # ParseError
"""
import json
import logging
import typing
from datetime import timedelta
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, NewType

from pydantic import BaseModel

from config_interpolator import coerce_to_string

from .errors import ConverterNotFoundError, DecodeError, ParseError

logger = logging.getLogger(__name__)

Long = NewType("Long", int)
Short = NewType("Short", int)
Byte = NewType("Byte", int)

INTEGER_RANGES = {
    Long: (-2 ** 63, 2 ** 63 - 1),
    Short: (-2 ** 15, 2 ** 15 - 1),
    Byte: (-2 ** 7, 2 ** 7 - 1),
}

TRUE_VALUES = frozenset(("true", "yes", "on", "1"))
FALSE_VALUES = frozenset(("false", "no", "off", "0"))

DecodeFn = Callable[[Any], Any]


def decode_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def decode_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("booleans are not integers")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"not an integer: {value!r}")
        return int(value)
    return int(str(value).strip())


def _ranged_int(target_type: Any) -> DecodeFn:
    low, high = INTEGER_RANGES[target_type]

    def decode(value: Any) -> int:
        number = decode_int(value)
        if not low <= number <= high:
            raise ValueError(f"{number} out of range [{low}, {high}]")
        return number

    return decode


def decode_float(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("booleans are not numbers")
    if isinstance(value, (int, float)):
        return float(value)
    return float(str(value).strip())


def decode_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value).strip())


def decode_timedelta(value: Any) -> timedelta:
    if isinstance(value, timedelta):
        return value
    return timedelta(seconds=decode_float(value))


class Decoder:
    """Type-keyed registry of conversion functions."""

    def __init__(self, list_delimiter: str = ","):
        self.list_delimiter = list_delimiter
        self._decoders: Dict[Any, DecodeFn] = {
            str: coerce_to_string,
            bool: decode_bool,
            int: decode_int,
            Long: _ranged_int(Long),
            Short: _ranged_int(Short),
            Byte: _ranged_int(Byte),
            float: decode_float,
            Decimal: decode_decimal,
            Path: lambda value: value if isinstance(value, Path) else Path(str(value)),
            timedelta: decode_timedelta,
        }

    def register(self, target_type: Any, fn: DecodeFn) -> None:
        self._decoders[target_type] = fn

    def supports(self, target_type: Any) -> bool:
        try:
            self._converter_for(target_type)
        except ConverterNotFoundError:
            return False
        return True

    def decode(self, target_type: Any, value: Any) -> Any:
        """
        Convert value to target_type.

        Raises:
            ConverterNotFoundError: no decoder handles target_type
            ParseError: the value cannot be converted
        """
        fn = self._converter_for(target_type)
        try:
            return fn(value)
        except DecodeError:
            raise
        except (ValueError, TypeError, ArithmeticError, KeyError) as e:
            raise ParseError(value, target_type, e) from e

    def _converter_for(self, target_type: Any) -> DecodeFn:
        fn = self._decoders.get(target_type)
        if fn is not None:
            return fn

        origin = typing.get_origin(target_type)
        if origin in (list, set, frozenset, tuple):
            return lambda value: self._decode_collection(target_type, origin, value)
        if target_type in (list, set, frozenset, tuple):
            return lambda value: self._decode_collection(target_type, target_type, value)

        if isinstance(target_type, type):
            if issubclass(target_type, Enum):
                return lambda value: self._decode_enum(target_type, value)
            if issubclass(target_type, BaseModel):
                return lambda value: self._decode_model(target_type, value)

        raise ConverterNotFoundError(target_type)

    def _split(self, value: Any) -> list:
        if isinstance(value, (list, tuple, set, frozenset)):
            return list(value)
        text = str(value)
        return [part.strip() for part in text.split(self.list_delimiter) if part.strip()]

    def _decode_collection(self, target_type: Any, origin: Any, value: Any) -> Any:
        args = typing.get_args(target_type)
        items = self._split(value)

        if origin is tuple and args and not (len(args) == 2 and args[1] is Ellipsis):
            if len(items) != len(args):
                raise ValueError(f"expected {len(args)} items, got {len(items)}")
            return tuple(self.decode(t, item) for t, item in zip(args, items))

        item_type = args[0] if args else str
        decoded = [self.decode(item_type, item) for item in items]
        return origin(decoded)

    @staticmethod
    def _decode_enum(enum_type: Any, value: Any) -> Enum:
        if isinstance(value, enum_type):
            return value
        name = str(value).strip()
        try:
            return enum_type[name]
        except KeyError:
            pass
        try:
            return enum_type[name.upper()]
        except KeyError:
            return enum_type(value)

    @staticmethod
    def _decode_model(model_type: Any, value: Any) -> BaseModel:
        if isinstance(value, model_type):
            return value
        if isinstance(value, (str, bytes)):
            return model_type.model_validate(json.loads(value))
        return model_type.model_validate(value)
