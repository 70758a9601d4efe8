"""
Typed, cached and observable properties over a config tree.
"""
from .config import RegistryOptions, load_options
from .decoder import Byte, Decoder, Long, Short
from .errors import ConverterNotFoundError, DecodeError, ParseError
from .listeners import FunctionListener, PropertyListener
from .locks import ShardedLock
from .property import Property
from .registry import PropertyContainer, PropertyRegistry

__all__ = [
    "RegistryOptions",
    "load_options",
    "Byte",
    "Decoder",
    "Long",
    "Short",
    "ConverterNotFoundError",
    "DecodeError",
    "ParseError",
    "FunctionListener",
    "PropertyListener",
    "ShardedLock",
    "Property",
    "PropertyContainer",
    "PropertyRegistry",
]
