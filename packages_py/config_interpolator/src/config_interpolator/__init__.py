"""
Placeholder interpolation package.
Supports ${name} and ${name:default} markers with nesting and cycle detection.
"""
from .interpolator import Interpolator
from .extractor import extract_placeholders
from .coercion import coerce_to_string
from .types import Lookup, MissingStrategy
from .errors import InterpolationError, CircularReferenceError, MissingPropertyError


def resolve(template: str, context: dict, missing: MissingStrategy = MissingStrategy.ERROR) -> str:
    """Resolve placeholders in template against a flat dict."""
    return Interpolator(missing=missing).resolve(template, context.get)


__all__ = [
    "Interpolator",
    "Lookup",
    "MissingStrategy",
    "InterpolationError",
    "CircularReferenceError",
    "MissingPropertyError",
    "extract_placeholders",
    "coerce_to_string",
    "resolve",
]
