"""
Recursive ${name:default} substitution.

The same engine resolves placeholders inside configuration values
(url=http://${host}:${port}) and inside cascade resource names
(app-${env}-${region}).
"""
import logging
from functools import partial
from typing import Callable, Optional, Tuple

from .coercion import coerce_to_string
from .errors import CircularReferenceError, MissingPropertyError
from .parser import find_placeholder_end, split_default
from .patterns import DEFAULT_PREFIX, DEFAULT_SUFFIX, DEFAULT_SEPARATOR, DEFAULT_ESCAPE
from .types import Lookup, MissingStrategy

logger = logging.getLogger(__name__)


class Interpolator:
    """Substitutes placeholders using a caller-supplied lookup."""

    def __init__(
        self,
        prefix: str = DEFAULT_PREFIX,
        suffix: str = DEFAULT_SUFFIX,
        default_separator: str = DEFAULT_SEPARATOR,
        escape: Optional[str] = DEFAULT_ESCAPE,
        missing: MissingStrategy = MissingStrategy.ERROR
    ):
        if not prefix or not suffix:
            raise ValueError("Placeholder prefix and suffix must be non-empty")
        self.prefix = prefix
        self.suffix = suffix
        self.default_separator = default_separator
        self.escape = escape or ""
        self.missing = missing

    def with_missing(self, missing: MissingStrategy) -> 'Interpolator':
        """Copy of this interpolator with a different missing-key strategy."""
        return Interpolator(
            prefix=self.prefix,
            suffix=self.suffix,
            default_separator=self.default_separator,
            escape=self.escape,
            missing=missing
        )

    def resolve(self, template: str, lookup: Lookup) -> str:
        """
        Resolve every placeholder in template.

        Looked-up values are themselves resolved, so chains like
        a -> "${b}" -> "x" yield "x".

        Raises:
            CircularReferenceError: a key re-enters its own resolution chain
            MissingPropertyError: a key has no value and no default, and the
                missing strategy is ERROR
        """
        if template is None:
            return ""
        return self._substitute(template, lookup, ())

    def bind(self, lookup: Lookup) -> Callable[[str], str]:
        """Return a one-argument resolver bound to lookup."""
        return partial(self.resolve, lookup=lookup)

    def has_placeholders(self, text: str) -> bool:
        return bool(text) and self.prefix in text

    # ========== Internals ==========

    def _is_escaped(self, text: str, start: int) -> bool:
        if not self.escape or start < len(self.escape):
            return False
        return text[start - len(self.escape):start] == self.escape

    def _substitute(self, text: str, lookup: Lookup, chain: Tuple[str, ...]) -> str:
        if self.prefix not in text:
            return text

        out = []
        pos = 0
        while True:
            start = text.find(self.prefix, pos)
            if start == -1:
                out.append(text[pos:])
                break

            if self._is_escaped(text, start):
                out.append(text[pos:start - len(self.escape)])
                out.append(self.prefix)
                pos = start + len(self.prefix)
                continue

            end = find_placeholder_end(text, start, self.prefix, self.suffix)
            if end == -1:
                # Unterminated marker is plain text
                out.append(text[pos:])
                break

            out.append(text[pos:start])
            raw = text[start:end + len(self.suffix)]
            expr = text[start + len(self.prefix):end]
            out.append(self._resolve_expression(expr, raw, lookup, chain))
            pos = end + len(self.suffix)

        return "".join(out)

    def _resolve_expression(
        self,
        expr: str,
        raw: str,
        lookup: Lookup,
        chain: Tuple[str, ...]
    ) -> str:
        name, default = split_default(expr, self.prefix, self.suffix, self.default_separator)
        name = self._substitute(name, lookup, chain)

        if name in chain:
            cycle = list(chain[chain.index(name):]) + [name]
            logger.debug(f"Circular placeholder chain: {' -> '.join(cycle)}")
            raise CircularReferenceError(cycle)

        inner = chain + (name,)
        value = lookup(name)
        if value is not None:
            return self._substitute(coerce_to_string(value), lookup, inner)

        if default is not None:
            return self._substitute(default, lookup, inner)

        if self.missing is MissingStrategy.KEEP:
            return raw
        if self.missing is MissingStrategy.EMPTY:
            return ""
        raise MissingPropertyError(name, raw)
