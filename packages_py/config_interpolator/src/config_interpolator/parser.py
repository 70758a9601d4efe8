from typing import Optional, Tuple


def find_placeholder_end(text: str, start: int, prefix: str, suffix: str) -> int:
    """
    Return the index of the suffix that closes the marker opening at `start`.
    Nested markers are balanced. Returns -1 when the marker is unterminated.
    """
    depth = 1
    i = start + len(prefix)
    while i < len(text):
        if text.startswith(prefix, i):
            depth += 1
            i += len(prefix)
        elif text.startswith(suffix, i):
            depth -= 1
            if depth == 0:
                return i
            i += len(suffix)
        else:
            i += 1
    return -1


def split_default(
    expr: str,
    prefix: str,
    suffix: str,
    separator: str
) -> Tuple[str, Optional[str]]:
    """
    Split a marker body into (name, default) at the first separator that is
    not inside a nested marker. `port:-1` gives ('port', '-1').
    """
    depth = 0
    i = 0
    while i < len(expr):
        if expr.startswith(prefix, i):
            depth += 1
            i += len(prefix)
        elif depth and expr.startswith(suffix, i):
            depth -= 1
            i += len(suffix)
        elif depth == 0 and expr.startswith(separator, i):
            return expr[:i], expr[i + len(separator):]
        else:
            i += 1
    return expr, None
