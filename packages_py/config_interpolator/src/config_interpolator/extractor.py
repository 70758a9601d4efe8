from typing import List, Dict, Any
from .parser import find_placeholder_end, split_default
from .patterns import DEFAULT_PREFIX, DEFAULT_SUFFIX, DEFAULT_SEPARATOR, DEFAULT_ESCAPE


def extract_placeholders(
    template: str,
    prefix: str = DEFAULT_PREFIX,
    suffix: str = DEFAULT_SUFFIX,
    separator: str = DEFAULT_SEPARATOR,
    escape: str = DEFAULT_ESCAPE
) -> List[Dict[str, Any]]:
    """Extract all top-level placeholders from a template string."""
    placeholders = []
    if not template:
        return placeholders

    pos = 0
    while True:
        start = template.find(prefix, pos)
        if start == -1:
            break
        if escape and template[max(0, start - len(escape)):start] == escape:
            pos = start + len(prefix)
            continue

        end = find_placeholder_end(template, start, prefix, suffix)
        if end == -1:
            break

        name, default = split_default(template[start + len(prefix):end], prefix, suffix, separator)
        placeholders.append({
            "raw": template[start:end + len(suffix)],
            "name": name,
            "default": default,
            "start": start,
            "end": end + len(suffix),
        })
        pos = end + len(suffix)

    return placeholders
