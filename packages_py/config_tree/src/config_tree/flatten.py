from typing import Any, Dict, Mapping


def flatten_mapping(obj: Mapping[str, Any], prefix: str = '', separator: str = '.') -> Dict[str, Any]:
    """
    Flatten a nested mapping into dotted keys.
    Example: {"db": {"host": "h", "ports": [1, 2]}} => {"db.host": "h", "db.ports": [1, 2]}

    Lists of scalars are kept whole; lists holding mappings are indexed
    ("servers.0.name"). None values are dropped.
    """
    result: Dict[str, Any] = {}

    for key, value in obj.items():
        new_key = f"{prefix}{separator}{key}" if prefix else str(key)

        if value is None:
            continue
        elif isinstance(value, Mapping):
            result.update(flatten_mapping(value, new_key, separator))
        elif isinstance(value, (list, tuple)) and any(isinstance(item, Mapping) for item in value):
            for index, item in enumerate(value):
                item_key = f"{new_key}{separator}{index}"
                if isinstance(item, Mapping):
                    result.update(flatten_mapping(item, item_key, separator))
                elif item is not None:
                    result[item_key] = item
        else:
            result[new_key] = value

    return result
