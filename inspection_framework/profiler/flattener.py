"""
Nested record flattening.

Collapses nested objects into dotted field paths. Arrays are leaf values and
are kept as-is (not expanded into indexed paths), so a flattened record maps
each dotted path to a scalar or an array.
"""

from typing import Any, Dict


PATH_SEPARATOR = "."


def join_path(prefix: str, key: Any) -> str:
    """Join a parent path and a key into a dotted path."""
    return f"{prefix}{PATH_SEPARATOR}{key}" if prefix else str(key)


def flatten_record(record: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """
    Flatten one record into a mapping of dotted path to leaf value.

    Flattening is idempotent: a record with no nested objects is returned
    with the same keys and values.

    Args:
        record: Mapping possibly containing nested mappings
        prefix: Path of the mapping being flattened (used on recursion)

    Returns:
        New flat dictionary, in the key order of the input

    Example:
        >>> flatten_record({"id": 1, "user": {"name": "a", "tags": ["x"]}})
        {'id': 1, 'user.name': 'a', 'user.tags': ['x']}
    """
    flat: Dict[str, Any] = {}
    for key, value in record.items():
        path = join_path(prefix, key)
        if isinstance(value, dict) and value:
            flat.update(flatten_record(value, path))
        else:
            flat[path] = value
    return flat
