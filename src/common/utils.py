"""Common utility functions."""

from typing import Any


def get_value(obj: Any, key: str) -> Any:
    """Get value from dict or object attribute."""
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


def first_value(obj: Any, *keys: str) -> Any:
    """Return the first truthy value among keys, or None."""
    for key in keys:
        value = get_value(obj, key)
        if value:
            return value
    return None
