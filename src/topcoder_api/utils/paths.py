"""Safe lookups into nested JSON payloads."""

from __future__ import annotations

from typing import Any


def get_path(data: Any, path: str, default: Any = None) -> Any:
    """Follow a dotted path through nested dicts (and list indexes).

    Returns ``default`` as soon as a segment is missing or the value at that
    point cannot be indexed, e.g. ``get_path(body, "result.content.userId")``.
    """
    current = data
    for key in path.split("."):
        if isinstance(current, dict):
            if key not in current:
                return default
            current = current[key]
        elif isinstance(current, list) and key.isdigit():
            index = int(key)
            if index >= len(current):
                return default
            current = current[index]
        else:
            return default
    return current
