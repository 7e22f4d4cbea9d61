"""Helpers over the parsed JSON value model.

Objects are any ``Mapping``; arrays are ``list`` or ``tuple``. Everything
else is a scalar.
"""

from collections.abc import Mapping
from typing import Any, List, Optional
from urllib.parse import unquote

_MISSING = object()


def is_json_object(value: Any) -> bool:
    """Return True if `value` is object-shaped."""
    return isinstance(value, Mapping)


def is_array(value: Any) -> bool:
    """Return True if `value` is array-shaped."""
    return isinstance(value, (list, tuple))


def get_value(key: str, value: Any, default: Any = None) -> Any:
    """Get property `key` of an object, or `default` if absent or not an object."""
    if not is_json_object(value):
        return default
    return value.get(key, default)


def parse_pointer(pointer: Optional[str]) -> List[str]:
    """Split a fragment pointer into unescaped segments.

    Empty segments are dropped, so ``""``, ``"/"`` and ``"/a//b"`` parse to
    ``[]``, ``[]`` and ``["a", "b"]``.
    """
    if not pointer:
        return []
    segments = []
    for raw in unquote(pointer).split("/"):
        if raw == "":
            continue
        segments.append(raw.replace("~1", "/").replace("~0", "~"))
    return segments


def walk_pointer(document: Any, segments: List[str]) -> Optional[Any]:
    """Follow `segments` from `document` and return the object found there.

    Returns None when a segment is missing, an array index is not a
    non-negative integer within range, a scalar is indexed into, or the
    final target is not an object.
    """
    current = document
    for segment in segments:
        if is_json_object(current):
            current = current.get(segment, _MISSING)
            if current is _MISSING:
                return None
        elif is_array(current):
            if not (segment.isascii() and segment.isdigit()):
                return None
            index = int(segment)
            if index >= len(current):
                return None
            current = current[index]
        else:
            return None

    if not is_json_object(current):
        return None
    return current
