# -*- coding: utf-8 -*-
"""
Minimal read-only access to a parsed DSON document.

The resolver only needs a few kinds of query, so that is all DsonNode exposes:
  get_string(path), get_float(path), get_children(path), plus has(path) / get_raw(path)
  for fields whose type decides what the entry is
Paths are dot-separated keys ("channel.current_value"); an all-digit segment indexes a list
("geometries.0.id"). A path that leads nowhere yields None / [] instead of raising.
"""
import json
import math
from typing import Any, List, Optional

from morph_export_errors import DataError, ParseError

_MISSING = object()


def _walk(value: Any, path: str) -> Any:
    if not path:
        return value
    current = value
    for segment in path.split("."):
        if isinstance(current, dict):
            current = current.get(segment, _MISSING)
        elif isinstance(current, list) and segment.isdigit():
            index = int(segment)
            current = current[index] if index < len(current) else _MISSING
        else:
            return _MISSING
        if current is _MISSING:
            return _MISSING
    return current


class DsonNode:
    """Wraps one value (object, array or scalar) of the parsed document."""

    __slots__ = ("value",)

    def __init__(self, value: Any):
        self.value = value

    def __repr__(self) -> str:
        return f"DsonNode({self.value!r})"

    def has(self, path: str) -> bool:
        """True when the path exists and is not JSON null."""
        found = _walk(self.value, path)
        return found is not _MISSING and found is not None

    def get_raw(self, path: str, default: Any = None) -> Any:
        found = _walk(self.value, path)
        return default if found is _MISSING else found

    def get_string(self, path: str, default: Optional[str] = None) -> Optional[str]:
        """String at path; numbers are converted (DSON ids are sometimes written unquoted)."""
        found = _walk(self.value, path)
        if found is _MISSING or found is None:
            return default
        if isinstance(found, str):
            return found
        if isinstance(found, (int, float)) and not isinstance(found, bool):
            return str(found)
        raise DataError(f"Expected a string at '{path}', got {type(found).__name__}")

    def get_float(self, path: str, default: Optional[float] = None) -> Optional[float]:
        """Float at path. Numeric strings are accepted; NaN, infinities and anything else raise DataError."""
        found = _walk(self.value, path)
        if found is _MISSING or found is None:
            return default
        if isinstance(found, bool) or isinstance(found, (list, dict)):
            raise DataError(f"Expected a number at '{path}', got {type(found).__name__}")
        try:
            value = float(found)
        except (TypeError, ValueError) as e:
            raise DataError(f"Expected a number at '{path}', got {found!r}") from e
        if not math.isfinite(value):
            raise DataError(f"Expected a finite number at '{path}', got {found!r}")
        return value

    def get_children(self, path: str) -> List["DsonNode"]:
        """Items of the array at path, in document order; [] when missing or not an array."""
        found = _walk(self.value, path)
        if not isinstance(found, list):
            return []
        return [DsonNode(item) for item in found]


def parse_dson(text: str) -> DsonNode:
    """Parse DSON text into the root DsonNode. The root must be an object."""
    try:
        root = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid DSON at line {e.lineno} column {e.colno}: {e.msg}") from e
    if not isinstance(root, dict):
        raise ParseError(f"DSON root must be an object, got {type(root).__name__}")
    return DsonNode(root)
