"""Index arithmetic and equality for the search operations."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from klaw_af.types import HoleType

__all__ = [
    'first_index',
    'last_index',
    'same_value_zero',
    'text_first_index',
    'text_last_index',
]


def same_value_zero(a: Any, b: Any) -> bool:
    """Equality under which NaN matches NaN."""
    if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
        return True
    return a == b


def _start(from_index: int, length: int) -> int:
    if from_index < 0:
        return max(length + from_index, 0)
    return from_index


def first_index(
    values: Sequence[Any],
    search: Any,
    from_index: int = 0,
    *,
    nan_equal: bool = False,
) -> int:
    """Return the first index >= from_index holding search, or -1. Holes never match."""
    equal = same_value_zero if nan_equal else (lambda a, b: a == b)
    for index in range(_start(from_index, len(values)), len(values)):
        value = values[index]
        if not isinstance(value, HoleType) and equal(value, search):
            return index
    return -1


def last_index(values: Sequence[Any], search: Any, from_index: int | None = None) -> int:
    """Return the last index <= from_index holding search, or -1. Holes never match."""
    length = len(values)
    if from_index is None:
        start = length - 1
    elif from_index >= 0:
        start = min(from_index, length - 1)
    else:
        start = length + from_index
    for index in range(start, -1, -1):
        value = values[index]
        if not isinstance(value, HoleType) and value == search:
            return index
    return -1


def text_first_index(text: str, search: Any, from_index: int = 0) -> int:
    """Substring position at or after from_index (clamped to the text), or -1."""
    start = min(max(from_index, 0), len(text))
    return text.find(str(search), start)


def text_last_index(text: str, search: Any, from_index: int | None = None) -> int:
    """Last substring position at or before from_index (clamped to the text), or -1."""
    needle = str(search)
    start = len(text) if from_index is None else min(max(from_index, 0), len(text))
    return text.rfind(needle, 0, start + len(needle))
