"""Shape classification and normalization of collection-like values."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Final

from klaw_af.types import CollectionView

__all__ = ['MAX_LENGTH', 'is_collection', 'normalize']

MAX_LENGTH: Final = 2**32 - 1


def _record_length(value: Any) -> int | None:
    """Return the declared length of an array-like record, or None if it is not one.

    A record is a Mapping with a "length" key, or any object exposing a
    `length` attribute together with `__getitem__`.
    """
    if isinstance(value, Mapping):
        length = value.get('length')
    elif hasattr(value, '__getitem__'):
        length = getattr(value, 'length', None)
    else:
        return None

    if isinstance(length, bool):
        return None
    if isinstance(length, float):
        if not length.is_integer():
            return None
        length = int(length)
    if not isinstance(length, int):
        return None
    if 0 <= length <= MAX_LENGTH:
        return length
    return None


def _record_entry(record: Any, index: int) -> Any:
    """Look up the entry at index, keyed by int or its str form; None if missing.

    Mappings and objects with `__getitem__` are probed the same way. An
    object that rejects a key type (TypeError) counts as missing that key.
    """
    for key in (index, str(index)):
        try:
            return record[key]
        except (KeyError, IndexError, TypeError):
            continue
    return None


def is_collection(value: Any) -> bool:
    """Return True if value is a sequence, a str, or an array-like record.

    Pure predicate with no side effects beyond reading `length`.

    Examples:
        >>> is_collection([1, 2])
        True
        >>> is_collection('abc')
        True
        >>> is_collection({0: 'a', 'length': 1})
        True
        >>> is_collection({})
        False
        >>> is_collection(None)
        False
    """
    if isinstance(value, Sequence):
        return True
    return _record_length(value) is not None


def normalize(value: Any) -> CollectionView:
    """Build a CollectionView from a value accepted by `is_collection`.

    - sequences keep their slots verbatim, so `Hole` entries stay holes
    - str yields one slot per character
    - array-like records are dense: an index without an entry reads as None

    Raises:
        ValueError: If value is not a collection.
    """
    if isinstance(value, Sequence):
        return CollectionView(value)

    length = _record_length(value)
    if length is None:
        msg = f'{value!r} is not a collection'
        raise ValueError(msg)
    return CollectionView([_record_entry(value, index) for index in range(length)])
