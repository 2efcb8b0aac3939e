"""Core value types: the Hole marker, resolution Mode, and CollectionView."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from enum import Enum
from typing import Any, overload

import msgspec

__all__ = ['CollectionView', 'Hole', 'HoleType', 'Mode']


class HoleType(msgspec.Struct, frozen=True, gc=False):
    """Marker for an index inside a collection's length that holds no value.

    A hole is not a value: it is never passed to a callback and it is never
    replaced by a placeholder such as None. Lists produced by the engine keep
    holes where the input had them.

    This is a singleton - use the `Hole` constant instead of instantiating
    directly.

    Examples:
        >>> [Hole, 1].index(Hole)
        0
        >>> bool(Hole)
        False
    """

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return 'Hole'


Hole: HoleType = HoleType()


class Mode(Enum):
    """How a resolver walks the present slots of a collection."""

    PARALLEL = 'parallel'
    SERIAL = 'serial'


class CollectionView(Sequence[Any]):
    """Fixed-length, read-only view of a collection's slots.

    Each slot is either `Hole` or a present value, which may itself still be
    awaitable. The length and hole pattern mirror the source exactly and never
    change after construction.

    Example:
        ```python
        view = CollectionView([Hole, 'a', Hole])
        len(view)              # 3
        view.is_hole(0)        # True
        list(view.present())   # [(1, 'a')]
        ```
    """

    __slots__ = ('_slots',)

    def __init__(self, slots: Sequence[Any] = ()) -> None:
        self._slots = tuple(slots)

    def __len__(self) -> int:
        return len(self._slots)

    @overload
    def __getitem__(self, index: int) -> Any: ...
    @overload
    def __getitem__(self, index: slice) -> tuple[Any, ...]: ...
    def __getitem__(self, index: int | slice) -> Any:
        return self._slots[index]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._slots)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CollectionView):
            return self._slots == other._slots
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._slots)

    def is_hole(self, index: int) -> bool:
        """Return True if the slot at index is absent."""
        return isinstance(self._slots[index], HoleType)

    def present(self) -> Iterator[tuple[int, Any]]:
        """Yield (index, value) for every present slot in ascending order."""
        for index, slot in enumerate(self._slots):
            if not isinstance(slot, HoleType):
                yield index, slot

    def to_list(self) -> list[Any]:
        """Return the slots as a new list, holes included."""
        return list(self._slots)

    def __repr__(self) -> str:
        return f'CollectionView({list(self._slots)!r})'
