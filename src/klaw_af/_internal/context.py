"""Invocation context bound while a callback runs."""

from __future__ import annotations

from contextvars import ContextVar
from typing import Any, Final

from klaw_af.errors import TypeMismatchError

__all__ = ['UNSET', 'current_context']


class _Unset:
    __slots__ = ()

    def __repr__(self) -> str:
        return 'UNSET'


UNSET: Final = _Unset()

_context: ContextVar[Any] = ContextVar('klaw_af_context', default=UNSET)


def current_context() -> Any:
    """Return the context passed to the operation whose callback is running.

    Example:
        ```python
        class Counter:
            def __init__(self) -> None:
                self.total = 0

        def add(n):
            current_context().total += n

        counter = Counter()
        await AsyncAF([1, 2, 3]).for_each(add, counter)
        counter.total  # 6
        ```

    Raises:
        TypeMismatchError: If the operation was called without a context.
    """
    context = _context.get()
    if context is UNSET:
        msg = 'no invocation context is bound; pass one as the context argument'
        raise TypeMismatchError(msg)
    return context
