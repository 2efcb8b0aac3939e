"""Parallel and serial resolution of a CollectionView through a callback.

Both resolvers share one contract: every present slot's own awaitable is
settled, the callback is invoked with (value, index, view) while the
invocation context is bound, and an awaitable returned by the callback is
settled too. Holes are skipped and stay holes in the output.

They differ only in scheduling. `parallel` runs each slot as its own task and
assembles the outputs with `gather_with_holes`. `serial` finishes slot i
(element, callback and callback result) before slot i + 1 starts.
"""

from __future__ import annotations

import inspect
import sys
from collections.abc import Awaitable, Callable
from typing import Any, Final, TypeAlias

from klaw_af._internal.combinator import gather_with_holes
from klaw_af._internal.context import UNSET, _context
from klaw_af._logging import get_logger
from klaw_af.errors import TypeMismatchError
from klaw_af.types import CollectionView, Hole, Mode

__all__ = [
    'RESOLVERS',
    'invoke',
    'parallel',
    'positional_arity',
    'require_callable',
    'serial',
    'settle_elements',
]

logger = get_logger(__name__)

Resolver: TypeAlias = Callable[..., Awaitable[list[Any]]]


def require_callable(fn: Any, operation: str | None = None, view: CollectionView | None = None) -> None:
    """Raise TypeMismatchError unless fn can be called.

    Coroutine elements of view are closed before raising, since the stage
    rejecting them will never await them.
    """
    if callable(fn):
        return
    if view is not None:
        for _, slot in view.present():
            if inspect.iscoroutine(slot):
                slot.close()
    raise TypeMismatchError.for_callable(fn, operation)


def positional_arity(fn: Callable[..., Any]) -> int:
    """Count the leading positional arguments fn accepts.

    Builtin classes (str, int, bool, ...) count as one-argument converters,
    whatever their constructor accepts. Returns sys.maxsize for callables
    taking *args or whose signature cannot be inspected, so they receive
    every argument.
    """
    if isinstance(fn, type) and fn.__module__ == 'builtins':
        return 1
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return sys.maxsize

    count = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return sys.maxsize
        if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            count += 1
    return count


async def _settle(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def invoke(fn: Callable[..., Any], arity: int, context: Any, *args: Any) -> Any:
    """Call fn with at most `arity` of args and settle its result.

    The context stays bound (see `current_context`) until the returned
    awaitable, if any, has settled.
    """
    token = _context.set(context)
    try:
        return await _settle(fn(*args[:arity]))
    finally:
        _context.reset(token)


async def parallel(
    view: CollectionView,
    callback: Callable[..., Any],
    context: Any = UNSET,
    *,
    with_values: bool = False,
    operation: str | None = None,
) -> list[Any]:
    """Resolve every present slot concurrently through callback.

    Args:
        view: The collection to resolve. Passed unchanged as the callback's
            third argument.
        callback: Called as callback(value, index, view), truncated to the
            positional arguments it declares.
        context: Value returned by `current_context()` inside callback.
        with_values: Produce (value, result) pairs instead of bare results.
        operation: Operation name carried by a TypeMismatchError.

    Returns:
        A list shaped like view: results at present indices, Hole elsewhere.
        Output order follows index order whatever the completion order.

    Raises:
        TypeMismatchError: If callback is not callable, before anything runs.
    """
    require_callable(callback, operation, view)
    arity = positional_arity(callback)

    async def run(index: int, slot: Any) -> Any:
        value = await _settle(slot)
        result = await invoke(callback, arity, context, value, index, view)
        return (value, result) if with_values else result

    slots = [Hole] * len(view)
    for index, slot in view.present():
        slots[index] = run(index, slot)

    present = sum(1 for _ in view.present())
    logger.debug('resolving collection', mode=Mode.PARALLEL.value, length=len(view), present=present)
    resolved = await gather_with_holes(slots)
    logger.debug('collection resolved', mode=Mode.PARALLEL.value, length=len(view))
    return resolved


async def serial(
    view: CollectionView,
    callback: Callable[..., Any],
    context: Any = UNSET,
    *,
    with_values: bool = False,
    operation: str | None = None,
) -> list[Any]:
    """Resolve present slots one at a time in ascending index order.

    Same arguments and result as `parallel`. Slot i's element, callback call
    and callback result all settle before slot i + 1 is touched, which makes
    this the mode for callbacks with ordering-sensitive side effects.
    """
    require_callable(callback, operation, view)
    arity = positional_arity(callback)

    present = sum(1 for _ in view.present())
    logger.debug('resolving collection', mode=Mode.SERIAL.value, length=len(view), present=present)
    resolved: list[Any] = [Hole] * len(view)
    for index, slot in view.present():
        value = await _settle(slot)
        result = await invoke(callback, arity, context, value, index, view)
        resolved[index] = (value, result) if with_values else result
    logger.debug('collection resolved', mode=Mode.SERIAL.value, length=len(view))
    return resolved


async def settle_elements(view: CollectionView, mode: Mode) -> list[Any]:
    """Settle the elements of view without a callback, keeping holes."""
    if mode is Mode.PARALLEL:
        return await gather_with_holes(view)
    settled: list[Any] = [Hole] * len(view)
    for index, slot in view.present():
        settled[index] = await _settle(slot)
    return settled


RESOLVERS: Final[dict[Mode, Resolver]] = {
    Mode.PARALLEL: parallel,
    Mode.SERIAL: serial,
}
