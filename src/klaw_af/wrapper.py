"""AsyncAF: a chainable pipeline of collection operations over awaitables.

AsyncAF wraps a collection (or an awaitable producing one) whose elements may
themselves be awaitables, and exposes the familiar sequence operations. Each
operation returns a new AsyncAF, and nothing runs until a pipeline is awaited.

Example:
    ```python
    async def fetch(n: int) -> int:
        await asyncio.sleep(0.01)
        return n

    doubled = await AsyncAF([fetch(1), fetch(2), 3]).map(lambda n: n * 2)
    assert doubled == [2, 4, 6]

    # strictly one element at a time, in index order
    await AsyncAF(urls).series.for_each(download)
    ```
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Generator
from typing import Any

import wrapt

from klaw_af._config import active_config
from klaw_af._internal.context import UNSET
from klaw_af._internal.resolve import RESOLVERS, invoke, positional_arity, require_callable, settle_elements
from klaw_af._internal.search import first_index, last_index, text_first_index, text_last_index
from klaw_af._internal.shape import is_collection, normalize
from klaw_af._logging import get_logger
from klaw_af.errors import TypeMismatchError
from klaw_af.types import CollectionView, Mode

__all__ = ['AsyncAF', 'stage']

logger = get_logger(__name__)


def stage(*, text: bool = False) -> Callable[[Callable[..., Awaitable[Any]]], Any]:
    """Turn an operation body into a chaining method.

    The decorated method is written as `async def op(self, view, *args)`;
    callers invoke it as `pipeline.op(*args)` and get a new AsyncAF back.
    When that stage runs it settles the predecessor, checks and normalizes
    the collection, then awaits the body with the CollectionView.

    Args:
        text: The operation treats str as text rather than as a sequence of
            characters. The body then receives the str itself, and the shape
            error names String among the acceptable inputs.
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Awaitable[Any]],
        instance: AsyncAF,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> AsyncAF:
        return instance._then(wrapped.__name__, lambda target: wrapped(target, *args, **kwargs), text=text)

    return wrapper


class AsyncAF:
    """Chainable pipeline over a collection of possibly-pending values.

    Accepts any value on construction; a list, tuple or other sequence, a
    str, an array-like record ({0: 'a', 'length': 1}), or an awaitable
    resolving to one of those. Invalid input is only reported when a stage
    that needs a collection is awaited, as TypeMismatchError.

    Every operation has an `_af` name and a short alias (`map_af` / `map`).
    Callbacks are called with (value, index, collection), truncated to the
    positional parameters they declare, and may return awaitables. The
    optional context argument is what `current_context()` returns inside the
    callback.

    Note:
        The source is settled at most once and shared by every stage derived
        from this pipeline. Coroutine elements, however, are single-shot: a
        list of coroutine objects can only be processed by one stage.

    Attributes:
        mode: Resolution mode inherited by every stage chained from here.
    """

    __slots__ = ('_future', '_mode', '_source')

    def __init__(self, data: Any = None, *, mode: Mode | str | None = None) -> None:
        self._source = data
        self._future: asyncio.Future[Any] | None = None
        self._mode = Mode(mode) if mode is not None else active_config().mode

    def __await__(self) -> Generator[Any, Any, Any]:
        return self._settle().__await__()

    async def _settle(self) -> Any:
        if not inspect.isawaitable(self._source):
            return self._source
        if self._future is None:
            self._future = asyncio.ensure_future(self._source)
        return await self._future

    def future(self) -> asyncio.Future[Any]:
        """Return an asyncio.Future for the settled value of this pipeline."""
        return asyncio.ensure_future(self._settle())

    # --- Resolution mode ---

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def in_series(self) -> bool:
        """True if elements are processed one at a time."""
        return self._mode is Mode.SERIAL

    @property
    def series(self) -> AsyncAF:
        """The same pipeline, processing elements one at a time in index order."""
        return AsyncAF(self, mode=Mode.SERIAL)

    io = series

    @property
    def parallel(self) -> AsyncAF:
        """The same pipeline, processing elements concurrently."""
        return AsyncAF(self, mode=Mode.PARALLEL)

    # --- Stage plumbing ---

    def _then(
        self,
        operation: str,
        body: Callable[[CollectionView | str], Awaitable[Any]],
        *,
        text: bool = False,
    ) -> AsyncAF:
        async def run() -> Any:
            collection = await self._settle()
            if not is_collection(collection):
                logger.debug('stage rejected', operation=operation, received=repr(collection))
                raise TypeMismatchError.for_shape(operation, collection, text=text)
            if text and isinstance(collection, str):
                return await body(collection)
            view = normalize(collection)
            logger.debug('collection normalized', operation=operation, mode=self._mode.value, length=len(view))
            return await body(view)

        return AsyncAF(run(), mode=self._mode)

    def _resolve(
        self, operation: str, view: CollectionView, callback: Any, context: Any, *, with_values: bool = False
    ) -> Awaitable[list[Any]]:
        return RESOLVERS[self._mode](view, callback, context, with_values=with_values, operation=operation)

    # --- Transform / iterate ---

    @stage()
    async def map_af(self, view: CollectionView, callback: Any = None, context: Any = UNSET) -> list[Any]:
        """New list of callback results, with holes where the collection has them.

        Example:
            ```python
            await AsyncAF([Hole, 1, Hole, 2]).map(lambda n: n * 2)  # [Hole, 2, Hole, 4]
            ```
        """
        return await self._resolve('map_af', view, callback, context)

    @stage()
    async def for_each_af(self, view: CollectionView, callback: Any = None, context: Any = UNSET) -> None:
        """Call callback on each element; settles to None."""
        await self._resolve('for_each_af', view, callback, context)

    @stage()
    async def filter_af(self, view: CollectionView, callback: Any = None, context: Any = UNSET) -> list[Any]:
        """New list of the settled elements for which callback returned a truthy value."""
        pairs = await self._resolve('filter_af', view, callback, context, with_values=True)
        return [pairs[index][0] for index, _ in view.present() if pairs[index][1]]

    # --- Test / search with a callback ---

    @stage()
    async def every_af(self, view: CollectionView, callback: Any = None, context: Any = UNSET) -> bool:
        """True if callback returned a truthy value for every element."""
        results = await self._resolve('every_af', view, callback, context)
        return all(results[index] for index, _ in view.present())

    @stage()
    async def some_af(self, view: CollectionView, callback: Any = None, context: Any = UNSET) -> bool:
        """True if callback returned a truthy value for at least one element."""
        results = await self._resolve('some_af', view, callback, context)
        return any(results[index] for index, _ in view.present())

    @stage()
    async def find_af(self, view: CollectionView, callback: Any = None, context: Any = UNSET) -> Any:
        """First settled element for which callback returned a truthy value, else None."""
        pairs = await self._resolve('find_af', view, callback, context, with_values=True)
        for index, _ in view.present():
            value, found = pairs[index]
            if found:
                return value
        return None

    @stage()
    async def find_index_af(self, view: CollectionView, callback: Any = None, context: Any = UNSET) -> int:
        """Index of the first element for which callback returned a truthy value, else -1."""
        results = await self._resolve('find_index_af', view, callback, context)
        for index, _ in view.present():
            if results[index]:
                return index
        return -1

    @stage()
    async def reduce_af(self, view: CollectionView, callback: Any = None, initial: Any = UNSET) -> Any:
        """Fold the settled elements left to right with callback(acc, value, index, collection).

        Elements settle according to the pipeline's mode; the fold itself is
        always sequential, awaiting each intermediate accumulator.

        Raises:
            TypeMismatchError: If callback is not callable, or the collection
                has no elements and no initial value was given.
        """
        require_callable(callback, 'reduce_af', view)
        values = await settle_elements(view, self._mode)
        indices = [index for index, _ in view.present()]
        if initial is UNSET:
            if not indices:
                msg = 'Reduce of empty array with no initial value'
                raise TypeMismatchError(msg, 'reduce_af')
            accumulator, indices = values[indices[0]], indices[1:]
        else:
            accumulator = initial

        arity = positional_arity(callback)
        for index in indices:
            accumulator = await invoke(callback, arity, UNSET, accumulator, values[index], index, view)
        return accumulator

    # --- Search by value ---

    @stage(text=True)
    async def includes_af(self, target: CollectionView | str, search: Any, from_index: int = 0) -> bool:
        """True if search occurs at or after from_index; substring test for str."""
        if isinstance(target, str):
            return text_first_index(target, search, from_index) != -1
        values = await settle_elements(target, self._mode)
        return first_index(values, search, from_index, nan_equal=True) != -1

    @stage(text=True)
    async def index_of_af(self, target: CollectionView | str, search: Any, from_index: int = 0) -> int:
        """First index of search at or after from_index, or -1."""
        if isinstance(target, str):
            return text_first_index(target, search, from_index)
        values = await settle_elements(target, self._mode)
        return first_index(values, search, from_index)

    @stage(text=True)
    async def last_index_of_af(
        self, target: CollectionView | str, search: Any, from_index: int | None = None
    ) -> int:
        """Last index of search at or before from_index, or -1."""
        if isinstance(target, str):
            return text_last_index(target, search, from_index)
        values = await settle_elements(target, self._mode)
        return last_index(values, search, from_index)

    # Unsuffixed aliases
    map = map_af
    for_each = for_each_af
    filter = filter_af
    every = every_af
    some = some_af
    find = find_af
    find_index = find_index_af
    reduce = reduce_af
    includes = includes_af
    index_of = index_of_af
    last_index_of = last_index_of_af

    def __repr__(self) -> str:
        return f'AsyncAF({self._source!r}, mode={self._mode.value!r})'
