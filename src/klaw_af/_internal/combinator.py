"""Hole-aware gathering of awaitable slots."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Sequence
from typing import Any

from klaw_af.types import HoleType

__all__ = ['gather_with_holes']


async def gather_with_holes(slots: Sequence[Any]) -> list[Any]:
    """Await every present awaitable slot concurrently, keeping holes in place.

    Present slots that are not awaitable pass through unchanged. The output
    has the same length as `slots`, with each awaitable replaced by its result
    at the same index and each `Hole` left as `Hole`.

    Note:
        The first failure propagates immediately. Sibling awaitables are not
        cancelled: they keep running and their outcomes are discarded.

    Example:
        ```python
        async def two() -> int:
            return 2

        await gather_with_holes([Hole, 1, two()])  # [Hole, 1, 2]
        ```
    """
    settled = list(slots)
    pending = {
        index: slot
        for index, slot in enumerate(settled)
        if not isinstance(slot, HoleType) and inspect.isawaitable(slot)
    }
    if not pending:
        return settled

    results = await asyncio.gather(*pending.values())
    for index, result in zip(pending, results, strict=True):
        settled[index] = result
    return settled
