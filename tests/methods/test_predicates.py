"""Tests for every_af / some_af and find_af / find_index_af."""

from __future__ import annotations

import pytest
from klaw_af import AsyncAF, Hole, TypeMismatchError, current_context

from tests.strategies import later


class TestEvery:
    async def test_all_match(self):
        assert await AsyncAF([2, later(4)]).every_af(lambda n: n % 2 == 0) is True

    async def test_one_fails(self):
        assert await AsyncAF([2, later(3)]).every(lambda n: n % 2 == 0) is False

    async def test_empty_is_true(self):
        assert await AsyncAF([]).every(lambda n: False) is True

    async def test_holes_ignored(self):
        """Holes never reach the predicate, so they cannot fail it."""
        assert await AsyncAF([Hole, 1, Hole]).every(lambda n: n == 1) is True

    async def test_async_predicate(self):
        assert await AsyncAF([1, 2]).every(lambda n: later(n > 0)) is True


class TestSome:
    async def test_one_matches(self):
        assert await AsyncAF([1, later(2)]).some_af(lambda n: n == 2) is True

    async def test_none_match(self):
        assert await AsyncAF([1, 2]).some(lambda n: n > 5) is False

    async def test_empty_is_false(self):
        assert await AsyncAF([]).some(lambda n: True) is False

    async def test_all_holes_is_false(self):
        assert await AsyncAF([Hole, Hole]).some(lambda n: True) is False

    async def test_context(self):
        assert await AsyncAF([1, 2]).some(lambda n: n == current_context(), 2) is True


class TestFind:
    async def test_first_match(self):
        assert await AsyncAF([later(1), 2, 3, 4]).find_af(lambda n: n > 1) == 2

    async def test_no_match_is_none(self):
        assert await AsyncAF([1, 2]).find(lambda n: n > 5) is None

    async def test_returns_settled_value(self):
        assert await AsyncAF([later('a'), later('b')]).find(lambda s: s == 'b') == 'b'

    async def test_skips_holes(self):
        assert await AsyncAF([Hole, None, 3]).find(lambda n, i: i >= 0) is None
        assert await AsyncAF([Hole, 3]).find(lambda n: True) == 3

    async def test_series(self):
        assert await AsyncAF([1, 2, 3]).series.find(lambda n: n % 2 == 0) == 2


class TestFindIndex:
    async def test_first_match(self):
        assert await AsyncAF([1, later(5), 7]).find_index_af(lambda n: n > 4) == 1

    async def test_no_match(self):
        assert await AsyncAF([1, 2]).find_index(lambda n: n > 4) == -1

    async def test_index_accounts_for_holes(self):
        assert await AsyncAF([Hole, Hole, 'x']).find_index(lambda v: v == 'x') == 2

    async def test_text(self):
        assert await AsyncAF('hello').find_index(lambda c: c == 'l') == 2


class TestPredicateErrors:
    @pytest.mark.parametrize('name', ['every', 'some', 'find', 'find_index'])
    async def test_not_a_function(self, name):
        with pytest.raises(TypeMismatchError, match='^None is not a function$') as exc_info:
            await getattr(AsyncAF([1]), name)()
        assert exc_info.value.operation == f'{name}_af'

    @pytest.mark.parametrize('name', ['every_af', 'some_af', 'find_af', 'find_index_af'])
    async def test_non_collection(self, name):
        with pytest.raises(TypeMismatchError, match=f'^{name} cannot be called on 5, only on an Array or'):
            await getattr(AsyncAF(5), name)(bool)
