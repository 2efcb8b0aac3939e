"""Tests for includes_af, index_of_af and last_index_of_af."""

from __future__ import annotations

import pytest
from klaw_af import AsyncAF, Hole, TypeMismatchError

from tests.strategies import later


class TestIncludes:
    """includes over lists, text, records and awaitables."""

    async def test_list(self):
        assert await AsyncAF([1, 2, 3]).includes_af(2) is True
        assert await AsyncAF([1, 2, 3]).includes(5) is False

    async def test_awaitable_elements(self):
        assert await AsyncAF([later(1), later(2)]).includes(2) is True

    async def test_awaitable_collection(self):
        assert await AsyncAF(later([1, later(2)])).includes(2) is True

    async def test_text(self):
        assert await AsyncAF('test string').includes('string') is True
        assert await AsyncAF('test string').includes('nope') is False

    async def test_text_coerces_search(self):
        assert await AsyncAF('abc123').includes(12) is True

    async def test_record(self):
        assert await AsyncAF({0: 'a', 1: 'b', 'length': 2}).includes('b') is True

    async def test_nan(self):
        assert await AsyncAF([1, float('nan')]).includes(float('nan')) is True

    @pytest.mark.parametrize(
        ('from_index', 'expected'),
        [(1, True), (2, False), (-1, False), (-2, True), (-100, True), (100, False)],
    )
    async def test_from_index(self, from_index, expected):
        assert await AsyncAF([1, 2, 3]).includes(2, from_index) is expected

    @pytest.mark.parametrize(
        ('from_index', 'expected'),
        [(1, True), (6, False), (-100, True), (100, False)],
    )
    async def test_text_from_index(self, from_index, expected):
        assert await AsyncAF('abcdef').includes('bc', from_index) is expected

    async def test_holes_never_match(self):
        assert await AsyncAF([Hole, 1]).includes(None) is False


class TestIndexOf:
    async def test_list(self):
        assert await AsyncAF([1, 2, 3, 2]).index_of_af(2) == 1
        assert await AsyncAF([1, 2, 3]).index_of(5) == -1

    async def test_awaitable_elements(self):
        assert await AsyncAF([later('a'), later('b')]).index_of('b') == 1

    async def test_text(self):
        assert await AsyncAF('hello').index_of('l') == 2

    async def test_nan_not_found(self):
        assert await AsyncAF([float('nan')]).index_of(float('nan')) == -1

    @pytest.mark.parametrize(
        ('from_index', 'expected'),
        [(1, 1), (2, 3), (-1, 3), (-100, 1), (100, -1)],
    )
    async def test_from_index(self, from_index, expected):
        assert await AsyncAF([1, 2, 3, 2]).index_of(2, from_index) == expected

    async def test_text_from_index(self):
        assert await AsyncAF('hello').index_of('l', 3) == 3
        assert await AsyncAF('hello').index_of('l', -100) == 2
        assert await AsyncAF('hello').index_of('l', 100) == -1

    async def test_record(self):
        assert await AsyncAF({0: 'x', 2: 'y', 'length': 3}).index_of(None) == 1

    async def test_series(self):
        assert await AsyncAF([later(1), later(2)]).series.index_of(2) == 1


class TestLastIndexOf:
    async def test_list(self):
        assert await AsyncAF([1, 2, 3, 2]).last_index_of_af(2) == 3
        assert await AsyncAF([1, 2]).last_index_of(5) == -1

    async def test_awaitable_elements(self):
        assert await AsyncAF([later(2), later(2), 1]).last_index_of(2) == 1

    async def test_text(self):
        assert await AsyncAF('hello').last_index_of('l') == 3

    @pytest.mark.parametrize(
        ('from_index', 'expected'),
        [(2, 1), (3, 3), (-2, 1), (-100, -1), (100, 3)],
    )
    async def test_from_index(self, from_index, expected):
        assert await AsyncAF([1, 2, 3, 2]).last_index_of(2, from_index) == expected

    async def test_text_from_index(self):
        assert await AsyncAF('hello').last_index_of('l', 2) == 2
        assert await AsyncAF('hello').last_index_of('l', 100) == 3
        assert await AsyncAF('hello').last_index_of('h', -100) == 0

    async def test_holes_never_match(self):
        assert await AsyncAF([None, Hole]).last_index_of(None) == 0


class TestSearchErrors:
    @pytest.mark.parametrize('name', ['includes_af', 'index_of_af', 'last_index_of_af'])
    @pytest.mark.parametrize('value', [None, {}, True, 2])
    async def test_non_collections(self, name, value):
        with pytest.raises(TypeMismatchError) as exc_info:
            await getattr(AsyncAF(value), name)(1)
        expected = f'{name} cannot be called on {value}, only on an Array, String, or array-like Object'
        assert str(exc_info.value) == expected
