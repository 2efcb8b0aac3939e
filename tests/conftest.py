"""Pytest configuration and shared fixtures for klaw-af tests."""

from __future__ import annotations

import os
from collections.abc import Generator
from unittest.mock import patch

import pytest
from klaw_af._config import MODE_ENV_VAR, _reset


@pytest.fixture(autouse=True)
def fresh_config() -> Generator[None]:
    """Start every test without init() and without KLAW_AF_MODE set."""
    _reset()
    env = {key: value for key, value in os.environ.items() if key != MODE_ENV_VAR}
    with patch.dict(os.environ, env, clear=True):
        yield
    _reset()


@pytest.fixture
def sparse() -> list[object]:
    """The list [_, _, 1, _, 2, _, _] with holes at every underscore."""
    from klaw_af import Hole

    return [Hole, Hole, 1, Hole, 2, Hole, Hole]
