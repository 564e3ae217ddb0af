"""Shared fixtures for load test harness tests."""

from collections.abc import Generator

import pytest
from aioresponses import aioresponses as aioresponses_cls

from search_load_test.testing.clock import TaskClock


@pytest.fixture
def aioresponses() -> Generator[aioresponses_cls, None, None]:
    """Intercept aiohttp requests for the duration of a test."""
    with aioresponses_cls() as mocked:
        yield mocked


@pytest.fixture
def clock() -> TaskClock:
    """Create a clock with per-task virtual time."""
    return TaskClock()
