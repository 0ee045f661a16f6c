from __future__ import annotations

from unittest.mock import Mock

import httpx
import pytest

from apatience.sleep import Sleep
from tests.helpers import FakeClock


@pytest.fixture
def fake_clock() -> FakeClock:
    """Create a fake monotonic clock starting at 0."""
    return FakeClock()


@pytest.fixture
def mock_sleep_func(fake_clock: FakeClock) -> Mock:
    """Create a sleep function advancing the fake clock instead of
    sleeping."""
    return Mock(side_effect=fake_clock.advance)


@pytest.fixture
def fake_sleep(mock_sleep_func: Mock) -> Sleep:
    """Create a Sleep backed by the fake clock.

    The durations actually slept are available through
    ``mock_sleep_func.call_args_list``.
    """
    return Sleep(sleep_func=mock_sleep_func)


@pytest.fixture
def mock_client() -> httpx.Client:
    """Create a mock httpx.Client for testing."""
    return Mock(spec=httpx.Client)


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing callbacks.

    Returns:
        A Mock object that can be used as a callback function.
    """
    return Mock()
