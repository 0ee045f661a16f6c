r"""Shared test helpers for the wait engine tests.

This module contains a fake monotonic clock that only moves when the
fake sleep is called, so the tests never sleep for real and the timing
of every wait is deterministic.
"""

from __future__ import annotations

__all__ = ["FakeClock", "always_false", "make_operation"]

from typing import TYPE_CHECKING, Any
from unittest.mock import Mock

if TYPE_CHECKING:
    from collections.abc import Iterable


class FakeClock:
    """Monotonic clock advanced explicitly by the fake sleep.

    Args:
        start: The initial time in seconds.
        tick: Seconds added on every read, to simulate attempts that
            take time.
    """

    def __init__(self, start: float = 0.0, tick: float = 0.0) -> None:
        self.now = start
        self.tick = tick

    def __call__(self) -> float:
        current = self.now
        self.now += self.tick
        return current

    def advance(self, seconds: float) -> None:
        self.now += seconds


def always_false(value: Any) -> bool:  # noqa: ARG001
    return False


def make_operation(values: Iterable[Any]) -> Mock:
    """Create an operation returning the given values in order.

    An exception instance in ``values`` is raised instead of returned.
    """
    return Mock(side_effect=list(values))
