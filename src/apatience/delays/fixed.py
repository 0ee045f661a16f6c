r"""Fixed delay factory."""

from __future__ import annotations

__all__ = ["FixedDelay"]

import itertools
from typing import TYPE_CHECKING

from apatience.core.config import DEFAULT_DELAY
from apatience.core.validation import to_seconds
from apatience.delays.base import BaseDelayFactory

if TYPE_CHECKING:
    from collections.abc import Iterator

    from apatience.core.validation import Duration


class FixedDelay(BaseDelayFactory):
    """Fixed delay factory.

    Every generator returns the same delay after every failed attempt.

    Args:
        delay: The delay in seconds or as a ``timedelta`` (default: 0).
            Must be non-negative.

    Example:
        ```pycon
        >>> from apatience.delays import FixedDelay
        >>> delays = FixedDelay(delay=2.5).create()
        >>> next(delays)
        2.5
        >>> next(delays)
        2.5

        ```
    """

    def __init__(self, delay: Duration = DEFAULT_DELAY) -> None:
        self.delay = to_seconds(delay, "delay")

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedDelay):
            return NotImplemented
        return self.delay == other.delay

    def __hash__(self) -> int:
        return hash((self.__class__, self.delay))

    def calculate(self, attempt: int) -> float:  # noqa: ARG002
        """Calculate the fixed delay.

        Args:
            attempt: The failed attempt number (0-indexed, unused).

        Returns:
            The fixed delay value.
        """
        return self.delay

    def create(self) -> Iterator[float]:
        return itertools.repeat(self.delay)
