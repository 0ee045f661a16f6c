r"""Exponential delay factory."""

from __future__ import annotations

__all__ = ["ExponentialDelay"]

import math
from typing import TYPE_CHECKING

from apatience.core.validation import to_seconds
from apatience.delays.base import BaseDelayFactory

if TYPE_CHECKING:
    from apatience.core.validation import Duration


class ExponentialDelay(BaseDelayFactory):
    """Exponential delay factory.

    Calculates the delay as: initial_delay * (base ** attempt).

    A base of 1 produces the same sequence as ``FixedDelay(initial_delay)``.

    Args:
        base: The growth factor. Must be finite and >= 1.
        initial_delay: The delay after the first failed attempt, in
            seconds or as a ``timedelta``. Must be > 0.

    Raises:
        ValueError: If ``base`` is not a finite number >= 1 or
            ``initial_delay`` is not strictly positive.

    Example:
        ```pycon
        >>> from apatience.delays import ExponentialDelay
        >>> delays = ExponentialDelay(base=2, initial_delay=0.5).create()
        >>> [next(delays) for _ in range(4)]
        [0.5, 1.0, 2.0, 4.0]

        ```
    """

    def __init__(self, base: float, initial_delay: Duration) -> None:
        if isinstance(base, bool) or not isinstance(base, (int, float)):
            msg = f"base must be a number, got {base!r}"
            raise TypeError(msg)
        if not math.isfinite(base) or base < 1:
            msg = f"base must be a finite number >= 1, got {base}"
            raise ValueError(msg)
        initial_delay = to_seconds(initial_delay, "initial_delay")
        if initial_delay <= 0:
            msg = f"initial_delay must be > 0, got {initial_delay}"
            raise ValueError(msg)

        self.base = base
        self.initial_delay = initial_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base={self.base}, "
            f"initial_delay={self.initial_delay})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExponentialDelay):
            return NotImplemented
        return (self.base, self.initial_delay) == (other.base, other.initial_delay)

    def __hash__(self) -> int:
        return hash((self.__class__, self.base, self.initial_delay))

    def calculate(self, attempt: int) -> float:
        """Calculate exponential delay.

        Args:
            attempt: The failed attempt number (0-indexed).

        Returns:
            The calculated delay: initial_delay * (base ** attempt).

        Raises:
            OverflowError: If the delay is too large to be represented
                as a float.
        """
        try:
            delay = self.initial_delay * (self.base**attempt)
        except OverflowError as exc:
            msg = f"Delay overflow for attempt {attempt} (base={self.base})"
            raise OverflowError(msg) from exc
        if math.isinf(delay):
            msg = f"Delay overflow for attempt {attempt} (base={self.base})"
            raise OverflowError(msg)
        return delay
