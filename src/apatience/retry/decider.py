r"""Retry decision logic for bounded waits.

A decider is created at the start of every wait and answers a single
question after each failed attempt: should another attempt be started
once the next delay has been slept?
"""

from __future__ import annotations

__all__ = ["AttemptsDecider", "BaseRetryDecider", "DeadlineDecider"]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class BaseRetryDecider(ABC):
    """Decides whether a failed wait should make another attempt."""

    @abstractmethod
    def should_retry(self, attempts: int, next_delay: float) -> bool:
        """Determine if another attempt should be made.

        Args:
            attempts: Number of attempts made so far (>= 1).
            next_delay: Seconds that would be slept before the next
                attempt.

        Returns:
            ``True`` to sleep and retry, ``False`` to stop.
        """


class DeadlineDecider(BaseRetryDecider):
    """Retry while waking up from the next sleep stays before a
    deadline.

    The attempt that would start at or after the deadline is never
    made, so a zero timeout allows exactly one attempt.

    Args:
        deadline: The deadline, in the time base of ``clock``.
        clock: Monotonic clock returning seconds.
    """

    def __init__(self, deadline: float, clock: Callable[[], float]) -> None:
        self.deadline = deadline
        self._clock = clock

    def should_retry(self, attempts: int, next_delay: float) -> bool:  # noqa: ARG002
        return self._clock() + next_delay < self.deadline


class AttemptsDecider(BaseRetryDecider):
    """Retry until ``max_retries + 1`` attempts were made.

    The first attempt is not a retry. Wall-clock time is never
    consulted.

    Args:
        max_retries: Maximum number of retries.
    """

    def __init__(self, max_retries: int) -> None:
        self.max_retries = max_retries

    def should_retry(self, attempts: int, next_delay: float) -> bool:  # noqa: ARG002
        return attempts < self.max_retries + 1
