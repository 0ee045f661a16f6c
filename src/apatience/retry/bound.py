r"""Bounds stopping a wait: a wall-clock timeout or a number of
retries."""

from __future__ import annotations

__all__ = ["BaseBound", "MaxRetriesBound", "TimeoutBound"]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from apatience.core.validation import to_seconds, validate_max_retries
from apatience.retry.decider import AttemptsDecider, BaseRetryDecider, DeadlineDecider

if TYPE_CHECKING:
    from collections.abc import Callable

    from apatience.core.validation import Duration


class BaseBound(ABC):
    """Immutable stopping condition of a wait.

    ``start`` is called once per wait and returns the decider holding
    the per-wait state (for example the deadline).
    """

    @abstractmethod
    def start(self, clock: Callable[[], float]) -> BaseRetryDecider:
        """Start a new wait.

        Args:
            clock: Monotonic clock returning seconds.

        Returns:
            A fresh decider for this wait.
        """


class TimeoutBound(BaseBound):
    """Stop when the next attempt would start after a timeout.

    Args:
        timeout: Maximum duration of the wait in seconds or as a
            ``timedelta``. Zero means exactly one attempt.

    Example:
        ```pycon
        >>> from apatience.retry import TimeoutBound
        >>> decider = TimeoutBound(10.0).start(clock=lambda: 0.0)
        >>> decider.should_retry(attempts=1, next_delay=5.0)
        True
        >>> decider.should_retry(attempts=2, next_delay=10.0)
        False

        ```
    """

    def __init__(self, timeout: Duration) -> None:
        self.timeout = to_seconds(timeout, "timeout")

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(timeout={self.timeout})"

    def start(self, clock: Callable[[], float]) -> DeadlineDecider:
        return DeadlineDecider(deadline=clock() + self.timeout, clock=clock)


class MaxRetriesBound(BaseBound):
    """Stop after ``max_retries + 1`` attempts.

    Args:
        max_retries: Maximum number of retries. Zero means exactly one
            attempt.

    Example:
        ```pycon
        >>> from apatience.retry import MaxRetriesBound
        >>> decider = MaxRetriesBound(1).start(clock=lambda: 0.0)
        >>> decider.should_retry(attempts=1, next_delay=0.0)
        True
        >>> decider.should_retry(attempts=2, next_delay=0.0)
        False

        ```
    """

    def __init__(self, max_retries: int) -> None:
        self.max_retries = validate_max_retries(max_retries)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(max_retries={self.max_retries})"

    def start(self, clock: Callable[[], float]) -> AttemptsDecider:  # noqa: ARG002
        return AttemptsDecider(max_retries=self.max_retries)
