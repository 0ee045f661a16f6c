r"""Timeout-bound patient wait.

This module provides ``PatientWait``, the immutable configuration of a
wait that stops when the next attempt would start after a timeout, and
``wait_until``, a shortcut for one-off waits.
"""

from __future__ import annotations

__all__ = ["PatientWait", "wait_until"]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from apatience.base import BasePatientConfig
from apatience.core.config import (
    DEFAULT_DELAY,
    DEFAULT_INITIAL_DELAY,
    DEFAULT_TIMEOUT,
    DEFAULT_WAIT_FAILURE_MESSAGE,
)
from apatience.core.validation import to_seconds
from apatience.delays.fixed import FixedDelay
from apatience.execution.base import default_filter
from apatience.execution.ignoring import IgnoringExecutionHandler
from apatience.execution.simple import SimpleExecutionHandler
from apatience.future import PatientWaitFuture

if TYPE_CHECKING:
    from collections.abc import Callable

    from apatience.core.validation import Duration
    from apatience.delays.base import BaseDelayFactory

T = TypeVar("T")


@dataclass(frozen=True)
class PatientWait(BasePatientConfig):
    """Configuration of a timeout-bound wait.

    Args:
        default_timeout: Timeout used when ``get`` / ``check`` are
            called without one. Zero means exactly one attempt.
        **kwargs: The fields of ``BasePatientConfig``.

    Example:
        ```pycon
        >>> from apatience import ExponentialDelay, PatientWait
        >>> wait = PatientWait(
        ...     default_timeout=30.0,
        ...     delay_factory=ExponentialDelay(base=2, initial_delay=0.1),
        ... )
        >>> wait.from_callable(lambda: "ready").get()
        'ready'

        ```
    """

    default_timeout: Duration = DEFAULT_TIMEOUT
    failure_message: str | Callable[[], str] = DEFAULT_WAIT_FAILURE_MESSAGE

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(
            self, "default_timeout", to_seconds(self.default_timeout, "default_timeout")
        )

    def from_callable(
        self,
        operation: Callable[[], T],
        filter: Callable[[T], bool] | None = None,  # noqa: A002
    ) -> PatientWaitFuture[T]:
        """Bind an operation to this configuration.

        Args:
            operation: The zero-argument callable producing values.
            filter: The predicate accepting the produced values.
                Defaults to accepting everything except ``None`` and
                ``False``.

        Returns:
            The future running the wait.
        """
        return PatientWaitFuture(
            operation,
            default_filter if filter is None else filter,
            default_timeout=self.default_timeout,
            **self._future_kwargs(),
        )


def wait_until(
    operation: Callable[[], T],
    *,
    timeout: Duration = DEFAULT_TIMEOUT,
    delay: Duration = DEFAULT_DELAY,
    delay_factory: BaseDelayFactory | None = None,
    filter: Callable[[T], bool] | None = None,  # noqa: A002
    ignoring: tuple[type[BaseException], ...] = (),
    initial_delay: Duration = DEFAULT_INITIAL_DELAY,
    failure_message: str | Callable[[], str] = DEFAULT_WAIT_FAILURE_MESSAGE,
    **kwargs: Any,
) -> T:
    """Wait until ``operation`` produces an accepted value.

    Args:
        operation: The zero-argument callable producing values.
        timeout: Maximum duration of the wait.
        delay: Fixed delay between two attempts, used when no
            ``delay_factory`` is given.
        delay_factory: Optional factory of the delays.
        filter: The predicate accepting the produced values.
        ignoring: Exception types treated as a failed attempt instead
            of aborting the wait.
        initial_delay: Duration slept before the first attempt.
        failure_message: Message of the timeout error.
        **kwargs: Other fields of ``PatientWait`` (``sleep``,
            ``clock``, ``callbacks``).

    Returns:
        The first accepted value.

    Raises:
        PatientTimeoutError: If no value was accepted in time.

    Example:
        ```pycon
        >>> from apatience import wait_until
        >>> values = iter([None, None, 42])
        >>> wait_until(lambda: next(values), timeout=5.0, delay=0.01)
        42

        ```
    """
    config = PatientWait(
        initial_delay=initial_delay,
        default_timeout=timeout,
        delay_factory=FixedDelay(delay) if delay_factory is None else delay_factory,
        execution_handler=(
            IgnoringExecutionHandler(*ignoring) if ignoring else SimpleExecutionHandler()
        ),
        failure_message=failure_message,
        **kwargs,
    )
    return config.from_callable(operation, filter).get()
