r"""Count-bound patient retry.

This module provides ``PatientRetry``, the immutable configuration of a
wait that stops after a number of retries, and ``retry_until``, a
shortcut for one-off retries.
"""

from __future__ import annotations

__all__ = ["PatientRetry", "retry_until"]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from apatience.base import BasePatientConfig
from apatience.core.config import (
    DEFAULT_DELAY,
    DEFAULT_INITIAL_DELAY,
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_FAILURE_MESSAGE,
)
from apatience.core.validation import validate_max_retries
from apatience.delays.fixed import FixedDelay
from apatience.execution.base import default_filter
from apatience.execution.ignoring import IgnoringExecutionHandler
from apatience.execution.simple import SimpleExecutionHandler
from apatience.future import PatientRetryFuture

if TYPE_CHECKING:
    from collections.abc import Callable

    from apatience.core.validation import Duration
    from apatience.delays.base import BaseDelayFactory

T = TypeVar("T")


@dataclass(frozen=True)
class PatientRetry(BasePatientConfig):
    """Configuration of a count-bound wait.

    Args:
        default_max_retries: Number of retries used when ``get`` /
            ``check`` are called without one. Zero means exactly one
            attempt.
        **kwargs: The fields of ``BasePatientConfig``.

    Example:
        ```pycon
        >>> from apatience import FixedDelay, PatientRetry
        >>> values = iter([None, "x"])
        >>> retry = PatientRetry(default_max_retries=3, delay_factory=FixedDelay(0.01))
        >>> retry.from_callable(lambda: next(values)).get()
        'x'

        ```
    """

    default_max_retries: int = DEFAULT_MAX_RETRIES
    failure_message: str | Callable[[], str] = DEFAULT_RETRY_FAILURE_MESSAGE

    def __post_init__(self) -> None:
        super().__post_init__()
        validate_max_retries(self.default_max_retries)

    def from_callable(
        self,
        operation: Callable[[], T],
        filter: Callable[[T], bool] | None = None,  # noqa: A002
    ) -> PatientRetryFuture[T]:
        """Bind an operation to this configuration.

        Args:
            operation: The zero-argument callable producing values.
            filter: The predicate accepting the produced values.
                Defaults to accepting everything except ``None`` and
                ``False``.

        Returns:
            The future running the retries.
        """
        return PatientRetryFuture(
            operation,
            default_filter if filter is None else filter,
            default_max_retries=self.default_max_retries,
            **self._future_kwargs(),
        )


def retry_until(
    operation: Callable[[], T],
    *,
    max_retries: int = DEFAULT_MAX_RETRIES,
    delay: Duration = DEFAULT_DELAY,
    delay_factory: BaseDelayFactory | None = None,
    filter: Callable[[T], bool] | None = None,  # noqa: A002
    ignoring: tuple[type[BaseException], ...] = (),
    initial_delay: Duration = DEFAULT_INITIAL_DELAY,
    failure_message: str | Callable[[], str] = DEFAULT_RETRY_FAILURE_MESSAGE,
    **kwargs: Any,
) -> T:
    """Retry ``operation`` until it produces an accepted value.

    Args:
        operation: The zero-argument callable producing values.
        max_retries: Maximum number of retries.
        delay: Fixed delay between two attempts, used when no
            ``delay_factory`` is given.
        delay_factory: Optional factory of the delays.
        filter: The predicate accepting the produced values.
        ignoring: Exception types treated as a failed attempt instead
            of aborting the retries.
        initial_delay: Duration slept before the first attempt.
        failure_message: Message of the retry error.
        **kwargs: Other fields of ``PatientRetry`` (``sleep``,
            ``clock``, ``callbacks``).

    Returns:
        The first accepted value.

    Raises:
        PatientRetryError: If no value was accepted.
    """
    config = PatientRetry(
        initial_delay=initial_delay,
        default_max_retries=max_retries,
        delay_factory=FixedDelay(delay) if delay_factory is None else delay_factory,
        execution_handler=(
            IgnoringExecutionHandler(*ignoring) if ignoring else SimpleExecutionHandler()
        ),
        failure_message=failure_message,
        **kwargs,
    )
    return config.from_callable(operation, filter).get()
