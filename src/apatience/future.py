r"""Futures binding an operation and a filter to a wait configuration.

A future is immutable: ``with_message`` and ``with_filter`` return new
futures. Each call to ``get`` or ``check`` runs a complete, independent
wait on the calling thread.
"""

from __future__ import annotations

__all__ = ["BasePatientFuture", "PatientRetryFuture", "PatientWaitFuture"]

import copy
import logging
import time
from abc import ABC, abstractmethod
from functools import partial
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from apatience.core.validation import (
    to_seconds,
    validate_callable,
    validate_failure_message,
    validate_instance,
    validate_max_retries,
)
from apatience.delays.base import BaseDelayFactory
from apatience.exceptions import (
    PatientRetryError,
    PatientTimeoutError,
    RepeatedAttemptsError,
)
from apatience.execution.base import BaseExecutionHandler
from apatience.retry.bound import MaxRetriesBound, TimeoutBound
from apatience.retry.config import CallbackConfig
from apatience.retry.executor import RetryExecutor
from apatience.retry.manager import CallbackManager
from apatience.sleep import Sleep

if TYPE_CHECKING:
    from collections.abc import Callable

    from apatience.core.validation import Duration
    from apatience.retry.bound import BaseBound

T = TypeVar("T")
F = TypeVar("F", bound="BasePatientFuture")

logger: logging.Logger = logging.getLogger(__name__)


class BasePatientFuture(ABC, Generic[T]):
    """Base class of the futures.

    Subclasses define how the bound is built from the value given to
    ``get`` / ``check`` and which error reports exhaustion.
    """

    exhausted_error: ClassVar[type[RepeatedAttemptsError]] = RepeatedAttemptsError

    def __init__(
        self,
        operation: Callable[[], T],
        filter: Callable[[T], bool],  # noqa: A002
        *,
        execution_handler: BaseExecutionHandler,
        delay_factory: BaseDelayFactory,
        sleep: Sleep,
        initial_delay: Duration,
        failure_message: str | Callable[[], str],
        callbacks: CallbackConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        validate_callable(operation, "operation")
        validate_callable(filter, "filter")
        validate_instance(execution_handler, BaseExecutionHandler, "execution_handler")
        validate_instance(delay_factory, BaseDelayFactory, "delay_factory")
        validate_instance(sleep, Sleep, "sleep")
        validate_callable(clock, "clock")
        if callbacks is not None:
            validate_instance(callbacks, CallbackConfig, "callbacks")
        validate_failure_message(failure_message)
        self._operation = operation
        self._filter = filter
        self._execution_handler = execution_handler
        self._delay_factory = delay_factory
        self._sleep = sleep
        self._initial_delay = to_seconds(initial_delay, "initial_delay")
        self._failure_message = failure_message
        self._callbacks = callbacks
        self._clock = clock

    @property
    def operation(self) -> Callable[[], T]:
        return self._operation

    @property
    def filter(self) -> Callable[[T], bool]:
        return self._filter

    @property
    def failure_message(self) -> str | Callable[[], str]:
        return self._failure_message

    def with_message(self: F, failure_message: str | Callable[[], str]) -> F:
        """Return a copy of this future using another failure message.

        Args:
            failure_message: The message of the exhaustion error, or a
                zero-argument callable producing it. A callable is only
                evaluated when the wait is exhausted.

        Returns:
            A new future.

        Raises:
            TypeError: If ``failure_message`` is neither a string nor a
                callable.
        """
        validate_failure_message(failure_message)
        return self._replace(failure_message=failure_message)

    def with_filter(self: F, filter: Callable[[T], bool]) -> F:  # noqa: A002
        """Return a copy of this future using another filter.

        Args:
            filter: The predicate accepting the produced values.

        Returns:
            A new future.

        Raises:
            TypeError: If ``filter`` is not callable.
        """
        validate_callable(filter, "filter")
        return self._replace(filter=filter)

    @abstractmethod
    def _make_bound(self, value: Any) -> BaseBound:
        """Build the bound from the argument of ``get`` / ``check``
        (``None`` selects the default)."""

    def _replace(self: F, **changes: Any) -> F:
        future = copy.copy(self)
        for name, value in changes.items():
            setattr(future, f"_{name}", value)
        return future

    def _resolve_message(self) -> str:
        if callable(self._failure_message):
            return str(self._failure_message())
        return self._failure_message

    def _get(self, bound_value: Any) -> T:
        # The bound is validated before the initial delay is slept
        bound = self._make_bound(bound_value)
        self._sleep.sleep_for(self._initial_delay)
        executor = RetryExecutor(
            sleep=self._sleep,
            callbacks=CallbackManager(self._callbacks),
            clock=self._clock,
        )
        result = executor.execute(
            partial(self._execution_handler.execute, self._operation, self._filter),
            bound,
            self._delay_factory,
        )
        if result.success:
            return result.value
        raise self.exhausted_error(self._resolve_message(), result.descriptions)

    def _check(self, bound_value: Any) -> bool:
        try:
            self._get(bound_value)
        except self.exhausted_error as exc:
            logger.debug(f"Check failed: {exc}")
            return False
        return True


class PatientWaitFuture(BasePatientFuture[T]):
    """Future waiting until a value is accepted or a timeout is reached.

    Args:
        operation: The zero-argument callable producing values.
        filter: The predicate accepting the produced values.
        default_timeout: The timeout used when ``get`` / ``check`` are
            called without one.
        **kwargs: The other arguments of ``BasePatientFuture``.

    Example:
        ```pycon
        >>> from apatience import PatientWait
        >>> values = iter([None, False, "ready"])
        >>> future = PatientWait(default_timeout=5.0).from_callable(lambda: next(values))
        >>> future.get()
        'ready'

        ```
    """

    exhausted_error: ClassVar[type[RepeatedAttemptsError]] = PatientTimeoutError

    def __init__(
        self,
        operation: Callable[[], T],
        filter: Callable[[T], bool],  # noqa: A002
        *,
        default_timeout: Duration,
        **kwargs: Any,
    ) -> None:
        super().__init__(operation, filter, **kwargs)
        self._default_timeout = to_seconds(default_timeout, "default_timeout")

    @property
    def default_timeout(self) -> float:
        return self._default_timeout

    def _make_bound(self, value: Duration | None) -> TimeoutBound:
        return TimeoutBound(self._default_timeout if value is None else value)

    def get(self, timeout: Duration | None = None) -> T:
        """Wait for an accepted value.

        Args:
            timeout: Maximum duration of the wait in seconds or as a
                ``timedelta``. Defaults to the future's default timeout.
                Zero means exactly one attempt.

        Returns:
            The first accepted value.

        Raises:
            ValueError: If ``timeout`` is negative.
            PatientTimeoutError: If no value was accepted in time.
            PatientExecutionError: If an attempt raised a fatal error.
            PatientInterruptedError: If a sleep was interrupted.
            PatientContractError: If a collaborator broke its contract.
        """
        return self._get(timeout)

    def check(self, timeout: Duration | None = None) -> bool:
        """Wait for an accepted value and report whether one was found.

        Only the exhaustion of the timeout is turned into ``False``;
        every other error propagates.

        Args:
            timeout: Same as ``get``.

        Returns:
            ``True`` if a value was accepted in time.
        """
        return self._check(timeout)


class PatientRetryFuture(BasePatientFuture[T]):
    """Future retrying until a value is accepted or the retries are used
    up.

    Args:
        operation: The zero-argument callable producing values.
        filter: The predicate accepting the produced values.
        default_max_retries: The number of retries used when ``get`` /
            ``check`` are called without one.
        **kwargs: The other arguments of ``BasePatientFuture``.
    """

    exhausted_error: ClassVar[type[RepeatedAttemptsError]] = PatientRetryError

    def __init__(
        self,
        operation: Callable[[], T],
        filter: Callable[[T], bool],  # noqa: A002
        *,
        default_max_retries: int,
        **kwargs: Any,
    ) -> None:
        super().__init__(operation, filter, **kwargs)
        self._default_max_retries = validate_max_retries(default_max_retries)

    @property
    def default_max_retries(self) -> int:
        return self._default_max_retries

    def _make_bound(self, value: int | None) -> MaxRetriesBound:
        return MaxRetriesBound(self._default_max_retries if value is None else value)

    def get(self, max_retries: int | None = None) -> T:
        """Retry until a value is accepted.

        Args:
            max_retries: Maximum number of retries. Defaults to the
                future's default. Zero means exactly one attempt.

        Returns:
            The first accepted value.

        Raises:
            ValueError: If ``max_retries`` is negative.
            PatientRetryError: If no value was accepted.
            PatientExecutionError: If an attempt raised a fatal error.
            PatientInterruptedError: If a sleep was interrupted.
            PatientContractError: If a collaborator broke its contract.
        """
        return self._get(max_retries)

    def check(self, max_retries: int | None = None) -> bool:
        """Retry until a value is accepted and report whether one was
        found.

        Args:
            max_retries: Same as ``get``.

        Returns:
            ``True`` if a value was accepted.
        """
        return self._check(max_retries)
