r"""Retry executor running the bounded wait loop.

This module provides the RetryExecutor class that repeatedly asks for
an execution outcome until a value is accepted or the bound is reached,
sleeping the delays of a fresh delay generator between attempts.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import logging
import time
from collections.abc import Iterator
from typing import TYPE_CHECKING, TypeVar

from apatience.core.validation import to_seconds
from apatience.exceptions import PatientContractError, PatientError
from apatience.execution.outcome import ExecutionOutcome
from apatience.retry.manager import CallbackManager
from apatience.retry.result import PatientResult
from apatience.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Callable

    from apatience.delays.base import BaseDelayFactory
    from apatience.retry.bound import BaseBound
    from apatience.sleep import Sleep

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor:
    """Executes attempts until one passes or the bound is exhausted.

    The loop works the same way for every bound:

    1. Start the bound (a timeout bound computes its deadline here) and
       create a delay generator.
    2. Run one attempt. The first attempt starts immediately.
    3. On success, return the value without touching the delay
       generator again.
    4. On failure, record the description and pull the next delay from
       the generator.
    5. Stop if the bound's decider refuses another attempt, otherwise
       sleep the delay and go back to 2.

    The executor holds no per-wait state, so one instance can run any
    number of waits, including concurrently from several threads.

    Args:
        sleep: The sleep used between two attempts.
        callbacks: Optional manager for the lifecycle callbacks.
        clock: Monotonic clock returning seconds. Defaults to
            ``time.monotonic``.

    Attributes:
        sleep: The sleep used between two attempts.
        callbacks: Manager for invoking callbacks.

    Example:
        ```pycon
        >>> from apatience.delays import FixedDelay
        >>> from apatience.execution import ExecutionOutcome
        >>> from apatience.retry import MaxRetriesBound, RetryExecutor
        >>> from apatience.sleep import Sleep
        >>> executor = RetryExecutor(sleep=Sleep(sleep_func=lambda seconds: None))
        >>> outcomes = iter([ExecutionOutcome.failed("None"), ExecutionOutcome.passed(3)])
        >>> result = executor.execute(lambda: next(outcomes), MaxRetriesBound(2), FixedDelay(0.1))
        >>> result.value
        3

        ```
    """

    def __init__(
        self,
        sleep: Sleep,
        callbacks: CallbackManager | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.sleep = sleep
        self.callbacks = callbacks if callbacks is not None else CallbackManager()
        self._clock = clock

    def execute(
        self,
        attempt_func: Callable[[], ExecutionOutcome[T]],
        bound: BaseBound,
        delay_factory: BaseDelayFactory,
    ) -> PatientResult[T]:
        """Run attempts until success or exhaustion of the bound.

        Args:
            attempt_func: Zero-argument callable running one attempt,
                typically a bound ``execution_handler.execute``.
            bound: The stopping condition.
            delay_factory: The factory of the delay generator.

        Returns:
            A passing result with the accepted value, or an exhausted
            result with the descriptions of every attempt made.

        Raises:
            PatientContractError: If the delay factory, the delay
                generator, or ``attempt_func`` breaks its contract.
            PatientExecutionError: If an attempt raised a fatal error.
            PatientInterruptedError: If a sleep was interrupted.
            OverflowError: If a delay is too large to be slept or
                computed.
        """
        start_time = self._clock()
        decider = bound.start(self._clock)
        delays = self._create_delays(delay_factory)
        descriptions: list[str] = []
        attempt = 0

        while True:
            self.callbacks.on_attempt(attempt, self._clock() - start_time)
            outcome = self._run_attempt(attempt_func)
            if outcome.success:
                logger.debug(f"Attempt {attempt + 1} succeeded")
                self.callbacks.on_success(attempt, outcome.value, self._clock() - start_time)
                return PatientResult.passed(outcome.value)

            descriptions.append(outcome.description)
            next_delay = self._next_delay(delays)
            log_structured(
                logger,
                logging.DEBUG,
                f"Attempt {attempt + 1} failed: {outcome.description}",
                attempt=attempt + 1,
                wait_time=next_delay,
                failure_description=outcome.description,
            )
            if not decider.should_retry(attempt + 1, next_delay):
                break

            self.callbacks.on_retry(
                attempt, next_delay, outcome.description, self._clock() - start_time
            )
            self.sleep.sleep_for(next_delay)
            attempt += 1

        logger.debug(f"Wait exhausted after {len(descriptions)} attempts ({bound!r})")
        self.callbacks.on_failure(descriptions, self._clock() - start_time)
        return PatientResult.exhausted(descriptions)

    @staticmethod
    def _create_delays(delay_factory: BaseDelayFactory) -> Iterator[float]:
        delays = delay_factory.create()
        if not isinstance(delays, Iterator):
            msg = f"Received {delays!r} instead of a delay generator from {delay_factory!r}"
            raise PatientContractError(msg)
        return delays

    @staticmethod
    def _next_delay(delays: Iterator[float]) -> float:
        try:
            delay = next(delays)
        except StopIteration:
            msg = "The delay generator stopped producing delays"
            raise PatientContractError(msg) from None
        if delay is None:
            msg = "Received a None delay from the delay generator"
            raise PatientContractError(msg)
        try:
            return to_seconds(delay, "delay")
        except (TypeError, ValueError) as exc:
            msg = f"Received an invalid delay from the delay generator: {delay!r}"
            raise PatientContractError(msg) from exc

    @staticmethod
    def _run_attempt(attempt_func: Callable[[], ExecutionOutcome[T]]) -> ExecutionOutcome[T]:
        try:
            outcome = attempt_func()
        except PatientError:
            raise
        except Exception as exc:
            msg = "Unexpected exception caught while getting execution outcome"
            raise PatientContractError(msg) from exc
        if not isinstance(outcome, ExecutionOutcome):
            msg = f"Received {outcome!r} instead of an ExecutionOutcome from the execution handler"
            raise PatientContractError(msg)
        return outcome
