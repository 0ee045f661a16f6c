r"""Shared configuration of the patient wait entry points.

This module provides the frozen dataclass holding the fields common to
``PatientWait`` and ``PatientRetry``: how long to sleep before the first
attempt, how to sleep between attempts, which delays to use, and how a
single attempt is executed.
"""

from __future__ import annotations

__all__ = ["BasePatientConfig"]

import time
from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any

from apatience.core.config import DEFAULT_INITIAL_DELAY
from apatience.core.validation import (
    to_seconds,
    validate_callable,
    validate_failure_message,
    validate_instance,
)
from apatience.delays.base import BaseDelayFactory
from apatience.delays.fixed import FixedDelay
from apatience.execution.base import BaseExecutionHandler
from apatience.execution.simple import SimpleExecutionHandler
from apatience.retry.config import CallbackConfig
from apatience.sleep import Sleep

if TYPE_CHECKING:
    from collections.abc import Callable

    from apatience.core.validation import Duration


@dataclass(frozen=True)
class BasePatientConfig:
    """Fields shared by the timeout-bound and the count-bound
    configurations.

    Args:
        initial_delay: Duration slept once before the first attempt.
        delay_factory: Factory of the delays slept between two attempts.
        execution_handler: Handler running each attempt.
        sleep: The sleep used for every delay.
        clock: Monotonic clock returning seconds.
        callbacks: Optional lifecycle callbacks.
        failure_message: Message of the exhaustion error, or a
            zero-argument callable producing it.

    Raises:
        TypeError: If a field has the wrong type.
        ValueError: If ``initial_delay`` is negative.
    """

    initial_delay: Duration = DEFAULT_INITIAL_DELAY
    delay_factory: BaseDelayFactory = field(default_factory=FixedDelay)
    execution_handler: BaseExecutionHandler = field(default_factory=SimpleExecutionHandler)
    sleep: Sleep = field(default_factory=Sleep)
    clock: Callable[[], float] = time.monotonic
    callbacks: CallbackConfig | None = None
    failure_message: str | Callable[[], str] = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "initial_delay", to_seconds(self.initial_delay, "initial_delay"))
        validate_instance(self.delay_factory, BaseDelayFactory, "delay_factory")
        validate_instance(self.execution_handler, BaseExecutionHandler, "execution_handler")
        validate_instance(self.sleep, Sleep, "sleep")
        validate_callable(self.clock, "clock")
        if self.callbacks is not None:
            validate_instance(self.callbacks, CallbackConfig, "callbacks")
        validate_failure_message(self.failure_message)

    def merge(self, **overrides: Any) -> Any:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied and the new config is
        validated again.

        Args:
            **overrides: Keyword arguments for fields to override.

        Returns:
            A new config of the same type.

        Example:
            ```pycon
            >>> from apatience import PatientWait
            >>> config = PatientWait(default_timeout=5.0)
            >>> config.merge(default_timeout=10.0, initial_delay=None).default_timeout
            10.0
            >>> config.default_timeout
            5.0

            ```
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert the configuration to a dictionary of its fields."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def _future_kwargs(self) -> dict[str, Any]:
        return {
            "execution_handler": self.execution_handler,
            "delay_factory": self.delay_factory,
            "sleep": self.sleep,
            "initial_delay": self.initial_delay,
            "failure_message": self.failure_message,
            "callbacks": self.callbacks,
            "clock": self.clock,
        }
