r"""Callback manager for orchestrating wait lifecycle events."""

from __future__ import annotations

__all__ = ["CallbackManager"]

from typing import TYPE_CHECKING, Any

from apatience.callbacks import AttemptInfo, FailureInfo, RetryInfo, SuccessInfo
from apatience.retry.config import CallbackConfig

if TYPE_CHECKING:
    from collections.abc import Sequence


class CallbackManager:
    """Manages callback invocations during the wait lifecycle.

    Attempt numbers are received 0-indexed and handed to the callbacks
    1-indexed.

    Args:
        callbacks: Callback configuration. Defaults to no callbacks.

    Attributes:
        callbacks: Configuration containing the callback functions.
    """

    def __init__(self, callbacks: CallbackConfig | None = None) -> None:
        self.callbacks = callbacks if callbacks is not None else CallbackConfig()

    def on_attempt(self, attempt: int, elapsed_time: float) -> None:
        """Invoke on_attempt callback.

        Args:
            attempt: Attempt about to start (0-indexed).
            elapsed_time: Seconds elapsed since the wait started.
        """
        if self.callbacks.on_attempt is not None:
            self.callbacks.on_attempt(AttemptInfo(attempt=attempt + 1, elapsed_time=elapsed_time))

    def on_retry(self, attempt: int, wait_time: float, description: str, elapsed_time: float) -> None:
        """Invoke on_retry callback.

        Args:
            attempt: Attempt that just failed (0-indexed).
            wait_time: Sleep time before the next attempt.
            description: Description of the failed attempt.
            elapsed_time: Seconds elapsed since the wait started.
        """
        if self.callbacks.on_retry is not None:
            self.callbacks.on_retry(
                RetryInfo(
                    attempt=attempt + 1,
                    wait_time=wait_time,
                    description=description,
                    elapsed_time=elapsed_time,
                )
            )

    def on_success(self, attempt: int, value: Any, total_time: float) -> None:
        """Invoke on_success callback.

        Args:
            attempt: Attempt that succeeded (0-indexed).
            value: The accepted value.
            total_time: Seconds spent on the whole wait.
        """
        if self.callbacks.on_success is not None:
            self.callbacks.on_success(
                SuccessInfo(attempt=attempt + 1, value=value, total_time=total_time)
            )

    def on_failure(self, descriptions: Sequence[str], total_time: float) -> None:
        """Invoke on_failure callback.

        Args:
            descriptions: Descriptions of all the failed attempts.
            total_time: Seconds spent on the whole wait.
        """
        if self.callbacks.on_failure is not None:
            self.callbacks.on_failure(
                FailureInfo(
                    attempts=len(descriptions),
                    descriptions=tuple(descriptions),
                    total_time=total_time,
                )
            )
