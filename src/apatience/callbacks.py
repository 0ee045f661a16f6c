r"""Callback types and data structures for observability.

This module provides callback support for the apatience library,
enabling users to hook into the wait lifecycle for logging, metrics, or
alerting.

The callback system provides four lifecycle hooks:
- on_attempt: Called before each attempt
- on_retry: Called before each sleep between two attempts
- on_success: Called when an attempt produced an accepted value
- on_failure: Called when the bound is exhausted

Example:
    ```pycon
    >>> from apatience import PatientRetry
    >>> from apatience.callbacks import RetryInfo
    >>> from apatience.retry import CallbackConfig
    >>> def log_retry(retry_info: RetryInfo) -> None:
    ...     print(f"Attempt {retry_info.attempt} failed: {retry_info.description}")
    ...
    >>> retry = PatientRetry(default_max_retries=1, callbacks=CallbackConfig(on_retry=log_retry))
    >>> values = iter([None, "ready"])
    >>> retry.from_callable(lambda: next(values)).get()
    Attempt 1 failed: None
    'ready'

    ```
"""

from __future__ import annotations

__all__ = ["AttemptInfo", "FailureInfo", "RetryInfo", "SuccessInfo"]

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AttemptInfo:
    """Information passed to on_attempt callback.

    Attributes:
        attempt: The attempt about to start (1-indexed). First attempt is 1.
        elapsed_time: Seconds elapsed since the wait started.
    """

    attempt: int
    elapsed_time: float


@dataclass(frozen=True)
class RetryInfo:
    """Information passed to on_retry callback.

    Attributes:
        attempt: The attempt that just failed (1-indexed).
        wait_time: The sleep time in seconds before the next attempt.
        description: The description of the failed attempt.
        elapsed_time: Seconds elapsed since the wait started.
    """

    attempt: int
    wait_time: float
    description: str
    elapsed_time: float


@dataclass(frozen=True)
class SuccessInfo:
    """Information passed to on_success callback.

    Attributes:
        attempt: The attempt that succeeded (1-indexed).
        value: The accepted value.
        total_time: Seconds spent on all attempts including sleeps.
    """

    attempt: int
    value: Any
    total_time: float


@dataclass(frozen=True)
class FailureInfo:
    """Information passed to on_failure callback.

    Attributes:
        attempts: The number of attempts made.
        descriptions: The descriptions of all the failed attempts.
        total_time: Seconds spent on all attempts including sleeps.
    """

    attempts: int
    descriptions: tuple[str, ...]
    total_time: float
