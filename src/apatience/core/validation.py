r"""Parameter validation utilities.

This module provides the validation functions used by the
configuration objects and the public entry points to reject invalid
arguments before any attempt is made.
"""

from __future__ import annotations

__all__ = [
    "Duration",
    "to_seconds",
    "validate_callable",
    "validate_failure_message",
    "validate_instance",
    "validate_max_retries",
]

import math
from datetime import timedelta
from numbers import Real
from typing import Any, Union

Duration = Union[float, timedelta]


def to_seconds(duration: Duration, name: str = "duration") -> float:
    """Convert a duration to a non-negative number of seconds.

    Args:
        duration: The duration as a number of seconds or a
            ``datetime.timedelta``.
        name: The parameter name used in error messages.

    Returns:
        The duration in seconds.

    Raises:
        TypeError: If ``duration`` is ``None``, a boolean, or neither a
            real number nor a ``timedelta``.
        ValueError: If ``duration`` is negative or NaN.

    Example:
        ```pycon
        >>> from datetime import timedelta
        >>> from apatience.core.validation import to_seconds
        >>> to_seconds(1.5)
        1.5
        >>> to_seconds(timedelta(milliseconds=250))
        0.25
        >>> to_seconds(-1)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: duration must be >= 0, got -1

        ```
    """
    if isinstance(duration, timedelta):
        seconds = duration.total_seconds()
    elif isinstance(duration, Real) and not isinstance(duration, bool):
        seconds = float(duration)
    else:
        msg = f"{name} must be a number of seconds or a timedelta, got {duration!r}"
        raise TypeError(msg)
    if math.isnan(seconds):
        msg = f"{name} must not be NaN"
        raise ValueError(msg)
    if seconds < 0:
        msg = f"{name} must be >= 0, got {duration}"
        raise ValueError(msg)
    return seconds


def validate_max_retries(max_retries: int) -> int:
    """Validate a number of retries.

    Args:
        max_retries: Maximum number of retries. Must be >= 0. A value of
            0 means no retries (only the initial attempt).

    Returns:
        The validated number of retries.

    Raises:
        TypeError: If ``max_retries`` is not an integer.
        ValueError: If ``max_retries`` is negative.

    Example:
        ```pycon
        >>> from apatience.core.validation import validate_max_retries
        >>> validate_max_retries(3)
        3

        ```
    """
    if not isinstance(max_retries, int) or isinstance(max_retries, bool):
        msg = f"max_retries must be an integer, got {max_retries!r}"
        raise TypeError(msg)
    if max_retries < 0:
        msg = f"max_retries must be >= 0, got {max_retries}"
        raise ValueError(msg)
    return max_retries


def validate_callable(value: Any, name: str) -> None:
    """Check that a value is callable.

    Args:
        value: The value to check.
        name: The parameter name used in error messages.

    Raises:
        TypeError: If ``value`` is not callable.
    """
    if not callable(value):
        msg = f"{name} must be callable, got {value!r}"
        raise TypeError(msg)


def validate_instance(value: Any, cls: type, name: str) -> None:
    """Check that a value is an instance of a given class.

    Args:
        value: The value to check.
        cls: The expected class.
        name: The parameter name used in error messages.

    Raises:
        TypeError: If ``value`` is not an instance of ``cls`` (including
            ``None``).
    """
    if not isinstance(value, cls):
        msg = f"{name} must be an instance of {cls.__qualname__}, got {value!r}"
        raise TypeError(msg)


def validate_failure_message(failure_message: Any) -> None:
    """Check that a failure message is a string or a zero-argument
    callable.

    Raises:
        TypeError: If ``failure_message`` is neither.
    """
    if not isinstance(failure_message, str) and not callable(failure_message):
        msg = f"failure_message must be a string or a callable, got {failure_message!r}"
        raise TypeError(msg)
