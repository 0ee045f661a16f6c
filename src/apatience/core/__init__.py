r"""Core shared configuration defaults and validation helpers."""

from __future__ import annotations

__all__ = [
    "DEFAULT_DELAY",
    "DEFAULT_HTTP_POLL_INTERVAL",
    "DEFAULT_HTTP_TIMEOUT",
    "DEFAULT_INITIAL_DELAY",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_RETRY_FAILURE_MESSAGE",
    "DEFAULT_TIMEOUT",
    "DEFAULT_WAIT_FAILURE_MESSAGE",
    "Duration",
    "to_seconds",
    "validate_callable",
    "validate_failure_message",
    "validate_instance",
    "validate_max_retries",
]

from apatience.core.config import (
    DEFAULT_DELAY,
    DEFAULT_HTTP_POLL_INTERVAL,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_INITIAL_DELAY,
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_FAILURE_MESSAGE,
    DEFAULT_TIMEOUT,
    DEFAULT_WAIT_FAILURE_MESSAGE,
)
from apatience.core.validation import (
    Duration,
    to_seconds,
    validate_callable,
    validate_failure_message,
    validate_instance,
    validate_max_retries,
)
