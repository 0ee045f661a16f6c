r"""Default values shared by the configuration objects.

A zero timeout or a zero number of retries means that the operation is
attempted exactly once.
"""

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
]

# Seconds to sleep before the first attempt
DEFAULT_INITIAL_DELAY = 0.0

# Default maximum wall-clock time of a wait, in seconds
DEFAULT_TIMEOUT = 0.0

# Default number of retries of a count-bound retry
# Total attempts = max_retries + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 0

# Default fixed delay between two attempts, in seconds
DEFAULT_DELAY = 0.0

DEFAULT_WAIT_FAILURE_MESSAGE = "Didn't receive a valid result within the given timeout"

DEFAULT_RETRY_FAILURE_MESSAGE = "Didn't receive a valid result within the given number of retries"

# Defaults used by the HTTP readiness helpers
DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_HTTP_POLL_INTERVAL = 1.0
