r"""apatience - Wait patiently for an operation to produce a usable value.

This package repeatedly invokes a zero-argument operation until a filter
accepts the value it produced, sleeping between attempts according to a
delay strategy and stopping once a timeout or a number of retries is
exhausted.

Key Features:
    - Timeout-bound waits (``PatientWait``) and count-bound retries
      (``PatientRetry``) sharing one engine
    - Fixed and exponential delays, or any custom ``BaseDelayFactory``
    - Execution handlers deciding which exceptions are failed attempts
      and which abort the wait
    - Lazy failure messages with the description of every failed attempt
    - Callback system for observability (logging, metrics, alerting)
    - Interruptible sleeps for cooperative cancellation
    - HTTP readiness helpers built on httpx

Example:
    ```pycon
    >>> from apatience import ExponentialDelay, PatientWait
    >>> values = iter([None, None, "ready"])
    >>> wait = PatientWait(
    ...     default_timeout=10.0,
    ...     delay_factory=ExponentialDelay(base=2, initial_delay=0.01),
    ... )
    >>> wait.from_callable(lambda: next(values)).get()
    'ready'
    >>> from apatience import wait_for_http
    >>> response = wait_for_http("http://localhost:8080/health", timeout=60)  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "ExponentialDelay",
    "FixedDelay",
    "IgnoringAllExecutionHandler",
    "IgnoringExecutionHandler",
    "InterruptibleSleep",
    "PatientContractError",
    "PatientError",
    "PatientExecutionError",
    "PatientInterruptedError",
    "PatientRetry",
    "PatientRetryError",
    "PatientRetryFuture",
    "PatientTimeoutError",
    "PatientWait",
    "PatientWaitFuture",
    "RepeatedAttemptsError",
    "SimpleExecutionHandler",
    "Sleep",
    "__version__",
    "retry_until",
    "wait_for_http",
    "wait_until",
]

from importlib.metadata import PackageNotFoundError, version

from apatience.delays import ExponentialDelay, FixedDelay
from apatience.exceptions import (
    PatientContractError,
    PatientError,
    PatientExecutionError,
    PatientInterruptedError,
    PatientRetryError,
    PatientTimeoutError,
    RepeatedAttemptsError,
)
from apatience.execution import (
    IgnoringAllExecutionHandler,
    IgnoringExecutionHandler,
    SimpleExecutionHandler,
)
from apatience.future import PatientRetryFuture, PatientWaitFuture
from apatience.http import wait_for_http
from apatience.retrying import PatientRetry, retry_until
from apatience.sleep import InterruptibleSleep, Sleep
from apatience.wait import PatientWait, wait_until

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
