r"""Retry package running bounded waits.

Public API:
    - RetryExecutor: The bounded wait loop
    - TimeoutBound / MaxRetriesBound: Stopping conditions
    - DeadlineDecider / AttemptsDecider: Per-wait retry decisions
    - PatientResult: Aggregate outcome of a wait
    - CallbackConfig / CallbackManager: Lifecycle callbacks
"""

from __future__ import annotations

__all__ = [
    "AttemptsDecider",
    "BaseBound",
    "BaseRetryDecider",
    "CallbackConfig",
    "CallbackManager",
    "DeadlineDecider",
    "MaxRetriesBound",
    "PatientResult",
    "RetryExecutor",
    "TimeoutBound",
]

from apatience.retry.bound import BaseBound, MaxRetriesBound, TimeoutBound
from apatience.retry.config import CallbackConfig
from apatience.retry.decider import AttemptsDecider, BaseRetryDecider, DeadlineDecider
from apatience.retry.executor import RetryExecutor
from apatience.retry.manager import CallbackManager
from apatience.retry.result import PatientResult
