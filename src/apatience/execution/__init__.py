r"""Execution handlers performing a single attempt.

An execution handler invokes the operation once, applies the filter to
the produced value, and decides whether a raised exception is a failed
attempt or a fatal error.
"""

from __future__ import annotations

__all__ = [
    "NEVER_IGNORED",
    "BaseExecutionHandler",
    "ExecutionOutcome",
    "IgnoringAllExecutionHandler",
    "IgnoringExecutionHandler",
    "SimpleExecutionHandler",
    "default_filter",
    "describe_value",
    "is_ignorable",
]

from apatience.execution.base import BaseExecutionHandler, default_filter, describe_value
from apatience.execution.ignoring import (
    NEVER_IGNORED,
    IgnoringAllExecutionHandler,
    IgnoringExecutionHandler,
    is_ignorable,
)
from apatience.execution.outcome import ExecutionOutcome
from apatience.execution.simple import SimpleExecutionHandler
