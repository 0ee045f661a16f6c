r"""Abstract base class for execution handlers and shared helpers."""

from __future__ import annotations

__all__ = ["BaseExecutionHandler", "default_filter", "describe_value"]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, TypeVar

from apatience.core.validation import validate_callable
from apatience.execution.outcome import ExecutionOutcome

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")


def default_filter(value: Any) -> bool:
    """Accept every value that is not ``None`` and not ``False``.

    Args:
        value: The value to test.

    Returns:
        ``True`` if the value is usable.

    Example:
        ```pycon
        >>> from apatience.execution import default_filter
        >>> default_filter("x"), default_filter(0), default_filter(True)
        (True, True, True)
        >>> default_filter(None), default_filter(False)
        (False, False)

        ```
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def describe_value(value: Any) -> str:
    """Return a human-readable description of a rejected value."""
    return repr(value)


class BaseExecutionHandler(ABC):
    """Abstract base class for execution handlers.

    An execution handler performs exactly one attempt: it invokes the
    operation once, tests the produced value with the filter, and
    decides what happens to an exception raised along the way.
    """

    @abstractmethod
    def execute(self, operation: Callable[[], T], filter: Callable[[T], bool]) -> ExecutionOutcome[T]:  # noqa: A002
        """Run one attempt.

        Args:
            operation: The zero-argument callable producing a value.
            filter: The predicate accepting or rejecting the value.

        Returns:
            The outcome of the attempt.

        Raises:
            PatientExecutionError: If the operation or the filter raised
                an exception that is not handled as a failed attempt.
        """

    def _evaluate(self, operation: Callable[[], T], filter: Callable[[T], bool]) -> ExecutionOutcome[T]:  # noqa: A002
        value = operation()
        if filter(value):
            return ExecutionOutcome.passed(value)
        return ExecutionOutcome.failed(describe_value(value))

    @staticmethod
    def _validate_arguments(operation: Any, filter: Any) -> None:  # noqa: A002
        validate_callable(operation, "operation")
        validate_callable(filter, "filter")
