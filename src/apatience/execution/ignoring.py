r"""Execution handlers turning selected exceptions into failed
attempts."""

from __future__ import annotations

__all__ = [
    "NEVER_IGNORED",
    "IgnoringAllExecutionHandler",
    "IgnoringExecutionHandler",
    "is_ignorable",
]

import logging
from typing import TYPE_CHECKING, TypeVar

from apatience.exceptions import PatientExecutionError, PatientInterruptedError
from apatience.execution.base import BaseExecutionHandler
from apatience.execution.outcome import ExecutionOutcome

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)

# Exceptions that are always fatal, even when a parent type is ignored
NEVER_IGNORED: tuple[type[BaseException], ...] = (MemoryError, PatientInterruptedError)


def is_ignorable(
    exc: BaseException,
    ignored: tuple[type[BaseException], ...],
    never_ignored: tuple[type[BaseException], ...] = NEVER_IGNORED,
) -> bool:
    """Decide whether an exception is converted into a failed attempt.

    An exception is ignorable if it is an instance of one of the
    ignored types (a subclass matches its parent) and not an instance of
    any never-ignored type. The never-ignored set always wins.

    Args:
        exc: The raised exception.
        ignored: The ignored exception types.
        never_ignored: The exception types that are always fatal.

    Returns:
        ``True`` if the exception should be ignored.

    Example:
        ```pycon
        >>> from apatience.execution import is_ignorable
        >>> is_ignorable(KeyError("k"), (LookupError,))
        True
        >>> is_ignorable(MemoryError(), (Exception,))
        False

        ```
    """
    return isinstance(exc, ignored) and not isinstance(exc, never_ignored)


def _as_exception_types(
    value: type[BaseException] | tuple[type[BaseException], ...],
) -> tuple[type[BaseException], ...]:
    if isinstance(value, type):
        return (value,)
    try:
        return tuple(value)
    except TypeError:
        msg = f"Expected an exception type, got {value!r}"
        raise TypeError(msg) from None


def _describe_exception(exc: BaseException) -> str:
    return f"Ignored exception -> {exc!r}"


class IgnoringExecutionHandler(BaseExecutionHandler):
    """Execution handler ignoring the given exception types.

    An exception of an ignored type (or of one of its subclasses)
    becomes a failed attempt. Any other exception aborts the wait with a
    ``PatientExecutionError``.

    Args:
        *ignored_types: The exception types to ignore. At least one is
            required.
        never_ignored: The exception type or types that are never
            ignored. Defaults to ``NEVER_IGNORED``.

    Raises:
        ValueError: If no exception type is given.
        TypeError: If an argument is not an exception type.

    Example:
        ```pycon
        >>> from apatience.execution import IgnoringExecutionHandler, default_filter
        >>> def operation():
        ...     raise KeyError("missing")
        ...
        >>> handler = IgnoringExecutionHandler(LookupError)
        >>> handler.execute(operation, default_filter).description
        "Ignored exception -> KeyError('missing')"

        ```
    """

    def __init__(
        self,
        *ignored_types: type[Exception],
        never_ignored: type[BaseException] | tuple[type[BaseException], ...] = NEVER_IGNORED,
    ) -> None:
        if not ignored_types:
            msg = "At least one exception type to ignore is required"
            raise ValueError(msg)
        never_ignored = _as_exception_types(never_ignored)
        for exc_type in (*ignored_types, *never_ignored):
            if not (isinstance(exc_type, type) and issubclass(exc_type, BaseException)):
                msg = f"Expected an exception type, got {exc_type!r}"
                raise TypeError(msg)
        self.ignored_types: tuple[type[Exception], ...] = tuple(dict.fromkeys(ignored_types))
        self.never_ignored = never_ignored

    def __repr__(self) -> str:
        names = ", ".join(t.__qualname__ for t in self.ignored_types)
        return f"{self.__class__.__qualname__}({names})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (set(self.ignored_types), set(self.never_ignored)) == (
            set(other.ignored_types),
            set(other.never_ignored),
        )

    def __hash__(self) -> int:
        return hash((self.__class__, frozenset(self.ignored_types), frozenset(self.never_ignored)))

    def execute(self, operation: Callable[[], T], filter: Callable[[T], bool]) -> ExecutionOutcome[T]:  # noqa: A002
        self._validate_arguments(operation, filter)
        try:
            return self._evaluate(operation, filter)
        except Exception as exc:
            if is_ignorable(exc, self.ignored_types, self.never_ignored):
                logger.debug(f"Ignoring {type(exc).__name__}: {exc}")
                return ExecutionOutcome.failed(_describe_exception(exc))
            if isinstance(exc, PatientInterruptedError):
                raise
            msg = "Unexpected exception caught while waiting patiently."
            raise PatientExecutionError(msg) from exc


class IgnoringAllExecutionHandler(IgnoringExecutionHandler):
    """Execution handler ignoring every ``Exception`` except the
    never-ignored ones.

    Args:
        never_ignored: The exception type or types that are never
            ignored. Defaults to ``NEVER_IGNORED``.
    """

    def __init__(
        self, never_ignored: type[BaseException] | tuple[type[BaseException], ...] = NEVER_IGNORED
    ) -> None:
        super().__init__(Exception, never_ignored=never_ignored)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"
