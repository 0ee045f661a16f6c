r"""Execution handler that never ignores an exception."""

from __future__ import annotations

__all__ = ["SimpleExecutionHandler"]

import logging
from typing import TYPE_CHECKING, TypeVar

from apatience.exceptions import PatientExecutionError, PatientInterruptedError
from apatience.execution.base import BaseExecutionHandler

if TYPE_CHECKING:
    from collections.abc import Callable

    from apatience.execution.outcome import ExecutionOutcome

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class SimpleExecutionHandler(BaseExecutionHandler):
    """Execution handler treating every exception as fatal.

    This is the default handler. Any exception raised by the operation
    or the filter aborts the wait with a ``PatientExecutionError``.

    Example:
        ```pycon
        >>> from apatience.execution import SimpleExecutionHandler, default_filter
        >>> handler = SimpleExecutionHandler()
        >>> handler.execute(lambda: None, default_filter).description
        'None'

        ```
    """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self)

    def __hash__(self) -> int:
        return hash(self.__class__)

    def execute(self, operation: Callable[[], T], filter: Callable[[T], bool]) -> ExecutionOutcome[T]:  # noqa: A002
        self._validate_arguments(operation, filter)
        try:
            return self._evaluate(operation, filter)
        except PatientInterruptedError:
            raise
        except Exception as exc:
            logger.debug(f"Execution raised {type(exc).__name__}: {exc}")
            msg = "Unexpected exception caught while waiting patiently."
            raise PatientExecutionError(msg) from exc
