r"""Exception hierarchy for patient waits and retries.

Every error raised by the library derives from ``PatientError``. The
``kind`` attribute classifies an error without relying on the class
hierarchy, which is convenient for callers that only need to know if a
failure was expected (exhaustion) or a programming/environment error.

Precondition violations (negative durations, negative retry counts,
non-callable operations, ...) are reported with the built-in
``ValueError`` and ``TypeError`` and are never wrapped.
"""

from __future__ import annotations

__all__ = [
    "ErrorKind",
    "PatientContractError",
    "PatientError",
    "PatientExecutionError",
    "PatientInterruptedError",
    "PatientRetryError",
    "PatientTimeoutError",
    "RepeatedAttemptsError",
]

from enum import Enum
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from collections.abc import Iterable


class ErrorKind(Enum):
    """Classification of the errors raised by the library.

    Attributes:
        EXECUTION_FAULT: The operation or the filter raised an exception
            that was not ignored.
        INTERRUPTION: A sleep between attempts was interrupted.
        INTERNAL_CONTRACT: A collaborator (delay factory, delay generator,
            execution handler) broke its contract.
        EXHAUSTION: The bound was reached without an accepted value.
    """

    EXECUTION_FAULT = "execution_fault"
    INTERRUPTION = "interruption"
    INTERNAL_CONTRACT = "internal_contract"
    EXHAUSTION = "exhaustion"


class PatientError(RuntimeError):
    """Base class of all the errors raised by apatience.

    Example:
        ```pycon
        >>> from apatience.exceptions import PatientError
        >>> raise PatientError("something went wrong")
        Traceback (most recent call last):
            ...
        apatience.exceptions.PatientError: something went wrong

        ```
    """

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL_CONTRACT


class PatientContractError(PatientError):
    """Raised when a collaborator returns an invalid value.

    This signals a bug in a delay factory or an execution handler, not a
    transient condition, so it is never retried.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL_CONTRACT


class PatientExecutionError(PatientError):
    """Raised when the operation or the filter raised a non-ignored
    exception.

    The original exception is available as ``__cause__``.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.EXECUTION_FAULT


class PatientInterruptedError(PatientError):
    """Raised when a sleep between two attempts is interrupted."""

    kind: ClassVar[ErrorKind] = ErrorKind.INTERRUPTION


class RepeatedAttemptsError(PatientError):
    """Base class for the errors raised when a bound is exhausted.

    Args:
        message: The failure message.
        failed_attempts_descriptions: The descriptions of every failed
            attempt, in invocation order. Must not be empty.

    Raises:
        ValueError: If ``failed_attempts_descriptions`` is empty.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.EXHAUSTION

    def __init__(self, message: str, failed_attempts_descriptions: Iterable[str]) -> None:
        if failed_attempts_descriptions is None:
            msg = "failed_attempts_descriptions must not be None"
            raise TypeError(msg)
        descriptions = tuple(failed_attempts_descriptions)
        if not descriptions:
            msg = "failed_attempts_descriptions must not be empty"
            raise ValueError(msg)
        super().__init__(message)
        self.message = message
        self._failed_attempts_descriptions = descriptions

    @property
    def failed_attempts_count(self) -> int:
        """The number of failed attempts."""
        return len(self._failed_attempts_descriptions)

    @property
    def failed_attempts_descriptions(self) -> tuple[str, ...]:
        """The descriptions of the failed attempts, in invocation
        order."""
        return self._failed_attempts_descriptions

    def __str__(self) -> str:
        return f"{self.message} (failed attempts: {self.failed_attempts_count})"


class PatientTimeoutError(RepeatedAttemptsError):
    """Raised when a timeout-bound wait ends without an accepted value.

    Example:
        ```pycon
        >>> from apatience.exceptions import PatientTimeoutError
        >>> error = PatientTimeoutError("not ready", ["None", "False"])
        >>> error.failed_attempts_count
        2
        >>> error.failed_attempts_descriptions
        ('None', 'False')

        ```
    """


class PatientRetryError(RepeatedAttemptsError):
    """Raised when a count-bound retry ends without an accepted
    value."""
