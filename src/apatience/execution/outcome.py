r"""Result of a single execution attempt."""

from __future__ import annotations

__all__ = ["ExecutionOutcome"]

from dataclasses import dataclass
from typing import Generic, TypeVar

from apatience.exceptions import PatientContractError

T = TypeVar("T")


@dataclass(frozen=True)
class ExecutionOutcome(Generic[T]):
    """Result of one attempt: an accepted value or the description of
    why the attempt failed.

    Use ``ExecutionOutcome.passed`` and ``ExecutionOutcome.failed`` to
    create instances.

    Attributes:
        success: ``True`` if the attempt produced an accepted value.

    Example:
        ```pycon
        >>> from apatience.execution import ExecutionOutcome
        >>> outcome = ExecutionOutcome.passed(42)
        >>> outcome.success, outcome.value
        (True, 42)
        >>> outcome = ExecutionOutcome.failed("None")
        >>> outcome.success, outcome.description
        (False, 'None')

        ```
    """

    success: bool
    _value: T | None = None
    _description: str | None = None

    def __post_init__(self) -> None:
        if self.success and self._description is not None:
            msg = "A passing outcome cannot have a failure description"
            raise ValueError(msg)
        if not self.success:
            if not isinstance(self._description, str):
                msg = f"A failing outcome needs a string description, got {self._description!r}"
                raise TypeError(msg)
            if self._value is not None:
                msg = "A failing outcome cannot have a value"
                raise ValueError(msg)

    @property
    def value(self) -> T:
        """The accepted value.

        Raises:
            PatientContractError: If the outcome is a failure.
        """
        if not self.success:
            msg = "Cannot get a value from a failed outcome"
            raise PatientContractError(msg)
        return self._value

    @property
    def description(self) -> str:
        """The description of the failed attempt.

        Raises:
            PatientContractError: If the outcome is a success.
        """
        if self.success:
            msg = "Cannot get a failure description from a passing outcome"
            raise PatientContractError(msg)
        return self._description

    @classmethod
    def passed(cls, value: T) -> ExecutionOutcome[T]:
        """Create a passing outcome.

        Args:
            value: The accepted value. May be ``None`` if the filter
                accepted it.
        """
        return cls(success=True, _value=value)

    @classmethod
    def failed(cls, description: str) -> ExecutionOutcome[T]:
        """Create a failing outcome.

        Args:
            description: Why the attempt failed.

        Raises:
            TypeError: If ``description`` is not a string.
        """
        return cls(success=False, _description=description)
