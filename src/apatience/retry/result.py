r"""Aggregate outcome of a complete wait."""

from __future__ import annotations

__all__ = ["PatientResult"]

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from apatience.exceptions import PatientContractError

if TYPE_CHECKING:
    from collections.abc import Iterable

T = TypeVar("T")


@dataclass(frozen=True)
class PatientResult(Generic[T]):
    """Outcome of a wait: the accepted value, or the descriptions of all
    the failed attempts when the bound was exhausted.

    Attributes:
        success: ``True`` if a value was accepted.

    Example:
        ```pycon
        >>> from apatience.retry import PatientResult
        >>> PatientResult.passed("x").value
        'x'
        >>> PatientResult.exhausted(["None", "False"]).descriptions
        ('None', 'False')

        ```
    """

    success: bool
    _value: T | None = None
    _descriptions: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.success and self._descriptions:
            msg = "A successful result cannot have failed attempt descriptions"
            raise ValueError(msg)
        if not self.success and not self._descriptions:
            msg = "An exhausted result needs at least one failed attempt description"
            raise ValueError(msg)

    @property
    def value(self) -> T:
        """The accepted value.

        Raises:
            PatientContractError: If the wait was exhausted.
        """
        if not self.success:
            msg = "Cannot get the value of an exhausted result"
            raise PatientContractError(msg)
        return self._value

    @property
    def descriptions(self) -> tuple[str, ...]:
        """The failed attempt descriptions, in invocation order.

        Raises:
            PatientContractError: If the wait succeeded.
        """
        if self.success:
            msg = "Cannot get failed attempt descriptions from a successful result"
            raise PatientContractError(msg)
        return self._descriptions

    @classmethod
    def passed(cls, value: T) -> PatientResult[T]:
        return cls(success=True, _value=value)

    @classmethod
    def exhausted(cls, descriptions: Iterable[str]) -> PatientResult[T]:
        return cls(success=False, _descriptions=tuple(descriptions))
