r"""Abstract base class for delay factories."""

from __future__ import annotations

__all__ = ["BaseDelayFactory"]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class BaseDelayFactory(ABC):
    """Abstract base class for delay factories.

    A delay factory is immutable and can be shared by any number of
    waits. Every wait calls ``create`` once to get its own delay
    generator, so the position in the delay sequence never leaks from
    one wait to another.
    """

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Calculate the delay after a given failed attempt.

        Args:
            attempt: The failed attempt number (0-indexed). For example,
                attempt=0 is the delay slept after the first failed
                attempt.

        Returns:
            The delay in seconds. Must be non-negative.
        """

    def create(self) -> Iterator[float]:
        """Create a new delay generator.

        Returns:
            An iterator producing ``calculate(0)``, ``calculate(1)``, ...
            Each call returns an independent iterator.
        """
        return self._generate()

    def _generate(self) -> Iterator[float]:
        attempt = 0
        while True:
            yield self.calculate(attempt)
            attempt += 1
