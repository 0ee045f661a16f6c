r"""Blocking sleep used between two attempts.

The waiting happens on the calling thread. An interruption of the
underlying sleep primitive (signaled by ``InterruptedError``) is turned
into ``PatientInterruptedError`` so that it unwinds the retry loop
instead of being counted as a failed attempt.

Example:
    Cancel a wait running in another thread:

    ```python
    import threading

    from apatience import FixedDelay, PatientWait
    from apatience.sleep import InterruptibleSleep

    sleep = InterruptibleSleep()
    wait = PatientWait(default_timeout=60.0, delay_factory=FixedDelay(1.0), sleep=sleep)
    worker = threading.Thread(target=wait.from_callable(is_ready).check)
    worker.start()
    sleep.interrupt()  # the worker raises PatientInterruptedError
    ```
"""

from __future__ import annotations

__all__ = ["MAX_SLEEP_SECONDS", "InterruptibleSleep", "Sleep"]

import logging
import threading
import time
from typing import TYPE_CHECKING

from apatience.core.validation import to_seconds
from apatience.exceptions import PatientInterruptedError

if TYPE_CHECKING:
    from collections.abc import Callable

    from apatience.core.validation import Duration

logger: logging.Logger = logging.getLogger(__name__)

# Largest timeout accepted by the blocking primitives of the threading module
MAX_SLEEP_SECONDS: float = threading.TIMEOUT_MAX


class Sleep:
    """Sleep for a duration using a blocking sleep function.

    Args:
        sleep_func: The function used to block the calling thread. It
            receives a strictly positive number of seconds and may raise
            ``InterruptedError`` when interrupted. Defaults to
            ``time.sleep``.

    Example:
        ```pycon
        >>> from apatience.sleep import Sleep
        >>> calls = []
        >>> sleep = Sleep(sleep_func=calls.append)
        >>> sleep.sleep_for(0)
        >>> sleep.sleep_for(0.5)
        >>> calls
        [0.5]

        ```
    """

    def __init__(self, sleep_func: Callable[[float], None] = time.sleep) -> None:
        self._sleep_func = sleep_func

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(sleep_func={self._sleep_func!r})"

    def sleep_for(self, duration: Duration) -> None:
        """Block the calling thread for at least the given duration.

        Args:
            duration: The duration in seconds or as a ``timedelta``.
                A zero duration returns immediately.

        Raises:
            TypeError: If ``duration`` is not a valid duration type.
            ValueError: If ``duration`` is negative.
            OverflowError: If ``duration`` is too large for the sleep
                primitive.
            PatientInterruptedError: If the sleep was interrupted.
        """
        seconds = to_seconds(duration)
        if seconds == 0:
            return
        if seconds > MAX_SLEEP_SECONDS:
            msg = (
                f"Cannot sleep for {seconds} seconds, the maximum supported duration "
                f"is {MAX_SLEEP_SECONDS} seconds"
            )
            raise OverflowError(msg)
        logger.debug(f"Sleeping for {seconds:.3f}s")
        try:
            self._sleep_func(seconds)
        except InterruptedError as exc:
            msg = f"Thread sleeping for [ {seconds}s ] was interrupted."
            raise PatientInterruptedError(msg) from exc


class InterruptibleSleep(Sleep):
    """Sleep that can be interrupted from another thread.

    The sleep waits on a ``threading.Event``. ``interrupt`` sets the
    event, which wakes up the sleeping thread and makes it raise
    ``PatientInterruptedError``. The event stays set afterwards so every
    following sleep is interrupted as well, until ``reset`` is called.

    Example:
        ```pycon
        >>> from apatience.exceptions import PatientInterruptedError
        >>> from apatience.sleep import InterruptibleSleep
        >>> sleep = InterruptibleSleep()
        >>> sleep.interrupt()
        >>> try:
        ...     sleep.sleep_for(10.0)
        ... except PatientInterruptedError:
        ...     print("interrupted")
        ...
        interrupted
        >>> sleep.interrupted
        True

        ```
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        super().__init__(sleep_func=self._wait)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(interrupted={self.interrupted})"

    @property
    def interrupted(self) -> bool:
        """``True`` if ``interrupt`` was called since the last
        ``reset``."""
        return self._event.is_set()

    def interrupt(self) -> None:
        """Interrupt the current and future sleeps."""
        self._event.set()

    def reset(self) -> None:
        """Clear the interruption flag."""
        self._event.clear()

    def _wait(self, seconds: float) -> None:
        if self._event.wait(timeout=seconds):
            msg = "sleep interrupted"
            raise InterruptedError(msg)
