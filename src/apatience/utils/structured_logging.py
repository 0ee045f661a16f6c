r"""Structured logging utilities for machine-readable wait logs.

The library logs at debug level through standard ``logging`` loggers
named after their modules. This module is opt-in: attach
``StructuredFormatter`` to a handler to get one JSON object per record,
including the ``attempt``, ``wait_time`` and ``failure_description``
fields emitted by the retry engine and the correlation id of the
current context.

Example:
    Emit JSON lines for every wait of a deployment check:

    ```python
    import logging

    from apatience import wait_until
    from apatience.utils.structured_logging import (
        StructuredFormatter,
        clear_correlation_id,
        set_correlation_id,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger("apatience")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    set_correlation_id("deploy-42")
    try:
        wait_until(service_is_up, timeout=60.0, delay=2.0)
    finally:
        clear_correlation_id()
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

import contextvars
import json
import logging
import time
from typing import Any

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "apatience_correlation_id", default=None
)

# Attributes present on every LogRecord, anything else came from ``extra``
_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def get_correlation_id() -> str | None:
    """Get the correlation ID of the current context.

    Returns:
        The correlation ID, or ``None`` when none is set.

    Example:
        ```pycon
        >>> from apatience.utils.structured_logging import (
        ...     clear_correlation_id,
        ...     get_correlation_id,
        ...     set_correlation_id,
        ... )
        >>> set_correlation_id("wait-123")
        >>> get_correlation_id()
        'wait-123'
        >>> clear_correlation_id()

        ```
    """
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Attach a correlation ID to the current context.

    The value lives in a context variable, so concurrent waits running
    in different threads keep their own id.

    Args:
        correlation_id: The correlation ID to set (e.g., a job or trace
            id).
    """
    _correlation_id.set(correlation_id)


def clear_correlation_id() -> None:
    """Clear the correlation ID for the current context."""
    _correlation_id.set(None)


class StructuredFormatter(logging.Formatter):
    """Formatter rendering every record as one JSON object.

    Fields always present in the output:
        - timestamp: ISO 8601 UTC timestamp with milliseconds
        - level: Log level name
        - logger: Logger name
        - message: Log message
        - module, function, line: Where the record was emitted
        - thread: Thread name
        - correlation_id: Present when set in the current context
        - exception: Present when the record carries exception info

    Fields passed through the ``extra`` argument of the logging call are
    added as they are; values that are not JSON serializable are
    rendered with ``repr``.

    Example:
        ```pycon
        >>> import json
        >>> import logging
        >>> from io import StringIO
        >>> from apatience.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("doc_structured_formatter")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("Attempt failed", extra={"attempt": 2})
        >>> record = json.loads(stream.getvalue())
        >>> record["message"], record["attempt"]
        ('Attempt failed', 2)

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "thread": record.threadName,
        }

        correlation_id = get_correlation_id()
        if correlation_id is not None:
            log_data["correlation_id"] = correlation_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value

        return json.dumps(log_data, default=repr)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format the record timestamp as ISO 8601 (``datefmt`` is
        ignored)."""
        timestamp = time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
        return f"{timestamp}.{int(record.msecs):03d}Z"


def log_structured(logger: logging.Logger, level: int, message: str, **extra: Any) -> None:
    """Log a message with structured fields.

    The fields are attached to the record and show up in the output of
    ``StructuredFormatter``. Nothing is built when the level is
    disabled.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.DEBUG).
        message: Log message.
        **extra: Fields attached to the record.
    """
    if logger.isEnabledFor(level):
        logger.log(level, message, extra=extra)
