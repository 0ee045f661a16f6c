r"""Readiness helpers waiting for an HTTP endpoint with httpx.

This module builds operations and filters on top of ``httpx`` so an
HTTP endpoint can be polled with the patient wait machinery, for
example to wait until a freshly started service answers its health
check.
"""

from __future__ import annotations

__all__ = ["default_http_wait", "http_operation", "status_in", "wait_for_http"]

import logging
from typing import TYPE_CHECKING, Any

import httpx

from apatience.core.config import DEFAULT_HTTP_POLL_INTERVAL, DEFAULT_HTTP_TIMEOUT
from apatience.delays.fixed import FixedDelay
from apatience.execution.ignoring import IgnoringExecutionHandler
from apatience.wait import PatientWait

if TYPE_CHECKING:
    from collections.abc import Callable

    from apatience.core.validation import Duration

logger: logging.Logger = logging.getLogger(__name__)


def http_operation(
    client: httpx.Client, method: str, url: str, **kwargs: Any
) -> Callable[[], httpx.Response]:
    """Return an operation sending one HTTP request per call.

    Args:
        client: The client sending the requests.
        method: The HTTP method.
        url: The URL to request.
        **kwargs: Additional keyword arguments passed to
            ``client.request``.

    Returns:
        A zero-argument callable returning the response.
    """

    def operation() -> httpx.Response:
        logger.debug(f"{method} request to {url}")
        return client.request(method, url, **kwargs)

    return operation


def status_in(*status_codes: int) -> Callable[[httpx.Response], bool]:
    """Return a filter accepting responses by status code.

    Args:
        *status_codes: The accepted status codes. Without codes, every
            2xx response is accepted.

    Returns:
        The filter.

    Example:
        ```pycon
        >>> import httpx
        >>> from apatience.http import status_in
        >>> status_in()(httpx.Response(204))
        True
        >>> status_in(200, 404)(httpx.Response(404))
        True
        >>> status_in(200)(httpx.Response(503))
        False

        ```
    """
    if not status_codes:
        return lambda response: response.is_success
    accepted = frozenset(status_codes)
    return lambda response: response.status_code in accepted


def default_http_wait() -> PatientWait:
    """Return the wait used by ``wait_for_http`` when none is given.

    It waits up to ``DEFAULT_HTTP_TIMEOUT`` seconds, polls every
    ``DEFAULT_HTTP_POLL_INTERVAL`` seconds, and treats transport errors
    (connection refused, read timeout, ...) as failed attempts.
    """
    return PatientWait(
        default_timeout=DEFAULT_HTTP_TIMEOUT,
        delay_factory=FixedDelay(DEFAULT_HTTP_POLL_INTERVAL),
        execution_handler=IgnoringExecutionHandler(httpx.TransportError),
    )


def wait_for_http(
    url: str,
    *,
    method: str = "GET",
    client: httpx.Client | None = None,
    accept: Callable[[httpx.Response], bool] | None = None,
    timeout: Duration | None = None,
    wait: PatientWait | None = None,
    **kwargs: Any,
) -> httpx.Response:
    """Poll an HTTP endpoint until a response is accepted.

    Args:
        url: The URL to poll.
        method: The HTTP method.
        client: Optional client sending the requests. If ``None``, a
            client is created and closed before returning.
        accept: The filter accepting responses. Defaults to accepting
            2xx responses.
        timeout: Optional timeout overriding the one of ``wait``.
        wait: The wait configuration. Defaults to
            ``default_http_wait()``.
        **kwargs: Additional keyword arguments passed to
            ``client.request``.

    Returns:
        The first accepted response.

    Raises:
        PatientTimeoutError: If no response was accepted in time.
        PatientExecutionError: If a request raised an error that the
            wait does not ignore.
    """
    wait = wait or default_http_wait()
    accept = accept or status_in()
    if client is not None:
        future = wait.from_callable(http_operation(client, method, url, **kwargs), accept)
        return future.get(timeout)
    with httpx.Client() as owned_client:
        future = wait.from_callable(http_operation(owned_client, method, url, **kwargs), accept)
        return future.get(timeout)
