"""Public send operations.

Each operation resolves its own configuration, builds and validates its own
:class:`Email`, and issues one POST to ``/v1/send-email``. The result is a
:class:`PoodleResponse` or a :class:`PoodleError`; nothing on the HTTP path
raises. Configuration and local validation failures are returned as
``validation_error`` results unless ``raise_on_invalid=True``, in which case
:class:`ConfigurationError` / :class:`InvalidEmailError` propagate.

The ``*_async`` variants run the same call on the shared worker pool and
return a :class:`concurrent.futures.Future`; :func:`await_many` collects
several of them.

Example:
    >>> result = send(  # doctest: +SKIP
    ...     "sender@yourdomain.com",
    ...     "recipient@example.com",
    ...     "Hello from Poodle!",
    ...     html="<h1>Welcome!</h1>",
    ...     config={"api_key": "your_api_key"},
    ... )
    >>> result.ok  # doctest: +SKIP
    True
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from concurrent.futures import Future, wait
from typing import Any, Union

import httpx

from .adapters.config.loader import load_app_settings
from .adapters.config.resolver import PoodleConfig, resolve_config
from .adapters.http.pipeline import SEND_EMAIL_PATH, post
from .adapters.http.pool import get_executor
from .domain.email import Email, serialize_email, validate_email
from .domain.enums import ErrorKind
from .domain.errors import ConfigurationError, InvalidEmailError
from .domain.results import PoodleError, SendResult

logger = logging.getLogger(__name__)

ConfigSource = Union[PoodleConfig, Mapping[str, Any], None]
"""A resolved config, a mapping of explicit options, or None for defaults."""


def _resolve(config: ConfigSource, settings: Mapping[str, Any] | None) -> PoodleConfig:
    if isinstance(config, PoodleConfig):
        return config
    app_settings = settings if settings is not None else load_app_settings()
    return resolve_config(config, settings=app_settings)


def _local_failure(exc: Exception, source: str) -> PoodleError:
    return PoodleError(kind=ErrorKind.VALIDATION_ERROR, message=str(exc), details={"source": source})


def send_email(
    email: Email,
    config: ConfigSource = None,
    *,
    settings: Mapping[str, Any] | None = None,
    http_client: httpx.Client | None = None,
    raise_on_invalid: bool = False,
) -> SendResult:
    """Send a prebuilt :class:`Email`.

    Args:
        email: Payload to send; validated before any network call.
        config: PoodleConfig, mapping of explicit options, or None.
        settings: Application settings layer. Loaded from the layered
            configuration when None.
        http_client: httpx client to send through. Defaults to the shared pool.
        raise_on_invalid: Raise instead of returning a result for
            configuration and local validation failures.

    Returns:
        PoodleResponse on acceptance, otherwise PoodleError.

    Raises:
        ConfigurationError: Only with ``raise_on_invalid=True``.
        InvalidEmailError: Only with ``raise_on_invalid=True``.
    """
    try:
        resolved = _resolve(config, settings)
    except ConfigurationError as exc:
        if raise_on_invalid:
            raise
        logger.warning("Invalid client configuration", extra={"error": str(exc)})
        return _local_failure(exc, "configuration")

    try:
        validate_email(email)
    except InvalidEmailError as exc:
        if raise_on_invalid:
            raise
        logger.warning("Invalid email", extra={"error": str(exc), "recipient": email.to})
        return _local_failure(exc, "email")

    logger.info(
        "Sending email",
        extra={
            "sender": email.from_address,
            "recipient": email.to,
            "subject": email.subject,
            "has_html": email.html is not None,
            "has_text": email.text is not None,
        },
    )
    result = post(resolved, SEND_EMAIL_PATH, serialize_email(email), client=http_client)

    if isinstance(result, PoodleError):
        logger.warning(
            "Email send failed",
            extra={"recipient": email.to, "kind": result.kind.value, "status_code": result.status_code},
        )
    else:
        logger.info("Email accepted", extra={"recipient": email.to, "remaining": result.rate_limit.remaining})
    return result


def send(
    from_address: str,
    to: str,
    subject: str,
    *,
    html: str | None = None,
    text: str | None = None,
    config: ConfigSource = None,
    settings: Mapping[str, Any] | None = None,
    http_client: httpx.Client | None = None,
    raise_on_invalid: bool = False,
) -> SendResult:
    """Send an email with HTML and/or text content.

    See :func:`send_email` for the shared arguments and failure handling.
    """
    email = Email(from_address=from_address, to=to, subject=subject, html=html, text=text)
    return send_email(
        email,
        config,
        settings=settings,
        http_client=http_client,
        raise_on_invalid=raise_on_invalid,
    )


def send_html(
    from_address: str,
    to: str,
    subject: str,
    html: str,
    *,
    config: ConfigSource = None,
    settings: Mapping[str, Any] | None = None,
    http_client: httpx.Client | None = None,
    raise_on_invalid: bool = False,
) -> SendResult:
    """Send an HTML-only email."""
    return send(
        from_address,
        to,
        subject,
        html=html,
        config=config,
        settings=settings,
        http_client=http_client,
        raise_on_invalid=raise_on_invalid,
    )


def send_text(
    from_address: str,
    to: str,
    subject: str,
    text: str,
    *,
    config: ConfigSource = None,
    settings: Mapping[str, Any] | None = None,
    http_client: httpx.Client | None = None,
    raise_on_invalid: bool = False,
) -> SendResult:
    """Send a plain-text email."""
    return send(
        from_address,
        to,
        subject,
        text=text,
        config=config,
        settings=settings,
        http_client=http_client,
        raise_on_invalid=raise_on_invalid,
    )


def send_async(from_address: str, to: str, subject: str, **kwargs: Any) -> Future[SendResult]:
    """Run :func:`send` on the shared worker pool and return its future."""
    return get_executor().submit(send, from_address, to, subject, **kwargs)


def send_html_async(from_address: str, to: str, subject: str, html: str, **kwargs: Any) -> Future[SendResult]:
    """Run :func:`send_html` on the shared worker pool and return its future."""
    return get_executor().submit(send_html, from_address, to, subject, html, **kwargs)


def send_text_async(from_address: str, to: str, subject: str, text: str, **kwargs: Any) -> Future[SendResult]:
    """Run :func:`send_text` on the shared worker pool and return its future."""
    return get_executor().submit(send_text, from_address, to, subject, text, **kwargs)


def send_email_async(email: Email, config: ConfigSource = None, **kwargs: Any) -> Future[SendResult]:
    """Run :func:`send_email` on the shared worker pool and return its future."""
    return get_executor().submit(send_email, email, config, **kwargs)


def _collect(future: Future[SendResult]) -> SendResult:
    """Return the result of a finished handle, turning a raised exception into an error value."""
    if future.cancelled():
        return PoodleError(kind=ErrorKind.NETWORK_ERROR, message="Send was cancelled")
    exc = future.exception()
    if exc is None:
        return future.result()
    if isinstance(exc, ConfigurationError):
        return _local_failure(exc, "configuration")
    if isinstance(exc, InvalidEmailError):
        return _local_failure(exc, "email")
    logger.warning("Async send raised %s", type(exc).__name__, exc_info=exc)
    return PoodleError(
        kind=ErrorKind.NETWORK_ERROR,
        message=f"Send failed: {exc!r}",
        details={"reason": exc},
    )


def await_many(futures: Iterable[Future[SendResult]], timeout: float | None = None) -> list[SendResult]:
    """Wait for several async sends and return their results in input order.

    Each handle resolves on its own: one failed send does not affect the
    others. A handle whose call raised (for example with
    ``raise_on_invalid=True``) resolves to an error value: configuration and
    email errors become ``validation_error``, anything else
    ``network_error`` with the exception in ``details["reason"]``.

    Handles still running when *timeout* (seconds) elapses resolve to a
    ``timeout`` error; their requests keep running in the background until
    they finish or hit their own transport timeout.

    Args:
        futures: Handles returned by the ``*_async`` functions.
        timeout: Overall wait budget in seconds. None waits indefinitely.

    Returns:
        One result per handle, in the order given.
    """
    pending = list(futures)
    done, _ = wait(pending, timeout=timeout)
    results: list[SendResult] = []
    for future in pending:
        if future in done:
            results.append(_collect(future))
        else:
            results.append(
                PoodleError(
                    kind=ErrorKind.TIMEOUT,
                    message=f"Send did not complete within {timeout}s",
                    details={"timeout": timeout},
                )
            )
    return results


__all__ = [
    "ConfigSource",
    "await_many",
    "send",
    "send_async",
    "send_email",
    "send_email_async",
    "send_html",
    "send_html_async",
    "send_text",
    "send_text_async",
]
