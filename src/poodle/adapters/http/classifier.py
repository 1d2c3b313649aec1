"""Map HTTP outcomes and transport failures onto :class:`ErrorKind`.

Stateless functions only. Each returns a :class:`PoodleError` value; none
raise.

Contents:
    * :func:`classify_response` - Non-202 status + decoded body + headers.
    * :func:`classify_transport_error` - httpx exceptions raised before a response.
    * :func:`invalid_json_error` - Body that could not be decoded.
"""

from __future__ import annotations

import socket
import ssl
from collections.abc import Iterator, Mapping
from typing import Any, Final

import httpx

from poodle.domain.enums import ErrorKind
from poodle.domain.rate_limit import parse_rate_limit
from poodle.domain.results import PoodleError

# Status codes whose body message/error are reported as-is.
_CLIENT_ERROR_KINDS: Final[dict[int, ErrorKind]] = {
    400: ErrorKind.VALIDATION_ERROR,
    401: ErrorKind.UNAUTHORIZED,
    402: ErrorKind.PAYMENT_REQUIRED,
    403: ErrorKind.FORBIDDEN,
    422: ErrorKind.UNPROCESSABLE_ENTITY,
}

_HTTP_TOO_MANY_REQUESTS: Final[int] = 429
_HTTP_SERVER_ERROR: Final[int] = 500

# Fallback substrings for platforms where the OS error is not chained.
_DNS_MARKERS: Final[tuple[str, ...]] = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "temporary failure in name resolution",
    "no address associated with hostname",
)
_SSL_MARKERS: Final[tuple[str, ...]] = (
    "certificate_verify_failed",
    "certificate verify failed",
    "tlsv1 alert",
    "sslv3 alert",
    "wrong version number",
)


def _message(body: Mapping[str, Any], default: str) -> str:
    message = body.get("message")
    return str(message) if message is not None else default


def classify_response(status: int, body: Mapping[str, Any], headers: Mapping[str, str]) -> PoodleError:
    """Classify a decoded non-202 response.

    Args:
        status: HTTP status code.
        body: Decoded JSON object.
        headers: Response headers (any casing).

    Returns:
        Error value with kind, message, and status preserved.

    Examples:
        >>> err = classify_response(401, {"message": "Invalid API key"}, {})
        >>> (err.kind.value, err.message, err.status_code)
        ('unauthorized', 'Invalid API key', 401)

        >>> err = classify_response(429, {}, {"retry-after": "30"})
        >>> (err.kind.value, err.retry_after)
        ('rate_limit_exceeded', 30)

        >>> classify_response(503, {"message": "Down"}, {}).kind.value
        'server_error'
    """
    kind = _CLIENT_ERROR_KINDS.get(status)
    if kind is not None:
        error_detail = body.get("error")
        details: dict[str, Any] = {"error": error_detail} if error_detail is not None else {}
        return PoodleError(
            kind=kind,
            message=_message(body, "Unknown error"),
            status_code=status,
            details=details,
        )

    if status == _HTTP_TOO_MANY_REQUESTS:
        rate_limit = parse_rate_limit(headers)
        return PoodleError(
            kind=ErrorKind.RATE_LIMIT_EXCEEDED,
            message=_message(body, "Rate limit exceeded"),
            status_code=status,
            retry_after=rate_limit.retry_after,
            details={"rate_limit": rate_limit},
        )

    if status >= _HTTP_SERVER_ERROR:
        return PoodleError(
            kind=ErrorKind.SERVER_ERROR,
            message=_message(body, "Server error"),
            status_code=status,
            details=dict(body),
        )

    return PoodleError(
        kind=ErrorKind.SERVER_ERROR,
        message="Unexpected response",
        status_code=status,
        details=dict(body),
    )


def invalid_json_error(status: int, raw_body: str) -> PoodleError:
    """Report a response whose body is not a JSON object.

    Example:
        >>> err = invalid_json_error(502, "<html>Bad Gateway</html>")
        >>> (err.kind.value, err.message, err.details["status"])
        ('network_error', 'Invalid JSON response', 502)
    """
    return PoodleError(
        kind=ErrorKind.NETWORK_ERROR,
        message="Invalid JSON response",
        details={"body": raw_body, "status": status},
    )


def invalid_request_error(exc: Exception, *, url: str) -> PoodleError:
    """Report a request that could not be built, so nothing was sent.

    The exception text is not copied into the message since it may quote
    part of a header value.

    Example:
        >>> err = invalid_request_error(ValueError("bad header"), url="https://x.io")
        >>> (err.kind.value, err.message)
        ('network_error', 'Invalid request: ValueError')
    """
    return PoodleError(
        kind=ErrorKind.NETWORK_ERROR,
        message=f"Invalid request: {type(exc).__name__}",
        details={"url": url, "reason": exc},
    )


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc* and every cause/context behind it, once each."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def _is_dns_failure(chain: list[BaseException]) -> bool:
    if any(isinstance(item, socket.gaierror) for item in chain):
        return True
    text = " ".join(str(item).lower() for item in chain)
    return any(marker in text for marker in _DNS_MARKERS)


def _is_ssl_failure(chain: list[BaseException]) -> bool:
    if any(isinstance(item, ssl.SSLError) for item in chain):
        return True
    text = " ".join(str(item).lower() for item in chain)
    return any(marker in text for marker in _SSL_MARKERS)


def classify_transport_error(exc: httpx.RequestError, *, url: str, timeout_ms: int) -> PoodleError:
    """Classify a failure that prevented any HTTP response.

    Args:
        exc: Exception raised by httpx.
        url: Target URL of the request.
        timeout_ms: Configured timeout, reported on timeouts.

    Returns:
        Error value; the original exception is kept in ``details["reason"]``.

    Example:
        >>> err = classify_transport_error(httpx.ReadTimeout("timed out"), url="https://x.io", timeout_ms=500)
        >>> (err.kind.value, err.message)
        ('timeout', 'Request timeout after 500ms')
    """
    if isinstance(exc, httpx.TimeoutException):
        return PoodleError(
            kind=ErrorKind.TIMEOUT,
            message=f"Request timeout after {timeout_ms}ms",
            details={"timeout": timeout_ms, "reason": exc},
        )

    chain = list(_exception_chain(exc))

    if isinstance(exc, httpx.ConnectError):
        if any(isinstance(item, ConnectionRefusedError) for item in chain) or "connection refused" in str(exc).lower():
            return PoodleError(
                kind=ErrorKind.NETWORK_ERROR,
                message="Connection refused",
                details={"url": url, "reason": exc},
            )
        if _is_dns_failure(chain):
            host = httpx.URL(url).host
            return PoodleError(
                kind=ErrorKind.DNS_ERROR,
                message=f"DNS resolution failed for {host}",
                details={"host": host, "reason": exc},
            )
        if _is_ssl_failure(chain):
            return PoodleError(
                kind=ErrorKind.SSL_ERROR,
                message="SSL/TLS error occurred",
                details={"url": url, "reason": exc},
            )

    return PoodleError(
        kind=ErrorKind.NETWORK_ERROR,
        message=f"Network error: {exc!r}",
        details={"url": url, "reason": exc},
    )


__all__ = [
    "classify_response",
    "classify_transport_error",
    "invalid_json_error",
    "invalid_request_error",
]
