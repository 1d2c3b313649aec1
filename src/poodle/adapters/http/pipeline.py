"""HTTP request pipeline for the Poodle API.

Builds one authenticated JSON POST, sends it through httpx, and routes the
outcome through the classifier. Exactly one request is issued per call and
nothing is retried; retry policy belongs to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Final, cast

import httpx
import orjson

from poodle import __init__conf__
from poodle.adapters.config.resolver import PoodleConfig
from poodle.domain.results import PoodleResponse, SendResult

from .classifier import classify_response, classify_transport_error, invalid_json_error, invalid_request_error
from .pool import get_http_client

logger = logging.getLogger(__name__)

#: Relative path of the send-email operation.
SEND_EMAIL_PATH: Final[str] = "/v1/send-email"

USER_AGENT: Final[str] = f"poodle-python/{__init__conf__.version}"

_HTTP_ACCEPTED: Final[int] = 202


def build_url(base_url: str, path: str) -> str:
    """Join *base_url* and *path* with exactly one slash.

    Examples:
        >>> build_url("https://api.example.com/", "/v1/send-email")
        'https://api.example.com/v1/send-email'
        >>> build_url("https://api.example.com", "v1/send-email")
        'https://api.example.com/v1/send-email'
    """
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def build_headers(config: PoodleConfig) -> dict[str, str]:
    """Return the request headers for *config*.

    Example:
        >>> headers = build_headers(PoodleConfig(api_key="k"))
        >>> headers["authorization"]
        'Bearer k'
    """
    return {
        "authorization": f"Bearer {config.api_key}",
        "content-type": "application/json",
        "accept": "application/json",
        "user-agent": USER_AGENT,
    }


def _redact(headers: Mapping[str, str]) -> dict[str, str]:
    return {key: ("Bearer [REDACTED]" if key == "authorization" else value) for key, value in headers.items()}


def _decode_body(raw: bytes) -> dict[str, Any] | None:
    """Decode a JSON object body; None when the body is not a JSON object."""
    try:
        decoded = orjson.loads(raw)
    except orjson.JSONDecodeError:
        return None
    if not isinstance(decoded, dict):
        return None
    return cast(dict[str, Any], decoded)


def handle_response(response: httpx.Response, *, debug: bool = False) -> SendResult:
    """Turn a received HTTP response into a result value.

    Args:
        response: Response returned by the transport.
        debug: Log the raw status and body at DEBUG level.

    Returns:
        PoodleResponse on 202, otherwise a classified PoodleError.
    """
    if debug:
        logger.debug(
            "Poodle HTTP response",
            extra={"status": response.status_code, "body": response.text},
        )

    body = _decode_body(response.content)
    if body is None:
        return invalid_json_error(response.status_code, response.text)

    headers = {key.lower(): value for key, value in response.headers.items()}
    if response.status_code == _HTTP_ACCEPTED:
        return PoodleResponse.from_body(body, headers)
    return classify_response(response.status_code, body, headers)


def post(
    config: PoodleConfig,
    path: str,
    payload: Mapping[str, Any],
    *,
    client: httpx.Client | None = None,
) -> SendResult:
    """POST *payload* as JSON to ``config.base_url`` + *path*.

    Args:
        config: Resolved client configuration (credentials, timeout, debug).
        path: Endpoint path relative to the base URL.
        payload: JSON-serializable request body.
        client: httpx client to send through. Defaults to the shared pool.

    Returns:
        PoodleResponse on HTTP 202, otherwise a PoodleError. Transport and
        decode failures are returned, never raised.

    Side Effects:
        One network request. When ``config.debug`` is set, logs the outgoing
        request (credentials redacted) and the raw response at DEBUG level.
    """
    url = build_url(config.base_url, path)
    headers = build_headers(config)
    body = orjson.dumps(payload)

    if config.debug:
        logger.debug(
            "Poodle HTTP request",
            extra={
                "method": "POST",
                "url": url,
                "headers": _redact(headers),
                "body": body.decode("utf-8"),
                "timeout_ms": config.timeout,
            },
        )

    http = client if client is not None else get_http_client()
    try:
        # httpx encodes headers while building the request.
        request = http.build_request("POST", url, content=body, headers=headers, timeout=config.timeout_seconds)
    except (ValueError, httpx.InvalidURL) as exc:
        logger.debug("Poodle HTTP request could not be built", exc_info=True)
        return invalid_request_error(exc, url=url)
    try:
        response = http.send(request)
    except httpx.RequestError as exc:
        logger.debug("Poodle HTTP transport failure", exc_info=True)
        return classify_transport_error(exc, url=url, timeout_ms=config.timeout)

    return handle_response(response, debug=config.debug)


__all__ = [
    "SEND_EMAIL_PATH",
    "USER_AGENT",
    "build_headers",
    "build_url",
    "handle_response",
    "post",
]
