"""Result values returned by every send operation.

A send either yields a :class:`PoodleResponse` (HTTP 202) or a
:class:`PoodleError`. Both carry a class-level ``ok`` flag so callers can
branch without isinstance checks, or match on the class.

Example:
    >>> result = PoodleError(kind=ErrorKind.TIMEOUT, message="Request timeout after 10ms")
    >>> result.ok
    False
    >>> str(result)
    'timeout: Request timeout after 10ms'
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

from .enums import ErrorKind
from .rate_limit import RateLimit, parse_rate_limit


def _empty_details() -> dict[str, Any]:
    """Create an empty typed details mapping."""
    return {}


@dataclass(frozen=True, slots=True)
class PoodleResponse:
    """Successful send acknowledgement.

    Attributes:
        success: The ``success`` flag reported by the API.
        message: Human-readable status from the API.
        rate_limit: Rate-limit headers of the response.
        raw_body: Decoded JSON body as received.
    """

    ok: ClassVar[bool] = True

    success: bool
    message: str
    rate_limit: RateLimit = field(default_factory=RateLimit)
    raw_body: Mapping[str, Any] = field(default_factory=_empty_details)

    @classmethod
    def from_body(cls, body: Mapping[str, Any], headers: Mapping[str, str] | None = None) -> PoodleResponse:
        """Build a response from a decoded 202 body and its headers.

        Example:
            >>> resp = PoodleResponse.from_body(
            ...     {"success": True, "message": "Email queued for sending"},
            ...     {"ratelimit-remaining": "1"},
            ... )
            >>> (resp.success, resp.message, resp.rate_limit.remaining)
            (True, 'Email queued for sending', 1)
        """
        return cls(
            success=bool(body.get("success", False)),
            message=str(body.get("message", "")),
            rate_limit=parse_rate_limit(headers or {}),
            raw_body=body,
        )


@dataclass(frozen=True, slots=True)
class PoodleError:
    """Failed send, classified into a closed :class:`ErrorKind`.

    Attributes:
        kind: Machine-matchable failure category.
        message: Human-readable description.
        status_code: HTTP status when the failure came from a response.
        retry_after: Seconds to wait, populated for rate-limit failures.
        details: Diagnostic context (raw body fields, host, url, timeout).
    """

    ok: ClassVar[bool] = False

    kind: ErrorKind
    message: str
    status_code: int | None = None
    retry_after: int | None = None
    details: Mapping[str, Any] = field(default_factory=_empty_details)

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


SendResult = Union[PoodleResponse, PoodleError]
"""Outcome of a single send: success payload or error value."""


__all__ = [
    "PoodleError",
    "PoodleResponse",
    "SendResult",
]
