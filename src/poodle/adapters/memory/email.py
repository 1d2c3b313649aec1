"""In-memory send adapter for testing.

Provides :class:`OutboxSpy`, whose ``send`` satisfies the SendEmail port
without any network I/O.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ...domain.email import Email, serialize_email, validate_email
from ...domain.enums import ErrorKind
from ...domain.errors import ConfigurationError, InvalidEmailError
from ...domain.rate_limit import RateLimit
from ...domain.results import PoodleError, PoodleResponse, SendResult
from ..config.resolver import PoodleConfig, resolve_config


def _empty_outbox() -> list[dict[str, Any]]:
    """Create an empty typed list for captured sends."""
    return []


@dataclass
class OutboxSpy:
    """Captures send calls for test assertions.

    Configuration is resolved and the email validated exactly as the real
    client does, but the environment is never consulted, so failures surface
    as the same ``validation_error`` results.

    Attributes:
        sent: Captured payloads with their resolved config.
        result: When set, returned instead of the canned success response.

    Example:
        >>> spy = OutboxSpy()
        >>> spy.send("a@example.com", "b@example.com", "Hi", text="Hello", config={"api_key": "k"}).ok
        True
        >>> spy.sent[0]["payload"]["to"]
        'b@example.com'
    """

    sent: list[dict[str, Any]] = field(default_factory=_empty_outbox)
    result: SendResult | None = None

    def clear(self) -> None:
        """Reset captured data for the next test."""
        self.sent.clear()
        self.result = None

    def send(
        self,
        from_address: str,
        to: str,
        subject: str,
        *,
        html: str | None = None,
        text: str | None = None,
        config: PoodleConfig | Mapping[str, Any] | None = None,
        settings: Mapping[str, Any] | None = None,
    ) -> SendResult:
        """Record the call and return the configured result."""
        try:
            resolved = (
                config if isinstance(config, PoodleConfig) else resolve_config(config, settings=settings, environ={})
            )
        except ConfigurationError as exc:
            return PoodleError(kind=ErrorKind.VALIDATION_ERROR, message=str(exc), details={"source": "configuration"})

        email = Email(from_address=from_address, to=to, subject=subject, html=html, text=text)
        try:
            validate_email(email)
        except InvalidEmailError as exc:
            return PoodleError(kind=ErrorKind.VALIDATION_ERROR, message=str(exc), details={"source": "email"})

        self.sent.append({"config": resolved, "payload": serialize_email(email)})
        if self.result is not None:
            return self.result
        return PoodleResponse(
            success=True,
            message="Email queued for sending",
            rate_limit=RateLimit(limit=2, remaining=1),
            raw_body={"success": True, "message": "Email queued for sending"},
        )


__all__ = ["OutboxSpy"]
