"""Email payload model, validation, and wire serialization.

Contents:
    * :class:`Email` - Immutable email payload.
    * :func:`validate_email` - Fail-fast invariant check.
    * :func:`build_email` - Construct and validate in one step.
    * :func:`serialize_email` - JSON-ready request body.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Final

from .errors import InvalidEmailError

#: Maximum size of the html and text parts, each measured in UTF-8 bytes.
MAX_CONTENT_SIZE: Final[int] = 10 * 1024 * 1024

_EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


@dataclass(frozen=True, slots=True)
class Email:
    """A single transactional email.

    Construction does not validate so that invalid payloads can still be
    represented and reported; use :func:`build_email` for the checked path.

    Example:
        >>> email = Email("a@example.com", "b@example.com", "Hi", text="Hello")
        >>> email.to
        'b@example.com'
        >>> email.html is None
        True
    """

    from_address: str
    to: str
    subject: str
    html: str | None = None
    text: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the request body for this email (see :func:`serialize_email`)."""
        return serialize_email(self)


def _validate_address(value: object, label: str) -> None:
    if value is None:
        raise InvalidEmailError(f"{label} email address is required")
    if not isinstance(value, str):
        raise InvalidEmailError(f"{label} email address must be a string")
    if value == "":
        raise InvalidEmailError(f"{label} email address cannot be empty")
    if not _EMAIL_PATTERN.match(value):
        raise InvalidEmailError(f"Invalid {label.lower()} email address: {value}")


def _validate_subject(subject: object) -> None:
    if subject is None:
        raise InvalidEmailError("Subject is required")
    if not isinstance(subject, str):
        raise InvalidEmailError("Subject must be a string")
    if subject == "":
        raise InvalidEmailError("Subject cannot be empty")


def _validate_content(html: object, text: object) -> None:
    if html is None and text is None:
        raise InvalidEmailError("Either HTML or text content is required")
    for part in (html, text):
        if part is not None and not isinstance(part, str):
            raise InvalidEmailError("HTML and text content must be strings")
    if not html and not text:
        raise InvalidEmailError("Either HTML or text content is required")


def _validate_content_size(html: str | None, text: str | None) -> None:
    for label, part in (("HTML", html), ("Text", text)):
        size = len(part.encode("utf-8")) if part else 0
        if size > MAX_CONTENT_SIZE:
            raise InvalidEmailError(
                f"{label} content size ({size} bytes) exceeds maximum allowed size ({MAX_CONTENT_SIZE} bytes)"
            )


def validate_email(email: Email) -> None:
    """Check every invariant of *email*, stopping at the first violation.

    Checks run in order: sender, recipient, subject, content presence,
    content size.

    Args:
        email: Payload to check.

    Raises:
        InvalidEmailError: Carrying the message of the first failing check.

    Example:
        >>> validate_email(Email("a@example.com", "b@example.com", "Hi", html="<p>x</p>"))
        >>> validate_email(Email("a@example.com", "b@example.com", "Hi"))  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        InvalidEmailError: Either HTML or text content is required
    """
    _validate_address(email.from_address, "From")
    _validate_address(email.to, "To")
    _validate_subject(email.subject)
    _validate_content(email.html, email.text)
    _validate_content_size(email.html, email.text)


def build_email(
    from_address: str,
    to: str,
    subject: str,
    *,
    html: str | None = None,
    text: str | None = None,
) -> Email:
    """Create an :class:`Email` and validate it.

    Raises:
        InvalidEmailError: When any invariant is violated.

    Example:
        >>> build_email("a@example.com", "b@example.com", "Hi", text="Hello").subject
        'Hi'
    """
    email = Email(from_address=from_address, to=to, subject=subject, html=html, text=text)
    validate_email(email)
    return email


def serialize_email(email: Email) -> dict[str, Any]:
    """Render *email* as the JSON object expected by the send endpoint.

    ``from``, ``to`` and ``subject`` are always present; ``html`` and
    ``text`` appear only when set.

    Example:
        >>> serialize_email(Email("a@example.com", "b@example.com", "Hi", text="Hello"))
        {'from': 'a@example.com', 'to': 'b@example.com', 'subject': 'Hi', 'text': 'Hello'}
    """
    payload: dict[str, Any] = {
        "from": email.from_address,
        "to": email.to,
        "subject": email.subject,
    }
    if email.html is not None:
        payload["html"] = email.html
    if email.text is not None:
        payload["text"] = email.text
    return payload


__all__ = [
    "MAX_CONTENT_SIZE",
    "Email",
    "build_email",
    "serialize_email",
    "validate_email",
]
