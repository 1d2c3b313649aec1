"""Domain-specific exceptions for typed error handling at boundaries.

These are the only exceptions the library raises on purpose. Failures on the
HTTP-call path are returned as :class:`poodle.domain.results.PoodleError`
values instead.
"""

from __future__ import annotations


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete client configuration.

    Raised by the configuration resolver when the API key, base URL, or
    timeout violates its rule. Carries the first violated rule's message.

    Example:
        >>> from poodle.domain.errors import ConfigurationError
        >>> err = ConfigurationError("API key cannot be empty.")
        >>> str(err)
        'API key cannot be empty.'
    """


class InvalidEmailError(ValueError):
    """Local email payload validation failure.

    Raised when an address, the subject, or the content of an email breaks
    its invariant. Inherits from ValueError so generic ``except ValueError``
    handlers still see it.

    Example:
        >>> from poodle.domain.errors import InvalidEmailError
        >>> err = InvalidEmailError("Subject cannot be empty")
        >>> str(err)
        'Subject cannot be empty'
        >>> isinstance(err, ValueError)
        True
    """


__all__ = [
    "ConfigurationError",
    "InvalidEmailError",
]
