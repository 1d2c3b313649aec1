"""Type-safe domain enums for error kinds and output formats."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed taxonomy of send failures.

    Inherits from str so kinds compare equal to their wire-style names and
    serialize without conversion.

    Example:
        >>> ErrorKind.RATE_LIMIT_EXCEEDED.value
        'rate_limit_exceeded'
        >>> ErrorKind.UNAUTHORIZED == "unauthorized"
        True
    """

    VALIDATION_ERROR = "validation_error"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    PAYMENT_REQUIRED = "payment_required"
    UNPROCESSABLE_ENTITY = "unprocessable_entity"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    SERVER_ERROR = "server_error"
    NETWORK_ERROR = "network_error"
    TIMEOUT = "timeout"
    DNS_ERROR = "dns_error"
    SSL_ERROR = "ssl_error"


class OutputFormat(str, Enum):
    """Output format options for configuration display.

    Attributes:
        HUMAN: Human-readable key = value listing.
        JSON: Machine-readable JSON output.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


__all__ = [
    "ErrorKind",
    "OutputFormat",
]
