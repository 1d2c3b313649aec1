"""Domain layer - pure models with no I/O or framework dependencies.

Contents:
    * :mod:`.email` - Email payload, validation, serialization
    * :mod:`.rate_limit` - Rate-limit header model
    * :mod:`.results` - Send result values (response / error)
    * :mod:`.enums` - Domain enumerations (ErrorKind, OutputFormat)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .email import MAX_CONTENT_SIZE, Email, build_email, serialize_email, validate_email
from .enums import ErrorKind, OutputFormat
from .errors import ConfigurationError, InvalidEmailError
from .rate_limit import RateLimit, parse_rate_limit
from .results import PoodleError, PoodleResponse, SendResult

__all__ = [
    # Email
    "MAX_CONTENT_SIZE",
    "Email",
    "build_email",
    "serialize_email",
    "validate_email",
    # Rate limits
    "RateLimit",
    "parse_rate_limit",
    # Results
    "PoodleError",
    "PoodleResponse",
    "SendResult",
    # Enums
    "ErrorKind",
    "OutputFormat",
    # Errors
    "ConfigurationError",
    "InvalidEmailError",
]
