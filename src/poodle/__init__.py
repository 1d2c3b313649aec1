"""Python client for the Poodle transactional email API.

This module is the stable public API: send operations, the result and
configuration types they use, and package metadata.

Example:
    >>> import poodle
    >>> result = poodle.send_text(  # doctest: +SKIP
    ...     "sender@yourdomain.com",
    ...     "recipient@example.com",
    ...     "Hello",
    ...     "Plain text body",
    ...     config={"api_key": "your_api_key"},
    ... )
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info, version

# Configuration
from .adapters.config.resolver import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_MS, PoodleConfig, resolve_config
from .adapters.http.pool import close_shared_resources

# Send operations
from .client import (
    await_many,
    send,
    send_async,
    send_email,
    send_email_async,
    send_html,
    send_html_async,
    send_text,
    send_text_async,
)

# Domain exports
from .domain import (
    MAX_CONTENT_SIZE,
    ConfigurationError,
    Email,
    ErrorKind,
    InvalidEmailError,
    PoodleError,
    PoodleResponse,
    RateLimit,
    SendResult,
    build_email,
)

__version__ = version

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_MS",
    "MAX_CONTENT_SIZE",
    "ConfigurationError",
    "Email",
    "ErrorKind",
    "InvalidEmailError",
    "PoodleConfig",
    "PoodleError",
    "PoodleResponse",
    "RateLimit",
    "SendResult",
    "__version__",
    "await_many",
    "build_email",
    "close_shared_resources",
    "print_info",
    "resolve_config",
    "send",
    "send_async",
    "send_email",
    "send_email_async",
    "send_html",
    "send_html_async",
    "send_text",
    "send_text_async",
]
