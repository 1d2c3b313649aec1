"""HTTP adapter - request pipeline over httpx.

Contents:
    * :mod:`.pipeline` - URL/header construction, POST, response routing
    * :mod:`.classifier` - Status and transport failure classification
    * :mod:`.pool` - Shared connection pool and async send workers
"""

from __future__ import annotations

from .classifier import classify_response, classify_transport_error, invalid_json_error
from .pipeline import SEND_EMAIL_PATH, build_headers, build_url, post
from .pool import close_shared_resources, get_executor, get_http_client

__all__ = [
    "SEND_EMAIL_PATH",
    "build_headers",
    "build_url",
    "classify_response",
    "classify_transport_error",
    "close_shared_resources",
    "get_executor",
    "get_http_client",
    "invalid_json_error",
    "post",
]
