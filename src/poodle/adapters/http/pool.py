"""Process-wide transport resources: the HTTP connection pool and send workers.

Both are created lazily on first use and shared by every send. Nothing else
in the client is shared between concurrent calls. Creation and release are
serialized by one lock so concurrent first calls share a single instance.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Final

import httpx

#: Connections kept by the shared pool; also the number of async send workers.
POOL_SIZE: Final[int] = 10

_lock = threading.Lock()
_http_client: httpx.Client | None = None
_executor: ThreadPoolExecutor | None = None


def get_http_client() -> httpx.Client:
    """Return the shared httpx client.

    Redirects are not followed; each send issues exactly one request.
    Timeouts are supplied per request from the resolved configuration.
    """
    global _http_client
    with _lock:
        if _http_client is None:
            _http_client = httpx.Client(
                limits=httpx.Limits(max_connections=POOL_SIZE, max_keepalive_connections=POOL_SIZE),
                follow_redirects=False,
            )
        return _http_client


def get_executor() -> ThreadPoolExecutor:
    """Return the shared worker pool used by the ``*_async`` send variants."""
    global _executor
    with _lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=POOL_SIZE, thread_name_prefix="poodle-send")
        return _executor


def close_shared_resources() -> None:
    """Close the shared client and worker pool.

    Waits for in-flight sends to finish. The next send creates fresh
    resources.
    """
    global _http_client, _executor
    with _lock:
        executor, _executor = _executor, None
        client, _http_client = _http_client, None
    # Released outside the lock: in-flight sends may still ask for the client.
    if executor is not None:
        executor.shutdown(wait=True)
    if client is not None:
        client.close()


__all__ = [
    "POOL_SIZE",
    "close_shared_resources",
    "get_executor",
    "get_http_client",
]
