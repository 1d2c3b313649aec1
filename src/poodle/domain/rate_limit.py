"""Rate-limit information carried by API response headers."""

from __future__ import annotations

import re
import time
from collections.abc import Mapping
from dataclasses import dataclass

_LEADING_INT = re.compile(r"^[+-]?\d+")

LIMIT_HEADER = "ratelimit-limit"
REMAINING_HEADER = "ratelimit-remaining"
RESET_HEADER = "ratelimit-reset"
RETRY_AFTER_HEADER = "retry-after"


def _parse_int(value: object) -> int | None:
    """Parse the leading integer of a header value, or None.

    Example:
        >>> _parse_int("42")
        42
        >>> _parse_int("1.5")
        1
        >>> _parse_int("soon") is None
        True
    """
    if not isinstance(value, str):
        return None
    match = _LEADING_INT.match(value)
    return int(match.group()) if match else None


@dataclass(frozen=True, slots=True)
class RateLimit:
    """Parsed ``ratelimit-*`` and ``retry-after`` header values.

    Any field whose header is absent or unparsable is None.

    Example:
        >>> rl = RateLimit.from_headers({"RateLimit-Remaining": "0", "Retry-After": "30"})
        >>> rl.exceeded
        True
        >>> rl.wait_time()
        30
    """

    limit: int | None = None
    remaining: int | None = None
    reset: int | None = None
    retry_after: int | None = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> RateLimit:
        """Build a RateLimit from response headers (see :func:`parse_rate_limit`)."""
        return parse_rate_limit(headers)

    @property
    def exceeded(self) -> bool:
        """True iff ``remaining`` is known and not positive."""
        return self.remaining is not None and self.remaining <= 0

    def time_until_reset(self, now: float | None = None) -> int | None:
        """Seconds until the window resets, never negative; None without ``reset``."""
        if self.reset is None:
            return None
        current = int(time.time() if now is None else now)
        return max(0, self.reset - current)

    def wait_time(self, now: float | None = None) -> int | None:
        """Recommended seconds to wait before retrying.

        Prefers ``retry_after``; falls back to :meth:`time_until_reset`.
        """
        if self.retry_after is not None:
            return self.retry_after
        return self.time_until_reset(now)


def parse_rate_limit(headers: Mapping[str, str]) -> RateLimit:
    """Extract rate-limit fields from *headers* with case-insensitive lookup.

    Never raises: malformed or missing values yield None for that field.

    Example:
        >>> parse_rate_limit({"ratelimit-limit": "2", "ratelimit-remaining": "1", "ratelimit-reset": "1640995200"})
        RateLimit(limit=2, remaining=1, reset=1640995200, retry_after=None)
    """
    lowered = {str(key).lower(): value for key, value in headers.items()}
    return RateLimit(
        limit=_parse_int(lowered.get(LIMIT_HEADER)),
        remaining=_parse_int(lowered.get(REMAINING_HEADER)),
        reset=_parse_int(lowered.get(RESET_HEADER)),
        retry_after=_parse_int(lowered.get(RETRY_AFTER_HEADER)),
    )


__all__ = [
    "RateLimit",
    "parse_rate_limit",
]
