"""Client configuration model and precedence resolver.

Provides the PoodleConfig Pydantic model for validated, immutable client
settings and :func:`resolve_config`, which merges the configuration sources
field by field:

    explicit option > application settings > environment > default

Application settings are the ``[poodle]`` section of the layered
configuration (see :mod:`.loader`). Environment variables are
``POODLE_API_KEY``, ``POODLE_BASE_URL``, ``POODLE_TIMEOUT`` and
``POODLE_DEBUG``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, Final
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from poodle.domain.errors import ConfigurationError

DEFAULT_BASE_URL: Final[str] = "https://api.usepoodle.com"
DEFAULT_TIMEOUT_MS: Final[int] = 30_000

ENV_API_KEY: Final[str] = "POODLE_API_KEY"
ENV_BASE_URL: Final[str] = "POODLE_BASE_URL"
ENV_TIMEOUT: Final[str] = "POODLE_TIMEOUT"
ENV_DEBUG: Final[str] = "POODLE_DEBUG"

_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})

# Messages for field-level type failures raised by Pydantic itself.
_TYPE_MESSAGES: Final[dict[str, str]] = {
    "api_key": "API key must be a string.",
    "base_url": "Base URL must be a string.",
    "timeout": "Timeout must be a positive integer.",
    "debug": "Debug must be a boolean.",
}


class PoodleConfig(BaseModel):
    """Validated, immutable client configuration.

    Example:
        >>> config = PoodleConfig(api_key="key_123", base_url="https://api.example.com")
        >>> config.timeout
        30000
        >>> "key_123" in repr(config)
        False
    """

    model_config = ConfigDict(frozen=True)

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout: int = DEFAULT_TIMEOUT_MS
    debug: bool = False

    @model_validator(mode="after")
    def _validate_config(self) -> PoodleConfig:
        """Reject unusable settings before any network call.

        Rules are checked in order (API key, base URL, timeout) and the
        first violation wins.

        Raises:
            ValueError: When a setting is invalid.
        """
        if self.api_key is None:
            raise ValueError(f"API key is required. Set {ENV_API_KEY} environment variable or pass api_key option.")
        if self.api_key == "":
            raise ValueError("API key cannot be empty.")
        if not (self.api_key.isascii() and self.api_key.isprintable()):
            raise ValueError("API key must contain only printable ASCII characters.")
        if self.base_url == "":
            raise ValueError("Base URL cannot be empty.")
        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise ValueError("Base URL must be a valid HTTP or HTTPS URL.")
        if self.timeout <= 0:
            raise ValueError("Timeout must be a positive integer.")
        return self

    @property
    def timeout_seconds(self) -> float:
        """Timeout converted to seconds for the HTTP transport."""
        return self.timeout / 1000

    def __repr__(self) -> str:
        """Return string representation with api_key redacted.

        Example:
            >>> PoodleConfig(api_key="secret")  # doctest: +ELLIPSIS
            PoodleConfig(api_key='[REDACTED]', base_url='https://api.usepoodle.com', ...)
        """
        fields: list[str] = []
        for name, value in self:
            if name == "api_key" and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"PoodleConfig({', '.join(fields)})"

    def redacted_dict(self) -> dict[str, Any]:
        """Return the settings as a dict with the API key masked."""
        data = self.model_dump()
        if data.get("api_key"):
            data["api_key"] = "[REDACTED]"
        return data


def _setting(settings: Mapping[str, Any], key: str) -> Any:
    """Read an application setting, treating empty strings as not configured."""
    value = settings.get(key)
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _parse_timeout(raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ConfigurationError("Timeout must be a positive integer.") from exc


def _first(*candidates: Any) -> Any:
    """Return the first candidate that is not None."""
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


def _first_error_message(exc: ValidationError) -> str:
    """Extract a user-facing message from the first Pydantic error."""
    error = exc.errors()[0]
    ctx = error.get("ctx") or {}
    original = ctx.get("error")
    if isinstance(original, Exception):
        return str(original)
    loc = error.get("loc") or ()
    field_name = str(loc[0]) if loc else ""
    return _TYPE_MESSAGES.get(field_name, str(error.get("msg", exc)))


def resolve_config(
    options: Mapping[str, Any] | None = None,
    *,
    settings: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> PoodleConfig:
    """Merge configuration sources into a validated PoodleConfig.

    Args:
        options: Explicit call-time options (``api_key``, ``base_url``,
            ``timeout``, ``debug``). A None value counts as not given.
        settings: Application settings, typically the ``[poodle]`` section
            of the layered configuration.
        environ: Environment mapping. Defaults to ``os.environ``.

    Returns:
        Fully resolved configuration.

    Raises:
        ConfigurationError: With the first violated rule's message. No
            partial configuration is returned.

    Example:
        >>> cfg = resolve_config({"api_key": "k"}, settings={}, environ={"POODLE_TIMEOUT": "5000"})
        >>> cfg.timeout
        5000
        >>> resolve_config({}, settings={}, environ={})  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ConfigurationError: API key is required. ...
    """
    opts = options or {}
    app = settings or {}
    env = os.environ if environ is None else environ

    env_timeout = env.get(ENV_TIMEOUT)
    env_debug = env.get(ENV_DEBUG)

    raw: dict[str, Any] = {
        "api_key": _first(opts.get("api_key"), _setting(app, "api_key"), env.get(ENV_API_KEY)),
        "base_url": _first(
            opts.get("base_url"),
            _setting(app, "base_url"),
            env.get(ENV_BASE_URL) or None,
            DEFAULT_BASE_URL,
        ),
        "timeout": _first(
            opts.get("timeout"),
            _setting(app, "timeout"),
            _parse_timeout(env_timeout) if env_timeout else None,
            DEFAULT_TIMEOUT_MS,
        ),
        "debug": _first(
            opts.get("debug"),
            _setting(app, "debug"),
            env_debug.strip().lower() in _TRUTHY if env_debug is not None else None,
            False,
        ),
    }

    if isinstance(raw["timeout"], str):
        raw["timeout"] = _parse_timeout(raw["timeout"])
    if isinstance(raw["timeout"], bool) or not isinstance(raw["timeout"], int):
        raise ConfigurationError("Timeout must be a positive integer.")

    try:
        return PoodleConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(_first_error_message(exc)) from exc


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_MS",
    "ENV_API_KEY",
    "ENV_BASE_URL",
    "ENV_DEBUG",
    "ENV_TIMEOUT",
    "PoodleConfig",
    "resolve_config",
]
