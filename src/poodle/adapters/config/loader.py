"""Layered configuration loader with caching and profile support.

Supplies the "application settings" layer of client configuration: the
``[poodle]`` section merged from the bundled defaults, app/host/user config
files, ``.env`` files, and lib_layered_config's environment layer.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any, Protocol, cast

from lib_layered_config import (
    DEFAULT_MAX_PROFILE_LENGTH,
    Config,
    read_config,
    validate_profile_name,
)

from poodle import __init__conf__

#: Section of the layered configuration holding client settings.
POODLE_SECTION = "poodle"


class ConfigLoaderProtocol(Protocol):
    """Protocol for config loader with cache_clear method."""

    def __call__(self, *, profile: str | None = None, start_dir: str | None = None) -> Config: ...
    def cache_clear(self) -> None: ...


def validate_profile(profile: str, max_length: int | None = None) -> None:
    """Validate profile name using lib_layered_config.

    Args:
        profile: The profile name to validate.
        max_length: Optional maximum length. Defaults to DEFAULT_MAX_PROFILE_LENGTH (64).

    Raises:
        ValueError: If profile name is invalid (empty, too long, invalid chars,
            path traversal attempt, etc.).

    Examples:
        >>> validate_profile("production")  # valid, no exception

        >>> validate_profile("../etc/passwd")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: profile contains invalid characters: ../etc/passwd
    """
    length = max_length if max_length is not None else DEFAULT_MAX_PROFILE_LENGTH
    validate_profile_name(profile, max_length=length)


@lru_cache(maxsize=1)
def get_default_config_path() -> Path:
    """Return the path to the bundled default configuration file.

    Example:
        >>> path = get_default_config_path()
        >>> path.name
        'defaultconfig.toml'
        >>> path.exists()
        True
    """
    return Path(__file__).parent / "defaultconfig.toml"


# Configuration is loaded once per (profile, start_dir) tuple and cached for
# the process lifetime. The returned Config is immutable.
@lru_cache(maxsize=4)
def _get_config_impl(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Internal cached implementation of config loading.

    Profile validation must be done by caller before invoking this function.
    """
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=get_default_config_path(),
        start_dir=start_dir,
    )


def _get_config(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Load layered configuration with application defaults.

    Loads configuration from multiple sources in precedence order:
    defaults → app → host → user → dotenv → env

    Args:
        profile: Optional profile name for environment isolation. When specified,
            a ``profile/<name>/`` subdirectory is inserted into all configuration
            paths.
        start_dir: Optional directory that seeds .env discovery. Defaults to current
            working directory when None.

    Returns:
        Immutable configuration object with provenance tracking.

    Example:
        >>> config = get_config()
        >>> isinstance(config.as_dict(), dict)
        True
    """
    if profile is not None:
        validate_profile(profile)
    return _get_config_impl(profile=profile, start_dir=start_dir)


def _cache_clear() -> None:
    """Clear the internal configuration cache.

    Example:
        >>> get_config.cache_clear()  # Force re-read on next call
    """
    _get_config_impl.cache_clear()


# lru_cache's cache_clear is not visible to type checkers once the wrapper is
# cast to the Protocol, so it is attached explicitly.
_get_config.cache_clear = _cache_clear  # type: ignore[attr-defined]
get_config: ConfigLoaderProtocol = cast(ConfigLoaderProtocol, _get_config)


def poodle_settings(config: Config) -> dict[str, Any]:
    """Return the ``[poodle]`` section of *config* as a plain dict.

    A missing or malformed section yields an empty dict.

    Example:
        >>> poodle_settings(Config({"poodle": {"timeout": 5000}}, {}))
        {'timeout': 5000}
        >>> poodle_settings(Config({}, {}))
        {}
    """
    section: object = config.get(POODLE_SECTION, default={})
    if not isinstance(section, Mapping):
        return {}
    return dict(cast(Mapping[str, Any], section))


def load_app_settings(*, profile: str | None = None) -> dict[str, Any]:
    """Load the process-wide application settings for the client."""
    return poodle_settings(get_config(profile=profile))


__all__ = [
    "POODLE_SECTION",
    "get_config",
    "get_default_config_path",
    "load_app_settings",
    "poodle_settings",
    "validate_profile",
]
