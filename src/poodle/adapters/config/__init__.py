"""Configuration adapter - layered loading and client config resolution.

Contents:
    * :mod:`.loader` - lib_layered_config loading, caching, profiles
    * :mod:`.resolver` - PoodleConfig model and precedence resolver
"""

from __future__ import annotations

from .loader import get_config, get_default_config_path, load_app_settings, poodle_settings
from .resolver import PoodleConfig, resolve_config

__all__ = [
    "PoodleConfig",
    "get_config",
    "get_default_config_path",
    "load_app_settings",
    "poodle_settings",
    "resolve_config",
]
