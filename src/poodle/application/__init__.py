"""Application layer - port definitions.

Contents:
    * :mod:`.ports` - Callable Protocol definitions for adapter functions
"""

from __future__ import annotations

from .ports import GetConfig, InitLogging, ResolveConfig, SendEmail

__all__ = [
    "GetConfig",
    "InitLogging",
    "ResolveConfig",
    "SendEmail",
]
