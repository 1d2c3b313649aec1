"""In-memory adapter implementations for testing.

Lightweight implementations of the application ports that operate entirely
in memory -- no filesystem, no HTTP, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration loader
    * :mod:`.email` - In-memory send adapter (OutboxSpy class)
    * :mod:`.logging` - In-memory logging adapter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import get_config_in_memory
from .email import OutboxSpy
from .logging import init_logging_in_memory

# Static conformance assertions
if TYPE_CHECKING:
    from poodle.application.ports import GetConfig, InitLogging, SendEmail

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_send_email: SendEmail = OutboxSpy().send

__all__ = [
    "OutboxSpy",
    "get_config_in_memory",
    "init_logging_in_memory",
]
