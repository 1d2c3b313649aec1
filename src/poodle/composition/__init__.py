"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

# Configuration services
from ..adapters.config.loader import get_config
from ..adapters.config.resolver import resolve_config

# Logging services
from ..adapters.logging.setup import init_logging

# Send service
from ..client import send

# Static conformance assertions: type checkers verify that each adapter
# function structurally satisfies its Protocol.
if TYPE_CHECKING:
    from ..adapters.memory.email import OutboxSpy
    from ..application.ports import GetConfig, InitLogging, ResolveConfig, SendEmail

    _assert_get_config: GetConfig = get_config
    _assert_resolve_config: ResolveConfig = resolve_config
    _assert_send_email: SendEmail = send
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    resolve_config: ResolveConfig
    send_email: SendEmail
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        resolve_config=resolve_config,
        send_email=send,
        init_logging=init_logging,
    )


def build_testing(*, spy: OutboxSpy | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        spy: Optional OutboxSpy for capturing sends. A fresh one is created
            when None; pass your own to assert on captured payloads.

    Returns:
        AppServices container with in-memory adapters.
    """
    from ..adapters.memory import OutboxSpy, get_config_in_memory, init_logging_in_memory

    outbox = spy if spy is not None else OutboxSpy()

    return AppServices(
        get_config=get_config_in_memory,
        resolve_config=resolve_config,
        send_email=outbox.send,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    "AppServices",
    "build_production",
    "build_testing",
    "get_config",
    "init_logging",
    "resolve_config",
    "send",
]
