"""Application ports: callable Protocol definitions for adapter functions.

Each Protocol defines a ``__call__`` whose signature matches the corresponding
adapter function, so module-level functions and bound methods satisfy them
structurally (PEP 544).

System Role:
    Sits between domain and adapters. Infrastructure types (``Config``,
    ``PoodleConfig``) are imported under ``TYPE_CHECKING`` only.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.results import SendResult

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.config.resolver import PoodleConfig


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class ResolveConfig(Protocol):
    """Merge explicit options, application settings, and environment into a PoodleConfig."""

    def __call__(
        self,
        options: Mapping[str, Any] | None = ...,
        *,
        settings: Mapping[str, Any] | None = ...,
        environ: Mapping[str, str] | None = ...,
    ) -> PoodleConfig: ...


class SendEmail(Protocol):
    """Send one email and return its result value."""

    def __call__(
        self,
        from_address: str,
        to: str,
        subject: str,
        *,
        html: str | None = ...,
        text: str | None = ...,
        config: PoodleConfig | Mapping[str, Any] | None = ...,
        settings: Mapping[str, Any] | None = ...,
    ) -> SendResult: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "GetConfig",
    "InitLogging",
    "ResolveConfig",
    "SendEmail",
]
