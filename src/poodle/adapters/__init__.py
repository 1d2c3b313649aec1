"""Adapters layer - infrastructure and framework integrations.

Contents:
    * :mod:`.config` - Layered configuration loading and client config resolution
    * :mod:`.http` - Request pipeline and error classification over httpx
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.memory` - In-memory port implementations for tests
    * :mod:`.cli` - rich-click CLI integration
"""

from __future__ import annotations

__all__: list[str] = []
