"""Logging initialization for the command-line entry points.

Library code logs through the standard ``logging`` module only. The CLI
initialises lib_log_rich once, from the ``[lib_log_rich]`` section of the
layered configuration, and bridges stdlib loggers into it so the client's
``Sending email`` / debug traffic records are rendered.

Contents:
    * :class:`LoggingConfigModel` - Boundary model for the config section.
    * :func:`init_logging` - Idempotent lib_log_rich initialization.
"""

from __future__ import annotations

from typing import cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from poodle import __init__conf__


class LoggingConfigModel(BaseModel):
    """Pydantic model for [lib_log_rich] config section validation.

    Extra fields pass through to lib_log_rich.RuntimeConfig.

    Example:
        >>> model = LoggingConfigModel(service="poodle-worker", environment="staging")
        >>> model.service
        'poodle-worker'
        >>> LoggingConfigModel().environment
        'prod'
    """

    service: str | None = None
    environment: str = "prod"

    model_config = ConfigDict(extra="allow")


def _build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    """Build RuntimeConfig from the [lib_log_rich] section of *config*.

    The service name defaults to the package name when not configured.
    """
    log_raw: object = config.get("lib_log_rich", default={})
    parsed = LoggingConfigModel.model_validate(cast("dict[str, object]", log_raw) if log_raw else {})

    extra_config = parsed.model_dump(exclude={"service", "environment"}, exclude_none=True)

    return lib_log_rich.runtime.RuntimeConfig(
        service=parsed.service or __init__conf__.name,
        environment=parsed.environment,
        **extra_config,
    )


def init_logging(config: Config) -> None:
    """Initialize lib_log_rich runtime with the provided configuration.

    Safe to call repeatedly: once the runtime is initialised further calls
    return immediately.

    Args:
        config: Loaded layered configuration with an optional
            ``[lib_log_rich]`` section.

    Side Effects:
        Loads .env files so LOG_* variables apply, initialises the global
        lib_log_rich runtime, and attaches it to stdlib logging.

    Example:
        >>> from lib_layered_config import Config
        >>> init_logging(Config({"lib_log_rich": {"environment": "test"}}, {}))  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(_build_runtime_config(config))
    lib_log_rich.runtime.attach_std_logging()


__all__ = [
    "LoggingConfigModel",
    "init_logging",
]
