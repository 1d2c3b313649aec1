"""Resolved client configuration display.

Contents:
    * :func:`cli_config` - Print the configuration a send would use.
"""

from __future__ import annotations

import logging
from typing import Any

import lib_log_rich.runtime
import orjson
import rich_click as click

from poodle.adapters.config.loader import poodle_settings
from poodle.domain.enums import OutputFormat
from poodle.domain.errors import ConfigurationError

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import CLIContext, get_cli_context
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)


def _render_human(settings: dict[str, Any], profile: str | None) -> None:
    header = f"[poodle] (profile: {profile})" if profile else "[poodle]"
    click.echo(header)
    pad = max(len(key) for key in settings)
    for key, value in settings.items():
        click.echo(f"  {key.ljust(pad)} = {value}")


def _effective_profile(cli_ctx: CLIContext, profile_override: str | None) -> str | None:
    return profile_override if profile_override else cli_ctx.profile


@click.command("config", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    default=OutputFormat.HUMAN.value,
    help="Output format (human-readable or JSON)",
)
@click.option(
    "--profile",
    type=str,
    default=None,
    help="Override profile from root command (e.g., 'production', 'test')",
)
@click.pass_context
def cli_config(ctx: click.Context, output_format: str, profile: str | None) -> None:
    """Show the client configuration resolved from all sources.

    Precedence per field: [poodle] config section > POODLE_* environment > default.
    The API key is always redacted.
    """
    cli_ctx = get_cli_context(ctx)
    effective_profile = _effective_profile(cli_ctx, profile)
    layered = cli_ctx.services.get_config(profile=profile) if profile else cli_ctx.config
    fmt = OutputFormat(output_format.lower())

    extra = {"command": "config", "format": fmt.value, "profile": effective_profile}
    with lib_log_rich.runtime.bind(job_id="cli-config", extra=extra):
        logger.info("Displaying configuration", extra={"format": fmt.value, "profile": effective_profile})
        try:
            resolved = cli_ctx.services.resolve_config(None, settings=poodle_settings(layered))
        except ConfigurationError as exc:
            logger.error("Configuration is invalid", extra={"error": str(exc)})
            click.echo(f"Error: {exc}", err=True)
            raise SystemExit(ExitCode.CONFIG_ERROR) from exc

        settings = resolved.redacted_dict()
        if fmt is OutputFormat.JSON:
            click.echo(orjson.dumps(settings, option=orjson.OPT_INDENT_2).decode())
        else:
            _render_human(settings, effective_profile)


__all__ = ["cli_config"]
