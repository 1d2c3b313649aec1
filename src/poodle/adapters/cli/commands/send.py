"""Send one email from the command line.

Explicit ``--api-key`` / ``--base-url`` / ``--timeout`` / ``--debug`` options
take precedence over the ``[poodle]`` configuration section, which in turn
beats the ``POODLE_*`` environment variables.
"""

from __future__ import annotations

import logging
from typing import Any

import lib_log_rich.runtime
import rich_click as click

from poodle.adapters.config.loader import poodle_settings
from poodle.domain.results import PoodleError, PoodleResponse

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import get_cli_context
from ..exit_codes import exit_code_for

logger = logging.getLogger(__name__)


def _explicit_options(
    api_key: str | None, base_url: str | None, timeout: int | None, debug: bool | None
) -> dict[str, Any]:
    """Collect only the options given on the command line."""
    options = {"api_key": api_key, "base_url": base_url, "timeout": timeout, "debug": debug}
    return {key: value for key, value in options.items() if value is not None}


def _report_success(response: PoodleResponse) -> None:
    click.echo(f"Email accepted: {response.message}")
    limit = response.rate_limit
    if limit.remaining is not None and limit.limit is not None:
        click.echo(f"Rate limit: {limit.remaining}/{limit.limit} remaining")


def _report_failure(error: PoodleError) -> None:
    click.echo(f"Error: {error}", err=True)
    if error.status_code is not None:
        click.echo(f"HTTP status: {error.status_code}", err=True)
    if error.retry_after is not None:
        click.echo(f"Retry after: {error.retry_after}s", err=True)


@click.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--from", "from_address", required=True, help="Sender address")
@click.option("--to", "to", required=True, help="Recipient address")
@click.option("--subject", required=True, help="Email subject line")
@click.option("--html", default=None, help="HTML body")
@click.option("--text", default=None, help="Plain-text body")
@click.option("--api-key", default=None, help="API key (overrides config and POODLE_API_KEY)")
@click.option("--base-url", default=None, help="API base URL (overrides config and POODLE_BASE_URL)")
@click.option("--timeout", type=int, default=None, help="Request timeout in milliseconds")
@click.option("--debug/--no-debug", default=None, help="Log request and response traffic")
@click.pass_context
def cli_send(
    ctx: click.Context,
    from_address: str,
    to: str,
    subject: str,
    html: str | None,
    text: str | None,
    api_key: str | None,
    base_url: str | None,
    timeout: int | None,
    debug: bool | None,
) -> None:
    """Send one email through the Poodle API.

    At least one of --html or --text is required. Exits 0 once the API has
    accepted the message, otherwise with an exit code derived from the error
    kind.
    """
    cli_ctx = get_cli_context(ctx)
    options = _explicit_options(api_key, base_url, timeout, debug)

    extra = {"command": "send", "recipient": to, "profile": cli_ctx.profile}
    with lib_log_rich.runtime.bind(job_id="cli-send", extra=extra):
        result = cli_ctx.services.send_email(
            from_address,
            to,
            subject,
            html=html,
            text=text,
            config=options,
            settings=poodle_settings(cli_ctx.config),
        )
        if isinstance(result, PoodleError):
            _report_failure(result)
            raise SystemExit(exit_code_for(result))
        _report_success(result)


__all__ = ["cli_send"]
