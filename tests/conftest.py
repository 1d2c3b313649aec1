"""Shared pytest fixtures for client, HTTP and CLI tests.

- All shared fixtures live here and are picked up via conftest discovery.
- The wire is faked with ``httpx.MockTransport``; no test touches the network.
- ``POODLE_*`` environment variables and the layered ``[poodle]`` section are
  isolated for every test so a developer's own credentials never leak in.
"""

from __future__ import annotations

import contextlib
import os
import re
import tempfile
from collections.abc import Callable, Iterator
from dataclasses import fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import httpx
import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

from poodle.adapters.config.resolver import PoodleConfig

if TYPE_CHECKING:
    from poodle.adapters.memory.email import OutboxSpy
    from poodle.composition import AppServices

_COVERAGE_BASENAME = ".coverage.poodle"

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))

POODLE_ENV_VARS: tuple[str, ...] = ("POODLE_API_KEY", "POODLE_BASE_URL", "POODLE_TIMEOUT", "POODLE_DEBUG")

Handler = Callable[[httpx.Request], httpx.Response]


def _purge_stale_coverage_files(cov_path: Path) -> None:
    """Delete leftover SQLite database and journal files from crashed runs."""
    for suffix in ("", "-journal", "-wal", "-shm"):
        with contextlib.suppress(FileNotFoundError):
            Path(str(cov_path) + suffix).unlink()


def pytest_configure(config: pytest.Config) -> None:
    """Redirect the coverage database to a local temp directory.

    Runs before pytest-cov creates its ``Coverage()`` object so the
    ``COVERAGE_FILE`` value is honoured however pytest is invoked.
    """
    if "COVERAGE_FILE" not in os.environ:
        cov_path = Path(tempfile.gettempdir()) / _COVERAGE_BASENAME
        _purge_stale_coverage_files(cov_path)
        os.environ["COVERAGE_FILE"] = str(cov_path)


def _remove_ansi_codes(text: str) -> str:
    """Return *text* stripped of ANSI escape sequences."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


def _snapshot_cli_config() -> dict[str, object]:
    """Capture every attribute from ``lib_cli_exit_tools.config``."""
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    """Reapply a configuration snapshot captured by ``_snapshot_cli_config``."""
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


# ======================== Isolation ========================


@pytest.fixture(autouse=True)
def isolated_poodle_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove ``POODLE_*`` variables so each test controls the environment layer."""
    for name in POODLE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def isolated_app_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make the client see an empty ``[poodle]`` section instead of the user's config files.

    ``tests/test_config_loader.py`` exercises the real loader directly.
    """
    monkeypatch.setattr("poodle.client.load_app_settings", lambda **_kwargs: {})


# ======================== CLI ========================


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test."""
    return CliRunner()


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return _remove_ansi_codes(value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test.

    Use this whenever a test reads or mutates the global
    ``lib_cli_exit_tools.config`` traceback flags.
    """
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for tests."""
    from poodle.composition import build_production

    return build_production


@pytest.fixture
def outbox_spy() -> OutboxSpy:
    """Provide a fresh OutboxSpy capturing sends."""
    from poodle.adapters.memory import OutboxSpy

    return OutboxSpy()


@pytest.fixture
def inject_services(outbox_spy: OutboxSpy) -> Callable[..., Callable[[], AppServices]]:
    """Return a factory building CLI services around a Config and the outbox spy.

    Only the I/O boundaries are replaced: ``get_config`` returns the given
    Config, sends land in ``outbox_spy``. Profiles requested through
    ``get_config`` are appended to *captured_profiles* when given.

    Example:
        def test_send(cli_runner, config_factory, inject_services, outbox_spy) -> None:
            factory = inject_services(config_factory({"poodle": {"api_key": "k"}}))
            cli_runner.invoke(cli, ["send", ...], obj=factory)
            assert outbox_spy.sent
    """
    from poodle.adapters.memory import init_logging_in_memory
    from poodle.composition import AppServices, resolve_config

    def _inject(
        config: Config | None = None,
        captured_profiles: list[str | None] | None = None,
    ) -> Callable[[], AppServices]:
        effective = config if config is not None else Config({}, {})

        def _fake_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            if captured_profiles is not None:
                captured_profiles.append(profile)
            return effective

        services = AppServices(
            get_config=_fake_get_config,
            resolve_config=resolve_config,
            send_email=outbox_spy.send,
            init_logging=init_logging_in_memory,
        )
        return lambda: services

    return _inject


# ======================== Configuration ========================


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config lru_cache before the test."""
    from poodle.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts without filesystem I/O."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def poodle_config() -> PoodleConfig:
    """A valid resolved configuration pointing at a fake host."""
    return PoodleConfig(api_key="test_api_key", base_url="https://api.poodle.test", timeout=5000)


# ======================== HTTP ========================


def accepted_response(
    message: str = "Email queued for sending",
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build the 202 response the API returns for an accepted email."""
    default_headers = {
        "ratelimit-limit": "2",
        "ratelimit-remaining": "1",
        "ratelimit-reset": "1640995200",
    }
    return httpx.Response(
        202,
        json={"success": True, "message": message},
        headers={**default_headers, **(headers or {})},
    )


@pytest.fixture
def make_accepted() -> Callable[..., httpx.Response]:
    """Provide :func:`accepted_response` to tests that shape their own 202."""
    return accepted_response


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    """Collect requests seen by transports built with ``mock_http_client``."""
    return []


@pytest.fixture
def mock_http_client(recorded_requests: list[httpx.Request]) -> Iterator[Callable[[Handler], httpx.Client]]:
    """Return a factory for httpx clients backed by ``MockTransport``.

    Every request is appended to ``recorded_requests`` before *handler* runs.
    Clients are closed after the test.

    Example:
        def test_ok(mock_http_client, poodle_config) -> None:
            client = mock_http_client(lambda request: accepted_response())
            assert post(poodle_config, "/v1/send-email", {}, client=client).ok
    """
    clients: list[httpx.Client] = []

    def _factory(handler: Handler) -> httpx.Client:
        def _recording(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return handler(request)

        client = httpx.Client(transport=httpx.MockTransport(_recording))
        clients.append(client)
        return client

    yield _factory

    for client in clients:
        client.close()


@pytest.fixture
def accepting_client(mock_http_client: Callable[[Handler], httpx.Client]) -> httpx.Client:
    """httpx client whose every request is answered with a 202."""
    return mock_http_client(lambda _request: accepted_response())
