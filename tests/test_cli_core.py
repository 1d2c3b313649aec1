"""CLI core stories: traceback state, main entry, help, info, version, unknown command."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner

from poodle import __init__conf__
from poodle.adapters import cli as cli_mod
from poodle.composition import build_testing


@pytest.mark.os_agnostic
def test_snapshot_traceback_state_returns_disabled_by_default(managed_traceback_state: None) -> None:
    assert cli_mod.snapshot_traceback_state() == (False, False)


@pytest.mark.os_agnostic
def test_apply_traceback_preferences_enables_both_flags(managed_traceback_state: None) -> None:
    cli_mod.apply_traceback_preferences(True)

    assert lib_cli_exit_tools.config.traceback is True
    assert lib_cli_exit_tools.config.traceback_force_color is True


@pytest.mark.os_agnostic
def test_restore_traceback_state_resets_flags_to_previous(managed_traceback_state: None) -> None:
    previous = cli_mod.snapshot_traceback_state()
    cli_mod.apply_traceback_preferences(True)

    cli_mod.restore_traceback_state(previous)

    assert lib_cli_exit_tools.config.traceback is False
    assert lib_cli_exit_tools.config.traceback_force_color is False


@pytest.mark.os_agnostic
def test_traceback_flag_is_active_during_info_command(
    monkeypatch: pytest.MonkeyPatch,
    managed_traceback_state: None,
) -> None:
    notes: list[tuple[bool, bool]] = []

    def record() -> None:
        notes.append((lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color))

    monkeypatch.setattr(__init__conf__, "print_info", record)

    exit_code = cli_mod.main(["--traceback", "info"], services_factory=build_testing)

    assert exit_code == 0
    assert notes == [(True, True)]


@pytest.mark.os_agnostic
def test_traceback_flags_restored_after_info_command(
    monkeypatch: pytest.MonkeyPatch,
    managed_traceback_state: None,
) -> None:
    monkeypatch.setattr(__init__conf__, "print_info", lambda: None)

    cli_mod.main(["--traceback", "info"], services_factory=build_testing)

    assert lib_cli_exit_tools.config.traceback is False
    assert lib_cli_exit_tools.config.traceback_force_color is False


@pytest.mark.os_agnostic
def test_main_requires_services_factory() -> None:
    with pytest.raises(ValueError, match="services_factory is required"):
        cli_mod.main(["info"])


@pytest.mark.os_agnostic
def test_info_prints_package_metadata(
    managed_traceback_state: None,
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert cli_mod.main(["info"], services_factory=build_testing) == 0

    out = capsys.readouterr().out
    assert f"Info for {__init__conf__.name}:" in out
    assert __init__conf__.version in out


@pytest.mark.os_agnostic
def test_info_runs_with_production_services(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
) -> None:
    result = cli_runner.invoke(cli_mod.cli, ["info"], obj=production_factory)

    assert result.exit_code == 0
    assert __init__conf__.shell_command in result.output


@pytest.mark.os_agnostic
def test_cli_without_arguments_prints_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli_mod.cli, [], obj=build_testing)

    assert result.exit_code == 0
    assert "Usage:" in result.output
    for command in ("info", "config", "send"):
        assert command in result.output


@pytest.mark.os_agnostic
def test_version_option_reports_package_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli_mod.cli, ["--version"], obj=build_testing)

    assert result.exit_code == 0
    assert f"{__init__conf__.shell_command} version {__init__conf__.version}" in result.output


@pytest.mark.os_agnostic
def test_unknown_command_is_a_usage_error(managed_traceback_state: None) -> None:
    assert cli_mod.main(["does-not-exist"], services_factory=build_testing) == 2


@pytest.mark.os_agnostic
def test_profile_is_passed_to_config_loader(
    cli_runner: CliRunner,
    inject_services: Callable[..., Callable[[], Any]],
) -> None:
    captured: list[str | None] = []
    factory = inject_services(captured_profiles=captured)

    result = cli_runner.invoke(cli_mod.cli, ["--profile", "staging", "info"], obj=factory)

    assert result.exit_code == 0
    assert captured == ["staging"]


@pytest.mark.os_agnostic
def test_root_without_services_factory_is_a_bug(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli_mod.cli, ["info"])

    assert result.exit_code != 0
    assert isinstance(result.exception, RuntimeError)
