"""Exit code mapping for failed sends."""

from __future__ import annotations

import pytest

from poodle.adapters.cli.exit_codes import ExitCode, exit_code_for
from poodle.domain.enums import ErrorKind
from poodle.domain.results import PoodleError


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        (ErrorKind.VALIDATION_ERROR, ExitCode.INVALID_ARGUMENT),
        (ErrorKind.UNPROCESSABLE_ENTITY, ExitCode.INVALID_ARGUMENT),
        (ErrorKind.UNAUTHORIZED, ExitCode.PERMISSION_DENIED),
        (ErrorKind.FORBIDDEN, ExitCode.PERMISSION_DENIED),
        (ErrorKind.PAYMENT_REQUIRED, ExitCode.PERMISSION_DENIED),
        (ErrorKind.RATE_LIMIT_EXCEEDED, ExitCode.RATE_LIMITED),
        (ErrorKind.TIMEOUT, ExitCode.TIMEOUT),
        (ErrorKind.SERVER_ERROR, ExitCode.DELIVERY_FAILURE),
        (ErrorKind.NETWORK_ERROR, ExitCode.DELIVERY_FAILURE),
        (ErrorKind.DNS_ERROR, ExitCode.DELIVERY_FAILURE),
        (ErrorKind.SSL_ERROR, ExitCode.DELIVERY_FAILURE),
    ],
)
def test_every_error_kind_has_an_exit_code(kind: ErrorKind, expected: ExitCode) -> None:
    assert exit_code_for(PoodleError(kind=kind, message="x")) is expected


@pytest.mark.os_agnostic
def test_configuration_failure_maps_to_config_error() -> None:
    error = PoodleError(kind=ErrorKind.VALIDATION_ERROR, message="x", details={"source": "configuration"})

    assert exit_code_for(error) is ExitCode.CONFIG_ERROR


@pytest.mark.os_agnostic
def test_exit_codes_follow_posix_conventions() -> None:
    assert int(ExitCode.INVALID_ARGUMENT) == 22
    assert int(ExitCode.DELIVERY_FAILURE) == 69
    assert int(ExitCode.RATE_LIMITED) == 75
    assert int(ExitCode.CONFIG_ERROR) == 78
    assert int(ExitCode.TIMEOUT) == 110
