"""Domain enums: wire names and string behaviour."""

from __future__ import annotations

import pytest

from poodle.domain.enums import ErrorKind, OutputFormat


@pytest.mark.os_agnostic
def test_error_kind_is_closed_set() -> None:
    assert {kind.value for kind in ErrorKind} == {
        "validation_error",
        "unauthorized",
        "forbidden",
        "payment_required",
        "unprocessable_entity",
        "rate_limit_exceeded",
        "server_error",
        "network_error",
        "timeout",
        "dns_error",
        "ssl_error",
    }


@pytest.mark.os_agnostic
def test_error_kind_compares_equal_to_its_value() -> None:
    assert ErrorKind.DNS_ERROR == "dns_error"
    assert ErrorKind("timeout") is ErrorKind.TIMEOUT


@pytest.mark.os_agnostic
def test_output_format_values() -> None:
    assert [fmt.value for fmt in OutputFormat] == ["human", "json"]


@pytest.mark.os_agnostic
def test_unknown_output_format_is_rejected() -> None:
    with pytest.raises(ValueError):
        OutputFormat("yaml")
