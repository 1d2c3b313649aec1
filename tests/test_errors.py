"""Domain error types: instantiation and message preservation."""

from __future__ import annotations

import pytest

from poodle.domain.errors import ConfigurationError, InvalidEmailError


@pytest.mark.os_agnostic
def test_configuration_error_preserves_message() -> None:
    exc = ConfigurationError("API key cannot be empty.")
    assert str(exc) == "API key cannot be empty."


@pytest.mark.os_agnostic
def test_invalid_email_error_preserves_message() -> None:
    exc = InvalidEmailError("Subject cannot be empty")
    assert str(exc) == "Subject cannot be empty"


@pytest.mark.os_agnostic
def test_invalid_email_error_is_value_error() -> None:
    with pytest.raises(ValueError, match="Subject is required"):
        raise InvalidEmailError("Subject is required")
