"""Email model stories: validation order, messages, size ceiling, serialization."""

from __future__ import annotations

import pytest

from poodle.domain.email import MAX_CONTENT_SIZE, Email, build_email, serialize_email, validate_email
from poodle.domain.errors import InvalidEmailError

SENDER = "sender@example.com"
RECIPIENT = "recipient@example.com"


def _email(**overrides: object) -> Email:
    values: dict[str, object] = {
        "from_address": SENDER,
        "to": RECIPIENT,
        "subject": "Welcome",
        "html": "<h1>Hello</h1>",
        "text": None,
    }
    values.update(overrides)
    return Email(**values)  # type: ignore[arg-type]


@pytest.mark.os_agnostic
def test_valid_html_email_passes_validation() -> None:
    validate_email(_email())


@pytest.mark.os_agnostic
def test_valid_text_only_email_passes_validation() -> None:
    validate_email(_email(html=None, text="Hello"))


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"from_address": None}, "From email address is required"),
        ({"from_address": 42}, "From email address must be a string"),
        ({"from_address": ""}, "From email address cannot be empty"),
        ({"from_address": "not-an-email"}, "Invalid from email address: not-an-email"),
        ({"to": None}, "To email address is required"),
        ({"to": ""}, "To email address cannot be empty"),
        ({"to": "user@localhost"}, "Invalid to email address: user@localhost"),
        ({"subject": None}, "Subject is required"),
        ({"subject": 7}, "Subject must be a string"),
        ({"subject": ""}, "Subject cannot be empty"),
        ({"html": None, "text": None}, "Either HTML or text content is required"),
        ({"html": "", "text": ""}, "Either HTML or text content is required"),
        ({"html": b"<p>bytes</p>"}, "HTML and text content must be strings"),
    ],
)
def test_invalid_email_reports_exact_message(overrides: dict[str, object], message: str) -> None:
    with pytest.raises(InvalidEmailError) as exc:
        validate_email(_email(**overrides))

    assert str(exc.value) == message


@pytest.mark.os_agnostic
def test_sender_is_checked_before_recipient() -> None:
    """With several violations the first check in order wins."""
    with pytest.raises(InvalidEmailError, match="^Invalid from email address: bad$"):
        validate_email(_email(from_address="bad", to="also-bad", subject=""))


@pytest.mark.os_agnostic
def test_subject_is_checked_before_content() -> None:
    with pytest.raises(InvalidEmailError, match="^Subject cannot be empty$"):
        validate_email(_email(subject="", html=None, text=None))


@pytest.mark.os_agnostic
def test_html_at_exact_size_limit_is_accepted() -> None:
    validate_email(_email(html="a" * MAX_CONTENT_SIZE))


@pytest.mark.os_agnostic
def test_html_over_size_limit_reports_byte_counts() -> None:
    oversized = "a" * (MAX_CONTENT_SIZE + 1)

    with pytest.raises(InvalidEmailError) as exc:
        validate_email(_email(html=oversized))

    assert str(exc.value) == (
        f"HTML content size ({MAX_CONTENT_SIZE + 1} bytes) exceeds maximum allowed size ({MAX_CONTENT_SIZE} bytes)"
    )


@pytest.mark.os_agnostic
def test_text_size_is_measured_in_utf8_bytes() -> None:
    """Multi-byte characters count by their encoded length."""
    text = "é" * (MAX_CONTENT_SIZE // 2 + 1)

    with pytest.raises(InvalidEmailError, match="^Text content size"):
        validate_email(_email(html=None, text=text))


@pytest.mark.os_agnostic
def test_build_email_returns_validated_email() -> None:
    email = build_email(SENDER, RECIPIENT, "Hi", text="Hello")

    assert email == Email(SENDER, RECIPIENT, "Hi", text="Hello")


@pytest.mark.os_agnostic
def test_build_email_raises_on_invalid_input() -> None:
    with pytest.raises(InvalidEmailError):
        build_email(SENDER, "nope", "Hi", text="Hello")


@pytest.mark.os_agnostic
def test_serialize_omits_absent_content_keys() -> None:
    payload = serialize_email(_email())

    assert payload == {"from": SENDER, "to": RECIPIENT, "subject": "Welcome", "html": "<h1>Hello</h1>"}
    assert "text" not in payload


@pytest.mark.os_agnostic
def test_serialize_includes_both_parts_when_set() -> None:
    payload = _email(text="Hello").to_payload()

    assert payload["html"] == "<h1>Hello</h1>"
    assert payload["text"] == "Hello"


@pytest.mark.os_agnostic
def test_email_is_immutable() -> None:
    email = _email()

    with pytest.raises(AttributeError):
        email.subject = "changed"  # type: ignore[misc]
