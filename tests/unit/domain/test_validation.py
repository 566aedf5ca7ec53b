import pytest

from src.domain.errors import ErrorCode
from src.domain.validation import normalize_email, validate_email, validate_username


def test_normalize_email_trims_and_lowercases():
    assert normalize_email("  Alice@Example.COM ") == "alice@example.com"


def test_normalize_email_handles_none():
    assert normalize_email(None) == ""


@pytest.mark.parametrize("username", ["abc", "alice_01", "A" * 30, "  bob  "])
def test_valid_usernames(username):
    result = validate_username(username)

    assert result.is_ok()
    assert result.value == username.strip()


@pytest.mark.parametrize(
    "username", ["", "   ", "ab", "A" * 31, "alice smith", "alice-1", "al!ce"]
)
def test_invalid_usernames(username):
    result = validate_username(username)

    assert result.is_err()
    assert result.error.code == ErrorCode.VALIDATION_ERROR


def test_valid_email_is_normalized():
    result = validate_email(" Alice@Example.com ")

    assert result.is_ok()
    assert result.value == "alice@example.com"


@pytest.mark.parametrize("email", ["", "alice", "alice@", "@example.com", "a b@example.com"])
def test_invalid_emails(email):
    result = validate_email(email)

    assert result.is_err()
    assert result.error.code == ErrorCode.VALIDATION_ERROR
