"""Tests for password hashing, tokens and avatars."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from devconnector.services.credentials import (
    TOKEN_LIFETIME,
    InvalidTokenError,
    gravatar_url,
    hash_password,
    issue_token,
    verify_password,
    verify_token,
)


def test_hash_is_salted_and_verifies() -> None:
    """Test hashing salts each call and verifies the original password."""
    first = hash_password("secret1")
    second = hash_password("secret1")

    assert first != second
    assert "secret1" not in first
    assert verify_password("secret1", first)
    assert verify_password("secret1", second)
    assert not verify_password("secret2", first)


@pytest.mark.parametrize("stored", ["", "no-colon", "zz:zz", "abcd:"])
def test_malformed_stored_hash_never_matches(stored: str) -> None:
    """Test malformed stored hashes never verify."""
    assert not verify_password("secret1", stored)


def test_token_round_trip() -> None:
    """Test a freshly issued token verifies to its user id."""
    token = issue_token("a" * 32, "key")
    assert verify_token(token, "key") == "a" * 32


def test_token_payload_and_lifetime() -> None:
    """Test the token payload shape and 100 hour lifetime."""
    now = datetime.now(UTC).replace(microsecond=0)
    token = issue_token("user-1", "key", now=now)

    payload = jwt.decode(token, "key", algorithms=["HS256"])
    assert payload["user"] == {"id": "user-1"}
    assert payload["exp"] - payload["iat"] == int(TOKEN_LIFETIME.total_seconds())
    assert TOKEN_LIFETIME == timedelta(hours=100)


def test_token_with_wrong_key_is_rejected() -> None:
    """Test tokens signed with another key are refused."""
    token = issue_token("user-1", "key")
    with pytest.raises(InvalidTokenError):
        verify_token(token, "other-key")


def test_expired_token_is_rejected() -> None:
    """Test expired tokens are refused."""
    token = issue_token("user-1", "key", now=datetime.now(UTC) - timedelta(hours=101))
    with pytest.raises(InvalidTokenError):
        verify_token(token, "key")


def test_garbage_and_userless_tokens_are_rejected() -> None:
    """Test garbage strings and tokens without a user id are refused."""
    with pytest.raises(InvalidTokenError):
        verify_token("not-a-token", "key")

    userless = jwt.encode(
        {"sub": "x", "exp": datetime.now(UTC) + timedelta(hours=1)}, "key", algorithm="HS256"
    )
    with pytest.raises(InvalidTokenError):
        verify_token(userless, "key")


def test_token_without_expiry_is_rejected() -> None:
    """Test a correctly signed token that never expires is refused."""
    forever = jwt.encode({"user": {"id": "a" * 32}}, "key", algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        verify_token(forever, "key")


def test_gravatar_url_normalizes_email() -> None:
    """Test the avatar URL ignores case and surrounding spaces."""
    url = gravatar_url("  A@X.com ")
    assert url == gravatar_url("a@x.com")
    assert url.startswith("//www.gravatar.com/avatar/")
    assert url.endswith("?s=200&r=pg&d=mm")
