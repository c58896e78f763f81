"""Credential helpers: password hashing, auth tokens and avatars.

Passwords are stored as salted PBKDF2 hashes. Tokens are HS256 JWTs that
carry ``{"user": {"id": ...}}`` and expire after 100 hours.
"""

from __future__ import annotations

import hashlib
import hmac
import os
from datetime import UTC, datetime, timedelta
from urllib.parse import urlencode

import jwt

__all__ = [
    "TOKEN_LIFETIME",
    "InvalidTokenError",
    "gravatar_url",
    "hash_password",
    "issue_token",
    "verify_password",
    "verify_token",
]

_PBKDF2_ITERATIONS = 100_000
_SALT_BYTES = 16
_TOKEN_ALGORITHM = "HS256"

TOKEN_LIFETIME = timedelta(seconds=360_000)


class InvalidTokenError(Exception):
    """Raised when a token is malformed, has a bad signature, or has expired."""


def hash_password(password: str) -> str:
    """Return a salted PBKDF2 hash for the given password.

    The result is stored as ``<salt_hex>:<hash_hex>``.
    """
    salt = os.urandom(_SALT_BYTES)
    derived = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, _PBKDF2_ITERATIONS)
    return f"{salt.hex()}:{derived.hex()}"


def verify_password(password: str, stored_hash: str) -> bool:
    """Verify a password against a stored ``salt:hash`` string."""
    try:
        salt_hex, hash_hex = stored_hash.split(":", 1)
    except ValueError:
        return False

    try:
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(hash_hex)
    except ValueError:
        return False

    candidate = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt,
        _PBKDF2_ITERATIONS,
    )
    return hmac.compare_digest(candidate, expected)


def issue_token(user_id: str, secret: str, *, now: datetime | None = None) -> str:
    """Sign a token identifying ``user_id``."""
    issued_at = now or datetime.now(UTC)
    payload = {
        "user": {"id": user_id},
        "iat": issued_at,
        "exp": issued_at + TOKEN_LIFETIME,
    }
    return jwt.encode(payload, secret, algorithm=_TOKEN_ALGORITHM)


def verify_token(token: str, secret: str) -> str:
    """Return the user id carried by ``token``.

    Raises:
        InvalidTokenError: If the signature is wrong, the token expired, or
            the payload does not identify a user.
    """
    try:
        payload = jwt.decode(
            token, secret, algorithms=[_TOKEN_ALGORITHM], options={"require": ["exp"]}
        )
    except jwt.PyJWTError as exc:
        raise InvalidTokenError(str(exc)) from exc

    user = payload.get("user")
    user_id = user.get("id") if isinstance(user, dict) else None
    if not isinstance(user_id, str) or not user_id:
        raise InvalidTokenError("Token payload has no user id")
    return user_id


def gravatar_url(email: str, *, size: int = 200, rating: str = "pg", default: str = "mm") -> str:
    """Return the protocol-relative Gravatar URL for ``email``."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({"s": size, "r": rating, "d": default})
    return f"//www.gravatar.com/avatar/{digest}?{query}"
