"""Shared Pydantic helpers for request validation.

Request models declare their fields with ``validate_default=True`` so that a
missing field runs through the same validator as an empty one and produces a
readable message instead of pydantic's generic "Field required".
"""

from __future__ import annotations

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel


def require_text(value: str | None, message: str) -> str:
    """Return ``value`` stripped, or raise ``ValueError(message)`` if blank."""
    if value is None or not value.strip():
        raise ValueError(message)
    return value.strip()


def require_email(value: str | None, message: str = "Please include a valid email") -> str:
    """Return ``value`` if it is a syntactically valid email address."""
    if value is None:
        raise ValueError(message)
    try:
        validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(message) from exc
    return value.strip()


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    msg: str


class TokenResponse(BaseModel):
    """Body returned by register and login."""

    token: str
