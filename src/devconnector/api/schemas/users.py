"""Pydantic schemas for user and auth endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from devconnector.api.schemas.common import require_email, require_text

MIN_PASSWORD_LENGTH = 6


class RegisterRequest(BaseModel):
    """Request schema for creating an account."""

    name: str | None = Field(None, validate_default=True)
    email: str | None = Field(None, validate_default=True)
    password: str | None = Field(None, validate_default=True)

    @field_validator("name")
    @classmethod
    def _name_required(cls, value: str | None) -> str:
        return require_text(value, "Name is required")

    @field_validator("email")
    @classmethod
    def _email_valid(cls, value: str | None) -> str:
        return require_email(value)

    @field_validator("password")
    @classmethod
    def _password_length(cls, value: str | None) -> str:
        if value is None or len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Please enter a password with {MIN_PASSWORD_LENGTH} or more characters"
            )
        return value


class LoginRequest(BaseModel):
    """Request schema for logging in."""

    email: str | None = Field(None, validate_default=True)
    password: str | None = Field(None, validate_default=True)

    @field_validator("email")
    @classmethod
    def _email_valid(cls, value: str | None) -> str:
        return require_email(value)

    @field_validator("password")
    @classmethod
    def _password_required(cls, value: str | None) -> str:
        if not value:
            raise ValueError("Password is required")
        return value


class UserResponse(BaseModel):
    """The authenticated user's record, without the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    avatar: str | None = None
    date: datetime
