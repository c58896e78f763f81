"""Error taxonomy shared by the services.

Services raise these; the API layer maps each to its status code and body.
Anything that is not an ``ApiError`` is an unexpected failure and becomes a
generic 500.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = [
    "ApiError",
    "AuthenticationError",
    "AuthorizationError",
    "BadRequestError",
    "ConflictError",
    "FieldError",
    "NotFoundError",
    "ValidationError",
]


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation message."""

    msg: str
    param: str | None = None
    location: str = "body"

    def to_dict(self) -> dict[str, Any]:
        return {"msg": self.msg, "param": self.param, "location": self.location}


class ApiError(Exception):
    """Base class for errors that carry a client-facing status and body."""

    status_code = 500

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg

    def body(self) -> dict[str, Any]:
        return {"msg": self.msg}


class ValidationError(ApiError):
    """Request fields failed validation (400)."""

    status_code = 400

    def __init__(self, errors: list[FieldError]) -> None:
        super().__init__("; ".join(e.msg for e in errors))
        self.errors = errors

    def body(self) -> dict[str, Any]:
        return {"errors": [e.to_dict() for e in self.errors]}


class AuthenticationError(ApiError):
    """Login failed. Deliberately does not say whether email or password was wrong."""

    status_code = 400

    def __init__(self, msg: str = "Invalid Credentials") -> None:
        super().__init__(msg)

    def body(self) -> dict[str, Any]:
        return {"errors": [{"msg": self.msg}]}


class BadRequestError(ApiError):
    """The request is well formed but not applicable to the current state (400)."""

    status_code = 400


class AuthorizationError(ApiError):
    """Missing/invalid token or the caller does not own the resource (401)."""

    status_code = 401


class NotFoundError(ApiError):
    """The referenced document does not exist or the reference is malformed (404)."""

    status_code = 404


class ConflictError(ApiError):
    """The document changed between read and write (409)."""

    status_code = 409

    def __init__(self, msg: str = "Resource was modified concurrently, retry the request") -> None:
        super().__init__(msg)
