"""Shared dependencies for API routes."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from devconnector.config import Settings
from devconnector.services.credentials import InvalidTokenError, verify_token
from devconnector.services.errors import AuthorizationError

logger = logging.getLogger(__name__)

AUTH_HEADER = "x-auth-token"


def get_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


def get_session(request: Request) -> Iterator[Session]:
    """Yield a store session scoped to the request."""
    with request.app.state.database.session() as session:
        yield session


def get_current_user_id(
    settings: Annotated[Settings, Depends(get_settings)],
    x_auth_token: Annotated[
        str | None,
        Header(alias=AUTH_HEADER, description="Token returned by /api/users or /api/auth."),
    ] = None,
) -> str:
    """Authenticate the request and return the caller's user id.

    Raises:
        AuthorizationError: If the token is missing (the handler never runs)
            or fails verification.
    """
    if not x_auth_token:
        raise AuthorizationError("No token, authorization denied")
    try:
        return verify_token(x_auth_token, settings.jwt_secret)
    except InvalidTokenError as exc:
        logger.debug("Rejected token: %s", exc)
        raise AuthorizationError("Token is not valid") from exc


SessionDep = Annotated[Session, Depends(get_session)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
CurrentUserId = Annotated[str, Depends(get_current_user_id)]
