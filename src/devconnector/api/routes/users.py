"""User registration route."""

from __future__ import annotations

from fastapi import APIRouter

from devconnector.api.dependencies import SessionDep, SettingsDep
from devconnector.api.schemas.common import TokenResponse
from devconnector.api.schemas.users import RegisterRequest
from devconnector.services.users import register_user

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=TokenResponse)
def register(data: RegisterRequest, session: SessionDep, settings: SettingsDep) -> TokenResponse:
    """Register a user and return a token for the new account.

    Raises:
        ValidationError: 400 if a field is invalid or the email is taken.
    """
    token = register_user(session, data.name, data.email, data.password, settings.jwt_secret)
    return TokenResponse(token=token)
