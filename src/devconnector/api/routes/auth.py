"""Login and current-identity routes."""

from __future__ import annotations

from fastapi import APIRouter

from devconnector.api.dependencies import CurrentUserId, SessionDep, SettingsDep
from devconnector.api.schemas.common import TokenResponse
from devconnector.api.schemas.users import LoginRequest, UserResponse
from devconnector.services.users import authenticate_user, get_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("", response_model=UserResponse)
def get_current_user(current_user_id: CurrentUserId, session: SessionDep) -> UserResponse:
    """Return the authenticated user's record without the password."""
    return UserResponse(**get_user(session, current_user_id))


@router.post("", response_model=TokenResponse)
def login(data: LoginRequest, session: SessionDep, settings: SettingsDep) -> TokenResponse:
    """Authenticate with email and password and get a token.

    Unknown email and wrong password both answer 400 "Invalid Credentials".
    """
    token = authenticate_user(session, data.email, data.password, settings.jwt_secret)
    return TokenResponse(token=token)
