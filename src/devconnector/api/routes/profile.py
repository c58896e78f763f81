"""Profile routes, including experience and education sub-resources."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Path

from devconnector.api.dependencies import CurrentUserId, SessionDep
from devconnector.api.schemas.common import MessageResponse
from devconnector.api.schemas.profiles import (
    EducationRequest,
    ExperienceRequest,
    ProfileRequest,
    ProfileResponse,
)
from devconnector.services.profiles import (
    ProfileFields,
    add_education,
    add_experience,
    delete_account,
    get_own_profile,
    get_profile_by_user,
    list_profiles,
    remove_education,
    remove_experience,
    upsert_profile,
)

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/me", response_model=ProfileResponse)
def get_my_profile(current_user_id: CurrentUserId, session: SessionDep) -> ProfileResponse:
    """Get the caller's profile."""
    return ProfileResponse(**get_own_profile(session, current_user_id))


@router.post("", response_model=ProfileResponse)
def create_or_update_profile(
    data: ProfileRequest, current_user_id: CurrentUserId, session: SessionDep
) -> ProfileResponse:
    """Create the caller's profile, or update it with the supplied fields."""
    fields = ProfileFields.from_mapping(data.model_dump(exclude_none=True))
    return ProfileResponse(**upsert_profile(session, current_user_id, fields))


@router.get("", response_model=list[ProfileResponse])
def get_all_profiles(session: SessionDep) -> list[ProfileResponse]:
    """List every profile with its owner's name and avatar. Public."""
    return [ProfileResponse(**p) for p in list_profiles(session)]


@router.get("/user/{user_id}", response_model=ProfileResponse)
def get_profile_by_user_id(
    user_id: Annotated[str, Path(description="Owner's user id")],
    session: SessionDep,
) -> ProfileResponse:
    """Get the profile owned by a user. Public."""
    return ProfileResponse(**get_profile_by_user(session, user_id))


@router.delete("", response_model=MessageResponse)
def delete_profile(current_user_id: CurrentUserId, session: SessionDep) -> MessageResponse:
    """Delete the caller's profile and account."""
    delete_account(session, current_user_id)
    return MessageResponse(msg="User deleted")


@router.put("/experience", response_model=ProfileResponse)
def add_profile_experience(
    data: ExperienceRequest, current_user_id: CurrentUserId, session: SessionDep
) -> ProfileResponse:
    """Add an experience entry to the top of the caller's profile."""
    entry = data.model_dump(by_alias=True, mode="json")
    return ProfileResponse(**add_experience(session, current_user_id, entry))


@router.delete("/experience/{exp_id}", response_model=ProfileResponse)
def delete_profile_experience(
    exp_id: Annotated[str, Path(description="Experience entry id")],
    current_user_id: CurrentUserId,
    session: SessionDep,
) -> ProfileResponse:
    """Remove one of the caller's experience entries."""
    return ProfileResponse(**remove_experience(session, current_user_id, exp_id))


@router.put("/education", response_model=ProfileResponse)
def add_profile_education(
    data: EducationRequest, current_user_id: CurrentUserId, session: SessionDep
) -> ProfileResponse:
    """Add an education entry to the top of the caller's profile."""
    entry = data.model_dump(by_alias=True, mode="json")
    return ProfileResponse(**add_education(session, current_user_id, entry))


@router.delete("/education/{edu_id}", response_model=ProfileResponse)
def delete_profile_education(
    edu_id: Annotated[str, Path(description="Education entry id")],
    current_user_id: CurrentUserId,
    session: SessionDep,
) -> ProfileResponse:
    """Remove one of the caller's education entries."""
    return ProfileResponse(**remove_education(session, current_user_id, edu_id))
