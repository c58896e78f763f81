"""Profile service: upsert, lookup, deletion and experience/education lists.

Profiles embed their experience and education entries. Adding an entry
prepends it; removing one looks it up by id in the list it belongs to.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from sqlalchemy.orm import Session, joinedload

from devconnector.data.db import is_valid_id, new_id
from devconnector.data.models import Profile
from devconnector.services.common import commit_document
from devconnector.services.errors import NotFoundError
from devconnector.services.users import load_user

logger = logging.getLogger(__name__)

__all__ = [
    "SOCIAL_NETWORKS",
    "ProfileFields",
    "add_education",
    "add_experience",
    "delete_account",
    "get_own_profile",
    "get_profile_by_user",
    "list_profiles",
    "merge_profile",
    "profile_to_dict",
    "remove_education",
    "remove_experience",
    "upsert_profile",
]

SOCIAL_NETWORKS = ("youtube", "twitter", "facebook", "linkedin", "instagram")

_NO_PROFILE = "There is no profile for this user"


@dataclass(frozen=True)
class ProfileFields:
    """Fields supplied for a profile create/update.

    ``None`` means "not supplied": merging leaves the stored value alone.
    """

    status: str | None = None
    skills: list[str] | None = None
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    social: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ProfileFields:
        """Build from request data. Empty values count as not supplied."""
        values = {
            f.name: data[f.name]
            for f in fields(cls)
            if f.name != "social" and data.get(f.name)
        }
        social = {name: data[name] for name in SOCIAL_NETWORKS if data.get(name)}
        return cls(**values, social=social)


def merge_profile(profile: Profile, update: ProfileFields) -> None:
    """Apply ``update`` to ``profile``: supplied fields overwrite, others are kept.

    Social links are merged per network.
    """
    for f in fields(update):
        if f.name == "social":
            continue
        value = getattr(update, f.name)
        if value is not None:
            setattr(profile, f.name, list(value) if f.name == "skills" else value)
    if update.social:
        profile.social = {**(profile.social or {}), **update.social}


def profile_to_dict(profile: Profile) -> dict:
    """Convert a Profile model to a dictionary with its user's name and avatar."""
    return {
        "id": profile.id,
        "user": {
            "id": profile.user.id,
            "name": profile.user.name,
            "avatar": profile.user.avatar,
        },
        "company": profile.company,
        "website": profile.website,
        "location": profile.location,
        "bio": profile.bio,
        "status": profile.status,
        "githubusername": profile.githubusername,
        "skills": list(profile.skills or []),
        "social": dict(profile.social or {}),
        "experience": list(profile.experience or []),
        "education": list(profile.education or []),
        "date": profile.date,
    }


def _find_profile(session: Session, user_id: str) -> Profile | None:
    if not is_valid_id(user_id):
        return None
    return (
        session.query(Profile)
        .options(joinedload(Profile.user))
        .filter(Profile.user_id == user_id)
        .first()
    )


def _require_profile(session: Session, user_id: str, msg: str = _NO_PROFILE) -> Profile:
    profile = _find_profile(session, user_id)
    if profile is None:
        raise NotFoundError(msg)
    return profile


def get_own_profile(session: Session, user_id: str) -> dict:
    """Return the caller's profile."""
    return profile_to_dict(_require_profile(session, user_id))


def get_profile_by_user(session: Session, user_id: str) -> dict:
    """Return the profile owned by ``user_id``; malformed ids are not found."""
    return profile_to_dict(_require_profile(session, user_id, "Profile not found"))


def list_profiles(session: Session) -> list[dict]:
    profiles = session.query(Profile).options(joinedload(Profile.user)).order_by(Profile.date).all()
    return [profile_to_dict(p) for p in profiles]


def upsert_profile(session: Session, user_id: str, update: ProfileFields) -> dict:
    """Create the caller's profile, or merge ``update`` into the existing one."""
    profile = _find_profile(session, user_id)
    if profile is None:
        user = load_user(session, user_id)
        profile = Profile(user=user, status=update.status or "")
        session.add(profile)
        logger.info("Creating profile for user %s", user_id)
    merge_profile(profile, update)
    commit_document(session)
    return profile_to_dict(profile)


def delete_account(session: Session, user_id: str) -> None:
    """Remove the caller's profile and user record. Their posts are kept."""
    user = load_user(session, user_id)
    session.delete(user)
    commit_document(session)
    logger.info("Deleted user %s and their profile", user_id)


def _add_entry(session: Session, user_id: str, list_name: str, entry: Mapping[str, Any]) -> dict:
    profile = _require_profile(session, user_id)
    new_entry = {"id": new_id(), **entry}
    # Assign a new list so the JSON column is marked dirty.
    setattr(profile, list_name, [new_entry, *getattr(profile, list_name)])
    commit_document(session)
    return profile_to_dict(profile)


def _remove_entry(
    session: Session, user_id: str, list_name: str, entry_id: str, missing_msg: str
) -> dict:
    profile = _require_profile(session, user_id)
    entries = getattr(profile, list_name)
    remaining = [e for e in entries if e.get("id") != entry_id]
    if len(remaining) == len(entries):
        raise NotFoundError(missing_msg)
    setattr(profile, list_name, remaining)
    commit_document(session)
    return profile_to_dict(profile)


def add_experience(session: Session, user_id: str, entry: Mapping[str, Any]) -> dict:
    """Prepend an experience entry to the caller's profile."""
    return _add_entry(session, user_id, "experience", entry)


def remove_experience(session: Session, user_id: str, exp_id: str) -> dict:
    """Remove the experience entry with ``exp_id`` from the caller's profile."""
    return _remove_entry(session, user_id, "experience", exp_id, "Experience not found")


def add_education(session: Session, user_id: str, entry: Mapping[str, Any]) -> dict:
    """Prepend an education entry to the caller's profile."""
    return _add_entry(session, user_id, "education", entry)


def remove_education(session: Session, user_id: str, edu_id: str) -> dict:
    """Remove the education entry with ``edu_id`` from the caller's profile."""
    return _remove_entry(session, user_id, "education", edu_id, "Education not found")
