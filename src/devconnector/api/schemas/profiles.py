"""Pydantic schemas for profile endpoints."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from devconnector.api.schemas.common import require_text


class ProfileRequest(BaseModel):
    """Request schema for creating or updating the caller's profile.

    Only ``status`` and ``skills`` are required; other fields are applied
    only when supplied.
    """

    status: str | None = Field(None, validate_default=True)
    skills: list[str] | str | None = Field(
        None, validate_default=True, description="List or comma-separated string"
    )
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None

    @field_validator("status")
    @classmethod
    def _status_required(cls, value: str | None) -> str:
        return require_text(value, "Status is required")

    @field_validator("skills")
    @classmethod
    def _split_skills(cls, value: list[str] | str | None) -> list[str]:
        items = value.split(",") if isinstance(value, str) else (value or [])
        skills = [s.strip() for s in items if s.strip()]
        if not skills:
            raise ValueError("Skills is required")
        return skills


class _DatedEntry(BaseModel):
    """Date range shared by experience and education entries.

    Blank dates count as absent, so a missing ``from`` is reported under its
    wire name and an empty ``to`` means "no end date".
    """

    from_date: date | None = Field(None, alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _blank_dates_to_none(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in ("from", "to"):
            value = data.get(key)
            if isinstance(value, str) and not value.strip():
                value = None
            data[key] = value
        return data

    @field_validator("from_date")
    @classmethod
    def _from_required(cls, value: date | None) -> date:
        if value is None:
            raise ValueError("From date is required")
        return value


class ExperienceRequest(_DatedEntry):
    """Request schema for adding an experience entry."""

    title: str | None = Field(None, validate_default=True)
    company: str | None = Field(None, validate_default=True)
    location: str | None = None

    @field_validator("title")
    @classmethod
    def _title_required(cls, value: str | None) -> str:
        return require_text(value, "Title is required")

    @field_validator("company")
    @classmethod
    def _company_required(cls, value: str | None) -> str:
        return require_text(value, "Company is required")


class EducationRequest(_DatedEntry):
    """Request schema for adding an education entry."""

    school: str | None = Field(None, validate_default=True)
    degree: str | None = Field(None, validate_default=True)
    fieldofstudy: str | None = Field(None, validate_default=True)

    @field_validator("school")
    @classmethod
    def _school_required(cls, value: str | None) -> str:
        return require_text(value, "School is required")

    @field_validator("degree")
    @classmethod
    def _degree_required(cls, value: str | None) -> str:
        return require_text(value, "Degree is required")

    @field_validator("fieldofstudy")
    @classmethod
    def _field_of_study_required(cls, value: str | None) -> str:
        return require_text(value, "Field of study is required")


class ExperienceResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    company: str
    location: str | None = None
    from_date: date = Field(alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = None


class EducationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    school: str
    degree: str
    fieldofstudy: str
    from_date: date = Field(alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = None


class ProfileUser(BaseModel):
    """Name and avatar of the profile's owner."""

    id: str
    name: str
    avatar: str | None = None


class ProfileResponse(BaseModel):
    """Response schema for a profile with its owner populated."""

    id: str
    user: ProfileUser
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    status: str
    githubusername: str | None = None
    skills: list[str] = Field(default_factory=list)
    social: dict[str, str] = Field(default_factory=dict)
    experience: list[ExperienceResponse] = Field(default_factory=list)
    education: list[EducationResponse] = Field(default_factory=list)
    date: datetime
