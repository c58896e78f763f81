"""Profile document for a user's developer profile.

Experience and education entries are embedded as JSON lists on the profile
row, newest first. The ``version`` column makes every save a compare-and-set:
a concurrent writer that loaded an older version fails with StaleDataError
instead of overwriting the other's change.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from devconnector.data.db import Base, new_id

if TYPE_CHECKING:
    from devconnector.data.models.user import User


class Profile(Base):
    """Developer profile, one per user.

    Attributes:
        id: Document identifier.
        user_id: Owning user (unique, 1:1 relationship).
        company, website, location, bio, status, githubusername: Free text.
        skills: List of skill names.
        social: Mapping of network name to URL.
        experience: Experience entries, most recent first.
        education: Education entries, most recent first.
        date: UTC timestamp when the profile was created.
        version: Optimistic concurrency counter.
    """

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(255), nullable=False)
    githubusername: Mapped[str | None] = mapped_column(String(128), nullable=True)
    skills: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    social: Mapped[dict[str, str]] = mapped_column(JSON, nullable=False, default=dict)
    experience: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    education: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    # Relationships
    user: Mapped[User] = relationship("User", back_populates="profile")
