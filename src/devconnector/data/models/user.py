"""User account model.

Passwords are stored as salted PBKDF2 hashes, never in plaintext.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from devconnector.data.db import Base, new_id

if TYPE_CHECKING:
    from devconnector.data.models.profile import Profile


class User(Base):
    """Application user account.

    Attributes:
        id: Document identifier (UUID4 hex).
        name: Display name.
        email: Unique login email.
        password: Salted hash of the user's password.
        avatar: Gravatar URL derived from the email.
        date: UTC timestamp when the account was created.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password: Mapped[str] = mapped_column(String(256), nullable=False)
    avatar: Mapped[str | None] = mapped_column(String(255), nullable=True)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    profile: Mapped[Profile | None] = relationship(
        "Profile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
