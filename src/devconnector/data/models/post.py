"""Post document with embedded likes and comments.

``user_id`` is a plain document reference, not a foreign key: deleting an
account leaves its posts in place.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from devconnector.data.db import Base, new_id


class Post(Base):
    """A post written by a user.

    Attributes:
        id: Document identifier.
        user_id: Author's user id.
        text: Post body.
        name: Author name at the time of posting.
        avatar: Author avatar at the time of posting.
        likes: ``{"id", "user"}`` entries, at most one per user, newest first.
        comments: ``{"id", "user", "text", "name", "avatar", "date"}`` entries,
            newest first.
        date: UTC creation timestamp.
        version: Optimistic concurrency counter.
    """

    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(255), nullable=True)
    likes: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    comments: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC), index=True
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
