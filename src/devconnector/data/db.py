"""Database configuration and session management.

This module provides the SQLAlchemy 2.x infrastructure behind the document
store:
- ``Base`` declarative class shared by all ORM models
- ``Database`` handle owning the engine and session factory
- Context manager for transactional session usage

One ``Database`` is created per application from ``Settings.database_url``
and passed to whoever needs it; there is no module-level engine.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""


def new_id() -> str:
    """Return a fresh document identifier."""
    return uuid.uuid4().hex


def is_valid_id(value: str) -> bool:
    """Return True if ``value`` is shaped like an identifier from ``new_id``."""
    if len(value) != 32:
        return False
    try:
        uuid.UUID(hex=value)
    except ValueError:
        return False
    return True


class Database:
    """Handle to the document store."""

    def __init__(self, url: str) -> None:
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        self.url = url
        self.engine: Engine = create_engine(url, echo=False, future=True, connect_args=connect_args)
        self._session_factory: sessionmaker[Session] = sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False,
        )

    def create_tables(self) -> None:
        """Create all tables defined on the Base metadata."""
        # Import ORM models so their metadata is registered on Base before create_all.
        from devconnector.data.models import post, profile, user  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Provide a transactional scope around a series of operations."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
