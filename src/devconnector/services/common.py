"""Helpers shared by the document services."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from devconnector.services.errors import ConflictError

logger = logging.getLogger(__name__)


def commit_document(session: Session) -> None:
    """Commit pending changes, turning a lost write race into ConflictError.

    Profile and Post rows are versioned, so an UPDATE whose version no longer
    matches affects zero rows and SQLAlchemy raises StaleDataError. A
    duplicate insert on a unique key lands here as IntegrityError.
    """
    try:
        session.commit()
    except (StaleDataError, IntegrityError) as exc:
        session.rollback()
        logger.warning("Concurrent write rejected: %s", exc)
        raise ConflictError() from exc
