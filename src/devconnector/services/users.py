"""User service: registration, login and identity lookup.

Functions take an open SQLAlchemy session and raise the errors defined in
``devconnector.services.errors``; committing is done here so that a failed
write surfaces before the response is built.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from devconnector.data.db import is_valid_id
from devconnector.data.models import User
from devconnector.services.credentials import (
    gravatar_url,
    hash_password,
    issue_token,
    verify_password,
)
from devconnector.services.errors import (
    AuthenticationError,
    FieldError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

__all__ = [
    "authenticate_user",
    "get_user",
    "get_user_by_email",
    "load_user",
    "register_user",
    "user_to_dict",
]


def user_to_dict(user: User) -> dict:
    """Convert a User model to a dictionary, leaving out the password hash."""
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "avatar": user.avatar,
        "date": user.date,
    }


def _user_exists_error() -> ValidationError:
    return ValidationError([FieldError("User already exists", "email")])


def get_user_by_email(session: Session, email: str) -> User | None:
    return session.query(User).filter(User.email == email).first()


def load_user(session: Session, user_id: str) -> User:
    """Return the user with ``user_id`` or raise NotFoundError."""
    user = session.get(User, user_id) if is_valid_id(user_id) else None
    if user is None:
        raise NotFoundError("User not found")
    return user


def register_user(session: Session, name: str, email: str, password: str, secret: str) -> str:
    """Create an account and return a token for it.

    Raises:
        ValidationError: If the email is already registered.
    """
    if get_user_by_email(session, email) is not None:
        raise _user_exists_error()

    user = User(
        name=name,
        email=email,
        avatar=gravatar_url(email),
        password=hash_password(password),
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        # Another request registered the same email between lookup and insert.
        session.rollback()
        raise _user_exists_error() from None

    logger.info("Registered user %s", user.id)
    return issue_token(user.id, secret)


def authenticate_user(session: Session, email: str, password: str, secret: str) -> str:
    """Check credentials and return a token.

    Raises:
        AuthenticationError: If the email is unknown or the password is wrong.
    """
    user = get_user_by_email(session, email)
    if user is None or not verify_password(password, user.password):
        raise AuthenticationError()
    return issue_token(user.id, secret)


def get_user(session: Session, user_id: str) -> dict:
    """Return the stored user record without its password.

    Raises:
        NotFoundError: If the account no longer exists.
    """
    return user_to_dict(load_user(session, user_id))
