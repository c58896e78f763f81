"""Post service: posts, likes and comments.

Likes and comments are embedded in the post document and kept newest first.
A user appears at most once in a post's likes.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from devconnector.data.db import is_valid_id, new_id
from devconnector.data.models import Post
from devconnector.services.common import commit_document
from devconnector.services.errors import AuthorizationError, BadRequestError, NotFoundError
from devconnector.services.users import load_user

logger = logging.getLogger(__name__)

__all__ = [
    "add_comment",
    "create_post",
    "delete_post",
    "get_post",
    "like_post",
    "list_posts",
    "post_to_dict",
    "remove_comment",
    "unlike_post",
]

_NOT_AUTHORIZED = "User not authorized"


def post_to_dict(post: Post) -> dict:
    """Convert a Post model to a dictionary."""
    return {
        "id": post.id,
        "user": post.user_id,
        "text": post.text,
        "name": post.name,
        "avatar": post.avatar,
        "likes": list(post.likes or []),
        "comments": list(post.comments or []),
        "date": post.date,
    }


def _load_post(session: Session, post_id: str) -> Post:
    post = session.get(Post, post_id) if is_valid_id(post_id) else None
    if post is None:
        raise NotFoundError("Post not found")
    return post


def create_post(session: Session, user_id: str, text: str) -> dict:
    """Create a post, copying the author's current name and avatar onto it."""
    user = load_user(session, user_id)
    post = Post(user_id=user.id, text=text, name=user.name, avatar=user.avatar)
    session.add(post)
    commit_document(session)
    return post_to_dict(post)


def list_posts(session: Session) -> list[dict]:
    """Return every post, newest first."""
    posts = session.query(Post).order_by(Post.date.desc()).all()
    return [post_to_dict(p) for p in posts]


def get_post(session: Session, post_id: str) -> dict:
    return post_to_dict(_load_post(session, post_id))


def delete_post(session: Session, user_id: str, post_id: str) -> None:
    """Delete a post. Only its author may do so."""
    post = _load_post(session, post_id)
    if post.user_id != user_id:
        raise AuthorizationError(_NOT_AUTHORIZED)
    session.delete(post)
    commit_document(session)
    logger.info("Post %s removed by %s", post_id, user_id)


def like_post(session: Session, user_id: str, post_id: str) -> list[dict]:
    """Add the caller's like and return the post's likes."""
    post = _load_post(session, post_id)
    if any(like["user"] == user_id for like in post.likes):
        raise BadRequestError("Post already liked")
    post.likes = [{"id": new_id(), "user": user_id}, *post.likes]
    commit_document(session)
    return list(post.likes)


def unlike_post(session: Session, user_id: str, post_id: str) -> list[dict]:
    """Remove the caller's like and return the post's likes."""
    post = _load_post(session, post_id)
    remaining = [like for like in post.likes if like["user"] != user_id]
    if len(remaining) == len(post.likes):
        raise BadRequestError("Post has not yet been liked")
    post.likes = remaining
    commit_document(session)
    return list(post.likes)


def add_comment(
    session: Session, user_id: str, post_id: str, text: str, avatar: str | None
) -> list[dict]:
    """Prepend a comment and return the post's comments.

    The commenter's name is read from the store while the avatar is whatever
    the client sent.
    """
    user = load_user(session, user_id)
    post = _load_post(session, post_id)
    comment = {
        "id": new_id(),
        "user": user_id,
        "text": text,
        "name": user.name,
        "avatar": avatar,
        "date": datetime.now(UTC).isoformat(),
    }
    post.comments = [comment, *post.comments]
    commit_document(session)
    return list(post.comments)


def remove_comment(session: Session, user_id: str, post_id: str, comment_id: str) -> list[dict]:
    """Remove a comment. Only the comment's author may do so."""
    post = _load_post(session, post_id)
    comment = next((c for c in post.comments if c["id"] == comment_id), None)
    if comment is None:
        raise NotFoundError("Comment does not exist")
    if comment["user"] != user_id:
        raise AuthorizationError(_NOT_AUTHORIZED)
    post.comments = [c for c in post.comments if c["id"] != comment_id]
    commit_document(session)
    return list(post.comments)
