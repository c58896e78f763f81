"""Post routes: posts, likes and comments. All require authentication."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Path

from devconnector.api.dependencies import CurrentUserId, SessionDep
from devconnector.api.schemas.common import MessageResponse
from devconnector.api.schemas.posts import (
    CommentRequest,
    CommentResponse,
    LikeResponse,
    PostRequest,
    PostResponse,
)
from devconnector.services.posts import (
    add_comment,
    create_post,
    delete_post,
    get_post,
    like_post,
    list_posts,
    remove_comment,
    unlike_post,
)

router = APIRouter(prefix="/posts", tags=["posts"])

PostId = Annotated[str, Path(description="Post id")]


@router.post("", response_model=PostResponse)
def create_post_endpoint(
    data: PostRequest, current_user_id: CurrentUserId, session: SessionDep
) -> PostResponse:
    """Create a post as the caller."""
    return PostResponse(**create_post(session, current_user_id, data.text))


@router.get("", response_model=list[PostResponse])
def list_posts_endpoint(current_user_id: CurrentUserId, session: SessionDep) -> list[PostResponse]:
    """List all posts, newest first."""
    return [PostResponse(**p) for p in list_posts(session)]


@router.get("/{post_id}", response_model=PostResponse)
def get_post_endpoint(
    post_id: PostId, current_user_id: CurrentUserId, session: SessionDep
) -> PostResponse:
    """Get a single post; malformed or unknown ids answer 404."""
    return PostResponse(**get_post(session, post_id))


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post_endpoint(
    post_id: PostId, current_user_id: CurrentUserId, session: SessionDep
) -> MessageResponse:
    """Delete a post. Only the author may delete it (401 otherwise)."""
    delete_post(session, current_user_id, post_id)
    return MessageResponse(msg="Post removed")


@router.put("/like/{post_id}", response_model=list[LikeResponse])
def like_post_endpoint(
    post_id: PostId, current_user_id: CurrentUserId, session: SessionDep
) -> list[LikeResponse]:
    """Like a post as the caller and return its likes."""
    return [LikeResponse(**like) for like in like_post(session, current_user_id, post_id)]


@router.put("/unlike/{post_id}", response_model=list[LikeResponse])
def unlike_post_endpoint(
    post_id: PostId, current_user_id: CurrentUserId, session: SessionDep
) -> list[LikeResponse]:
    """Withdraw the caller's like and return the remaining likes."""
    return [LikeResponse(**like) for like in unlike_post(session, current_user_id, post_id)]


@router.post("/comment/{post_id}", response_model=list[CommentResponse])
def add_comment_endpoint(
    post_id: PostId, data: CommentRequest, current_user_id: CurrentUserId, session: SessionDep
) -> list[CommentResponse]:
    """Comment on a post and return its comments, newest first."""
    comments = add_comment(session, current_user_id, post_id, data.text, data.avatar)
    return [CommentResponse(**c) for c in comments]


@router.delete("/comment/{post_id}/{comment_id}", response_model=list[CommentResponse])
def remove_comment_endpoint(
    post_id: PostId,
    comment_id: Annotated[str, Path(description="Comment id")],
    current_user_id: CurrentUserId,
    session: SessionDep,
) -> list[CommentResponse]:
    """Delete a comment. Only the comment's author may delete it."""
    comments = remove_comment(session, current_user_id, post_id, comment_id)
    return [CommentResponse(**c) for c in comments]
