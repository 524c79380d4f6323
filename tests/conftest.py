"""Test configuration and shared builders."""

from datetime import datetime, timedelta
from uuid import UUID, uuid4

from remarks.domain.model import Comment, CommentDraft, Post, User
from remarks.domain.value import CommentCategory, CommentId, PostId, TargetId, UserId
from remarks.domain.value import path as path_codec

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


def at(minutes: int) -> datetime:
    """Timestamp ``minutes`` after a fixed base time."""
    return BASE_TIME + timedelta(minutes=minutes)


def make_user(handle: str = "reader") -> User:
    return User(id=UserId(uuid4()), handle=handle, created_at=BASE_TIME)


def make_post(title: str = "A post") -> Post:
    return Post(id=PostId(uuid4()), title=title, created_at=BASE_TIME)


def make_comment(
    parent: Comment | None = None,
    created_at: datetime | None = None,
    category: CommentCategory | None = None,
    target_id: UUID | None = None,
    user_id: UUID | None = None,
    comment_id: UUID | None = None,
    body: str = "A comment",
) -> Comment:
    """Build a valid comment, as a reply to ``parent`` when given.

    Replies default to the parent's category and target; either can be
    overridden. Roots default to MANGA. POST comments get a post_id equal
    to their target.
    """
    comment_id = CommentId(comment_id or uuid4())
    if parent is not None:
        category = category or parent.category
        target_id = target_id or parent.target_id
    category = category or CommentCategory.MANGA
    target_id = TargetId(target_id or uuid4())

    return Comment(
        id=comment_id,
        body=body,
        category=category,
        target_id=target_id,
        post_id=PostId(target_id) if category == CommentCategory.POST else None,
        user_id=UserId(user_id or uuid4()),
        path=path_codec.encode(parent.path if parent else None, comment_id),
        parent_id=parent.id if parent else None,
        created_at=created_at or BASE_TIME,
    )


def make_draft(
    category: CommentCategory = CommentCategory.MANGA,
    target_id: UUID | None = None,
    user_id: UUID | None = None,
    created_at: datetime | None = None,
    body: str = "A comment",
) -> CommentDraft:
    target_id = TargetId(target_id or uuid4())
    return CommentDraft(
        id=CommentId(uuid4()),
        body=body,
        category=category,
        target_id=target_id,
        post_id=PostId(target_id) if category == CommentCategory.POST else None,
        user_id=UserId(user_id or uuid4()),
        created_at=created_at or BASE_TIME,
    )
