"""Domain model entities."""

from remarks.domain.model.comment import (
    Comment,
    CommentDraft,
    CommentPage,
    CommentTree,
    FlatComment,
)
from remarks.domain.model.post import Post
from remarks.domain.model.user import User

__all__ = [
    "Comment",
    "CommentDraft",
    "CommentPage",
    "CommentTree",
    "FlatComment",
    "Post",
    "User",
]
