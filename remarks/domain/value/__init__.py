"""Domain value objects."""

from remarks.domain.value.identifiers import CommentId, PostId, TargetId, UserId
from remarks.domain.value.types import CommentCategory, CommentFilter

__all__ = [
    # Identifiers
    "CommentId",
    "PostId",
    "TargetId",
    "UserId",
    # Types
    "CommentCategory",
    "CommentFilter",
]
