"""Response models and helpers shared by the comment use cases."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from remarks.domain.error import ValidationError
from remarks.domain.model import Comment
from remarks.domain.value import CommentCategory


def parse_id(value: str, field: str) -> UUID:
    """Parse a UUID string from a request.

    Raises:
        ValidationError: If the value is not a valid UUID
    """
    try:
        return UUID(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid {field}: {value!r}") from e


class CommentItem(BaseModel):
    """Comment item in responses."""

    comment_id: str
    body: str
    category: CommentCategory
    target_id: str
    post_id: str | None
    user_id: str
    parent_id: str | None
    path: str
    created_at: datetime

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentItem":
        return cls(
            comment_id=str(comment.id),
            body=comment.body,
            category=comment.category,
            target_id=str(comment.target_id),
            post_id=str(comment.post_id) if comment.post_id else None,
            user_id=str(comment.user_id),
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            path=comment.path,
            created_at=comment.created_at,
        )
