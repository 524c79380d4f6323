"""Domain value objects for comments.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from remarks.domain.value.common import ValueObject
from remarks.domain.value.identifiers import PostId, TargetId, UserId


class CommentCategory(str, Enum):
    """Kind of content a comment is attached to.

    Only ``POST`` comments reference an article directly; the other kinds
    are addressed by ``target_id`` alone.
    """

    POST = "post"
    MANGA = "manga"
    NOVEL = "novel"
    CHAPTER = "chapter"


class CommentFilter(ValueObject):
    """Enumerated filter over root comments.

    Each field that is set becomes one equality predicate; predicates are
    AND-combined. An empty filter matches every root.
    """

    post_id: PostId | None = None
    user_id: UserId | None = None
    category: CommentCategory | None = None
    target_id: TargetId | None = None

    def is_empty(self) -> bool:
        """Return True when no predicate is set."""
        return all(
            value is None
            for value in (self.post_id, self.user_id, self.category, self.target_id)
        )
