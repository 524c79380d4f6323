"""Comment entity and its derived tree views.

Comments are threaded with unlimited depth. Each row stores only a weak
reference to its parent (``parent_id``) plus a materialized ``path``; the
children of a node are never persisted and are derived on demand by the
tree builder.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime

from pydantic import Field, model_validator

from remarks.domain.error import ValidationError
from remarks.domain.model.common import DomainModel
from remarks.domain.model.post import Post
from remarks.domain.model.user import User
from remarks.domain.value import (
    CommentCategory,
    CommentId,
    PostId,
    TargetId,
    UserId,
)
from remarks.domain.value import path as path_codec


def _check_post_reference(category: CommentCategory, post_id: PostId | None) -> None:
    if category == CommentCategory.POST and post_id is None:
        raise ValueError("Comments on a post must reference the post")
    if category != CommentCategory.POST and post_id is not None:
        raise ValueError(f"Comments on {category.value} must not reference a post")


class CommentDraft(DomainModel):
    """A comment that has not been placed in the tree yet.

    The repository turns a draft into a ``Comment`` by computing its path
    from the (re-fetched) parent.
    """

    id: CommentId
    body: str = Field(min_length=1, max_length=10000)
    category: CommentCategory
    target_id: TargetId
    post_id: PostId | None = None
    user_id: UserId
    created_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def check_post_reference(self) -> "CommentDraft":
        _check_post_reference(self.category, self.post_id)
        return self


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a post or another content kind, or a reply to
    another comment.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - path: Materialized path ending with this comment's own id

    ``user`` and ``post`` are resolved relations filled in on creation;
    they are never persisted.
    """

    id: CommentId
    body: str = Field(min_length=1, max_length=10000)
    category: CommentCategory
    target_id: TargetId
    post_id: PostId | None = None
    user_id: UserId
    path: str
    parent_id: CommentId | None = None
    created_at: datetime = Field(default_factory=datetime.now)
    user: User | None = Field(default=None, exclude=True)
    post: Post | None = Field(default=None, exclude=True)

    @model_validator(mode="after")
    def check_path(self) -> "Comment":
        """Validate path shape against id, parent_id and post reference."""
        try:
            segments = path_codec.segments(self.path)
        except ValidationError as e:
            raise ValueError(str(e)) from e

        if segments[-1] != str(self.id):
            raise ValueError(f"Path {self.path!r} does not end with id {self.id}")

        expected_parent = segments[-2] if len(segments) > 1 else None
        actual_parent = str(self.parent_id) if self.parent_id else None
        if expected_parent != actual_parent:
            raise ValueError(
                f"Path {self.path!r} does not match parent_id {actual_parent}"
            )

        _check_post_reference(self.category, self.post_id)
        return self

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def depth(self) -> int:
        return path_codec.depth(self.path)


@dataclass
class CommentTree:
    """Node in a comment tree.

    Holds a comment and its replies in creation order. Built by
    ``remarks.domain.service.tree_builder.build_tree``.
    """

    comment: Comment
    children: list["CommentTree"] = field(default_factory=list)

    def size(self) -> int:
        """Number of comments in this subtree, including the root."""
        count = 0
        stack = [self]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children)
        return count


@dataclass(frozen=True)
class FlatComment:
    """A comment in a flattened tree, with its depth (roots are 0)."""

    comment: Comment
    depth: int


@dataclass(frozen=True)
class CommentPage:
    """One page of a flattened comment listing."""

    items: list[FlatComment]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.total else 0
