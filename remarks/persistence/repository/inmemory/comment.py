"""In-memory comment repository for testing."""

import asyncio
from collections.abc import Sequence
from typing import Optional

from remarks.domain.error import NotFoundError
from remarks.domain.model.comment import Comment, CommentDraft
from remarks.domain.repository.comment import CommentRepository
from remarks.domain.value import CommentFilter, CommentId
from remarks.domain.value import path as path_codec


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Writes are serialized with an ``asyncio.Lock``, which plays the role of
    the database transaction and parent row lock.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._write_lock = asyncio.Lock()

    def _matches(self, comment: Comment, comment_filter: CommentFilter) -> bool:
        if comment_filter.post_id is not None and comment.post_id != comment_filter.post_id:
            return False
        if comment_filter.user_id is not None and comment.user_id != comment_filter.user_id:
            return False
        if (
            comment_filter.category is not None
            and comment.category != comment_filter.category
        ):
            return False
        if (
            comment_filter.target_id is not None
            and comment.target_id != comment_filter.target_id
        ):
            return False
        return True

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> list[Comment]:
        """Find all comments whose id is in ``comment_ids``."""
        return [
            self._comments[comment_id]
            for comment_id in dict.fromkeys(comment_ids)
            if comment_id in self._comments
        ]

    async def find_roots(self, comment_filter: CommentFilter) -> list[Comment]:
        """Find top-level comments matching a filter, oldest first."""
        roots = [
            c
            for c in self._comments.values()
            if c.parent_id is None and self._matches(c, comment_filter)
        ]
        roots.sort(key=lambda c: (c.created_at, str(c.id)))
        return roots

    async def find_descendants(self, root_path: str) -> list[Comment]:
        """Find every comment strictly below ``root_path``, in path order."""
        prefix = path_codec.descendant_prefix(root_path)
        descendants = [c for c in self._comments.values() if c.path.startswith(prefix)]
        descendants.sort(key=lambda c: (c.path, c.created_at))
        return descendants

    async def create(
        self, draft: CommentDraft, parent_id: Optional[CommentId] = None
    ) -> Comment:
        """Insert a comment under its parent."""
        async with self._write_lock:
            parent_path = None
            if parent_id is not None:
                parent = self._comments.get(parent_id)
                if parent is None:
                    raise NotFoundError("Comment", str(parent_id))
                parent_path = parent.path

            comment = Comment(
                **draft.model_dump(),
                path=path_codec.encode(parent_path, draft.id),
                parent_id=parent_id,
            )
            self._comments[comment.id] = comment
            return comment

    async def delete_cascade(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete comments and every row below them."""
        async with self._write_lock:
            missing = [
                comment_id for comment_id in comment_ids if comment_id not in self._comments
            ]
            if missing:
                raise NotFoundError("Comment", missing)

            doomed = {
                c.id
                for target_id in comment_ids
                for c in self._comments.values()
                if path_codec.contains(c.path, target_id)
            }
            for comment_id in doomed:
                del self._comments[comment_id]
            return len(doomed)

    async def save(self, comment: Comment) -> Comment:
        """Store a comment as-is (test seeding helper)."""
        self._comments[comment.id] = comment
        return comment
