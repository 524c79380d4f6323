"""PostgreSQL implementation of Comment repository."""

from collections.abc import Sequence
from typing import List, Optional

import logfire
from sqlalchemy import Select, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from remarks.domain.error import NotFoundError
from remarks.domain.model import Comment, CommentDraft
from remarks.domain.repository import CommentRepository
from remarks.domain.value import CommentFilter, CommentId
from remarks.domain.value import path as path_codec
from remarks.persistence.mappers import comment_to_dict, row_to_comment
from remarks.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository.

    Writes run inside a SAVEPOINT so a failure leaves nothing behind even
    when the caller keeps using the request transaction. Rows that a write
    depends on are locked with ``SELECT ... FOR UPDATE``.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _apply_filter(stmt: Select, comment_filter: CommentFilter) -> Select:
        """Add one equality predicate per field set on the filter."""
        if comment_filter.is_empty():
            return stmt
        if comment_filter.post_id is not None:
            stmt = stmt.where(comments_table.c.post_id == comment_filter.post_id)
        if comment_filter.user_id is not None:
            stmt = stmt.where(comments_table.c.user_id == comment_filter.user_id)
        if comment_filter.category is not None:
            stmt = stmt.where(
                comments_table.c.category == comment_filter.category.value
            )
        if comment_filter.target_id is not None:
            stmt = stmt.where(comments_table.c.target_id == comment_filter.target_id)
        return stmt

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> List[Comment]:
        """Find all comments whose id is in ``comment_ids``."""
        if not comment_ids:
            return []
        stmt = select(comments_table).where(comments_table.c.id.in_(comment_ids))
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_roots(self, comment_filter: CommentFilter) -> List[Comment]:
        """Find top-level comments matching a filter, oldest first."""
        stmt = select(comments_table).where(comments_table.c.parent_id.is_(None))
        stmt = self._apply_filter(stmt, comment_filter)
        stmt = stmt.order_by(comments_table.c.created_at, comments_table.c.id)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_descendants(self, root_path: str) -> List[Comment]:
        """Find every comment strictly below ``root_path``, in path order."""
        prefix = path_codec.descendant_prefix(root_path)
        stmt = (
            select(comments_table)
            .where(comments_table.c.path.startswith(prefix, autoescape=True))
            .order_by(comments_table.c.path, comments_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def create(
        self, draft: CommentDraft, parent_id: Optional[CommentId] = None
    ) -> Comment:
        """Insert a comment under its (locked) parent."""
        with logfire.span(
            "comment_repository.create",
            comment_id=str(draft.id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            async with self.session.begin_nested():
                parent_path = None
                if parent_id is not None:
                    # Lock the parent so a concurrent delete waits for us
                    stmt = (
                        select(comments_table.c.path)
                        .where(comments_table.c.id == parent_id)
                        .with_for_update()
                    )
                    result = await self.session.execute(stmt)
                    parent_path = result.scalar_one_or_none()
                    if parent_path is None:
                        logfire.warn(
                            "Parent vanished before insert", parent_id=str(parent_id)
                        )
                        raise NotFoundError("Comment", str(parent_id))

                comment = Comment(
                    **draft.model_dump(),
                    path=path_codec.encode(parent_path, draft.id),
                    parent_id=parent_id,
                )
                stmt = comments_table.insert().values(**comment_to_dict(comment))
                await self.session.execute(stmt)

            await self.session.flush()

            # Fetch the comment back to get server-side values
            return await self.find_by_id(comment.id) or comment

    async def delete_cascade(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete comments and every row below them."""
        with logfire.span(
            "comment_repository.delete_cascade",
            comment_ids=[str(comment_id) for comment_id in comment_ids],
        ):
            if not comment_ids:
                return 0

            async with self.session.begin_nested():
                stmt = (
                    select(comments_table.c.id, comments_table.c.path)
                    .where(comments_table.c.id.in_(comment_ids))
                    .with_for_update()
                )
                result = await self.session.execute(stmt)
                paths = {row.id: row.path for row in result.fetchall()}

                missing = [
                    comment_id for comment_id in comment_ids if comment_id not in paths
                ]
                if missing:
                    raise NotFoundError("Comment", missing)

                conditions = []
                for path in paths.values():
                    conditions.append(comments_table.c.path == path)
                    conditions.append(
                        comments_table.c.path.startswith(
                            path_codec.descendant_prefix(path), autoescape=True
                        )
                    )

                result = await self.session.execute(
                    delete(comments_table).where(or_(*conditions))
                )
                removed = result.rowcount

            await self.session.flush()
            logfire.info("Comment subtrees deleted", removed=removed)
            return removed
