"""Comment repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import List, Optional

from remarks.domain.model.comment import Comment, CommentDraft
from remarks.domain.value import CommentFilter, CommentId


class CommentRepository(ABC):
    """Repository for the comment tree.

    Defines the contract for comment persistence operations. Writes are
    atomic: implementations run ``create`` and ``delete_cascade`` as one
    unit of work and re-validate referenced rows inside it.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> List[Comment]:
        """Find all comments whose id is in ``comment_ids``.

        Args:
            comment_ids: Ids to look up

        Returns:
            Comments that exist, in no particular order
        """
        pass

    @abstractmethod
    async def find_roots(self, comment_filter: CommentFilter) -> List[Comment]:
        """Find top-level comments matching a filter.

        Args:
            comment_filter: Equality predicates, AND-combined

        Returns:
            Root comments ordered by created_at ascending (id as tiebreaker)
        """
        pass

    @abstractmethod
    async def find_descendants(self, root_path: str) -> List[Comment]:
        """Find every comment strictly below ``root_path``.

        Args:
            root_path: Materialized path of the subtree root

        Returns:
            Descendants ordered by path, then created_at ascending
        """
        pass

    @abstractmethod
    async def create(
        self, draft: CommentDraft, parent_id: Optional[CommentId] = None
    ) -> Comment:
        """Place a new comment in the tree.

        The parent is re-fetched (and locked) inside the same unit of work,
        so a parent deleted concurrently makes this call fail rather than
        persist an orphan.

        Args:
            draft: Comment content and ownership
            parent_id: Parent comment, None for a root

        Returns:
            The stored comment with its computed path

        Raises:
            NotFoundError: If the parent does not exist
        """
        pass

    @abstractmethod
    async def delete_cascade(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete comments together with their whole subtrees.

        Every id is checked before anything is deleted.

        Args:
            comment_ids: Comments to delete

        Returns:
            Number of rows removed

        Raises:
            NotFoundError: Listing every id that does not exist
        """
        pass
