"""Comment domain service."""

from collections.abc import Sequence
from datetime import datetime
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from remarks.domain.error import NotFoundError, ValidationError
from remarks.domain.model.comment import (
    Comment,
    CommentDraft,
    CommentPage,
    CommentTree,
)
from remarks.domain.repository import CommentRepository
from remarks.domain.service.post_service import PostService
from remarks.domain.service.tree_builder import build_tree
from remarks.domain.service.tree_flattener import flatten
from remarks.domain.service.user_service import UserService
from remarks.domain.value import (
    CommentCategory,
    CommentFilter,
    CommentId,
    PostId,
    TargetId,
    UserId,
)

from .base import Service


class CommentService(Service):
    """Domain service for comment trees.

    Orchestrates creation (parent and post resolution), cascade deletion
    and the two read modes: nested trees and paginated flat listings.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_service: PostService,
        user_service: UserService,
        skip_orphans: bool = False,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            post_service: Post lookups (validates post references)
            user_service: User lookups (validates ownership)
            skip_orphans: Skip comments whose parent vanished mid-read
                instead of failing the read
        """
        self.comment_repository = comment_repository
        self.post_service = post_service
        self.user_service = user_service
        self.skip_orphans = skip_orphans

    async def create_comment(
        self,
        body: str,
        category: CommentCategory,
        target_id: TargetId,
        user_id: UserId,
        post_id: PostId | None = None,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a top-level comment or a reply.

        Args:
            body: Comment text
            category: Kind of content commented on
            target_id: Id of the content commented on
            user_id: Owner of the comment
            post_id: Article id, required for (and only for) post comments
            parent_id: Comment replied to (None for top-level)

        Replies may attach to any existing comment; the reply's own category
        and target are not required to match the parent's.

        Returns:
            Created comment with its path, owner and post resolved

        Raises:
            ValidationError: If category and post reference do not agree
            NotFoundError: If the user, parent or post does not exist
        """
        with logfire.span(
            "comment_service.create_comment",
            category=category.value,
            target_id=str(target_id),
            user_id=str(user_id),
            post_id=str(post_id) if post_id else None,
            parent_id=str(parent_id) if parent_id else None,
        ):
            if category == CommentCategory.POST:
                if post_id is None:
                    raise ValidationError("Comments on a post require a post_id")
            elif post_id is not None:
                raise ValidationError(
                    f"Comments on {category.value} cannot reference a post"
                )

            user = await self.user_service.get_by_id(user_id)

            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.warn("Parent comment not found", parent_id=str(parent_id))
                    raise NotFoundError("Comment", str(parent_id))

            post = None
            if post_id is not None:
                post = await self.post_service.get_by_id(post_id)

            try:
                draft = CommentDraft(
                    id=CommentId(uuid4()),
                    body=body,
                    category=category,
                    target_id=target_id,
                    post_id=post_id,
                    user_id=user_id,
                    created_at=datetime.now(),
                )
            except PydanticValidationError as e:
                raise ValidationError(str(e)) from e

            saved = await self.comment_repository.create(draft, parent_id=parent_id)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                path=saved.path,
                depth=saved.depth,
            )
            return saved.model_copy(update={"user": user, "post": post})

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Raises:
            NotFoundError: If comment not found
        """
        with logfire.span("comment_service.get_comment", comment_id=str(comment_id)):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Comment not found", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))
            return comment

    async def get_trees(self, comment_filter: CommentFilter) -> list[CommentTree]:
        """Build one tree per matching root, in root order.

        Only roots are filtered; each root's descendants are included in
        full whatever their own category or target.

        Args:
            comment_filter: Predicates over root comments

        Returns:
            Trees ordered like their roots (created_at ascending)
        """
        with logfire.span(
            "comment_service.get_trees",
            comment_filter=comment_filter.model_dump(mode="json", exclude_none=True),
        ):
            roots = await self.comment_repository.find_roots(comment_filter)

            trees = []
            for root in roots:
                descendants = await self.comment_repository.find_descendants(
                    root.path
                )
                trees.append(
                    build_tree(root, descendants, skip_orphans=self.skip_orphans)
                )

            logfire.info(
                "Comment trees built",
                root_count=len(trees),
                comment_count=sum(tree.size() for tree in trees),
            )
            return trees

    async def paginate(
        self, comment_filter: CommentFilter, page: int, page_size: int
    ) -> CommentPage:
        """Return one page of the flattened comment listing.

        Every matching tree is built and flattened (pre-order), the results
        are concatenated in root order and the requested page is sliced
        out. ``total`` is recomputed on every call.

        Args:
            comment_filter: Predicates over root comments
            page: 1-based page number
            page_size: Items per page

        Returns:
            Page of comments with their depth

        Raises:
            ValidationError: If page or page_size is below 1
        """
        if page < 1:
            raise ValidationError(f"page must be >= 1, got {page}")
        if page_size < 1:
            raise ValidationError(f"page_size must be >= 1, got {page_size}")

        with logfire.span(
            "comment_service.paginate", page=page, page_size=page_size
        ):
            trees = await self.get_trees(comment_filter)
            flat = flatten(trees)

            start = (page - 1) * page_size
            result = CommentPage(
                items=flat[start : start + page_size],
                total=len(flat),
                page=page,
                page_size=page_size,
            )
            logfire.info(
                "Comment page built",
                total=result.total,
                returned=len(result.items),
                total_pages=result.total_pages,
            )
            return result

    async def delete_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete comments and all their replies.

        Every id is checked first; if any is missing, nothing is deleted
        and all missing ids are reported together.

        Args:
            comment_ids: Comments to delete

        Returns:
            Number of comments removed, replies included

        Raises:
            NotFoundError: Listing every missing id
        """
        unique_ids = list(dict.fromkeys(comment_ids))
        with logfire.span(
            "comment_service.delete_comments",
            comment_ids=[str(comment_id) for comment_id in unique_ids],
        ):
            if not unique_ids:
                return 0

            found = await self.comment_repository.find_by_ids(unique_ids)
            found_ids = {comment.id for comment in found}
            missing = [
                comment_id for comment_id in unique_ids if comment_id not in found_ids
            ]
            if missing:
                logfire.warn(
                    "Comments not found for deletion",
                    missing=[str(comment_id) for comment_id in missing],
                )
                raise NotFoundError("Comment", missing)

            removed = await self.comment_repository.delete_cascade(unique_ids)
            logfire.info(
                "Comments deleted", requested=len(unique_ids), removed=removed
            )
            return removed
